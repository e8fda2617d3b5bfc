from __future__ import annotations

import logging
import os
from typing import Optional, Union

from .config import ConversionSettings
from .infrastructure.codec import decode, decode_bytes, encode
from .infrastructure.network import FETCHER, SourceFetcher, is_remote
from .processing.buffer import ImageBuffer
from .processing.pipeline import ProgressCallback, convert_buffer

logger = logging.getLogger(__name__)


def load_source(source: Union[str, "os.PathLike[str]"], fetcher: SourceFetcher = FETCHER) -> ImageBuffer:
    if isinstance(source, str) and is_remote(source):
        return decode_bytes(fetcher.fetch(source), source=source)
    return decode(source)


def convert_file(
    source: Union[str, "os.PathLike[str]"],
    target: Union[str, "os.PathLike[str]"],
    settings: ConversionSettings,
    progress: Optional[ProgressCallback] = None,
    fetcher: SourceFetcher = FETCHER,
) -> ImageBuffer:
    """Decode ``source`` (path or http(s) URL), convert it and write ``target``."""

    settings.validate()
    buffer = load_source(source, fetcher)
    if progress is not None:
        progress("decode", 20)
    logger.info("Converting %s (%dx%d, %d channel(s))", source, buffer.width, buffer.height, buffer.channels)

    result = convert_buffer(buffer, settings, progress)

    encode(result, target)
    if progress is not None:
        progress("encode", 100)
    logger.info("Output saved to %s", target)
    return result
