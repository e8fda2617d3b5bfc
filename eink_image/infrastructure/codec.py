from __future__ import annotations

import io
import logging
import os
from typing import Union

from PIL import Image

from ..errors import DecodeError, EncodeError
from ..processing.buffer import ImageBuffer

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

_GRAY_MODES = {"1", "L"}
_WIDE_GRAY_MODES = {"I", "I;16", "I;16L", "I;16B", "I;16N", "F"}

# 16-bit samples map onto 8 bits by dividing by 65535 / 255.
_WIDE_TO_8BIT = 1 / 257


def flatten(img: Image.Image) -> Image.Image:
    """Composite transparency onto white and reduce to ``L`` or ``RGB``.

    Transparent regions become paper-white instead of black after grayscale
    conversion.
    """

    if img.mode in ("RGBA", "LA", "PA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    if img.mode in _WIDE_GRAY_MODES:
        return img.convert("I").point(lambda v: v * _WIDE_TO_8BIT + 0.5).convert("L")
    if img.mode in _GRAY_MODES:
        return img.convert("L")
    return img.convert("RGB")


def _decode(source: str, opener) -> ImageBuffer:
    try:
        with opener() as img:
            img.load()
            flat = flatten(img)
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as exc:
        raise DecodeError(source, str(exc)) from exc
    logger.debug("Decoded %s as %s %dx%d", source, flat.mode, *flat.size)
    return ImageBuffer.from_image(flat)


def decode(path: PathLike) -> ImageBuffer:
    source = os.fspath(path)
    return _decode(source, lambda: Image.open(source))


def decode_bytes(data: bytes, source: str = "<bytes>") -> ImageBuffer:
    if not data:
        raise DecodeError(source, "empty payload")
    return _decode(source, lambda: Image.open(io.BytesIO(data)))


def _output_format(target: str) -> str:
    extension = os.path.splitext(target)[1].lower()
    if not extension:
        return "PNG"
    formats = Image.registered_extensions()
    if extension not in formats:
        raise EncodeError(target, f"unknown image extension {extension!r}")
    return formats[extension]


def encode(buffer: ImageBuffer, path: PathLike) -> None:
    target = os.fspath(path)
    fmt = _output_format(target)
    try:
        buffer.to_bilevel().save(target, fmt)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(target, str(exc)) from exc
    logger.debug("Wrote %s (%s)", target, fmt)


def encode_bytes(buffer: ImageBuffer, fmt: str = "PNG") -> bytes:
    out = io.BytesIO()
    try:
        buffer.to_bilevel().save(out, fmt, optimize=True)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(f"<{fmt.lower()} stream>", str(exc)) from exc
    return out.getvalue()
