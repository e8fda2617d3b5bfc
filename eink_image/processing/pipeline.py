from __future__ import annotations

import logging
from typing import Callable, Optional

from PIL import Image

from ..config import ConversionSettings
from ..errors import DegenerateImageError
from .buffer import ImageBuffer
from .dither import floyd_steinberg, threshold_only
from .enhance import apply_gamma, build_gamma_lut, enhance_contrast
from .grayscale import to_grayscale

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int], None]

# Stage name and the completion percentage reported once it finishes.
STAGES = (
    ("grayscale", 40),
    ("gamma", 60),
    ("contrast", 70),
    ("dither", 90),
)


def _report(progress: Optional[ProgressCallback], stage: str, percent: int) -> None:
    logger.debug("Stage %s complete (%d%%)", stage, percent)
    if progress is not None:
        progress(stage, percent)


def ensure_dimensions(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise DegenerateImageError(width, height)


def convert_buffer(
    buffer: ImageBuffer,
    settings: ConversionSettings,
    progress: Optional[ProgressCallback] = None,
) -> ImageBuffer:
    """Run grayscale, gamma, contrast and dithering over a decoded buffer.

    Settings are validated and empty images rejected before any pixel is
    touched. The returned buffer is single-channel with samples 0 or 255.
    """

    settings.validate()
    ensure_dimensions(buffer.width, buffer.height)
    stages = dict(STAGES)

    gray = to_grayscale(buffer)
    _report(progress, "grayscale", stages["grayscale"])

    lut = build_gamma_lut(settings.gamma)
    apply_gamma(gray, lut)
    _report(progress, "gamma", stages["gamma"])

    enhance_contrast(gray, settings.contrast)
    _report(progress, "contrast", stages["contrast"])

    if settings.dither:
        result = floyd_steinberg(gray, settings.threshold, settings.diffusion)
    else:
        result = threshold_only(gray, settings.threshold)
    _report(progress, "dither", stages["dither"])

    return result


def convert_image(
    img: Image.Image,
    settings: ConversionSettings,
    progress: Optional[ProgressCallback] = None,
) -> Image.Image:
    """Convert a Pillow image and return the mode ``"1"`` result."""
    return convert_buffer(ImageBuffer.from_image(img), settings, progress).to_bilevel()
