from __future__ import annotations

from .buffer import ImageBuffer

# ITU-R 601-2 luma weights (0.299, 0.587, 0.114) scaled by 2**16.
RED_WEIGHT = 19595
GREEN_WEIGHT = 38470
BLUE_WEIGHT = 7471
_SHIFT = 16
_ROUND = 1 << (_SHIFT - 1)


def luma(r: int, g: int, b: int) -> int:
    return (RED_WEIGHT * r + GREEN_WEIGHT * g + BLUE_WEIGHT * b + _ROUND) >> _SHIFT


def to_grayscale(buffer: ImageBuffer) -> ImageBuffer:
    """Reduce ``buffer`` to one luminance channel; alpha samples are ignored."""
    if buffer.channels == 1:
        return ImageBuffer(buffer.width, buffer.height, 1, bytearray(buffer.pixels))

    step = buffer.channels
    src = buffer.pixels
    reds = src[0::step]
    greens = src[1::step]
    blues = src[2::step]
    gray = bytearray(map(luma, reds, greens, blues))
    return ImageBuffer(buffer.width, buffer.height, 1, gray)
