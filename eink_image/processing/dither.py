from __future__ import annotations

from .buffer import ImageBuffer
from .fixedpoint import FRACTION_BITS, ONE, clamp, div_trunc, to_fixed

BLACK = 0
WHITE = 255

# Floyd-Steinberg weights out of 16: right, below-left, below, below-right.
_RIGHT = 7
_BELOW_LEFT = 3
_BELOW = 5
_BELOW_RIGHT = 1
_KERNEL_TOTAL = 16

_WHITE_FIXED = WHITE << FRACTION_BITS


def threshold_only(buffer: ImageBuffer, threshold: int) -> ImageBuffer:
    """Binarize without error propagation: white iff ``v >= threshold``."""
    lut = bytes(WHITE if value >= threshold else BLACK for value in range(256))
    return ImageBuffer(buffer.width, buffer.height, 1, buffer.pixels.translate(lut))


def floyd_steinberg(buffer: ImageBuffer, threshold: int, diffusion: float) -> ImageBuffer:
    """Row-major Floyd-Steinberg dithering of a single-channel buffer.

    Every row is scanned left to right; serpentine scanning is deliberately
    not used so output stays reproducible against stored patterns. Errors are
    kept in 1/256 intensity units in a two-row accumulator, scaled by
    ``diffusion`` and split with the 7/3/5/1 kernel, each share truncated
    toward zero. Shares that land outside the canvas are dropped.
    """

    width, height = buffer.size
    src = buffer.pixels
    out = bytearray(width * height)
    diffusion_fixed = to_fixed(diffusion)
    threshold_fixed = threshold << FRACTION_BITS
    last_x = width - 1

    current = [0] * width
    below = [0] * width

    for y in range(height):
        has_next_row = y + 1 < height
        offset = y * width
        for x in range(width):
            adjusted = clamp((src[offset + x] << FRACTION_BITS) + current[x], 0, _WHITE_FIXED)
            if adjusted >= threshold_fixed:
                out[offset + x] = WHITE
                error = adjusted - _WHITE_FIXED
            else:
                error = adjusted
            if error == 0 or diffusion_fixed == 0:
                continue

            error = div_trunc(error * diffusion_fixed, ONE)
            if x < last_x:
                current[x + 1] += div_trunc(error * _RIGHT, _KERNEL_TOTAL)
            if has_next_row:
                if x > 0:
                    below[x - 1] += div_trunc(error * _BELOW_LEFT, _KERNEL_TOTAL)
                below[x] += div_trunc(error * _BELOW, _KERNEL_TOTAL)
                if x < last_x:
                    below[x + 1] += div_trunc(error * _BELOW_RIGHT, _KERNEL_TOTAL)

        # Row complete: the next-row errors become current, and the spent row is reset.
        current, below = below, current
        below[:] = [0] * width

    return ImageBuffer(width, height, 1, out)
