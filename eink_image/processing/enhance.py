from __future__ import annotations

from typing import Sequence, Tuple

from .buffer import ImageBuffer
from .fixedpoint import FRACTION_BITS, clamp, div_trunc, to_fixed

GammaLUT = Tuple[int, ...]

MIDPOINT = 128
IDENTITY_LUT: GammaLUT = tuple(range(256))


def build_gamma_lut(gamma: float) -> GammaLUT:
    """Map each 8-bit intensity to ``255 * (i / 255) ** gamma``, rounded half up."""
    if gamma == 1.0:
        return IDENTITY_LUT
    return tuple(
        min(255, max(0, int(((value / 255.0) ** gamma) * 255 + 0.5)))
        for value in range(256)
    )


def build_contrast_lut(gain: float) -> Tuple[int, ...]:
    if gain == 1.0:
        return IDENTITY_LUT
    gain_fixed = to_fixed(gain)
    return tuple(
        clamp(MIDPOINT + div_trunc((value - MIDPOINT) * gain_fixed, 1 << FRACTION_BITS), 0, 255)
        for value in range(256)
    )


def apply_lut(buffer: ImageBuffer, lut: Sequence[int]) -> ImageBuffer:
    """Map every sample of ``buffer`` through ``lut`` in place."""
    if lut is not IDENTITY_LUT:
        buffer.pixels = buffer.pixels.translate(bytes(lut))
    return buffer


def apply_gamma(buffer: ImageBuffer, lut: GammaLUT) -> ImageBuffer:
    return apply_lut(buffer, lut)


def enhance_contrast(buffer: ImageBuffer, gain: float) -> ImageBuffer:
    # Pivot on mid-gray: 128 + (v - 128) * gain, clamped to 0..255.
    return apply_lut(buffer, build_contrast_lut(gain))
