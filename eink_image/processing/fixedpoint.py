"""Integer helpers that keep the pixel loops free of floating point."""

from __future__ import annotations

FRACTION_BITS = 8
ONE = 1 << FRACTION_BITS


def to_fixed(value: float) -> int:
    """Scale ``value`` to 1/256 units, rounding half away from zero."""
    scaled = abs(value) * ONE + 0.5
    return int(scaled) if value >= 0 else -int(scaled)


def div_trunc(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero (``//`` floors negatives)."""
    if numerator < 0:
        return -(-numerator // denominator)
    return numerator // denominator


def clamp(value: int, low: int, high: int) -> int:
    if value < low:
        return low
    if value > high:
        return high
    return value
