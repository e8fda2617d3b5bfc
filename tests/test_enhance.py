import pytest

from eink_image.processing.buffer import ImageBuffer
from eink_image.processing.enhance import (
    IDENTITY_LUT,
    apply_gamma,
    build_contrast_lut,
    build_gamma_lut,
    enhance_contrast,
)


def test_gamma_one_is_identity():
    lut = build_gamma_lut(1.0)

    assert lut == tuple(range(256))
    assert lut is IDENTITY_LUT


@pytest.mark.parametrize("gamma", [0.45, 1.8, 2.2, 3.0])
def test_gamma_lut_is_monotonic_and_keeps_endpoints(gamma):
    lut = build_gamma_lut(gamma)

    assert len(lut) == 256
    assert lut[0] == 0
    assert lut[255] == 255
    assert all(a <= b for a, b in zip(lut, lut[1:]))


def test_gamma_lut_linearizes_mid_gray():
    lut = build_gamma_lut(2.2)

    assert lut[128] == 56
    assert [lut[i] for i in (36, 72, 109, 145, 182, 218)] == [3, 16, 39, 74, 121, 181]


def test_gamma_below_one_brightens():
    lut = build_gamma_lut(0.5)

    assert lut[64] == 128
    assert all(lut[i] >= i for i in range(256))


def test_contrast_one_is_identity():
    buffer = ImageBuffer(256, 1, 1, bytearray(range(256)))

    enhance_contrast(buffer, 1.0)

    assert list(buffer.pixels) == list(range(256))


def test_contrast_pivots_on_mid_gray():
    lut = build_contrast_lut(1.3)

    assert lut[128] == 128
    assert lut[0] == 0
    assert lut[255] == 255
    assert lut[100] == 92
    assert lut[200] == 221


def test_contrast_zero_flattens_to_mid_gray():
    assert set(build_contrast_lut(0.0)) == {128}


def test_contrast_two_clamps_both_ends():
    lut = build_contrast_lut(2.0)

    assert lut[64] == 0
    assert lut[200] == 255
    assert lut[140] == 152


def test_apply_gamma_maps_every_sample():
    buffer = ImageBuffer(3, 1, 1, bytearray([0, 128, 255]))

    apply_gamma(buffer, build_gamma_lut(2.2))

    assert list(buffer.pixels) == [0, 56, 255]
