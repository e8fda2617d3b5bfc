import pytest
from PIL import Image

from eink_image.processing.buffer import ImageBuffer
from eink_image.processing.grayscale import luma, to_grayscale


@pytest.mark.parametrize(
    "rgb, expected",
    [
        ((255, 0, 0), 76),
        ((0, 255, 0), 150),
        ((0, 0, 255), 29),
        ((255, 255, 255), 255),
        ((0, 0, 0), 0),
    ],
)
def test_luma_uses_weighted_channels(rgb, expected):
    assert luma(*rgb) == expected


def test_single_channel_is_copied_unchanged():
    buffer = ImageBuffer(2, 2, 1, bytearray([1, 2, 3, 4]))

    gray = to_grayscale(buffer)

    assert gray is not buffer
    assert gray.pixels == buffer.pixels
    gray.pixels[0] = 99
    assert buffer.pixels[0] == 1


def test_rgba_ignores_alpha():
    buffer = ImageBuffer(2, 1, 4, bytearray([255, 0, 0, 0, 0, 255, 0, 255]))

    gray = to_grayscale(buffer)

    assert gray.channels == 1
    assert gray.size == (2, 1)
    assert list(gray.pixels) == [76, 150]


def test_matches_pillow_luminance(rgb_photo):
    gray = to_grayscale(ImageBuffer.from_image(rgb_photo))

    assert bytes(gray.pixels) == rgb_photo.convert("L").tobytes()
