import io

import pytest
from PIL import Image

from eink_image.processing.buffer import ImageBuffer


def gradient_buffer(width: int, height: int) -> ImageBuffer:
    """Horizontal 0..255 ramp, identical on every row."""
    row = bytes(x * 255 // (width - 1) for x in range(width))
    return ImageBuffer(width, height, 1, bytearray(row * height))


def png_bytes(img: Image.Image) -> bytes:
    out = io.BytesIO()
    img.save(out, "PNG")
    return out.getvalue()


@pytest.fixture
def rgb_photo() -> Image.Image:
    img = Image.new("RGB", (12, 6))
    pixels = img.load()
    for y in range(6):
        for x in range(12):
            pixels[x, y] = (x * 21, y * 40, (x + y) * 14)
    return img
