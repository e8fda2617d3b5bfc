from __future__ import annotations

from dataclasses import dataclass

from PIL import Image

_MODES = {1: "L", 3: "RGB", 4: "RGBA"}


@dataclass
class ImageBuffer:
    """Row-major 8-bit samples with their geometry.

    ``pixels`` holds ``width * height * channels`` bytes; channel samples of a
    pixel are adjacent.
    """

    width: int
    height: int
    channels: int
    pixels: bytearray

    def __post_init__(self) -> None:
        if self.channels not in _MODES:
            raise ValueError(f"Unsupported channel count: {self.channels}")
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Negative dimensions: {self.width}x{self.height}")
        expected = self.width * self.height * self.channels
        if len(self.pixels) != expected:
            raise ValueError(
                f"Buffer holds {len(self.pixels)} samples, expected {expected}"
            )
        self.pixels = bytearray(self.pixels)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @classmethod
    def filled(cls, width: int, height: int, value: int = 0, channels: int = 1) -> "ImageBuffer":
        return cls(width, height, channels, bytearray([value]) * (width * height * channels))

    @classmethod
    def from_image(cls, img: Image.Image) -> "ImageBuffer":
        if img.mode not in _MODES.values():
            img = img.convert("RGB")
        channels = len(img.getbands())
        width, height = img.size
        return cls(width, height, channels, bytearray(img.tobytes()))

    def to_image(self) -> Image.Image:
        return Image.frombytes(_MODES[self.channels], self.size, bytes(self.pixels))

    def to_bilevel(self) -> Image.Image:
        """Return a mode ``"1"`` image; only valid for single-channel 0/255 buffers."""
        if self.channels != 1:
            raise ValueError("Only single-channel buffers can be bilevel")
        return self.to_image().convert("1", dither=Image.Dither.NONE)
