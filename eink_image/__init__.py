"""Convert raster images to dithered 1-bit output for e-paper displays."""

__version__ = "0.2.0"

from . import infrastructure, processing
from .config import ConversionSettings
from .errors import (
    ConfigurationError,
    ConversionError,
    DecodeError,
    DegenerateImageError,
    EncodeError,
    SourceFetchError,
)
from .pipeline import convert_file
from .processing import ImageBuffer, convert_buffer, convert_image

__all__ = [
    "__version__",
    "infrastructure",
    "processing",
    "ConversionSettings",
    "ConfigurationError",
    "ConversionError",
    "DecodeError",
    "DegenerateImageError",
    "EncodeError",
    "SourceFetchError",
    "convert_file",
    "ImageBuffer",
    "convert_buffer",
    "convert_image",
]
