"""Pixel pipeline: grayscale, gamma, contrast and dithering."""

from .buffer import ImageBuffer
from .dither import floyd_steinberg, threshold_only
from .enhance import apply_gamma, build_contrast_lut, build_gamma_lut, enhance_contrast
from .grayscale import to_grayscale
from .pipeline import convert_buffer, convert_image

__all__ = [
    "ImageBuffer",
    "floyd_steinberg",
    "threshold_only",
    "apply_gamma",
    "build_contrast_lut",
    "build_gamma_lut",
    "enhance_contrast",
    "to_grayscale",
    "convert_buffer",
    "convert_image",
]
