"""Image output.

Components:
    ppm: Plain-text PPM (P3) encoding of rendered images
"""

from .ppm import format_pixel, format_ppm, gradient_image, quantize, write_ppm

__all__ = [
    "quantize",
    "format_pixel",
    "format_ppm",
    "write_ppm",
    "gradient_image",
]
