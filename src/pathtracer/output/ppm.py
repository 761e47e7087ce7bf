"""Plain-text PPM (P3) writer.

Output layout:

    P3
    <width> <height>
    255
    r g b        one line per pixel, rows top to bottom, row-major

Quantization of a linear color channel c:

    int(256 * clamp(sqrt(c), 0.0, 0.999))

so 0.0 maps to 0 and anything at or above 1.0 maps to 255.

Example:
    >>> from pathtracer.output.ppm import gradient_image, write_ppm
    >>> write_ppm(gradient_image(256, 256), "gradient.ppm")
"""

from pathlib import Path
from typing import TextIO

import numpy as np
import numpy.typing as npt

# Upper clamp before scaling; keeps 1.0 from quantizing to 256
CLAMP_MAX = 0.999
MAX_COLOR_VALUE = 255


def _validate_image(image: npt.NDArray) -> npt.NDArray[np.float64]:
    array = np.asarray(image, dtype=np.float64)
    if array.ndim != 3 or array.shape[2] != 3:
        raise ValueError(f"Expected image of shape (height, width, 3), got {array.shape}")
    if array.shape[0] == 0 or array.shape[1] == 0:
        raise ValueError(f"Image must have at least one pixel, got {array.shape}")
    return array


def quantize(image: npt.NDArray) -> npt.NDArray[np.int32]:
    """Convert linear colors to 8-bit values.

    Applies gamma-2 correction, clamps to [0, 0.999], scales by 256 and
    truncates. Negative and NaN inputs quantize to 0.

    Args:
        image: Linear colors of any shape.

    Returns:
        Integer array of the same shape with values in [0, 255].
    """
    linear = np.nan_to_num(np.asarray(image, dtype=np.float64), nan=0.0)
    corrected = np.sqrt(np.maximum(linear, 0.0))
    return (256.0 * np.clip(corrected, 0.0, CLAMP_MAX)).astype(np.int32)


def format_pixel(color_sum: tuple[float, float, float], samples_per_pixel: int) -> str:
    """Format one pixel from the sum of its samples.

    Args:
        color_sum: Sum of the linear sample colors.
        samples_per_pixel: Number of samples in the sum.

    Returns:
        The pixel line "r g b" without a trailing newline.

    Raises:
        ValueError: If samples_per_pixel is not positive.
    """
    if samples_per_pixel < 1:
        raise ValueError(f"samples_per_pixel must be at least 1, got {samples_per_pixel}")
    r, g, b = quantize(np.asarray(color_sum, dtype=np.float64) / samples_per_pixel)
    return f"{r} {g} {b}"


def format_ppm(image: npt.NDArray) -> str:
    """Encode an image as PPM text.

    Args:
        image: Linear colors of shape (height, width, 3), rows top to bottom.

    Returns:
        The complete file contents, newline-terminated.
    """
    array = _validate_image(image)
    height, width = array.shape[:2]
    pixels = quantize(array).reshape(-1, 3)

    lines = ["P3", f"{width} {height}", str(MAX_COLOR_VALUE)]
    lines.extend(f"{r} {g} {b}" for r, g, b in pixels)
    return "\n".join(lines) + "\n"


def write_ppm(image: npt.NDArray, target: str | Path | TextIO) -> None:
    """Write an image as PPM text to a path or an open text stream.

    Args:
        image: Linear colors of shape (height, width, 3), rows top to bottom.
        target: Output file path, or a writable text stream such as sys.stdout.
    """
    text = format_ppm(image)
    if isinstance(target, (str, Path)):
        Path(target).write_text(text, encoding="ascii")
    else:
        target.write(text)


def gradient_image(width: int, height: int) -> npt.NDArray[np.float32]:
    """Test pattern: red ramps left to right, green bottom to top, blue 0.25.

    Args:
        width: Image width in pixels (at least 2).
        height: Image height in pixels (at least 2).

    Returns:
        Linear colors of shape (height, width, 3), rows top to bottom.
    """
    if width < 2 or height < 2:
        raise ValueError(f"Gradient needs at least 2x2 pixels, got {width}x{height}")

    red = np.linspace(0.0, 1.0, width, dtype=np.float32)
    # Top row is j = height - 1
    green = np.linspace(1.0, 0.0, height, dtype=np.float32)

    image = np.empty((height, width, 3), dtype=np.float32)
    image[:, :, 0] = red[np.newaxis, :]
    image[:, :, 1] = green[:, np.newaxis]
    image[:, :, 2] = 0.25
    return image
