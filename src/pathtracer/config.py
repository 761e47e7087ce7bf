"""Render configuration.

``RenderSettings`` gathers every numeric knob of a render: image size,
sample count, path depth, random seed and the camera's viewport. Values
are validated on construction so that bad input fails before any kernel
runs.

Example:
    >>> settings = RenderSettings(image_width=400, aspect_ratio=16.0 / 9.0)
    >>> settings.image_height
    225
"""

from dataclasses import dataclass

# Largest image the render target can hold
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048


@dataclass(frozen=True)
class RenderSettings:
    """Configuration for one render.

    Attributes:
        image_width: Output width in pixels.
        aspect_ratio: Width divided by height; determines image_height.
        samples_per_pixel: Jittered primary rays averaged per pixel.
        max_depth: Maximum number of bounces per path.
        seed: Seed of the random source; equal seeds give equal images.
        viewport_height: Camera image-plane height in world units.
        focal_length: Camera distance to the image plane.
    """

    image_width: int = 400
    aspect_ratio: float = 16.0 / 9.0
    samples_per_pixel: int = 100
    max_depth: int = 50
    seed: int = 0
    viewport_height: float = 2.0
    focal_length: float = 1.0

    def __post_init__(self) -> None:
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if not 1 <= self.image_width <= MAX_IMAGE_WIDTH:
            raise ValueError(
                f"image_width must be in [1, {MAX_IMAGE_WIDTH}], got {self.image_width}"
            )
        if not 1 <= self.image_height <= MAX_IMAGE_HEIGHT:
            raise ValueError(
                f"image_height must be in [1, {MAX_IMAGE_HEIGHT}], got {self.image_height} "
                f"(from width {self.image_width} and aspect ratio {self.aspect_ratio})"
            )
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if not 0 <= self.seed < 2**32:
            raise ValueError(f"seed must fit in 32 unsigned bits, got {self.seed}")

    @property
    def image_height(self) -> int:
        """Output height in pixels."""
        return int(self.image_width / self.aspect_ratio)

    def make_camera(self):
        """Build the camera matching these settings."""
        from pathtracer.camera.camera import Camera

        return Camera(
            aspect_ratio=self.aspect_ratio,
            viewport_height=self.viewport_height,
            focal_length=self.focal_length,
        )
