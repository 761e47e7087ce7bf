"""Axis-aligned pinhole camera.

The camera sits at ``origin`` looking down -z with y up and x right. The
image plane is ``focal_length`` in front of it and spans
``viewport_width x viewport_height`` world units, where
``viewport_width = aspect_ratio * viewport_height``.

Normalized image coordinates map onto that plane:
    u in [0, 1]: left to right
    v in [0, 1]: bottom to top

The camera performs no jitter; the render loop offsets (u, v) within a
pixel before calling ``get_ray``.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathtracer.camera import Camera, get_ray, setup_camera
    >>> setup_camera(Camera(aspect_ratio=16.0 / 9.0))
    >>> @ti.kernel
    ... def center_direction() -> ti.math.vec3:
    ...     return get_ray(0.5, 0.5).direction
"""

from dataclasses import dataclass

import numpy as np
import taichi as ti

from pathtracer.core.ray import Ray, make_ray

# =============================================================================
# Camera Configuration
# =============================================================================


@dataclass(frozen=True)
class Camera:
    """Pinhole camera parameters.

    Attributes:
        aspect_ratio: Image width divided by height.
        viewport_height: Height of the image plane in world units.
        focal_length: Distance from the origin to the image plane.
        origin: Camera position in world space.

    Raises:
        ValueError: If any of the size parameters is not positive.
    """

    aspect_ratio: float
    viewport_height: float = 2.0
    focal_length: float = 1.0
    origin: tuple[float, float, float] = (0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        for name in ("aspect_ratio", "viewport_height", "focal_length"):
            value = getattr(self, name)
            if not value > 0.0:
                raise ValueError(f"Camera {name} must be positive, got {value}")
        object.__setattr__(self, "origin", tuple(float(c) for c in self.origin))

    @property
    def viewport_width(self) -> float:
        return self.aspect_ratio * self.viewport_height

    @property
    def horizontal(self) -> np.ndarray:
        return np.array([self.viewport_width, 0.0, 0.0], dtype=np.float32)

    @property
    def vertical(self) -> np.ndarray:
        return np.array([0.0, self.viewport_height, 0.0], dtype=np.float32)

    @property
    def lower_left_corner(self) -> np.ndarray:
        origin = np.array(self.origin, dtype=np.float32)
        depth = np.array([0.0, 0.0, self.focal_length], dtype=np.float32)
        return origin - self.horizontal / 2.0 - self.vertical / 2.0 - depth


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_viewport_horizontal = ti.Vector.field(3, dtype=ti.f32, shape=())
_viewport_vertical = ti.Vector.field(3, dtype=ti.f32, shape=())
_lower_left_corner = ti.Vector.field(3, dtype=ti.f32, shape=())


def setup_camera(camera: Camera) -> None:
    """Upload the camera's derived geometry for use in kernels.

    Must be called from Python (not from within a kernel) before rendering.
    """
    _camera_origin[None] = list(camera.origin)
    _viewport_horizontal[None] = camera.horizontal.tolist()
    _viewport_vertical[None] = camera.vertical.tolist()
    _lower_left_corner[None] = camera.lower_left_corner.tolist()


# =============================================================================
# Ray Generation
# =============================================================================


@ti.func
def get_ray(u: ti.f32, v: ti.f32) -> Ray:
    """Primary ray through normalized image coordinates (u, v).

    Args:
        u: Horizontal coordinate in [0, 1] (left to right).
        v: Vertical coordinate in [0, 1] (bottom to top).

    Returns:
        A ray from the camera origin through the image-plane point. The
        direction is not normalized.
    """
    origin = _camera_origin[None]
    target = _lower_left_corner[None] + u * _viewport_horizontal[None] + v * _viewport_vertical[None]
    return make_ray(origin, target - origin)


def get_camera_info() -> dict[str, tuple[float, float, float]]:
    """Get the uploaded camera state for inspection.

    Returns:
        Dictionary with origin, horizontal, vertical and lower_left.
    """
    fields = {
        "origin": _camera_origin,
        "horizontal": _viewport_horizontal,
        "vertical": _viewport_vertical,
        "lower_left": _lower_left_corner,
    }
    info = {}
    for name, field in fields.items():
        value = field[None]
        info[name] = (float(value[0]), float(value[1]), float(value[2]))
    return info
