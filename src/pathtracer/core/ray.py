"""Ray data structure.

A ray is the parametric line ``origin + t * direction``. Rays are
immutable once built; every scatter produces a new one.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathtracer.core.ray import Ray, ray_at, vec3
    >>> @ti.kernel
    ... def five_along() -> vec3:
    ...     ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
    ...     return ray_at(ray, 5.0)
"""

import taichi as ti

from pathtracer.core.vec3 import point3, vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of travel. Not required to be unit length;
            intersection and shading normalize where they need to.
    """

    origin: point3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> point3:
    """Point at parameter t along the ray.

    Any real t is valid: negative values lie behind the origin.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: point3, direction: vec3) -> Ray:
    """Convenience constructor for use inside Taichi functions."""
    return Ray(origin=origin, direction=direction)
