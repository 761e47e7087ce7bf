"""Lambertian (ideal diffuse) material.

The outgoing direction is the surface normal plus a uniformly random unit
vector, i.e. a point on the unit sphere tangent to the surface at the hit
point. That yields a cosine-weighted distribution around the normal, so
the attenuation is just the albedo.

Example:
    >>> from pathtracer.materials.lambertian import Lambertian
    >>> matte_red = Lambertian(albedo=(0.7, 0.3, 0.3))
"""

from dataclasses import dataclass

import taichi as ti

from pathtracer.core.ray import Ray
from pathtracer.core.sampler import random_unit_vector
from pathtracer.core.vec3 import color, near_zero, vec3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.base import Material, MaterialType, ScatterResult, as_color


@dataclass(frozen=True)
class Lambertian(Material):
    """Diffuse material.

    Attributes:
        albedo: Reflected color (R, G, B). Components in [0, 1] keep the
            image physically plausible; this is not enforced.
    """

    kind = MaterialType.LAMBERTIAN

    albedo: tuple[float, float, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", as_color(self.albedo))

    def device_params(self) -> tuple[tuple[float, float, float], float, float]:
        return self.albedo, 0.0, 1.0


@ti.func
def diffuse_direction(normal: vec3, offset: vec3) -> vec3:
    """Bounce direction normal + offset, or the normal if the two cancel."""
    scatter_direction = normal + offset
    if near_zero(scatter_direction):
        scatter_direction = normal
    return scatter_direction


@ti.func
def scatter_lambertian(albedo: color, rec: HitRecord, state: ti.u32):
    """Scatter a ray diffusely off a surface.

    Args:
        albedo: The diffuse reflectance color.
        rec: Hit record of the incoming ray (normal faces the ray).
        state: Random generator state.

    Returns:
        A tuple of (result, new_state). The result always scatters.
    """
    offset, x = random_unit_vector(state)
    # The random vector can cancel the normal almost exactly
    scatter_direction = diffuse_direction(rec.normal, offset)

    result = ScatterResult(
        did_scatter=1,
        attenuation=albedo,
        scattered=Ray(origin=rec.point, direction=scatter_direction),
    )
    return result, x
