"""Metal (specular reflective) material.

The incoming direction is mirrored about the normal,

    R = V - 2(V . N)N

and then perturbed by ``fuzz`` times a random point in the unit sphere.
With fuzz = 0 the surface is a perfect mirror. A perturbed ray that ends
up pointing into the surface is absorbed, which darkens very fuzzy and
grazing reflections.

Example:
    >>> from pathtracer.materials.metal import Metal
    >>> brushed_gold = Metal(albedo=(0.8, 0.6, 0.2), fuzz=0.3)
"""

from dataclasses import dataclass

import taichi as ti

from pathtracer.core.ray import Ray
from pathtracer.core.sampler import random_in_unit_sphere
from pathtracer.core.vec3 import color, dot, reflect, unit_vector
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.base import Material, MaterialType, ScatterResult, as_color


@dataclass(frozen=True)
class Metal(Material):
    """Reflective material.

    Attributes:
        albedo: Tint applied to reflected light (R, G, B).
        fuzz: Roughness of the reflection, clamped into [0, 1].
    """

    kind = MaterialType.METAL

    albedo: tuple[float, float, float]
    fuzz: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", as_color(self.albedo))
        object.__setattr__(self, "fuzz", min(max(float(self.fuzz), 0.0), 1.0))

    def device_params(self) -> tuple[tuple[float, float, float], float, float]:
        return self.albedo, self.fuzz, 1.0


@ti.func
def scatter_metal(albedo: color, fuzz: ti.f32, ray_in: Ray, rec: HitRecord, state: ti.u32):
    """Reflect a ray off a metal surface.

    Args:
        albedo: Reflective tint.
        fuzz: Perturbation radius in [0, 1].
        ray_in: The incoming ray.
        rec: Hit record of the incoming ray.
        state: Random generator state.

    Returns:
        A tuple of (result, new_state). result.did_scatter is 0 when the
        perturbed reflection points into the surface.
    """
    reflected = reflect(unit_vector(ray_in.direction), rec.normal)
    perturbation, x = random_in_unit_sphere(state)
    direction = reflected + fuzz * perturbation

    did_scatter = 0
    if dot(direction, rec.normal) > 0.0:
        did_scatter = 1

    result = ScatterResult(
        did_scatter=did_scatter,
        attenuation=albedo,
        scattered=Ray(origin=rec.point, direction=direction),
    )
    return result, x
