"""Dielectric (glass/water) material.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when the refraction ratio times
      sin(theta) exceeds 1

When refraction is possible the material reflects with probability equal
to the Schlick reflectance and refracts otherwise, so reflections grow
stronger at grazing angles. Clear dielectrics absorb nothing.

Example:
    >>> from pathtracer.materials.dielectric import Dielectric
    >>> glass = Dielectric(ir=1.5)
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from pathtracer.core.ray import Ray
from pathtracer.core.sampler import random_f32
from pathtracer.core.vec3 import dot, reflect, reflectance, refract, unit_vector, vec3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.base import Material, MaterialType, ScatterResult


@dataclass(frozen=True)
class Dielectric(Material):
    """Transparent refractive material.

    Attributes:
        ir: Index of refraction. Common values: air 1.0, water 1.33,
            glass 1.3-1.7, diamond 2.4. Values below 1 describe a medium
            less dense than its surroundings (e.g. an air bubble).

    Raises:
        ValueError: If ir is not positive.
    """

    kind = MaterialType.DIELECTRIC

    ir: float = 1.5

    def __post_init__(self) -> None:
        if not self.ir > 0.0:
            raise ValueError(f"Index of refraction must be positive, got {self.ir}")
        object.__setattr__(self, "ir", float(self.ir))

    def device_params(self) -> tuple[tuple[float, float, float], float, float]:
        return (1.0, 1.0, 1.0), 0.0, self.ir


@ti.func
def refraction_ratio_for(ir: ti.f32, front_face: ti.i32) -> ti.f32:
    """Incident-over-transmitted index ratio for the side that was hit."""
    ratio = ir
    if front_face == 1:
        ratio = 1.0 / ir
    return ratio


@ti.func
def cannot_refract(ir: ti.f32, ray_in: Ray, rec: HitRecord) -> ti.i32:
    """Return 1 if the incoming ray is totally internally reflected."""
    unit_direction = unit_vector(ray_in.direction)
    cos_theta = tm.min(dot(-unit_direction, rec.normal), 1.0)
    sin_theta = ti.sqrt(1.0 - cos_theta * cos_theta)
    return refraction_ratio_for(ir, rec.front_face) * sin_theta > 1.0


@ti.func
def scatter_dielectric(ir: ti.f32, ray_in: Ray, rec: HitRecord, state: ti.u32):
    """Reflect or refract a ray at a dielectric boundary.

    Args:
        ir: Index of refraction of the material.
        ray_in: The incoming ray.
        rec: Hit record; rec.front_face selects entering vs. leaving.
        state: Random generator state.

    Returns:
        A tuple of (result, new_state). Dielectrics always scatter and
        never tint.
    """
    refraction_ratio = refraction_ratio_for(ir, rec.front_face)

    unit_direction = unit_vector(ray_in.direction)
    cos_theta = tm.min(dot(-unit_direction, rec.normal), 1.0)

    x = state
    direction = vec3(0.0, 0.0, 0.0)
    if cannot_refract(ir, ray_in, rec):
        direction = reflect(unit_direction, rec.normal)
    else:
        u, x = random_f32(x)
        if u < reflectance(cos_theta, refraction_ratio):
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, refraction_ratio)

    result = ScatterResult(
        did_scatter=1,
        attenuation=vec3(1.0, 1.0, 1.0),
        scattered=Ray(origin=rec.point, direction=direction),
    )
    return result, x
