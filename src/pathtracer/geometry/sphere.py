"""Sphere primitive and ray-sphere intersection.

Substituting the ray ``o + t*d`` into ``|p - c|^2 = r^2`` gives the
quadratic ``a*t^2 + 2*h*t + c = 0`` with

    a = d.d
    h = (o - center).d        (half of the usual b)
    c = |o - center|^2 - r^2

The smaller root is tried first and the larger one only if the smaller
falls outside [t_min, t_max], so the nearest admissible surface is always
reported. A ray starting inside the sphere therefore gets the far root.

Scenes are described on the host with the frozen ``Sphere`` dataclass;
``SphereData`` is the device-side copy that kernels intersect.

Example:
    >>> from pathtracer.geometry.sphere import Sphere
    >>> from pathtracer.materials import Lambertian
    >>> ground = Sphere(center=(0.0, -100.5, -1.0), radius=100.0,
    ...                 material=Lambertian(albedo=(0.8, 0.8, 0.0)))
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

import taichi as ti

from pathtracer.core.ray import Ray, ray_at
from pathtracer.core.vec3 import dot, point3
from pathtracer.geometry.hittable import HitRecord, miss_record, set_face_normal

if TYPE_CHECKING:
    from pathtracer.materials.base import Material


@dataclass(frozen=True)
class Sphere:
    """A sphere in the scene description.

    Attributes:
        center: Center point (x, y, z).
        radius: Radius, strictly positive.
        material: The surface material. The same material object may be
            shared by any number of spheres.

    Raises:
        ValueError: If radius is not positive.
    """

    center: tuple[float, float, float]
    radius: float
    material: "Material"

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")
        object.__setattr__(self, "center", tuple(float(c) for c in self.center))


@ti.dataclass
class SphereData:
    """Device-side sphere.

    Attributes:
        center: Center point.
        radius: Radius (positive).
        material_id: Registry index of the sphere's material.
    """

    center: point3
    radius: ti.f32
    material_id: ti.i32


@ti.func
def hit_sphere(ray: Ray, sphere: SphereData, t_min: ti.f32, t_max: ti.f32) -> HitRecord:
    """Nearest intersection of a ray with a sphere in [t_min, t_max].

    Args:
        ray: The ray to test (direction need not be unit length).
        sphere: The sphere to intersect.
        t_min: Smallest admissible ray parameter.
        t_max: Largest admissible ray parameter.

    Returns:
        A HitRecord; hit == 0 if neither root lies in the interval.
    """
    oc = ray.origin - sphere.center
    a = dot(ray.direction, ray.direction)
    half_b = dot(oc, ray.direction)
    c = dot(oc, oc) - sphere.radius * sphere.radius
    discriminant = half_b * half_b - a * c

    record = miss_record()

    if discriminant >= 0.0:
        sqrtd = ti.sqrt(discriminant)

        found = 1
        root = (-half_b - sqrtd) / a
        if root < t_min or t_max < root:
            root = (-half_b + sqrtd) / a
            if root < t_min or t_max < root:
                found = 0

        if found == 1:
            point = ray_at(ray, root)
            outward_normal = (point - sphere.center) / sphere.radius
            front_face, normal = set_face_normal(ray.direction, outward_normal)
            record = HitRecord(
                hit=1,
                t=root,
                point=point,
                normal=normal,
                front_face=front_face,
                material_id=sphere.material_id,
            )

    return record
