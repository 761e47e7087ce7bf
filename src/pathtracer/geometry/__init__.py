"""Geometry module for shape primitives.

Components:
    hittable: HitRecord and normal orientation shared by all primitives
    sphere: Sphere primitive with ray-sphere intersection

Intersection routines are Taichi functions following the pattern:
    record = hit_shape(ray, shape_data, t_min, t_max)
with record.hit == 0 signalling a miss.
"""

from .hittable import HitRecord, miss_record, set_face_normal
from .sphere import Sphere, SphereData, hit_sphere

__all__ = [
    "HitRecord",
    "miss_record",
    "set_face_normal",
    "Sphere",
    "SphereData",
    "hit_sphere",
]
