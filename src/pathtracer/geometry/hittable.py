"""Hit records shared by every intersectable primitive.

A hit query answers "where does this ray first meet the surface within
[t_min, t_max]?". Misses are ordinary, frequent results and are reported
through the ``hit`` flag rather than by raising.
"""

import taichi as ti

from pathtracer.core.vec3 import dot, point3, vec3


@ti.dataclass
class HitRecord:
    """Record of a ray-surface intersection.

    Attributes:
        hit: 1 if the ray intersected the surface, 0 on a miss. All other
            fields are only meaningful when hit == 1.
        t: Ray parameter of the intersection.
        point: World-space intersection point.
        normal: Unit surface normal, always facing against the incoming ray.
        front_face: 1 if the ray struck the outside of the surface, 0 if it
            struck the inside.
        material_id: Registry index of the surface material (-1 on a miss).
    """

    hit: ti.i32
    t: ti.f32
    point: point3
    normal: vec3
    front_face: ti.i32
    material_id: ti.i32


@ti.func
def set_face_normal(direction: vec3, outward_normal: vec3):
    """Orient a geometric normal against the incoming ray.

    Args:
        direction: The incoming ray direction.
        outward_normal: Unit normal pointing out of the surface.

    Returns:
        A tuple of (front_face, normal) where front_face is 1 when the ray
        approaches from outside.
    """
    front_face = 1
    normal = outward_normal
    if dot(direction, outward_normal) >= 0.0:
        front_face = 0
        normal = -outward_normal
    return front_face, normal


@ti.func
def miss_record() -> HitRecord:
    """A HitRecord meaning "no intersection"."""
    return HitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        front_face=0,
        material_id=-1,
    )
