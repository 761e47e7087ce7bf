"""Core rendering module.

Components:
    vec3: Vector algebra shared by points, directions and colors
    ray: Ray data structure
    sampler: Seedable random number generation threaded through the tracer
    integrator: Radiance estimation (ray_color) and the sky background
    renderer: Per-pixel sampling loop producing a linear image

The integrator walks each light path backward from the eye, asking the
hit material to scatter until the ray is absorbed, escapes to the sky, or
runs out of depth.
"""

from .ray import Ray, make_ray, ray_at
from .sampler import (
    random_f32,
    random_in_unit_sphere,
    random_range,
    random_unit_vector,
    seed_state,
)
from .vec3 import (
    Axis,
    Channel,
    color,
    cross,
    dot,
    length,
    length_squared,
    near_zero,
    point3,
    reflect,
    reflectance,
    refract,
    unit_vector,
    vec3,
)

# Note: integrator and renderer are NOT imported here; they pull in the
# scene and material fields. Import them from pathtracer.core.integrator
# and pathtracer.core.renderer directly.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "point3",
    "color",
    "Axis",
    "Channel",
    "dot",
    "cross",
    "length",
    "length_squared",
    "unit_vector",
    "near_zero",
    "reflect",
    "refract",
    "reflectance",
    "seed_state",
    "random_f32",
    "random_range",
    "random_in_unit_sphere",
    "random_unit_vector",
]
