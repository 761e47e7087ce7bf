"""Vector algebra for points, directions and colors.

Points, directions and colors share one representation, Taichi's
``vec3``. The arithmetic operators (``+``, ``-``, unary ``-``, scalar and
componentwise ``*``, scalar ``/``) come from ``taichi.math`` and always
return new values; in-place forms are only used for accumulation.

The helpers below are Taichi functions, callable from kernels and from
other Taichi functions.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathtracer.core.vec3 import dot, unit_vector, vec3
    >>> @ti.kernel
    ... def cosine() -> ti.f32:
    ...     return dot(unit_vector(vec3(1.0, 1.0, 0.0)), vec3(1.0, 0.0, 0.0))
"""

from enum import IntEnum

import taichi as ti
import taichi.math as tm

# One representation, three semantic names
vec3 = tm.vec3
point3 = tm.vec3
color = tm.vec3

# Components smaller than this count as zero in near_zero()
NEAR_ZERO_EPSILON = 1e-8


class Axis(IntEnum):
    """Component index of a point or direction."""

    X = 0
    Y = 1
    Z = 2


class Channel(IntEnum):
    """Component index of a color."""

    R = 0
    G = 1
    B = 2


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Dot product ``a.x*b.x + a.y*b.y + a.z*b.z``."""
    return a.x * b.x + a.y * b.y + a.z * b.z


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Cross product following the right-hand rule."""
    return vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Squared Euclidean length.

    Prefer this over length() when only comparing magnitudes, as it
    avoids the square root.
    """
    return dot(v, v)


@ti.func
def length(v: vec3) -> ti.f32:
    """Euclidean length."""
    return ti.sqrt(length_squared(v))


@ti.func
def unit_vector(v: vec3) -> vec3:
    """Scale v to unit length.

    The caller must not pass a zero vector; the result is undefined
    (non-finite) in that case.
    """
    return v / length(v)


@ti.func
def near_zero(v: vec3) -> ti.i32:
    """Return 1 if every component of v is within 1e-8 of zero."""
    s = NEAR_ZERO_EPSILON
    return ti.abs(v.x) < s and ti.abs(v.y) < s and ti.abs(v.z) < s


@ti.func
def reflect(v: vec3, n: vec3) -> vec3:
    """Mirror v about the unit normal n: ``v - 2(v.n)n``."""
    return v - 2.0 * dot(v, n) * n


@ti.func
def refract(uv: vec3, n: vec3, etai_over_etat: ti.f32) -> vec3:
    """Refract the unit direction uv through a surface with unit normal n.

    Snell's law split into the components perpendicular and parallel to
    the normal. The normal must face the incoming direction and the
    caller is responsible for ruling out total internal reflection.

    Args:
        uv: Incoming direction (unit length).
        n: Surface normal (unit length, opposing uv).
        etai_over_etat: Ratio of refractive indices, incident over transmitted.

    Returns:
        The refracted direction (unit length up to rounding).
    """
    cos_theta = tm.min(dot(-uv, n), 1.0)
    r_out_perp = etai_over_etat * (uv + cos_theta * n)
    r_out_parallel = -ti.sqrt(ti.abs(1.0 - length_squared(r_out_perp))) * n
    return r_out_perp + r_out_parallel


@ti.func
def reflectance(cosine: ti.f32, ref_idx: ti.f32) -> ti.f32:
    """Schlick's approximation of Fresnel reflectance.

    ``r0 + (1 - r0)(1 - cos)^5`` with ``r0 = ((1 - ref_idx)/(1 + ref_idx))^2``.
    The result is the same for ref_idx and 1/ref_idx.
    """
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * ((1.0 - cosine) ** 5)
