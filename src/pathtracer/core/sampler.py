"""Seedable random number generation for Monte Carlo sampling.

Every consumer of randomness (camera jitter, diffuse bounce, fuzzy
reflection, the dielectric reflect/refract choice) receives an explicit
``u32`` generator state and returns the advanced state alongside its
result. Nothing reads a hidden global source, so a render is reproducible
for a fixed seed no matter how Taichi schedules the pixels.

Streams are derived from ``(seed, stream)`` with Thomas Wang's integer hash
and advanced with Marsaglia's xorshift32.

Example:
    >>> @ti.kernel
    ... def draw(seed: ti.u32) -> ti.f32:
    ...     state = seed_state(seed, 0)
    ...     x, state = random_f32(state)
    ...     return x
"""

import taichi as ti

from pathtracer.core.vec3 import length_squared, unit_vector, vec3

# 2^-24: maps the top 24 bits of a u32 onto [0, 1)
_INV_2_24 = 1.0 / 16777216.0

# Rejection sampling gives up after this many tries (acceptance is ~52%)
MAX_REJECTION_TRIES = 64


@ti.func
def wang_hash(key: ti.u32) -> ti.u32:
    """Thomas Wang's 32-bit integer hash."""
    x = key
    x = (x ^ ti.u32(61)) ^ (x >> ti.u32(16))
    x = x * ti.u32(9)
    x = x ^ (x >> ti.u32(4))
    x = x * ti.u32(0x27D4EB2D)
    x = x ^ (x >> ti.u32(15))
    return x


@ti.func
def seed_state(seed: ti.u32, stream: ti.i32) -> ti.u32:
    """Derive an independent, non-zero generator state.

    Args:
        seed: The render-wide seed.
        stream: Distinguishes streams under the same seed (e.g. pixel index).

    Returns:
        A generator state for random_f32().
    """
    x = wang_hash(ti.cast(seed, ti.u32) ^ wang_hash(ti.cast(stream, ti.u32)))
    if x == ti.u32(0):
        # xorshift has a fixed point at zero
        x = ti.u32(0x1E3779B9)
    return x


@ti.func
def next_state(state: ti.u32) -> ti.u32:
    """Advance the state by one xorshift32 step."""
    x = state
    x = x ^ (x << ti.u32(13))
    x = x ^ (x >> ti.u32(17))
    x = x ^ (x << ti.u32(5))
    return x


@ti.func
def random_f32(state: ti.u32):
    """Draw a uniform float in [0, 1).

    Returns:
        A tuple of (value, new_state).
    """
    x = next_state(state)
    value = ti.cast(x >> ti.u32(8), ti.f32) * _INV_2_24
    return value, x


@ti.func
def random_range(state: ti.u32, lo: ti.f32, hi: ti.f32):
    """Draw a uniform float in [lo, hi).

    Returns:
        A tuple of (value, new_state).
    """
    u, x = random_f32(state)
    return lo + (hi - lo) * u, x


@ti.func
def random_in_unit_sphere(state: ti.u32):
    """Uniform point strictly inside the unit sphere, by rejection.

    Returns:
        A tuple of (point, new_state).
    """
    p = vec3(0.0, 0.0, 0.0)
    x = state
    found = 0
    for _ in range(MAX_REJECTION_TRIES):
        if found == 0:
            px, x = random_range(x, -1.0, 1.0)
            py, x = random_range(x, -1.0, 1.0)
            pz, x = random_range(x, -1.0, 1.0)
            candidate = vec3(px, py, pz)
            if length_squared(candidate) < 1.0:
                p = candidate
                found = 1
    return p, x


@ti.func
def random_unit_vector(state: ti.u32):
    """Uniform direction on the unit sphere.

    Returns:
        A tuple of (direction, new_state).
    """
    p, x = random_in_unit_sphere(state)
    # Degenerate draw (practically never): fall back to an arbitrary axis
    if length_squared(p) < 1e-12:
        p = vec3(0.0, 1.0, 0.0)
    return unit_vector(p), x
