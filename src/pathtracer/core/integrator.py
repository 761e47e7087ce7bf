"""Radiance estimation for a single ray.

``ray_color`` follows a light path backward from the eye:

    color(ray, 0)     = black
    color(ray, depth) = attenuation * color(scattered, depth - 1)  if hit and scattered
                      = black                                       if hit and absorbed
                      = background(ray)                             if missed

Taichi functions are inlined and cannot recurse, so the recursion is
unrolled into a loop carrying the running product of attenuations
(throughput). The two forms give identical results: depth strictly
decreases, and a path that runs out of depth contributes black.

The only light source is the sky: a vertical gradient from white at the
horizon to light blue at the zenith.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathtracer.core.integrator import trace_ray
    >>> r, g, b = trace_ray((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), depth=10)  # sky: ~(0.5, 0.7, 1.0)
"""

import taichi as ti
import taichi.math as tm

from pathtracer.core.ray import Ray
from pathtracer.core.sampler import seed_state
from pathtracer.core.vec3 import color, unit_vector, vec3
from pathtracer.materials.registry import scatter
from pathtracer.scene.hittable_list import intersect_scene

# =============================================================================
# Rendering Constants
# =============================================================================

# Lower bound on hit distance; keeps scattered rays from re-hitting
# their own origin through rounding error (shadow acne)
T_MIN = 0.001
T_MAX = tm.inf

# Sky gradient endpoints
HORIZON_COLOR = (1.0, 1.0, 1.0)
ZENITH_COLOR = (0.5, 0.7, 1.0)


# =============================================================================
# Path Tracing Core
# =============================================================================


@ti.func
def background(ray: Ray) -> color:
    """Sky color seen along an escaping ray.

    Blends linearly between HORIZON_COLOR (t = 0) and ZENITH_COLOR (t = 1)
    with t = 0.5 * (unit_direction.y + 1).
    """
    unit_direction = unit_vector(ray.direction)
    t = 0.5 * (unit_direction.y + 1.0)
    horizon = vec3(HORIZON_COLOR[0], HORIZON_COLOR[1], HORIZON_COLOR[2])
    zenith = vec3(ZENITH_COLOR[0], ZENITH_COLOR[1], ZENITH_COLOR[2])
    return (1.0 - t) * horizon + t * zenith


@ti.func
def ray_color(ray: Ray, depth: ti.i32, state: ti.u32):
    """Estimate the color carried back along a ray.

    Args:
        ray: The ray to trace.
        depth: Remaining bounce budget; 0 yields black.
        state: Random generator state.

    Returns:
        A tuple of (color, new_state).
    """
    radiance = vec3(0.0, 0.0, 0.0)
    throughput = vec3(1.0, 1.0, 1.0)
    current = Ray(origin=ray.origin, direction=ray.direction)
    x = state

    # Active flag for path continuation
    active = 1

    for _ in range(depth):
        if active == 1:
            rec = intersect_scene(current, T_MIN, T_MAX)

            if rec.hit == 0:
                radiance = throughput * background(current)
                active = 0
            else:
                result, x = scatter(current, rec, x)
                if result.did_scatter == 0:
                    # Absorbed: the path carries no light
                    active = 0
                else:
                    throughput *= result.attenuation
                    current = result.scattered

    return radiance, x


# =============================================================================
# Python-callable Entry Points
# =============================================================================


@ti.kernel
def _trace_single_ray(origin: vec3, direction: vec3, depth: ti.i32, seed: ti.u32) -> vec3:
    """Trace one ray from Python, seeding the generator from seed."""
    state = seed_state(seed, 0)
    result, _ = ray_color(Ray(origin=origin, direction=direction), depth, state)
    return result


def trace_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    depth: int,
    seed: int = 0,
) -> tuple[float, float, float]:
    """Trace a single ray through the uploaded scene.

    Useful for testing and debugging; production renders go through
    pathtracer.core.renderer.Renderer.

    Args:
        origin: Ray origin.
        direction: Ray direction (non-zero).
        depth: Maximum number of bounces.
        seed: Random seed for the path.

    Returns:
        Tuple of (R, G, B) linear color values.
    """
    result = _trace_single_ray(vec3(*origin), vec3(*direction), depth, seed)
    return (float(result[0]), float(result[1]), float(result[2]))
