"""Shared material types.

Every material answers one question: given an incoming ray and the hit
record where it met the surface, what ray leaves and how much of each
color channel survives? The answer is a ``ScatterResult``; absorption is
``did_scatter == 0``, not an error.

Material kinds form a closed set (``MaterialType``) and are dispatched
with a switch in ``pathtracer.materials.registry.scatter``.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

import taichi as ti

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import color


class MaterialType(IntEnum):
    """Enumeration of supported material kinds.

    Stored per material in the registry and used by the integrator to
    select the scattering function.
    """

    LAMBERTIAN = 0
    METAL = 1
    DIELECTRIC = 2


@ti.dataclass
class ScatterResult:
    """Outcome of a material scatter.

    Attributes:
        did_scatter: 1 if a ray leaves the surface, 0 if it was absorbed.
        attenuation: Per-channel fraction of light retained by the bounce.
        scattered: The outgoing ray (only meaningful when did_scatter == 1).
    """

    did_scatter: ti.i32
    attenuation: color
    scattered: Ray


@dataclass(frozen=True)
class Material:
    """Base class of host-side material descriptions.

    Subclasses are immutable value objects so they can be shared freely
    between primitives and used as registry keys.
    """

    kind: ClassVar[MaterialType]

    def device_params(self) -> tuple[tuple[float, float, float], float, float]:
        """Parameters as stored in the registry: (albedo, fuzz, ir)."""
        raise NotImplementedError("device_params() must be implemented by subclasses.")


def as_color(value: tuple[float, float, float]) -> tuple[float, float, float]:
    """Normalize a 3-sequence into a float triple.

    Raises:
        ValueError: If value does not have exactly three components.
    """
    components = tuple(float(c) for c in value)
    if len(components) != 3:
        raise ValueError(f"Expected 3 color components, got {len(components)}")
    return components
