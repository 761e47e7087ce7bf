"""Materials module for scattering models.

Components:
    base: MaterialType enumeration, ScatterResult and the Material base class
    lambertian: Ideal diffuse reflection
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like refraction with Schlick reflectance
    registry: Device-side material storage and scatter dispatch

Each material provides a host-side frozen dataclass used to describe the
scene and a Taichi scatter function of the form:
    result, state = scatter_<kind>(params..., rec, state)
"""

from .base import Material, MaterialType, ScatterResult
from .dielectric import Dielectric, cannot_refract, scatter_dielectric
from .lambertian import Lambertian, diffuse_direction, scatter_lambertian
from .metal import Metal, scatter_metal
from .registry import (
    MAX_MATERIALS,
    clear_materials,
    get_material_count,
    get_material_kind,
    register_material,
    scatter,
)

__all__ = [
    # Base
    "Material",
    "MaterialType",
    "ScatterResult",
    # Lambertian
    "Lambertian",
    "scatter_lambertian",
    "diffuse_direction",
    # Metal
    "Metal",
    "scatter_metal",
    # Dielectric
    "Dielectric",
    "scatter_dielectric",
    "cannot_refract",
    # Registry
    "MAX_MATERIALS",
    "register_material",
    "clear_materials",
    "get_material_count",
    "get_material_kind",
    "scatter",
]
