"""Material registry and scatter dispatch.

Materials live in Taichi fields indexed by a material id. Primitives refer
to a material by id, so any number of spheres can share one entry without
copying it. ``scatter`` reads the kind of the hit material and switches to
the matching scattering function.

Example:
    >>> from pathtracer.materials import Lambertian, register_material
    >>> diffuse_id = register_material(Lambertian(albedo=(0.5, 0.5, 0.5)))
    >>> # Kernels then call scatter(ray_in, rec, state) on records whose
    >>> # material_id == diffuse_id.
"""

import taichi as ti

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import vec3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.base import Material, MaterialType, ScatterResult
from pathtracer.materials.dielectric import scatter_dielectric
from pathtracer.materials.lambertian import scatter_lambertian
from pathtracer.materials.metal import scatter_metal

# Maximum number of distinct materials in a scene
MAX_MATERIALS = 1024

material_kinds = ti.field(dtype=ti.i32, shape=MAX_MATERIALS)
material_albedos = ti.Vector.field(3, dtype=ti.f32, shape=MAX_MATERIALS)
material_fuzz = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
material_ir = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_materials() -> None:
    """Forget all registered materials.

    Field contents are left in place and overwritten by later registrations.
    """
    num_materials[None] = 0


def register_material(material: Material) -> int:
    """Store a material in the registry.

    Args:
        material: The material description.

    Returns:
        The material id to store on primitives.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
    """
    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    albedo, fuzz, ir = material.device_params()
    material_kinds[idx] = int(material.kind)
    material_albedos[idx] = list(albedo)
    material_fuzz[idx] = fuzz
    material_ir[idx] = ir
    num_materials[None] = idx + 1
    return idx


def get_material_count() -> int:
    """Get the number of registered materials."""
    return int(num_materials[None])


def get_material_kind(material_id: int) -> MaterialType:
    """Get the kind of a registered material (host-side lookup).

    Raises:
        IndexError: If material_id is not registered.
    """
    if not 0 <= material_id < num_materials[None]:
        raise IndexError(f"Material id {material_id} is not registered")
    return MaterialType(int(material_kinds[material_id]))


@ti.func
def scatter(ray_in: Ray, rec: HitRecord, state: ti.u32):
    """Scatter an incoming ray off the material recorded in rec.

    Args:
        ray_in: The incoming ray.
        rec: A hit record with hit == 1.
        state: Random generator state.

    Returns:
        A tuple of (result, new_state). Unknown material ids absorb.
    """
    material_id = rec.material_id
    result = ScatterResult(
        did_scatter=0,
        attenuation=vec3(0.0, 0.0, 0.0),
        scattered=Ray(origin=rec.point, direction=rec.normal),
    )
    x = state

    if 0 <= material_id < num_materials[None]:
        kind = material_kinds[material_id]
        if kind == int(MaterialType.LAMBERTIAN):
            result, x = scatter_lambertian(material_albedos[material_id], rec, x)
        elif kind == int(MaterialType.METAL):
            result, x = scatter_metal(
                material_albedos[material_id], material_fuzz[material_id], ray_in, rec, x
            )
        elif kind == int(MaterialType.DIELECTRIC):
            result, x = scatter_dielectric(material_ir[material_id], ray_in, rec, x)

    return result, x
