"""Scene aggregate: an ordered list of spheres.

``HittableList`` collects spheres on the host. ``upload()`` registers each
distinct material once and copies the spheres into Taichi fields, where
``intersect_scene`` scans them all. The closest hit found so far becomes
the upper bound for the remaining spheres, so the result is the nearest
intersection overall. There is no spatial acceleration structure: each
query is linear in the number of spheres.

Example:
    >>> from pathtracer.geometry import Sphere
    >>> from pathtracer.materials import Lambertian
    >>> from pathtracer.scene import HittableList
    >>> world = HittableList()
    >>> world.add(Sphere((0.0, 0.0, -1.0), 0.5, Lambertian((0.7, 0.3, 0.3))))
    >>> world.upload()
"""

from collections.abc import Iterator

import taichi as ti

from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import HitRecord, miss_record
from pathtracer.geometry.sphere import Sphere, SphereData, hit_sphere
from pathtracer.materials.base import Material
from pathtracer.materials.registry import clear_materials, register_material

# Maximum number of spheres supported in the scene
MAX_SPHERES = 1024

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_material_ids = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Remove all spheres from the device scene."""
    num_spheres[None] = 0


def get_sphere_count() -> int:
    """Get the number of spheres in the device scene."""
    return int(num_spheres[None])


class HittableList:
    """An ordered collection of spheres forming the scene.

    Insertion order does not affect which hit is reported, only how soon
    the search bound tightens.

    Attributes:
        objects: The spheres in insertion order.
    """

    def __init__(self, objects: list[Sphere] | None = None) -> None:
        self.objects: list[Sphere] = []
        for obj in objects or []:
            self.add(obj)

    def add(self, obj: Sphere) -> None:
        """Append a sphere.

        Raises:
            RuntimeError: If the list would exceed MAX_SPHERES.
        """
        if len(self.objects) >= MAX_SPHERES:
            raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
        self.objects.append(obj)

    def clear(self) -> None:
        """Remove all spheres."""
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Sphere]:
        return iter(self.objects)

    def materials(self) -> list[Material]:
        """Distinct materials in first-use order."""
        seen: dict[Material, None] = {}
        for obj in self.objects:
            seen.setdefault(obj.material, None)
        return list(seen)

    def upload(self) -> dict[Material, int]:
        """Replace the device scene and material registry with this list.

        Returns:
            Mapping from each distinct material to its registry id.
        """
        clear_scene()
        clear_materials()

        material_ids = {material: register_material(material) for material in self.materials()}

        for idx, obj in enumerate(self.objects):
            sphere_centers[idx] = list(obj.center)
            sphere_radii[idx] = obj.radius
            sphere_material_ids[idx] = material_ids[obj.material]
        num_spheres[None] = len(self.objects)
        return material_ids

    def __repr__(self) -> str:
        return f"HittableList(spheres={len(self.objects)})"


@ti.func
def intersect_scene(ray: Ray, t_min: ti.f32, t_max: ti.f32) -> HitRecord:
    """Nearest intersection of a ray with every sphere in the scene.

    Args:
        ray: The ray to test.
        t_min: Smallest admissible ray parameter.
        t_max: Largest admissible ray parameter.

    Returns:
        The closest HitRecord, or a miss record (hit == 0).
    """
    closest_so_far = t_max
    result = miss_record()

    for i in range(num_spheres[None]):
        sphere = SphereData(
            center=sphere_centers[i],
            radius=sphere_radii[i],
            material_id=sphere_material_ids[i],
        )
        rec = hit_sphere(ray, sphere, t_min, closest_so_far)
        if rec.hit == 1:
            closest_so_far = rec.t
            result = rec

    return result
