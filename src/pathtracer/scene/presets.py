"""Ready-made scenes.

Both scenes sit in front of a camera at the origin looking down -z.

Example:
    >>> from pathtracer.scene.presets import create_three_spheres_scene
    >>> world = create_three_spheres_scene()
    >>> len(world)
    5
"""

from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.scene.hittable_list import HittableList

# Center and radius of the subject sphere in both scenes
SUBJECT_CENTER = (0.0, 0.0, -1.0)
SUBJECT_RADIUS = 0.5


def create_single_sphere_scene(
    albedo: tuple[float, float, float] = (0.5, 0.5, 0.5),
) -> HittableList:
    """One diffuse sphere of radius 0.5 centered at (0, 0, -1)."""
    return HittableList([Sphere(SUBJECT_CENTER, SUBJECT_RADIUS, Lambertian(albedo))])


def create_three_spheres_scene() -> HittableList:
    """Diffuse, glass and metal spheres resting on a large diffuse ground.

    The glass sphere is hollow: its inner surface is a smaller sphere
    with the reciprocal index of refraction.
    """
    material_ground = Lambertian(albedo=(0.8, 0.8, 0.0))
    material_center = Lambertian(albedo=(0.1, 0.2, 0.5))
    material_left = Dielectric(ir=1.5)
    material_bubble = Dielectric(ir=1.0 / 1.5)
    material_right = Metal(albedo=(0.8, 0.6, 0.2), fuzz=0.0)

    world = HittableList()
    world.add(Sphere((0.0, -100.5, -1.0), 100.0, material_ground))
    world.add(Sphere(SUBJECT_CENTER, SUBJECT_RADIUS, material_center))
    world.add(Sphere((-1.0, 0.0, -1.0), 0.5, material_left))
    world.add(Sphere((-1.0, 0.0, -1.0), 0.4, material_bubble))
    world.add(Sphere((1.0, 0.0, -1.0), 0.5, material_right))
    return world
