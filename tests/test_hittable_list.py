"""Tests for the scene aggregate.

Tests cover:
- Host-side list management and capacity
- Material sharing on upload
- Nearest-hit selection across spheres regardless of insertion order
"""

import pytest
import taichi as ti


def _closest(origin, direction, t_min=0.001, t_max=1e9):
    """Intersect a ray with the uploaded scene."""
    from pathtracer.core.ray import Ray
    from pathtracer.core.vec3 import vec3
    from pathtracer.scene.hittable_list import intersect_scene

    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f32, shape=())
    material_id = ti.field(dtype=ti.i32, shape=())

    @ti.kernel
    def test_kernel(o: vec3, d: vec3, lo: ti.f32, hi: ti.f32):
        rec = intersect_scene(Ray(origin=o, direction=d), lo, hi)
        hit[None] = rec.hit
        t_val[None] = rec.t
        material_id[None] = rec.material_id

    test_kernel(vec3(*origin), vec3(*direction), t_min, t_max)
    return hit[None], t_val[None], material_id[None]


class TestHittableList:
    """Tests for host-side HittableList behavior."""

    def test_add_and_len(self):
        from pathtracer.geometry import Sphere
        from pathtracer.materials import Lambertian
        from pathtracer.scene import HittableList

        world = HittableList()
        assert len(world) == 0
        world.add(Sphere((0.0, 0.0, -1.0), 0.5, Lambertian((0.5, 0.5, 0.5))))
        assert len(world) == 1
        assert list(world)[0].radius == 0.5

        world.clear()
        assert len(world) == 0

    def test_capacity(self, monkeypatch):
        """Adding past MAX_SPHERES raises RuntimeError."""
        from pathtracer.geometry import Sphere
        from pathtracer.materials import Lambertian
        from pathtracer.scene import hittable_list

        monkeypatch.setattr(hittable_list, "MAX_SPHERES", 2)
        material = Lambertian((0.5, 0.5, 0.5))
        world = hittable_list.HittableList()
        world.add(Sphere((0.0, 0.0, -1.0), 0.5, material))
        world.add(Sphere((0.0, 0.0, -2.0), 0.5, material))

        with pytest.raises(RuntimeError, match="Maximum number of spheres"):
            world.add(Sphere((0.0, 0.0, -3.0), 0.5, material))

    def test_shared_material_registered_once(self):
        """Spheres sharing a material share one registry entry."""
        from pathtracer.geometry import Sphere
        from pathtracer.materials import Lambertian, Metal, get_material_count
        from pathtracer.scene import HittableList, get_sphere_count

        diffuse = Lambertian((0.5, 0.5, 0.5))
        mirror = Metal((0.8, 0.8, 0.8))
        world = HittableList(
            [
                Sphere((0.0, 0.0, -1.0), 0.5, diffuse),
                Sphere((1.0, 0.0, -1.0), 0.5, mirror),
                Sphere((-1.0, 0.0, -1.0), 0.5, diffuse),
            ]
        )

        ids = world.upload()
        assert get_sphere_count() == 3
        assert get_material_count() == 2
        assert ids == {diffuse: 0, mirror: 1}

    def test_material_kind_lookup(self):
        from pathtracer.materials import Dielectric, MaterialType, get_material_kind
        from pathtracer.scene.presets import create_three_spheres_scene

        world = create_three_spheres_scene()
        ids = world.upload()

        glass = Dielectric(ir=1.5)
        assert get_material_kind(ids[glass]) == MaterialType.DIELECTRIC
        assert get_material_kind(0) == MaterialType.LAMBERTIAN
        with pytest.raises(IndexError):
            get_material_kind(len(ids))

    def test_upload_replaces_previous_scene(self):
        from pathtracer.scene import get_sphere_count
        from pathtracer.scene.presets import (
            create_single_sphere_scene,
            create_three_spheres_scene,
        )

        create_three_spheres_scene().upload()
        assert get_sphere_count() == 5

        create_single_sphere_scene().upload()
        assert get_sphere_count() == 1


class TestIntersectScene:
    """Tests for nearest-hit selection."""

    def test_empty_scene_misses(self):
        hit, _, material_id = _closest((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert hit == 0
        assert material_id == -1

    @pytest.mark.parametrize("near_first", [True, False])
    def test_nearest_hit_independent_of_order(self, near_first):
        """The nearer of two spheres on the ray is reported either way."""
        from pathtracer.geometry import Sphere
        from pathtracer.materials import Lambertian
        from pathtracer.scene import HittableList

        near = Sphere((0.0, 0.0, -2.0), 0.5, Lambertian((1.0, 0.0, 0.0)))
        far = Sphere((0.0, 0.0, -5.0), 0.5, Lambertian((0.0, 1.0, 0.0)))
        world = HittableList([near, far] if near_first else [far, near])
        ids = world.upload()

        hit, t, material_id = _closest((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert hit == 1
        assert abs(t - 1.5) < 1e-5
        assert material_id == ids[near.material]

    def test_t_max_excludes_far_spheres(self):
        from pathtracer.scene.presets import create_single_sphere_scene

        create_single_sphere_scene().upload()

        hit, _, _ = _closest((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), t_max=0.25)
        assert hit == 0

    def test_ray_between_spheres_misses(self):
        from pathtracer.geometry import Sphere
        from pathtracer.materials import Lambertian
        from pathtracer.scene import HittableList

        material = Lambertian((0.5, 0.5, 0.5))
        HittableList(
            [
                Sphere((-1.0, 0.0, -1.0), 0.4, material),
                Sphere((1.0, 0.0, -1.0), 0.4, material),
            ]
        ).upload()

        hit, _, _ = _closest((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert hit == 0
