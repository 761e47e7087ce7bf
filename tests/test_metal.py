"""Tests for the Metal material."""

import numpy as np
import pytest
import taichi as ti

N_SAMPLES = 2048


def _scatter_metal(direction, normal, fuzz, count=1):
    from pathtracer.core.ray import Ray
    from pathtracer.core.sampler import seed_state
    from pathtracer.core.vec3 import vec3
    from pathtracer.geometry.hittable import HitRecord
    from pathtracer.materials.metal import scatter_metal

    did_scatter = ti.field(dtype=ti.i32, shape=count)
    directions = ti.Vector.field(3, dtype=ti.f32, shape=count)

    @ti.kernel
    def test_kernel(d: vec3, n: vec3, f: ti.f32):
        for i in range(count):
            rec = HitRecord(
                hit=1, t=1.0, point=vec3(0.0, 0.0, 0.0), normal=n, front_face=1, material_id=0
            )
            ray_in = Ray(origin=vec3(0.0, 0.0, 0.0) - d, direction=d)
            result, _ = scatter_metal(vec3(0.9, 0.9, 0.9), f, ray_in, rec, seed_state(ti.u32(9), i))
            did_scatter[i] = result.did_scatter
            directions[i] = result.scattered.direction

    test_kernel(vec3(*direction), vec3(*normal), fuzz)
    return did_scatter.to_numpy(), directions.to_numpy()


class TestMetalDescription:
    """Tests for the host-side Metal dataclass."""

    @pytest.mark.parametrize(
        "fuzz, expected",
        [(-0.5, 0.0), (0.0, 0.0), (0.3, 0.3), (1.0, 1.0), (2.5, 1.0)],
    )
    def test_fuzz_clamped(self, fuzz, expected):
        from pathtracer.materials import Metal

        assert Metal((0.8, 0.8, 0.8), fuzz=fuzz).fuzz == expected

    def test_device_params(self):
        from pathtracer.materials import MaterialType, Metal

        material = Metal((0.8, 0.6, 0.2), fuzz=0.25)
        assert material.kind == MaterialType.METAL
        assert material.device_params() == ((0.8, 0.6, 0.2), 0.25, 1.0)


class TestMetalScatter:
    """Tests for scatter_metal."""

    def test_perfect_mirror(self):
        """With fuzz 0 the reflection is exact: (1,-1,0) -> (1,1,0)/sqrt2."""
        did_scatter, directions = _scatter_metal((1.0, -1.0, 0.0), (0.0, 1.0, 0.0), 0.0)

        assert did_scatter[0] == 1
        expected = np.array([1.0, 1.0, 0.0]) / np.sqrt(2.0)
        np.testing.assert_allclose(directions[0], expected, atol=1e-5)

    def test_fuzzy_reflection_stays_near_mirror_direction(self):
        """Fuzzed directions lie within fuzz of the mirror direction."""
        did_scatter, directions = _scatter_metal(
            (0.0, -1.0, 0.0), (0.0, 1.0, 0.0), 0.3, count=N_SAMPLES
        )

        assert np.all(did_scatter == 1)
        offsets = directions - np.array([0.0, 1.0, 0.0])
        assert np.all(np.linalg.norm(offsets, axis=1) < 0.3 + 1e-5)

    def test_grazing_fuzzy_reflection_sometimes_absorbed(self):
        """Perturbations pushing below the surface are absorbed."""
        did_scatter, directions = _scatter_metal(
            (1.0, -0.05, 0.0), (0.0, 1.0, 0.0), 1.0, count=N_SAMPLES
        )

        assert 0 < did_scatter.sum() < N_SAMPLES
        # Every surviving ray leaves above the surface
        assert np.all(directions[did_scatter == 1][:, 1] > 0.0)
