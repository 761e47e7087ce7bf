"""Unit tests for the seedable random source.

Tests cover:
- Determinism for a fixed (seed, stream)
- Independence of different streams and seeds
- Ranges of uniform draws and sphere samples
"""

import numpy as np
import taichi as ti

N_DRAWS = 4096


def _draw_sequence(seed: int, stream: int, count: int = 16) -> np.ndarray:
    from pathtracer.core.sampler import random_f32, seed_state

    values = ti.field(dtype=ti.f32, shape=count)

    @ti.kernel
    def draw(seed: ti.u32, stream: ti.i32):
        # Outermost loop is the parallel one; the inner loop runs in order
        for _ in range(1):
            state = seed_state(seed, stream)
            for i in range(count):
                u, state = random_f32(state)
                values[i] = u

    draw(seed, stream)
    return values.to_numpy()


class TestDeterminism:
    """Tests for reproducibility of the generator."""

    def test_same_seed_same_sequence(self):
        """Equal (seed, stream) pairs replay the same draws."""
        first = _draw_sequence(7, 3)
        second = _draw_sequence(7, 3)
        np.testing.assert_array_equal(first, second)

    def test_different_streams_differ(self):
        """Neighboring pixels get unrelated sequences."""
        first = _draw_sequence(7, 3)
        second = _draw_sequence(7, 4)
        assert not np.array_equal(first, second)

    def test_different_seeds_differ(self):
        """Changing the seed changes the sequence."""
        first = _draw_sequence(0, 0)
        second = _draw_sequence(1, 0)
        assert not np.array_equal(first, second)

    def test_seed_state_never_zero(self):
        """xorshift must never be seeded with its fixed point."""
        from pathtracer.core.sampler import seed_state

        states = ti.field(dtype=ti.u32, shape=N_DRAWS)

        @ti.kernel
        def test_kernel():
            for i in range(N_DRAWS):
                states[i] = seed_state(ti.u32(0), i)

        test_kernel()
        assert np.all(states.to_numpy() != 0)


class TestDistributions:
    """Tests for the ranges and rough statistics of samples."""

    def test_random_f32_in_unit_interval(self):
        """Uniform draws lie in [0, 1) with mean near 0.5."""
        values = _draw_sequence(42, 0, count=N_DRAWS)
        assert values.min() >= 0.0
        assert values.max() < 1.0
        assert abs(values.mean() - 0.5) < 0.05

    def test_random_range_bounds(self):
        """random_range(lo, hi) lies in [lo, hi)."""
        from pathtracer.core.sampler import random_range, seed_state

        values = ti.field(dtype=ti.f32, shape=N_DRAWS)

        @ti.kernel
        def test_kernel():
            for i in range(N_DRAWS):
                state = seed_state(ti.u32(5), i)
                v, state = random_range(state, -2.0, 3.0)
                values[i] = v

        test_kernel()
        arr = values.to_numpy()
        assert arr.min() >= -2.0
        assert arr.max() < 3.0

    def test_random_in_unit_sphere(self):
        """Rejection samples lie strictly inside the unit sphere."""
        from pathtracer.core.sampler import random_in_unit_sphere, seed_state

        points = ti.Vector.field(3, dtype=ti.f32, shape=N_DRAWS)

        @ti.kernel
        def test_kernel():
            for i in range(N_DRAWS):
                state = seed_state(ti.u32(11), i)
                p, state = random_in_unit_sphere(state)
                points[i] = p

        test_kernel()
        arr = points.to_numpy()
        lengths_sq = np.sum(arr * arr, axis=1)
        assert np.all(lengths_sq < 1.0)
        # Centered on the origin
        assert np.all(np.abs(arr.mean(axis=0)) < 0.05)

    def test_random_unit_vector_has_unit_length(self):
        """Unit vectors have length 1 and cover both hemispheres."""
        from pathtracer.core.sampler import random_unit_vector, seed_state

        points = ti.Vector.field(3, dtype=ti.f32, shape=N_DRAWS)

        @ti.kernel
        def test_kernel():
            for i in range(N_DRAWS):
                state = seed_state(ti.u32(13), i)
                p, state = random_unit_vector(state)
                points[i] = p

        test_kernel()
        arr = points.to_numpy()
        lengths = np.linalg.norm(arr, axis=1)
        np.testing.assert_allclose(lengths, 1.0, atol=1e-4)
        assert (arr[:, 1] > 0.0).any()
        assert (arr[:, 1] < 0.0).any()
