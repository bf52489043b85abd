"""Tests for the random sampling routines."""

import threading

import pytest
import numpy as np

from raykernel.vec3 import Vec3, dot_product
from raykernel.rng import RandomSource, NumpyRandomSource, spawn_sources
from raykernel.sampling import (
    random_in_unit_sphere, random_unit_vector,
    random_on_hemisphere, random_in_unit_disk
)


class ScriptedSource(RandomSource):
    """Replays fixed values in [0, 1) and counts draws."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random_double(self):
        value = self.values[self.calls]
        self.calls += 1
        return value

    def random_double_in_range(self, min_val, max_val):
        return min_val + (max_val - min_val) * self.random_double()


class TestRandomInUnitSphere:
    """Test unit ball rejection sampling."""

    def test_inside_sphere(self):
        source = NumpyRandomSource(1)
        for _ in range(1000):
            assert random_in_unit_sphere(source).length_squared() < 1.0

    def test_mean_length_squared(self):
        # E[|p|^2] = 3/5 for a uniform ball
        source = NumpyRandomSource(2)
        samples = [random_in_unit_sphere(source).length_squared() for _ in range(20000)]
        assert abs(np.mean(samples) - 0.6) < 0.01

    def test_rejects_corner_points(self):
        # First triple maps to (0.9, 0.9, 0.9), rejected; second to (0, 0.5, -0.5)
        source = ScriptedSource([0.95, 0.95, 0.95, 0.5, 0.75, 0.25])
        p = random_in_unit_sphere(source)
        assert p == Vec3(0.0, 0.5, -0.5)
        assert source.calls == 6

    def test_boundary_is_rejected(self):
        # (0, 0, -1) has length_squared == 1 and must be rejected
        source = ScriptedSource([0.5, 0.5, 0.0, 0.5, 0.5, 0.5])
        p = random_in_unit_sphere(source)
        assert p == Vec3(0, 0, 0)
        assert source.calls == 6

    def test_seeded_reproducible(self):
        assert random_in_unit_sphere(7) == random_in_unit_sphere(7)


class TestRandomUnitVector:
    """Test uniform sphere-surface sampling."""

    def test_unit_length(self):
        source = NumpyRandomSource(3)
        for _ in range(500):
            assert abs(random_unit_vector(source).length() - 1.0) < 1e-10

    def test_mean_is_near_origin(self):
        source = NumpyRandomSource(4)
        total = Vec3()
        for _ in range(20000):
            total += random_unit_vector(source)
        assert (total / 20000).length() < 0.03

    def test_normalizes_sphere_sample(self):
        source = ScriptedSource([0.75, 0.5, 0.5])
        assert random_unit_vector(source) == Vec3(1, 0, 0)


class TestRandomOnHemisphere:
    """Test hemisphere sampling."""

    @pytest.mark.parametrize("normal", [
        Vec3(0, 1, 0), Vec3(0, 0, -1), Vec3(1, 1, 1).unit(),
    ])
    def test_same_side_as_normal(self, normal):
        source = NumpyRandomSource(5)
        for _ in range(1000):
            v = random_on_hemisphere(normal, source)
            assert dot_product(v, normal) >= 0
            assert abs(v.length() - 1.0) < 1e-10

    def test_flips_opposite_sample(self):
        # Sphere sample (0, -0.5, 0) normalizes to (0, -1, 0) and gets flipped
        source = ScriptedSource([0.5, 0.25, 0.5])
        assert random_on_hemisphere(Vec3(0, 1, 0), source) == Vec3(0, 1, 0)

    def test_keeps_aligned_sample(self):
        source = ScriptedSource([0.5, 0.75, 0.5])
        assert random_on_hemisphere(Vec3(0, 1, 0), source) == Vec3(0, 1, 0)


class TestRandomInUnitDisk:
    """Test unit disk rejection sampling."""

    def test_inside_disk(self):
        source = NumpyRandomSource(6)
        for _ in range(1000):
            p = random_in_unit_disk(source)
            assert p.z == 0
            assert p.length_squared() < 1.0

    def test_two_draws_per_attempt(self):
        # First pair maps to (0.9, -0.9), rejected
        source = ScriptedSource([0.95, 0.05, 0.75, 0.5])
        p = random_in_unit_disk(source)
        assert p == Vec3(0.5, 0.0, 0.0)
        assert source.calls == 4

    def test_mean_length_squared(self):
        source = NumpyRandomSource(8)
        samples = [random_in_unit_disk(source).length_squared() for _ in range(20000)]
        assert abs(np.mean(samples) - 0.5) < 0.01


class TestThreadedSampling:
    """Independent sources per thread."""

    def test_spawned_sources_in_threads(self):
        sources = spawn_sources(123, 4)
        results = [None] * 4

        def work(index):
            results[index] = [random_in_unit_sphere(sources[index]) for _ in range(200)]

        threads = [threading.Thread(target=work, args=(i,)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        for samples in results:
            assert len(samples) == 200
            assert all(p.length_squared() < 1.0 for p in samples)
        assert results[0][0] != results[1][0]
