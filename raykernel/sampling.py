"""
Random direction and point sampling for path tracing.

The rejection loops have no iteration cap. With a working uniform source the
expected number of draws is about 1.9 for the sphere and 1.3 for the disk;
callers that need bounded latency must impose their own limit.
"""

from __future__ import annotations

from .rng import RandomLike, as_random_source
from .vec3 import Vec3


def random_in_unit_sphere(rng: RandomLike = None) -> Vec3:
    """Generate a random point strictly inside the unit sphere."""
    source = as_random_source(rng)
    while True:
        p = Vec3.random_in_range(-1.0, 1.0, source)
        if p.length_squared() < 1.0:
            return p


def random_unit_vector(rng: RandomLike = None) -> Vec3:
    """Generate a random unit vector (uniform on sphere surface)."""
    return random_in_unit_sphere(rng).unit()


def random_on_hemisphere(normal: Vec3, rng: RandomLike = None) -> Vec3:
    """Generate a random unit vector in the hemisphere around normal."""
    on_unit_sphere = random_unit_vector(rng)
    if on_unit_sphere.dot(normal) > 0.0:
        return on_unit_sphere
    return -on_unit_sphere


def random_in_unit_disk(rng: RandomLike = None) -> Vec3:
    """Generate a random point inside the unit disk (z=0)."""
    source = as_random_source(rng)
    while True:
        p = Vec3(
            source.random_double_in_range(-1.0, 1.0),
            source.random_double_in_range(-1.0, 1.0),
            0.0
        )
        if p.length_squared() < 1.0:
            return p
