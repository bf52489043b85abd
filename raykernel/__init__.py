"""
raykernel - Vector math and sampling for Python ray tracers

The numeric core a path tracer calls on every bounce:
- Vec3 value type for points, directions and RGB colors
- Dot/cross products, reflection and refraction
- Rejection sampling of spheres, disks and hemispheres
- Injectable random sources (numpy or stdlib)
"""

__version__ = "0.1.0"
__author__ = "raykernel Team"

from .vec3 import (
    Vec3, Point3, Color, NEAR_ZERO_EPSILON,
    dot_product, cross_product, reflect, refract
)
from .rng import (
    RandomSource, NumpyRandomSource, StdlibRandomSource,
    as_random_source, spawn_sources
)
from .sampling import (
    random_in_unit_sphere, random_unit_vector,
    random_on_hemisphere, random_in_unit_disk
)
from .optics import reflectance, cannot_refract, scatter_dielectric
from .diagnostics import (
    Distribution, SampleSettings, SampleStats,
    draw_samples, summarize, write_samples, parse_distribution
)
