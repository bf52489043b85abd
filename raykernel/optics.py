"""
Dielectric interface helpers.

refract() assumes refraction is physically possible. These helpers perform
the angle check and Fresnel weighting a glass-like material does before
calling it.
"""

from __future__ import annotations
import math

from .rng import RandomLike, as_random_source
from .vec3 import Vec3


def reflectance(cosine: float, ref_idx: float) -> float:
    """Schlick's approximation for reflectance."""
    r0 = (1 - ref_idx) / (1 + ref_idx)
    r0 = r0 * r0
    return r0 + (1 - r0) * pow(1 - cosine, 5)


def cannot_refract(unit_direction: Vec3, normal: Vec3, eta_ratio: float) -> bool:
    """True when Snell's law has no solution (total internal reflection)."""
    cos_theta = min((-unit_direction).dot(normal), 1.0)
    sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
    return eta_ratio * sin_theta > 1.0


def scatter_dielectric(
    unit_direction: Vec3,
    normal: Vec3,
    eta_ratio: float,
    rng: RandomLike = None
) -> Vec3:
    """Pick the reflected or refracted direction at a dielectric boundary.

    Args:
        unit_direction: Normalized incident direction
        normal: Unit normal facing the incident side
        eta_ratio: Ratio of refractive indices (incident / transmitted)
        rng: Random source for the Fresnel choice

    Returns:
        The reflected direction under total internal reflection or with
        probability equal to the Schlick reflectance, otherwise the
        refracted direction.
    """
    source = as_random_source(rng)
    cos_theta = min((-unit_direction).dot(normal), 1.0)

    if (cannot_refract(unit_direction, normal, eta_ratio)
            or reflectance(cos_theta, eta_ratio) > source.random_double()):
        return unit_direction.reflect(normal)
    return unit_direction.refract(normal, eta_ratio)
