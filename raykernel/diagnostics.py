"""
Batch sampling and statistics for checking the samplers.

Draws many samples from one distribution with a single seeded source,
summarizes them against the analytic expectation, and writes them out in
the plain "x y z" text form.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, TextIO
import logging

import numpy as np

from .rng import NumpyRandomSource
from .sampling import (
    random_in_unit_sphere, random_unit_vector,
    random_on_hemisphere, random_in_unit_disk
)
from .vec3 import Vec3

logger = logging.getLogger(__name__)


class Distribution(Enum):
    """Sampling distributions provided by raykernel.sampling."""

    UNIT_SPHERE = "unit_sphere"  # Uniform inside the unit ball
    UNIT_VECTOR = "unit_vector"  # Uniform on the sphere surface
    HEMISPHERE = "hemisphere"  # Uniform on the hemisphere around a normal
    UNIT_DISK = "unit_disk"  # Uniform inside the unit disk, z = 0


# Mean of |p|^2 for each distribution
EXPECTED_LENGTH_SQUARED = {
    Distribution.UNIT_SPHERE: 3.0 / 5.0,
    Distribution.UNIT_VECTOR: 1.0,
    Distribution.HEMISPHERE: 1.0,
    Distribution.UNIT_DISK: 0.5,
}


def parse_distribution(name: str) -> Distribution:
    """Look up a Distribution by its value, e.g. "unit_disk"."""
    try:
        return Distribution(name)
    except ValueError:
        raise ValueError(f"Unknown distribution: {name}") from None


@dataclass
class SampleSettings:
    """Configuration for a batch of samples."""

    distribution: Distribution = Distribution.UNIT_SPHERE
    count: int = 1000
    seed: Optional[int] = None
    normal: Vec3 = field(default_factory=lambda: Vec3(0, 1, 0))

    def __post_init__(self):
        if isinstance(self.distribution, str):
            self.distribution = parse_distribution(self.distribution)
        if self.count <= 0:
            raise ValueError(f"Sample count must be positive, got {self.count}")
        if self.distribution == Distribution.HEMISPHERE and self.normal.near_zero():
            raise ValueError("Hemisphere sampling needs a non-zero normal")


@dataclass
class SampleStats:
    """Summary of a batch of samples."""

    count: int = 0
    mean_length_squared: float = 0.0
    expected_length_squared: float = 0.0
    max_length_squared: float = 0.0
    min_normal_dot: Optional[float] = None  # Hemisphere only

    @property
    def mean_error(self) -> float:
        """Absolute deviation of the mean |p|^2 from its expectation."""
        return abs(self.mean_length_squared - self.expected_length_squared)


def draw_samples(settings: SampleSettings) -> List[Vec3]:
    """Draw settings.count samples from settings.distribution."""
    source = NumpyRandomSource(settings.seed)
    distribution = settings.distribution
    logger.info("Drawing %d %s samples (seed=%s)",
                settings.count, distribution.value, settings.seed)

    if distribution == Distribution.UNIT_SPHERE:
        return [random_in_unit_sphere(source) for _ in range(settings.count)]
    elif distribution == Distribution.UNIT_VECTOR:
        return [random_unit_vector(source) for _ in range(settings.count)]
    elif distribution == Distribution.HEMISPHERE:
        return [random_on_hemisphere(settings.normal, source) for _ in range(settings.count)]
    elif distribution == Distribution.UNIT_DISK:
        return [random_in_unit_disk(source) for _ in range(settings.count)]
    else:
        raise ValueError(f"Unknown distribution: {distribution}")


def summarize(
    samples: List[Vec3],
    distribution: Distribution,
    normal: Optional[Vec3] = None
) -> SampleStats:
    """Compute statistics for samples drawn from distribution.

    Args:
        samples: Non-empty list of samples
        distribution: The distribution they were drawn from
        normal: Hemisphere normal, used only for HEMISPHERE

    Returns:
        SampleStats for the batch
    """
    if not samples:
        raise ValueError("Cannot summarize an empty sample list")

    points = np.array([s.to_array() for s in samples])
    lengths_sq = np.einsum('ij,ij->i', points, points)

    stats = SampleStats(
        count=len(samples),
        mean_length_squared=float(lengths_sq.mean()),
        expected_length_squared=EXPECTED_LENGTH_SQUARED[distribution],
        max_length_squared=float(lengths_sq.max()),
    )

    if distribution == Distribution.HEMISPHERE:
        if normal is None:
            normal = Vec3(0, 1, 0)
        stats.min_normal_dot = float((points @ normal.to_array()).min())

    logger.debug("Mean |p|^2 = %.6f (expected %.6f)",
                 stats.mean_length_squared, stats.expected_length_squared)
    return stats


def write_samples(samples: Iterable[Vec3], stream: TextIO) -> int:
    """Write one "x y z" line per sample. Returns the number of lines."""
    written = 0
    for sample in samples:
        stream.write(f"{sample}\n")
        written += 1
    return written
