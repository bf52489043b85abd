"""
Uniform random sources for the sampling routines.

Every randomized operation in raykernel takes its random numbers from a
RandomSource passed in by the caller. Nothing here keeps a module-level
generator, so seeding and thread ownership stay with the caller.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional, Union
import logging
import random

import numpy as np

logger = logging.getLogger(__name__)


class RandomSource(ABC):
    """Source of independent uniform doubles."""

    @abstractmethod
    def random_double(self) -> float:
        """Return a uniform double in [0, 1)."""
        pass

    @abstractmethod
    def random_double_in_range(self, min_val: float, max_val: float) -> float:
        """Return a uniform double in [min_val, max_val)."""
        pass


class NumpyRandomSource(RandomSource):
    """RandomSource backed by a numpy Generator.

    A Generator is not safe to share between threads. Give each thread its
    own source, e.g. from spawn().
    """

    def __init__(self, generator: Union[np.random.Generator, int, None] = None):
        """Create a numpy-backed source.

        Args:
            generator: An existing Generator, a seed, or None for fresh OS entropy
        """
        if isinstance(generator, np.random.Generator):
            self._generator = generator
        else:
            self._generator = np.random.default_rng(generator)

    @property
    def generator(self) -> np.random.Generator:
        return self._generator

    def random_double(self) -> float:
        return float(self._generator.random())

    def random_double_in_range(self, min_val: float, max_val: float) -> float:
        return float(self._generator.uniform(min_val, max_val))

    def spawn(self, n: int) -> List[NumpyRandomSource]:
        """Derive n statistically independent child sources."""
        return [NumpyRandomSource(child) for child in self._generator.spawn(n)]


class StdlibRandomSource(RandomSource):
    """RandomSource backed by random.Random."""

    def __init__(self, rand: Union[random.Random, int, None] = None):
        if isinstance(rand, random.Random):
            self._random = rand
        else:
            self._random = random.Random(rand)

    def random_double(self) -> float:
        return self._random.random()

    def random_double_in_range(self, min_val: float, max_val: float) -> float:
        # random.uniform may return max_val; keep the range half-open
        return min_val + (max_val - min_val) * self._random.random()


RandomLike = Union[RandomSource, np.random.Generator, random.Random, int, None]


def as_random_source(rng: RandomLike = None) -> RandomSource:
    """Turn a caller-supplied random argument into a RandomSource.

    Args:
        rng: A RandomSource, numpy Generator, random.Random, integer seed,
            or None for a fresh unseeded numpy source

    Returns:
        A RandomSource

    Raises:
        TypeError: If rng is none of the accepted kinds
    """
    if isinstance(rng, RandomSource):
        return rng
    if rng is None or isinstance(rng, np.random.Generator):
        return NumpyRandomSource(rng)
    if isinstance(rng, random.Random):
        return StdlibRandomSource(rng)
    if isinstance(rng, (int, np.integer)) and not isinstance(rng, bool):
        logger.debug("Seeding numpy random source with %d", rng)
        return NumpyRandomSource(int(rng))
    raise TypeError(f"Cannot use {type(rng).__name__} as a random source")


def spawn_sources(seed: Optional[int], n: int) -> List[NumpyRandomSource]:
    """Create n independent sources from one seed, one per worker thread."""
    logger.debug("Spawning %d random sources from seed %s", n, seed)
    return NumpyRandomSource(seed).spawn(n)
