"""
Vector3 class for 3D math operations.

This is the fundamental building block of the ray tracing kernel, used for:
- Points in 3D space
- Direction vectors
- RGB color values

Binary operators return new vectors. The in-place operators (+=, *=, /=)
mutate the left-hand vector only; use copy() when an independent value is
needed. Division by zero follows IEEE-754 (inf/NaN) and never raises.
"""

from __future__ import annotations
import math
from typing import Union
import numpy as np

from .rng import RandomLike, as_random_source

NEAR_ZERO_EPSILON = 1e-8

Scalar = Union[int, float, np.floating, np.integer]


def _reciprocal(value: Scalar) -> np.float64:
    with np.errstate(divide='ignore'):
        return np.float64(1.0) / np.float64(value)


class Vec3:
    """A 3D vector of float64 components.

    Uses numpy internally for the component-wise arithmetic while providing
    a clean, Pythonic API.
    """

    __slots__ = ('_data',)

    # numpy scalars on the left of an operator defer to our reflected methods
    __array_ufunc__ = None

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._data = np.array([x, y, z], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vec3:
        """Create Vec3 from a length-3 array (the data is copied)."""
        return cls._wrap(np.array(arr, dtype=np.float64))

    @classmethod
    def _wrap(cls, data: np.ndarray) -> Vec3:
        v = cls.__new__(cls)
        v._data = data
        return v

    @staticmethod
    def random(rng: RandomLike = None) -> Vec3:
        """Random vector with each component uniform on [0, 1)."""
        source = as_random_source(rng)
        return Vec3(
            source.random_double(),
            source.random_double(),
            source.random_double()
        )

    @staticmethod
    def random_in_range(min_val: float, max_val: float, rng: RandomLike = None) -> Vec3:
        """Random vector with each component uniform on [min_val, max_val)."""
        source = as_random_source(rng)
        return Vec3(
            source.random_double_in_range(min_val, max_val),
            source.random_double_in_range(min_val, max_val),
            source.random_double_in_range(min_val, max_val)
        )

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    @x.setter
    def x(self, value: float):
        self._data[0] = value

    @y.setter
    def y(self, value: float):
        self._data[1] = value

    @z.setter
    def z(self, value: float):
        self._data[2] = value

    # Aliases for color operations
    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z

    def __repr__(self) -> str:
        return f"Vec3({self.x:.4f}, {self.y:.4f}, {self.z:.4f})"

    def __str__(self) -> str:
        return f"{self.x} {self.y} {self.z}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return bool(np.allclose(self._data, other._data))

    # Mutable, so not hashable
    __hash__ = None

    def __copy__(self) -> Vec3:
        return self.copy()

    def copy(self) -> Vec3:
        """Return an independent vector with the same components."""
        return Vec3._wrap(self._data.copy())

    def __neg__(self) -> Vec3:
        return Vec3._wrap(-self._data)

    def __add__(self, other: Union[Vec3, Scalar]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3._wrap(self._data + other._data)
        return Vec3._wrap(self._data + np.float64(other))

    def __radd__(self, other: Scalar) -> Vec3:
        return Vec3._wrap(np.float64(other) + self._data)

    def __sub__(self, other: Union[Vec3, Scalar]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3._wrap(self._data - other._data)
        return Vec3._wrap(self._data - np.float64(other))

    def __rsub__(self, other: Scalar) -> Vec3:
        return Vec3._wrap(np.float64(other) - self._data)

    def __mul__(self, other: Union[Vec3, Scalar]) -> Vec3:
        with np.errstate(invalid='ignore', over='ignore'):
            if isinstance(other, Vec3):
                return Vec3._wrap(self._data * other._data)
            return Vec3._wrap(self._data * np.float64(other))

    def __rmul__(self, other: Scalar) -> Vec3:
        with np.errstate(invalid='ignore', over='ignore'):
            return Vec3._wrap(np.float64(other) * self._data)

    def __truediv__(self, other: Union[Vec3, Scalar]) -> Vec3:
        if isinstance(other, Vec3):
            with np.errstate(divide='ignore', invalid='ignore'):
                return Vec3._wrap(self._data / other._data)
        # Multiply by the reciprocal rather than dividing each component
        return self * _reciprocal(other)

    def __iadd__(self, other: Vec3) -> Vec3:
        self._data += other._data
        return self

    def __imul__(self, other: Union[Vec3, Scalar]) -> Vec3:
        with np.errstate(invalid='ignore', over='ignore'):
            if isinstance(other, Vec3):
                self._data *= other._data
            else:
                self._data *= np.float64(other)
        return self

    def __itruediv__(self, other: Scalar) -> Vec3:
        self *= _reciprocal(other)
        return self

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def __setitem__(self, index: int, value: float):
        self._data[index] = value

    def length(self) -> float:
        """Return the magnitude (length) of the vector."""
        return math.sqrt(self.length_squared())

    def length_squared(self) -> float:
        """Return the squared magnitude (avoids sqrt for comparisons)."""
        return float(np.dot(self._data, self._data))

    def unit(self) -> Vec3:
        """Return this vector divided by its length.

        The vector must have non-zero length. A zero vector gives NaN
        components; check near_zero() first when that can happen.
        """
        return self / self.length()

    def near_zero(self, epsilon: float = NEAR_ZERO_EPSILON) -> bool:
        """Check if vector is close to zero in all dimensions."""
        return bool(np.all(np.abs(self._data) < epsilon))

    def dot(self, other: Vec3) -> float:
        """Compute dot product with another vector."""
        return float(np.dot(self._data, other._data))

    def cross(self, other: Vec3) -> Vec3:
        """Compute the right-handed cross product with another vector."""
        a, b = self._data, other._data
        return Vec3(
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0]
        )

    def reflect(self, normal: Vec3) -> Vec3:
        """Reflect this vector around the given unit normal."""
        return self - 2.0 * self.dot(normal) * normal

    def refract(self, normal: Vec3, eta_ratio: float) -> Vec3:
        """Refract this unit vector through a surface with the given normal.

        Args:
            normal: Unit surface normal on the incident side
            eta_ratio: Ratio of refractive indices (incident / transmitted)

        Returns:
            Refracted direction. Total internal reflection is not detected:
            the parallel term uses the absolute value of its radicand, so
            callers must rule out TIR beforehand (see optics.cannot_refract).
        """
        cos_theta = min((-self).dot(normal), 1.0)
        r_out_perp = eta_ratio * (self + cos_theta * normal)
        r_out_parallel = -math.sqrt(abs(1.0 - r_out_perp.length_squared())) * normal
        return r_out_perp + r_out_parallel

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()

    def clamp(self, min_val: float = 0.0, max_val: float = 1.0) -> Vec3:
        """Clamp all components to the given range."""
        return Vec3._wrap(np.clip(self._data, min_val, max_val))

    def gamma_correct(self, gamma: float = 2.2) -> Vec3:
        """Apply gamma correction (for converting linear to sRGB)."""
        positive = np.maximum(self._data, 0.0)
        return Vec3._wrap(np.power(positive, 1.0 / gamma))


def dot_product(a: Vec3, b: Vec3) -> float:
    """Inner product of two vectors."""
    return a.dot(b)


def cross_product(a: Vec3, b: Vec3) -> Vec3:
    """Right-handed cross product of two vectors."""
    return a.cross(b)


def reflect(v: Vec3, n: Vec3) -> Vec3:
    """Mirror v about the unit normal n (n is not normalized here)."""
    return v.reflect(n)


def refract(uv: Vec3, n: Vec3, eta_ratio: float) -> Vec3:
    """Refracted direction of unit vector uv through unit normal n."""
    return uv.refract(n, eta_ratio)


# Convenience type aliases
Point3 = Vec3
Color = Vec3
