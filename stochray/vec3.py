"""
Vector and color algebra for the ray tracer.

Vec3 is used for points and directions, Color for linear-light RGB.
Both are immutable value types backed by a small numpy array.
"""

from __future__ import annotations
import math
from typing import Union
import numpy as np


class DegenerateVectorError(ValueError):
    """Raised when a zero-length vector is normalized."""
    pass


class Vec3:
    """A 3D vector class supporting common vector operations.

    Uses numpy internally for storage while providing a small,
    Pythonic API. Every operation returns a new instance of the
    same class as the left operand.
    """

    __slots__ = ('_data',)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._data = np.array([x, y, z], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vec3:
        """Create a vector from a numpy array (no copy if already float64)."""
        v = cls.__new__(cls)
        v._data = np.asarray(arr, dtype=np.float64)
        return v

    def _new(self, arr: np.ndarray) -> Vec3:
        return self.__class__.from_array(arr)

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.x:.4f}, {self.y:.4f}, {self.z:.4f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return bool(np.allclose(self._data, other._data))

    # Unhashable: __eq__ compares with a tolerance
    __hash__ = None

    def __neg__(self) -> Vec3:
        return self._new(-self._data)

    def __add__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return self._new(self._data + other._data)
        return self._new(self._data + other)

    def __radd__(self, other: float) -> Vec3:
        return self._new(other + self._data)

    def __sub__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return self._new(self._data - other._data)
        return self._new(self._data - other)

    def __rsub__(self, other: float) -> Vec3:
        return self._new(other - self._data)

    def __mul__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return self._new(self._data * other._data)
        return self._new(self._data * other)

    def __rmul__(self, other: float) -> Vec3:
        return self._new(other * self._data)

    def __truediv__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return self._new(self._data / other._data)
        return self._new(self._data * (1.0 / other))

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def length(self) -> float:
        """Return the magnitude (length) of the vector."""
        return math.sqrt(self.length_squared())

    def length_squared(self) -> float:
        """Return the squared magnitude (avoids sqrt for comparisons)."""
        return float(np.dot(self._data, self._data))

    def normalize(self) -> Vec3:
        """Return a unit vector in the same direction.

        Raises:
            DegenerateVectorError: if the vector has zero length
        """
        length = self.length()
        if length == 0.0 or not math.isfinite(length):
            raise DegenerateVectorError(f"Cannot normalize degenerate vector {self!r}")
        return self._new(self._data / length)

    def dot(self, other: Vec3) -> float:
        """Compute dot product with another vector."""
        return float(np.dot(self._data, other._data))

    def cross(self, other: Vec3) -> Vec3:
        """Compute cross product with another vector."""
        a, b = self._data, other._data
        return self._new(np.array([
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        ]))

    def reflect(self, incident: Vec3) -> Vec3:
        """Reflect `incident` about this vector, taken as a unit normal."""
        return incident - self * (2.0 * self.dot(incident))

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()

    @classmethod
    def random_unit(cls, rng: np.random.Generator) -> Vec3:
        """Rejection-sample a point strictly inside the unit sphere.

        Points are drawn uniformly in [-1, 1]^3 and redrawn while their
        squared length is >= 1. The result is not normalized.
        """
        while True:
            p = rng.random(3) * 2.0 - 1.0
            if float(np.dot(p, p)) < 1.0:
                return cls.from_array(p)


class Color(Vec3):
    """Linear-light RGB color."""

    __slots__ = ()

    def __init__(self, r: float = 0.0, g: float = 0.0, b: float = 0.0):
        super().__init__(r, g, b)

    @classmethod
    def corrected(cls, r: float, g: float, b: float, gamma: float = 2.2) -> Color:
        """Create a color from display (gamma) space values.

        Each channel is raised to `gamma`, so authoring values can be
        given in perceptual units.

        Raises:
            ValueError: if a channel is negative
        """
        if min(r, g, b) < 0:
            raise ValueError(f"Corrected color channels must be non-negative, got ({r}, {g}, {b})")
        return cls(r ** gamma, g ** gamma, b ** gamma)

    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z


# Convenience type alias
Point3 = Vec3
