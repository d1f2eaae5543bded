"""
Vec4 class for homogeneous 3D math.

This is the fundamental building block of the kernel, used for:
- Points in 3D space (w = 1)
- Direction vectors (w = 0)

The w component takes part in every operation, including length() and
dot(). For true vectors w is 0, so it never changes their results.
"""

from __future__ import annotations
from typing import Iterator, Union
import numpy as np


EPSILON = 1e-5


class Vec4:
    """A 4-component homogeneous tuple.

    Uses numpy internally for efficient computation while providing
    a clean, Pythonic API. Equality is approximate within EPSILON.
    """

    __slots__ = ('_data',)

    # numpy scalars on the left defer to __rmul__
    __array_ufunc__ = None

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 0.0):
        self._data = np.array([x, y, z, w], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vec4:
        """Create Vec4 from numpy array."""
        v = cls.__new__(cls)
        v._data = np.asarray(arr, dtype=np.float64)
        return v

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    @property
    def w(self) -> float:
        return float(self._data[3])

    def is_point(self) -> bool:
        return self.w == 1.0

    def is_vector(self) -> bool:
        return self.w == 0.0

    def __repr__(self) -> str:
        return f"Vec4({self.x:.5f}, {self.y:.5f}, {self.z:.5f}, {self.w:.1f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec4):
            return NotImplemented
        return bool(np.all(np.abs(self._data - other._data) < EPSILON))

    __hash__ = None

    def __neg__(self) -> Vec4:
        return Vec4.from_array(-self._data)

    def __add__(self, other: Vec4) -> Vec4:
        if isinstance(other, Vec4):
            return Vec4.from_array(self._data + other._data)
        return NotImplemented

    def __sub__(self, other: Vec4) -> Vec4:
        if isinstance(other, Vec4):
            return Vec4.from_array(self._data - other._data)
        return NotImplemented

    def __mul__(self, other: Union[Vec4, float]) -> Vec4:
        if isinstance(other, Vec4):
            return Vec4.from_array(self._data * other._data)
        return Vec4.from_array(self._data * other)

    def __rmul__(self, other: float) -> Vec4:
        return Vec4.from_array(other * self._data)

    def __truediv__(self, other: float) -> Vec4:
        return Vec4.from_array(self._data / other)

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def __iter__(self) -> Iterator[float]:
        return (float(c) for c in self._data)

    def __len__(self) -> int:
        return 4

    def length(self) -> float:
        """Return the Euclidean norm over all four components."""
        return float(np.sqrt(np.dot(self._data, self._data)))

    def normalize(self) -> Vec4:
        """Return the tuple scaled to unit length.

        Raises:
            ZeroDivisionError: if the tuple has zero length
        """
        length = self.length()
        if length == 0:
            raise ZeroDivisionError(f"cannot normalize zero-length {self!r}")
        return Vec4.from_array(self._data / length)

    def dot(self, other: Vec4) -> float:
        """Compute dot product with another tuple (w included)."""
        return float(np.dot(self._data, other._data))

    def cross(self, other: Vec4) -> Vec4:
        """Compute the 3D cross product, ignoring w. Always a vector."""
        x, y, z = np.cross(self._data[:3], other._data[:3])
        return vector(x, y, z)

    def reflect(self, normal: Vec4) -> Vec4:
        """Reflect this vector around the given normal."""
        return self - normal * 2 * self.dot(normal)

    def with_w(self, w: float) -> Vec4:
        """Return a copy with the w component replaced."""
        data = self._data.copy()
        data[3] = w
        return Vec4.from_array(data)

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()


def point(x: float, y: float, z: float) -> Vec4:
    """Create a point (w = 1)."""
    return Vec4(x, y, z, 1.0)


def vector(x: float, y: float, z: float) -> Vec4:
    """Create a direction vector (w = 0)."""
    return Vec4(x, y, z, 0.0)


ORIGIN = point(0, 0, 0)
