"""
RGB color values.

Channels are linear floats and are not clamped; values outside [0, 1]
are only limited when a canvas is serialized.
"""

from __future__ import annotations
from typing import Iterator, Union
import numpy as np

from .vec4 import EPSILON


class Color:
    """An RGB triple with component-wise arithmetic."""

    __slots__ = ('_data',)

    # numpy scalars on the left defer to __rmul__
    __array_ufunc__ = None

    def __init__(self, r: float = 0.0, g: float = 0.0, b: float = 0.0):
        self._data = np.array([r, g, b], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Color:
        """Create Color from numpy array."""
        c = cls.__new__(cls)
        c._data = np.asarray(arr, dtype=np.float64)
        return c

    @property
    def r(self) -> float:
        return float(self._data[0])

    @property
    def g(self) -> float:
        return float(self._data[1])

    @property
    def b(self) -> float:
        return float(self._data[2])

    def __repr__(self) -> str:
        return f"Color({self.r:.5f}, {self.g:.5f}, {self.b:.5f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return bool(np.all(np.abs(self._data - other._data) < EPSILON))

    __hash__ = None

    def __add__(self, other: Color) -> Color:
        if isinstance(other, Color):
            return Color.from_array(self._data + other._data)
        return NotImplemented

    def __sub__(self, other: Color) -> Color:
        if isinstance(other, Color):
            return Color.from_array(self._data - other._data)
        return NotImplemented

    def __mul__(self, other: Union[Color, float]) -> Color:
        # Color * Color is the Hadamard product
        if isinstance(other, Color):
            return Color.from_array(self._data * other._data)
        return Color.from_array(self._data * other)

    def __rmul__(self, other: float) -> Color:
        return Color.from_array(other * self._data)

    def __iter__(self) -> Iterator[float]:
        return (float(c) for c in self._data)

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
