"""
Square matrices and affine transforms.

Implements:
- N x N matrices of any size (2, 3 and 4 are used in practice)
- Recursive Laplace determinant, minors and cofactors
- Inversion by the adjugate (cofactor) method
- Translation, scaling, rotation and shearing builders for 4x4 matrices

Transform builders compose by right-multiplication, so a fluent chain
such as ``Matrix.identity().rotate_x(a).scale(2, 2, 2).translate(1, 0, 0)``
equals ``Rx * S * T``: applied to a point it translates first, then
scales, then rotates.
"""

from __future__ import annotations
import math
from typing import Sequence, Union, overload
import numpy as np

from .vec4 import EPSILON, Vec4


class SingularMatrixError(ValueError):
    """Raised when inverting a matrix whose determinant is zero."""
    pass


class Matrix:
    """An immutable N x N matrix of floats."""

    __slots__ = ('_data',)

    def __init__(self, rows: Sequence[Sequence[float]]):
        """Create a matrix from a nested sequence of rows.

        Args:
            rows: N rows of N numbers each

        Raises:
            ValueError: if the rows do not form a non-empty square grid
        """
        data = np.array(rows, dtype=np.float64)
        if data.ndim != 2 or data.shape[0] != data.shape[1] or data.shape[0] == 0:
            raise ValueError(f"Matrix must be square and non-empty, got shape {data.shape}")
        self._data = data

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Matrix:
        """Create Matrix from a square numpy array without copying."""
        m = cls.__new__(cls)
        m._data = np.asarray(arr, dtype=np.float64)
        return m

    @classmethod
    def identity(cls, size: int = 4) -> Matrix:
        return cls.from_array(np.identity(size, dtype=np.float64))

    @property
    def size(self) -> int:
        return self._data.shape[0]

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return float(self._data[row, col])

    def __repr__(self) -> str:
        rows = ", ".join(
            "[" + ", ".join(f"{v:.5f}" for v in row) + "]" for row in self._data
        )
        return f"Matrix([{rows}])"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.size != other.size:
            return False
        return bool(np.all(np.abs(self._data - other._data) < EPSILON))

    __hash__ = None

    @overload
    def __mul__(self, other: Matrix) -> Matrix: ...

    @overload
    def __mul__(self, other: Vec4) -> Vec4: ...

    def __mul__(self, other: Union[Matrix, Vec4]):
        if isinstance(other, Matrix):
            if other.size != self.size:
                raise ValueError(
                    f"Cannot multiply {self.size}x{self.size} by {other.size}x{other.size}"
                )
            return Matrix.from_array(self._data @ other._data)
        if isinstance(other, Vec4):
            if self.size != 4:
                raise ValueError(f"Cannot multiply {self.size}x{self.size} matrix by a Vec4")
            return Vec4.from_array(self._data @ other.to_array())
        return NotImplemented

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()

    def transpose(self) -> Matrix:
        return Matrix.from_array(self._data.T.copy())

    def submatrix(self, row: int, col: int) -> Matrix:
        """Return the (N-1) x (N-1) matrix with one row and column removed."""
        if self.size < 2:
            raise ValueError("Cannot take a submatrix of a 1x1 matrix")
        reduced = np.delete(np.delete(self._data, row, axis=0), col, axis=1)
        return Matrix.from_array(reduced)

    def determinant(self) -> float:
        """Determinant by Laplace expansion along the first row."""
        if self.size == 1:
            return float(self._data[0, 0])
        return sum(
            float(self._data[0, col]) * self.cofactor(0, col)
            for col in range(self.size)
        )

    def minor(self, row: int, col: int) -> float:
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        minor = self.minor(row, col)
        return -minor if (row + col) % 2 else minor

    def invertible(self) -> bool:
        return self.determinant() != 0

    def inverse(self) -> Matrix:
        """Invert via the adjugate: cofactor matrix transposed over the determinant.

        Raises:
            SingularMatrixError: if the determinant is zero
        """
        det = self.determinant()
        if det == 0:
            raise SingularMatrixError(f"Matrix is not invertible: {self!r}")

        n = self.size
        result = np.empty((n, n), dtype=np.float64)
        for row in range(n):
            for col in range(n):
                # Writing to [col, row] performs the transpose
                result[col, row] = self.cofactor(row, col) / det
        return Matrix.from_array(result)

    # Fluent transform builders (4x4 only)

    def translate(self, x: float, y: float, z: float) -> Matrix:
        return self * translation(x, y, z)

    def scale(self, x: float, y: float, z: float) -> Matrix:
        return self * scaling(x, y, z)

    def rotate_x(self, radians: float) -> Matrix:
        return self * rotation_x(radians)

    def rotate_y(self, radians: float) -> Matrix:
        return self * rotation_y(radians)

    def rotate_z(self, radians: float) -> Matrix:
        return self * rotation_z(radians)

    def shear(self, xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
        return self * shearing(xy, xz, yx, yz, zx, zy)


def translation(x: float, y: float, z: float) -> Matrix:
    return Matrix([
        [1, 0, 0, x],
        [0, 1, 0, y],
        [0, 0, 1, z],
        [0, 0, 0, 1],
    ])


def scaling(x: float, y: float, z: float) -> Matrix:
    return Matrix([
        [x, 0, 0, 0],
        [0, y, 0, 0],
        [0, 0, z, 0],
        [0, 0, 0, 1],
    ])


def rotation_x(radians: float) -> Matrix:
    """Rotation about the x axis by the given angle in radians."""
    c, s = math.cos(radians), math.sin(radians)
    return Matrix([
        [1, 0, 0, 0],
        [0, c, -s, 0],
        [0, s, c, 0],
        [0, 0, 0, 1],
    ])


def rotation_y(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix([
        [c, 0, s, 0],
        [0, 1, 0, 0],
        [-s, 0, c, 0],
        [0, 0, 0, 1],
    ])


def rotation_z(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix([
        [c, -s, 0, 0],
        [s, c, 0, 0],
        [0, 0, 1, 0],
        [0, 0, 0, 1],
    ])


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
    """Shear matrix; ``xy`` moves x in proportion to y, and so on."""
    return Matrix([
        [1, xy, xz, 0],
        [yx, 1, yz, 0],
        [zx, zy, 1, 0],
        [0, 0, 0, 1],
    ])
