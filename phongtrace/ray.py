"""
Ray class for representing rays in 3D space.

A ray is defined by an origin point and a direction vector.
Ray(t) = origin + t * direction
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .vec4 import Vec4

if TYPE_CHECKING:
    from .matrix import Matrix


class Ray:
    """A ray with origin and direction.

    The parametric form is: P(t) = origin + t * direction
    """

    __slots__ = ('origin', 'direction')

    def __init__(self, origin: Vec4, direction: Vec4):
        """Create a ray with given origin and direction.

        Args:
            origin: The starting point of the ray (w = 1)
            direction: The direction vector (w = 0), not necessarily normalized
        """
        self.origin = origin
        self.direction = direction

    def position(self, t: float) -> Vec4:
        """Get the point along the ray at parameter t."""
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix) -> Ray:
        """Return a new ray with origin and direction mapped by ``matrix``.

        The direction has w = 0, so translation leaves it unchanged.
        """
        return Ray(matrix * self.origin, matrix * self.direction)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ray):
            return NotImplemented
        return self.origin == other.origin and self.direction == other.direction

    __hash__ = None

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction})"
