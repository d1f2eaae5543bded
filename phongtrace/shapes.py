"""
Geometric shapes for the ray tracer.

The only shape is a unit sphere centred on the object-space origin. Its
``transform`` maps object space into world space, so spheres of any
position, size and orientation are obtained by transforming the unit one.
"""

from __future__ import annotations
from typing import Optional
import math

from .vec4 import Vec4, ORIGIN
from .ray import Ray
from .matrix import Matrix
from .materials import Material
from .intersections import Intersection, Intersections


class NotAPointError(ValueError):
    """Raised when a direction is passed where a point is required."""
    pass


class Sphere:
    """A unit sphere with a transform and a material."""

    def __init__(
        self,
        transform: Optional[Matrix] = None,
        material: Optional[Material] = None,
        radius: float = 1.0
    ):
        """Create a sphere.

        Args:
            transform: Object-to-world transform (identity if None)
            material: Material for shading (default Material if None)
            radius: Nominal radius; intersection always uses the unit
                sphere and relies on ``transform`` for scaling
        """
        self.radius = radius
        self.transform = transform if transform is not None else Matrix.identity()
        self.material = material if material is not None else Material()

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, value: Matrix):
        self._transform = value
        self._inverse = value.inverse()

    @property
    def inverse_transform(self) -> Matrix:
        return self._inverse

    def set_transform(self, matrix: Matrix) -> None:
        """Compose ``matrix`` onto the current transform (right-multiplied)."""
        self.transform = self._transform * matrix

    def intersect(self, ray: Ray) -> Intersections:
        """Intersect a world-space ray with the sphere.

        The ray is moved into object space, then substituted into
        |P|^2 = 1 with P = origin + t * direction, giving the quadratic
        a*t^2 + b*t + c = 0.

        Returns:
            Two intersections in ascending t order (equal for a tangent
            ray), or an empty collection if the ray misses
        """
        local_ray = ray.transform(self._inverse)
        sphere_to_ray = local_ray.origin - ORIGIN

        a = local_ray.direction.dot(local_ray.direction)
        b = 2.0 * local_ray.direction.dot(sphere_to_ray)
        c = sphere_to_ray.dot(sphere_to_ray) - 1.0

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0:
            return Intersections()

        sqrtd = math.sqrt(discriminant)
        return Intersections.of(
            Intersection((-b - sqrtd) / (2.0 * a), self),
            Intersection((-b + sqrtd) / (2.0 * a), self),
        )

    def normal_at(self, world_point: Vec4) -> Vec4:
        """Return the unit surface normal at a world-space point.

        The object-space normal is carried back with the transpose of the
        inverse transform, which keeps it perpendicular to the surface
        under non-uniform scaling.

        Raises:
            NotAPointError: if ``world_point`` is not a point (w != 1)
        """
        if not world_point.is_point():
            raise NotAPointError(f"normal_at requires a point, got {world_point!r}")

        object_point = self._inverse * world_point
        object_normal = object_point - ORIGIN
        world_normal = self._inverse.transpose() * object_normal
        return world_normal.with_w(0.0).normalize()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sphere):
            return NotImplemented
        return (
            self.radius == other.radius
            and self.transform == other.transform
            and self.material == other.material
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"Sphere(transform={self.transform}, material={self.material})"
