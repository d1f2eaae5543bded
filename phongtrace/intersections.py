"""
Intersection records and the nearest-hit rule.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .shapes import Sphere


@dataclass
class Intersection:
    """A ray-object intersection.

    Attributes:
        t: The ray parameter at intersection
        object: The sphere that was hit. This is a reference, not a copy,
            so later changes to the sphere show through.
    """
    t: float
    object: Sphere


class Intersections:
    """An ordered collection of intersections.

    The collection keeps the order it was given; hit() does not depend
    on that order.
    """

    def __init__(self, intersections: Optional[Iterable[Intersection]] = None):
        self._items: List[Intersection] = list(intersections) if intersections else []

    @classmethod
    def of(cls, *intersections: Intersection) -> Intersections:
        return cls(intersections)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __getitem__(self, index: int) -> Intersection:
        return self._items[index]

    def __iter__(self) -> Iterator[Intersection]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intersections):
            return NotImplemented
        return self._items == other._items

    __hash__ = None

    def add(self, intersection: Intersection) -> None:
        self._items.append(intersection)

    def hit(self) -> Optional[Intersection]:
        """Return the intersection with the smallest positive t.

        Returns:
            The nearest intersection in front of the ray origin, or None
            if every t is zero or negative
        """
        visible = [i for i in self._items if i.t > 0]
        if not visible:
            return None
        return min(visible, key=lambda i: i.t)

    def __repr__(self) -> str:
        return f"Intersections({[i.t for i in self._items]})"
