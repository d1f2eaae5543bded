"""
Light sources.

Only a point light is provided: it emits equally in all directions from a
single position and its intensity does not fall off with distance.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .vec4 import Vec4, point
from .color import Color


@dataclass
class PointLight:
    """A point light source.

    Attributes:
        position: Position of the light (a point)
        intensity: Color and brightness of the light
    """
    position: Vec4 = field(default_factory=lambda: point(0, 0, 0))
    intensity: Color = field(default_factory=lambda: Color(1, 1, 1))
