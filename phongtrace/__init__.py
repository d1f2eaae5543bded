"""
phongtrace - A small Python ray casting kernel

A geometric kernel for ray-based rendering with support for:
- Homogeneous point/vector algebra
- Square matrices with cofactor inversion and affine transform builders
- Ray/sphere intersection with nearest-hit selection
- Phong lighting
- Plain PPM (P3) image output
"""

__version__ = "0.1.0"
__author__ = "phongtrace Team"

from .vec4 import Vec4, point, vector, EPSILON
from .color import Color, BLACK, WHITE
from .matrix import (
    Matrix, SingularMatrixError,
    translation, scaling, rotation_x, rotation_y, rotation_z, shearing
)
from .ray import Ray
from .intersections import Intersection, Intersections
from .shapes import Sphere, NotAPointError
from .lights import PointLight
from .materials import Material
from .canvas import Canvas
from .renderer import Renderer, RenderSettings
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
