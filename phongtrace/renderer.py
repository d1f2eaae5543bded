"""
Renderer module - casts one ray per pixel at a single sphere.

The eye sits at ``ray_origin`` and looks through a square virtual wall at
``z = wall_z``. Each canvas pixel maps to a point on that wall; the ray
toward it is intersected with the sphere and the nearest hit is shaded.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .vec4 import Vec4, point
from .color import Color, BLACK
from .ray import Ray
from .shapes import Sphere
from .lights import PointLight
from .canvas import Canvas

logger = logging.getLogger(__name__)

RENDER_MODES = ('shaded', 'silhouette')


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    canvas_pixels: int = 100
    wall_size: float = 7.0
    wall_z: float = 10.0
    ray_origin: Vec4 = field(default_factory=lambda: point(0, 0, -5))
    mode: str = 'shaded'
    silhouette_color: Color = field(default_factory=lambda: Color(1, 0, 0))
    background: Color = field(default_factory=lambda: BLACK)

    def __post_init__(self):
        if self.canvas_pixels <= 0:
            raise ValueError(f"canvas_pixels must be positive, got {self.canvas_pixels}")
        if self.wall_size <= 0:
            raise ValueError(f"wall_size must be positive, got {self.wall_size}")
        if self.mode not in RENDER_MODES:
            raise ValueError(f"Unknown render mode: {self.mode}")
        if not self.ray_origin.is_point():
            raise ValueError(f"ray_origin must be a point, got {self.ray_origin!r}")
        if self.wall_z == self.ray_origin.z:
            raise ValueError(f"wall_z must differ from the ray origin z, got {self.wall_z}")

    @property
    def pixel_size(self) -> float:
        return self.wall_size / self.canvas_pixels


class Renderer:
    """Sequential per-pixel ray caster."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def ray_for_pixel(self, x: int, y: int) -> Ray:
        """Build the ray from the eye through pixel (x, y) on the wall.

        Pixel rows grow downward while world y grows upward, so y is flipped.
        """
        settings = self.settings
        half = settings.wall_size / 2
        world_x = -half + settings.pixel_size * x
        world_y = half - settings.pixel_size * y
        target = point(world_x, world_y, settings.wall_z)
        return Ray(settings.ray_origin, (target - settings.ray_origin).normalize())

    def render(self, sphere: Sphere, light: PointLight) -> Canvas:
        """Render the sphere and return the resulting canvas.

        Args:
            sphere: The sphere to render
            light: The light used in shaded mode

        Returns:
            A square canvas of ``canvas_pixels`` per side
        """
        size = self.settings.canvas_pixels
        canvas = Canvas(size, size, self.settings.background)

        logger.debug("Rendering %dx%d canvas in %s mode", size, size, self.settings.mode)
        start_time = time.perf_counter()
        hits = 0

        for y in range(size):
            for x in range(size):
                color = self.pixel_color(self.ray_for_pixel(x, y), sphere, light)
                if color is not None:
                    canvas.write(x, y, color)
                    hits += 1

            if self._progress_callback:
                self._progress_callback((y + 1) / size)

        logger.debug(
            "Rendered %d of %d pixels on the sphere in %.2fs",
            hits, size * size, time.perf_counter() - start_time
        )
        return canvas

    def pixel_color(self, ray: Ray, sphere: Sphere, light: PointLight) -> Optional[Color]:
        """Compute the color for a ray, or None if it misses the sphere."""
        hit = sphere.intersect(ray).hit()
        if hit is None:
            return None

        if self.settings.mode == 'silhouette':
            return self.settings.silhouette_color

        hit_point = ray.position(hit.t)
        normal = hit.object.normal_at(hit_point)
        eye = -ray.direction
        return hit.object.material.lighting(light, hit_point, eye, normal)
