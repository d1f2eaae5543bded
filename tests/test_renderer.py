"""Tests for Renderer class."""

import pytest

from phongtrace.vec4 import point, vector
from phongtrace.color import Color, BLACK
from phongtrace.matrix import Matrix
from phongtrace.shapes import Sphere
from phongtrace.materials import Material
from phongtrace.lights import PointLight
from phongtrace.renderer import Renderer, RenderSettings


@pytest.fixture
def light():
    return PointLight(point(-10, 10, -10), Color(1, 1, 1))


class TestRenderSettings:
    """Test RenderSettings configuration."""

    def test_default_values(self):
        settings = RenderSettings()
        assert settings.canvas_pixels == 100
        assert settings.wall_size == 7.0
        assert settings.wall_z == 10.0
        assert settings.ray_origin == point(0, 0, -5)
        assert settings.mode == 'shaded'

    def test_pixel_size(self):
        assert RenderSettings(canvas_pixels=70, wall_size=7.0).pixel_size == pytest.approx(0.1)

    @pytest.mark.parametrize("kwargs", [
        {'canvas_pixels': 0},
        {'wall_size': -1.0},
        {'mode': 'wireframe'},
        {'ray_origin': vector(0, 0, -5)},
        {'wall_z': -5.0},
        {'wall_z': 2.0, 'ray_origin': point(1, 1, 2)},
    ])
    def test_invalid_values_raise(self, kwargs):
        with pytest.raises(ValueError):
            RenderSettings(**kwargs)


class TestRayForPixel:
    """Test primary ray construction."""

    def test_top_left_pixel(self):
        renderer = Renderer(RenderSettings(canvas_pixels=100))
        ray = renderer.ray_for_pixel(0, 0)
        assert ray.origin == point(0, 0, -5)
        assert ray.direction == (point(-3.5, 3.5, 10) - point(0, 0, -5)).normalize()

    def test_direction_is_normalized(self):
        ray = Renderer().ray_for_pixel(17, 63)
        assert ray.direction.length() == pytest.approx(1.0)
        assert ray.direction.is_vector()


class TestRendering:
    """Test full renders."""

    def test_render_produces_canvas(self, light):
        renderer = Renderer(RenderSettings(canvas_pixels=11))
        canvas = renderer.render(Sphere(), light)
        assert canvas.width == 11
        assert canvas.height == 11

    def test_center_hits_and_corner_misses(self, light):
        renderer = Renderer(RenderSettings(canvas_pixels=11))
        canvas = renderer.render(Sphere(), light)
        assert canvas.pixel_at(0, 0) == BLACK
        center = canvas.pixel_at(5, 5)
        assert center.r > 0.1

    def test_center_matches_lighting(self, light):
        settings = RenderSettings(canvas_pixels=11)
        renderer = Renderer(settings)
        sphere = Sphere(material=Material(color=Color(1, 0.2, 1)))
        canvas = renderer.render(sphere, light)

        ray = renderer.ray_for_pixel(5, 5)
        hit = sphere.intersect(ray).hit()
        p = ray.position(hit.t)
        expected = sphere.material.lighting(light, p, -ray.direction, sphere.normal_at(p))
        assert canvas.pixel_at(5, 5) == expected

    def test_silhouette_mode(self, light):
        settings = RenderSettings(canvas_pixels=11, mode='silhouette')
        canvas = Renderer(settings).render(Sphere(), light)
        assert canvas.pixel_at(5, 5) == Color(1, 0, 0)
        assert canvas.pixel_at(0, 0) == BLACK

    def test_translated_sphere_moves_off_center(self, light):
        settings = RenderSettings(canvas_pixels=11, mode='silhouette')
        sphere = Sphere(transform=Matrix.identity().translate(10, 0, 0))
        canvas = Renderer(settings).render(sphere, light)
        assert canvas.pixel_at(5, 5) == BLACK

    def test_progress_callback(self, light):
        progress = []
        renderer = Renderer(RenderSettings(canvas_pixels=4))
        renderer.set_progress_callback(progress.append)
        renderer.render(Sphere(), light)
        assert progress == [0.25, 0.5, 0.75, 1.0]
