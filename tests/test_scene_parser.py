"""Tests for the scene description parser."""

import pytest
import json
import math

from phongtrace.vec4 import point
from phongtrace.color import Color
from phongtrace.matrix import Matrix
from phongtrace.materials import Material
from phongtrace.shapes import Sphere
from phongtrace.scene_parser import SceneParser, SceneParseError, load_scene, parse_scene


SCENE = {
    'render': {
        'canvas_pixels': 50,
        'wall_size': 6,
        'wall_z': 8,
        'ray_origin': [0, 0, -4],
        'mode': 'silhouette',
    },
    'sphere': {
        'transform': [
            {'scale': [1, 0.5, 1]},
            {'rotate_z': 0.5},
            {'translate': [0, 1, 0]},
        ],
        'material': {
            'color': [1, 0.2, 1],
            'ambient': 0.2,
            'shininess': 10,
        },
    },
    'light': {
        'position': [-10, 10, -10],
        'intensity': '#ff8000',
    },
}


class TestParseDict:
    """Test parsing from dictionaries."""

    def test_full_scene(self):
        sphere, light, settings = parse_scene(SCENE)

        assert settings.canvas_pixels == 50
        assert settings.wall_size == 6.0
        assert settings.wall_z == 8.0
        assert settings.ray_origin == point(0, 0, -4)
        assert settings.mode == 'silhouette'

        assert sphere.transform == Matrix.identity().scale(1, 0.5, 1).rotate_z(0.5).translate(0, 1, 0)
        assert sphere.material == Material(color=Color(1, 0.2, 1), ambient=0.2, shininess=10)

        assert light.position == point(-10, 10, -10)
        assert light.intensity == Color(1, 128 / 255, 0)

    def test_empty_scene_uses_defaults(self):
        sphere, light, settings = parse_scene({})
        assert sphere == Sphere()
        assert light.position == point(-10, 10, -10)
        assert light.intensity == Color(1, 1, 1)
        assert settings.canvas_pixels == 100

    def test_null_sections_use_defaults(self):
        sphere, light, settings = parse_scene({'sphere': None, 'light': None, 'render': None})
        assert sphere == Sphere()
        assert light.position == point(-10, 10, -10)
        assert settings.canvas_pixels == 100

    def test_whole_float_pixel_count(self):
        _, _, settings = parse_scene({'render': {'canvas_pixels': 40.0}})
        assert settings.canvas_pixels == 40
        assert isinstance(settings.canvas_pixels, int)

    def test_shear_and_rotations(self):
        sphere, _, _ = parse_scene({'sphere': {'transform': [
            {'rotate_x': math.pi / 2},
            {'rotate_y': 0.1},
            {'shear': [1, 0, 0, 0, 0, 0]},
        ]}})
        expected = Matrix.identity().rotate_x(math.pi / 2).rotate_y(0.1).shear(1, 0, 0, 0, 0, 0)
        assert sphere.transform == expected

    def test_color_mapping(self):
        _, light, _ = parse_scene({'light': {'intensity': {'r': 0.5, 'g': 0.25}}})
        assert light.intensity == Color(0.5, 0.25, 0)

    def test_point_mapping(self):
        _, light, _ = parse_scene({'light': {'position': {'x': 1, 'z': 2}}})
        assert light.position == point(1, 0, 2)


class TestParseErrors:
    """Test malformed scene descriptions."""

    @pytest.mark.parametrize("data", [
        {'sphere': {'transform': [{'spin': 1}]}},
        {'sphere': {'transform': [{'scale': [1, 2]}]}},
        {'sphere': {'transform': [{'scale': [1, 2, 3], 'translate': [1, 2, 3]}]}},
        {'sphere': {'transform': {'scale': [1, 2, 3]}}},
        {'sphere': {'transform': [{'rotate_x': 'ninety'}]}},
        {'sphere': {'transform': [{'scale': [0, 1, 1]}]}},
        {'sphere': {'material': {'ambient': 'lots'}}},
        {'light': {'position': [1, 2]}},
        {'light': {'intensity': '#zzzzzz'}},
        {'light': {'intensity': 'red'}},
        {'render': {'mode': 'wireframe'}},
        {'render': {'canvas_pixels': -3}},
        {'render': {'canvas_pixels': 2.7}},
        {'render': {'canvas_pixels': float('inf')}},
        {'render': {'canvas_pixels': float('nan')}},
        {'render': {'wall_z': -5}},
        {'render': []},
    ])
    def test_malformed_scene_raises(self, data):
        with pytest.raises(SceneParseError):
            parse_scene(data)

    def test_non_mapping_raises(self):
        with pytest.raises(SceneParseError):
            SceneParser().parse_dict([1, 2, 3])


class TestParseFile:
    """Test loading scene files."""

    def test_json_file(self, tmp_path):
        path = tmp_path / "scene.json"
        path.write_text(json.dumps(SCENE))
        sphere, light, settings = load_scene(path)
        assert settings.canvas_pixels == 50
        assert light.position == point(-10, 10, -10)

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "scene.yaml"
        path.write_text(
            "render:\n"
            "  canvas_pixels: 20\n"
            "sphere:\n"
            "  transform:\n"
            "    - scale: [2, 2, 2]\n"
            "light:\n"
            "  position: [0, 0, -10]\n"
        )
        sphere, light, settings = load_scene(path)
        assert settings.canvas_pixels == 20
        assert sphere.transform == Matrix.identity().scale(2, 2, 2)
        assert light.position == point(0, 0, -10)

    def test_empty_yaml_file(self, tmp_path):
        path = tmp_path / "scene.yml"
        path.write_text("")
        sphere, _, _ = load_scene(path)
        assert sphere == Sphere()

    def test_yaml_empty_section_keys(self, tmp_path):
        path = tmp_path / "scene.yaml"
        path.write_text("sphere:\nlight:\nrender:\n")
        sphere, light, settings = load_scene(path)
        assert sphere == Sphere()
        assert light.position == point(-10, 10, -10)
        assert settings.wall_z == 10.0

    def test_yaml_infinite_pixel_count_raises(self, tmp_path):
        path = tmp_path / "scene.yaml"
        path.write_text("render:\n  canvas_pixels: .inf\n")
        with pytest.raises(SceneParseError, match="whole number"):
            load_scene(path)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(SceneParseError, match="not found"):
            load_scene(tmp_path / "missing.yaml")

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "scene.json"
        path.write_text("{not json")
        with pytest.raises(SceneParseError, match="Invalid JSON"):
            load_scene(path)

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "scene.yaml"
        path.write_text("sphere: [unclosed")
        with pytest.raises(SceneParseError, match="Invalid YAML"):
            load_scene(path)
