"""
Scene description parser.

Supports a YAML or JSON scene description with:
- Render settings
- One sphere (transform chain and material)
- One point light

Example scene file:
```yaml
render:
  canvas_pixels: 100
  wall_size: 7.0
  wall_z: 10
  ray_origin: [0, 0, -5]
  mode: shaded

sphere:
  transform:          # composed as a fluent chain, in the order listed
    - scale: [1, 0.5, 1]
    - rotate_z: 0.6283
  material:
    color: [1, 0.2, 1]
    ambient: 0.1
    diffuse: 0.9
    specular: 0.9
    shininess: 200

light:
  position: [-10, 10, -10]
  intensity: [1, 1, 1]
```
"""

from __future__ import annotations
import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from .vec4 import Vec4, point
from .color import Color
from .matrix import Matrix, SingularMatrixError
from .shapes import Sphere
from .materials import Material
from .lights import PointLight
from .renderer import RenderSettings

logger = logging.getLogger(__name__)

DEFAULT_LIGHT_POSITION = (-10, 10, -10)

# transform name -> number of arguments
TRANSFORM_ARITY = {
    'translate': 3,
    'scale': 3,
    'rotate_x': 1,
    'rotate_y': 1,
    'rotate_z': 1,
    'shear': 6,
}


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def parse_file(self, filepath: Union[str, Path]) -> Tuple[Sphere, PointLight, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (sphere, light, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()

        if path.suffix == '.json':
            try:
                data = json.loads(content)
            except json.JSONDecodeError as e:
                raise SceneParseError(f"Invalid JSON in {filepath}: {e}") from e
        else:
            # YAML is a superset of JSON, so anything else goes through it
            try:
                import yaml
            except ImportError as e:
                raise SceneParseError("PyYAML not installed. Install with: pip install pyyaml") from e
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError as e:
                raise SceneParseError(f"Invalid YAML in {filepath}: {e}") from e

        logger.debug("Loaded scene description from %s", path)
        return self.parse_dict(data if data is not None else {})

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[Sphere, PointLight, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (sphere, light, settings)
        """
        if not isinstance(data, dict):
            raise SceneParseError(f"Scene must be a mapping, got {type(data).__name__}")

        sphere = self._parse_sphere(self._section(data, 'sphere'))
        light = self._parse_light(self._section(data, 'light'))
        settings = self._parse_settings(self._section(data, 'render'))
        return sphere, light, settings

    def _section(self, data: Dict[str, Any], key: str) -> Any:
        # a bare `key:` in YAML loads as None
        section = data.get(key)
        return {} if section is None else section

    def _parse_numbers(self, data: Any, count: int, what: str) -> Tuple[float, ...]:
        if not isinstance(data, (list, tuple)) or len(data) != count:
            raise SceneParseError(f"{what} must be a list of {count} numbers, got {data!r}")
        try:
            return tuple(float(v) for v in data)
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"{what} must contain numbers, got {data!r}") from e

    def _parse_float(self, data: Any, what: str) -> float:
        try:
            return float(data)
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"{what} must be a number, got {data!r}") from e

    def _parse_int(self, data: Any, what: str) -> int:
        value = self._parse_float(data, what)
        if not math.isfinite(value) or not value.is_integer():
            raise SceneParseError(f"{what} must be a whole number, got {data!r}")
        return int(value)

    def _parse_point(self, data: Any) -> Vec4:
        """Parse a point from a list or an x/y/z mapping."""
        if isinstance(data, dict):
            return point(
                self._parse_float(data.get('x', 0), 'x'),
                self._parse_float(data.get('y', 0), 'y'),
                self._parse_float(data.get('z', 0), 'z')
            )
        return point(*self._parse_numbers(data, 3, 'Point'))

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from various formats."""
        if isinstance(data, dict):
            return Color(
                self._parse_float(data.get('r', 0), 'r'),
                self._parse_float(data.get('g', 0), 'g'),
                self._parse_float(data.get('b', 0), 'b')
            )
        elif isinstance(data, str):
            # Handle hex colors
            hex_color = data[1:] if data.startswith('#') else ''
            if len(hex_color) == 6:
                try:
                    r, g, b = (int(hex_color[i:i + 2], 16) / 255.0 for i in (0, 2, 4))
                except ValueError as e:
                    raise SceneParseError(f"Cannot parse color from string: {data}") from e
                return Color(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        return Color(*self._parse_numbers(data, 3, 'Color'))

    def _parse_transform(self, transform_data: Any) -> Matrix:
        """Compose a list of single-entry transform steps, in order."""
        if not isinstance(transform_data, list):
            raise SceneParseError(f"Transform must be a list of steps, got {transform_data!r}")

        transform = Matrix.identity()
        for step in transform_data:
            if not isinstance(step, dict) or len(step) != 1:
                raise SceneParseError(f"Transform step must have exactly one entry: {step!r}")
            (name, args), = step.items()
            if name not in TRANSFORM_ARITY:
                raise SceneParseError(f"Unknown transform: {name}")

            arity = TRANSFORM_ARITY[name]
            if arity == 1:
                values = (self._parse_float(args, name),)
            else:
                values = self._parse_numbers(args, arity, name)
            transform = getattr(transform, name)(*values)
        return transform

    def _parse_material(self, mat_data: Any) -> Material:
        if not isinstance(mat_data, dict):
            raise SceneParseError(f"Material must be a mapping, got {mat_data!r}")
        defaults = Material()
        return Material(
            color=self._parse_color(mat_data['color']) if 'color' in mat_data else defaults.color,
            ambient=self._parse_float(mat_data.get('ambient', defaults.ambient), 'ambient'),
            diffuse=self._parse_float(mat_data.get('diffuse', defaults.diffuse), 'diffuse'),
            specular=self._parse_float(mat_data.get('specular', defaults.specular), 'specular'),
            shininess=self._parse_float(mat_data.get('shininess', defaults.shininess), 'shininess')
        )

    def _parse_sphere(self, sphere_data: Any) -> Sphere:
        if not isinstance(sphere_data, dict):
            raise SceneParseError(f"Sphere must be a mapping, got {sphere_data!r}")

        transform = self._parse_transform(sphere_data.get('transform', []))
        material = self._parse_material(sphere_data.get('material', {}))
        try:
            return Sphere(transform=transform, material=material)
        except SingularMatrixError as e:
            raise SceneParseError(f"Sphere transform is not invertible: {e}") from e

    def _parse_light(self, light_data: Any) -> PointLight:
        if not isinstance(light_data, dict):
            raise SceneParseError(f"Light must be a mapping, got {light_data!r}")
        position = self._parse_point(light_data.get('position', list(DEFAULT_LIGHT_POSITION)))
        intensity = self._parse_color(light_data.get('intensity', [1, 1, 1]))
        return PointLight(position, intensity)

    def _parse_settings(self, settings_data: Any) -> RenderSettings:
        """Parse render settings section."""
        if not isinstance(settings_data, dict):
            raise SceneParseError(f"Render settings must be a mapping, got {settings_data!r}")

        kwargs: Dict[str, Any] = {}
        if 'canvas_pixels' in settings_data:
            kwargs['canvas_pixels'] = self._parse_int(settings_data['canvas_pixels'], 'canvas_pixels')
        if 'wall_size' in settings_data:
            kwargs['wall_size'] = self._parse_float(settings_data['wall_size'], 'wall_size')
        if 'wall_z' in settings_data:
            kwargs['wall_z'] = self._parse_float(settings_data['wall_z'], 'wall_z')
        if 'ray_origin' in settings_data:
            kwargs['ray_origin'] = self._parse_point(settings_data['ray_origin'])
        if 'mode' in settings_data:
            kwargs['mode'] = str(settings_data['mode']).lower()
        if 'silhouette_color' in settings_data:
            kwargs['silhouette_color'] = self._parse_color(settings_data['silhouette_color'])
        if 'background' in settings_data:
            kwargs['background'] = self._parse_color(settings_data['background'])

        try:
            return RenderSettings(**kwargs)
        except ValueError as e:
            raise SceneParseError(f"Invalid render settings: {e}") from e


def load_scene(filepath: Union[str, Path]) -> Tuple[Sphere, PointLight, RenderSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (sphere, light, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[Sphere, PointLight, RenderSettings]:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (sphere, light, settings)
    """
    parser = SceneParser()
    return parser.parse_dict(data)
