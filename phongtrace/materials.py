"""
Surface materials and the Phong reflection model.

The Phong model adds three terms:
- ambient: constant light reaching every surface
- diffuse: light scattered equally, proportional to cos(light, normal)
- specular: the highlight, proportional to cos(reflection, eye)^shininess
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .vec4 import Vec4
from .color import Color, BLACK
from .lights import PointLight


@dataclass
class Material:
    """Phong material coefficients.

    Attributes:
        color: Surface color
        ambient: Ambient reflection coefficient
        diffuse: Diffuse reflection coefficient
        specular: Specular reflection coefficient
        shininess: Specular exponent (higher is a smaller, sharper highlight)
    """
    color: Color = field(default_factory=lambda: Color(1, 1, 1))
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0

    def lighting(
        self,
        light: PointLight,
        point: Vec4,
        eye_vector: Vec4,
        normal_vector: Vec4
    ) -> Color:
        """Shade a surface point with the Phong model.

        Args:
            light: The light illuminating the point
            point: The surface point being shaded
            eye_vector: Unit vector from the point toward the eye
            normal_vector: Unit surface normal at the point

        Returns:
            The unclamped color seen at the point
        """
        effective_color = self.color * light.intensity
        light_vector = (light.position - point).normalize()
        ambient = effective_color * self.ambient

        light_dot_normal = light_vector.dot(normal_vector)
        if light_dot_normal < 0:
            # Light is on the other side of the surface
            return ambient

        diffuse = effective_color * self.diffuse * light_dot_normal

        reflect_vector = (-light_vector).reflect(normal_vector)
        reflect_dot_eye = reflect_vector.dot(eye_vector)
        if reflect_dot_eye <= 0:
            specular = BLACK
        else:
            factor = reflect_dot_eye ** self.shininess
            specular = light.intensity * self.specular * factor

        return ambient + diffuse + specular
