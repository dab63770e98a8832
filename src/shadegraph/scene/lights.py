"""Scene lights: directional suns and inverse-square point lights.

Both kinds answer the same four queries, which is all the Diffuse node and
the shadow-ray test need:

    distance_to(light, point)             -> float (inf for a sun)
    apparent_intensity(light, cos, dist)  -> float
    direction_to(light, point)            -> unit vector toward the light
    light_color(light)                    -> Color
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from shadegraph.core.color import Color
from shadegraph.core.ray import Vec3, as_vec3, distance, normalize


def _check_intensity(intensity: float) -> None:
    if not (math.isfinite(intensity) and intensity >= 0.0):
        raise ValueError(f"Light intensity must be non-negative, got {intensity}")


@dataclass(frozen=True, eq=False)
class Sun:
    """A light infinitely far away.

    Attributes:
        direction: Direction the light travels (normalized on construction).
        color: Light color.
        intensity: Irradiance on a surface facing the sun.
    """

    direction: Vec3
    color: Color
    intensity: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", normalize(as_vec3(self.direction)))
        _check_intensity(self.intensity)


@dataclass(frozen=True, eq=False)
class PointLight:
    """An isotropic point light with inverse-square falloff.

    Attributes:
        origin: Light position.
        color: Light color.
        intensity: Radiant power, spread over 4*pi*d^2.
    """

    origin: Vec3
    color: Color
    intensity: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", as_vec3(self.origin))
        _check_intensity(self.intensity)


SceneLight = Sun | PointLight


def distance_to(light: SceneLight, point: Vec3) -> float:
    """Distance from a point to the light."""
    match light:
        case Sun():
            return math.inf
        case PointLight():
            return distance(light.origin, point)
    raise TypeError(f"Unsupported light type: {type(light).__name__}")


def apparent_intensity(light: SceneLight, cos_theta: float, dist: float) -> float:
    """Intensity arriving at a surface.

    Args:
        light: The light.
        cos_theta: Cosine between surface normal and direction to the light.
        dist: Distance to the light (ignored for suns).

    Returns:
        Zero for surfaces facing away; otherwise cos_theta * intensity,
        divided by 4*pi*d^2 for point lights.
    """
    if cos_theta <= 0.0:
        return 0.0
    match light:
        case Sun():
            return cos_theta * light.intensity
        case PointLight():
            return cos_theta * light.intensity / (4.0 * math.pi * dist * dist)
    raise TypeError(f"Unsupported light type: {type(light).__name__}")


def direction_to(light: SceneLight, point: Vec3) -> Vec3:
    """Unit vector from a point toward the light."""
    match light:
        case Sun():
            return -light.direction
        case PointLight():
            return normalize(light.origin - point)
    raise TypeError(f"Unsupported light type: {type(light).__name__}")


def light_color(light: SceneLight) -> Color:
    return light.color
