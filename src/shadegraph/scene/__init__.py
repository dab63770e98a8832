"""Scene module: lights, the scene container and scene queries.

Components:
    lights: Sun and PointLight with their distance/intensity/direction queries
    intersection: Per-object dispatch and the closest/any-hit scans
    manager: Immutable Scene aggregating camera, objects and lights
    showcase: Demo scenes
"""

from .intersection import (
    SceneObject,
    any_intersect,
    closest_intersect,
    intersect,
    texture_color,
)
from .lights import (
    PointLight,
    SceneLight,
    Sun,
    apparent_intensity,
    direction_to,
    distance_to,
    light_color,
)
from .manager import Scene
from .showcase import (
    ShowcaseParams,
    create_mirror_box_scene,
    create_showcase_scene,
    load_showcase_textures,
)

__all__ = [
    # Intersection module
    "SceneObject",
    "intersect",
    "texture_color",
    "closest_intersect",
    "any_intersect",
    # Lights module
    "Sun",
    "PointLight",
    "SceneLight",
    "distance_to",
    "apparent_intensity",
    "direction_to",
    "light_color",
    # Scene container
    "Scene",
    # Demo scenes
    "ShowcaseParams",
    "create_showcase_scene",
    "create_mirror_box_scene",
    "load_showcase_textures",
]
