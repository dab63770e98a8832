"""Ready-made demo scenes.

Two scenes are provided:

    showcase:   spheres with chrome, glass, image-textured and checkerboard
                materials over a reflective textured floor, in front of a
                blue backdrop, lit by three point lights. Two rows of small
                textured spheres recede into the distance.
    mirror box: a closed box of perfect mirrors with nothing else in it.
                Every ray bounces until the depth limit, so it renders
                black; it exercises the recursion bound.

Image textures are optional. The showcase looks them up by name ("metal",
"static", "fire") in a mapping; missing entries fall back to the
procedural checkerboard.

Example:
    >>> from shadegraph.scene.showcase import create_showcase_scene, load_showcase_textures
    >>> textures = load_showcase_textures("assets")
    >>> scene = create_showcase_scene(640, 480, textures)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from shadegraph.camera.pinhole import Camera, Resolution
from shadegraph.core.color import WHITE, Color
from shadegraph.geometry.plane import Plane
from shadegraph.geometry.sphere import Sphere
from shadegraph.materials.nodes import Diffuse, Material, Reflect, Refract
from shadegraph.materials.texture import ImageMap, load_image_map
from shadegraph.scene.lights import PointLight
from shadegraph.scene.manager import Scene

# Texture files and tile sizes used by the showcase, keyed by name
SHOWCASE_TEXTURES: dict[str, tuple[str, float]] = {
    "metal": ("metal.png", 2.0),
    "static": ("static.jpg", 5.0),
    "fire": ("fire.jpg", 5.0),
}


@dataclass(frozen=True)
class ShowcaseParams:
    """Tunable parameters of the showcase scene.

    Attributes:
        sky_light_intensity: Power of the distant overhead light.
        side_light_intensity: Power of each of the two closer lights.
        glass_index: Refractive index of the large glass sphere.
        row_start: First x offset of the sphere rows.
        row_stop: x offset (exclusive) where the sphere rows end.
    """

    sky_light_intensity: float = 1_500_000.0
    side_light_intensity: float = 15_000.0
    glass_index: float = 1.5
    row_start: int = -20
    row_stop: int = 100


def load_showcase_textures(asset_dir: str | PathLike[str]) -> dict[str, ImageMap]:
    """Load every showcase texture from a directory.

    Raises:
        ValueError: If any texture file is missing or unreadable.
    """
    asset_path = Path(asset_dir)
    return {
        name: load_image_map(asset_path / filename, scale)
        for name, (filename, scale) in SHOWCASE_TEXTURES.items()
    }


def create_showcase_camera(width: int, height: int) -> Camera:
    return Camera(
        location=(0.0, 0.0, -0.1),
        rotation=(0.0, 0.2, 0.0),
        focal_length=0.4,
        resolution=Resolution(width, height),
        hx=0.5,
        hy=0.375,
    )


def create_showcase_scene(
    width: int = 640,
    height: int = 480,
    textures: Mapping[str, ImageMap] | None = None,
    params: ShowcaseParams | None = None,
) -> Scene:
    """Build the showcase scene.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        textures: Optional image textures by name ("metal", "static", "fire").
        params: Optional scene parameters.

    Returns:
        The assembled Scene.
    """
    textures = textures or {}
    params = params or ShowcaseParams()

    chrome = Material(
        texture=Color.from_linear(71, 221, 255),
        albedo=0.8,
        nodes=[Diffuse(0.15), Reflect(1.0)],
    )
    speckled = Material(
        texture=textures.get("static"),
        albedo=0.3,
        nodes=[Diffuse(1.0), Reflect(0.25)],
    )
    checkered = Material(texture=None, albedo=0.9, nodes=[Diffuse(1.0), Reflect(0.1)])
    glass = Material(
        texture=Color.from_linear(100, 100, 255),
        albedo=1.0,
        nodes=[Refract(1.0, params.glass_index)],
    )
    backdrop = Material(
        texture=Color.from_linear(50, 50, 255),
        albedo=0.5,
        nodes=[Diffuse(1.0)],
    )
    metal = Material(
        texture=textures.get("metal"),
        albedo=1.0,
        nodes=[Diffuse(1.0), Reflect(1.0)],
    )
    fire = Material(
        texture=textures.get("fire"),
        albedo=0.9,
        nodes=[Diffuse(1.0), Reflect(0.05)],
    )

    objects: list[Sphere | Plane] = [
        Sphere(origin=(5.0, -0.2, 1.3), radius=0.3, material=chrome),
        Sphere(origin=(6.0, -2.0, 3.0), radius=0.3, material=speckled),
        Sphere(origin=(5.0, -0.5, 0.5), radius=0.5, material=checkered),
        Sphere(origin=(4.5, 1.0, 1.5), radius=1.0, material=glass),
        Plane(origin=(0.0, 0.0, -0.3), normal=(0.0, 0.0, -1.0), material=metal),
        Plane(origin=(100.0, 0.0, 0.0), normal=(1.0, 0.0, 0.0), material=backdrop),
    ]
    for side in (1.0, -1.0):
        for offset in range(params.row_start, params.row_stop, 2):
            objects.append(Sphere(origin=(1.0 + offset, side, 0.5), radius=0.3, material=fire))

    lights = [
        PointLight(origin=(60.0, 0.0, 150.0), color=WHITE, intensity=params.sky_light_intensity),
        PointLight(origin=(-0.5, -3.0, 15.0), color=WHITE, intensity=params.side_light_intensity),
        PointLight(origin=(0.0, 3.0, 15.0), color=WHITE, intensity=params.side_light_intensity),
    ]
    return Scene(camera=create_showcase_camera(width, height), objects=objects, lights=lights)


def create_mirror_box_scene(width: int = 16, height: int = 12, half_size: float = 1.0) -> Scene:
    """Build a closed box of perfect mirrors around the camera.

    Each wall's plane normal points out of the box, so every wall is visible
    from inside. The single light has no effect, since no material diffuses.
    """
    mirror = Material(texture=WHITE, albedo=1.0, nodes=[Reflect(1.0)])
    walls = []
    for axis in range(3):
        for sign in (1.0, -1.0):
            direction = [0.0, 0.0, 0.0]
            direction[axis] = sign
            origin = tuple(half_size * c for c in direction)
            walls.append(Plane(origin=origin, normal=tuple(direction), material=mirror))

    camera = Camera(
        location=(0.0, 0.0, 0.0),
        rotation=(0.0, 0.0, 0.0),
        focal_length=0.4 * half_size,
        resolution=Resolution(width, height),
        hx=0.5 * half_size,
        hy=0.375 * half_size,
    )
    light = PointLight(origin=(0.0, 0.0, 0.5 * half_size), color=WHITE, intensity=100.0)
    return Scene(camera=camera, objects=walls, lights=[light])
