"""Scene container aggregating the camera, objects and lights.

A Scene is immutable once built and is shared by reference across every
pixel of a render. Objects and lights are kept in list order; the order
decides ties between equally distant hits.

Example:
    >>> from shadegraph.scene.manager import Scene
    >>> scene = Scene(camera=camera, objects=[floor, ball], lights=[sun])
    >>> scene.object_count
    2
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from shadegraph.camera.pinhole import Camera
from shadegraph.geometry.plane import Plane
from shadegraph.geometry.sphere import Sphere
from shadegraph.scene.intersection import SceneObject
from shadegraph.scene.lights import PointLight, SceneLight, Sun


@dataclass(frozen=True, eq=False, init=False)
class Scene:
    """Everything a render reads.

    Attributes:
        camera: The camera.
        objects: Scene primitives (spheres and planes).
        lights: Scene lights (suns and point lights).

    Raises:
        TypeError: If an object or light is not a supported variant.
    """

    camera: Camera
    objects: tuple[SceneObject, ...]
    lights: tuple[SceneLight, ...]

    def __init__(
        self,
        camera: Camera,
        objects: Iterable[SceneObject] = (),
        lights: Iterable[SceneLight] = (),
    ) -> None:
        objects = tuple(objects)
        lights = tuple(lights)
        for obj in objects:
            if not isinstance(obj, (Sphere, Plane)):
                raise TypeError(f"Unsupported scene object: {type(obj).__name__}")
        for light in lights:
            if not isinstance(light, (Sun, PointLight)):
                raise TypeError(f"Unsupported scene light: {type(light).__name__}")
        object.__setattr__(self, "camera", camera)
        object.__setattr__(self, "objects", objects)
        object.__setattr__(self, "lights", lights)

    @property
    def object_count(self) -> int:
        return len(self.objects)

    @property
    def light_count(self) -> int:
        return len(self.lights)
