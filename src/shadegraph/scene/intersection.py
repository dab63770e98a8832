"""Scene-level primitive intersection testing.

This module dispatches over the closed set of scene primitives (spheres and
planes) and provides the two scene queries used by the tracer:

    closest_intersect: nearest hit along a ray (primary and secondary rays)
    any_intersect:     whether anything blocks a ray before a distance
                       (shadow rays), stopping at the first blocker

Both are linear scans over the object list.

Example:
    >>> from shadegraph.scene.intersection import closest_intersect
    >>> hit = closest_intersect(scene.objects, ray)
    >>> if hit is not None:
    ...     obj, record = hit
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from shadegraph.core.color import Color
from shadegraph.core.ray import Ray, Vec3
from shadegraph.geometry.plane import Plane, hit_plane, plane_uv
from shadegraph.geometry.sphere import HitRecord, Sphere, hit_sphere, sphere_uv
from shadegraph.materials.texture import sample_texture

SceneObject = Sphere | Plane

# Spheres express their checkerboard in fractions of pi
_SPHERE_CHECKER_SCALE = 1.0 / math.pi


def intersect(obj: SceneObject, ray: Ray) -> HitRecord | None:
    """Intersect a ray with one scene object."""
    match obj:
        case Sphere():
            return hit_sphere(obj, ray)
        case Plane():
            return hit_plane(obj, ray)
    raise TypeError(f"Unsupported scene object: {type(obj).__name__}")


def texture_color(obj: SceneObject, point: Vec3) -> Color:
    """Sample the object's texture at a surface point."""
    match obj:
        case Sphere():
            u, v = sphere_uv(obj, point)
            return sample_texture(obj.material.texture, u, v, _SPHERE_CHECKER_SCALE)
        case Plane():
            u, v = plane_uv(obj, point)
            return sample_texture(obj.material.texture, u, v)
    raise TypeError(f"Unsupported scene object: {type(obj).__name__}")


def closest_intersect(
    objects: Sequence[SceneObject],
    ray: Ray,
) -> tuple[SceneObject, HitRecord] | None:
    """Find the nearest object hit by a ray.

    Returns:
        (object, hit record) for the smallest hit distance; the first object
        in list order wins ties. None if nothing is hit.
    """
    closest: tuple[SceneObject, HitRecord] | None = None
    for obj in objects:
        record = intersect(obj, ray)
        if record is not None and (closest is None or record.distance < closest[1].distance):
            closest = (obj, record)
    return closest


def any_intersect(objects: Sequence[SceneObject], ray: Ray, max_distance: float) -> bool:
    """Check whether any object is hit closer than max_distance."""
    for obj in objects:
        record = intersect(obj, ray)
        if record is not None and record.distance < max_distance:
            return True
    return False
