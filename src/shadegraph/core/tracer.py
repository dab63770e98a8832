"""Recursive ray tracer evaluating per-material shading graphs.

For every pixel the camera produces a primary ray; the tracer finds the
closest hit and sums the contribution of each shading node of the hit
object's material, in order:

    Diffuse:  for each light, a shadow ray decides visibility and the
              Lambertian term texture * light color * apparent intensity
              * albedo is accumulated; the sum is averaged over the lights.
    Reflect:  trace the mirror ray.
    Refract:  trace the Snell's-law transmitted ray and tint it by the
              surface texture. Total internal reflection contributes black.
    Fresnel:  kr * reflect + (1 - kr) * refract, kr from the Fresnel
              equations.

Recursion is bounded by a single depth counter shared by all bounce types:
a bounce requested at depth >= max_depth contributes black. A miss also
contributes black for secondary rays; for primary rays the pixel keeps the
background color.

Secondary and shadow rays start a small bias off the surface, on the side
they travel into, to avoid self-intersection.

Example:
    >>> from shadegraph.core.tracer import RenderSettings, render_frame
    >>> frame = render_frame(scene, RenderSettings(max_depth=8))
    >>> frame.shape
    (480, 640, 3)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from shadegraph.camera.pinhole import generate_primary_rays
from shadegraph.core.color import BLACK, Color, white_balance
from shadegraph.core.ray import (
    EPSILON,
    Ray,
    Vec3,
    dot,
    fresnel_reflectance,
    normalize,
    offset_origin,
    reflect,
    refract,
)
from shadegraph.geometry.sphere import HitRecord
from shadegraph.materials.nodes import Diffuse, Fresnel, Node, Reflect, Refract
from shadegraph.scene.intersection import (
    SceneObject,
    any_intersect,
    closest_intersect,
    texture_color,
)
from shadegraph.scene.lights import apparent_intensity, direction_to, distance_to, light_color
from shadegraph.scene.manager import Scene

logger = logging.getLogger(__name__)

# =============================================================================
# Rendering Constants
# =============================================================================

# Maximum number of bounces along any branch of the shading graph
MAX_DEPTH = 35

# Ray offset to avoid self-intersection
NORMAL_BIAS = 1e-6

# Progress callback: receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class RenderSettings:
    """Configuration for a render.

    Attributes:
        max_depth: Bounce limit shared by Reflect, Refract and Fresnel.
        normal_bias: Offset applied to secondary and shadow ray origins.
        background: Color of pixels whose primary ray hits nothing.
        white_balance: Normalize an over-exposed frame after rendering.

    Raises:
        ValueError: If max_depth is negative or normal_bias is not positive.
    """

    max_depth: int = MAX_DEPTH
    normal_bias: float = NORMAL_BIAS
    background: Color = BLACK
    white_balance: bool = False

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if not self.normal_bias > 0.0:
            raise ValueError(f"normal_bias must be positive, got {self.normal_bias}")


DEFAULT_SETTINGS = RenderSettings()


# =============================================================================
# Shading Graph
# =============================================================================


def shade_diffuse(scene: Scene, obj: SceneObject, record: HitRecord, settings: RenderSettings) -> Color:
    """Direct Lambertian lighting at a hit point, averaged over all lights."""
    if not scene.lights:
        return BLACK

    surface = texture_color(obj, record.point)
    albedo = obj.material.albedo
    total = BLACK
    for light in scene.lights:
        dist = distance_to(light, record.point)
        if dist < EPSILON:
            # Light sits on the surface
            continue
        direction = direction_to(light, record.point)
        cos_theta = dot(record.normal, direction)
        if cos_theta <= 0.0:
            continue
        origin = offset_origin(record.point, record.normal, direction, settings.normal_bias)
        if any_intersect(scene.objects, Ray(origin=origin, direction=direction), dist):
            continue
        intensity = apparent_intensity(light, cos_theta, dist)
        total = total + surface * light_color(light) * (intensity * albedo)
    return total / len(scene.lights)


def _trace_secondary(scene: Scene, origin: Vec3, direction: Vec3, depth: int, settings: RenderSettings) -> Color:
    color = trace(scene, Ray(origin=origin, direction=direction), depth + 1, settings)
    return BLACK if color is None else color


def shade_reflect(
    scene: Scene,
    ray: Ray,
    record: HitRecord,
    depth: int,
    settings: RenderSettings,
) -> Color:
    """Color seen along the mirror direction."""
    if depth >= settings.max_depth:
        return BLACK
    direction = normalize(reflect(ray.direction, record.normal))
    origin = offset_origin(record.point, record.normal, direction, settings.normal_bias)
    return _trace_secondary(scene, origin, direction, depth, settings)


def shade_refract(
    scene: Scene,
    ray: Ray,
    obj: SceneObject,
    record: HitRecord,
    index: float,
    depth: int,
    settings: RenderSettings,
) -> Color:
    """Color transmitted through the surface, tinted by its texture."""
    if depth >= settings.max_depth:
        return BLACK
    direction = refract(ray.direction, record.normal, index)
    if direction is None:
        # Total internal reflection; falling back to a mirror is Fresnel's job
        return BLACK
    origin = offset_origin(record.point, record.normal, direction, settings.normal_bias)
    transmitted = _trace_secondary(scene, origin, direction, depth, settings)
    return transmitted * texture_color(obj, record.point)


def shade_node(
    node: Node,
    scene: Scene,
    ray: Ray,
    obj: SceneObject,
    record: HitRecord,
    depth: int,
    settings: RenderSettings,
) -> Color:
    """Resolve one shading node's contribution at a hit point."""
    match node:
        case Diffuse(strength=strength):
            return shade_diffuse(scene, obj, record, settings) * strength
        case Reflect(strength=strength):
            return shade_reflect(scene, ray, record, depth, settings) * strength
        case Refract(strength=strength, index=index):
            return shade_refract(scene, ray, obj, record, index, depth, settings) * strength
        case Fresnel(strength=strength, index=index):
            kr = fresnel_reflectance(ray.direction, record.normal, index)
            color = shade_reflect(scene, ray, record, depth, settings) * kr
            if kr < 1.0:
                color = color + shade_refract(scene, ray, obj, record, index, depth, settings) * (1.0 - kr)
            return color * strength
    raise TypeError(f"Unsupported shading node: {node!r}")


def trace(
    scene: Scene,
    ray: Ray,
    depth: int = 0,
    settings: RenderSettings = DEFAULT_SETTINGS,
) -> Color | None:
    """Trace a ray through the scene.

    Args:
        scene: The scene.
        ray: The ray (normalized direction).
        depth: Number of bounces already taken to reach this ray.
        settings: Render configuration.

    Returns:
        The summed node contributions at the closest hit, or None when the
        ray hits nothing.
    """
    hit = closest_intersect(scene.objects, ray)
    if hit is None:
        return None
    obj, record = hit
    color = BLACK
    for node in obj.material.nodes:
        color = color + shade_node(node, scene, ray, obj, record, depth, settings)
    return color


# =============================================================================
# Public Rendering API
# =============================================================================


def render_pixel(
    scene: Scene,
    x: int,
    y: int,
    settings: RenderSettings = DEFAULT_SETTINGS,
) -> Color | None:
    """Render a single pixel; None if its primary ray hits nothing."""
    return trace(scene, scene.camera.primary_ray(x, y), 0, settings)


def render_frame(
    scene: Scene,
    settings: RenderSettings | None = None,
    callback: ProgressCallback | None = None,
) -> npt.NDArray[np.float64]:
    """Render one complete frame.

    Primary rays for all pixels are generated in one Taichi kernel launch;
    each pixel is then shaded independently.

    Args:
        scene: The scene to render.
        settings: Render configuration (defaults to DEFAULT_SETTINGS).
        callback: Optional progress callback, called after every row with
            (rows_done, total_rows).

    Returns:
        Linear-light frame of shape (height, width, 3), row 0 at the top.
        Values are not clamped.
    """
    if settings is None:
        settings = DEFAULT_SETTINGS

    width = scene.camera.resolution.width
    height = scene.camera.resolution.height
    logger.info(
        "Rendering %dx%d frame: %d objects, %d lights, max depth %d",
        width,
        height,
        scene.object_count,
        scene.light_count,
        settings.max_depth,
    )
    start_time = time.perf_counter()

    origins, directions = generate_primary_rays(scene.camera)
    frame = np.empty((height, width, 3), dtype=np.float64)
    frame[:, :] = settings.background.as_tuple()

    misses = 0
    for y in range(height):
        for x in range(width):
            ray = Ray(origin=origins[y, x], direction=directions[y, x])
            color = trace(scene, ray, 0, settings)
            if color is None:
                misses += 1
            else:
                frame[y, x] = color.as_tuple()
        if callback is not None:
            callback(y + 1, height)

    if settings.white_balance:
        frame = white_balance(frame)

    logger.info(
        "Rendered frame in %.2fs (%d of %d primary rays missed)",
        time.perf_counter() - start_time,
        misses,
        width * height,
    )
    return frame
