"""Sphere primitive with closed-form ray-sphere intersection.

The intersection uses the geometric (chord) formulation:

    L    = center - ray.origin
    adj  = L . direction          (distance to the closest approach)
    d2   = L . L - adj^2          (squared distance of closest approach)
    half = sqrt(r^2 - d2)         (half chord length)

The ray misses when d2 > r^2 or when both roots adj +/- half lie behind the
origin. When the origin is inside the sphere the non-negative (exit) root is
used.

Example:
    >>> from shadegraph.geometry.sphere import Sphere, hit_sphere
    >>> from shadegraph.core.ray import make_ray
    >>> sphere = Sphere(origin=(0.0, 0.0, -5.0), radius=1.0, material=material)
    >>> record = hit_sphere(sphere, make_ray((0, 0, 0), (0, 0, -1)))
    >>> record.distance
    4.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from shadegraph.core.ray import Ray, Vec3, as_vec3, dot, normalize, ray_at

if TYPE_CHECKING:
    from shadegraph.materials.nodes import Material


@dataclass(frozen=True, eq=False)
class HitRecord:
    """Record of a ray-primitive intersection.

    Attributes:
        distance: Distance along the ray to the hit (non-negative).
        point: The 3D point where the ray hit the surface.
        normal: Unit surface normal at the hit point. Spheres report the
            outward normal; planes report the side facing the ray.
    """

    distance: float
    point: Vec3
    normal: Vec3


@dataclass(frozen=True, eq=False)
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        origin: The center of the sphere.
        radius: The radius of the sphere (positive).
        material: The shading material of the surface.

    Raises:
        ValueError: If the radius is not a positive finite number.
    """

    origin: Vec3
    radius: float
    material: Material

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", as_vec3(self.origin))
        if not (math.isfinite(self.radius) and self.radius > 0.0):
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")


def hit_sphere(sphere: Sphere, ray: Ray) -> HitRecord | None:
    """Test for ray-sphere intersection.

    Args:
        sphere: The sphere to test.
        ray: The ray (direction must be normalized).

    Returns:
        A HitRecord for the nearest non-negative root, or None on a miss.
    """
    to_center = sphere.origin - ray.origin
    adj = dot(to_center, ray.direction)
    d2 = dot(to_center, to_center) - adj * adj
    radius2 = sphere.radius * sphere.radius
    if d2 > radius2:
        return None

    half_chord = math.sqrt(radius2 - d2)
    t_front = adj - half_chord
    t_back = adj + half_chord
    if t_front < 0.0 and t_back < 0.0:
        # Sphere is entirely behind the ray
        return None

    # Inside the sphere only the exit root lies ahead
    distance = t_back if t_front < 0.0 else t_front
    point = ray_at(ray, distance)
    normal = normalize(point - sphere.origin)
    return HitRecord(distance=distance, point=point, normal=normal)


def sphere_uv(sphere: Sphere, point: Vec3) -> tuple[float, float]:
    """Compute spherical texture coordinates (phi, theta) for a surface point.

    phi is the azimuth from a single-argument arctangent wrapped into
    [0, 2*pi); theta is the polar angle in [0, pi]. At dx == 0 the azimuth
    is the limit of the arctangent, +/- pi/2.
    """
    dx, dy, dz = point - sphere.origin
    if dx != 0.0:
        phi = math.atan(dy / dx)
    else:
        phi = math.copysign(math.pi / 2.0, dy)
    if phi < 0.0:
        phi += 2.0 * math.pi
    theta = math.acos(max(-1.0, min(1.0, dz / sphere.radius)))
    return phi, theta
