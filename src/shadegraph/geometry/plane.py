"""Infinite plane primitive with ray-plane intersection.

A plane is defined by a point on it and a unit normal. The normal points
away from the visible side: a ray hits only when it travels along the
normal (normal . direction > 0), and the surface normal reported in the hit
record is the negated plane normal, i.e. the side facing the ray.

Example:
    >>> from shadegraph.geometry.plane import Plane, hit_plane
    >>> from shadegraph.core.ray import make_ray
    >>> # Floor at z=0 seen from above
    >>> floor = Plane(origin=(0, 0, 0), normal=(0, 0, -1), material=material)
    >>> hit_plane(floor, make_ray((0, 0, 2), (0, 0, -1))).distance
    2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from shadegraph.core.ray import EPSILON, Ray, Vec3, as_vec3, cross, dot, length, normalize, ray_at, vec3
from shadegraph.geometry.sphere import HitRecord

if TYPE_CHECKING:
    from shadegraph.materials.nodes import Material

_WORLD_Y = vec3(0.0, 1.0, 0.0)
_WORLD_Z = vec3(0.0, 0.0, 1.0)


@dataclass(frozen=True, eq=False)
class Plane:
    """An infinite plane.

    Attributes:
        origin: A point on the plane, also the origin of its texture space.
        normal: Unit normal pointing away from the visible side. Normalized
            on construction.
        material: The shading material of the surface.

    Raises:
        ValueError: If the normal has zero length.
    """

    origin: Vec3
    normal: Vec3
    material: Material

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", as_vec3(self.origin))
        object.__setattr__(self, "normal", normalize(as_vec3(self.normal)))


def hit_plane(plane: Plane, ray: Ray) -> HitRecord | None:
    """Test for ray-plane intersection.

    Args:
        plane: The plane to test.
        ray: The ray (direction must be normalized).

    Returns:
        A HitRecord whose normal faces the ray, or None when the ray is
        parallel, approaches from the hidden side, or the plane is behind it.
    """
    proj = dot(plane.normal, ray.direction)
    if proj <= 0.0:
        return None
    distance = dot(plane.origin - ray.origin, plane.normal) / proj
    if distance < 0.0:
        return None
    return HitRecord(distance=distance, point=ray_at(ray, distance), normal=-plane.normal)


def plane_basis(plane: Plane) -> tuple[Vec3, Vec3]:
    """Build an orthonormal in-plane (tangent, bitangent) basis.

    The tangent is normal x world-z, or normal x world-y when the plane is
    horizontal; the bitangent is normal x tangent.
    """
    tangent = cross(plane.normal, _WORLD_Z)
    if length(tangent) < EPSILON:
        tangent = cross(plane.normal, _WORLD_Y)
    tangent = normalize(tangent)
    return tangent, cross(plane.normal, tangent)


def plane_uv(plane: Plane, point: Vec3) -> tuple[float, float]:
    """Project a point onto the plane's texture axes, relative to its origin."""
    tangent, bitangent = plane_basis(plane)
    offset = point - plane.origin
    return dot(offset, tangent), dot(offset, bitangent)
