"""Ray data structure and vector utilities.

This module provides the Ray dataclass and the vector helpers shared by the
camera, the primitives and the shading graph. Vectors and points are plain
NumPy float64 arrays of shape (3,).

Example:
    >>> from shadegraph.core.ray import make_ray, ray_at, vec3
    >>> ray = make_ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -2.0))
    >>> ray.direction  # normalized on construction
    array([ 0.,  0., -1.])
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

# Type alias for 3D vectors and points
Vec3 = npt.NDArray[np.float64]

# Below this length a vector is treated as degenerate
EPSILON = 1e-12


def vec3(x: float, y: float, z: float) -> Vec3:
    """Create a float64 3-vector."""
    return np.array((x, y, z), dtype=np.float64)


def as_vec3(value: Sequence[float] | Vec3) -> Vec3:
    """Convert a tuple/list/array to a float64 3-vector.

    Raises:
        ValueError: If the value does not have exactly three components.
    """
    result = np.asarray(value, dtype=np.float64).reshape(-1)
    if result.shape != (3,):
        raise ValueError(f"Expected 3 components, got {result.shape[0]}")
    return result.copy()


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Always unit length when
            the ray is built through make_ray().
    """

    origin: Vec3
    direction: Vec3


def make_ray(origin: Sequence[float] | Vec3, direction: Sequence[float] | Vec3) -> Ray:
    """Create a ray, normalizing its direction.

    Raises:
        ValueError: If the direction has zero length.
    """
    return Ray(origin=as_vec3(origin), direction=normalize(as_vec3(direction)))


def ray_at(ray: Ray, t: float) -> Vec3:
    """Compute the point ray.origin + t * ray.direction."""
    return ray.origin + t * ray.direction


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Vec3, b: Vec3) -> float:
    """Dot product as a Python float."""
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Cross product a x b."""
    return vec3(
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def length(v: Vec3) -> float:
    """Euclidean length."""
    return math.sqrt(dot(v, v))


def distance(a: Vec3, b: Vec3) -> float:
    """Euclidean distance between two points."""
    return length(a - b)


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    Raises:
        ValueError: If v has (near) zero length.
    """
    n = length(v)
    if n < EPSILON or not math.isfinite(n):
        raise ValueError(f"Cannot normalize degenerate vector {tuple(v)}")
    return v / n


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Mirror an incident direction about a unit normal: i - 2(i.n)n."""
    return incident - 2.0 * dot(incident, normal) * normal


def refract(incident: Vec3, normal: Vec3, index: float) -> Vec3 | None:
    """Refract a unit incident direction through a surface using Snell's law.

    The normal may face either side of the surface. When the incident ray is
    inside the medium (incident . normal > 0) the normal is flipped and the
    index ratio inverted.

    Args:
        incident: The incoming direction (normalized).
        normal: The surface normal (normalized).
        index: Refractive index of the medium behind the surface.

    Returns:
        The unit refracted direction, or None on total internal reflection.
    """
    cos_i = max(-1.0, min(1.0, dot(incident, normal)))
    if cos_i < 0.0:
        # Entering the medium
        cos_i = -cos_i
        eta = 1.0 / index
        facing = normal
    else:
        eta = index
        facing = -normal
    k = 1.0 - eta * eta * (1.0 - cos_i * cos_i)
    if k < 0.0:
        return None
    direction = eta * incident + (eta * cos_i - math.sqrt(k)) * facing
    return normalize(direction)


def fresnel_reflectance(incident: Vec3, normal: Vec3, index: float) -> float:
    """Unpolarized Fresnel reflectance of a dielectric boundary.

    Averages the s- and p-polarized reflectances. eta_i/eta_t is chosen from
    the sign of incident . normal, so the normal may face either side.

    Returns:
        kr in [0, 1]; exactly 1.0 on total internal reflection.
    """
    cos_i = max(-1.0, min(1.0, dot(incident, normal)))
    eta_i, eta_t = 1.0, index
    if cos_i > 0.0:
        eta_i, eta_t = eta_t, eta_i
    sin_t = eta_i / eta_t * math.sqrt(max(0.0, 1.0 - cos_i * cos_i))
    if sin_t >= 1.0:
        # Total internal reflection (sin_t == 1 is its grazing limit)
        return 1.0
    cos_t = math.sqrt(max(0.0, 1.0 - sin_t * sin_t))
    cos_i = abs(cos_i)
    r_s = ((eta_t * cos_i) - (eta_i * cos_t)) / ((eta_t * cos_i) + (eta_i * cos_t))
    r_p = ((eta_i * cos_i) - (eta_t * cos_t)) / ((eta_i * cos_i) + (eta_t * cos_t))
    return (r_s * r_s + r_p * r_p) / 2.0


def offset_origin(point: Vec3, normal: Vec3, direction: Vec3, bias: float) -> Vec3:
    """Push a ray origin off the surface on the side the new ray travels into.

    Args:
        point: The intersection point.
        normal: The surface normal at the point.
        direction: The direction of the ray leaving the point.
        bias: Offset distance.
    """
    if dot(direction, normal) < 0.0:
        return point - bias * normal
    return point + bias * normal
