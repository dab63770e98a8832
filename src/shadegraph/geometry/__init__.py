"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive, HitRecord, spherical UV mapping
    plane: Infinite plane primitive with an in-plane UV basis

Ray-object intersection follows the pattern:
    record = hit_shape(shape, ray)   # HitRecord or None
"""

from .plane import Plane, hit_plane, plane_basis, plane_uv
from .sphere import HitRecord, Sphere, hit_sphere, sphere_uv

__all__ = [
    "HitRecord",
    "Sphere",
    "hit_sphere",
    "sphere_uv",
    "Plane",
    "hit_plane",
    "plane_basis",
    "plane_uv",
]
