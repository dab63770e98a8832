"""Core rendering module.

Components:
    ray: Ray data structure, vector utilities, reflection/refraction and
        Fresnel helpers
    color: Linear-light Color, sRGB transfer functions (scalar and Taichi
        kernels), white-balance post-pass
    tracer: Recursive shading-graph evaluation and frame rendering

The shading graph recurses in plain Python; data-parallel stages (primary
ray generation, sRGB encode/decode of whole images) run as Taichi kernels.
"""

from .color import (
    BLACK,
    WHITE,
    Color,
    decode_srgb,
    encode_srgb,
    linear_to_srgb,
    srgb_to_linear,
    white_balance,
)
from .ray import (
    Ray,
    Vec3,
    as_vec3,
    cross,
    distance,
    dot,
    fresnel_reflectance,
    length,
    make_ray,
    normalize,
    offset_origin,
    ray_at,
    reflect,
    refract,
    vec3,
)

# Note: tracer is NOT imported here to avoid circular imports.
# Import directly from shadegraph.core.tracer when needed.

__all__ = [
    "Ray",
    "Vec3",
    "ray_at",
    "make_ray",
    "vec3",
    "as_vec3",
    "length",
    "distance",
    "normalize",
    "dot",
    "cross",
    "reflect",
    "refract",
    "fresnel_reflectance",
    "offset_origin",
    "Color",
    "BLACK",
    "WHITE",
    "srgb_to_linear",
    "linear_to_srgb",
    "encode_srgb",
    "decode_srgb",
    "white_balance",
]
