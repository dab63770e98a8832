"""Materials module: textures and shading-node graphs.

Components:
    texture: Solid colors, image maps, checkerboard fallback, image loading
    nodes: Diffuse/Reflect/Refract/Fresnel nodes and the Material container
"""

from .nodes import Diffuse, Fresnel, Material, Node, Reflect, Refract, normalize_strengths
from .texture import (
    CHECKER_DARK,
    CHECKER_LIGHT,
    ImageMap,
    Texture,
    checkerboard,
    load_image_map,
    sample_texture,
)

__all__ = [
    # Nodes
    "Diffuse",
    "Reflect",
    "Refract",
    "Fresnel",
    "Node",
    "Material",
    "normalize_strengths",
    # Textures
    "ImageMap",
    "Texture",
    "checkerboard",
    "sample_texture",
    "load_image_map",
    "CHECKER_LIGHT",
    "CHECKER_DARK",
]
