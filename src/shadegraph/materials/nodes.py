"""Materials as ordered lists of shading nodes.

Each node adds one contribution to the color leaving a hit point:

    Diffuse:  direct lighting from every scene light (with shadow rays)
    Reflect:  a mirror bounce
    Refract:  transmission through the surface (Snell's law), tinted by
              the surface texture
    Fresnel:  reflect and refract blended by the Fresnel reflectance

Contributions are summed, not blended, so a material's node strengths are
rescaled at construction to unit L2 norm (sum of squares equals 1). The
evaluation of the nodes lives in shadegraph.core.tracer.

Example:
    >>> from shadegraph.materials.nodes import Diffuse, Material, Reflect
    >>> chrome = Material(texture=None, albedo=0.8, nodes=[Diffuse(0.15), Reflect(1.0)])
    >>> [round(node.strength, 3) for node in chrome.nodes]
    [0.148, 0.989]
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, replace

from shadegraph.materials.texture import Texture


@dataclass(frozen=True)
class Diffuse:
    """Lambertian response to the scene lights."""

    strength: float


@dataclass(frozen=True)
class Reflect:
    """Perfect mirror reflection."""

    strength: float


@dataclass(frozen=True)
class Refract:
    """Transmission through a dielectric with the given refractive index."""

    strength: float
    index: float


@dataclass(frozen=True)
class Fresnel:
    """Reflection and refraction weighted by the Fresnel reflectance."""

    strength: float
    index: float


Node = Diffuse | Reflect | Refract | Fresnel


def _validate_node(node: Node) -> None:
    if not isinstance(node, (Diffuse, Reflect, Refract, Fresnel)):
        raise TypeError(f"Unsupported shading node: {node!r}")
    if not (math.isfinite(node.strength) and node.strength >= 0.0):
        raise ValueError(f"Node strength must be non-negative, got {node.strength}")
    if isinstance(node, (Refract, Fresnel)) and not node.index > 0.0:
        raise ValueError(f"Refractive index must be positive, got {node.index}")


def normalize_strengths(nodes: Iterable[Node]) -> tuple[Node, ...]:
    """Rescale node strengths so that their squares sum to 1.

    Raises:
        ValueError: If a node is invalid or every strength is zero.
    """
    nodes = tuple(nodes)
    for node in nodes:
        _validate_node(node)
    if not nodes:
        return nodes
    norm = math.sqrt(sum(node.strength * node.strength for node in nodes))
    if norm == 0.0:
        raise ValueError("At least one node must have a non-zero strength")
    return tuple(replace(node, strength=node.strength / norm) for node in nodes)


@dataclass(frozen=True, eq=False)
class Material:
    """Surface description shared by every primitive type.

    Attributes:
        texture: Surface texture; None selects the procedural checkerboard.
        albedo: Fraction of incident diffuse light reflected, in [0, 1].
        nodes: Ordered shading nodes. Strengths are L2-normalized on
            construction; a material without nodes renders black.

    Raises:
        ValueError: If albedo is outside [0, 1] or a node is invalid.
    """

    texture: Texture | None
    albedo: float
    nodes: tuple[Node, ...]

    def __post_init__(self) -> None:
        if not 0.0 <= self.albedo <= 1.0:
            raise ValueError(f"Albedo must be in [0, 1], got {self.albedo}")
        object.__setattr__(self, "nodes", normalize_strengths(self.nodes))
