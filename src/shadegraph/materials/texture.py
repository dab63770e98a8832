"""Surface textures: solid colors, image maps and the checkerboard fallback.

A texture is one of:
    - Color: constant regardless of the surface coordinates;
    - ImageMap: a grid of linear colors tiled across the surface;
    - None: the procedural two-tone checkerboard.

Texture coordinates (u, v) come from the primitive (spherical angles for
spheres, in-plane distances for planes). Image grids are stored in linear
light; sRGB decoding happens once, when the image is loaded.

Example:
    >>> from shadegraph.materials.texture import load_image_map, sample_texture
    >>> fire = load_image_map("assets/fire.jpg", scale=5.0)
    >>> sample_texture(fire, 0.3, 1.2)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from os import PathLike

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from shadegraph.core.color import Color, decode_srgb

logger = logging.getLogger(__name__)

# Checkerboard period in texture units; each band covers half of it
CHECKER_PERIOD = 0.5

# Checkerboard tones (linear)
CHECKER_LIGHT = Color(225.0 / 255.0, 1.0, 225.0 / 255.0)
CHECKER_DARK = Color(0.0, 0.0, 0.0)


@dataclass(frozen=True, eq=False)
class ImageMap:
    """An image tiled across a surface.

    Attributes:
        pixels: Linear-light grid of shape (H, W, 3); row 0 is v = 0.
        scale: Size of one tile in texture units along the image's longer
            axis. The shorter axis tile is shrunk by the aspect ratio so
            texels stay square.

    Raises:
        ValueError: If the grid is empty or not (H, W, 3), or scale <= 0.
    """

    pixels: npt.NDArray[np.float64]
    scale: float

    def __post_init__(self) -> None:
        pixels = np.asarray(self.pixels, dtype=np.float64)
        if pixels.ndim != 3 or pixels.shape[2] != 3 or pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError(f"Image map grid must be (H, W, 3), got {pixels.shape}")
        if not self.scale > 0.0:
            raise ValueError(f"Image map scale must be positive, got {self.scale}")
        pixels.setflags(write=False)
        object.__setattr__(self, "pixels", pixels)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def tile_size(self) -> tuple[float, float]:
        """Tile extent (along u, along v) in texture units."""
        if self.width > self.height:
            return self.scale, self.scale * self.height / self.width
        if self.height > self.width:
            return self.scale * self.width / self.height, self.scale
        return self.scale, self.scale

    def sample(self, u: float, v: float) -> Color:
        """Nearest-texel lookup with wrap-around tiling."""
        tile_u, tile_v = self.tile_size()
        fu = (u % tile_u) / tile_u
        fv = (v % tile_v) / tile_v
        # fu/fv can round up to exactly 1.0 for tiny negative inputs
        col = min(int(fu * self.width), self.width - 1)
        row = min(int(fv * self.height), self.height - 1)
        red, green, blue = self.pixels[row, col]
        return Color(float(red), float(green), float(blue))


Texture = Color | ImageMap


def checkerboard(u: float, v: float) -> Color:
    """Two-axis checkerboard: XOR of the band parities along u and v."""
    half = CHECKER_PERIOD / 2.0
    if not (math.isfinite(u) and math.isfinite(v)):
        return CHECKER_DARK
    if ((u % CHECKER_PERIOD) < half) ^ ((v % CHECKER_PERIOD) < half):
        return CHECKER_LIGHT
    return CHECKER_DARK


def sample_texture(texture: Texture | None, u: float, v: float, checker_scale: float = 1.0) -> Color:
    """Sample a texture at surface coordinates (u, v).

    Args:
        texture: The texture, or None for the procedural checkerboard.
        u: First texture coordinate.
        v: Second texture coordinate.
        checker_scale: Factor applied to (u, v) before the checkerboard is
            evaluated (spheres use 1/pi so bands follow fractions of pi).

    Returns:
        The linear texture color.
    """
    match texture:
        case Color():
            return texture
        case ImageMap():
            return texture.sample(u, v)
        case None:
            return checkerboard(u * checker_scale, v * checker_scale)
    raise TypeError(f"Unsupported texture type: {type(texture).__name__}")


def load_image_map(path: str | PathLike[str], scale: float) -> ImageMap:
    """Load an image file as a linear-light ImageMap.

    The file is decoded with Pillow, converted to 8-bit RGB and decoded from
    sRGB to linear light.

    Args:
        path: Image file path (any format Pillow reads).
        scale: Tile size, see ImageMap.

    Returns:
        The decoded ImageMap.

    Raises:
        ValueError: If the file is missing or cannot be decoded.
    """
    try:
        with PILImage.open(path) as image:
            rgb = np.asarray(image.convert("RGB"), dtype=np.uint8)
    except OSError as exc:
        raise ValueError(f"Could not load texture {str(path)!r}: {exc}") from exc

    logger.debug("Loaded texture %s (%dx%d)", path, rgb.shape[1], rgb.shape[0])
    return ImageMap(pixels=decode_srgb(rgb), scale=scale)
