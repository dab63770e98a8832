"""Linear-light RGB color model and the sRGB transfer functions.

Colors are carried through the whole render pipeline as 0-1 normalized linear
light. Conversion to and from the display encoding (sRGB) happens only at the
boundaries: when textures are decoded and when the finished frame is written.

Two flavours of each transfer function are provided:
    - scalar (linear_to_srgb / srgb_to_linear) for single Color values;
    - bulk Taichi kernels (encode_srgb / decode_srgb) for whole images.

Example:
    >>> from shadegraph.core.color import Color, WHITE
    >>> tint = Color.from_srgb(100, 100, 255)
    >>> (tint * WHITE * 0.5).clamp()
"""

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti

# Knee of the sRGB curve on the linear side
SRGB_LINEAR_KNEE = 0.0031308

# Knee of the sRGB curve on the encoded side
SRGB_ENCODED_KNEE = 0.04045


# =============================================================================
# Scalar Transfer Functions
# =============================================================================


def srgb_to_linear(value: float) -> float:
    """Decode one sRGB channel in [0, 1] to linear light."""
    if value <= 0.0:
        return 0.0
    if value >= 1.0:
        return 1.0
    if value < SRGB_ENCODED_KNEE:
        return value / 12.92
    return ((value + 0.055) / 1.055) ** 2.4


def linear_to_srgb(value: float) -> float:
    """Encode one linear channel to sRGB in [0, 1], clamping first."""
    if value <= 0.0 or math.isnan(value):
        return 0.0
    if value >= 1.0:
        return 1.0
    if value < SRGB_LINEAR_KNEE:
        return value * 12.92
    return 1.055 * value ** (1.0 / 2.4) - 0.055


def _quantize(value: float) -> int:
    return int(value * 255.0 + 0.5)


@dataclass(frozen=True, slots=True)
class Color:
    """A linear-light RGB color.

    Channels are unbounded while light is accumulated and only clamped to
    [0, 1] when the color is written out.

    Attributes:
        red: Red channel.
        green: Green channel.
        blue: Blue channel.
    """

    red: float
    green: float
    blue: float

    @classmethod
    def from_srgb(cls, red: int, green: int, blue: int) -> "Color":
        """Build a linear color from 8-bit sRGB codes."""
        return cls(
            srgb_to_linear(red / 255.0),
            srgb_to_linear(green / 255.0),
            srgb_to_linear(blue / 255.0),
        )

    @classmethod
    def from_linear(cls, red: int, green: int, blue: int) -> "Color":
        """Build a color from 8-bit codes that are already linear."""
        return cls(red / 255.0, green / 255.0, blue / 255.0)

    def __add__(self, other: "Color") -> "Color":
        return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __mul__(self, other: "Color | float") -> "Color":
        # Pairwise product is light attenuation (modulation)
        if isinstance(other, Color):
            return Color(self.red * other.red, self.green * other.green, self.blue * other.blue)
        return Color(self.red * other, self.green * other, self.blue * other)

    __rmul__ = __mul__

    def __truediv__(self, other: float) -> "Color":
        return self * (1.0 / other)

    def clamp(self) -> "Color":
        """Clamp every channel to [0, 1]."""
        return Color(
            min(max(self.red, 0.0), 1.0),
            min(max(self.green, 0.0), 1.0),
            min(max(self.blue, 0.0), 1.0),
        )

    def to_srgb(self) -> tuple[int, int, int]:
        """Clamp and encode as 8-bit sRGB codes.

        Codes are rounded to nearest, so from_srgb(*c).to_srgb() == c for
        every code c. Linear values survive the trip only to within half a
        code step of the sRGB curve.
        """
        return (
            _quantize(linear_to_srgb(self.red)),
            _quantize(linear_to_srgb(self.green)),
            _quantize(linear_to_srgb(self.blue)),
        )

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)


# =============================================================================
# Bulk Transfer Kernels
# =============================================================================


@ti.kernel
def _encode_srgb_kernel(
    src: ti.types.ndarray(dtype=ti.f32, ndim=3),
    dst: ti.types.ndarray(dtype=ti.u8, ndim=3),
):
    """Clamp linear values and write quantized sRGB codes."""
    for i, j, c in ti.ndrange(src.shape[0], src.shape[1], src.shape[2]):
        x = src[i, j, c]
        y = 0.0
        if x <= 0.0:
            y = 0.0
        elif x >= 1.0:
            y = 1.0
        elif x < SRGB_LINEAR_KNEE:
            y = x * 12.92
        else:
            y = 1.055 * x ** (1.0 / 2.4) - 0.055
        dst[i, j, c] = ti.cast(y * 255.0 + 0.5, ti.u8)


@ti.kernel
def _decode_srgb_kernel(
    src: ti.types.ndarray(dtype=ti.u8, ndim=3),
    dst: ti.types.ndarray(dtype=ti.f32, ndim=3),
):
    """Decode 8-bit sRGB codes to linear light."""
    for i, j, c in ti.ndrange(src.shape[0], src.shape[1], src.shape[2]):
        x = ti.cast(src[i, j, c], ti.f32) / 255.0
        y = 0.0
        if x <= 0.0:
            y = 0.0
        elif x >= 1.0:
            y = 1.0
        elif x < SRGB_ENCODED_KNEE:
            y = x / 12.92
        else:
            y = ((x + 0.055) / 1.055) ** 2.4
        dst[i, j, c] = y


def _check_image_shape(image: np.ndarray) -> None:
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {image.shape}")


def encode_srgb(frame: npt.ArrayLike) -> npt.NDArray[np.uint8]:
    """Clamp a linear frame and encode it to 8-bit sRGB.

    NaN and infinite values are absorbed by the clamp (NaN and -inf become
    black, +inf becomes full intensity).

    Args:
        frame: Linear image of shape (H, W, 3).

    Returns:
        uint8 array of shape (H, W, 3).

    Raises:
        ValueError: If the frame is not shaped (H, W, 3).
    """
    src = np.asarray(frame, dtype=np.float32)
    _check_image_shape(src)
    src = np.ascontiguousarray(np.nan_to_num(src, nan=0.0, posinf=1.0, neginf=0.0))
    dst = np.zeros(src.shape, dtype=np.uint8)
    _encode_srgb_kernel(src, dst)
    return dst


def decode_srgb(image: npt.ArrayLike) -> npt.NDArray[np.float32]:
    """Decode an 8-bit sRGB image to linear light.

    Args:
        image: uint8 image of shape (H, W, 3).

    Returns:
        float32 array of shape (H, W, 3) in [0, 1].

    Raises:
        ValueError: If the image is not shaped (H, W, 3).
    """
    src = np.ascontiguousarray(image, dtype=np.uint8)
    _check_image_shape(src)
    dst = np.zeros(src.shape, dtype=np.float32)
    _decode_srgb_kernel(src, dst)
    return dst


def white_balance(frame: npt.NDArray[np.floating]) -> npt.NDArray[np.float64]:
    """Normalize an over-exposed frame so its brightest channel is 1.

    A pure post-pass over a finished frame: frames whose peak does not exceed
    1 are returned unchanged (as a copy).
    """
    result = np.array(frame, dtype=np.float64)
    finite = result[np.isfinite(result)]
    peak = float(finite.max()) if finite.size else 0.0
    if peak > 1.0:
        result /= peak
    return result
