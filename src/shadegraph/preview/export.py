"""Image export utilities for rendered frames.

The renderer hands over a finished linear-light frame exactly once; this
module turns it into display-encoded pixels: optional white balance, clamp
to [0, 1], sRGB encode, 8-bit quantization.

Supported formats:
    - PNG (8-bit sRGB via Pillow)

Example:
    >>> from shadegraph.core.tracer import render_frame
    >>> from shadegraph.preview.export import save_png
    >>>
    >>> frame = render_frame(scene)
    >>> save_png(frame, "out.png")
"""

from __future__ import annotations

import logging
from os import PathLike

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from shadegraph.core.color import encode_srgb, white_balance

logger = logging.getLogger(__name__)


def encode_frame(
    frame: npt.NDArray[np.floating],
    *,
    balance: bool = False,
) -> npt.NDArray[np.uint8]:
    """Convert a linear frame to 8-bit sRGB.

    Args:
        frame: Linear image of shape (H, W, 3), unclamped.
        balance: Apply the white-balance post-pass before clamping.

    Returns:
        uint8 array of shape (H, W, 3).
    """
    if balance:
        frame = white_balance(frame)
    return encode_srgb(frame)


def save_png(
    frame: npt.NDArray[np.floating],
    filepath: str | PathLike[str],
    *,
    balance: bool = False,
) -> None:
    """Save a linear frame as an 8-bit sRGB PNG file.

    Args:
        frame: Linear image of shape (H, W, 3).
        filepath: Output file path (should end in .png).
        balance: Apply the white-balance post-pass before encoding.
    """
    image_uint8 = encode_frame(frame, balance=balance)
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(filepath)
    logger.info("Saved %dx%d image to %s", image_uint8.shape[1], image_uint8.shape[0], filepath)


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Compute root mean squared error between two images.

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
