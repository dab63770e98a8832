"""Preview module for frame output.

Components:
    export: sRGB PNG export and image comparison
"""

from .export import compute_rmse, encode_frame, save_png

__all__ = [
    "encode_frame",
    "save_png",
    "compute_rmse",
]
