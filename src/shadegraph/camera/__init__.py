"""Camera module for view and ray generation.

Components:
    pinhole: Pinhole camera with Euler-angle orientation

Pixel coordinates run left to right (x) and top to bottom (y). Primary rays
start on the virtual sensor and point away from the pinhole.
"""

from .pinhole import Camera, Resolution, generate_primary_rays, rotate

__all__ = [
    "Camera",
    "Resolution",
    "generate_primary_rays",
    "rotate",
]
