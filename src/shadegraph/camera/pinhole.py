"""Pinhole camera with Euler-angle orientation.

At zero rotation the camera looks down +x: the virtual sensor lies in the
camera's local y-z plane around `location`, and the pinhole (focal point)
sits `focal_length` behind it. Pixel (x, y) maps to the sensor point

    (0, hx * ((x + 0.5) / W - 0.5), hy * ((0.5 - y) / H + 0.5))

(row 0 is the top of the image), which is then rotated about x, then y,
then z by the camera's rotation angles and translated by its location.
Primary rays start on the sensor and point away from the focal point.

The same rotation is applied to the focal-point offset, so the pinhole
always stays on the sensor's optical axis.

Two entry points are provided:
    - Camera.primary_ray(x, y): one ray, float64, for the Python tracer;
    - generate_primary_rays(camera): every pixel at once in a Taichi kernel.

Example:
    >>> from shadegraph.camera.pinhole import Camera, Resolution
    >>> camera = Camera(
    ...     location=(0.0, 0.0, -0.1),
    ...     rotation=(0.0, 0.2, 0.0),
    ...     focal_length=0.4,
    ...     resolution=Resolution(640, 480),
    ...     hx=0.5,
    ...     hy=0.375,
    ... )
    >>> ray = camera.primary_ray(320, 240)
"""

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from shadegraph.core.ray import Ray, Vec3, as_vec3, normalize, vec3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class Resolution:
    """Output image size in pixels."""

    width: int
    height: int


@dataclass(frozen=True, eq=False)
class Camera:
    """Configuration for a pinhole camera.

    Attributes:
        location: Center of the virtual sensor in world space.
        rotation: Rotation angles in radians about x, y and z, applied in
            that order.
        focal_length: Distance from the sensor to the pinhole (> 0).
        resolution: Output image size.
        hx: Sensor extent mapped across the image width.
        hy: Sensor extent mapped across the image height.

    Raises:
        ValueError: On a non-positive focal length, resolution or extent.
    """

    location: Vec3
    rotation: Vec3
    focal_length: float
    resolution: Resolution
    hx: float
    hy: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "location", as_vec3(self.location))
        object.__setattr__(self, "rotation", as_vec3(self.rotation))
        if not self.focal_length > 0.0:
            raise ValueError(f"Focal length must be positive, got {self.focal_length}")
        if self.resolution.width <= 0 or self.resolution.height <= 0:
            raise ValueError(
                f"Resolution must be positive, got "
                f"{self.resolution.width}x{self.resolution.height}"
            )
        if not (self.hx > 0.0 and self.hy > 0.0):
            raise ValueError(f"Sensor extents must be positive, got hx={self.hx}, hy={self.hy}")

    def focal_point(self) -> Vec3:
        """The pinhole, `focal_length` behind the sensor along the view axis."""
        return self.location + rotate(vec3(-self.focal_length, 0.0, 0.0), self.rotation)

    def pixel_to_world(self, x: int, y: int) -> Vec3:
        """World-space point on the sensor for pixel (x, y)."""
        width = self.resolution.width
        height = self.resolution.height
        offset = vec3(
            0.0,
            self.hx * ((x + 0.5) / width - 0.5),
            self.hy * ((0.5 - y) / height + 0.5),
        )
        return self.location + rotate(offset, self.rotation)

    def primary_ray(self, x: int, y: int) -> Ray:
        """The camera ray through pixel (x, y)."""
        point = self.pixel_to_world(x, y)
        return Ray(origin=point, direction=normalize(point - self.focal_point()))


def rotate(v: Vec3, rotation: Vec3) -> Vec3:
    """Rotate a vector about x, then y, then z by the given angles."""
    x, y, z = float(v[0]), float(v[1]), float(v[2])
    rx, ry, rz = float(rotation[0]), float(rotation[1]), float(rotation[2])

    # about x
    y, z = y * math.cos(rx) - z * math.sin(rx), z * math.cos(rx) + y * math.sin(rx)
    # about y
    z, x = z * math.cos(ry) - x * math.sin(ry), z * math.sin(ry) + x * math.cos(ry)
    # about z
    x, y = x * math.cos(rz) - y * math.sin(rz), x * math.sin(rz) + y * math.cos(rz)
    return vec3(x, y, z)


# =============================================================================
# Bulk Ray Generation (Taichi)
# =============================================================================


@ti.func
def _rotate_xyz(v: tm.vec3, rx: ti.f32, ry: ti.f32, rz: ti.f32) -> tm.vec3:
    """Taichi twin of rotate()."""
    # about x
    y1 = v.y * ti.cos(rx) - v.z * ti.sin(rx)
    z1 = v.z * ti.cos(rx) + v.y * ti.sin(rx)
    # about y
    z2 = z1 * ti.cos(ry) - v.x * ti.sin(ry)
    x2 = z1 * ti.sin(ry) + v.x * ti.cos(ry)
    # about z
    x3 = x2 * ti.cos(rz) - y1 * ti.sin(rz)
    y3 = x2 * ti.sin(rz) + y1 * ti.cos(rz)
    return tm.vec3(x3, y3, z2)


@ti.kernel
def _primary_rays_kernel(
    origins: ti.types.ndarray(dtype=ti.f32, ndim=3),
    directions: ti.types.ndarray(dtype=ti.f32, ndim=3),
    lx: ti.f32,
    ly: ti.f32,
    lz: ti.f32,
    rx: ti.f32,
    ry: ti.f32,
    rz: ti.f32,
    focal_length: ti.f32,
    hx: ti.f32,
    hy: ti.f32,
):
    """Write the sensor point and unit direction of every pixel."""
    height = origins.shape[0]
    width = origins.shape[1]
    location = tm.vec3(lx, ly, lz)
    focal = location + _rotate_xyz(tm.vec3(-focal_length, 0.0, 0.0), rx, ry, rz)
    for j, i in ti.ndrange(height, width):
        u = hx * ((ti.cast(i, ti.f32) + 0.5) / ti.cast(width, ti.f32) - 0.5)
        v = hy * ((0.5 - ti.cast(j, ti.f32)) / ti.cast(height, ti.f32) + 0.5)
        point = location + _rotate_xyz(tm.vec3(0.0, u, v), rx, ry, rz)
        direction = tm.normalize(point - focal)
        origins[j, i, 0] = point.x
        origins[j, i, 1] = point.y
        origins[j, i, 2] = point.z
        directions[j, i, 0] = direction.x
        directions[j, i, 1] = direction.y
        directions[j, i, 2] = direction.z


def generate_primary_rays(
    camera: Camera,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """Generate the primary ray of every pixel in one kernel launch.

    Args:
        camera: The camera.

    Returns:
        (origins, directions), each of shape (height, width, 3), indexed
        [row, column]. Computed in float32 and returned as float64 with
        directions renormalized.
    """
    shape = (camera.resolution.height, camera.resolution.width, 3)
    origins = np.zeros(shape, dtype=np.float32)
    directions = np.zeros(shape, dtype=np.float32)
    lx, ly, lz = (float(c) for c in camera.location)
    rx, ry, rz = (float(c) for c in camera.rotation)
    _primary_rays_kernel(
        origins,
        directions,
        lx,
        ly,
        lz,
        rx,
        ry,
        rz,
        float(camera.focal_length),
        float(camera.hx),
        float(camera.hy),
    )
    directions64 = directions.astype(np.float64)
    # Restore unit length lost to float32 rounding
    directions64 /= np.linalg.norm(directions64, axis=-1, keepdims=True)
    return origins.astype(np.float64), directions64
