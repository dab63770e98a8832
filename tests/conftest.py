"""Pytest configuration for shadegraph tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu)
    yield


@pytest.fixture
def small_camera():
    """A 4x3 camera at the origin looking down +x."""
    from shadegraph.camera.pinhole import Camera, Resolution

    return Camera(
        location=(0.0, 0.0, 0.0),
        rotation=(0.0, 0.0, 0.0),
        focal_length=0.4,
        resolution=Resolution(4, 3),
        hx=0.5,
        hy=0.375,
    )


@pytest.fixture
def white_diffuse():
    """A white, fully diffuse material."""
    from shadegraph.core.color import WHITE
    from shadegraph.materials.nodes import Diffuse, Material

    return Material(texture=WHITE, albedo=1.0, nodes=[Diffuse(1.0)])
