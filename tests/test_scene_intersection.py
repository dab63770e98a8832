"""Tests for scene-level intersection queries.

Tests cover:
- Closest-hit selection across spheres and planes
- Tie-breaking by list order
- Shadow queries bounded by a maximum distance
- Texture lookup per primitive type
"""

import numpy as np
import pytest


def _sphere(material, z, radius=1.0):
    from shadegraph.geometry.sphere import Sphere

    return Sphere(origin=(0.0, 0.0, z), radius=radius, material=material)


class TestClosestIntersect:
    """Tests for closest_intersect."""

    def test_empty_scene(self):
        from shadegraph.core.ray import make_ray
        from shadegraph.scene.intersection import closest_intersect

        assert closest_intersect([], make_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))) is None

    def test_nearest_object_wins(self, white_diffuse):
        from shadegraph.core.ray import make_ray
        from shadegraph.scene.intersection import closest_intersect

        far = _sphere(white_diffuse, -10.0)
        near = _sphere(white_diffuse, -4.0)
        hit = closest_intersect([far, near], make_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)))

        assert hit is not None
        obj, record = hit
        assert obj is near
        assert record.distance == pytest.approx(3.0)

    def test_sphere_in_front_of_plane(self, white_diffuse):
        from shadegraph.core.ray import make_ray
        from shadegraph.geometry.plane import Plane
        from shadegraph.scene.intersection import closest_intersect

        floor = Plane(origin=(0.0, 0.0, -20.0), normal=(0.0, 0.0, -1.0), material=white_diffuse)
        ball = _sphere(white_diffuse, -5.0)
        obj, _ = closest_intersect([floor, ball], make_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)))
        assert obj is ball

    def test_first_object_wins_ties(self, white_diffuse):
        from shadegraph.core.ray import make_ray
        from shadegraph.scene.intersection import closest_intersect

        first = _sphere(white_diffuse, -4.0)
        second = _sphere(white_diffuse, -4.0)
        obj, _ = closest_intersect([first, second], make_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)))
        assert obj is first

    def test_unsupported_object(self):
        from shadegraph.core.ray import make_ray
        from shadegraph.scene.intersection import intersect

        with pytest.raises(TypeError):
            intersect("box", make_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)))


class TestAnyIntersect:
    """Tests for shadow-ray queries."""

    def test_blocker_before_max_distance(self, white_diffuse):
        from shadegraph.core.ray import make_ray
        from shadegraph.scene.intersection import any_intersect

        ray = make_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert any_intersect([_sphere(white_diffuse, -4.0)], ray, 10.0)

    def test_blocker_beyond_max_distance_ignored(self, white_diffuse):
        from shadegraph.core.ray import make_ray
        from shadegraph.scene.intersection import any_intersect

        ray = make_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert not any_intersect([_sphere(white_diffuse, -4.0)], ray, 2.0)

    def test_unbounded_for_suns(self, white_diffuse):
        from shadegraph.core.ray import make_ray
        from shadegraph.scene.intersection import any_intersect

        ray = make_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert any_intersect([_sphere(white_diffuse, -1000.0)], ray, float("inf"))


class TestTextureColor:
    """Tests for per-primitive texture lookup."""

    def test_solid_texture(self, white_diffuse):
        from shadegraph.core.color import WHITE
        from shadegraph.core.ray import vec3
        from shadegraph.scene.intersection import texture_color

        assert texture_color(_sphere(white_diffuse, 0.0), vec3(0.0, 0.0, 1.0)) == WHITE

    def test_plane_checker_uses_plane_coordinates(self):
        from shadegraph.core.ray import vec3
        from shadegraph.geometry.plane import Plane, plane_uv
        from shadegraph.materials.nodes import Diffuse, Material
        from shadegraph.materials.texture import checkerboard
        from shadegraph.scene.intersection import texture_color

        material = Material(texture=None, albedo=1.0, nodes=[Diffuse(1.0)])
        plane = Plane(origin=(0.0, 0.0, 0.0), normal=(0.0, 0.0, -1.0), material=material)
        point = vec3(0.1, 0.4, 0.0)
        assert texture_color(plane, point) == checkerboard(*plane_uv(plane, point))

    def test_sphere_checker_in_fractions_of_pi(self):
        import math

        from shadegraph.core.ray import normalize, vec3
        from shadegraph.geometry.sphere import Sphere, sphere_uv
        from shadegraph.materials.nodes import Diffuse, Material
        from shadegraph.materials.texture import checkerboard
        from shadegraph.scene.intersection import texture_color

        material = Material(texture=None, albedo=1.0, nodes=[Diffuse(1.0)])
        sphere = Sphere(origin=(0.0, 0.0, 0.0), radius=1.0, material=material)
        point = normalize(vec3(1.0, 0.5, 0.3))
        phi, theta = sphere_uv(sphere, point)
        assert texture_color(sphere, point) == checkerboard(phi / math.pi, theta / math.pi)
        assert np.isfinite(phi)
