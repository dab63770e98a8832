"""Unit tests for the ray module.

Tests cover:
- Ray construction and evaluation
- Vector utilities
- Reflection and refraction directions
- Fresnel reflectance
- Surface offsetting of secondary ray origins
"""

import math

import numpy as np
import pytest


class TestRayBasics:
    """Tests for Ray and its helpers."""

    def test_make_ray_normalizes_direction(self):
        """make_ray stores a unit-length direction."""
        from shadegraph.core.ray import make_ray

        ray = make_ray((1.0, 2.0, 3.0), (0.0, 0.0, -2.0))
        assert np.allclose(ray.origin, [1.0, 2.0, 3.0])
        assert np.allclose(ray.direction, [0.0, 0.0, -1.0])

    def test_make_ray_rejects_zero_direction(self):
        """A zero direction cannot be normalized."""
        from shadegraph.core.ray import make_ray

        with pytest.raises(ValueError):
            make_ray((0.0, 0.0, 0.0), (0.0, 0.0, 0.0))

    def test_ray_at(self):
        """ray_at evaluates origin + t * direction."""
        from shadegraph.core.ray import make_ray, ray_at

        ray = make_ray((1.0, 1.0, 1.0), (0.0, 0.0, 1.0))
        assert np.allclose(ray_at(ray, 2.0), [1.0, 1.0, 3.0])

    def test_as_vec3_requires_three_components(self):
        """as_vec3 rejects anything but three components."""
        from shadegraph.core.ray import as_vec3

        with pytest.raises(ValueError):
            as_vec3((1.0, 2.0))


class TestVectorUtilities:
    """Tests for vector utility functions."""

    def test_length(self):
        """Test vector length computation."""
        from shadegraph.core.ray import length, vec3

        v = vec3(3.0, 4.0, 0.0)
        assert length(v) == pytest.approx(5.0)

    def test_normalize(self):
        """Test vector normalization."""
        from shadegraph.core.ray import normalize, vec3

        n = normalize(vec3(3.0, 4.0, 0.0))
        assert np.allclose(n, [0.6, 0.8, 0.0])

    def test_dot_and_cross(self):
        """Test dot and cross products."""
        from shadegraph.core.ray import cross, dot, vec3

        assert dot(vec3(1.0, 2.0, 3.0), vec3(4.0, 5.0, 6.0)) == pytest.approx(32.0)
        assert np.allclose(cross(vec3(1.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0)), [0.0, 0.0, 1.0])

    def test_distance(self):
        """Test Euclidean distance between points."""
        from shadegraph.core.ray import distance, vec3

        assert distance(vec3(1.0, 1.0, 1.0), vec3(1.0, 4.0, 5.0)) == pytest.approx(5.0)


class TestReflectRefract:
    """Tests for reflection, refraction and Fresnel reflectance."""

    def test_reflect(self):
        """Test reflection about a normal."""
        from shadegraph.core.ray import normalize, reflect, vec3

        incident = normalize(vec3(1.0, -1.0, 0.0))
        reflected = reflect(incident, vec3(0.0, 1.0, 0.0))
        assert np.allclose(reflected, normalize(vec3(1.0, 1.0, 0.0)))

    def test_refract_normal_incidence_passes_straight(self):
        """A ray hitting the surface head-on is not bent."""
        from shadegraph.core.ray import refract, vec3

        direction = refract(vec3(0.0, 0.0, -1.0), vec3(0.0, 0.0, 1.0), 1.5)
        assert direction is not None
        assert np.allclose(direction, [0.0, 0.0, -1.0])

    def test_refract_obeys_snell(self):
        """sin(theta_t) = sin(theta_i) / n when entering the medium."""
        from shadegraph.core.ray import normalize, refract, vec3

        incident = normalize(vec3(1.0, 0.0, -1.0))
        direction = refract(incident, vec3(0.0, 0.0, 1.0), 1.5)
        sin_i = math.sqrt(0.5)
        assert direction[0] == pytest.approx(sin_i / 1.5)
        assert direction[2] < 0.0
        assert np.linalg.norm(direction) == pytest.approx(1.0)

    def test_refract_exiting_medium_flips_normal(self):
        """Leaving the medium uses the inverse ratio, with the normal on either side."""
        from shadegraph.core.ray import normalize, refract, vec3

        incident = normalize(vec3(0.3, 0.0, 1.0))
        normal = vec3(0.0, 0.0, 1.0)  # outward, same side as the incident ray
        direction = refract(incident, normal, 1.5)
        sin_i = incident[0]
        assert direction[0] == pytest.approx(sin_i * 1.5)
        assert direction[2] > 0.0

    def test_refract_total_internal_reflection(self):
        """Beyond the critical angle there is no transmitted ray."""
        from shadegraph.core.ray import normalize, refract, vec3

        incident = normalize(vec3(1.0, 0.0, 0.5))
        assert refract(incident, vec3(0.0, 0.0, 1.0), 1.5) is None

    def test_fresnel_normal_incidence(self):
        """kr = ((n - 1) / (n + 1))^2 at normal incidence."""
        from shadegraph.core.ray import fresnel_reflectance, vec3

        kr = fresnel_reflectance(vec3(0.0, 0.0, -1.0), vec3(0.0, 0.0, 1.0), 1.5)
        assert kr == pytest.approx(0.04)

    def test_fresnel_is_symmetric_in_normal_side(self):
        """At normal incidence kr is the same from inside and outside."""
        from shadegraph.core.ray import fresnel_reflectance, vec3

        kr = fresnel_reflectance(vec3(0.0, 0.0, 1.0), vec3(0.0, 0.0, 1.0), 1.5)
        assert kr == pytest.approx(0.04)

    def test_fresnel_total_internal_reflection(self):
        """Inside the medium beyond the critical angle kr is exactly 1."""
        from shadegraph.core.ray import fresnel_reflectance, normalize, vec3

        incident = normalize(vec3(1.0, 0.0, 0.5))
        assert fresnel_reflectance(incident, vec3(0.0, 0.0, 1.0), 1.5) == 1.0

    def test_fresnel_grows_toward_grazing(self):
        """Reflectance increases with the angle of incidence."""
        from shadegraph.core.ray import fresnel_reflectance, normalize, vec3

        normal = vec3(0.0, 0.0, 1.0)
        steep = fresnel_reflectance(normalize(vec3(0.2, 0.0, -1.0)), normal, 1.5)
        grazing = fresnel_reflectance(normalize(vec3(5.0, 0.0, -1.0)), normal, 1.5)
        assert 0.0 < steep < grazing < 1.0


class TestOffsetOrigin:
    """Tests for pushing secondary ray origins off the surface."""

    def test_offset_follows_outgoing_side(self):
        """The origin moves to the side the new ray travels into."""
        from shadegraph.core.ray import offset_origin, vec3

        point = vec3(0.0, 0.0, 0.0)
        normal = vec3(0.0, 0.0, 1.0)
        above = offset_origin(point, normal, vec3(0.0, 0.0, 1.0), 1e-3)
        below = offset_origin(point, normal, vec3(0.0, 0.0, -1.0), 1e-3)
        assert above[2] == pytest.approx(1e-3)
        assert below[2] == pytest.approx(-1e-3)
