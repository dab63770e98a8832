"""Tests for the Scene container."""

import pytest


class TestScene:
    """Tests for Scene construction."""

    def test_collections_become_tuples(self, small_camera, white_diffuse):
        from shadegraph.core.color import WHITE
        from shadegraph.geometry.sphere import Sphere
        from shadegraph.scene.lights import Sun
        from shadegraph.scene.manager import Scene

        ball = Sphere(origin=(5.0, 0.0, 0.0), radius=1.0, material=white_diffuse)
        sun = Sun(direction=(0.0, 0.0, -1.0), color=WHITE, intensity=1.0)
        objects = [ball]
        scene = Scene(camera=small_camera, objects=objects, lights=[sun])
        objects.append(ball)

        assert scene.objects == (ball,)
        assert scene.lights == (sun,)
        assert scene.object_count == 1
        assert scene.light_count == 1

    def test_empty_scene(self, small_camera):
        from shadegraph.scene.manager import Scene

        scene = Scene(camera=small_camera)
        assert scene.object_count == 0
        assert scene.light_count == 0

    def test_immutable(self, small_camera):
        import dataclasses

        from shadegraph.scene.manager import Scene

        scene = Scene(camera=small_camera)
        with pytest.raises(dataclasses.FrozenInstanceError):
            scene.objects = ()

    def test_unsupported_object_rejected(self, small_camera):
        from shadegraph.scene.manager import Scene

        with pytest.raises(TypeError):
            Scene(camera=small_camera, objects=["cube"])

    def test_unsupported_light_rejected(self, small_camera):
        from shadegraph.scene.manager import Scene

        with pytest.raises(TypeError):
            Scene(camera=small_camera, lights=[42])
