"""Unit tests for CameraParams and Camera.

Tests cover:
- Default parameters and the derived image height
- Parameter validation
- Orthonormal basis and viewport placement
- Sample rays staying inside their pixel, with and without defocus blur
"""

import dataclasses
import math

import numpy as np
import pytest

from pathtracer.camera.camera import Camera, CameraParams
from pathtracer.core.vector import Vector3


class TestCameraParams:
    """Tests for the parameter dataclass."""

    def test_defaults(self):
        params = CameraParams()
        assert params.image_width == 400
        assert params.resolved_height() == 225
        assert params.samples_per_pixel == 100
        assert params.max_depth == 50
        assert params.fov_degrees == 90.0
        assert params.look_from == Vector3(0, 0, 0)
        assert params.look_at == Vector3(0, 0, -1)
        assert params.up == Vector3(0, 1, 0)
        assert params.focus_angle_degrees == 0.0
        assert params.focus_distance == 10.0

    def test_explicit_height_wins(self):
        assert CameraParams(image_width=100, image_height=30).resolved_height() == 30

    def test_tiny_width_still_has_one_row(self):
        assert CameraParams(image_width=1, aspect_ratio=16 / 9).resolved_height() == 1

    def test_replace_derives_new_params(self):
        params = dataclasses.replace(CameraParams(), image_width=100)
        assert params.resolved_height() == 56

    def test_angles_are_named_in_degrees(self):
        params = CameraParams(fov_degrees=45.0, focus_angle_degrees=1.5)
        assert (params.fov_degrees, params.focus_angle_degrees) == (45.0, 1.5)
        with pytest.raises(TypeError):
            CameraParams(fov=45.0)

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            CameraParams().image_width = 10

    @pytest.mark.parametrize(
        "overrides",
        [
            {"image_width": 0},
            {"image_height": 0},
            {"aspect_ratio": 0.0},
            {"samples_per_pixel": 0},
            {"max_depth": -1},
            {"fov_degrees": 0.0},
            {"fov_degrees": 180.0},
            {"focus_angle_degrees": -1.0},
            {"focus_distance": 0.0},
        ],
    )
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(ValueError):
            CameraParams(**overrides)


class TestCameraGeometry:
    """Tests for the derived viewport."""

    def test_default_basis(self):
        cam = Camera()
        assert cam.u.is_close(Vector3(1, 0, 0))
        assert cam.v.is_close(Vector3(0, 1, 0))
        assert cam.w.is_close(Vector3(0, 0, 1))
        assert cam.image_height == 225

    def test_basis_is_orthonormal_for_tilted_view(self):
        cam = Camera(CameraParams(look_from=Vector3(-2, 2, 1), look_at=Vector3(0, 0, -1)))
        for a in (cam.u, cam.v, cam.w):
            assert a.length() == pytest.approx(1.0)
        assert cam.u.dot(cam.v) == pytest.approx(0.0, abs=1e-12)
        assert cam.u.dot(cam.w) == pytest.approx(0.0, abs=1e-12)
        assert cam.v.dot(cam.w) == pytest.approx(0.0, abs=1e-12)

    def test_viewport_size(self):
        cam = Camera(CameraParams(image_width=200, image_height=100, fov_degrees=90.0, focus_distance=1.0))
        assert cam.viewport_height == pytest.approx(2.0)
        assert cam.viewport_width == pytest.approx(4.0)

    def test_degenerate_view_rejected(self):
        with pytest.raises(ValueError):
            Camera(CameraParams(look_from=Vector3(1, 1, 1), look_at=Vector3(1, 1, 1)))

    def test_up_parallel_to_view_rejected(self):
        with pytest.raises(ValueError):
            Camera(CameraParams(look_from=Vector3(0, 5, 0), look_at=Vector3(0, 0, 0)))

    def test_properties_follow_params(self):
        cam = Camera(CameraParams(image_width=32, samples_per_pixel=3, max_depth=4))
        assert (cam.image_width, cam.samples_per_pixel, cam.max_depth) == (32, 3, 4)


class TestCameraRays:
    """Tests for sample ray generation."""

    def test_rays_hit_focus_plane_inside_their_pixel(self, rng):
        params = CameraParams(image_width=20, image_height=10, fov_degrees=90.0, focus_distance=1.0)
        cam = Camera(params)
        # Viewport is 4 x 2 at z = -1; each pixel is 0.2 x 0.2
        for _ in range(50):
            ray = cam.get_ray(0, 0, rng)
            assert ray.origin == Vector3(0, 0, 0)
            assert ray.direction.z == pytest.approx(-1.0)
            assert -2.0 - 1e-9 <= ray.direction.x <= -1.8 + 1e-9
            assert 0.8 - 1e-9 <= ray.direction.y <= 1.0 + 1e-9

    def test_center_pixel_looks_down_the_view_axis(self, rng):
        cam = Camera(CameraParams(image_width=21, image_height=21, fov_degrees=60.0))
        ray = cam.get_ray(10, 10, rng)
        d = ray.direction.normalize()
        assert d.z < -0.99

    def test_rows_run_top_to_bottom(self, rng):
        cam = Camera(CameraParams(image_width=8, image_height=8))
        top = cam.get_ray(4, 0, rng).direction.normalize()
        bottom = cam.get_ray(4, 7, rng).direction.normalize()
        assert top.y > 0 > bottom.y

    def test_defocus_origins_stay_on_disk(self, rng):
        params = CameraParams(image_width=10, image_height=10, focus_angle_degrees=10.0, focus_distance=2.0)
        cam = Camera(params)
        radius = 2.0 * math.tan(math.radians(5.0))
        origins = [cam.get_ray(5, 5, rng).origin for _ in range(100)]
        assert any(o != cam.center for o in origins)
        for o in origins:
            assert o.z == pytest.approx(0.0)
            assert (o - cam.center).length() <= radius + 1e-12

    def test_defocus_rays_converge_on_focus_plane(self, rng):
        params = CameraParams(image_width=10, image_height=10, focus_angle_degrees=10.0, focus_distance=2.0)
        cam = Camera(params)
        pixel_center = cam.pixel00_loc + cam.pixel_delta_u * 5 + cam.pixel_delta_v * 5
        half = cam.pixel_delta_u.length() / 2 + 1e-12
        for _ in range(50):
            ray = cam.get_ray(5, 5, rng)
            target = ray.at(1.0)
            assert abs(target.x - pixel_center.x) <= half
            assert abs(target.y - pixel_center.y) <= half

    def test_same_seed_same_rays(self):
        cam = Camera(CameraParams(image_width=10, image_height=10, focus_angle_degrees=3.0))
        a = cam.get_ray(2, 3, np.random.default_rng(5))
        b = cam.get_ray(2, 3, np.random.default_rng(5))
        assert a.origin == b.origin and a.direction == b.direction
