"""Tests for OriginCamera."""

import pytest

from pathforge.vec3 import Vec3, Point3
from pathforge.camera import OriginCamera


class TestOriginCamera:
    """Test OriginCamera.make_ray()."""

    def test_rays_start_at_origin(self):
        cam = OriginCamera(aperture=1.0, width=1000, height=1000)
        assert cam.make_ray(123, 456).origin == Point3(0, 0, 0)

    def test_center_ray(self):
        cam = OriginCamera(aperture=1.0, width=1000, height=1000)
        assert cam.make_ray(500, 500).direction == Vec3(0, 0, 1)

    def test_corner_rays(self):
        cam = OriginCamera(aperture=1.0, width=1000, height=1000)
        assert cam.make_ray(1000, 1000).direction == Vec3(0.5, 0.5, 1.0).normalize()
        assert cam.make_ray(0, 0).direction == Vec3(-0.5, -0.5, 1.0).normalize()

    def test_aperture_scales_field_of_view(self):
        cam = OriginCamera(aperture=2.0, width=1000, height=1000)
        assert cam.make_ray(1000, 1000).direction == Vec3(1.0, 1.0, 1.0).normalize()

    def test_directions_are_unit_length(self):
        cam = OriginCamera(aperture=3.0, width=640, height=480)
        for x, y in [(0, 0), (640, 480), (17, 300), (320, 240)]:
            assert abs(cam.make_ray(x, y).direction.length() - 1.0) < 1e-9

    def test_wide_image_uses_larger_dimension(self):
        cam = OriginCamera(aperture=1.0, width=2000, height=1000)
        # Right edge spans half the aperture, bottom edge a quarter
        assert cam.make_ray(2000, 500).direction == Vec3(0.5, 0.0, 1.0).normalize()
        assert cam.make_ray(1000, 1000).direction == Vec3(0.0, 0.25, 1.0).normalize()

    def test_immutable(self):
        cam = OriginCamera(aperture=1.0, width=10, height=10)
        with pytest.raises(Exception):
            cam.aperture = 2.0
