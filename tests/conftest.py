"""Shared fixtures: a tiny scene of one sphere covered in an always-white material."""

import pytest

from pathforge.vec3 import Vec3, Point3
from pathforge.radiance import Radiance
from pathforge.shapes import Sphere
from pathforge.materials import Material
from pathforge.objects import SurfaceObject
from pathforge.scene import Scene
from pathforge.camera import OriginCamera


class WhiteMaterial(Material):
    """Emits and reflects full white in every direction."""

    def emittance(self, normal, outgoing):
        return Radiance(1.0, 1.0, 1.0)

    def reflectance(self, normal, incoming, outgoing):
        return Radiance(1.0, 1.0, 1.0)


def make_test_scene() -> Scene:
    obj = SurfaceObject(Sphere(Point3(0, 0, 5), 3.0), WhiteMaterial())
    return Scene([obj], [])


def make_test_camera() -> OriginCamera:
    return OriginCamera(aperture=2.0, width=1000, height=1000)


@pytest.fixture
def test_scene():
    return make_test_scene()


@pytest.fixture
def test_camera():
    return make_test_camera()


def assert_radiance_close(actual: Radiance, expected: Radiance, tol: float = 1e-6):
    assert abs(actual.red - expected.red) < tol, f"{actual} != {expected}"
    assert abs(actual.green - expected.green) < tol, f"{actual} != {expected}"
    assert abs(actual.blue - expected.blue) < tol, f"{actual} != {expected}"


def assert_vec_close(actual: Vec3, expected: Vec3, tol: float = 1e-6):
    assert (actual - expected).length() < tol, f"{actual} != {expected}"
