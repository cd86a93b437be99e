"""Tests for the recursive path tracer."""

import pytest

from pathforge.vec3 import Vec3, Point3
from pathforge.ray import Ray
from pathforge.radiance import Radiance
from pathforge.shapes import Sphere, Plane, EPSILON
from pathforge.materials import (
    Material, DiffuseMaterial, EmitterMaterial, ReflectiveMaterial, RefractiveMaterial
)
from pathforge.objects import SurfaceObject
from pathforge.lights import LightSource
from pathforge.scene import Scene
from pathforge.pathtracing import trace_path

from conftest import assert_radiance_close


class CountingMirror(Material):
    """Mirror that counts how many secondary rays it spawns."""

    def __init__(self):
        self.calls = 0

    def next_step(self, point, normal, incoming, trace):
        self.calls += 1
        return trace(Ray(point, -incoming).offset(EPSILON))


class TestTracePathBasics:
    """Misses, emission and the test scene."""

    def test_trace_path(self, test_scene):
        delta = 0.000001
        origin = Point3(0, 0, 0)
        ray_miss = Ray(origin, Vec3(12.0 / 5.0 + delta, 0.0, 16.0 / 5.0).normalize())
        assert trace_path(test_scene, ray_miss, 0) == Radiance(0.0, 0.0, 0.0)
        ray_hit = Ray(origin, Vec3(12.0 / 5.0, 0.0, 16.0 / 5.0).normalize())
        assert trace_path(test_scene, ray_hit, 0) == Radiance(1.0, 1.0, 1.0)
        ray_miss2 = Ray(origin, Vec3(-12.0 / 5.0 - delta, 0.0, 16.0 / 5.0).normalize())
        assert trace_path(test_scene, ray_miss2, 0) == Radiance(0.0, 0.0, 0.0)
        ray_hit2 = Ray(origin, Vec3(-12.0 / 5.0, 0.0, 16.0 / 5.0).normalize())
        assert trace_path(test_scene, ray_hit2, 0) == Radiance(1.0, 1.0, 1.0)

    def test_miss_returns_background(self):
        scene = Scene()
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, 1))
        assert trace_path(scene, ray, 3) == scene.background(ray.direction)

    def test_emitter_seen_directly(self):
        lamp = SurfaceObject(
            Plane.from_point_normal(Point3(0, 0, 5), Vec3(0, 0, -1)),
            EmitterMaterial(Radiance(0.2, 0.4, 0.6))
        )
        result = trace_path(Scene([lamp]), Ray(Point3(0, 0, 0), Vec3(0, 0, 1)), 0)
        assert_radiance_close(result, Radiance(0.2, 0.4, 0.6))

    def test_negative_budget_rejected(self, test_scene):
        with pytest.raises(ValueError):
            trace_path(test_scene, Ray(Point3(0, 0, 0), Vec3(0, 0, 1)), -1)


class TestDirectLighting:
    """Shadow rays and the BRDF term."""

    @staticmethod
    def _wall():
        return SurfaceObject(
            Plane.from_point_normal(Point3(0, 0, 5), Vec3(0, 0, -1)),
            DiffuseMaterial(Radiance(1.0, 0.5, 0.25))
        )

    def test_lit_head_on(self):
        light = LightSource(Point3(0, 0, 1), Radiance.white(16.0))
        result = trace_path(Scene([self._wall()], [light]), Ray(Point3(0, 0, 0), Vec3(0, 0, 1)), 0)
        assert_radiance_close(result, Radiance(1.0, 0.5, 0.25))

    def test_lit_obliquely(self):
        light = LightSource(Point3(3, 0, 1), Radiance.white(25.0))
        result = trace_path(Scene([self._wall()], [light]), Ray(Point3(0, 0, 0), Vec3(0, 0, 1)), 0)
        # distance 5, cosine 0.8
        assert_radiance_close(result, Radiance(0.8, 0.4, 0.2))

    def test_occluded_light(self):
        light = LightSource(Point3(3, 0, 1), Radiance.white(25.0))
        blocker = SurfaceObject(Sphere(Point3(1.5, 0, 3), 0.3), DiffuseMaterial(Radiance.white(1.0)))
        scene = Scene([self._wall(), blocker], [light])
        assert trace_path(scene, Ray(Point3(0, 0, 0), Vec3(0, 0, 1)), 0) == Radiance.zero()

    def test_blocker_behind_light_does_not_occlude(self):
        light = LightSource(Point3(3, 0, 1), Radiance.white(25.0))
        beyond = SurfaceObject(Sphere(Point3(6, 0, -3), 0.5), DiffuseMaterial(Radiance.white(1.0)))
        scene = Scene([self._wall(), beyond], [light])
        result = trace_path(scene, Ray(Point3(0, 0, 0), Vec3(0, 0, 1)), 0)
        assert_radiance_close(result, Radiance(0.8, 0.4, 0.2))

    def test_light_behind_surface(self):
        light = LightSource(Point3(0, 0, 10), Radiance.white(25.0))
        scene = Scene([self._wall()], [light])
        assert trace_path(scene, Ray(Point3(0, 0, 0), Vec3(0, 0, 1)), 0) == Radiance.zero()

    def test_lights_add_up(self):
        lights = [
            LightSource(Point3(0, 0, 1), Radiance(16.0, 0.0, 0.0)),
            LightSource(Point3(0, 0, 1), Radiance(0.0, 16.0, 0.0)),
        ]
        wall = SurfaceObject(
            Plane.from_point_normal(Point3(0, 0, 5), Vec3(0, 0, -1)),
            DiffuseMaterial(Radiance.white(1.0))
        )
        result = trace_path(Scene([wall], lights), Ray(Point3(0, 0, 0), Vec3(0, 0, 1)), 0)
        assert_radiance_close(result, Radiance(1.0, 1.0, 0.0))

    def test_curved_surface_does_not_shadow_itself(self):
        ball = SurfaceObject(Sphere(Point3(0, 0, 5), 1.0), DiffuseMaterial(Radiance.white(1.0)))
        light = LightSource(Point3(0, 0, 0), Radiance.white(16.0))
        result = trace_path(Scene([ball], [light]), Ray(Point3(0, 0, 0), Vec3(0, 0, 1)), 0)
        assert_radiance_close(result, Radiance.white(1.0))


class TestIndirectLighting:
    """Recursive bounces through mirrors and glass."""

    @staticmethod
    def _mirror_scene():
        mirror = SurfaceObject(Sphere(Point3(0, 0, 5), 1.0), ReflectiveMaterial(Radiance(0.5, 0.25, 1.0)))
        floor = SurfaceObject(
            Plane.from_point_normal(Point3(0, 0, -5), Vec3(0, 0, 1)),
            DiffuseMaterial(Radiance.white(1.0))
        )
        light = LightSource(Point3(0, 0, -1), Radiance.white(16.0))
        return Scene([mirror, floor], [light])

    def test_mirror_reflects_lit_surface(self):
        scene = self._mirror_scene()
        result = trace_path(scene, Ray(Point3(0, 0, 0), Vec3(0, 0, 1)), 1)
        assert_radiance_close(result, Radiance(0.5, 0.25, 1.0))

    def test_mirror_result_is_attenuated_direct_light(self):
        scene = self._mirror_scene()
        direct = trace_path(scene, Ray(Point3(0, 0, 4 - EPSILON), Vec3(0, 0, -1)), 0)
        result = trace_path(scene, Ray(Point3(0, 0, 0), Vec3(0, 0, 1)), 1)
        assert_radiance_close(result, direct * Radiance(0.5, 0.25, 1.0))

    def test_mirror_without_budget_is_black(self):
        scene = self._mirror_scene()
        assert trace_path(scene, Ray(Point3(0, 0, 0), Vec3(0, 0, 1)), 0) == Radiance.zero()

    def test_mirror_reflects_emitter(self):
        mirror = SurfaceObject(Sphere(Point3(0, 0, 5), 1.0), ReflectiveMaterial(Radiance.white(0.5)))
        lamp = SurfaceObject(Sphere(Point3(0, 0, -5), 1.0), EmitterMaterial(Radiance.white(1.0)))
        scene = Scene([mirror, lamp], [])
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, 1))
        assert_radiance_close(trace_path(scene, ray, 1), Radiance.white(0.5))
        assert trace_path(scene, ray, 0) == Radiance.zero()

    def test_facing_mirrors_stop_at_budget(self):
        material = CountingMirror()
        walls = [
            SurfaceObject(Plane.from_point_normal(Point3(0, 0, 5), Vec3(0, 0, -1)), material),
            SurfaceObject(Plane.from_point_normal(Point3(0, 0, -5), Vec3(0, 0, 1)), material),
        ]
        trace_path(Scene(walls), Ray(Point3(0, 0, 0), Vec3(0, 0, 1)), 7)
        assert material.calls == 7

    def test_glass_sphere_transmits_backdrop(self):
        glass = SurfaceObject(Sphere(Point3(0, 0, 5), 1.0), RefractiveMaterial(Radiance(0.5, 0.5, 0.5), 1.5))
        backdrop = SurfaceObject(
            Plane.from_point_normal(Point3(0, 0, 10), Vec3(0, 0, -1)),
            EmitterMaterial(Radiance.white(1.0))
        )
        scene = Scene([glass, backdrop])
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, 1))
        # Enter and leave the sphere head on: two attenuations, then the backdrop
        assert_radiance_close(trace_path(scene, ray, 2), Radiance.white(0.25))
        assert trace_path(scene, ray, 1) == Radiance.zero()
