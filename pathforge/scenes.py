"""
Built-in demo scenes.

The camera sits at the origin looking down +z with +y pointing down the
image, so "above" in these scenes means negative y.
"""

from __future__ import annotations
from typing import Callable, Dict

from .vec3 import Point3, Vec3
from .radiance import Radiance
from .shapes import Sphere, Plane
from .materials import DiffuseMaterial, EmitterMaterial, ReflectiveMaterial, RefractiveMaterial
from .objects import SurfaceObject
from .lights import LightSource
from .scene import Scene


def make_diffuse_scene() -> Scene:
    """A single white diffuse sphere lit from above and to the left."""
    sphere = SurfaceObject(
        Sphere(Point3(0, 0, 5), 3.0),
        DiffuseMaterial(Radiance(1.0, 1.0, 1.0))
    )
    light = LightSource(Point3(-4, -6, 0), Radiance.white(60.0))
    return Scene([sphere], [light])


def make_mirror_scene() -> Scene:
    """A mirror sphere between two colored spheres, standing on a floor."""
    red = DiffuseMaterial(Radiance(0.8, 0.1, 0.1), Radiance.white(0.5), 32.0)
    blue = DiffuseMaterial(Radiance(0.1, 0.2, 0.8), Radiance.white(0.5), 32.0)
    floor = DiffuseMaterial(Radiance(0.6, 0.6, 0.6))
    mirror = ReflectiveMaterial(Radiance(0.9, 0.9, 0.9))

    objects = [
        SurfaceObject(Sphere(Point3(0, 0.5, 8), 2.0), mirror),
        SurfaceObject(Sphere(Point3(-3.5, 1.5, 7), 1.0), red),
        SurfaceObject(Sphere(Point3(3.5, 1.5, 7), 1.0), blue),
        SurfaceObject(Plane.from_coefficients(0, -1, 0, 2.5), floor),
    ]
    lights = [
        LightSource(Point3(-5, -8, 2), Radiance.white(90.0)),
        LightSource(Point3(6, -6, 4), Radiance(30.0, 30.0, 40.0)),
    ]
    return Scene(objects, lights)


def make_glass_scene() -> Scene:
    """A glass sphere in front of a glowing back wall and two colored walls."""
    glass = RefractiveMaterial(Radiance(0.95, 0.95, 0.95), 1.5)
    left_wall = DiffuseMaterial(Radiance(0.7, 0.2, 0.2))
    right_wall = DiffuseMaterial(Radiance(0.2, 0.7, 0.2))
    floor = DiffuseMaterial(Radiance(0.7, 0.7, 0.7))
    back = EmitterMaterial(Radiance(0.4, 0.4, 0.5))

    objects = [
        SurfaceObject(Sphere(Point3(0, 0.5, 6), 1.5), glass),
        SurfaceObject(Plane.from_point_normal(Point3(-4, 0, 0), Vec3(1, 0, 0)), left_wall),
        SurfaceObject(Plane.from_point_normal(Point3(4, 0, 0), Vec3(-1, 0, 0)), right_wall),
        SurfaceObject(Plane.from_point_normal(Point3(0, 2, 0), Vec3(0, -1, 0)), floor),
        SurfaceObject(Plane.from_point_normal(Point3(0, 0, 14), Vec3(0, 0, -1)), back),
    ]
    lights = [LightSource(Point3(0, -4, 3), Radiance.white(40.0))]
    return Scene(objects, lights)


SCENES: Dict[str, Callable[[], Scene]] = {
    'diffuse': make_diffuse_scene,
    'mirror': make_mirror_scene,
    'glass': make_glass_scene,
}
