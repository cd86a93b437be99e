"""
Scene objects: a shape paired with the material covering it.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .vec3 import Vec3, Point3
from .ray import Ray
from .radiance import Radiance
from .shapes import Shape
from .materials import Material, TraceCallback


@dataclass(frozen=True)
class Intersection:
    """A ray hit on a surface object.

    Attributes:
        object: The object that was hit, for later material queries
        point: The intersection point in world space
    """
    object: SurfaceObject
    point: Point3

    def distance_from(self, origin: Point3) -> float:
        return self.point.distance_to(origin)


class SurfaceObject:
    """One shape and one material, queried together at hit points.

    Material queries take a point and evaluate the shape's normal there
    before delegating.
    """

    __slots__ = ('shape', 'material')

    def __init__(self, shape: Shape, material: Material):
        self.shape = shape
        self.material = material

    def normal(self, point: Point3) -> Vec3:
        return self.shape.normal(point)

    def emittance(self, point: Point3, outgoing: Vec3) -> Radiance:
        return self.material.emittance(self.normal(point), outgoing)

    def reflectance(self, point: Point3, incoming: Vec3, outgoing: Vec3) -> Radiance:
        return self.material.reflectance(self.normal(point), incoming, outgoing)

    def next_step(self, point: Point3, incoming: Vec3, trace: TraceCallback) -> Radiance:
        return self.material.next_step(point, self.normal(point), incoming, trace)

    def intersect(self, ray: Ray) -> Optional[Intersection]:
        point = self.shape.intersect(ray)
        if point is None:
            return None
        return Intersection(self, point)

    def shadow_intersect(self, ray: Ray, max_length: float) -> bool:
        return self.shape.shadow_intersect(ray, max_length)

    def __repr__(self) -> str:
        return f"SurfaceObject(shape={self.shape}, material={self.material})"
