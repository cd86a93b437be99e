"""
Scene container: surface objects plus the lights illuminating them.
"""

from __future__ import annotations
from typing import Iterable, Optional

from .vec3 import Vec3
from .ray import Ray
from .radiance import Radiance
from .objects import SurfaceObject, Intersection
from .lights import LightSource


class Scene:
    """A fixed collection of objects and point lights.

    The scene is assembled once and only read while rendering, which is
    what lets render workers share one instance.
    """

    __slots__ = ('objects', 'light_sources')

    def __init__(self, objects: Iterable[SurfaceObject] = (),
                 light_sources: Iterable[LightSource] = ()):
        self.objects: tuple[SurfaceObject, ...] = tuple(objects)
        self.light_sources: tuple[LightSource, ...] = tuple(light_sources)

    def intersect(self, ray: Ray) -> Optional[Intersection]:
        """Find the hit nearest to the ray origin among all objects.

        Which of two equidistant hits wins is unspecified.
        """
        closest: Optional[Intersection] = None
        closest_distance = float('inf')

        for obj in self.objects:
            hit = obj.intersect(ray)
            if hit is None:
                continue
            distance = hit.distance_from(ray.origin)
            if distance < closest_distance:
                closest = hit
                closest_distance = distance

        return closest

    def shadow_intersect(self, ray: Ray, max_length: float) -> bool:
        """True if any object blocks the ray closer than max_length."""
        return any(obj.shadow_intersect(ray, max_length) for obj in self.objects)

    def background(self, direction: Vec3) -> Radiance:
        """Radiance of rays leaving the scene (black)."""
        return Radiance.zero()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)

    def __repr__(self) -> str:
        return f"Scene(objects={len(self.objects)}, light_sources={len(self.light_sources)})"
