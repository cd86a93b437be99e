"""
Light sources for the path tracer.

Only point lights are modelled. They are sampled directly by the path
tracer (one shadow ray each) and are invisible to camera and bounce rays;
visible light-emitting surfaces use ``materials.EmitterMaterial``.
"""

from __future__ import annotations
from dataclasses import dataclass

from .vec3 import Vec3, Point3
from .radiance import Radiance


@dataclass(frozen=True)
class LightSource:
    """A point light emitting equally in all directions.

    Attributes:
        position: Position of the light
        power: Radiant power per channel
    """
    position: Point3
    power: Radiance

    def direction_from(self, point: Point3) -> Vec3:
        """Unit vector from ``point`` toward the light."""
        return (self.position - point).normalize()

    def distance_from(self, point: Point3) -> float:
        return self.position.distance_to(point)

    def intensity(self, point: Point3) -> Radiance:
        """Radiance received at ``point``, with inverse square falloff.

        A point coinciding with the light receives nothing.
        """
        distance_squared = (self.position - point).length_squared()
        if distance_squared == 0:
            return Radiance.zero()
        return self.power.mul_scalar(1.0 / distance_squared)
