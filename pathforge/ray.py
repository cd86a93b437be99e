"""
Ray class for representing rays in 3D space.

A ray is defined by an origin point and a direction vector.
Ray(t) = origin + t * direction
"""

from __future__ import annotations
from .vec3 import Vec3, Point3


class Ray:
    """A half-line with origin and direction.

    The parametric form is: P(t) = origin + t * direction
    where t > 0 represents points ahead of the origin.
    """

    __slots__ = ('origin', 'direction')

    def __init__(self, origin: Point3, direction: Vec3):
        """Create a ray with given origin and direction.

        Args:
            origin: The starting point of the ray
            direction: The direction vector. Camera, shadow and bounce rays
                are built normalized; intersection code does not rely on it.
        """
        self.origin = origin
        self.direction = direction

    def at(self, t: float) -> Point3:
        """Get the point along the ray at parameter t."""
        return self.origin + self.direction * t

    def offset(self, epsilon: float) -> Ray:
        """Return the same ray with its origin nudged forward by epsilon.

        Secondary rays start on the surface they leave; moving the origin
        off that surface keeps them from re-hitting it through rounding.
        """
        return Ray(self.at(epsilon), self.direction)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ray):
            return NotImplemented
        return self.origin == other.origin and self.direction == other.direction

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction})"
