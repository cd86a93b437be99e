"""
Geometric shapes for the path tracer.

Each shape answers three queries: where a ray first meets it, the surface
normal at a point on it, and whether it blocks a segment (shadow test).
Shapes carry geometry only; materials live on ``objects.SurfaceObject``.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional
import math

from .vec3 import Vec3, Point3
from .ray import Ray

# Hits at ray parameter t <= EPSILON are discarded, and secondary rays are
# started EPSILON along their direction. Both must use the same value.
EPSILON = 1e-4

# |n . d| below this counts as a ray parallel to a plane.
PARALLEL_EPSILON = 1e-12

# Sphere discriminants in (-TANGENT_EPSILON, 0) are rounding noise on a
# tangent ray and are treated as zero.
TANGENT_EPSILON = 1e-9


class Shape(ABC):
    """Abstract base class for ray-intersectable geometry."""

    @abstractmethod
    def intersect(self, ray: Ray) -> Optional[Point3]:
        """Find the nearest point ahead of the ray origin on this shape.

        Args:
            ray: The ray to test

        Returns:
            The hit point for the smallest t > EPSILON, None if there is none
        """
        pass

    @abstractmethod
    def normal(self, point: Point3) -> Vec3:
        """Unit surface normal at a point on the shape."""
        pass

    def shadow_intersect(self, ray: Ray, max_length: float) -> bool:
        """Test whether the shape blocks the ray closer than max_length.

        Args:
            ray: Shadow ray, usually from a surface point toward a light
            max_length: Distance from the ray origin to the light

        Returns:
            True if there is a hit strictly nearer than max_length
        """
        point = self.intersect(ray)
        if point is None:
            return False
        return point.distance_to(ray.origin) < max_length


class Sphere(Shape):
    """A sphere defined by center and radius."""

    def __init__(self, center: Point3, radius: float):
        """Create a sphere.

        Args:
            center: Center point of the sphere
            radius: Radius of the sphere (positive)
        """
        self.center = center
        self.radius = radius

    def intersect(self, ray: Ray) -> Optional[Point3]:
        """Ray-sphere intersection using the quadratic formula.

        The equation (P-C)·(P-C) = r² where P = ray.at(t)
        expands to: t²(d·d) + 2t(d·(O-C)) + (O-C)·(O-C) - r² = 0.
        From outside the near root is taken; from inside only the far
        root lies ahead of the origin.
        """
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = half_b * half_b - a * c
        if discriminant < 0:
            if discriminant <= -TANGENT_EPSILON:
                return None
            discriminant = 0.0

        sqrtd = math.sqrt(discriminant)

        root = (-half_b - sqrtd) / a
        if root <= EPSILON:
            root = (-half_b + sqrtd) / a
            if root <= EPSILON:
                return None

        return ray.at(root)

    def normal(self, point: Point3) -> Vec3:
        return (point - self.center).normalize()

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"


class Plane(Shape):
    """An infinite plane n·x + offset = 0 with a unit normal n."""

    def __init__(self, normal: Vec3, offset: float):
        """Create a plane from a normal and signed offset.

        Both are rescaled together so the stored normal has unit length;
        the set of points on the plane is unchanged.

        Args:
            normal: Plane normal (any non-zero length)
            offset: Signed offset d in n·x + d = 0
        """
        length = normal.length()
        self.normal_vector = normal / length
        self.offset = offset / length

    @classmethod
    def from_coefficients(cls, a: float, b: float, c: float, d: float) -> Plane:
        """Plane from the implicit form a·x + b·y + c·z + d = 0."""
        return cls(Vec3(a, b, c), d)

    @classmethod
    def from_point_normal(cls, point: Point3, normal: Vec3) -> Plane:
        """Plane through ``point`` facing ``normal``."""
        unit = normal.normalize()
        return cls(unit, -unit.dot(point))

    def intersect(self, ray: Ray) -> Optional[Point3]:
        """Ray-plane intersection; parallel rays never hit."""
        denom = self.normal_vector.dot(ray.direction)

        if abs(denom) < PARALLEL_EPSILON:
            return None

        t = -(self.normal_vector.dot(ray.origin) + self.offset) / denom

        if t <= EPSILON:
            return None

        return ray.at(t)

    def normal(self, point: Point3) -> Vec3:
        return self.normal_vector

    def __repr__(self) -> str:
        return f"Plane(normal={self.normal_vector}, offset={self.offset:.4f})"
