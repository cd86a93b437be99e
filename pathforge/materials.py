"""
Surface scattering models.

Implements:
- Diffuse (Lambertian term plus a Phong specular highlight)
- Emitter (Lambertian light-emitting surface)
- Reflective (perfect mirror)
- Refractive (Snell's law transmission, mirror on total internal reflection)

A material answers three independent queries. Each has a zero default so a
material only overrides what it does:

- ``emittance``: light the surface gives off on its own
- ``reflectance``: direct-lighting BRDF value for a light sample
- ``next_step``: recursive contribution of a secondary ray; the ray is
  traced through a callback owned by the path tracer, which alone decides
  when recursion stops
"""

from __future__ import annotations
from abc import ABC
from typing import Callable, Optional
import math

from .vec3 import Vec3, Point3
from .ray import Ray
from .radiance import Radiance
from .shapes import EPSILON

TraceCallback = Callable[[Ray], Radiance]


def reflect(direction: Vec3, normal: Vec3) -> Vec3:
    """Mirror ``direction`` about ``normal``: d - 2(n·d)n."""
    return direction - normal * (2.0 * direction.dot(normal))


def refract(direction: Vec3, normal: Vec3, index: float) -> Optional[Vec3]:
    """Refract a unit direction through a surface with refractive index ``index``.

    The side of the surface is taken from the sign of n·d: against the normal
    the ray enters the medium (ratio 1/index), along it the ray leaves
    (ratio index, normal flipped).

    Args:
        direction: Unit incoming direction
        normal: Outward unit surface normal
        index: Refractive index of the medium behind the surface

    Returns:
        Unit transmitted direction, or None on total internal reflection
    """
    cos_i = -normal.dot(direction)
    if cos_i > 0:
        ratio = 1.0 / index
        n = normal
    else:
        ratio = index
        n = -normal
        cos_i = -cos_i

    k = 1.0 - ratio * ratio * (1.0 - cos_i * cos_i)
    if k < 0:
        return None

    return (direction * ratio + n * (ratio * cos_i - math.sqrt(k))).normalize()


def _secondary_ray(point: Point3, direction: Vec3) -> Ray:
    return Ray(point, direction).offset(EPSILON)


class Material(ABC):
    """Base class for materials. All queries default to no contribution."""

    def emittance(self, normal: Vec3, outgoing: Vec3) -> Radiance:
        """Self-emitted radiance leaving along ``outgoing``."""
        return Radiance.zero()

    def reflectance(self, normal: Vec3, incoming: Vec3, outgoing: Vec3) -> Radiance:
        """BRDF value for light travelling along ``incoming``, leaving along ``outgoing``.

        Args:
            normal: Unit surface normal
            incoming: Direction the light travels in (toward the surface)
            outgoing: Direction toward the viewer (away from the surface)
        """
        return Radiance.zero()

    def next_step(self, point: Point3, normal: Vec3, incoming: Vec3,
                  trace: TraceCallback) -> Radiance:
        """Radiance gathered by a secondary ray spawned at ``point``.

        Args:
            point: Hit point on the surface
            normal: Unit surface normal at ``point``
            incoming: Direction of the ray that hit the surface
            trace: Continues the path from a new ray with one less bounce
        """
        return Radiance.zero()


class DiffuseMaterial(Material):
    """Opaque matte surface with an optional Phong highlight."""

    def __init__(self, diffuse: Radiance, specular: Optional[Radiance] = None,
                 shininess: float = 1.0):
        """Create a diffuse material.

        Args:
            diffuse: Diffuse color
            specular: Specular highlight color (default: none)
            shininess: Phong exponent, higher is tighter
        """
        self.diffuse = diffuse
        self.specular = specular if specular is not None else Radiance.zero()
        self.shininess = shininess

    def reflectance(self, normal: Vec3, incoming: Vec3, outgoing: Vec3) -> Radiance:
        proj = normal.dot(-incoming)
        out_proj = normal.dot(outgoing)

        # Light and viewer on opposite sides: nothing passes through.
        if proj * out_proj <= 0:
            return Radiance.zero()

        result = self.diffuse.mul_scalar(abs(proj))
        if not self.specular.is_black():
            highlight = max(0.0, outgoing.dot(reflect(incoming, normal)))
            result = result + self.specular.mul_scalar(highlight ** self.shininess)
        return result

    def __repr__(self) -> str:
        return f"DiffuseMaterial(diffuse={self.diffuse}, specular={self.specular}, shininess={self.shininess})"


class EmitterMaterial(Material):
    """Lambertian emitter: glows toward the side its normal faces."""

    def __init__(self, emission: Radiance):
        self.emission = emission

    def emittance(self, normal: Vec3, outgoing: Vec3) -> Radiance:
        return self.emission.mul_scalar(max(0.0, normal.dot(outgoing)))

    def __repr__(self) -> str:
        return f"EmitterMaterial(emission={self.emission})"


class ReflectiveMaterial(Material):
    """Perfect mirror tinted by an attenuation color."""

    def __init__(self, attenuation: Radiance):
        self.attenuation = attenuation

    def next_step(self, point: Point3, normal: Vec3, incoming: Vec3,
                  trace: TraceCallback) -> Radiance:
        direction = reflect(incoming.normalize(), normal)
        return self.attenuation.mul_light(trace(_secondary_ray(point, direction)))

    def __repr__(self) -> str:
        return f"ReflectiveMaterial(attenuation={self.attenuation})"


class RefractiveMaterial(Material):
    """Transparent dielectric (glass, water) tinted by an attenuation color."""

    def __init__(self, attenuation: Radiance, index: float = 1.5):
        """Create a refractive material.

        Args:
            attenuation: Color the transmitted light is multiplied by
            index: Index of refraction (1.0 = air, 1.5 = glass, 2.4 = diamond)
        """
        self.attenuation = attenuation
        self.index = index

    def next_step(self, point: Point3, normal: Vec3, incoming: Vec3,
                  trace: TraceCallback) -> Radiance:
        unit = incoming.normalize()
        direction = refract(unit, normal, self.index)
        if direction is None:
            direction = reflect(unit, normal)
        return self.attenuation.mul_light(trace(_secondary_ray(point, direction)))

    def __repr__(self) -> str:
        return f"RefractiveMaterial(attenuation={self.attenuation}, index={self.index})"
