"""
Camera module for generating primary rays.

A pinhole at the world origin looking down +z. The image plane sits at
z = 1 and is scaled by the aperture; the larger image dimension spans
``aperture`` units, so the aspect ratio follows the pixel grid.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol

from .vec3 import Vec3
from .ray import Ray


class RayMaker(Protocol):
    """Anything that maps a pixel coordinate to a primary ray."""

    def make_ray(self, x: int, y: int) -> Ray:
        ...


@dataclass(frozen=True)
class OriginCamera:
    """Pinhole camera at the world origin.

    Attributes:
        aperture: Field of view scale (image plane extent at z = 1)
        width: Image width in pixels
        height: Image height in pixels
    """
    aperture: float
    width: int
    height: int

    def make_ray(self, x: int, y: int) -> Ray:
        """Generate the primary ray through pixel (x, y).

        Args:
            x: Pixel column, 0 at the left
            y: Pixel row, 0 at the top

        Returns:
            A unit-direction ray from the origin
        """
        maximum = float(max(self.width, self.height))
        xx = self.aperture * (x - self.width / 2.0) / maximum
        yy = self.aperture * (y - self.height / 2.0) / maximum
        return Ray(Vec3.origin(), Vec3(xx, yy, 1.0).normalize())
