"""
RGB radiance values.

Radiance is used for light powers, material coefficients and the colors
computed by the path tracer. It is a plain value type: three float
channels combined componentwise, never mixed across channels.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Radiance:
    """An immutable (red, green, blue) triple.

    Equality is exact per-channel float equality.
    """

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0

    @classmethod
    def zero(cls) -> Radiance:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def white(cls, intensity: float) -> Radiance:
        """Grey radiance with every channel set to ``intensity``."""
        return cls(intensity, intensity, intensity)

    def add(self, other: Radiance) -> Radiance:
        return Radiance(
            self.red + other.red,
            self.green + other.green,
            self.blue + other.blue
        )

    def mul_light(self, other: Radiance) -> Radiance:
        """Componentwise product, e.g. attenuating light by a surface color."""
        return Radiance(
            self.red * other.red,
            self.green * other.green,
            self.blue * other.blue
        )

    def mul_scalar(self, s: float) -> Radiance:
        return Radiance(self.red * s, self.green * s, self.blue * s)

    def is_black(self) -> bool:
        return self.red == 0.0 and self.green == 0.0 and self.blue == 0.0

    def __add__(self, other: Radiance) -> Radiance:
        if not isinstance(other, Radiance):
            return NotImplemented
        return self.add(other)

    def __mul__(self, other: Union[Radiance, float]) -> Radiance:
        if isinstance(other, Radiance):
            return self.mul_light(other)
        if isinstance(other, (int, float)):
            return self.mul_scalar(other)
        return NotImplemented

    def __rmul__(self, other: float) -> Radiance:
        if isinstance(other, (int, float)):
            return self.mul_scalar(other)
        return NotImplemented

    def __iter__(self):
        return iter((self.red, self.green, self.blue))

    def __repr__(self) -> str:
        return f"Radiance({self.red:.4f}, {self.green:.4f}, {self.blue:.4f})"
