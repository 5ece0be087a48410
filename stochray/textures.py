"""
Texture system for the ray tracer.

Textures map surface (u, v) coordinates to a color:
- Solid color textures
- Tiled two-color checkerboard
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from .vec3 import Color


class Texture(ABC):
    """Abstract base class for textures."""

    @abstractmethod
    def sample(self, u: float, v: float) -> Color:
        """Get the texture color at the given UV coordinates.

        Args:
            u: Horizontal texture coordinate [0, 1]
            v: Vertical texture coordinate [0, 1]

        Returns:
            Color at this location
        """
        pass


class SolidColor(Texture):
    """A solid color texture."""

    def __init__(self, color: Color):
        self.color = color

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float) -> 'SolidColor':
        return cls(Color(r, g, b))

    def sample(self, u: float, v: float) -> Color:
        return self.color

    def __repr__(self) -> str:
        return f"SolidColor({self.color})"


class Checkerboard(Texture):
    """A checker pattern tiled over UV space.

    The cell parity is taken from the integer-truncated scaled
    coordinates: odd XOR parity selects color1, even selects color2.
    """

    def __init__(self, color1: Color, color2: Color, scale: int = 20):
        """Create a checkerboard texture.

        Args:
            color1: Color of cells whose u and v parities differ
            color2: Color of cells whose u and v parities match
            scale: Number of cells along each UV axis
        """
        self.color1 = color1
        self.color2 = color2
        self.scale = scale

    def sample(self, u: float, v: float) -> Color:
        t1 = int(self.scale * u) & 1
        t2 = int(self.scale * v) & 1
        if t1 ^ t2:
            return self.color1
        return self.color2

    def __repr__(self) -> str:
        return f"Checkerboard({self.color1}, {self.color2}, scale={self.scale})"
