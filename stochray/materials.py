"""
Surface materials.

A material pairs a texture with a scalar reflectance and decides
where a ray goes after it hits a surface.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

import numpy as np

from .vec3 import Vec3
from .ray import Ray
from .textures import Texture

if TYPE_CHECKING:
    from .shapes import Intersection


class MaterialError(ValueError):
    """Raised for non-physical material parameters."""
    pass


class Material:
    """Textured material with a reflectance-controlled scatter lobe.

    Reflectance 0 gives a diffuse-like bounce (the normal perturbed by a
    random point in the unit ball); reflectance 1 sends every bounce
    straight along the surface normal. The lobe is always centred on the
    normal, not on the mirror direction of the incoming ray.
    """

    def __init__(self, texture: Texture, reflectance: float = 0.0):
        """Create a material.

        Args:
            texture: Surface color texture (may be shared between materials)
            reflectance: Scatter tightness in [0, 1]

        Raises:
            MaterialError: if reflectance is outside [0, 1]
        """
        reflectance = float(reflectance)
        if math.isnan(reflectance) or not 0.0 <= reflectance <= 1.0:
            raise MaterialError(f"reflectance must be in [0, 1], got {reflectance}")
        self.texture = texture
        self.reflectance = reflectance

    def brdf(self, hit: Intersection, rng: np.random.Generator) -> Ray:
        """Produce the outgoing ray for the next bounce.

        Args:
            hit: The surface intersection being shaded
            rng: Random generator owned by the calling worker

        Returns:
            A ray leaving the hit point with a normalized direction
        """
        jitter = Vec3.random_unit(rng) * (1.0 - self.reflectance)
        return Ray(hit.point, hit.normal + jitter)

    def __repr__(self) -> str:
        return f"Material(texture={self.texture!r}, reflectance={self.reflectance})"
