"""
Ray class for representing rays in 3D space.

A ray is defined by an origin point and a unit direction vector.
Ray(t) = origin + t * direction
"""

from __future__ import annotations
from .vec3 import Vec3, Point3


class Ray:
    """A ray with origin and normalized direction.

    The parametric form is: P(t) = origin + t * direction
    where t is the distance travelled along the ray.
    """

    __slots__ = ('origin', 'direction')

    def __init__(self, origin: Point3, direction: Vec3):
        """Create a ray with given origin and direction.

        Args:
            origin: The starting point of the ray
            direction: Any non-zero direction; it is normalized here

        Raises:
            DegenerateVectorError: if direction has zero length
        """
        self.origin = origin
        self.direction = direction.normalize()

    def at(self, t: float) -> Point3:
        """Get the point along the ray at parameter t."""
        return self.origin + self.direction * t

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction})"
