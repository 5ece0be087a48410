"""
Geometric shapes and the scene container.

Each shape implements the Intersectable interface with an `intersect`
method, so the scene and the integrator work with any shape.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Optional, TYPE_CHECKING
import math

from .vec3 import Vec3, Point3
from .ray import Ray

if TYPE_CHECKING:
    from .materials import Material


DEFAULT_EPSILON = 1e-4


@dataclass
class Intersection:
    """Stores information about a ray-object intersection.

    Attributes:
        t: Distance along the ray (always greater than the epsilon guard)
        point: The intersection point in world space
        normal: Outward unit surface normal at the point
        uv: Texture coordinates packed as Vec3(u, v, 0)
        obj: The object that was hit
    """
    t: float
    point: Point3
    normal: Vec3
    uv: Vec3
    obj: Intersectable

    @property
    def material(self) -> Optional[Material]:
        return getattr(self.obj, 'material', None)


class Intersectable(ABC):
    """Abstract base class for all objects that can be hit by rays."""

    material: Optional[Material] = None

    @abstractmethod
    def intersect(self, ray: Ray, epsilon: float = DEFAULT_EPSILON) -> Optional[Intersection]:
        """Test if ray intersects this object.

        Args:
            ray: The ray to test (unit direction)
            epsilon: Hits at distance <= epsilon are rejected

        Returns:
            Intersection if a hit was found, None otherwise
        """
        pass


class Sphere(Intersectable):
    """A sphere defined by center and radius."""

    def __init__(self, center: Point3, radius: float, material: Optional[Material] = None):
        """Create a sphere.

        Args:
            center: Center point of the sphere
            radius: Radius of the sphere, must be positive
            material: Material for shading (may be shared between spheres)

        Raises:
            ValueError: if radius is not positive
        """
        if not radius > 0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        self.center = center
        self.radius = float(radius)
        self.material = material

    def intersect(self, ray: Ray, epsilon: float = DEFAULT_EPSILON) -> Optional[Intersection]:
        """Test ray-sphere intersection.

        With a unit direction the quadratic coefficient a is 1, leaving
        t = -b +/- sqrt(b² - c) for b = (O-C)·d and c = (O-C)·(O-C) - r².
        The near root is tried first, then the far root, so rays that
        start inside the sphere hit its far wall.
        """
        to = ray.origin - self.center
        b = to.dot(ray.direction)
        c = to.length_squared() - self.radius * self.radius
        discriminant = b * b - c
        if discriminant <= epsilon:
            return None

        sqrtd = math.sqrt(discriminant)
        for t in (-b - sqrtd, -b + sqrtd):
            if t > epsilon:
                point = ray.at(t)
                return Intersection(
                    t=t,
                    point=point,
                    normal=self.normal(point),
                    uv=self.uv(point),
                    obj=self,
                )
        return None

    def normal(self, point: Point3) -> Vec3:
        """Outward unit normal at a point on the surface."""
        return (point - self.center).normalize()

    def uv(self, point: Point3) -> Vec3:
        """Spherical UV coordinates for a point on the surface.

        u: angle around the Y axis, atan2(z, x) mapped to [0, 1]
        v: elevation from the XZ plane, mapped from [-pi/2, pi/2] to [0, 1]
        """
        p = point - self.center
        ring = math.hypot(p.x, p.z)
        u = (math.atan2(p.z, p.x) + math.pi) / (2 * math.pi)
        v = (math.atan2(p.y, ring) + 0.5 * math.pi) / math.pi
        return Vec3(u, v, 0.0)

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"


class Scene:
    """An unordered collection of intersectable objects."""

    def __init__(self, objects: Optional[list[Intersectable]] = None):
        self.objects: list[Intersectable] = list(objects) if objects is not None else []

    def add(self, obj: Intersectable) -> None:
        """Add an object to the scene."""
        self.objects.append(obj)

    def clear(self) -> None:
        """Remove all objects."""
        self.objects.clear()

    def intersect(self, ray: Ray, epsilon: float = DEFAULT_EPSILON) -> Optional[Intersection]:
        """Find the closest intersection among all objects.

        A later hit only replaces the current closest one when it is
        strictly nearer, so equal distances keep the first object added.
        """
        closest: Optional[Intersection] = None

        for obj in self.objects:
            hit = obj.intersect(ray, epsilon)
            if hit is None:
                continue
            if closest is None or closest.t > hit.t:
                closest = hit

        return closest

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Intersectable]:
        return iter(self.objects)

    def __repr__(self) -> str:
        return f"Scene({len(self.objects)} objects)"
