"""
Camera module for generating primary rays.

A pinhole camera positioned with look-at parameters and a
vertical field of view. No lens or shutter sampling.
"""

from __future__ import annotations
import math
from .vec3 import Vec3, Point3
from .ray import Ray


class Camera:
    """A pinhole camera with perspective projection."""

    def __init__(
        self,
        look_from: Point3,
        look_at: Point3,
        vup: Vec3 = Vec3(0, 1, 0),
        vfov: float = 90.0,
        aspect_ratio: float = 16.0 / 9.0,
    ):
        """Create a camera.

        Args:
            look_from: Camera position in world space
            look_at: Point the camera is looking at
            vup: World up vector (usually (0, 1, 0))
            vfov: Vertical field of view in degrees
            aspect_ratio: Width / Height ratio

        Raises:
            ValueError: for a field of view outside (0, 180) or a
                non-positive aspect ratio
            DegenerateVectorError: if look_from equals look_at or vup is
                parallel to the viewing direction
        """
        if not 0.0 < vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {vfov}")
        if aspect_ratio <= 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {aspect_ratio}")

        half_height = math.tan(math.radians(vfov) / 2)
        half_width = aspect_ratio * half_height

        # Orthonormal camera basis
        self.w = (look_from - look_at).normalize()  # Points backward from camera
        self.u = vup.cross(self.w).normalize()       # Points right
        self.v = self.w.cross(self.u)                # Points up

        self.origin = look_from
        self.vfov = vfov
        self.aspect_ratio = aspect_ratio
        self.horizontal = self.u * (2.0 * half_width)
        self.vertical = self.v * (2.0 * half_height)
        self.lower_left_corner = self.origin - (
            self.v * half_height + self.u * half_width + self.w
        )

    def get_ray(self, s: float, t: float) -> Ray:
        """Generate a ray for the given coordinates on the image plane.

        Args:
            s: Horizontal coordinate [0, 1] (0 = left, 1 = right)
            t: Vertical coordinate [0, 1] (0 = bottom, 1 = top)

        Returns:
            A ray from the camera through the specified point
        """
        target = self.lower_left_corner + (self.horizontal * s + self.vertical * t)
        return Ray(self.origin, target - self.origin)

    def __repr__(self) -> str:
        return f"Camera(origin={self.origin}, looking_at={self.origin - self.w})"
