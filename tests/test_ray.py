"""Tests for Ray class."""

import pytest

from stochray.vec3 import Vec3, Point3, DegenerateVectorError
from stochray.ray import Ray


class TestRay:
    """Test Ray construction and evaluation."""

    def test_direction_is_normalized(self):
        ray = Ray(Point3(0, 0, 0), Vec3(3, 4, 0))
        assert abs(ray.direction.length() - 1.0) < 1e-12
        assert ray.direction == Vec3(0.6, 0.8, 0)

    def test_at(self):
        ray = Ray(Point3(1, 2, 3), Vec3(0, 0, 2))
        assert ray.at(0) == Point3(1, 2, 3)
        assert ray.at(2.5) == Point3(1, 2, 5.5)

    def test_at_negative_t(self):
        ray = Ray(Point3(0, 0, 0), Vec3(1, 0, 0))
        assert ray.at(-1) == Point3(-1, 0, 0)

    def test_zero_direction_raises(self):
        with pytest.raises(DegenerateVectorError):
            Ray(Point3(0, 0, 0), Vec3(0, 0, 0))

    def test_repr(self):
        assert "Ray(origin=" in repr(Ray(Point3(0, 0, 0), Vec3(1, 0, 0)))
