"""Tests for Material class."""

import pytest
import math
import numpy as np

from stochray.vec3 import Vec3, Point3, Color
from stochray.materials import Material, MaterialError
from stochray.textures import SolidColor, Checkerboard
from stochray.shapes import Intersection, Sphere


@pytest.fixture
def texture():
    return SolidColor(Color(0.5, 0.5, 0.5))


@pytest.fixture
def hit():
    sphere = Sphere(Point3(0, 0, 0), 1.0)
    return Intersection(
        t=1.0,
        point=Point3(0, 1, 0),
        normal=Vec3(0, 1, 0),
        uv=Vec3(0.5, 1.0, 0),
        obj=sphere,
    )


class TestMaterialCreation:
    """Test Material construction and validation."""

    def test_attributes(self, texture):
        mat = Material(texture, 0.25)
        assert mat.texture is texture
        assert mat.reflectance == 0.25

    def test_default_reflectance(self, texture):
        assert Material(texture).reflectance == 0.0

    @pytest.mark.parametrize("reflectance", [0.0, 0.5, 1.0])
    def test_valid_range(self, texture, reflectance):
        Material(texture, reflectance)

    @pytest.mark.parametrize("reflectance", [-0.1, 1.01, 5, float('nan')])
    def test_rejects_out_of_range(self, texture, reflectance):
        with pytest.raises(MaterialError):
            Material(texture, reflectance)

    def test_texture_can_be_shared(self):
        checker = Checkerboard(Color(1, 1, 1), Color(0, 0, 0), 20)
        a = Material(checker, 0.0)
        b = Material(checker, 0.7)
        assert a.texture is b.texture


class TestMaterialBrdf:
    """Test the scatter lobe."""

    def test_origin_is_hit_point(self, texture, hit):
        ray = Material(texture).brdf(hit, np.random.default_rng(0))
        assert ray.origin == hit.point

    def test_direction_normalized(self, texture, hit):
        rng = np.random.default_rng(1)
        mat = Material(texture, 0.3)
        for _ in range(100):
            assert abs(mat.brdf(hit, rng).direction.length() - 1.0) < 1e-12

    def test_full_reflectance_follows_normal(self, texture, hit):
        rng = np.random.default_rng(2)
        mat = Material(texture, 1.0)
        for _ in range(10):
            assert mat.brdf(hit, rng).direction == hit.normal

    def test_diffuse_stays_above_surface(self, texture, hit):
        rng = np.random.default_rng(3)
        mat = Material(texture, 0.0)
        for _ in range(200):
            assert mat.brdf(hit, rng).direction.dot(hit.normal) > 0

    def test_diffuse_is_stochastic(self, texture, hit):
        rng = np.random.default_rng(4)
        mat = Material(texture, 0.0)
        directions = {tuple(mat.brdf(hit, rng).direction) for _ in range(10)}
        assert len(directions) > 1

    def test_higher_reflectance_tightens_lobe(self, texture, hit):
        def mean_cosine(reflectance):
            rng = np.random.default_rng(5)
            mat = Material(texture, reflectance)
            return np.mean([mat.brdf(hit, rng).direction.dot(hit.normal) for _ in range(300)])

        assert mean_cosine(0.9) > mean_cosine(0.0)

    def test_lobe_ignores_incoming_direction(self, texture, hit):
        # The scatter is centred on the normal, not the mirror direction
        mat = Material(texture, 1.0)
        assert mat.brdf(hit, np.random.default_rng(6)).direction == Vec3(0, 1, 0)

    def test_seeded_brdf_reproducible(self, texture, hit):
        mat = Material(texture, 0.2)
        a = mat.brdf(hit, np.random.default_rng(7)).direction
        b = mat.brdf(hit, np.random.default_rng(7)).direction
        assert a == b
