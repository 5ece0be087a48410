"""Tests for texture system."""

import pytest

from stochray.vec3 import Color
from stochray.textures import Texture, SolidColor, Checkerboard

RED = Color(1, 0, 0)
WHITE = Color(1, 1, 1)


class TestSolidColor:
    """Test SolidColor texture."""

    def test_returns_constant_color(self):
        tex = SolidColor(Color(0.5, 0.3, 0.1))
        assert tex.sample(0, 0) == Color(0.5, 0.3, 0.1)

    def test_ignores_uv(self):
        tex = SolidColor(RED)
        assert tex.sample(0, 0) == tex.sample(0.5, 0.5) == tex.sample(1, 1)

    def test_from_rgb(self):
        tex = SolidColor.from_rgb(0.2, 0.4, 0.6)
        assert tex.sample(0, 0) == Color(0.2, 0.4, 0.6)

    def test_is_texture(self):
        assert isinstance(SolidColor(RED), Texture)


class TestCheckerboard:
    """Test Checkerboard texture parity."""

    def test_origin_cell_uses_color2(self):
        tex = Checkerboard(RED, WHITE, 20)
        assert tex.sample(0.01, 0.01) is WHITE

    def test_u_boundary_flips_color(self):
        tex = Checkerboard(RED, WHITE, 20)
        # floor(20u) goes 0 -> 1 at u = 0.05
        assert tex.sample(0.049, 0.01) is WHITE
        assert tex.sample(0.051, 0.01) is RED

    def test_alternates_along_u_with_fixed_v_parity(self):
        tex = Checkerboard(RED, WHITE, 20)
        for v in (0.01, 0.03, 0.049):
            colors = [tex.sample((i + 0.5) / 20, v) for i in range(20)]
            for i, c in enumerate(colors):
                assert c is (RED if i % 2 else WHITE)

    def test_v_parity_inverts_pattern(self):
        tex = Checkerboard(RED, WHITE, 20)
        v_odd = 1.5 / 20
        assert tex.sample(0.5 / 20, v_odd) is RED
        assert tex.sample(1.5 / 20, v_odd) is WHITE

    def test_independent_of_v_within_cell_row(self):
        tex = Checkerboard(RED, WHITE, 20)
        u = 3.5 / 20
        assert tex.sample(u, 0.2 / 20) is tex.sample(u, 0.9 / 20)
        assert tex.sample(u, 2.2 / 20) is tex.sample(u, 4.9 / 20)

    def test_scale(self):
        tex = Checkerboard(RED, WHITE, 2)
        assert tex.sample(0.25, 0.25) is WHITE
        assert tex.sample(0.75, 0.25) is RED
        assert tex.sample(0.75, 0.75) is WHITE

    def test_deterministic(self):
        tex = Checkerboard(RED, WHITE, 20)
        assert tex.sample(0.37, 0.81) is tex.sample(0.37, 0.81)
