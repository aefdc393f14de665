"""Tests for 2D vector helpers."""
from __future__ import annotations

import math

from bounce_physics import vec


class TestBasics:
    def test_add_sub(self) -> None:
        assert vec.add((1.0, 2.0), (3.0, 4.0)) == (4.0, 6.0)
        assert vec.sub((1.0, 2.0), (3.0, 4.0)) == (-2.0, -2.0)

    def test_scale_dot(self) -> None:
        assert vec.scale((1.0, -2.0), 3.0) == (3.0, -6.0)
        assert vec.dot((1.0, 2.0), (3.0, 4.0)) == 11.0

    def test_length(self) -> None:
        assert vec.length((3.0, 4.0)) == 5.0

    def test_normalize(self) -> None:
        n = vec.normalize((0.0, 5.0))
        assert n == (0.0, 1.0)

    def test_normalize_zero(self) -> None:
        assert vec.normalize((0.0, 0.0)) == (0.0, 0.0)

    def test_perpendicular(self) -> None:
        p = vec.perpendicular((1.0, 0.0))
        assert vec.dot(p, (1.0, 0.0)) == 0.0
        assert math.isclose(p[1], 1.0)

    def test_from_angle(self) -> None:
        x, y = vec.from_angle(math.pi / 2)
        assert math.isclose(x, 0.0, abs_tol=1e-12)
        assert math.isclose(y, 1.0)

    def test_lerp(self) -> None:
        assert vec.lerp((0.0, 0.0), (10.0, 20.0), 0.25) == (2.5, 5.0)


class TestReflect:
    def test_head_on(self) -> None:
        v = vec.reflect((0.0, 10.0), (0.0, -1.0), 1.0)
        assert math.isclose(v[1], -10.0)

    def test_restitution_scales_normal_part(self) -> None:
        v = vec.reflect((3.0, 10.0), (0.0, -1.0), 0.5)
        assert math.isclose(v[0], 3.0)
        assert math.isclose(v[1], -5.0)

    def test_separating_velocity_unchanged(self) -> None:
        assert vec.reflect((0.0, -4.0), (0.0, -1.0), 0.7) == (0.0, -4.0)
