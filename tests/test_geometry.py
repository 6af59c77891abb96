"""Tests for vector geometry helpers."""

import math

import pytest

from bitmap_to_vector import Point
from bitmap_to_vector.geometry import (
    bezier,
    cyclic,
    ddenom,
    ddist,
    dpara,
    interval,
    sign,
    sq,
    tangent,
)


class TestGeometry:
    """Test cases for vector helpers."""

    def test_sign(self):
        assert (sign(-3), sign(0), sign(2.5)) == (-1, 0, 1)

    def test_cyclic(self):
        """Test cyclic interval membership."""
        assert cyclic(1, 2, 5)
        assert not cyclic(1, 5, 5)
        assert cyclic(5, 0, 2)
        assert cyclic(5, 6, 2)
        assert not cyclic(5, 3, 2)

    def test_interval(self):
        p = interval(0.25, Point(0, 0), Point(4, 8))

        assert (p.x, p.y) == (1.0, 2.0)

    def test_dpara_and_ddenom(self):
        """Test the parallelogram area and its matching denominator."""
        assert dpara(Point(0, 0), Point(1, 0), Point(0, 1)) == 1
        assert ddenom(Point(0, 0), Point(3, 0)) == 3

    def test_bezier_end_points(self):
        p0, p1, p2, p3 = Point(0, 0), Point(1, 2), Point(3, 2), Point(4, 0)

        assert bezier(0.0, p0, p1, p2, p3) == p0
        assert bezier(1.0, p0, p1, p2, p3) == p3

    def test_tangent_at_apex(self):
        """Test the parameter where an arch runs horizontally."""
        p0, p1, p2, p3 = Point(0, 0), Point(1, 3), Point(3, 3), Point(4, 1)

        t = tangent(p0, p1, p2, p3, Point(0, 5), Point(1, 5))

        assert t == pytest.approx(3 - math.sqrt(6))

    def test_no_tangent(self):
        """Test a direction the curve never takes."""
        p0, p1, p2, p3 = Point(0, 0), Point(1, 3), Point(3, 3), Point(4, 1)

        assert tangent(p0, p1, p2, p3, Point(0, 0), Point(0, 1)) == -1.0

    def test_sq_and_ddist(self):
        """Test the squared value and the 3-4-5 distance."""
        assert sq(-3) == 9
        assert ddist(Point(1, 1), Point(4, 5)) == 5.0
