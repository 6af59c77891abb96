"""Tests for bounding boxes of traced output."""

import pytest

from bitmap_to_vector import Path, Point, bounding_box, path_limits
from bitmap_to_vector.bbox import Interval, bezier_limits


class TestBezierLimits:
    """Test cases for 1-dimensional Bezier extrema."""

    def test_symmetric_bulge(self):
        """Test a bulge whose extremum lies at t = 0.5."""
        i = Interval.singleton(0.0)

        bezier_limits(0.0, 1.0, 1.0, 0.0, i)

        assert i.min == 0.0
        assert i.max == pytest.approx(0.75)

    def test_asymmetric_bulge(self):
        """Test a bulge with two critical points."""
        i = Interval.singleton(0.0)

        bezier_limits(0.0, 3.0, 0.0, 0.0, i)

        assert i.max == pytest.approx(4.0 / 3.0)

    def test_control_points_inside(self):
        """Test that an interval already covering the hull is only extended by the end point."""
        i = Interval(-5.0, 5.0)

        bezier_limits(0.0, 1.0, 2.0, 7.0, i)

        assert tuple(i) == (-5.0, 7.0)


class TestBoundingBox:
    """Test cases for whole-path boxes."""

    def test_empty_path(self):
        """Test the box of nothing."""
        assert bounding_box(Path()) == (0, 0, 0, 0)
        assert tuple(path_limits([], Point(1, 0))) == (0.0, 0.0)

    def test_square_box(self, square_with_hole):
        """Test that the box hugs the traced square."""
        path = square_with_hole.trace(opticurve=False)

        x0, y0, x1, y1 = path.bbox

        assert 1.5 <= x0 < x1 <= 8.5
        assert 1.5 <= y0 < y1 <= 8.5
        assert x1 - x0 > 4
        assert y1 - y0 > 4

    def test_box_contains_end_points(self, disc):
        """Test that every segment end point lies in the box."""
        path = disc.trace()
        x0, y0, x1, y1 = bounding_box(path)

        for curve in path:
            for seg in curve:
                assert x0 <= seg.end_point.x <= x1
                assert y0 <= seg.end_point.y <= y1

    def test_direction_limits(self, disc):
        """Test that limits along a direction scale with it."""
        path = disc.trace()

        lo, hi = path_limits(path, Point(1, 0))
        lo2, hi2 = path_limits(path, Point(2, 0))

        assert lo2 == pytest.approx(2 * lo)
        assert hi2 == pytest.approx(2 * hi)
