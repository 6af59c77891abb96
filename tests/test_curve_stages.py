"""Tests for vertex adjustment, smoothing and curve optimization."""

import pytest

from bitmap_to_vector import POTRACE_CORNER, POTRACE_CURVETO
from bitmap_to_vector.adjust import adjust_vertices, line_quadform, pointslope
from bitmap_to_vector.decompose import bm_to_pathlist
from bitmap_to_vector.geometry import Point, quadform
from bitmap_to_vector.opticurve import opti_penalty, opticurve
from bitmap_to_vector.paths import PrivCurve
from bitmap_to_vector.polygon import bestpolygon, calc_lon, calc_sums
from bitmap_to_vector.smooth import reverse, smooth


def fitted(bm):
    """First path of bm, run through the polygon and adjustment stages."""
    plist = bm_to_pathlist(bm)
    pp = plist[plist.head]
    calc_sums(pp)
    calc_lon(pp)
    bestpolygon(pp)
    adjust_vertices(pp)
    return pp


class TestPointSlope:
    """Test cases for best-fitting lines."""

    def test_vertical_run(self, square_with_hole):
        """Test the line through the left edge of the square."""
        plist = bm_to_pathlist(square_with_hole)
        pp = plist[plist.head]
        calc_sums(pp)

        ctr, direction = pointslope(pp, 0, 6)

        assert ctr.x == pytest.approx(0.0)
        assert ctr.y == pytest.approx(-3.0)
        assert direction.x == pytest.approx(0.0)
        assert abs(direction.y) == pytest.approx(1.0)

    def test_line_quadform_is_squared_distance(self):
        """Test the quadratic form of the x axis."""
        Q = line_quadform(Point(0, 0), Point(1, 0))

        assert quadform(Q, Point(3, 2)) == pytest.approx(4.0)
        assert quadform(Q, Point(-7, 0)) == pytest.approx(0.0)

    def test_zero_direction_gives_zero_form(self):
        """Test that a degenerate direction adds no constraint."""
        Q = line_quadform(Point(1, 1), Point(0, 0))

        assert all(v == 0.0 for row in Q for v in row)


class TestAdjustVertices:
    """Test cases for vertex adjustment."""

    def test_vertices_stay_near_corners(self, disc):
        """Test that each vertex stays in the unit square of its corner."""
        pp = fitted(disc)

        assert pp.curve.n == pp.m
        for i, seg in enumerate(pp.curve):
            corner = pp.pt[pp.po[i]]
            assert abs(seg.vertex.x - corner.x) <= 0.5 + 1e-9
            assert abs(seg.vertex.y - corner.y) <= 0.5 + 1e-9


class TestReverse:
    """Test cases for reversing curves."""

    @pytest.mark.parametrize("n", [3, 4])
    def test_reverse_vertices(self, n):
        """Test that the vertex order is reversed."""
        curve = PrivCurve(n)
        for i in range(n):
            curve[i].vertex = Point(i, 0)

        reverse(curve)

        assert [seg.vertex.x for seg in curve] == list(range(n - 1, -1, -1))


class TestSmooth:
    """Test cases for corner classification."""

    def test_zero_alphamax_gives_corners(self, disc):
        """Test that alphamax 0 turns every vertex into a corner."""
        pp = fitted(disc)

        smooth(pp.curve, 0.0)

        assert all(seg.tag == POTRACE_CORNER for seg in pp.curve)
        assert all(seg.c[1] == seg.vertex for seg in pp.curve)

    def test_large_alphamax_gives_curves(self, disc):
        """Test that a huge alphamax leaves no corners."""
        pp = fitted(disc)

        smooth(pp.curve, 10.0)

        assert all(seg.tag == POTRACE_CURVETO for seg in pp.curve)
        assert all(0.55 <= seg.alpha <= 1.0 for seg in pp.curve)

    def test_segments_meet_at_edge_midpoints(self, disc):
        """Test that each segment ends halfway along the next edge."""
        pp = fitted(disc)
        smooth(pp.curve, 1.0)
        m = pp.curve.n

        assert pp.curve.alphacurve
        for j in range(m):
            k = (j + 1) % m
            end = pp.curve[j].c[2]
            assert end.x == pytest.approx((pp.curve[j].vertex.x + pp.curve[k].vertex.x) / 2)
            assert end.y == pytest.approx((pp.curve[j].vertex.y + pp.curve[k].vertex.y) / 2)
            assert pp.curve[j].beta == 0.5


class TestOpticurve:
    """Test cases for merging Bezier segments."""

    def test_never_more_segments(self, disc):
        """Test that optimization never adds segments."""
        pp = fitted(disc)
        smooth(pp.curve, 1.0)

        opticurve(pp, 0.2)

        assert 1 <= pp.ocurve.n <= pp.curve.n
        assert pp.ocurve.alphacurve

    def test_end_points_come_from_smoothed_curve(self, disc):
        """Test that merged segments end where smoothed segments ended."""
        pp = fitted(disc)
        smooth(pp.curve, 1.0)
        ends = {(s.c[2].x, s.c[2].y) for s in pp.curve}

        opticurve(pp, 0.5)

        assert all((s.c[2].x, s.c[2].y) in ends for s in pp.ocurve)

    def test_full_loop_is_rejected(self, disc):
        """Test that a span from a segment to itself cannot be merged."""
        pp = fitted(disc)
        smooth(pp.curve, 1.0)
        m = pp.curve.n

        assert opti_penalty(pp.curve, 2, 2, 0.2, [1] * m, [0.0] * (m + 1)) is None

    def test_corners_are_kept(self, disc):
        """Test that corner segments are never merged away."""
        pp = fitted(disc)
        smooth(pp.curve, 0.0)

        opticurve(pp, 0.2)

        assert pp.ocurve.n == pp.curve.n
        assert all(seg.tag == POTRACE_CORNER for seg in pp.ocurve)
