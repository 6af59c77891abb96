"""
Bounding boxes of traced output.

Limits are taken along an arbitrary direction: for a direction d, the
limits of a curve are the smallest interval containing <v, d> for every
point v on the curve, Bezier bulges included. Axis-aligned boxes use the two
unit directions.
"""

import math
from typing import Iterable, Tuple

from .geometry import Point
from .params import POTRACE_CORNER, POTRACE_CURVETO


class Interval:
    """Closed range [min, max], grown one value at a time by extend()."""

    __slots__ = ("min", "max")

    def __init__(self, lo: float, hi: float):
        self.min = lo
        self.max = hi

    @classmethod
    def singleton(cls, x: float) -> "Interval":
        return cls(x, x)

    def extend(self, x: float) -> None:
        if x < self.min:
            self.min = x
        elif x > self.max:
            self.max = x

    def __contains__(self, x: float) -> bool:
        return self.min <= x <= self.max

    def __iter__(self):
        yield self.min
        yield self.max

    def __repr__(self):
        return "Interval(%r, %r)" % (self.min, self.max)


def _dot(a: Point, b: Point) -> float:
    return a.x * b.x + a.y * b.y


def _bezier1(t: float, x0: float, x1: float, x2: float, x3: float) -> float:
    s = 1 - t
    return s * s * s * x0 + 3 * (s * s * t) * x1 + 3 * (t * t * s) * x2 + t * t * t * x3


def bezier_limits(x0: float, x1: float, x2: float, x3: float, i: Interval) -> None:
    """
    Extend i to cover the 1-dimensional Bezier segment x0..x3.

    x0 is assumed to be in i already; curves are closed, so every start
    point is some other segment's end point.
    """
    i.extend(x3)

    # no extremum can leave i if all control points are inside it
    if x1 in i and x2 in i:
        return

    # extrema: a t^2 + b t + c = 0
    a = -3 * x0 + 9 * x1 - 9 * x2 + 3 * x3
    b = 6 * x0 - 12 * x1 + 6 * x2
    c = -3 * x0 + 3 * x1

    if a == 0:
        if b != 0:
            t = -c / b
            if 0 < t < 1:
                i.extend(_bezier1(t, x0, x1, x2, x3))
        return

    d = b * b - 4 * a * c
    if d > 0:
        r = math.sqrt(d)
        for t in ((-b - r) / (2 * a), (-b + r) / (2 * a)):
            if 0 < t < 1:
                i.extend(_bezier1(t, x0, x1, x2, x3))


def segment_limits(segment, start: Point, direction: Point, i: Interval) -> None:
    """Extend i to cover the segment that starts at start."""
    if segment.tag == POTRACE_CORNER:
        i.extend(_dot(segment.c, direction))
        i.extend(_dot(segment.end_point, direction))
    elif segment.tag == POTRACE_CURVETO:
        bezier_limits(
            _dot(start, direction),
            _dot(segment.c1, direction),
            _dot(segment.c2, direction),
            _dot(segment.end_point, direction),
            i,
        )


def curve_limits(curve, direction: Point, i: Interval) -> None:
    """Extend i to cover every point of a closed curve."""
    start = curve[-1].end_point
    for segment in curve:
        segment_limits(segment, start, direction, i)
        start = segment.end_point


def path_limits(curves: Iterable, direction: Point) -> Interval:
    """
    Smallest interval containing <v, direction> for every point v of the
    given curves; the singleton [0, 0] if there are none.
    """
    curves = [c for c in curves if len(c)]
    if not curves:
        return Interval(0.0, 0.0)

    i = Interval.singleton(_dot(curves[0][0].end_point, direction))
    for curve in curves:
        curve_limits(curve, direction, i)
    return i


def bounding_box(curves: Iterable) -> Tuple[float, float, float, float]:
    """Axis-aligned box (x0, y0, x1, y1) of the curves; all zero if empty."""
    curves = list(curves)
    xlim = path_limits(curves, Point(1, 0))
    ylim = path_limits(curves, Point(0, 1))
    return xlim.min, ylim.min, xlim.max, ylim.max
