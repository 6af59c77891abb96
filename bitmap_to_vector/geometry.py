"""
Point type and the small vector helpers shared by the curve fitting stages.
"""

import math


class Point:
    """A 2D point. Pixel paths use integer coordinates, curves use floats."""

    __slots__ = ("x", "y")

    def __init__(self, x=0, y=0):
        self.x = x
        self.y = y

    def copy(self) -> "Point":
        return Point(self.x, self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return "Point(%r, %r)" % (self.x, self.y)


def sign(x) -> int:
    """-1, 0 or 1 according to the sign of x."""
    if x > 0:
        return 1
    if x < 0:
        return -1
    return 0


def sq(x: float) -> float:
    """x squared."""
    return x * x


def interval(t: float, a: Point, b: Point) -> Point:
    """Point at parameter t on the segment a-b (t=0 gives a, t=1 gives b)."""
    return Point(a.x + t * (b.x - a.x), a.y + t * (b.y - a.y))


def dorth_infty(p0: Point, p2: Point) -> Point:
    """
    Direction 90 degrees counterclockwise from p2-p0, snapped to one of the
    eight compass directions.
    """
    return Point(-sign(p2.y - p0.y), sign(p2.x - p0.x))


def dpara(p0: Point, p1: Point, p2: Point) -> float:
    """Signed area of the parallelogram spanned by p1-p0 and p2-p0."""
    x1 = p1.x - p0.x
    y1 = p1.y - p0.y
    x2 = p2.x - p0.x
    y2 = p2.y - p0.y
    return x1 * y2 - x2 * y1


def ddenom(p0: Point, p2: Point) -> float:
    """
    Denominator paired with dpara: the unit square centred at p1 meets the
    line p0-p2 iff |dpara(p0, p1, p2)| <= ddenom(p0, p2).
    """
    r = dorth_infty(p0, p2)
    return r.y * (p2.x - p0.x) - r.x * (p2.y - p0.y)


def cyclic(a: int, b: int, c: int) -> bool:
    """True if a <= b < c in the cyclic sense."""
    if a <= c:
        return a <= b < c
    return a <= b or b < c


def xprod(p1x, p1y, p2x, p2y):
    """2D cross product of the vectors (p1x, p1y) and (p2x, p2y)."""
    return p1x * p2y - p1y * p2x


def cprod(p0: Point, p1: Point, p2: Point, p3: Point) -> float:
    """Cross product (p1-p0) x (p3-p2)."""
    x1 = p1.x - p0.x
    y1 = p1.y - p0.y
    x2 = p3.x - p2.x
    y2 = p3.y - p2.y
    return x1 * y2 - x2 * y1


def iprod(p0: Point, p1: Point, p2: Point) -> float:
    """Inner product (p1-p0) . (p2-p0)."""
    x1 = p1.x - p0.x
    y1 = p1.y - p0.y
    x2 = p2.x - p0.x
    y2 = p2.y - p0.y
    return x1 * x2 + y1 * y2


def iprod1(p0: Point, p1: Point, p2: Point, p3: Point) -> float:
    """Inner product (p1-p0) . (p3-p2)."""
    x1 = p1.x - p0.x
    y1 = p1.y - p0.y
    x2 = p3.x - p2.x
    y2 = p3.y - p2.y
    return x1 * x2 + y1 * y2


def ddist(p: Point, q: Point) -> float:
    """Euclidean distance between p and q."""
    return math.sqrt(sq(p.x - q.x) + sq(p.y - q.y))


def quadform(Q, w: Point) -> float:
    """
    Evaluate the affine quadratic form Q at w.

    Q is a symmetric 3x3 matrix; the value is v^t Q v with v = (w.x, w.y, 1).
    """
    v = (w.x, w.y, 1.0)
    total = 0.0
    for i in range(3):
        for j in range(3):
            total += v[i] * Q[i][j] * v[j]
    return total


def bezier(t: float, p0: Point, p1: Point, p2: Point, p3: Point) -> Point:
    """Point at parameter t on the cubic Bezier curve (p0, p1, p2, p3)."""
    s = 1 - t
    return Point(
        s * s * s * p0.x + 3 * (s * s * t) * p1.x + 3 * (t * t * s) * p2.x + t * t * t * p3.x,
        s * s * s * p0.y + 3 * (s * s * t) * p1.y + 3 * (t * t * s) * p2.y + t * t * t * p3.y,
    )


def tangent(p0: Point, p1: Point, p2: Point, p3: Point, q0: Point, q1: Point) -> float:
    """
    Parameter t in [0, 1] at which the convex Bezier curve (p0, p1, p2, p3)
    is parallel to q1-q0, or -1.0 if there is none.

    The tangency condition is the quadratic
    (1-t)^2 A + 2(1-t)t B + t^2 C = 0.
    """
    A = cprod(p0, p1, q0, q1)
    B = cprod(p1, p2, q0, q1)
    C = cprod(p2, p3, q0, q1)

    a = A - 2 * B + C
    b = -2 * A + 2 * B
    c = A

    d = b * b - 4 * a * c
    if a == 0 or d < 0:
        return -1.0

    s = math.sqrt(d)
    r1 = (-b + s) / (2 * a)
    r2 = (-b - s) / (2 * a)

    if 0 <= r1 <= 1:
        return r1
    if 0 <= r2 <= 1:
        return r2
    return -1.0
