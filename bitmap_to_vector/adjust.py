# =============================================================================
# VERTEX ADJUSTMENT
# =============================================================================
# Stage 3: move each vertex of the optimal polygon to the point, within the
# unit square around the original pixel corner, that is closest (in summed
# squared distance) to the best-fitting lines of its two incident edges.
# =============================================================================

import math
from typing import List, Tuple

from .geometry import Point, quadform, sq
from .paths import PixelPath, PrivCurve

QuadForm = List[List[float]]


def pointslope(pp: PixelPath, i: int, j: int) -> Tuple[Point, Point]:
    """
    Centre and direction of the best-fitting line through points i..j.

    The direction is the eigenvector of the larger eigenvalue of the
    covariance matrix of the points; it is (0, 0) if the two eigenvalues
    coincide. Indices may lie outside 0..n-1 and are taken cyclically;
    assumes i < j. Needs the path's sums.

    Returns:
        (ctr, dir) as Points
    """
    n = len(pp)
    sums = pp.sums

    r = 0  # rotations from i to j
    while j >= n:
        j -= n
        r += 1
    while i >= n:
        i -= n
        r -= 1
    while j < 0:
        j += n
        r -= 1
    while i < 0:
        i += n
        r += 1

    x = sums.x[j + 1] - sums.x[i] + r * sums.x[n]
    y = sums.y[j + 1] - sums.y[i] + r * sums.y[n]
    x2 = sums.x2[j + 1] - sums.x2[i] + r * sums.x2[n]
    xy = sums.xy[j + 1] - sums.xy[i] + r * sums.xy[n]
    y2 = sums.y2[j + 1] - sums.y2[i] + r * sums.y2[n]
    k = j + 1 - i + r * n

    ctr = Point(x / k, y / k)

    a = (x2 - x * x / k) / k
    b = (xy - x * y / k) / k
    c = (y2 - y * y / k) / k

    lambda2 = (a + c + math.sqrt((a - c) * (a - c) + 4 * b * b)) / 2  # larger e.value

    # now find e.vector for lambda2
    a -= lambda2
    c -= lambda2

    direction = Point(0.0, 0.0)
    if math.fabs(a) >= math.fabs(c):
        l = math.sqrt(a * a + b * b)
        if l != 0:
            direction = Point(-b / l, a / l)
    else:
        l = math.sqrt(c * c + b * b)
        if l != 0:
            direction = Point(-c / l, b / l)
    # if l == 0 the eigenvalues coincide (this can happen when k=4) and
    # the direction stays (0, 0)
    return ctr, direction


def line_quadform(ctr: Point, direction: Point) -> QuadForm:
    """
    Quadratic form measuring the squared distance from the line through ctr
    with the given direction: dist^2(x, y) = (x, y, 1) Q (x, y, 1)^t.
    A zero direction gives the zero form.
    """
    d = sq(direction.x) + sq(direction.y)
    if d == 0.0:
        return [[0.0] * 3 for _ in range(3)]
    v = (direction.y, -direction.x, direction.x * ctr.y - direction.y * ctr.x)
    return [[v[l] * v[k] / d for k in range(3)] for l in range(3)]


def _minimize_on_square(Q: QuadForm, s: Point) -> Point:
    """
    Minimise Q over the unit square centred at s.

    Q must be non-singular on entry or be made so here: if its 2x2 part is
    singular (the two lines are parallel) an orthogonal line through s is
    added first.
    """
    while True:
        det = Q[0][0] * Q[1][1] - Q[0][1] * Q[1][0]
        if det != 0.0:
            w = Point(
                (-Q[0][2] * Q[1][1] + Q[1][2] * Q[0][1]) / det,
                (Q[0][2] * Q[1][0] - Q[1][2] * Q[0][0]) / det,
            )
            break

        # matrix is singular - lines are parallel. Add another, orthogonal
        # axis, through the center of the unit square
        if Q[0][0] > Q[1][1]:
            v0, v1 = -Q[0][1], Q[0][0]
        elif Q[1][1]:
            v0, v1 = -Q[1][1], Q[1][0]
        else:
            v0, v1 = 1.0, 0.0
        d = sq(v0) + sq(v1)
        v = (v0, v1, -v1 * s.y - v0 * s.x)
        for l in range(3):
            for k in range(3):
                Q[l][k] += v[l] * v[k] / d

    if math.fabs(w.x - s.x) <= 0.5 and math.fabs(w.y - s.y) <= 0.5:
        return w

    # The minimum was not in the unit square; minimise on its boundary.
    best = quadform(Q, s)
    xmin = s.x
    ymin = s.y

    if Q[0][0] != 0.0:
        for z in range(2):  # value of the y-coordinate
            wy = s.y - 0.5 + z
            wx = -(Q[0][1] * wy + Q[0][2]) / Q[0][0]
            cand = quadform(Q, Point(wx, wy))
            if math.fabs(wx - s.x) <= 0.5 and cand < best:
                best, xmin, ymin = cand, wx, wy

    if Q[1][1] != 0.0:
        for z in range(2):  # value of the x-coordinate
            wx = s.x - 0.5 + z
            wy = -(Q[1][0] * wx + Q[1][2]) / Q[1][1]
            cand = quadform(Q, Point(wx, wy))
            if math.fabs(wy - s.y) <= 0.5 and cand < best:
                best, xmin, ymin = cand, wx, wy

    # check four corners
    for l in range(2):
        for k in range(2):
            corner = Point(s.x - 0.5 + l, s.y - 0.5 + k)
            cand = quadform(Q, corner)
            if cand < best:
                best, xmin, ymin = cand, corner.x, corner.y

    return Point(xmin, ymin)


def adjust_vertices(pp: PixelPath) -> None:
    """
    Compute the adjusted vertices of the optimal polygon of pp and store
    them in a fresh pp.curve (one segment per polygon vertex).

    Instead of the intersection of consecutive edge lines, each vertex is
    the point of the unit square around the pixel corner minimising the
    summed squared distance to both lines.
    """
    m = pp.m
    po = pp.po
    n = len(pp)
    pt = pp.pt
    x0 = pp.x0
    y0 = pp.y0

    pp.curve = PrivCurve(m)

    # "optimal" point-slope representation of each edge, as a singular
    # quadratic form
    q: List[QuadForm] = []
    for i in range(m):
        j = po[(i + 1) % m]
        j = (j - po[i]) % n + po[i]
        ctr, direction = pointslope(pp, po[i], j)
        q.append(line_quadform(ctr, direction))

    for i in range(m):
        # the vertex, in coordinates relative to x0/y0
        s = Point(pt[po[i]].x - x0, pt[po[i]].y - y0)

        # intersect segments i-1 and i
        j = (i - 1) % m
        Q = [[q[j][l][k] + q[i][l][k] for k in range(3)] for l in range(3)]

        w = _minimize_on_square(Q, s)
        pp.curve[i].vertex = Point(w.x + x0, w.y + y0)
