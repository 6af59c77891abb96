# =============================================================================
# OPTIMAL POLYGON
# =============================================================================
# Stage 1: determine the straight subpaths of a pixel path (lon).
# Stage 2: find the polygon with the fewest edges whose edges are all
#          straight subpaths, breaking ties by the summed penalty3.
# =============================================================================

import math

import numpy as np

from .geometry import cyclic, sign, xprod
from .paths import PixelPath, Sums

INFTY = 10000000  # longer than any path; need not be really infinite


def calc_sums(pp: PixelPath) -> None:
    """
    Fill in the prefix sums of a path, relative to its first point, for
    O(1) evaluation of penalty3 and pointslope later on.
    """
    pp.x0 = pp.pt[0].x
    pp.y0 = pp.pt[0].y

    xs = np.fromiter((p.x for p in pp.pt), dtype=np.int64, count=len(pp)) - pp.x0
    ys = np.fromiter((p.y for p in pp.pt), dtype=np.int64, count=len(pp)) - pp.y0

    def prefix(values):
        return [0] + np.cumsum(values).tolist()

    pp.sums = Sums(
        x=prefix(xs),
        y=prefix(ys),
        x2=prefix(xs * xs),
        xy=prefix(xs * ys),
        y2=prefix(ys * ys),
    )


def calc_lon(pp: PixelPath) -> None:
    """
    Compute lon[i] for every point: the furthest index such that a straight
    line can be drawn through the pixel run from i to lon[i].

    Straightness is a triplewise property, so it suffices to keep two
    half-plane constraints: future points cur must satisfy
    xprod(constraint0, cur) >= 0 and xprod(constraint1, cur) <= 0. The
    next-corner table nc lets the inner loop test constraints at corners
    only. A run is also cut once it has moved in all four directions.

    The algorithm relies on there being a direction change at point 0, which
    holds for paths produced by the decomposition; even otherwise the result
    stays correct, as "furthest" is not needed for correctness.
    """
    pt = pp.pt
    n = len(pp)
    pivk = [0] * n  # pivk[i]: furthest k such that i..k lie on a line
    nc = [0] * n    # nc[i]: next corner after i

    k = 0
    for i in range(n - 1, -1, -1):
        if pt[i].x != pt[k].x and pt[i].y != pt[k].y:
            k = i + 1  # necessarily i < n-1 in this case
        nc[i] = k

    for i in range(n - 1, -1, -1):
        ct = [0, 0, 0, 0]

        # keep track of "directions" that have occurred
        i1 = (i + 1) % n
        direction = (3 + 3 * (pt[i1].x - pt[i].x) + (pt[i1].y - pt[i].y)) // 2
        ct[direction] += 1

        c0x = c0y = c1x = c1y = 0

        # find the next k such that no straight line from i to k
        k = nc[i]
        k1 = i
        foundk = False
        while True:
            direction = (3 + 3 * sign(pt[k].x - pt[k1].x) + sign(pt[k].y - pt[k1].y)) // 2
            ct[direction] += 1

            # if all four "directions" have occurred, cut this path
            if ct[0] and ct[1] and ct[2] and ct[3]:
                pivk[i] = k1
                foundk = True
                break

            cur_x = pt[k].x - pt[i].x
            cur_y = pt[k].y - pt[i].y

            # see if current constraint is violated
            if xprod(c0x, c0y, cur_x, cur_y) < 0 or xprod(c1x, c1y, cur_x, cur_y) > 0:
                break

            # else, update constraint
            if abs(cur_x) > 1 or abs(cur_y) > 1:
                off_x = cur_x + (1 if (cur_y >= 0 and (cur_y > 0 or cur_x < 0)) else -1)
                off_y = cur_y + (1 if (cur_x <= 0 and (cur_x < 0 or cur_y < 0)) else -1)
                if xprod(c0x, c0y, off_x, off_y) >= 0:
                    c0x, c0y = off_x, off_y

                off_x = cur_x + (1 if (cur_y <= 0 and (cur_y < 0 or cur_x < 0)) else -1)
                off_y = cur_y + (1 if (cur_x >= 0 and (cur_x > 0 or cur_y < 0)) else -1)
                if xprod(c1x, c1y, off_x, off_y) <= 0:
                    c1x, c1y = off_x, off_y

            k1 = k
            k = nc[k1]
            if not cyclic(k, i, k1):
                break

        if foundk:
            continue

        # k1 was the last "corner" satisfying the current constraint, and k
        # is the first one violating it. Find the last point along k1..k
        # which satisfied the constraint.
        dk_x = sign(pt[k].x - pt[k1].x)
        dk_y = sign(pt[k].y - pt[k1].y)
        cur_x = pt[k1].x - pt[i].x
        cur_y = pt[k1].y - pt[i].y

        # largest integer j such that a + j*b >= 0 and c + j*d <= 0, by
        # bilinearity of xprod
        a = xprod(c0x, c0y, cur_x, cur_y)
        b = xprod(c0x, c0y, dk_x, dk_y)
        c = xprod(c1x, c1y, cur_x, cur_y)
        d = xprod(c1x, c1y, dk_x, dk_y)

        j = INFTY
        if b < 0:
            j = a // -b
        if d > 0:
            j = min(j, -c // d)
        pivk[i] = (k1 + j) % n

    # lon[i] is the largest k such that for all i' with i <= i' < k,
    # i' < k <= pivk[i'] (cyclically)
    lon = [0] * n
    j = pivk[n - 1]
    lon[n - 1] = j
    for i in range(n - 2, -1, -1):
        if cyclic(i + 1, pivk[i], j):
            j = pivk[i]
        lon[i] = j

    i = n - 1
    while cyclic((i + 1) % n, j, lon[i]):
        lon[i] = j
        i -= 1

    pp.lon = lon


def penalty3(pp: PixelPath, i: int, j: int) -> float:
    """
    Penalty of an edge from i to j: the root of the mean squared distance
    of the points i..j from the line through them. Assumes 0 <= i < j <= n.
    """
    n = len(pp)
    pt = pp.pt
    sums = pp.sums

    if j >= n:
        j -= n
        x = sums.x[j + 1] - sums.x[i] + sums.x[n]
        y = sums.y[j + 1] - sums.y[i] + sums.y[n]
        x2 = sums.x2[j + 1] - sums.x2[i] + sums.x2[n]
        xy = sums.xy[j + 1] - sums.xy[i] + sums.xy[n]
        y2 = sums.y2[j + 1] - sums.y2[i] + sums.y2[n]
        k = j + 1 - i + n
    else:
        x = sums.x[j + 1] - sums.x[i]
        y = sums.y[j + 1] - sums.y[i]
        x2 = sums.x2[j + 1] - sums.x2[i]
        xy = sums.xy[j + 1] - sums.xy[i]
        y2 = sums.y2[j + 1] - sums.y2[i]
        k = j + 1 - i

    px = (pt[i].x + pt[j].x) / 2.0 - pt[0].x
    py = (pt[i].y + pt[j].y) / 2.0 - pt[0].y
    ey = pt[j].x - pt[i].x
    ex = -(pt[j].y - pt[i].y)

    a = (x2 - 2 * x * px) / k + px * px
    b = (xy - x * py - y * px) / k + px * py
    c = (y2 - 2 * y * py) / k + py * py

    s = ex * ex * a + 2 * ex * ey * b + ey * ey * c
    return math.sqrt(max(s, 0.0))


def bestpolygon(pp: PixelPath) -> None:
    """
    Find the optimal polygon and store it in pp.m / pp.po.

    Non-cyclic version: point 0 is always a vertex of the polygon.
    """
    n = len(pp)
    lon = pp.lon
    pen = [0.0] * (n + 1)   # pen[i]: best penalty of a path from 0 to i
    prev = [0] * (n + 1)    # prev[i]: predecessor of i on that path
    clip0 = [0] * n         # longest segment pointer, non-cyclic
    clip1 = [0] * (n + 1)   # backwards segment pointer, non-cyclic
    seg0 = [0] * (n + 1)    # forward segment bounds, m <= n
    seg1 = [0] * (n + 1)    # backward segment bounds, m <= n

    for i in range(n):
        c = (lon[(i - 1) % n] - 1) % n
        if c == i:
            c = (i + 1) % n
        clip0[i] = n if c < i else c

    # j <= clip0[i] iff clip1[j] <= i, for i, j = 0..n
    j = 1
    for i in range(n):
        while j <= clip0[i]:
            clip1[j] = i
            j += 1

    # seg0[j] = longest path from 0 with j segments
    i = 0
    j = 0
    while i < n:
        seg0[j] = i
        i = clip0[i]
        j += 1
    seg0[j] = n
    m = j

    # seg1[j] = longest path to n with m-j segments
    i = n
    for j in range(m, 0, -1):
        seg1[j] = i
        i = clip1[i]
    seg1[0] = 0

    # Shortest path with m segments. The outer two loops jointly run at
    # most n times, so this is quadratic at worst and close to linear in
    # practice.
    pen[0] = 0.0
    for j in range(1, m + 1):
        for i in range(seg1[j], seg0[j] + 1):
            best = -1.0
            for k in range(seg0[j - 1], clip1[i] - 1, -1):
                thispen = penalty3(pp, k, i) + pen[k]
                if best < 0 or thispen < best:
                    prev[i] = k
                    best = thispen
            pen[i] = best

    po = [0] * m
    i = n
    j = m - 1
    while i > 0:
        i = prev[i]
        po[j] = i
        j -= 1

    pp.m = m
    pp.po = po
