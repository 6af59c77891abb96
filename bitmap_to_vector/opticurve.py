# =============================================================================
# CURVE OPTIMIZATION
# =============================================================================
# Stage 5: replace runs of consecutive Bezier segments by a single segment
# where the merged curve stays within tolerance of the original one.
# =============================================================================

import logging
import math
from typing import List, Optional

from .geometry import (
    bezier,
    cprod,
    ddist,
    dpara,
    interval,
    iprod,
    iprod1,
    sign,
    sq,
    tangent,
)
from .paths import PixelPath, PrivCurve
from .params import POTRACE_CURVETO

logger = logging.getLogger(__name__)

COS179 = math.cos(math.radians(179))


class OptiResult:
    """Best fit of a merged span: penalty, control points and parameters."""

    __slots__ = ("pen", "c", "t", "s", "alpha")

    def __init__(self, pen: float, c, t: float, s: float, alpha: float):
        self.pen = pen
        self.c = c
        self.t = t
        self.s = s
        self.alpha = alpha


def opti_penalty(
    curve: PrivCurve,
    i: int,
    j: int,
    opttolerance: float,
    convc: List[int],
    areac: List[float],
) -> Optional[OptiResult]:
    """
    Calculate the best single-segment fit from i+.5 to j+.5 (cyclically,
    i before j).

    Returns:
        The fit, or None if the span cannot be merged: it is not convex, it
        contains a corner, it bends by 179 degrees or more, or the fitted
        curve strays further than opttolerance from the original.
    """
    m = curve.n
    vertex = [seg.vertex for seg in curve]

    if i == j:  # a full loop can never be an opticurve
        return None

    # check convexity, corner-freeness, and maximum bend < 179 degrees
    k = i
    i1 = (i + 1) % m
    k1 = (k + 1) % m
    conv = convc[k1]
    if conv == 0:
        return None
    d = ddist(vertex[i], vertex[i1])
    k = k1
    while k != j:
        k1 = (k + 1) % m
        k2 = (k + 2) % m
        if convc[k1] != conv:
            return None
        if sign(cprod(vertex[i], vertex[i1], vertex[k1], vertex[k2])) != conv:
            return None
        if (
            iprod1(vertex[i], vertex[i1], vertex[k1], vertex[k2])
            < d * ddist(vertex[k1], vertex[k2]) * COS179
        ):
            return None
        k = k1

    # the curve we're working in
    p0 = curve[i % m].c[2]
    p1 = vertex[(i + 1) % m]
    p2 = vertex[j % m]
    p3 = curve[j % m].c[2]

    # its area
    area = areac[j] - areac[i]
    area -= dpara(vertex[0], curve[i].c[2], curve[j].c[2]) / 2
    if i >= j:
        area += areac[m]

    # Find the intersection o of p0p1 and p2p3. Let t, s be such that
    # o = interval(t, p0, p1) = interval(s, p3, p2). Let A be the area of
    # the triangle (p0, o, p3).
    A1 = dpara(p0, p1, p2)
    A2 = dpara(p0, p1, p3)
    A3 = dpara(p0, p2, p3)
    A4 = A1 + A3 - A2

    if A2 == A1:
        logger.debug("opticurve: parallel tangents on span %d..%d, not merging", i, j)
        return None

    t = A3 / (A3 - A4)
    s = A2 / (A2 - A1)
    A = A2 * t / 2.0

    if A == 0.0:
        logger.debug("opticurve: degenerate triangle on span %d..%d, not merging", i, j)
        return None

    R = area / A  # relative area
    if R / 0.3 > 4:
        return None  # no curve through p0-o-p3 encloses that much
    alpha = 2 - math.sqrt(4 - R / 0.3)  # overall alpha for p0-o-p3 curve

    c0 = interval(t * alpha, p0, p1)
    c1 = interval(s * alpha, p3, p2)
    res = OptiResult(0.0, [c0, c1], t, s, alpha)

    # the proposed curve is now (p0, c0, c1, p3)

    # edge tangency penalties
    k = (i + 1) % m
    while k != j:
        k1 = (k + 1) % m
        tk = tangent(p0, c0, c1, p3, vertex[k], vertex[k1])
        if tk < -0.5:
            return None
        pt = bezier(tk, p0, c0, c1, p3)
        d = ddist(vertex[k], vertex[k1])
        if d == 0.0:
            logger.debug("opticurve: zero-length edge at %d, not merging", k)
            return None
        d1 = dpara(vertex[k], vertex[k1], pt) / d
        if math.fabs(d1) > opttolerance:
            return None
        if iprod(vertex[k], vertex[k1], pt) < 0 or iprod(vertex[k1], vertex[k], pt) < 0:
            return None
        res.pen += sq(d1)
        k = k1

    # corner penalties
    k = i
    while k != j:
        k1 = (k + 1) % m
        ck = curve[k].c[2]
        ck1 = curve[k1].c[2]
        tk = tangent(p0, c0, c1, p3, ck, ck1)
        if tk < -0.5:
            return None
        pt = bezier(tk, p0, c0, c1, p3)
        d = ddist(ck, ck1)
        if d == 0.0:
            logger.debug("opticurve: coincident segment ends at %d, not merging", k)
            return None
        d1 = dpara(ck, ck1, pt) / d
        d2 = dpara(ck, ck1, vertex[k1]) / d
        d2 *= 0.75 * curve[k1].alpha
        if d2 < 0:
            d1 = -d1
            d2 = -d2
        if d1 < d2 - opttolerance:
            return None
        if d1 < d2:
            res.pen += sq(d1 - d2)
        k = k1

    return res


def opticurve(pp: PixelPath, opttolerance: float) -> None:
    """
    Optimize pp.curve into pp.ocurve, replacing sequences of Bezier
    segments by a single segment where possible.

    Dynamic programming over the segments: for each j, find the fewest
    segments (and among those the smallest penalty) covering 0..j.
    The walk always starts at segment 0.
    """
    curve = pp.curve
    m = curve.n
    pt = [0] * (m + 1)      # pt[j]: where the best path to j comes from
    pen = [0.0] * (m + 1)   # pen[j]: its penalty
    length = [0] * (m + 1)  # length[j]: its number of segments
    opt: List[Optional[OptiResult]] = [None] * (m + 1)

    # pre-calculate convexity: +1 = right turn, -1 = left turn, 0 = corner
    convc = [0] * m
    for i in range(m):
        if curve[i].tag == POTRACE_CURVETO:
            convc[i] = sign(
                dpara(curve[(i - 1) % m].vertex, curve[i].vertex, curve[(i + 1) % m].vertex)
            )

    # pre-calculate areas
    areac = [0.0] * (m + 1)
    area = 0.0
    p0 = curve[0].vertex
    for i in range(m):
        i1 = (i + 1) % m
        if curve[i1].tag == POTRACE_CURVETO:
            alpha = curve[i1].alpha
            area += (
                0.3 * alpha * (4 - alpha)
                * dpara(curve[i].c[2], curve[i1].vertex, curve[i1].c[2]) / 2
            )
            area += dpara(p0, curve[i].c[2], curve[i1].c[2]) / 2
        areac[i + 1] = area

    pt[0] = -1
    # TODO: find the best starting segment cyclically instead of always 0
    for j in range(1, m + 1):
        # calculate best path from 0 to j
        pt[j] = j - 1
        pen[j] = pen[j - 1]
        length[j] = length[j - 1] + 1

        for i in range(j - 2, -1, -1):
            o = opti_penalty(curve, i, j % m, opttolerance, convc, areac)
            if o is None:
                break
            if length[j] > length[i] + 1 or (
                length[j] == length[i] + 1 and pen[j] > pen[i] + o.pen
            ):
                opt[j] = o
                pt[j] = i
                pen[j] = pen[i] + o.pen
                length[j] = length[i] + 1

    om = length[m]
    ocurve = PrivCurve(om)
    s = [0.0] * om
    t = [0.0] * om

    j = m
    for i in range(om - 1, -1, -1):
        src = curve[j % m]
        dst = ocurve[i]
        if pt[j] == j - 1:
            dst.tag = src.tag
            dst.c = [src.c[0], src.c[1], src.c[2]]
            dst.vertex = src.vertex
            dst.alpha = src.alpha
            dst.alpha0 = src.alpha0
            dst.beta = src.beta
            s[i] = t[i] = 1.0
        else:
            o = opt[j]
            dst.tag = POTRACE_CURVETO
            dst.c = [o.c[0], o.c[1], src.c[2]]
            dst.vertex = interval(o.s, src.c[2], src.vertex)
            dst.alpha = o.alpha
            dst.alpha0 = o.alpha
            s[i] = o.s
            t[i] = o.t
        j = pt[j]

    # beta parameters
    for i in range(om):
        i1 = (i + 1) % om
        ocurve[i].beta = s[i] / (s[i] + t[i1])
    ocurve.alphacurve = True

    pp.ocurve = ocurve
