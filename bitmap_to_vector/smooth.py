"""
Stage 4: smoothing and corner analysis.

Each adjusted vertex becomes either a sharp corner or the middle of a cubic
Bezier segment, depending on how far it sticks out from the chord between
its neighbours.
"""

import math

from .geometry import ddenom, dpara, interval
from .params import POTRACE_CORNER, POTRACE_CURVETO
from .paths import PrivCurve


def reverse(curve: PrivCurve) -> None:
    """Reverse the vertex order of a curve (used for negative paths)."""
    m = curve.n
    i = 0
    j = m - 1
    while i < j:
        curve[i].vertex, curve[j].vertex = curve[j].vertex, curve[i].vertex
        i += 1
        j -= 1


def smooth(curve: PrivCurve, alphamax: float) -> None:
    """
    Classify every vertex as a corner or a curve and fill in the control
    points, alpha, alpha0 and beta of each segment.

    Segment j runs from the midpoint of edge i-j to the midpoint of edge
    j-k, where i and k are the neighbouring vertices.
    """
    m = curve.n

    for i in range(m):
        j = (i + 1) % m
        k = (i + 2) % m
        p4 = interval(1 / 2.0, curve[k].vertex, curve[j].vertex)

        denom = ddenom(curve[i].vertex, curve[k].vertex)
        if denom != 0.0:
            dd = math.fabs(dpara(curve[i].vertex, curve[j].vertex, curve[k].vertex) / denom)
            alpha = (1 - 1.0 / dd) if dd > 1 else 0
            alpha = alpha / 0.75
        else:
            alpha = 4 / 3.0
        curve[j].alpha0 = alpha  # remember "original" value of alpha

        if alpha >= alphamax:  # pointed corner
            curve[j].tag = POTRACE_CORNER
            curve[j].c[1] = curve[j].vertex
            curve[j].c[2] = p4
        else:
            alpha = min(max(alpha, 0.55), 1.0)
            curve[j].tag = POTRACE_CURVETO
            curve[j].c[0] = interval(0.5 + 0.5 * alpha, curve[i].vertex, curve[j].vertex)
            curve[j].c[1] = interval(0.5 + 0.5 * alpha, curve[k].vertex, curve[j].vertex)
            curve[j].c[2] = p4
        curve[j].alpha = alpha  # store the "cropped" value of alpha
        curve[j].beta = 0.5

    curve.alphacurve = True
