# =============================================================================
# PATH DECOMPOSITION
# =============================================================================
# Decompose a bitmap into closed boundary paths. Each region is traced from
# its upper left corner, then erased from a working copy by XOR-filling the
# traced path, so the scan for the next region never revisits it.
# =============================================================================

import logging
from typing import Optional, Tuple

import numpy as np

from .bitmap import BM_WORDBITS, Bitmap
from .fill import xor_path
from .geometry import Point
from .params import TurnPolicy
from .paths import PathList, PixelPath
from .progress import Progress
from .tree import pathlist_to_tree

logger = logging.getLogger(__name__)

# Non-linear sequence: constant term of inverse in GF(2^8),
# mod x^8+x^4+x^3+x+1
detrand_t = (
    0, 1, 1, 0, 1, 0, 1, 1, 0, 1, 1, 0, 0, 1, 1, 1,
    0, 0, 0, 1, 1, 1, 0, 1, 0, 1, 1, 0, 1, 0, 0, 0,
    0, 0, 0, 1, 1, 1, 0, 1, 1, 0, 0, 1, 0, 0, 0, 0,
    0, 1, 0, 0, 1, 1, 0, 0, 0, 1, 0, 1, 1, 1, 1, 1,
    1, 0, 1, 1, 1, 1, 1, 1, 1, 0, 1, 1, 0, 1, 1, 1,
    1, 0, 1, 0, 0, 0, 1, 1, 0, 0, 0, 0, 1, 0, 1, 1,
    0, 0, 1, 1, 1, 0, 0, 1, 0, 1, 1, 1, 1, 1, 1, 1,
    1, 1, 1, 1, 0, 1, 0, 0, 0, 0, 0, 0, 1, 0, 1, 0,
    1, 0, 1, 0, 0, 1, 0, 0, 1, 0, 1, 1, 1, 0, 1, 0,
    0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 1, 0, 1, 0, 1, 0,
    1, 0, 0, 1, 1, 0, 1, 0, 0, 0, 0, 0, 0, 1, 0, 0,
    0, 0, 1, 1, 1, 1, 0, 1, 1, 0, 0, 1, 1, 0, 0, 1,
    1, 0, 1, 1, 0, 0, 0, 1, 1, 1, 1, 0, 1, 0, 0, 0,
    0, 1, 0, 1, 1, 1, 0, 0, 0, 1, 0, 1, 1, 0, 0, 1,
    1, 1, 0, 1, 0, 0, 1, 1, 0, 0, 1, 1, 1, 0, 0, 1,
    1, 1, 0, 0, 0, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0,
)


def detrand(x: int, y: int) -> int:
    """
    Deterministically hash (x, y) into a pseudo-random bit.

    The multipliers 0x04b3e375 and 0x05a8ef93 contain every possible 5-bit
    sequence; arithmetic is done modulo 2^32.
    """
    z = ((((0x04B3E375 * x) & 0xFFFFFFFF) ^ y) * 0x05A8EF93) & 0xFFFFFFFF
    return (
        detrand_t[z & 0xFF]
        ^ detrand_t[(z >> 8) & 0xFF]
        ^ detrand_t[(z >> 16) & 0xFF]
        ^ detrand_t[(z >> 24) & 0xFF]
    )


def majority(bm: Bitmap, x: int, y: int) -> bool:
    """
    Return the "majority" colour of bitmap bm at the corner (x, y).

    Black and white pixels are counted on square rings of growing radius
    until one colour wins. The bitmap is assumed balanced at radius 1; if no
    ring decides, the answer is white.
    """
    for i in range(2, 5):
        ct = 0
        for a in range(-i + 1, i):
            ct += 1 if bm.get(x + a, y + i - 1) else -1
            ct += 1 if bm.get(x + i - 1, y + a - 1) else -1
            ct += 1 if bm.get(x + a - 1, y - i) else -1
            ct += 1 if bm.get(x - i, y + a) else -1
        if ct > 0:
            return True
        elif ct < 0:
            return False
    return False


# -----------------------------------------------------------------------------
# Tracing
# -----------------------------------------------------------------------------


def findpath(bm: Bitmap, x0: int, y0: int, sign: str, turnpolicy: TurnPolicy) -> PixelPath:
    """
    Compute a path in the given bitmap, separating black from white.

    Args:
        bm: The bitmap to walk
        x0, y0: Start corner; must be the upper left corner of a region
        sign: '+' or '-'; needed to interpret the BLACK/WHITE policies
        turnpolicy: Strategy for resolving ambiguous turns

    Returns:
        A new PixelPath with its points and enclosed area
    """
    x = x0
    y = y0
    dirx = 0
    diry = -1
    pt = []
    area = 0

    while True:
        pt.append(Point(x, y))

        x += dirx
        y += diry
        area += x * diry

        if x == x0 and y == y0:
            break

        # the pixels ahead-right (c) and ahead-left (d) of the walker
        c = bm.get(x + (dirx + diry - 1) // 2, y + (diry - dirx - 1) // 2)
        d = bm.get(x + (dirx - diry - 1) // 2, y + (diry + dirx - 1) // 2)

        if c and not d:  # ambiguous turn
            if (
                turnpolicy == TurnPolicy.RIGHT
                or (turnpolicy == TurnPolicy.BLACK and sign == "+")
                or (turnpolicy == TurnPolicy.WHITE and sign == "-")
                or (turnpolicy == TurnPolicy.RANDOM and detrand(x, y))
                or (turnpolicy == TurnPolicy.MAJORITY and majority(bm, x, y))
                or (turnpolicy == TurnPolicy.MINORITY and not majority(bm, x, y))
            ):
                dirx, diry = diry, -dirx  # right turn
            else:
                dirx, diry = -diry, dirx  # left turn
        elif c:
            dirx, diry = diry, -dirx
        elif not d:
            dirx, diry = -diry, dirx

    return PixelPath(pt, area, sign)


def findnext(bm: Bitmap, x: int, y: int) -> Optional[Tuple[int, int]]:
    """
    Find the next set pixel at or after (x, y) in scan order.

    Lines are searched from y down to 0, each left to right, whole words at
    a time: (x, y) < (x', y') if y > y' or y == y' and x < x'. The excess
    padding must have been cleared.

    Returns:
        (x, y) of the pixel, or None if the rest of the bitmap is white
    """
    start = x // BM_WORDBITS
    for yy in range(y, -1, -1):
        words = np.flatnonzero(bm.map[yy, start:])
        if words.size:
            i = start + int(words[0])
            word = int(bm.map[yy, i])
            # the leftmost pixel is the most significant set bit
            return i * BM_WORDBITS + BM_WORDBITS - word.bit_length(), yy
        start = 0
    return None


def bm_to_pathlist(
    bm: Bitmap,
    turdsize: int = 2,
    turnpolicy: TurnPolicy = TurnPolicy.MINORITY,
    progress: Optional[Progress] = None,
) -> PathList:
    """
    Decompose the given bitmap into paths.

    The input bitmap is not modified; regions are erased from a private
    copy. Paths enclosing an area of at most turdsize pixels are dropped.
    The result is already arranged into a tree (see tree.py).

    Args:
        bm: The bitmap to decompose
        turdsize: Largest area of a path that is discarded
        turnpolicy: Strategy for resolving ambiguous turns
        progress: Optional progress object, advanced as lines are consumed

    Returns:
        A PathList of the traced paths
    """
    plist = PathList()
    bm1 = bm.duplicate()

    # the word-wise pixel search below relies on zero padding
    bm1.clear_excess_padding()

    turds = 0
    x = 0
    y = bm1.h - 1
    while True:
        found = findnext(bm1, x, y)
        if found is None:
            break
        x, y = found

        # the sign comes from the original, not the partially erased copy
        sign = "+" if bm.get(x, y) else "-"
        path = findpath(bm1, x, y + 1, sign, turnpolicy)

        xor_path(bm1, path)

        if path.area <= turdsize:
            turds += 1
        else:
            plist.append(path)

        if progress is not None and bm1.h > 0:
            progress.update(1 - y / bm1.h)

    logger.debug(
        "Decomposed %dx%d bitmap into %d paths (%d turds dropped)",
        bm.w, bm.h, len(plist), turds,
    )

    pathlist_to_tree(plist, bm1)

    if progress is not None:
        progress.update(1.0)
    return plist
