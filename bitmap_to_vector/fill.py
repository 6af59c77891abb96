# =============================================================================
# XOR FILLING
# =============================================================================
# Rendering a closed pixel path into a bitmap by inverting its interior.
# The decomposition uses it to erase traced regions, the tree builder to
# rasterize a path before testing which other paths lie inside it.
# =============================================================================

from typing import Tuple

import numpy as np

from .bitmap import BM_ALLBITS, BM_WORDBITS, WORD_ALL, Bitmap
from .paths import PixelPath


def xor_to_ref(bm: Bitmap, x: int, y: int, xa: int) -> None:
    """
    Invert the pixels of line y between x and xa.

    xa must be a multiple of the word size, so whole words are flipped and
    at most one word is flipped partially.
    """
    xhi = x & -BM_WORDBITS
    xlo = x & (BM_WORDBITS - 1)
    row = bm.map[y]

    if xhi < xa:
        row[xhi // BM_WORDBITS : xa // BM_WORDBITS] ^= WORD_ALL
    else:
        row[xa // BM_WORDBITS : xhi // BM_WORDBITS] ^= WORD_ALL

    if xlo != 0:
        i = xhi // BM_WORDBITS
        row[i] = row[i] ^ np.uint64((BM_ALLBITS << (BM_WORDBITS - xlo)) & BM_ALLBITS)


def xor_path(bm: Bitmap, p: PixelPath) -> None:
    """
    XOR the given bitmap with the interior of the given path.

    Path point (x, y) is the lower left corner of pixel (x, y). Every
    vertical step of the path inverts one line segment between the step and
    a fixed word-aligned reference column; the net effect is to invert
    exactly the enclosed pixels. The path must lie within the bitmap.
    """
    if len(p) <= 0:  # a path of length 0 is silly, but legal
        return

    y1 = p.pt[-1].y
    xa = p.pt[0].x & -BM_WORDBITS
    for point in p.pt:
        x, y = point.x, point.y
        if y != y1:
            xor_to_ref(bm, x, min(y, y1), xa)
            y1 = y


def setbbox_path(p: PixelPath) -> Tuple[int, int, int, int]:
    """Bounding box (x0, y0, x1, y1) of a non-empty path."""
    xs = [point.x for point in p.pt]
    ys = [point.y for point in p.pt]
    return min(xs), min(ys), max(xs), max(ys)


def clear_bm_with_bbox(bm: Bitmap, bbox: Tuple[int, int, int, int]) -> None:
    """Clear the words covering bbox (faster than clearing the bitmap)."""
    x0, y0, x1, y1 = bbox
    imin = x0 // BM_WORDBITS
    imax = (x1 + BM_WORDBITS - 1) // BM_WORDBITS
    bm.map[y0:y1, imin:imax] = 0
