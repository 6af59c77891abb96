"""
Give the flat path list a tree structure based on insideness testing.

Path A is a child of path B if it lies inside B. Positive regions have their
holes as children, holes have the islands inside them as children, and so on.
"""

import logging
from typing import Iterator, List

from .bitmap import Bitmap
from .fill import clear_bm_with_bbox, setbbox_path, xor_path
from .paths import PathList

logger = logging.getLogger(__name__)


def pathlist_to_tree(plist: PathList, bm: Bitmap) -> None:
    """
    Arrange plist into a tree and relink its flat list in tree order.

    The input list must be ordered so that outer paths occur before inner
    paths, and point 0 of each path must be an upper left corner, as
    produced by bm_to_pathlist; that makes the pixel just below pt[0] an
    interior point of the path.

    On return, childlist/sibling hold the tree and next enumerates the paths
    depth first, each region immediately followed by its holes.

    Args:
        plist: The paths to arrange, modified in place
        bm: Scratch bitmap large enough to hold every path; it is cleared
            here and left cleared
    """
    bm.clear_all()

    for p in plist.paths:
        p.childlist = None
        p.sibling = None

    # Each entry of the worklist is a sublist of paths that still has to be
    # turned into a tree. Every path is the head of exactly one sublist, so
    # every path is rendered exactly once.
    worklist: List[List[int]] = [list(plist.iter_list())] if len(plist) else []
    while worklist:
        cur = worklist.pop()
        head = cur[0]
        head_path = plist[head]

        xor_path(bm, head_path)
        bbox = setbbox_path(head_path)

        inside: List[int] = []
        outside: List[int] = []
        for pos in range(1, len(cur)):
            p = plist[cur[pos]]
            if p.pt[0].y <= bbox[1]:
                # p and everything after it start below head
                outside.extend(cur[pos:])
                break
            if bm.get(p.pt[0].x, p.pt[0].y - 1):
                inside.append(cur[pos])
            else:
                outside.append(cur[pos])

        clear_bm_with_bbox(bm, bbox)

        if outside:
            head_path.sibling = outside[0]
            worklist.append(outside)
        if inside:
            head_path.childlist = inside[0]
            worklist.append(inside)

    order = list(_depth_first(plist))
    plist.relink(order)

    logger.debug(
        "Built path tree: %d paths, %d top-level regions",
        len(order), sum(1 for _ in plist.roots()),
    )


def _depth_first(plist: PathList) -> Iterator[int]:
    """
    Yield path indices in depth-first tree order: each region, then its
    holes, then the contents of those holes, before the region's next
    sibling. Uses an explicit stack of sibling iterators.
    """
    if plist.head is None:
        return
    stack = [plist.iter_siblings(plist.head)]
    while stack:
        p = next(stack[-1], None)
        if p is None:
            stack.pop()
            continue
        yield p
        holes = list(plist.children(p))
        yield from holes
        nested = [plist[h].childlist for h in holes if plist[h].childlist is not None]
        for first in reversed(nested):
            stack.append(plist.iter_siblings(first))
