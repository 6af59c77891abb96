# =============================================================================
# INTERNAL DATA STRUCTURES
# =============================================================================
# Pixel paths and the curve state attached to them while they move through
# the fitting stages. These are not part of the public API; see curves.py.
# =============================================================================

from typing import Iterator, List, Optional

from .geometry import Point


class Segment:
    """
    One segment of an internal curve.

    For a CORNER segment c[0] is unused, c[1] is the vertex and c[2] the
    end point. For a CURVETO segment c[0] and c[1] are the Bezier control
    points and c[2] the end point.
    """

    __slots__ = ("tag", "c", "vertex", "alpha", "alpha0", "beta")

    def __init__(self):
        self.tag = 0
        self.c = [Point(), Point(), Point()]
        self.vertex = Point()
        self.alpha = 0.0   # alpha clamped to [0.55, 1]
        self.alpha0 = 0.0  # alpha before clamping
        self.beta = 0.0


class PrivCurve:
    """Internal curve: a cyclic sequence of n segments."""

    def __init__(self, n: int):
        self.segments = [Segment() for _ in range(n)]
        self.alphacurve = False  # set once alpha/beta are filled in

    def __len__(self):
        return len(self.segments)

    @property
    def n(self) -> int:
        return len(self.segments)

    def __getitem__(self, item) -> Segment:
        return self.segments[item]

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)


class Sums:
    """
    Prefix sums over a pixel path, relative to its first point.

    Entry k of each list holds the sum over points 0..k-1, so every list has
    len(path) + 1 entries.
    """

    __slots__ = ("x", "y", "x2", "xy", "y2")

    def __init__(self, x, y, x2, xy, y2):
        self.x = x
        self.y = y
        self.x2 = x2
        self.xy = xy
        self.y2 = y2


class PixelPath:
    """
    A closed boundary through pixel corners, plus the state the fitting
    stages attach to it.

    Tree links (next, childlist, sibling) are indices into the owning
    PathList, or None.
    """

    def __init__(self, pt: List[Point], area: int, sign: str):
        self.pt = pt
        self.area = area
        self.sign = sign  # '+' for black regions, '-' for holes

        # tree structure
        self.next: Optional[int] = None
        self.childlist: Optional[int] = None
        self.sibling: Optional[int] = None

        # polygon stage
        self.x0 = 0
        self.y0 = 0
        self.sums: Optional[Sums] = None
        self.lon: List[int] = []
        self.m = 0
        self.po: List[int] = []

        # curve stages
        self.curve: Optional[PrivCurve] = None
        self.ocurve: Optional[PrivCurve] = None
        self.fcurve: Optional[PrivCurve] = None

    def __len__(self):
        return len(self.pt)

    def __repr__(self):
        return "PixelPath(len=%d, area=%d, sign=%r)" % (len(self.pt), self.area, self.sign)


class PathList:
    """
    Arena of pixel paths addressed by index.

    ``head`` is the index of the first path of the flat list; following
    ``next`` from it enumerates every path.
    """

    def __init__(self):
        self.paths: List[PixelPath] = []
        self.head: Optional[int] = None

    def append(self, path: PixelPath) -> int:
        """Append a path to the arena and to the end of the flat list."""
        index = len(self.paths)
        self.paths.append(path)
        if index == 0:
            self.head = 0
        else:
            self.paths[index - 1].next = index
        return index

    def __len__(self):
        return len(self.paths)

    def __getitem__(self, index: int) -> PixelPath:
        return self.paths[index]

    def iter_list(self) -> Iterator[int]:
        """Indices in flat-list order."""
        i = self.head
        while i is not None:
            yield i
            i = self.paths[i].next

    def iter_siblings(self, first: Optional[int]) -> Iterator[int]:
        i = first
        while i is not None:
            yield i
            i = self.paths[i].sibling

    def children(self, index: int) -> Iterator[int]:
        return self.iter_siblings(self.paths[index].childlist)

    def roots(self) -> Iterator[int]:
        return self.iter_siblings(self.head)

    def relink(self, order: List[int]) -> None:
        """Rebuild the flat list so that it follows ``order``."""
        for a, b in zip(order, order[1:]):
            self.paths[a].next = b
        if order:
            self.paths[order[-1]].next = None
        self.head = order[0] if order else None
