# =============================================================================
# PUBLIC OUTPUT
# =============================================================================
# The result of a trace: a Path holding one Curve per traced outline, in
# tree order, with parent/children links mirroring how outlines nest.
# Every point in the output is a fresh copy, so callers may modify it.
# =============================================================================

from typing import List, Optional, Tuple

from .bbox import bounding_box
from .geometry import Point
from .params import POTRACE_CORNER, POTRACE_CURVETO
from .paths import PathList, PixelPath, Segment


# =============================================================================
# PATH CLASS
# =============================================================================
# Container class that holds every curve of a traced bitmap.
# Inherits from list to provide easy iteration over curves.


class Path(list):
    """
    Container for the curves of a traced bitmap.

    Curves are ordered depth first: each outline is immediately followed by
    its holes, then by whatever lies inside those holes.
    """

    def __init__(self, plist: Optional[PathList] = None):
        """
        Build the public curves from a processed path list.

        Args:
            plist: PathList whose paths all carry a final curve (fcurve);
                None gives an empty Path
        """
        list.__init__(self)
        self._roots: List["Curve"] = []
        if plist is None:
            return

        by_index = {}
        for i in plist.iter_list():
            curve = Curve(plist[i])
            by_index[i] = curve
            self.append(curve)

        for i, curve in by_index.items():
            for child in plist.children(i):
                by_index[child].parent = curve
                curve._children.append(by_index[child])

        self._roots = [by_index[i] for i in plist.roots()]

    @property
    def curves(self) -> "Path":
        """The curves in tree order (same as self)."""
        return self

    @property
    def curves_tree(self) -> List["Curve"]:
        """Top-level curves; descend through Curve.children."""
        return list(self._roots)

    def groups(self) -> List[Tuple["Curve", List["Curve"]]]:
        """
        Pair each positive curve with its direct holes.

        This is the grouping a renderer needs to fill with the even-odd or
        nonzero rule one region at a time.
        """
        return [(c, list(c.children)) for c in self if c.sign == "+"]

    @property
    def bbox(self) -> Tuple[float, float, float, float]:
        """(x0, y0, x1, y1) of the traced output, including Bezier bulges."""
        return bounding_box(self)


# =============================================================================
# CURVE CLASS
# =============================================================================
# A single closed outline. Segment k runs from the end point of segment k-1
# to its own end point; the curve starts at the end of its last segment.


class Curve(list):
    """A closed curve made of corner and Bezier segments."""

    def __init__(self, p: PixelPath):
        list.__init__(self)
        self._points = [pt.copy() for pt in p.pt]
        self.sign = p.sign
        self.area = p.area
        self.parent: Optional["Curve"] = None
        self._children: List["Curve"] = []

        for s in p.fcurve:
            if s.tag == POTRACE_CORNER:
                self.append(CornerSegment(s))
            else:
                self.append(BezierSegment(s))

    @property
    def n(self) -> int:
        return len(self)

    @property
    def tags(self) -> List[int]:
        return [s.tag for s in self]

    @property
    def c(self) -> List[List[Point]]:
        """
        Control points per segment as [c0, c1, c2], the classic layout.

        For corner segments c0 is unused (a copy of the vertex is returned),
        c1 is the vertex and c2 the end point.
        """
        return [s.points for s in self]

    @property
    def start_point(self) -> Optional[Point]:
        return self[-1].end_point if self else None

    @property
    def decomposition_points(self) -> List[Point]:
        """The pixel-corner boundary the curve was fitted to."""
        return self._points

    @property
    def segments(self) -> "Curve":
        return self

    @property
    def children(self) -> List["Curve"]:
        """Curves directly inside this one (holes of a region or islands of a hole)."""
        return self._children

    def __repr__(self):
        return "Curve(sign=%r, area=%d, n=%d)" % (self.sign, self.area, len(self))


# =============================================================================
# SEGMENT CLASSES
# =============================================================================
# CornerSegment is two straight lines through a vertex, BezierSegment a
# cubic Bezier curve.


class CornerSegment:
    """Two straight lines: from the previous end point to c, then to end_point."""

    tag = POTRACE_CORNER

    def __init__(self, s: Segment):
        self.c = s.c[1].copy()
        self.end_point = s.c[2].copy()

    @property
    def points(self) -> List[Point]:
        return [self.c.copy(), self.c, self.end_point]

    @property
    def is_corner(self) -> bool:
        return True

    def __repr__(self):
        return "CornerSegment(c=%r, end_point=%r)" % (self.c, self.end_point)


class BezierSegment:
    """A cubic Bezier curve from the previous end point via c1 and c2."""

    tag = POTRACE_CURVETO

    def __init__(self, s: Segment):
        self.c1 = s.c[0].copy()
        self.c2 = s.c[1].copy()
        self.end_point = s.c[2].copy()

    @property
    def points(self) -> List[Point]:
        return [self.c1, self.c2, self.end_point]

    @property
    def is_corner(self) -> bool:
        return False

    def __repr__(self):
        return "BezierSegment(c1=%r, c2=%r, end_point=%r)" % (
            self.c1, self.c2, self.end_point,
        )
