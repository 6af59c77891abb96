"""Tests for arranging paths into a tree."""

import numpy as np

from bitmap_to_vector import Bitmap
from bitmap_to_vector.decompose import bm_to_pathlist
from bitmap_to_vector.paths import PathList, PixelPath
from bitmap_to_vector.geometry import Point


class TestPathTree:
    """Test cases for nesting and ordering."""

    def test_hole_is_child_of_region(self, square_with_hole):
        """Test that a hole hangs below its region."""
        plist = bm_to_pathlist(square_with_hole)
        order = list(plist.iter_list())
        outer, hole = order

        assert list(plist.roots()) == [outer]
        assert list(plist.children(outer)) == [hole]
        assert list(plist.children(hole)) == []
        assert plist[hole].sibling is None

    def test_three_levels(self, nested):
        """Test that signs alternate by depth."""
        plist = bm_to_pathlist(nested)
        order = list(plist.iter_list())

        assert [plist[i].sign for i in order] == ["+", "-", "+"]
        assert [plist[i].area for i in order] == [100, 36, 4]
        assert list(plist.children(order[0])) == [order[1]]
        assert list(plist.children(order[1])) == [order[2]]

    def test_separate_regions_are_siblings(self, two_squares):
        """Test that disjoint regions are both top-level."""
        plist = bm_to_pathlist(two_squares)

        roots = list(plist.roots())
        assert len(roots) == 2
        assert all(plist[i].childlist is None for i in roots)

    def test_region_followed_by_its_holes(self):
        """Test the depth-first order with several holes."""
        data = np.zeros((12, 20), dtype=bool)
        data[1:11, 1:19] = True
        data[3:5, 3:5] = False
        data[3:5, 10:12] = False
        plist = bm_to_pathlist(Bitmap.from_array(data))

        order = list(plist.iter_list())
        assert [plist[i].sign for i in order] == ["+", "-", "-"]
        assert sorted(plist.children(order[0])) == sorted(order[1:])


class TestPathList:
    """Test cases for the path arena."""

    def _path(self):
        return PixelPath([Point(0, 1), Point(0, 0), Point(1, 0), Point(1, 1)], 1, "+")

    def test_append_links_flat_list(self):
        """Test that append chains the next links."""
        plist = PathList()
        a = plist.append(self._path())
        b = plist.append(self._path())

        assert plist.head == a
        assert plist[a].next == b
        assert list(plist.iter_list()) == [a, b]

    def test_relink(self):
        """Test rebuilding the flat list in a new order."""
        plist = PathList()
        for _ in range(3):
            plist.append(self._path())

        plist.relink([2, 0, 1])

        assert plist.head == 2
        assert list(plist.iter_list()) == [2, 0, 1]
        assert plist[1].next is None
