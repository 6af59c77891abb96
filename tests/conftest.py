"""Pytest configuration and fixtures."""

import numpy as np
import pytest

from bitmap_to_vector import Bitmap


@pytest.fixture
def single_pixel():
    """3x3 bitmap with only pixel (1, 1) black."""
    data = np.zeros((3, 3), dtype=bool)
    data[1, 1] = True
    return Bitmap.from_array(data)


@pytest.fixture
def checkerboard():
    """2x2 bitmap, black at (x=1, y=0) and (x=0, y=1)."""
    return Bitmap.from_array(np.array([[False, True], [True, False]]))


@pytest.fixture
def filled_4x4():
    """4x4 all-black bitmap."""
    return Bitmap.from_array(np.ones((4, 4), dtype=bool))


@pytest.fixture
def square_with_hole():
    """10x10 bitmap: 6x6 black square at 2..7 with a 2x2 hole at 4..5."""
    data = np.zeros((10, 10), dtype=bool)
    data[2:8, 2:8] = True
    data[4:6, 4:6] = False
    return Bitmap.from_array(data)


@pytest.fixture
def nested():
    """12x12 bitmap: square 1..10, hole 3..8, island 5..6."""
    data = np.zeros((12, 12), dtype=bool)
    data[1:11, 1:11] = True
    data[3:9, 3:9] = False
    data[5:7, 5:7] = True
    return Bitmap.from_array(data)


@pytest.fixture
def two_squares():
    """20x20 bitmap with two separate 4x4 squares."""
    data = np.zeros((20, 20), dtype=bool)
    data[2:6, 2:6] = True
    data[10:14, 10:14] = True
    return Bitmap.from_array(data)


@pytest.fixture
def disc():
    """40x40 bitmap holding a filled circle of radius 15."""
    yy, xx = np.mgrid[0:40, 0:40]
    return Bitmap.from_array((xx - 20) ** 2 + (yy - 20) ** 2 <= 15 ** 2)


@pytest.fixture
def ringed_checkerboard():
    """
    6x6 bitmap with a diagonal pair at corner (3, 3), black at (2, 3) and
    (3, 2), inside a mostly black ring: the radius 2 ring around the corner
    has 9 black and 3 white pixels. Both black arms meet again at (1, 1).
    """
    data = np.zeros((6, 6), dtype=bool)
    for x, y in [
        (2, 3), (3, 2),
        (1, 1), (1, 2), (1, 3), (1, 4), (2, 4),
        (2, 1), (3, 1), (4, 1), (4, 2),
    ]:
        data[y, x] = True
    return Bitmap.from_array(data)


@pytest.fixture
def speckle():
    """24x24 bitmap of seeded random noise, full of diagonal contacts."""
    rng = np.random.default_rng(3)
    return Bitmap.from_array(rng.random((24, 24)) < 0.45)
