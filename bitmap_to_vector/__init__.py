"""
bitmap_to_vector: trace black-and-white bitmaps into smooth vector outlines.

Typical use::

    import numpy as np
    from bitmap_to_vector import Bitmap

    bm = Bitmap.from_array(np.asarray(image) < 128)
    path = bm.trace(turdsize=2, alphamax=1.0)
    for curve in path:
        start = curve.start_point
        for segment in curve:
            ...
"""

from .bbox import bounding_box, path_limits
from .bitmap import Bitmap
from .curves import BezierSegment, CornerSegment, Curve, Path
from .errors import (
    BitmapSizeError,
    InvalidParameterError,
    TraceAborted,
    TraceError,
    UnsupportedFormatError,
)
from .geometry import Point
from .params import (
    POTRACE_CORNER,
    POTRACE_CURVETO,
    POTRACE_TURNPOLICY_BLACK,
    POTRACE_TURNPOLICY_LEFT,
    POTRACE_TURNPOLICY_MAJORITY,
    POTRACE_TURNPOLICY_MINORITY,
    POTRACE_TURNPOLICY_RANDOM,
    POTRACE_TURNPOLICY_RIGHT,
    POTRACE_TURNPOLICY_WHITE,
    TraceParams,
    TurnPolicy,
)
from .trace import trace_bitmap

__version__ = "0.1.0"

__all__ = [
    "Bitmap",
    "Path",
    "Curve",
    "CornerSegment",
    "BezierSegment",
    "Point",
    "TraceParams",
    "TurnPolicy",
    "trace_bitmap",
    "bounding_box",
    "path_limits",
    "TraceError",
    "BitmapSizeError",
    "UnsupportedFormatError",
    "InvalidParameterError",
    "TraceAborted",
    "POTRACE_CORNER",
    "POTRACE_CURVETO",
    "POTRACE_TURNPOLICY_BLACK",
    "POTRACE_TURNPOLICY_WHITE",
    "POTRACE_TURNPOLICY_LEFT",
    "POTRACE_TURNPOLICY_RIGHT",
    "POTRACE_TURNPOLICY_MINORITY",
    "POTRACE_TURNPOLICY_MAJORITY",
    "POTRACE_TURNPOLICY_RANDOM",
]
