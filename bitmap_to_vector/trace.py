# =============================================================================
# PIPELINE DRIVER
# =============================================================================
# Runs the whole trace: decomposition of the bitmap into pixel paths, then
# for every path the polygon, vertex adjustment, smoothing and optional
# curve optimization stages, and finally conversion to the public Path.
# =============================================================================

import logging
import math
from typing import Optional

from .adjust import adjust_vertices
from .bitmap import Bitmap
from .curves import Path
from .decompose import bm_to_pathlist
from .geometry import Point
from .opticurve import opticurve
from .params import TraceParams
from .paths import PathList
from .polygon import bestpolygon, calc_lon, calc_sums
from .progress import Progress
from .smooth import reverse, smooth

logger = logging.getLogger(__name__)


def process_path(plist: PathList, params: TraceParams, progress: Optional[Progress] = None) -> None:
    """
    Run the curve fitting stages on every path of plist.

    On return each path's fcurve holds its final curve: the optimized curve
    if params.opticurve is set, the smoothed curve otherwise.

    Args:
        plist: Decomposed paths
        params: Tracing parameters (alphamax, opticurve, opttolerance)
        progress: Optional progress object, advanced in proportion to the
            lengths of the paths processed so far
    """
    total = 0
    done = 0
    if progress is not None and progress.active:
        total = sum(len(plist[i]) for i in plist.iter_list())

    for i in plist.iter_list():
        p = plist[i]
        calc_sums(p)
        calc_lon(p)
        bestpolygon(p)
        adjust_vertices(p)
        if p.sign == "-":  # reverse orientation of negative paths
            reverse(p.curve)
        smooth(p.curve, params.alphamax)
        if params.opticurve:
            opticurve(p, params.opttolerance)
            p.fcurve = p.ocurve
        else:
            p.fcurve = p.curve

        if total:
            done += len(p)
            progress.update(done / total)

    if progress is not None:
        progress.update(1.0)


def _quantize_point(p: Point, unit: int) -> None:
    p.x = math.floor(p.x * unit) / unit
    p.y = math.floor(p.y * unit) / unit


def quantize(path: Path, unit: int) -> None:
    """
    Round every control point of path down to a multiple of 1 / unit, in
    place. Each point is rounded exactly once.
    """
    for curve in path:
        for segment in curve:
            if segment.is_corner:
                _quantize_point(segment.c, unit)
            else:
                _quantize_point(segment.c1, unit)
                _quantize_point(segment.c2, unit)
            _quantize_point(segment.end_point, unit)


def trace_bitmap(bitmap: Bitmap, params: Optional[TraceParams] = None) -> Path:
    """
    Trace a bitmap into vector curves.

    The bitmap is not modified. Exceptions raised by the progress callback
    (conventionally TraceAborted) propagate unchanged and abort the trace.

    Args:
        bitmap: The bitmap to trace
        params: Tracing parameters; defaults to TraceParams()

    Returns:
        Path holding one Curve per traced outline, in tree order
    """
    if params is None:
        params = TraceParams()

    prog = Progress(
        params.progress,
        min=params.progress_min,
        max=params.progress_max,
        epsilon=params.progress_epsilon,
    )

    # decomposition takes the first tenth of the progress range
    subprog = prog.subrange(0.0, 0.1)
    plist = bm_to_pathlist(
        bitmap,
        turdsize=params.turdsize,
        turnpolicy=params.turnpolicy,
        progress=subprog,
    )
    prog.end_subrange(subprog)

    subprog = prog.subrange(0.1, 1.0)
    process_path(plist, params, subprog)
    prog.end_subrange(subprog)

    path = Path(plist)
    if params.quantize_unit is not None:
        quantize(path, params.quantize_unit)

    logger.debug(
        "Traced %r: %d curves, %d segments",
        bitmap, len(path), sum(len(c) for c in path),
    )
    return path
