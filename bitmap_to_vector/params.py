"""Tracing parameters, turn policies and segment tags."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional

from .errors import InvalidParameterError

# =============================================================================
# TURN POLICY CONSTANTS
# =============================================================================
# Strategies for resolving ambiguous diagonal configurations while walking
# the boundary of a region.


class TurnPolicy(IntEnum):
    BLACK = 0      # Prefer to connect black components
    WHITE = 1      # Prefer to connect white components
    LEFT = 2       # Always take a left turn
    RIGHT = 3      # Always take a right turn
    MINORITY = 4   # Prefer the colour that is locally in the minority
    MAJORITY = 5   # Prefer the colour that is locally in the majority
    RANDOM = 6     # Deterministic pseudo-random choice


POTRACE_TURNPOLICY_BLACK = TurnPolicy.BLACK
POTRACE_TURNPOLICY_WHITE = TurnPolicy.WHITE
POTRACE_TURNPOLICY_LEFT = TurnPolicy.LEFT
POTRACE_TURNPOLICY_RIGHT = TurnPolicy.RIGHT
POTRACE_TURNPOLICY_MINORITY = TurnPolicy.MINORITY
POTRACE_TURNPOLICY_MAJORITY = TurnPolicy.MAJORITY
POTRACE_TURNPOLICY_RANDOM = TurnPolicy.RANDOM

# =============================================================================
# SEGMENT TYPE CONSTANTS
# =============================================================================

POTRACE_CURVETO = 1  # Cubic Bezier segment
POTRACE_CORNER = 2   # Two straight lines meeting at a vertex

ProgressCallback = Callable[[float], None]


@dataclass
class TraceParams:
    """
    Parameters for a single trace.

    Attributes:
        turdsize: Paths enclosing an area of at most this many pixels are
            dropped as noise.
        turnpolicy: How ambiguous diagonal configurations are resolved.
        alphamax: Corner threshold; vertices with alpha at or above it
            become corners.
        opticurve: Whether to merge consecutive Bezier segments.
        opttolerance: Maximum deviation allowed when merging segments.
        quantize_unit: If set, output coordinates are floored to multiples
            of ``1 / quantize_unit``.
        progress: Optional callback receiving the completed fraction.
        progress_min, progress_max: Range reported to the callback.
        progress_epsilon: Increments smaller than this are not reported.
    """

    turdsize: int = 2
    turnpolicy: TurnPolicy = TurnPolicy.MINORITY
    alphamax: float = 1.0
    opticurve: bool = True
    opttolerance: float = 0.2
    quantize_unit: Optional[int] = None

    progress: Optional[ProgressCallback] = None
    progress_min: float = 0.0
    progress_max: float = 1.0
    progress_epsilon: float = 0.0

    def __post_init__(self):
        if self.turdsize < 0:
            raise InvalidParameterError(f"turdsize must be >= 0, got {self.turdsize}")
        try:
            self.turnpolicy = TurnPolicy(self.turnpolicy)
        except ValueError:
            raise InvalidParameterError(f"Unknown turn policy: {self.turnpolicy!r}") from None
        if self.alphamax < 0:
            raise InvalidParameterError(f"alphamax must be >= 0, got {self.alphamax}")
        if self.opttolerance < 0:
            raise InvalidParameterError(
                f"opttolerance must be >= 0, got {self.opttolerance}"
            )
        if self.quantize_unit is not None and (
            not isinstance(self.quantize_unit, int)
            or isinstance(self.quantize_unit, bool)
            or self.quantize_unit <= 0
        ):
            raise InvalidParameterError(
                f"quantize_unit must be a positive integer, got {self.quantize_unit}"
            )
        if self.progress is not None and not callable(self.progress):
            raise InvalidParameterError("progress must be callable")
        if self.progress_epsilon < 0:
            raise InvalidParameterError(
                f"progress_epsilon must be >= 0, got {self.progress_epsilon}"
            )

    @classmethod
    def from_kwargs(cls, **kwargs) -> "TraceParams":
        """Build parameters from keyword arguments, rejecting unknown names."""
        known = set(cls.__dataclass_fields__)
        unknown = set(kwargs) - known
        if unknown:
            raise InvalidParameterError(
                "Unknown trace parameter(s): " + ", ".join(sorted(unknown))
            )
        return cls(**kwargs)
