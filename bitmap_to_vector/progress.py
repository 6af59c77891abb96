"""
Progress reporting.

A Progress maps the local 0.0-1.0 range of a tracing phase onto the caller's
range and drops updates smaller than the configured granularity (epsilon).
Phases nest through sub-ranges, so the decomposition and curve fitting stages
can each report 0..1 without knowing their share of the whole trace.
"""

from typing import Optional

from .params import ProgressCallback


class Progress:
    def __init__(
        self,
        callback: Optional[ProgressCallback] = None,
        min: float = 0.0,
        max: float = 1.0,
        epsilon: float = 0.0,
    ):
        self.callback = callback
        self.min = min
        self.max = max
        self.epsilon = epsilon
        self.d_prev = min  # last value passed to the callback, in caller units
        self.b = 0.0       # end of this subrange, in parent units

    @property
    def active(self) -> bool:
        return self.callback is not None

    def update(self, d: float) -> None:
        """Report local progress d in [0, 1]."""
        if self.callback is None:
            return
        d_scaled = self.min * (1 - d) + self.max * d
        if d == 1.0 or d_scaled >= self.d_prev + self.epsilon:
            self.callback(d_scaled)
            self.d_prev = d_scaled

    def subrange(self, a: float, b: float) -> "Progress":
        """
        Start a subrange covering [a, b] of this object's local range.

        If the subrange is narrower than epsilon it is returned inactive and
        only its endpoint is reported when it ends.
        """
        sub = Progress(epsilon=self.epsilon)
        sub.b = b
        if self.callback is None:
            return sub

        lo = self.min * (1 - a) + self.max * a
        hi = self.min * (1 - b) + self.max * b
        if hi - lo < self.epsilon:
            return sub

        sub.callback = self.callback
        sub.min = lo
        sub.max = hi
        sub.d_prev = self.d_prev
        return sub

    def end_subrange(self, sub: "Progress") -> None:
        if self.callback is None:
            return
        if sub.callback is None:
            self.update(sub.b)
        else:
            self.d_prev = sub.d_prev
