"""Exceptions raised by bitmap_to_vector."""


class TraceError(Exception):
    """Base exception for tracing errors."""

    pass


class BitmapSizeError(TraceError):
    """Raised when a bitmap of the requested size cannot be allocated."""

    pass


class UnsupportedFormatError(TraceError):
    """Raised when input data cannot be converted into a bitmap."""

    pass


class InvalidParameterError(TraceError, ValueError):
    """Raised when a tracing parameter is out of range."""

    pass


class TraceAborted(TraceError):
    """
    Raised by a progress callback to cancel a running trace.

    The tracer itself never raises this; it simply lets any exception raised
    by the callback propagate to the caller.
    """

    pass
