"""Failure kinds raised by sources, interpolators, and assemblies."""


class OutOfBoundsError(IndexError):
    """A discrete sample was requested outside the range a source can serve.

    Raised for stale reads from a lazily-filled buffer (the sample has
    already been evicted) and for reads past the end of finite sample data.
    `position` is the offending discrete index, `time` the continuous time
    that led to it when the failure passed through an InterpolatedSignal.
    """

    def __init__(self, message, position=None, time=None):
        super().__init__(message)
        self.position = position
        self.time = time


class UndefinedError(ValueError):
    """Unsupported configuration (unknown interpolator code, spectral exponent, ...)."""
