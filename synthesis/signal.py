"""Continuous-time signals and the interpolating facade over discrete sources."""

import math
from abc import ABC, abstractmethod

from dsp.errors import OutOfBoundsError, UndefinedError


class Signal(ABC):
    """A real value at any real time. reset(seed) restarts any randomness."""

    @abstractmethod
    def value(self, time: float) -> float:
        ...

    def reset(self, seed: int = 0):
        pass


class InterpolatedSignal(Signal):
    """Discrete source + interpolator seen as a continuous signal.

    Time t maps to real position (t + prebuffer) / deltat; the prebuffer
    shifts t = 0 far enough into the source that interpolators and filters
    have history to read. normalize = 0 switches the signal off entirely
    (value() returns 0 without touching the source).
    """

    def __init__(self, source, interp, deltat: float, prebuffer: float,
                 normalize: float = 1.0):
        if deltat <= 0.0:
            raise UndefinedError(f"sampling time must be positive, got {deltat}")
        self.source = source
        self.interp = interp
        self.samplingtime = deltat
        self.prebuffertime = prebuffer
        self.normalize = normalize

    def set_interpolator(self, interp):
        self.interp = interp

    def reset(self, seed: int = 0):
        self.source.reset(seed)

    def value(self, time: float, correction: float = None) -> float:
        """Signal at `time`, or at `time + correction` if correction is given.

        The two-argument form floors base and correction positions separately
        before adding their fractions, which keeps a small correction from
        being rounded away against a large base time.
        """
        if self.normalize == 0.0:
            return 0.0
        if correction is not None:
            return self._value_corrected(time, correction)

        ireal = (time + self.prebuffertime) / self.samplingtime
        iint = math.floor(ireal)
        ifrac = ireal - iint
        try:
            return self.normalize * self.interp.interpolate(self.source, iint, ifrac)
        except OutOfBoundsError as e:
            raise OutOfBoundsError(f"out of bounds while accessing time {time}: {e}",
                                   position=e.position, time=time) from e

    def _value_corrected(self, timebase, timecorr):
        irealb = (timebase + self.prebuffertime) / self.samplingtime
        iintb = math.floor(irealb)
        ifracb = irealb - iintb

        irealc = timecorr / self.samplingtime
        iintc = math.floor(irealc)
        ifracc = irealc - iintc

        ind = iintb + iintc
        ifrac = ifracb + ifracc
        if ifrac >= 1.0:
            ind += 1
            ifrac -= 1.0
        try:
            return self.normalize * self.interp.interpolate(self.source, ind, ifrac)
        except OutOfBoundsError as e:
            raise OutOfBoundsError(
                f"out of bounds while accessing time ({timebase}, {timecorr}): {e}",
                position=e.position, time=timebase + timecorr) from e
