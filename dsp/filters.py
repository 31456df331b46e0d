"""Filters: identity, integrator, differencer, FIR, IIR.

A filter is stateless: it computes output sample y[pos] from random access to
its input x and its own past output y. The state lives in the FilteredSource
that hosts it, which is also what serves y.
"""

from abc import ABC, abstractmethod

import numpy as np
from scipy import signal as sps

from .errors import UndefinedError


class Filter(ABC):
    """Base class. `lag` is the furthest back (in samples) compute() reads."""

    lag = 0

    @abstractmethod
    def compute(self, x, y, pos: int) -> float:
        ...


class IdentityFilter(Filter):
    """y[n] = x[n], flat (white) spectrum."""

    def compute(self, x, y, pos):
        return x[pos]


class IntegratorFilter(Filter):
    """Single-pole integrator.

    y[n] = alpha * y[n-1] + x[n]

    alpha=1: pure running sum, turns white noise into red (1/f^2) noise
    alpha<1: leaky integrator
    """

    lag = 1

    def __init__(self, alpha: float = 1.0):
        self.alpha = alpha

    def compute(self, x, y, pos):
        return self.alpha * y[pos - 1] + x[pos]


class DifferenceFilter(Filter):
    """y[n] = x[n] - x[n-1]. Turns white noise blue (f^2)."""

    lag = 1

    def compute(self, x, y, pos):
        return x[pos] - x[pos - 1]


class FIRFilter(Filter):
    """Finite impulse response.

    y[n] = sum_i a[i] * x[n-i]

    The coefficients are copied. By convention a[0] = 1.
    """

    def __init__(self, a):
        self.a = np.array(a, dtype=np.float64)
        if self.a.ndim != 1 or len(self.a) == 0:
            raise UndefinedError("FIR filter needs a non-empty 1-D coefficient array")
        self.lag = len(self.a) - 1

    def compute(self, x, y, pos):
        acc = 0.0
        for i in range(len(self.a)):
            acc += self.a[i] * x[pos - i]
        return acc


class IIRFilter(Filter):
    """Infinite impulse response.

    y[n] = sum_i a[i] * x[n-i] + sum_{j>=1} b[j] * y[n-j]

    `a` is the feed-forward side, `b` the feedback side; b[0] is ignored.
    Both arrays are copied. Note the sign: feedback terms are added, the
    opposite of scipy.signal.lfilter's denominator (see from_lfilter).
    """

    def __init__(self, a, b):
        self.a = np.array(a, dtype=np.float64)
        self.b = np.array(b, dtype=np.float64)
        if self.a.ndim != 1 or len(self.a) == 0:
            raise UndefinedError("IIR filter needs a non-empty feed-forward array")
        if self.b.ndim != 1:
            raise UndefinedError("IIR feedback coefficients must be 1-D")
        self.lag = max(len(self.a), len(self.b)) - 1

    def compute(self, x, y, pos):
        acc = 0.0
        for i in range(len(self.a)):
            acc += self.a[i] * x[pos - i]
        for j in range(1, len(self.b)):
            acc += self.b[j] * y[pos - j]
        return acc

    @staticmethod
    def from_lfilter(b, a):
        """Build from scipy.signal.lfilter-style (numerator b, denominator a).

        lfilter solves a[0]*y[n] = sum b[i]*x[n-i] - sum_{j>=1} a[j]*y[n-j],
        so coefficients are divided by a[0] and the feedback side negated.
        """
        num = np.asarray(b, dtype=np.float64)
        den = np.asarray(a, dtype=np.float64)
        if len(den) == 0 or den[0] == 0.0:
            raise UndefinedError("denominator a[0] must be non-zero")
        fb = -den / den[0]
        fb[0] = 0.0
        return IIRFilter(num / den[0], fb)

    @staticmethod
    def lowpass(order, freq, deltat):
        """Butterworth lowpass. freq in Hz, deltat the sampling time in s."""
        b, a = sps.butter(order, freq, btype="low", fs=1.0 / deltat)
        return IIRFilter.from_lfilter(b, a)

    @staticmethod
    def highpass(order, freq, deltat):
        """Butterworth highpass."""
        b, a = sps.butter(order, freq, btype="high", fs=1.0 / deltat)
        return IIRFilter.from_lfilter(b, a)
