"""Interpolators: continuous position ind + dind from discrete samples.

Every interpolator is called with a source y, an integer anchor `ind` (last
sample at or before the query) and a fraction `dind` in [0, 1).

    0   nearest
    1   linear
    -1  linear extrapolation (reads only y[ind-1], y[ind])
    >1  Lagrange with that half-window (2*n nodes, degree 2*n - 1)
"""

import numbers

import numpy as np
from numba import njit

from .errors import UndefinedError


# ---------------------------------------------------------------------------
# Neville kernels
# ---------------------------------------------------------------------------
# Nodes sit at xa[k] = k + 1. Both kernels start from the node nearest x
# (first one wins on ties) and walk the Neville tableau, adding at each level
# the correction that keeps the path centered on that node.

@njit(cache=True)
def _nearest_node(xa, x):
    ns = 0
    mindif = abs(x - xa[0])
    for i in range(1, len(xa)):
        dif = abs(x - xa[i])
        if dif < mindif:
            ns = i
            mindif = dif
    return ns


@njit(cache=True)
def neville(xa, ya, c, d, x):
    """Evaluate the polynomial through (xa, ya) at x. c, d are scratch."""
    n = len(xa)
    for i in range(n):
        c[i] = ya[i]
        d[i] = ya[i]

    ns = _nearest_node(xa, x)
    res = ya[ns]
    ns -= 1

    for m in range(1, n):
        for i in range(n - m):
            ho = xa[i] - x
            hp = xa[i + m] - x
            w = c[i + 1] - d[i]
            den = w / (ho - hp)
            d[i] = hp * den
            c[i] = ho * den
        if 2 * (ns + 1) < n - m:
            res += c[ns + 1]
        else:
            res += d[ns]
            ns -= 1
    return res


@njit(cache=True)
def neville_unit(xa, recip, c, d, x):
    """Same as neville() for unit-spaced nodes, with c, d preloaded.

    Node spacing xa[i] - xa[i+m] is always -m, so the division is replaced
    by the table recip[m] = -1/m.
    """
    n = len(xa)
    ns = _nearest_node(xa, x)
    res = c[ns]
    ns -= 1

    for m in range(1, n):
        for i in range(n - m):
            den = recip[m] * (c[i + 1] - d[i])
            c[i] = (xa[i] - x) * den
            d[i] = (xa[i + m] - x) * den
        # this summand is also the error estimate
        if 2 * (ns + 1) < n - m:
            res += c[ns + 1]
        else:
            res += d[ns]
            ns -= 1
    return res


# ---------------------------------------------------------------------------
# Interpolators
# ---------------------------------------------------------------------------

class Interpolator:
    """Base class; subclasses implement interpolate(y, ind, dind)."""

    def interpolate(self, y, ind: int, dind: float) -> float:
        raise NotImplementedError


class NearestInterpolator(Interpolator):

    def interpolate(self, y, ind, dind):
        return y[ind] if dind < 0.5 else y[ind + 1]


class LinearInterpolator(Interpolator):

    def interpolate(self, y, ind, dind):
        return (1.0 - dind) * y[ind] + dind * y[ind + 1]


class LinearExtrapolator(Interpolator):
    """Extends the line through y[ind-1], y[ind]; never reads ahead of ind.

    For positions past the last sample that can safely be generated.
    """

    def interpolate(self, y, ind, dind):
        return (-dind) * y[ind - 1] + (1.0 + dind) * y[ind]


class LagrangeInterpolator(Interpolator):
    """Lagrange interpolation through the 2*semiwindow samples around ind.

    Nodes are y[ind - semiwindow + 1] .. y[ind + semiwindow], placed at
    1 .. 2*semiwindow, so the query lands at semiwindow + dind, between the
    two middle nodes. The polynomial is evaluated with Neville's algorithm.
    """

    def __init__(self, semiwindow: int):
        if semiwindow < 1:
            raise UndefinedError(f"Lagrange half-window must be >= 1, got {semiwindow}")
        self.semiwindow = semiwindow
        self.window = 2 * semiwindow
        self.xa = np.arange(1, self.window + 1, dtype=np.float64)
        self.ya = np.zeros(self.window, dtype=np.float64)
        self.c = np.zeros(self.window, dtype=np.float64)
        self.d = np.zeros(self.window, dtype=np.float64)

    def interpolate(self, y, ind, dind):
        s = self.semiwindow
        for i in range(s):
            self.ya[s - 1 - i] = y[ind - i]
            self.ya[s + i] = y[ind + i + 1]
        return neville(self.xa, self.ya, self.c, self.d, s + dind)


class NewLagrangeInterpolator(Interpolator):
    """Rearranged LagrangeInterpolator: same polynomial, cheaper inner loop.

    Samples are gathered straight into the Neville scratch arrays (highest
    position first) and the node-spacing division is precomputed as
    recip[m] = -1/m. Agrees with LagrangeInterpolator to rounding.
    """

    def __init__(self, semiwindow: int):
        if semiwindow < 1:
            raise UndefinedError(f"Lagrange half-window must be >= 1, got {semiwindow}")
        self.semiwindow = semiwindow
        self.window = 2 * semiwindow
        self.xa = np.arange(1, self.window + 1, dtype=np.float64)
        self.recip = np.zeros(self.window, dtype=np.float64)
        self.recip[1:] = -1.0 / np.arange(1, self.window)
        self.c = np.zeros(self.window, dtype=np.float64)
        self.d = np.zeros(self.window, dtype=np.float64)

    def interpolate(self, y, ind, dind):
        base = ind - self.semiwindow + 1
        for i in range(self.window - 1, -1, -1):
            self.c[i] = self.d[i] = y[base + i]
        return neville_unit(self.xa, self.recip, self.c, self.d, self.semiwindow + dind)


def get_interpolator(interplen: int) -> Interpolator:
    """Interpolator for an interpolation-length code (see module docstring)."""
    if not isinstance(interplen, numbers.Integral):
        raise UndefinedError(f"interpolator length must be an integer, got {interplen!r}")
    if interplen == 0:
        return NearestInterpolator()
    elif interplen == 1:
        return LinearInterpolator()
    elif interplen == -1:
        return LinearExtrapolator()
    elif interplen > 1:
        return LagrangeInterpolator(interplen)
    raise UndefinedError(f"undefined interpolator length {interplen}")
