"""Bulk evaluation of a Signal on a regular time grid."""

import logging
import time

import numpy as np

log = logging.getLogger(__name__)


def render_signal(signal, t0: float, n: int, deltat: float,
                  correction: float = None) -> np.ndarray:
    """Evaluate `signal` at t0 + k * deltat for k = 0 .. n-1.

    Times are visited in increasing order, so lazily-filled sources only
    ever advance. With `correction`, each sample uses the two-argument
    value(t0 + k * deltat, correction).

    Returns:
        float64 array of n samples
    """
    t_start = time.perf_counter()
    out = np.zeros(n, dtype=np.float64)
    for k in range(n):
        t = t0 + k * deltat
        out[k] = signal.value(t) if correction is None else signal.value(t, correction)
    elapsed = time.perf_counter() - t_start
    rate = n / elapsed if elapsed > 0 else float('inf')
    log.info("render %d samples in %.3fs (%.0f samples/s)", n, elapsed, rate)
    return out
