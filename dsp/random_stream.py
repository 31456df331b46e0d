"""Seedable uniform random stream, plus the process-wide fallback seed.

Seed 0 means "pick one for me": the stream takes the current fallback seed
and advances it, so default-seeded streams created in one process run never
coincide. The fallback itself starts from the wall clock unless set.
"""

import logging
import threading
import time

import numpy as np

log = logging.getLogger(__name__)

_global_seed = None
_seed_lock = threading.Lock()


def _clock_seed() -> int:
    now = time.time()
    return int(now) + int((now % 1.0) * 1e6)


def set_global_seed(seed: int = 0):
    """Set the fallback seed. seed=0 derives it from the wall clock."""
    global _global_seed
    with _seed_lock:
        _global_seed = int(seed) if seed != 0 else _clock_seed()


def get_global_seed() -> int:
    """Current fallback seed (initialized from the wall clock on first use)."""
    global _global_seed
    with _seed_lock:
        if _global_seed is None:
            _global_seed = _clock_seed()
        return _global_seed


def next_fallback_seed() -> int:
    """Return the fallback seed and advance it by one."""
    global _global_seed
    with _seed_lock:
        if _global_seed is None:
            _global_seed = _clock_seed()
        seed = _global_seed
        _global_seed += 1
    return seed


class RandomStream:
    """Deterministic uniform [0, 1) stream backed by numpy's PCG64 generator.

    Usage:
        rs = RandomStream(seed=42)
        u = rs.uniform()
        rs.seed(42)   # restart the same sequence
    """

    def __init__(self, seed: int = 0):
        self.current_seed = None
        self._gen = None
        self.seed(seed)

    def seed(self, value: int = 0):
        if value == 0:
            value = next_fallback_seed()
            log.debug("default-seeded stream gets fallback seed %d", value)
        self.current_seed = int(value)
        self._gen = np.random.default_rng(self.current_seed)

    def uniform(self) -> float:
        return float(self._gen.random())
