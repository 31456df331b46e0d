"""Discrete sample sources: integer position in, real sample out.

Two families:
    BufferedSource   lazily computes samples in increasing position order and
                     keeps the last `length` of them in a RingBuffer
    SampledSource    O(1) view over finite, externally owned sample data

Everything downstream (filters, interpolators) reads samples with `src[pos]`.
"""

import math
from abc import ABC, abstractmethod

import numpy as np

from .errors import OutOfBoundsError, UndefinedError
from .random_stream import RandomStream
from .ring_buffer import RingBuffer


class SignalSource(ABC):
    """Anything that maps an integer position to a sample."""

    @abstractmethod
    def __getitem__(self, pos: int) -> float:
        ...

    def reset(self, seed: int = 0):
        pass


class BufferedSource(SignalSource):
    """Write-once cache over an infinite sequence, filled strictly forward.

    `current` is the highest position computed so far (-1 before any access).
    Reading a position at or below `current` returns the cached sample;
    reading above it computes every position from `current + 1` up to the
    request, in order, exactly once. Positions at or below
    `current - length` have been evicted and raise OutOfBoundsError.

    Subclasses implement `compute_value(pos)`.
    """

    def __init__(self, length: int):
        if length < 1:
            raise UndefinedError(f"buffer length must be positive, got {length}")
        self.buffer = RingBuffer(length)
        self.length = length
        self.current = -1

    @abstractmethod
    def compute_value(self, pos: int) -> float:
        ...

    def reset(self, seed: int = 0):
        self.buffer.reset()
        self.current = -1

    def __getitem__(self, pos: int) -> float:
        if pos <= self.current - self.length:
            raise OutOfBoundsError(
                f"stale sample access at {pos} (buffer holds "
                f"{self.current - self.length + 1}..{self.current})", position=pos)
        # current advances with each sample, so compute_value may read back
        # into this buffer (filter feedback) without refilling anything
        while self.current < pos:
            nxt = self.current + 1
            self.buffer[nxt] = self.compute_value(nxt)
            self.current = nxt
        return self.buffer[pos]


class WhiteNoiseSource(BufferedSource):
    """Gaussian white noise with standard deviation `normalize`.

    Deviates come from the Box-Muller polar method: each accepted point in the
    unit disk yields two independent deviates, one returned immediately and
    one held back for the next sample.
    """

    def __init__(self, length: int, seed: int = 0, normalize: float = 1.0):
        super().__init__(length)
        self.normalize = normalize
        self.randgen = RandomStream(seed)
        self._cached = None

    def seed(self, seed: int = 0):
        self.randgen.seed(seed)
        self._cached = None

    def reset(self, seed: int = 0):
        self.seed(seed)
        super().reset(seed)

    def compute_value(self, pos: int) -> float:
        # pos is irrelevant: samples depend only on how many were drawn before
        if self._cached is not None:
            value, self._cached = self._cached, None
            return self.normalize * value

        while True:
            x = -1.0 + 2.0 * self.randgen.uniform()
            y = -1.0 + 2.0 * self.randgen.uniform()
            r2 = x * x + y * y
            if 0.0 < r2 <= 1.0:
                break

        root = math.sqrt(-2.0 * math.log(r2) / r2)
        self._cached = x * root
        return self.normalize * y * root


class ResampledSource(BufferedSource):
    """Samples a continuous Signal on the grid pos * deltat - prebuffer."""

    def __init__(self, length: int, deltat: float, prebuffer: float, signal):
        super().__init__(length)
        self.deltat = deltat
        self.prebuffer = prebuffer
        self.signal = signal

    def compute_value(self, pos: int) -> float:
        return self.signal.value(pos * self.deltat - self.prebuffer)

    def reset(self, seed: int = 0):
        self.signal.reset(seed)
        super().reset(seed)


class _UnscaledView(SignalSource):
    """Raw (pre-normalization) output history of a FilteredSource."""

    def __init__(self, owner):
        self.owner = owner

    def __getitem__(self, pos: int) -> float:
        return BufferedSource.__getitem__(self.owner, pos)


class FilteredSource(BufferedSource):
    """Output of `filt` applied to `source`, cached like any BufferedSource.

    The filter sees this source's own unscaled output as its history, so
    recursive filters feed back on themselves; `normalize` scales samples
    only on the way out.
    """

    def __init__(self, length: int, source: SignalSource, filt, normalize: float = 1.0):
        super().__init__(length)
        if length < filt.lag:
            raise UndefinedError(
                f"buffer length {length} too short for filter lag {filt.lag}")
        self.source = source
        self.filter = filt
        self.normalize = normalize
        self._history = _UnscaledView(self)

    def reset(self, seed: int = 0):
        self.source.reset(seed)
        super().reset(seed)

    def compute_value(self, pos: int) -> float:
        return self.filter.compute(self.source, self._history, pos)

    def __getitem__(self, pos: int) -> float:
        return self.normalize * super().__getitem__(pos)


class SampledSource(SignalSource):
    """Finite sample data, zero-padded before position 0.

    Does not copy `data` when it is already a float64 array: the caller keeps
    ownership and must keep it alive (and unchanged) while the source is used.
    """

    def __init__(self, data, normalize: float = 1.0):
        self.data = np.asarray(data, dtype=np.float64)
        self.length = len(self.data)
        self.normalize = normalize

    def __getitem__(self, pos: int) -> float:
        if pos < 0:
            return 0.0
        if pos >= self.length:
            raise OutOfBoundsError(
                f"index {pos} past end of {self.length} samples", position=pos)
        return self.normalize * self.data[pos]
