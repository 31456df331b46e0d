"""Test the discrete sources: lazy ring-buffered cache, white noise, sampled data.

Run: uv run pytest tests/test_sources.py
"""

import numpy as np
import pytest
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from dsp.errors import OutOfBoundsError, UndefinedError
from dsp.filters import FIRFilter, IdentityFilter
from dsp.random_stream import RandomStream, get_global_seed, set_global_seed
from dsp.ring_buffer import RingBuffer
from dsp.sources import (BufferedSource, FilteredSource, ResampledSource,
                         SampledSource, WhiteNoiseSource)
from synthesis.signal import Signal


class CountingSource(BufferedSource):
    """Sample p is 10*p; records every position it is asked to compute."""

    def __init__(self, length):
        super().__init__(length)
        self.computed = []

    def compute_value(self, pos):
        self.computed.append(pos)
        return 10.0 * pos


class Ramp(Signal):
    def __init__(self):
        self.seeds = []

    def value(self, time):
        return 2.0 * time + 1.0

    def reset(self, seed=0):
        self.seeds.append(seed)


# ---------------------------------------------------------------------------
# Ring buffer
# ---------------------------------------------------------------------------
def test_ring_buffer_wraps_absolute_positions():
    rb = RingBuffer(4)
    rb[5] = 1.5
    assert rb[1] == 1.5
    assert rb[9] == 1.5
    rb[-1] = 2.0
    assert rb[3] == 2.0
    rb.reset()
    assert np.all(rb.buffer == 0.0)


# ---------------------------------------------------------------------------
# Buffered (lazy) source
# ---------------------------------------------------------------------------
def test_fill_forward_in_order_exactly_once():
    src = CountingSource(8)
    assert src[5] == 50.0
    assert src.computed == [0, 1, 2, 3, 4, 5]
    assert src.current == 5

    # re-reads compute nothing
    assert src[3] == 30.0
    assert src[5] == 50.0
    assert src.computed == [0, 1, 2, 3, 4, 5]

    assert src[7] == 70.0
    assert src.computed == [0, 1, 2, 3, 4, 5, 6, 7]


def test_stale_access_raises():
    src = CountingSource(8)
    src[20]
    with pytest.raises(OutOfBoundsError) as info:
        src[12]
    assert info.value.position == 12
    with pytest.raises(OutOfBoundsError):
        src[0]
    # oldest retained sample
    assert src[13] == 130.0


def test_reread_order_does_not_matter():
    a = WhiteNoiseSource(64, seed=42)
    b = WhiteNoiseSource(64, seed=42)

    a10 = a[10]
    a5 = a[5]
    b5 = b[5]
    b10 = b[10]
    assert a5 == b5
    assert a10 == b10


def test_reset_clears_buffer():
    src = CountingSource(8)
    src[10]
    src.reset()
    assert src.current == -1
    assert np.all(src.buffer.buffer == 0.0)
    src[2]
    assert src.computed[-3:] == [0, 1, 2]


def test_nonpositive_length_rejected():
    with pytest.raises(UndefinedError):
        CountingSource(0)


# ---------------------------------------------------------------------------
# White noise
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("scale", [1.0, 2.5])
def test_white_noise_statistics(scale):
    src = WhiteNoiseSource(16, seed=42, normalize=scale)
    n = 100000
    samples = np.array([src[i] for i in range(n)])
    assert abs(samples.mean()) < 0.02 * scale
    assert abs(samples.var() - scale**2) < 0.05 * scale**2


def test_white_noise_reset_reproduces_stream():
    src = WhiteNoiseSource(32, seed=7)
    first = [src[i] for i in range(101)]
    src.reset(7)
    again = [src[i] for i in range(101)]
    assert first == again

    src.reset(8)
    other = [src[i] for i in range(101)]
    assert first != other


def test_white_noise_pairs_do_not_repeat():
    # both deviates of each polar-method draw are used, not duplicated
    src = WhiteNoiseSource(32, seed=3)
    samples = [src[i] for i in range(50)]
    assert len(set(samples)) == 50


def test_fallback_seed_advances():
    set_global_seed(1000)
    a = WhiteNoiseSource(8)
    b = WhiteNoiseSource(8)
    assert a.randgen.current_seed == 1000
    assert b.randgen.current_seed == 1001
    assert get_global_seed() == 1002
    assert a[0] != b[0]


def test_random_stream_is_deterministic():
    r1 = RandomStream(123)
    r2 = RandomStream(123)
    u1 = [r1.uniform() for _ in range(20)]
    u2 = [r2.uniform() for _ in range(20)]
    assert u1 == u2
    assert all(0.0 <= u < 1.0 for u in u1)
    r1.seed(123)
    assert r1.uniform() == u1[0]


def test_clock_fallback_seed():
    set_global_seed(0)
    assert get_global_seed() > 0


# ---------------------------------------------------------------------------
# Sampled (finite) source
# ---------------------------------------------------------------------------
def test_sampled_source_padding_and_bounds():
    data = np.array([1.0, -2.0, 3.0])
    src = SampledSource(data, normalize=2.0)
    assert src[-1] == 0.0
    assert src[-100] == 0.0
    assert src[0] == 2.0
    assert src[1] == -4.0
    assert src[2] == 6.0
    with pytest.raises(OutOfBoundsError) as info:
        src[3]
    assert info.value.position == 3


def test_sampled_source_borrows_data():
    data = np.zeros(10)
    src = SampledSource(data)
    assert np.shares_memory(src.data, data)
    data[4] = 9.0
    assert src[4] == 9.0


# ---------------------------------------------------------------------------
# Resampled and filtered sources
# ---------------------------------------------------------------------------
def test_resampled_source_grid():
    ramp = Ramp()
    src = ResampledSource(16, deltat=0.5, prebuffer=2.0, signal=ramp)
    # sample p is the signal at p * 0.5 - 2.0
    assert src[0] == ramp.value(-2.0)
    assert src[4] == ramp.value(0.0)
    assert src[9] == ramp.value(2.5)

    src.reset(5)
    assert ramp.seeds == [5]
    assert src.current == -1


def test_filtered_source_scales_output_only():
    white = WhiteNoiseSource(64, seed=11)
    filt = FilteredSource(64, white, IdentityFilter(), normalize=3.0)
    for p in range(100):
        assert filt[p] == 3.0 * white[p]


def test_filtered_source_reset_propagates():
    white = WhiteNoiseSource(64, seed=11)
    filt = FilteredSource(64, white, IdentityFilter())
    first = [filt[p] for p in range(20)]
    filt.reset(11)
    assert white.current == -1
    assert [filt[p] for p in range(20)] == first


def test_filtered_source_window_must_cover_lag():
    white = WhiteNoiseSource(64, seed=1)
    with pytest.raises(UndefinedError):
        FilteredSource(2, white, FIRFilter([1.0, 0.5, 0.25, 0.125]))
