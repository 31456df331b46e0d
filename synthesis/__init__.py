"""Continuous-time signals built from the dsp primitives."""

from .noise import CachedSignal, PowerLawNoise, SampledSignal
from .params import default_params, make_noise
from .render import render_signal
from .signal import InterpolatedSignal, Signal
