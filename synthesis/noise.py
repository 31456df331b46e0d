"""Ready-made continuous signals: colored noise, sampled data, cached signals.

Each assembly owns its whole chain:

    PowerLawNoise   WhiteNoiseSource -> FilteredSource -> interpolator
    SampledSignal   SampledSource [-> FilteredSource] -> interpolator
    CachedSignal    any Signal -> ResampledSource -> interpolator

and exposes it as a Signal through an InterpolatedSignal.
"""

import logging
import math

from dsp.filters import DifferenceFilter, IdentityFilter, IntegratorFilter
from dsp.interpolators import get_interpolator
from dsp.sources import FilteredSource, ResampledSource, SampledSource, WhiteNoiseSource
from dsp.errors import UndefinedError

from .params import BUFFER_HEADROOM, EXPONENTS, INTERPOLATOR_NAMES
from .signal import InterpolatedSignal, Signal

log = logging.getLogger(__name__)


def interpolator_span(interplen):
    """Consecutive samples one interpolation reads (nearest counted as linear)."""
    return 2 * max(abs(interplen), 1)


def buffer_length(deltat, prebuffer, interplen=1):
    """Samples needed to cover the prebuffer, headroom and the interpolator window."""
    return int(prebuffer / deltat + BUFFER_HEADROOM) + interpolator_span(interplen)


class PowerLawNoise(Signal):
    """Gaussian noise whose one-sided PSD is close to psd * f^exponent (f in Hz)
    well below the Nyquist frequency.

    exponent  0: white, identity filter
    exponent  2: blue, first difference of white noise
    exponent -2: red, running sum of white noise

    Args:
        deltat: sampling time of the underlying white noise (s)
        prebuffer: history (s) kept before t = 0; queries may reach this far
            behind the latest one
        psd: spectral density at the Nyquist frequency
        exponent: 0, 2 or -2
        interplen: interpolator code (see dsp.interpolators)
        seed: 0 picks a fresh seed from the process-wide fallback
    """

    def __init__(self, deltat: float, prebuffer: float, psd: float,
                 exponent: float, interplen: int = 1, seed: int = 0):
        if deltat <= 0.0:
            raise UndefinedError(f"sampling time must be positive, got {deltat}")

        if psd < 0.0:
            raise UndefinedError(f"spectral density must be non-negative, got {psd}")

        self.nyquistf = 0.5 / deltat
        normalize = math.sqrt(psd) * math.sqrt(self.nyquistf)

        if exponent == 0.0:
            self.filter = IdentityFilter()
        elif exponent == 2.0:
            self.filter = DifferenceFilter()
            normalize /= 2.0 * math.pi * deltat
        elif exponent == -2.0:
            self.filter = IntegratorFilter()
            normalize *= 2.0 * math.pi * deltat
        else:
            raise UndefinedError(f"undefined power-law exponent {exponent}")

        self.interp = get_interpolator(interplen)
        self.normalize = normalize
        self.exponent = exponent

        length = buffer_length(deltat, prebuffer, interplen)
        self.whitenoise = WhiteNoiseSource(length, seed)
        self.filterednoise = FilteredSource(length, self.whitenoise, self.filter, normalize)
        self.interpolatednoise = InterpolatedSignal(self.filterednoise, self.interp,
                                                    deltat, prebuffer)
        log.debug("%s noise: deltat=%g, scale=%g, buffer=%d samples, %s interpolation",
                  EXPONENTS[exponent], deltat, normalize, length,
                  INTERPOLATOR_NAMES.get(interplen, f"lagrange-{interplen}"))

    def value(self, time, correction=None):
        return self.interpolatednoise.value(time, correction)

    def reset(self, seed: int = 0):
        self.interpolatednoise.reset(seed)


class SampledSignal(Signal):
    """Externally supplied samples, optionally filtered, seen as a Signal.

    Sample k sits at time k * deltat - prebuffer; samples before the start
    read as zero. `data` is not copied when it is a float64 array (see
    SampledSource).
    """

    def __init__(self, data, deltat: float, prebuffer: float,
                 normalize: float = 1.0, filt=None, interplen: int = 1):
        if deltat <= 0.0:
            raise UndefinedError(f"sampling time must be positive, got {deltat}")
        self.interp = get_interpolator(interplen)

        if interplen > prebuffer / deltat:
            log.warning("at t = 0 the interpolator (semiwindow=%d) reaches before "
                        "the prebuffer and will read zeros", interplen)

        self.samples = SampledSource(data, normalize)
        if filt is None:
            self.filteredsamples = None
            source = self.samples
        else:
            self.filteredsamples = FilteredSource(buffer_length(deltat, prebuffer, interplen),
                                                  self.samples, filt)
            source = self.filteredsamples
        self.interpolatednoise = InterpolatedSignal(source, self.interp, deltat, prebuffer)

    def value(self, time, correction=None):
        return self.interpolatednoise.value(time, correction)

    def reset(self, seed: int = 0):
        self.interpolatednoise.reset(seed)


class CachedSignal(Signal):
    """Samples an expensive Signal once per deltat and interpolates between.

    `length` is the number of samples kept, at least the interpolator window;
    queries must stay within length * deltat of the latest one.
    """

    def __init__(self, signal, length: int, deltat: float, interplen: int = 1):
        self.interp = get_interpolator(interplen)
        if length < interpolator_span(interplen):
            raise UndefinedError(
                f"cache length {length} shorter than the interpolator window "
                f"({interpolator_span(interplen)} samples)")
        prebuffer = abs(interplen) * deltat

        self.signal = signal
        self.resample = ResampledSource(length, deltat, prebuffer, signal)
        self.interpsignal = InterpolatedSignal(self.resample, self.interp, deltat, prebuffer)

    def value(self, time, correction=None):
        return self.interpsignal.value(time, correction)

    def reset(self, seed: int = 0):
        # cascades through the resampler to the wrapped signal
        self.interpsignal.reset(seed)
