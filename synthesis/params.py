"""Parameter dict schema and defaults for power-law noise.

All callers (simulator setup, scripts, tests) build noise from a dict in
this format via make_noise().
"""

from dsp.errors import UndefinedError

# Extra samples kept in filter buffers beyond prebuffer / deltat
BUFFER_HEADROOM = 32

# Supported spectral exponents
EXPONENTS = {0.0: "white", 2.0: "blue", -2.0: "red"}

# Interpolation-length codes; any code > 1 is Lagrange with that half-window
INTERPOLATOR_NAMES = {0: "nearest", 1: "linear", -1: "linear-extrapolate"}


def default_params() -> dict:
    """Unit-rate white noise with 4-point-per-side Lagrange interpolation."""
    return {
        # Sampling time of the underlying white noise, seconds
        "deltat": 1.0,

        # History kept before t = 0 (s); also how far behind the latest
        # query a later query may reach
        "prebuffer": 64.0,

        # Power spectral density at the Nyquist frequency 1 / (2 deltat)
        "psd": 1.0,

        # Spectral slope: 0=white, 2=blue, -2=red
        "exponent": 0.0,

        # Interpolator code: 0=nearest, 1=linear, -1=extrapolate, n>1=Lagrange
        "interplen": 4,

        # 0 draws a fresh seed from the process-wide fallback
        "seed": 0,
    }


def make_noise(params: dict):
    """Build a PowerLawNoise from a (possibly partial) params dict."""
    from .noise import PowerLawNoise

    p = default_params()
    unknown = set(params) - set(p)
    if unknown:
        raise UndefinedError(f"unknown noise parameters: {sorted(unknown)}")
    p.update(params)
    return PowerLawNoise(p["deltat"], p["prebuffer"], p["psd"], p["exponent"],
                         p["interplen"], p["seed"])
