"""Discrete-time building blocks: lazy sources, filters, interpolators."""

from .errors import OutOfBoundsError, UndefinedError
from .filters import (Filter, IdentityFilter, IntegratorFilter, DifferenceFilter,
                      FIRFilter, IIRFilter)
from .interpolators import (Interpolator, NearestInterpolator, LinearInterpolator,
                            LinearExtrapolator, LagrangeInterpolator,
                            NewLagrangeInterpolator, get_interpolator)
from .random_stream import RandomStream, get_global_seed, set_global_seed
from .sources import (SignalSource, BufferedSource, WhiteNoiseSource, ResampledSource,
                      FilteredSource, SampledSource)
