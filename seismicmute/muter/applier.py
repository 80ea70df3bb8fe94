"""Implements MuteApplier class which zeroes and tapers trace samples given a mute time"""

import numpy as np

from .utils import nint, make_taper, mute_above, mute_below, mute_band
from ..config import config
from ..const import MUTE_MODES
from ..errors import ConfigurationError
from ..utils import get_first_defined


def parse_mode(mode):
    """Convert a muting mode given either by its name or by its code to the code."""
    if isinstance(mode, str):
        code = MUTE_MODES.get(mode)
        if code is None:
            raise ConfigurationError(f"Unknown muting mode {mode}. Available options are: "
                                     f"{', '.join(MUTE_MODES.keys())}")
        return code
    if isinstance(mode, (int, np.integer)) and not isinstance(mode, bool) and mode in MUTE_MODES.values():
        return int(mode)
    raise ConfigurationError(f"Muting mode must be one of {sorted(MUTE_MODES.values())} or "
                             f"{', '.join(MUTE_MODES.keys())}, but {mode} was given")


class MuteApplier:
    """Apply a mute time to trace samples.

    The following muting modes are available:
    * `"above"` (0) - zero samples before the mute time and taper `n_taper` samples after it. Trace `mute_start` is
      set to the mute time.
    * `"below"` (1) - zero samples after the mute time and taper `n_taper` samples before it. Trace `mute_end` is set
      to the mute time.
    * `"linear"` (2) - zero a band of samples around a straight line `tzero + offset / velocity`. The mute time
      defines the total length of the band.
    * `"hyperbolic"` (3) - zero a band of samples around a hyperbola `sqrt(tzero**2 + (offset / velocity)**2)`. The
      mute time defines the total length of the band.

    Mute times are restricted to the trace time range only when converted to sample indices, so negative times are
    allowed.

    Parameters
    ----------
    mode : {"above", "below", "linear", "hyperbolic"} or {0, 1, 2, 3}, optional
        Muting mode. Defaults to `config["mute_mode"]`.
    n_taper : int, optional
        The number of samples to taper with sine-squared weights at each mute boundary. 0 disables tapering. Defaults
        to `config["n_taper"]`.
    velocity : float, optional
        Velocity of the linear or hyperbolic band. Measured in offset units per second. Defaults to
        `config["velocity"]`.
    tzero : float, optional
        Time of the linear or hyperbolic band center at zero offset. Measured in seconds. Defaults to
        `config["tzero"]`.

    Attributes
    ----------
    taper : 1d np.ndarray
        Precomputed taper coefficients, shared by all traces.

    Raises
    ------
    ConfigurationError
        If `mode` is unknown, `n_taper` is negative or `velocity` is not positive.
    """

    def __init__(self, mode=None, n_taper=None, velocity=None, tzero=None):
        self.mode = parse_mode(get_first_defined(mode, config["mute_mode"]))
        n_taper = get_first_defined(n_taper, config["n_taper"])
        if int(n_taper) != n_taper or n_taper < 0:
            raise ConfigurationError(f"n_taper must be a non-negative integer, but {n_taper} was given")
        self.n_taper = int(n_taper)
        self.velocity = get_first_defined(velocity, config["velocity"])
        if self.velocity <= 0:
            raise ConfigurationError(f"velocity must be positive, but {self.velocity} was given")
        self.tzero = get_first_defined(tzero, config["tzero"])
        self.taper = make_taper(self.n_taper)

    def __repr__(self):
        return (f"MuteApplier(mode={self.mode}, n_taper={self.n_taper}, velocity={self.velocity}, "
                f"tzero={self.tzero})")

    def get_band_center(self, offset, sample_interval):
        """Return the index of the band center sample for a trace with given `offset` in linear and hyperbolic
        modes."""
        tzero_samples = self.tzero / sample_interval
        offset_samples = offset / self.velocity / sample_interval
        if self.mode == MUTE_MODES["linear"]:
            return nint(tzero_samples + offset_samples)
        return nint(np.sqrt(tzero_samples**2 + offset_samples**2))

    def apply(self, trace, time, offset=None):
        """Mute `trace` inplace.

        Parameters
        ----------
        trace : Trace
            A trace to mute.
        time : float
            Mute time in seconds. In linear and hyperbolic modes - the total length of the muted band.
        offset : float, optional
            Offset to calculate the band center at in linear and hyperbolic modes. Defaults to `trace.offset`.

        Returns
        -------
        n_muted : int
            The number of zeroed samples.
        """
        metadata_time = nint(time * 1000) if trace.is_seismic else nint(time)
        if self.mode == MUTE_MODES["above"]:
            n_muted = mute_above(trace.data, time, trace.start_time, trace.sample_interval, self.taper)
            trace.mute_start = metadata_time
        elif self.mode == MUTE_MODES["below"]:
            n_muted = mute_below(trace.data, time, trace.start_time, trace.sample_interval, self.taper)
            trace.mute_end = metadata_time
        else:
            offset = get_first_defined(offset, trace.offset)
            n_mute = nint((trace.start_time + time) / trace.sample_interval)
            center = self.get_band_center(offset, trace.sample_interval)
            n_muted = mute_band(trace.data, center, n_mute, self.taper)
        return n_muted

    def __call__(self, trace, time, offset=None):
        return self.apply(trace, time, offset=offset)
