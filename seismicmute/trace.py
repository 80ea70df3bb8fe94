"""Implements Trace class - a single seismic trace with the headers required for muting"""

import numpy as np

from .errors import ConfigurationError


class Trace:
    """A single seismic trace.

    Parameters
    ----------
    data : 1d array-like
        Trace amplitudes. Converted to a `float32` array, muting modifies it inplace.
    offset : float
        The value of the offset key of the trace.
    location : int
        Raw location identifier of the trace, e.g. its CDP number.
    sample_interval : float
        Sample interval of the trace. Measured in seconds for seismic traces and in depth units for depth traces.
    start_time : float, optional, defaults to 0
        Time of the first trace sample in seconds. Ignored for depth traces.
    is_seismic : bool, optional, defaults to True
        Whether the trace is sampled in time. Otherwise it is a depth trace.
    mute_start : int, optional, defaults to 0
        Mute start metadata in milliseconds for seismic traces or in depth units for depth traces.
    mute_end : int, optional, defaults to 0
        Mute end metadata in the same units as `mute_start`.
    """

    def __init__(self, data, offset, location, sample_interval, start_time=0, is_seismic=True, mute_start=0,
                 mute_end=0):
        if sample_interval <= 0:
            raise ConfigurationError("Sample interval must be positive")
        self.data = np.asarray(data, dtype=np.float32)
        self.offset = offset
        self.location = location
        self.sample_interval = sample_interval
        self.start_time = start_time if is_seismic else 0
        self.is_seismic = is_seismic
        self.mute_start = mute_start
        self.mute_end = mute_end

    def __repr__(self):
        return (f"Trace(n_samples={self.n_samples}, offset={self.offset}, location={self.location}, "
                f"sample_interval={self.sample_interval}, start_time={self.start_time})")

    @property
    def n_samples(self):
        """int: The number of trace samples."""
        return len(self.data)

    @property
    def samples(self):
        """1d np.ndarray: Time (or depth) of each trace sample."""
        return self.start_time + np.arange(self.n_samples) * self.sample_interval

    def copy(self):
        """Return a copy of the trace with its own data array."""
        return Trace(self.data.copy(), self.offset, self.location, self.sample_interval, self.start_time,
                     self.is_seismic, self.mute_start, self.mute_end)
