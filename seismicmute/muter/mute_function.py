"""Implements MuteFunction class - a mute time curve defined at a single field location"""

import numpy as np

from ..errors import ConfigurationError
from ..utils import interpolate, interpolate_many, parse_extrapolation


def as_readonly_array(arr):
    """Convert `arr` to a read-only 1d `float64` array. Arrays of proper dtype are not copied."""
    arr = np.asarray(arr, dtype=np.float64)
    if arr.ndim != 1:
        raise ConfigurationError("Offsets and times of a mute function must be 1d")
    if arr.flags.writeable:
        arr = arr.copy()
        arr.flags.writeable = False
    return arr


def validate_offsets(offsets, location=None):
    """Check that `offsets` are non-empty and strictly increasing."""
    suffix = "" if location is None else f" (location {location})"
    if len(offsets) == 0:
        raise ConfigurationError(f"Mute function must have at least one point{suffix}")
    if np.any(np.diff(offsets) <= 0):
        raise ConfigurationError(f"Offsets of a mute function must be strictly increasing{suffix}")


class MuteFunction:
    """A mute function: a piecewise linear curve of mute times as a function of offset at a single field location.

    The function is immutable: its offsets and times are stored in read-only arrays which may be shared between
    several functions if all of them were defined with the same offsets.

    Parameters
    ----------
    offsets : 1d array-like
        Strictly increasing offsets. Are never sorted, input with decreasing offsets is considered to be an error.
    times : 1d array-like
        Mute times for each of `offsets`. Measured in seconds. Are not required to be monotonic.
    inline : int
        Inline number of the function location on the survey grid.
    crossline : int
        Crossline number of the function location on the survey grid.
    location : optional
        Raw location identifier the grid coordinates were obtained from. Used only in messages and dumps.

    Attributes
    ----------
    offsets : 1d np.ndarray
        Read-only array of function offsets.
    times : 1d np.ndarray
        Read-only array of function times.
    inline : int
        Inline number of the function location.
    crossline : int
        Crossline number of the function location.
    location : misc
        Raw location identifier.

    Raises
    ------
    ConfigurationError
        If `offsets` and `times` have different lengths, are empty or `offsets` are not strictly increasing.
    """

    def __init__(self, offsets, times, inline, crossline, location=None):
        self.inline = int(inline)
        self.crossline = int(crossline)
        self.location = location

        offsets = as_readonly_array(offsets)
        times = as_readonly_array(times)
        if len(offsets) != len(times):
            raise ConfigurationError(f"Offsets and times of a mute function must have the same length (location "
                                     f"{self.name})")
        validate_offsets(offsets, self.name)
        self.offsets = offsets
        self.times = times

    @property
    def coords(self):
        """tuple of two ints: Grid coordinates of the function: inline and crossline."""
        return self.inline, self.crossline

    @property
    def name(self):
        """str: Human-readable location of the function."""
        coords = f"inline {self.inline}, crossline {self.crossline}"
        return coords if self.location is None else f"{self.location}: {coords}"

    def __repr__(self):
        return f"MuteFunction(inline={self.inline}, crossline={self.crossline}, n_points={len(self.offsets)})"

    def evaluate(self, offsets, extrapolation="none"):
        """Evaluate mute times at given `offsets`.

        Times between function offsets are linearly interpolated. Beyond the first and the last function offset times
        are either held constant or linearly extrapolated using the slope of the nearest segment, depending on
        `extrapolation`.

        Parameters
        ----------
        offsets : float or 1d array-like
            Offsets to evaluate mute times at.
        extrapolation : {"none", "both", "low", "high"} or {0, 1, 2, 3}, optional, defaults to "none"
            Which ends of the offset range allow for linear extrapolation.

        Returns
        -------
        times : float or 1d np.ndarray
            Mute times in seconds. Matches the shape of `offsets`.
        """
        extrapolation = parse_extrapolation(extrapolation)
        offsets = np.asarray(offsets, dtype=np.float64)
        if offsets.ndim == 0:
            return interpolate(offsets.item(), self.offsets, self.times, extrapolation)
        return interpolate_many(offsets.ravel(), self.offsets, self.times, extrapolation).reshape(offsets.shape)

    def __call__(self, offsets, extrapolation="none"):
        return self.evaluate(offsets, extrapolation=extrapolation)


class FixedOffsets:
    """Offsets shared by all mute functions. Validated once and passed to each function without copying."""

    def __init__(self, offsets):
        self.offsets = as_readonly_array(offsets)
        validate_offsets(self.offsets)

    def __getitem__(self, index):
        return self.offsets


class PerFunctionOffsets:
    """Individual offsets for each mute function."""

    def __init__(self, offsets_list):
        self.offsets_list = [as_readonly_array(offsets) for offsets in offsets_list]

    def __getitem__(self, index):
        return self.offsets_list[index]


def make_offsets_layout(offsets, n_functions):
    """Select the offsets layout once for all `n_functions` mute functions.

    `offsets` may be either a single 1d array-like of numbers, shared by all functions, or a list with offsets for
    each function. A list with a single array-like is also treated as shared offsets.
    """
    if len(offsets) == 0:
        raise ConfigurationError("Offsets of mute functions must be passed")
    if np.ndim(offsets[0]) == 0:
        return FixedOffsets(offsets)
    if len(offsets) == 1:
        return FixedOffsets(offsets[0])
    if len(offsets) != n_functions:
        raise ConfigurationError(f"Either a single offsets array or an array for each of {n_functions} locations "
                                 f"must be passed, but {len(offsets)} were given")
    return PerFunctionOffsets(offsets)
