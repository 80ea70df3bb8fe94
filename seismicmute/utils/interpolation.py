"""Implements functions for linear 1d interpolation and extrapolation along sorted axes.

Both spatial bracketing of mute function locations and evaluation of a single mute function at a given offset are
reduced to the same operation: find two neighboring axis values surrounding the requested one and the relative
position of the requested value between them. Behavior outside the axis range is controlled by an extrapolation
policy, which is one of the following codes:
- `0` or `"none"` - values beyond both axis ends are held constant,
- `1` or `"both"` - linear extrapolation at both ends,
- `2` or `"low"` - linear extrapolation only at the lower end, constant at the higher one,
- `3` or `"high"` - linear extrapolation only at the higher end, constant at the lower one.
"""

import numpy as np
from numba import njit

from ..const import EXTRAPOLATION, EXTRAPOLATE_BOTH, EXTRAPOLATE_LOW, EXTRAPOLATE_HIGH
from ..errors import ConfigurationError


__all__ = ["parse_extrapolation", "locate", "interpolate", "interpolate_many"]


def parse_extrapolation(extrapolation):
    """Convert an extrapolation policy given either by its name or by its code to the code."""
    if isinstance(extrapolation, str):
        code = EXTRAPOLATION.get(extrapolation)
        if code is None:
            raise ConfigurationError(f"Unknown extrapolation policy {extrapolation}. Available options are: "
                                     f"{', '.join(EXTRAPOLATION.keys())}")
        return code
    if isinstance(extrapolation, (int, np.integer)) and not isinstance(extrapolation, bool):
        if extrapolation in EXTRAPOLATION.values():
            return int(extrapolation)
    raise ConfigurationError(f"Extrapolation policy must be one of {sorted(EXTRAPOLATION.values())} or "
                             f"{', '.join(EXTRAPOLATION.keys())}, but {extrapolation} was given")


@njit(nogil=True)
def locate(value, axis, extrapolation):
    """Find the position of `value` relative to an increasing `axis`.

    The returned rank `r` is the index of the smallest axis element not less than `value`, clamped to
    `[1, len(axis) - 1]`, so that `axis[r - 1]` and `axis[r]` always bracket `value` for interior values. The weight is
    the fractional position of `value` between them: 0 at `axis[r - 1]`, 1 at `axis[r]`. Outside the axis range the
    weight either linearly continues the nearest bracket or is clamped to the boundary value depending on
    `extrapolation`.

    Parameters
    ----------
    value : float
        A value to locate.
    axis : 1d np.ndarray
        Strictly increasing axis values.
    extrapolation : int
        Extrapolation policy code.

    Returns
    -------
    rank : int
        The index of the higher bracket. Always 1 for an axis with a single element.
    weight : float
        Relative position of `value` between `axis[rank - 1]` and `axis[rank]`. Always 0 for an axis with a single
        element.

    Raises
    ------
    ValueError
        If `axis` is empty.
    """
    n_values = len(axis)
    if n_values == 0:
        raise ValueError("Cannot locate a value on an empty axis")
    if n_values == 1:
        return 1, 0.0

    rank = np.searchsorted(axis, value)
    rank = min(max(rank, 1), n_values - 1)
    low = axis[rank - 1]
    high = axis[rank]
    weight = (value - low) / (high - low)

    if value < axis[0]:
        if extrapolation != EXTRAPOLATE_BOTH and extrapolation != EXTRAPOLATE_LOW:
            weight = 0.0
    elif value > axis[-1]:
        if extrapolation != EXTRAPOLATE_BOTH and extrapolation != EXTRAPOLATE_HIGH:
            weight = 1.0
    return rank, weight


@njit(nogil=True)
def interpolate(x_new, x, y, extrapolation):
    """Return a piecewise linear interpolant to a function defined by pairs of data points `(x, y)`, evaluated at a
    single point `x_new`. Function values outside the `x` range are extrapolated according to `extrapolation`."""
    if len(x) == 1:
        return y[0]
    rank, weight = locate(x_new, x, extrapolation)
    return (1 - weight) * y[rank - 1] + weight * y[rank]


@njit(nogil=True)
def interpolate_many(x_new, x, y, extrapolation):
    """Evaluate `interpolate` for each element of 1d array `x_new`."""
    res = np.empty(len(x_new), dtype=np.float64)
    for i, curr_x in enumerate(x_new):
        res[i] = interpolate(curr_x, x, y, extrapolation)
    return res
