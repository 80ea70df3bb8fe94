import numpy as np
from numba import njit


@njit(nogil=True)
def nint(x):
    """Round `x` to the nearest integer, halfway values are rounded away from zero."""
    if x > 0:
        return int(x + 0.5)
    return int(x - 0.5)


def make_taper(n_taper):
    """Return `n_taper` sine-squared taper coefficients increasing from the muted zone outwards."""
    if n_taper == 0:
        return np.zeros(0, dtype=np.float64)
    return np.sin(np.arange(1, n_taper + 1) * np.pi / (2 * n_taper))**2


@njit(nogil=True)
def mute_above(data, time, start_time, sample_interval, taper):
    """Zero `data` samples before `time` and taper the following `len(taper)` samples. Return the number of zeroed
    samples."""
    n_samples = len(data)
    n_mute = min(nint((time - start_time) / sample_interval), n_samples)
    if n_mute > 0:
        data[:n_mute] = 0
    for i, coef in enumerate(taper):
        ix = n_mute + i
        if 0 < ix < n_samples:
            data[ix] *= coef
    return max(n_mute, 0)


@njit(nogil=True)
def mute_below(data, time, start_time, sample_interval, taper):
    """Zero `data` samples after `time` and taper the preceding `len(taper)` samples. Return the number of zeroed
    samples."""
    n_samples = len(data)
    n_mute = max(0, nint((start_time + n_samples * sample_interval - time) / sample_interval))
    n_mute = min(n_mute, n_samples)
    data[n_samples - n_mute:] = 0
    for i, coef in enumerate(taper):
        ix = n_samples - n_mute - 1 - i
        if ix >= 0 and n_mute + i > 0:
            data[ix] *= coef
    return n_mute


@njit(nogil=True)
def mute_band(data, center, n_mute, taper):
    """Zero `n_mute` samples of `data` centered at sample `center` and taper `len(taper)` samples at both band edges.
    Return the number of zeroed samples."""
    n_samples = len(data)
    half_width = int(n_mute / 2)
    top = min(max(0, center - half_width), n_samples)
    bottom = min(n_samples, center + half_width)
    if bottom > top:
        data[top:bottom] = 0
    for i, coef in enumerate(taper):
        ix = center - half_width - i
        if 0 < ix < n_samples:
            data[ix] *= coef
    for i, coef in enumerate(taper):
        ix = center + half_width + i
        if 0 <= ix < n_samples:
            data[ix] *= coef
    return max(bottom - top, 0)
