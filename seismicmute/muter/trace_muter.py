"""Implements TraceMuter class which mutes a stream of traces using spatially interpolated mute functions"""

import os

import numpy as np
import segyio
from tqdm.auto import tqdm

from .applier import MuteApplier
from .resolver import BilinearMuteResolver
from ..config import config
from ..const import (HDR_OFFSET, HDR_LOCATION, HDR_MUTE_START, HDR_MUTE_END, HDR_DELAY, HDR_SAMPLE_INTERVAL,
                     HDR_TRACE_ID, SEISMIC_TRACE_IDS, DEPTH_TRACE_ID)
from ..errors import ConfigurationError
from ..grid import LineGrid
from ..trace import Trace
from ..utils import get_first_defined


class TraceMuter:
    """Mute traces with mute times interpolated from a `FunctionStore` at the trace location and offset.

    Each trace is processed in the following way:
    1. The trace offset is optionally replaced with its absolute value,
    2. The raw trace location is converted to grid coordinates by `grid`,
    3. Mute functions surrounding the location are evaluated at the trace offset and bilinearly interpolated by
       `BilinearMuteResolver`,
    4. The obtained time is applied to the trace by `MuteApplier`.

    Traces are expected to be sorted by location: the neighbourhood of the last processed location is cached and
    reused while consecutive traces share it. Unsorted traces are processed correctly, only slower.

    Parameters
    ----------
    store : FunctionStore
        Mute functions to interpolate.
    grid : callable, optional
        Converts a raw trace location to a tuple of inline and crossline, raises `GeometryError` if the location is
        not in the grid. Defaults to `LineGrid`. Not called if the store contains a single function.
    mode, n_taper, velocity, tzero : optional
        Muting parameters. See :class:`~applier.MuteApplier` for details.
    abs_offset : bool, optional
        Whether to use the absolute value of trace offsets. Defaults to `config["abs_offset"]`.
    extrapolate_inline, extrapolate_crossline, extrapolate_offset : optional
        Extrapolation policies. See :class:`~resolver.BilinearMuteResolver` for details.
    """

    def __init__(self, store, grid=None, mode=None, n_taper=None, velocity=None, tzero=None, abs_offset=None,
                 extrapolate_inline=None, extrapolate_crossline=None, extrapolate_offset=None):
        self.resolver = BilinearMuteResolver(store, extrapolate_inline=extrapolate_inline,
                                             extrapolate_crossline=extrapolate_crossline,
                                             extrapolate_offset=extrapolate_offset)
        self.applier = MuteApplier(mode=mode, n_taper=n_taper, velocity=velocity, tzero=tzero)
        self.grid = LineGrid() if grid is None else grid
        self.abs_offset = get_first_defined(abs_offset, config["abs_offset"])
        self._cached_location = None
        self._cached_neighbourhood = None

    @property
    def store(self):
        """FunctionStore: Interpolated mute functions."""
        return self.resolver.store

    def _get_neighbourhood(self, location):
        """Return the mute neighbourhood of the raw `location`, reusing the one of the previous call if possible."""
        if self._cached_neighbourhood is None or location != self._cached_location:
            self._cached_neighbourhood = self.resolver.locate(self.grid(location))
            self._cached_location = location
        return self._cached_neighbourhood

    def get_mute_time(self, location, offset):
        """Return the mute time in seconds for a trace at the raw `location` with given `offset`."""
        if self.abs_offset:
            offset = abs(offset)
        if self.store.n_functions == 1:
            return self.resolver.resolve(None, offset)
        return self._get_neighbourhood(location).evaluate(offset)

    def mute(self, trace):
        """Mute the `trace` inplace and return it."""
        offset = abs(trace.offset) if self.abs_offset else trace.offset
        time = self.get_mute_time(trace.location, offset)
        self.applier.apply(trace, time, offset=offset)
        return trace

    def __call__(self, trace):
        return self.mute(trace)

    def mute_traces(self, traces, bar=False):
        """Lazily mute each trace from the `traces` iterable inplace and yield it."""
        for trace in tqdm(traces, desc="Muting traces", disable=not bar):
            yield self.mute(trace)

    def mute_segy(self, in_path, out_path, offset_header=HDR_OFFSET, location_header=HDR_LOCATION, bar=True):
        """Mute all traces of a SEG-Y file and save them to a new one.

        Each trace is muted with its own delay recording time and sample interval. Depth traces (trace identification
        code 130) are sampled in depth units and have zero start depth, their mute times are measured in the same
        units. Trace headers are copied unchanged except for `MuteTimeStart` in `"above"` mode and `MuteTimeEND` in
        `"below"` mode which are set to the mute time in milliseconds for time traces and in depth units for depth
        traces.

        Parameters
        ----------
        in_path : str
            A path to the source SEG-Y file.
        out_path : str
            A path to the resulting SEG-Y file.
        offset_header : str, optional, defaults to "offset"
            A trace header with offsets.
        location_header : str, optional, defaults to "CDP"
            A trace header with raw location identifiers.
        bar : bool, optional, defaults to True
            Whether to show the progress bar.

        Raises
        ------
        ConfigurationError
            If some trace has an unsupported trace identification code or its sample interval is not set.
        """
        offset_field = segyio.tracefield.keys[offset_header]
        location_field = segyio.tracefield.keys[location_header]
        mute_start_field = segyio.tracefield.keys[HDR_MUTE_START]
        mute_end_field = segyio.tracefield.keys[HDR_MUTE_END]

        os.makedirs(os.path.abspath(os.path.dirname(out_path)), exist_ok=True)
        with segyio.open(in_path, ignore_geometry=True) as src:
            spec = segyio.spec()
            spec.tracecount = src.tracecount
            spec.samples = src.samples
            spec.ext_headers = src.ext_headers
            spec.format = src.format
            default_interval = src.bin[segyio.BinField.Interval]

            with segyio.create(out_path, spec) as dst:
                dst.text[0] = src.text[0]
                dst.bin = src.bin
                for i in tqdm(range(src.tracecount), desc="Muting traces", disable=not bar):
                    header = src.header[i]
                    trace = trace_from_header(src.trace[i], header, offset_field, location_field, default_interval)
                    trace.mute_start = header[mute_start_field]
                    trace.mute_end = header[mute_end_field]
                    self.mute(trace)
                    dst.header[i] = header
                    dst.header[i].update({mute_start_field: trace.mute_start, mute_end_field: trace.mute_end})
                    dst.trace[i] = trace.data


def trace_from_header(data, header, offset_field, location_field, default_interval=0):
    """Construct a `Trace` from its samples and a SEG-Y trace header.

    Time traces get their start time from the delay recording time in milliseconds and the sample interval from the
    header in microseconds. Depth traces start at zero depth and their sample interval is stored in depth units.
    `default_interval` is used if the trace header has no sample interval, usually taken from the binary header.
    """
    trace_id = header[segyio.tracefield.keys[HDR_TRACE_ID]]
    if trace_id in SEISMIC_TRACE_IDS:
        is_seismic = True
    elif trace_id == DEPTH_TRACE_ID:
        is_seismic = False
    else:
        raise ConfigurationError(f"Unsupported trace identification code {trace_id}")

    sample_interval = header[segyio.tracefield.keys[HDR_SAMPLE_INTERVAL]] or default_interval
    if not sample_interval:
        raise ConfigurationError("Sample interval must be set either in trace or in binary headers")
    if is_seismic:
        sample_interval = sample_interval / 1e6
        start_time = header[segyio.tracefield.keys[HDR_DELAY]] / 1000
    else:
        start_time = 0
    return Trace(np.array(data, dtype=np.float32), offset=header[offset_field], location=header[location_field],
                 sample_interval=sample_interval, start_time=start_time, is_seismic=is_seismic)
