"""Test muting of trace streams and SEG-Y files with spatially interpolated mute functions"""

import pytest
import numpy as np
import segyio

from seismicmute import FunctionStore, TraceMuter, Trace, ConfigurationError, GeometryError, config
from seismicmute.tests.conftest import CELL_GRID, N_SAMPLES, make_segy


DT = 0.004


def expected_time(location, offset):
    """Return the mute time of `rect_store` at given location and offset with no extrapolation."""
    inline, crossline = CELL_GRID(location)
    inline = np.clip(inline, 2, 4)
    crossline = np.clip(crossline, 1, 3)
    offset = np.clip(offset, 0, 2000)
    return 0.1 * inline + 0.01 * crossline + 0.0002 * offset


def make_trace(location, offset):
    """Create a trace of ones."""
    return Trace(np.ones(N_SAMPLES), offset=offset, location=location, sample_interval=DT)


class TestTraceMuter:
    """Test muting of separate traces."""

    @pytest.mark.parametrize("inline, crossline, offset", [(3, 2, 1000), (2, 1, 0), (4, 3, 2000), (1, 4, 500),
                                                           (5, 2, 3000)])
    def test_get_mute_time(self, rect_store, inline, crossline, offset):
        """Mute times are interpolated at grid locations of traces."""
        muter = TraceMuter(rect_store, grid=CELL_GRID)
        location = CELL_GRID.get_location(inline, crossline)
        assert np.isclose(muter.get_mute_time(location, offset), expected_time(location, offset))

    def test_abs_offset(self, rect_store):
        """Negative offsets are replaced with their absolute values only if `abs_offset` is enabled."""
        location = CELL_GRID.get_location(3, 2)
        muter = TraceMuter(rect_store, grid=CELL_GRID)
        assert np.isclose(muter.get_mute_time(location, -1000), expected_time(location, 1000))
        muter = TraceMuter(rect_store, grid=CELL_GRID, abs_offset=False)
        assert np.isclose(muter.get_mute_time(location, -1000), expected_time(location, 0))

    def test_cache(self, rect_store):
        """The neighbourhood of the previous location is reused for consecutive traces."""
        muter = TraceMuter(rect_store, grid=CELL_GRID)
        neighbourhood = muter._get_neighbourhood(7)
        assert muter._get_neighbourhood(7) is neighbourhood
        assert muter._get_neighbourhood(8) is not neighbourhood
        assert muter._cached_location == 8

    def test_out_of_grid(self, rect_store):
        """Traces outside the grid are rejected."""
        muter = TraceMuter(rect_store, grid=CELL_GRID)
        with pytest.raises(GeometryError):
            muter.mute(make_trace(CELL_GRID.n_cells + 1, 0))

    def test_single_function(self):
        """A single function is applied to all traces without consulting the grid."""
        store = FunctionStore.from_definitions([1], [0, 1000], [[0.1, 0.3]])

        def grid(location):
            raise GeometryError(f"Location {location} is not in the grid")

        muter = TraceMuter(store, grid=grid)
        assert np.isclose(muter.get_mute_time(100500, 500), 0.2)
        trace = muter(make_trace(100500, -1000))
        assert np.all(trace.data[:75] == 0)
        assert np.all(trace.data[75:] == 1)
        assert trace.mute_start == 300

    def test_mute(self, rect_store):
        """Traces are muted inplace."""
        muter = TraceMuter(rect_store, grid=CELL_GRID, n_taper=0)
        trace = make_trace(CELL_GRID.get_location(2, 2), 0)
        data = trace.data
        muted_trace = muter.mute(trace)
        assert muted_trace is trace
        assert muted_trace.data is data
        assert np.all(data[:55] == 0)
        assert np.all(data[55:] == 1)
        assert trace.mute_start == 220

    def test_band_uses_abs_offset(self):
        """Band centers are calculated for absolute offsets if `abs_offset` is enabled."""
        store = FunctionStore.from_definitions([1], [0, 1000], [[0.08, 0.08]])
        muter = TraceMuter(store, mode="linear", velocity=1000, tzero=0.1)
        trace = muter(make_trace(1, -200))
        assert np.all(trace.data[65:85] == 0)
        assert np.count_nonzero(trace.data == 0) == 20

    def test_mute_traces(self, rect_store):
        """Traces are muted lazily regardless of their order."""
        locations = [1, 7, 7, 20, 3, 7]
        offsets = [0, 1000, -1000, 2000, 500, 0]
        traces = [make_trace(location, offset) for location, offset in zip(locations, offsets)]
        muter = TraceMuter(rect_store, grid=CELL_GRID)
        muted_traces = muter.mute_traces(traces)
        assert not isinstance(muted_traces, list)
        for trace, location, offset in zip(muted_traces, locations, offsets):
            time = expected_time(location, abs(offset))
            assert trace.mute_start == round(time * 1000)
            assert abs(np.count_nonzero(trace.data == 0) - time / DT) <= 0.5 + 1e-6

    def test_config_defaults(self, rect_store):
        """Unspecified parameters are taken from the config."""
        with config.use_options(abs_offset=False, mute_mode="below"):
            muter = TraceMuter(rect_store, grid=CELL_GRID)
        assert not muter.abs_offset
        assert muter.applier.mode == 1
        assert muter.store is rect_store


@pytest.mark.parametrize("mode, header", [("above", segyio.TraceField.MuteTimeStart),
                                          ("below", segyio.TraceField.MuteTimeEND)])
def test_mute_segy(segy_path, rect_store, tmp_path, mode, header):
    """Muted traces and mute time headers are written to a new SEG-Y file."""
    out_path = tmp_path / "muted" / "muted.sgy"
    TraceMuter(rect_store, grid=CELL_GRID, mode=mode).mute_segy(segy_path, out_path, bar=False)

    with segyio.open(segy_path, ignore_geometry=True) as src, segyio.open(out_path, ignore_geometry=True) as dst:
        assert dst.tracecount == src.tracecount
        assert np.allclose(dst.samples, src.samples)
        for i in range(dst.tracecount):
            location = dst.header[i][segyio.TraceField.CDP]
            offset = dst.header[i][segyio.TraceField.offset]
            assert location == src.header[i][segyio.TraceField.CDP]
            assert offset == src.header[i][segyio.TraceField.offset]

            time = expected_time(location, abs(offset))
            assert dst.header[i][header] == round(time * 1000)
            n_zeros = np.count_nonzero(dst.trace[i] == 0)
            expected_zeros = time / DT if mode == "above" else N_SAMPLES - time / DT
            assert abs(n_zeros - expected_zeros) <= 0.5 + 1e-6


def test_trace():
    """Trace samples are measured from the start time, copies do not share data."""
    trace = Trace([1, 2, 3], offset=100, location=5, sample_interval=DT, start_time=0.1)
    assert trace.data.dtype == np.float32
    assert np.allclose(trace.samples, [0.1, 0.104, 0.108])
    trace_copy = trace.copy()
    trace_copy.data[0] = 0
    assert trace.data[0] == 1
    assert trace_copy.start_time == 0.1
    with pytest.raises(ConfigurationError):
        Trace([1, 2, 3], offset=100, location=5, sample_interval=0)


class TestSegyTraceHeaders:
    """Test that each SEG-Y trace is muted according to its own headers."""

    @staticmethod
    def mute_file(tmp_path, times, **kwargs):
        """Mute a file with traces at location 1 by a constant mute and return zero counts and mute start headers."""
        in_path = make_segy(tmp_path / "in.sgy", **kwargs)
        out_path = tmp_path / "out.sgy"
        store = FunctionStore.from_definitions([1], [0, 1000], [[times, times]])
        TraceMuter(store, mode="above").mute_segy(in_path, out_path, bar=False)
        with segyio.open(out_path, ignore_geometry=True) as dst:
            n_zeros = [np.count_nonzero(dst.trace[i] == 0) for i in range(dst.tracecount)]
            mute_starts = [dst.header[i][segyio.TraceField.MuteTimeStart] for i in range(dst.tracecount)]
        return n_zeros, mute_starts

    def test_delays(self, tmp_path):
        """Mute times are counted from the delay recording time of each trace."""
        n_zeros, mute_starts = self.mute_file(tmp_path, 0.2, locations=[1, 1, 1], offsets=[0, 500, 1000],
                                              delay=[0, 100, 40])
        assert n_zeros == [50, 25, 40]
        assert mute_starts == [200, 200, 200]

    def test_depth_traces(self, tmp_path):
        """Depth traces start at zero depth and their mutes are measured in depth units."""
        n_zeros, mute_starts = self.mute_file(tmp_path, 500, locations=[1, 1], offsets=[0, 1000], sample_rate=10,
                                              delay=100, trace_id=130)
        assert n_zeros == [50, 50]
        assert mute_starts == [500, 500]

    @pytest.mark.parametrize("trace_id", [9, 129, 131])
    def test_unsupported_trace_id(self, tmp_path, trace_id):
        """Traces that are neither time nor depth ones are rejected."""
        with pytest.raises(ConfigurationError, match=str(trace_id)):
            self.mute_file(tmp_path, 0.2, locations=[1], offsets=[0], trace_id=trace_id)
