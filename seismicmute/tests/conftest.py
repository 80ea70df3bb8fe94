"""Generate test SEG-Y files and mute function stores"""

import pytest
import numpy as np
import segyio

from seismicmute import FunctionStore, CellGrid


N_SAMPLES = 250
SAMPLE_RATE = 4000  # microseconds
CELL_GRID = CellGrid(n_inlines=5, n_crosslines=4)


def make_segy(path, locations, offsets, n_samples=N_SAMPLES, sample_rate=SAMPLE_RATE, delay=0, trace_id=0):
    """Create a SEG-Y file with a trace of ones for each pair of `locations` and `offsets`. `delay` and `trace_id` are
    either shared by all traces or defined for each of them."""
    delays = np.broadcast_to(delay, len(locations))
    trace_ids = np.broadcast_to(trace_id, len(locations))
    spec = segyio.spec()
    spec.format = 5
    spec.samples = delays[0] + np.arange(n_samples) * sample_rate / 1000
    spec.tracecount = len(locations)

    with segyio.create(path, spec) as dst:
        for i, (location, offset) in enumerate(zip(locations, offsets)):
            dst.header[i] = {
                segyio.TraceField.TRACE_SEQUENCE_FILE: i + 1,
                segyio.TraceField.CDP: int(location),
                segyio.TraceField.offset: int(offset),
                segyio.TraceField.TRACE_SAMPLE_COUNT: n_samples,
                segyio.TraceField.TRACE_SAMPLE_INTERVAL: sample_rate,
                segyio.TraceField.DelayRecordingTime: int(delays[i]),
                segyio.TraceField.TraceIdentificationCode: int(trace_ids[i]),
            }
            dst.trace[i] = np.ones(n_samples, dtype=np.float32)
        dst.bin = {segyio.BinField.Traces: len(locations),
                   segyio.BinField.Samples: n_samples,
                   segyio.BinField.Interval: sample_rate}
    return path


@pytest.fixture(scope="package")
def segy_path(tmp_path_factory):
    """Create a SEG-Y file with traces at every cell of `CELL_GRID` and offsets from 0 to 2000 meters."""
    locations = np.repeat(np.arange(1, CELL_GRID.n_cells + 1), 5)
    offsets = np.tile([-2000, -500, 0, 1000, 2000], CELL_GRID.n_cells)
    path = tmp_path_factory.mktemp("data") / "test_prestack.sgy"
    return make_segy(path, locations, offsets)


@pytest.fixture(scope="module")
def rect_store():
    """A store with 4 mute functions at inlines 2, 4 and crosslines 1, 3 of `CELL_GRID`. Function times grow with
    both inline and crossline so that interpolated values are easy to predict."""
    locations = [CELL_GRID.get_location(il, xl) for xl in (1, 3) for il in (2, 4)]
    times = [[0.1 * il + 0.01 * xl, 0.1 * il + 0.01 * xl + 0.4] for xl in (1, 3) for il in (2, 4)]
    return FunctionStore.from_definitions(locations, [0, 2000], times, grid=CELL_GRID)
