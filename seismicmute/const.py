"""Package-level constants"""

# Muting modes, the value is the code used by the mute kernels
MUTE_MODES = {
    "above": 0,
    "below": 1,
    "linear": 2,
    "hyperbolic": 3,
}

# Extrapolation policies at the ends of a sorted axis
NO_EXTRAPOLATION = 0
EXTRAPOLATE_BOTH = 1
EXTRAPOLATE_LOW = 2
EXTRAPOLATE_HIGH = 3

EXTRAPOLATION = {
    "none": NO_EXTRAPOLATION,
    "both": EXTRAPOLATE_BOTH,
    "low": EXTRAPOLATE_LOW,
    "high": EXTRAPOLATE_HIGH,
}


# Trace headers used when muting SEG-Y files
HDR_OFFSET = "offset"
HDR_LOCATION = "CDP"
HDR_MUTE_START = "MuteTimeStart"
HDR_MUTE_END = "MuteTimeEND"
HDR_DELAY = "DelayRecordingTime"
HDR_SAMPLE_INTERVAL = "TRACE_SAMPLE_INTERVAL"
HDR_TRACE_ID = "TraceIdentificationCode"

# Trace identification codes of time traces: unknown, live, dead, dummy, time break, uphole, sweep, timing and
# water break traces
SEISMIC_TRACE_IDS = frozenset(range(9))
# Trace identification code of depth traces
DEPTH_TRACE_ID = 130
