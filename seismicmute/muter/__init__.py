"""Spatially interpolated mute functions and their application to traces"""

from .mute_function import MuteFunction, FixedOffsets, PerFunctionOffsets
from .function_store import FunctionStore
from .resolver import BilinearMuteResolver, MuteNeighbourhood, blend_bilinear
from .applier import MuteApplier
from .trace_muter import TraceMuter
