"""SeismicMute is a library for spatially interpolated muting of seismic traces"""

from .config import config
from .errors import ConfigurationError, GeometryError, DegenerateInputWarning
from .trace import Trace
from .grid import LineGrid, CellGrid
from .muter import (MuteFunction, FunctionStore, BilinearMuteResolver, MuteNeighbourhood, MuteApplier, TraceMuter,
                    blend_bilinear)


__version__ = "0.1.0"
