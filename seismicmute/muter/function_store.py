"""Implements FunctionStore class - a set of mute functions arranged on a rectangular grid of field locations"""

from textwrap import dedent

import numpy as np

from .mute_function import MuteFunction, make_offsets_layout
from ..errors import ConfigurationError, GeometryError
from ..grid import LineGrid
from ..utils import to_list, read_vfunc, dump_vfunc, read_qfile


AXES = ("inline", "crossline")


class FunctionStore:
    """A set of mute functions whose locations form aligned rectangles on the survey grid.

    Locations of the functions must form a full Cartesian product of the inlines and crosslines they occupy: for
    every inline with a function, functions must be present at exactly the same set of crosslines. Degenerate layouts
    with functions along a single inline, a single crossline or a single function overall are allowed.

    Functions are sorted by crossline and then by inline and stored in a 2d container indexed by the rank of the
    function inline in `inline_axis` and the rank of its crossline in `crossline_axis`.

    A store is usually created by one of the following classmethods:
    * `from_definitions` - from lists of raw locations, offsets and times,
    * `from_qfile` - from a CSV file with a point of a mute function in each row,
    * `from_vfunc` - from a file in Paradigm Echos VFUNC format.

    Parameters
    ----------
    functions : MuteFunction or list of MuteFunction
        Mute functions to store.

    Attributes
    ----------
    functions : list of MuteFunction
        Stored functions sorted by crossline and then by inline.
    inline_axis : 1d np.ndarray
        Sorted unique inlines of the functions.
    crossline_axis : 1d np.ndarray
        Sorted unique crosslines of the functions.

    Raises
    ------
    ConfigurationError
        If no functions were passed or some of them are not `MuteFunction` instances.
    GeometryError
        If two functions share the same location or function locations do not form aligned rectangles.
    """

    def __init__(self, functions):
        functions = to_list(functions)
        if not functions:
            raise ConfigurationError("At least one mute function must be passed")
        if not all(isinstance(func, MuteFunction) for func in functions):
            raise ConfigurationError("The store can contain only MuteFunction instances")

        functions = sorted(functions, key=lambda func: (func.crossline, func.inline))
        for prev, curr in zip(functions[:-1], functions[1:]):
            if prev.coords == curr.coords:
                raise GeometryError(f"Two mute functions are defined at the same location: {prev.name} and "
                                    f"{curr.name}")
        self.functions = functions

        self.inline_axis = np.unique([func.inline for func in functions])
        self.crossline_axis = np.unique([func.crossline for func in functions])
        self._grid = self._build_grid()

    def _build_grid(self):
        """Arrange functions in a 2d container and check that their locations form aligned rectangles."""
        grid = np.empty((len(self.inline_axis), len(self.crossline_axis)), dtype=object)
        for func in self.functions:
            inline_rank = np.searchsorted(self.inline_axis, func.inline)
            crossline_rank = np.searchsorted(self.crossline_axis, func.crossline)
            grid[inline_rank, crossline_rank] = func

        for crossline_rank, crossline in enumerate(self.crossline_axis):
            for inline_rank, inline in enumerate(self.inline_axis):
                if grid[inline_rank, crossline_rank] is None:
                    raise GeometryError("Mute function locations do not form aligned rectangles: no function is "
                                        f"defined at inline {inline}, crossline {crossline}")
        return grid

    @classmethod
    def from_definitions(cls, locations, offsets, times, grid=None):
        """Create a store from raw locations and offsets and times of mute functions at them.

        Parameters
        ----------
        locations : array-like
            Raw location identifiers of the functions, e.g. their CDP numbers.
        offsets : 1d array-like or list of 1d array-likes
            Either offsets shared by all functions or offsets for each of `locations`.
        times : list of 1d array-likes
            Mute times for each of `locations`. Measured in seconds.
        grid : callable, optional
            Converts a raw location to a tuple of inline and crossline. Called once for each location. Defaults to
            `LineGrid`.

        Returns
        -------
        store : FunctionStore
            Created store.

        Raises
        ------
        ConfigurationError
            If no locations are passed or the number of `times` or `offsets` arrays does not match it.
        GeometryError
            If some location is not in the grid or locations do not form aligned rectangles.
        """
        locations = to_list(locations)
        if not locations:
            raise ConfigurationError("At least one mute function location must be passed")
        times = list(times)
        if len(times) != len(locations):
            raise ConfigurationError(f"Times must be passed for each of {len(locations)} locations, but "
                                     f"{len(times)} were given")
        if grid is None:
            grid = LineGrid()

        offsets_layout = make_offsets_layout(offsets, len(locations))
        functions = []
        for i, (location, func_times) in enumerate(zip(locations, times)):
            inline, crossline = grid(location)
            functions.append(MuteFunction(offsets_layout[i], func_times, inline, crossline, location=location))
        return cls(functions)

    @classmethod
    def from_qfile(cls, path, grid=None, location_col="cdp", offset_col="offs", time_col="tims", offsets=None,
                   **kwargs):
        """Create a store from a CSV file with mute functions. Times in the file are measured in milliseconds.
        Offsets shared by all functions may be passed via `offsets` instead of being stored in the file.

        See more about the file format in :func:`~utils.file_utils.read_qfile`.
        """
        records = read_qfile(path, location_col=location_col, offset_col=offset_col, time_col=time_col,
                             offsets=offsets, **kwargs)
        if not records:
            raise ConfigurationError(f"No mute functions found in {path}")
        locations, offsets_list, times = zip(*records)
        times = [func_times / 1000 for func_times in times]
        offsets = list(offsets_list) if offsets is None else offsets_list[0]
        return cls.from_definitions(locations, offsets, times, grid=grid)

    @classmethod
    def from_vfunc(cls, path, encoding="UTF-8"):
        """Create a store from a file with mute functions in Paradigm Echos VFUNC format. Each record defines the
        inline and crossline of the function directly, offsets and times in milliseconds follow in pairs.

        See more about the format in :func:`~utils.file_utils.read_vfunc`.
        """
        functions = [MuteFunction(offsets, times / 1000, inline, crossline)
                     for inline, crossline, offsets, times in read_vfunc(path, encoding=encoding)]
        return cls(functions)

    def dump_vfunc(self, path, encoding="UTF-8"):
        """Dump stored functions to a file in Paradigm Echos VFUNC format. Times are written in milliseconds."""
        vfunc_list = [(func.inline, func.crossline, func.offsets, func.times * 1000) for func in self.functions]
        dump_vfunc(path, vfunc_list, encoding=encoding)

    @property
    def n_functions(self):
        """int: The number of stored functions."""
        return len(self.functions)

    def __len__(self):
        return self.n_functions

    @property
    def shape(self):
        """tuple of two ints: The number of distinct inlines and crosslines of the functions."""
        return self._grid.shape

    @property
    def is_degenerate(self):
        """bool: Whether all functions lie along a single inline or a single crossline."""
        return 1 in self.shape

    def axis_size(self, axis):
        """Return the number of distinct function locations along the `axis` direction."""
        if axis not in AXES:
            raise ValueError(f"axis must be one of {', '.join(AXES)}")
        return self.shape[AXES.index(axis)]

    def lookup(self, inline_rank, crossline_rank):
        """Return the function whose inline has rank `inline_rank` in `inline_axis` and crossline has rank
        `crossline_rank` in `crossline_axis`."""
        return self._grid[inline_rank, crossline_rank]

    def __getitem__(self, coords):
        """Return the function at given `(inline, crossline)`."""
        inline, crossline = coords
        inline_rank = np.searchsorted(self.inline_axis, inline)
        crossline_rank = np.searchsorted(self.crossline_axis, crossline)
        if (inline_rank == len(self.inline_axis) or self.inline_axis[inline_rank] != inline or
            crossline_rank == len(self.crossline_axis) or self.crossline_axis[crossline_rank] != crossline):
            raise KeyError(f"No mute function at inline {inline}, crossline {crossline}")
        return self.lookup(inline_rank, crossline_rank)

    def __str__(self):
        """Print store metadata and the offsets and times of each function."""
        msg = f"""
        Number of functions:       {self.n_functions}
        Number of inlines:         {self.axis_size("inline")}
        Number of crosslines:      {self.axis_size("crossline")}
        Inlines range:             [{self.inline_axis[0]}, {self.inline_axis[-1]}]
        Crosslines range:          [{self.crossline_axis[0]}, {self.crossline_axis[-1]}]
        Is degenerate:             {self.is_degenerate}
        """
        msg = dedent(msg).strip() + "\n"
        for func in self.functions:
            msg += f"\n{func.name}, number of points: {len(func.offsets)}\n"
            msg += "\n".join(f"    {offset:<12g} {time * 1000:g} ms" for offset, time in zip(func.offsets, func.times))
            msg += "\n"
        return msg

    def info(self):
        """Print store metadata and the offsets and times of each function."""
        print(self)
