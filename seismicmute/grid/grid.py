"""Implements survey grids that convert raw location identifiers into (inline, crossline) pairs.

A grid is any callable accepting a raw location identifier and returning a tuple of two ints: inline and crossline
numbers. If the location cannot be converted, `GeometryError` must be raised. Two simple grids are provided:
- `LineGrid` - a 2D survey where location identifiers are used as inline numbers and the crossline is always 1,
- `CellGrid` - a rectangular 3D grid whose cells are numbered inline-first starting from `first_cell`.
"""

import warnings

from ..errors import ConfigurationError, GeometryError, DegenerateInputWarning


class LineGrid:
    """A 2D grid: location `cdp` maps to inline `cdp` and crossline 1."""

    def __repr__(self):
        return "LineGrid()"

    def __call__(self, location):
        return int(location), 1


class CellGrid:
    """A rectangular grid of `n_inlines` by `n_crosslines` cells numbered inline-first.

    Cell `first_cell` has inline and crossline numbers 1, cell `first_cell + 1` is located at inline 2 and crossline 1
    and so on up to inline `n_inlines`, after which numbering continues from inline 1 of the next crossline.

    Parameters
    ----------
    n_inlines : int
        The number of inlines in the grid.
    n_crosslines : int
        The number of crosslines in the grid. A grid with a single crossline is treated as a 2D line and a
        `DegenerateInputWarning` is issued.
    first_cell : int, optional, defaults to 1
        The number of the first cell.

    Raises
    ------
    ConfigurationError
        If the number of inlines or crosslines is not positive.
    """

    def __init__(self, n_inlines, n_crosslines, first_cell=1):
        if n_inlines < 1 or n_crosslines < 1:
            raise ConfigurationError("The number of grid inlines and crosslines must be positive")
        if n_crosslines == 1:
            warnings.warn("The grid has a single crossline and is treated as a 2D line", DegenerateInputWarning)
        self.n_inlines = int(n_inlines)
        self.n_crosslines = int(n_crosslines)
        self.first_cell = int(first_cell)

    def __repr__(self):
        return f"CellGrid(n_inlines={self.n_inlines}, n_crosslines={self.n_crosslines}, first_cell={self.first_cell})"

    @property
    def n_cells(self):
        """int: The total number of grid cells."""
        return self.n_inlines * self.n_crosslines

    def __call__(self, location):
        cell = int(location) - self.first_cell
        if cell < 0 or cell >= self.n_cells:
            raise GeometryError(f"Location {location} is not in the grid")
        crossline, inline = divmod(cell, self.n_inlines)
        return inline + 1, crossline + 1

    def get_location(self, inline, crossline):
        """Return the cell number at given `inline` and `crossline`."""
        if not (1 <= inline <= self.n_inlines and 1 <= crossline <= self.n_crosslines):
            raise GeometryError(f"Inline {inline} and crossline {crossline} are not in the grid")
        return self.first_cell + (inline - 1) + self.n_inlines * (crossline - 1)
