"""Mappings from raw trace location identifiers to survey grid coordinates"""

from .grid import LineGrid, CellGrid
