"""Implements functions to load and dump mute functions in various formats"""

from collections import namedtuple

import numpy as np
import pandas as pd

from ..errors import ConfigurationError


__all__ = ["read_vfunc", "dump_vfunc", "read_qfile"]


VFUNC = namedtuple("VFUNC", ["inline", "crossline", "x", "y"])
QRecord = namedtuple("QRecord", ["location", "offsets", "times"])


def read_vfunc(path, encoding="UTF-8"):
    """Read a file with vertical functions in Paradigm Echos VFUNC format.

    The file may have one or more records with the following structure:
    VFUNC [inline] [crossline]
    [x1] [y1] [x2] [y2] ... [xn] [yn]

    For mute functions `x` are offsets and `y` are mute times in milliseconds.

    Parameters
    ----------
    path : str
        A path to the file.
    encoding : str, optional, defaults to "UTF-8"
        File encoding.

    Returns
    -------
    vfunc_list : list of namedtuples
        List of loaded vertical functions. Each vfunc is a `namedtuple` with the following fields: `inline`,
        `crossline`, `x` and `y`, where `x` and `y` are 1d `np.ndarray`s with the same length.

    Raises
    ------
    ConfigurationError
        If data length for any VFUNC record is odd.
    """
    vfunc_list = []
    with open(path, encoding=encoding) as file:
        for data in file.read().split("VFUNC")[1:]:
            data = data.split()
            inline, crossline = int(data[0]), int(data[1])
            data = np.array(data[2:], dtype=np.float64)
            if len(data) % 2 != 0:
                raise ConfigurationError(f"Data length for VFUNC record at inline {inline} and crossline {crossline} "
                                         "must be even")
            vfunc_list.append(VFUNC(inline, crossline, data[::2], data[1::2]))
    return vfunc_list


def dump_vfunc(path, vfunc_list, encoding="UTF-8"):
    """Dump vertical functions in Paradigm Echos VFUNC format to a file.

    Each passed VFUNC is a tuple with 4 elements: `inline`, `crossline`, `x` and `y`, where `x` and `y` are 1d
    `np.ndarray`s with the same length. For each VFUNC a block with the following structure is created in the resulting
    file:
    - The first row contains 3 values: VFUNC [inline] [crossline],
    - All other rows represent pairs of `x` and corresponding `y` values: [x1] [y1] [x2] [y2] ...
      Each row contains 4 pairs, except for the last one, which may contain less. Values are left aligned in fields
      of width 7 separated by a space.

    Block example:
    VFUNC   22      33
    0       120     500     180     1000    310     2000    590
    3000    870

    Parameters
    ----------
    path : str
        A path to the created file.
    vfunc_list : iterable of tuples with 4 elements
        Each tuple corresponds to a vertical function and consists of the following values: `inline`, `crossline`,
        `x` and `y`, where `x` and `y` are 1d `np.ndarray`s with the same length.
    encoding : str, optional, defaults to "UTF-8"
        File encoding.
    """
    with open(path, "w", encoding=encoding) as f:
        for inline, crossline, x, y in vfunc_list:
            f.write("{:8}{:<8}{:<8}\n".format("VFUNC", inline, crossline))
            data = np.column_stack([x, y]).ravel()
            rows = np.split(data, np.arange(8, len(data), 8))
            for row in rows:
                f.write(" ".join("{:<7.10g}".format(i) for i in row).rstrip() + "\n")


def read_qfile(path, location_col="cdp", offset_col="offs", time_col="tims", offsets=None, **kwargs):
    """Read mute functions from a tabular CSV file.

    Each row of the file holds a single point of a mute function: its raw location identifier, offset and time in
    milliseconds. All points of a function must be stored in consecutive rows, in the order of increasing offsets.

    If all functions are defined at the same offsets, they can be passed once via `offsets`. In this case the file
    must have no offset column, and each function must have a row with a time for each of `offsets`.

    Parameters
    ----------
    path : str
        A path to the file.
    location_col : str, optional, defaults to "cdp"
        A column with raw location identifiers.
    offset_col : str, optional, defaults to "offs"
        A column with offsets. Ignored if `offsets` are passed.
    time_col : str, optional, defaults to "tims"
        A column with mute times in milliseconds.
    offsets : 1d array-like, optional
        Offsets shared by all mute functions.
    kwargs : misc, optional
        Additional keyword arguments to `pd.read_csv`.

    Returns
    -------
    records : list of namedtuples
        Loaded mute functions in the order they appear in the file. Each record is a `namedtuple` with `location`,
        `offsets` and `times` fields, where `offsets` and `times` are 1d `np.ndarray`s with the same length. If shared
        `offsets` are passed, all records reference the same offsets array.

    Raises
    ------
    ConfigurationError
        If any of the required columns is missing.
        If points of some mute function are not stored in consecutive rows.
        If shared `offsets` are passed and the number of rows of some mute function does not match their length.
    """
    df = pd.read_csv(path, **kwargs)
    df.columns = df.columns.str.strip()
    required_cols = {location_col, time_col} if offsets is not None else {location_col, offset_col, time_col}
    missing_cols = required_cols - set(df.columns)
    if missing_cols:
        raise ConfigurationError(f"The following columns are missing in {path}: {', '.join(sorted(missing_cols))}")
    if df.empty:
        return []

    locations = df[location_col].to_numpy()
    block_starts = np.concatenate([[0], np.where(locations[1:] != locations[:-1])[0] + 1])
    block_locations = locations[block_starts]
    if len(np.unique(block_locations)) != len(block_locations):
        raise ConfigurationError(f"Rows of each mute function must be stored consecutively in {path}")
    block_ends = np.append(block_starts[1:], len(df))
    times = df[time_col].to_numpy(dtype=np.float64)

    if offsets is None:
        all_offsets = df[offset_col].to_numpy(dtype=np.float64)
        return [QRecord(loc, all_offsets[start:end], times[start:end])
                for loc, start, end in zip(block_locations.tolist(), block_starts, block_ends)]

    offsets = np.asarray(offsets, dtype=np.float64)
    block_sizes = block_ends - block_starts
    if np.any(block_sizes != len(offsets)):
        loc = block_locations[np.argmax(block_sizes != len(offsets))]
        raise ConfigurationError(f"Mute function at location {loc} must have {len(offsets)} times to match shared "
                                 "offsets")
    return [QRecord(loc, offsets, times[start:end])
            for loc, start, end in zip(block_locations.tolist(), block_starts, block_ends)]
