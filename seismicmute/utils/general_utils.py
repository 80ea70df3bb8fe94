"""Miscellaneous general utility functions"""

from collections.abc import Iterable


__all__ = ["to_list", "get_first_defined"]


def to_list(obj):
    """Cast an object to a list. Almost identical to `list(obj)` for 1-D iterables, except for `str`, which won't be
    split into separate letters but transformed into a list of a single element. Non-iterable objects are also
    wrapped into a list of a single element."""
    if isinstance(obj, (str, bytes)) or not isinstance(obj, Iterable):
        return [obj]
    return list(obj)


def get_first_defined(*args):
    """Return the first non-`None` argument. Return `None` if no `args` are passed or all of them are `None`s."""
    return next((arg for arg in args if arg is not None), None)
