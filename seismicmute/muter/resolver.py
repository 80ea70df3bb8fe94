"""Implements bilinear interpolation of mute times between mute functions of a FunctionStore"""

from ..config import config
from ..utils import get_first_defined, locate, parse_extrapolation


def blend_bilinear(time_ll, time_hl, time_lh, time_hh, inline_weight, crossline_weight):
    """Bilinearly blend times at 4 corners of a grid cell.

    The first letter of a corner name denotes its position along the inline axis, the second one - along the crossline
    axis (`l` for the lower bracket, `h` for the higher one). Times are first blended along inlines for both
    crosslines, the results are then blended along crosslines. The order does not affect the result.
    """
    time_low_crossline = (1 - inline_weight) * time_ll + inline_weight * time_hl
    time_high_crossline = (1 - inline_weight) * time_lh + inline_weight * time_hh
    return (1 - crossline_weight) * time_low_crossline + crossline_weight * time_high_crossline


class MuteNeighbourhood:
    """Up to 4 mute functions surrounding a field location together with its relative position between them.

    Evaluating the neighbourhood at a given offset returns a bilinearly interpolated mute time. The neighbourhood
    depends only on the location, so it can be reused for all traces sharing it.

    Parameters
    ----------
    corners : tuple of 4 MuteFunction
        Functions at (low inline, low crossline), (high inline, low crossline), (low inline, high crossline) and
        (high inline, high crossline) corners. Some of them may coincide for degenerate function layouts.
    inline_weight : float
        Relative position of the location between low and high inlines.
    crossline_weight : float
        Relative position of the location between low and high crosslines.
    extrapolation : int
        Offset extrapolation policy code.
    """

    def __init__(self, corners, inline_weight, crossline_weight, extrapolation):
        self.corners = corners
        self.inline_weight = inline_weight
        self.crossline_weight = crossline_weight
        self.extrapolation = extrapolation

    def evaluate(self, offset):
        """Return the mute time at given `offset` in seconds."""
        # Each distinct function is evaluated once: corners coincide along degenerate axes
        cache = {}
        times = []
        for func in self.corners:
            if id(func) not in cache:
                cache[id(func)] = func.evaluate(offset, extrapolation=self.extrapolation)
            times.append(cache[id(func)])
        return blend_bilinear(*times, self.inline_weight, self.crossline_weight)

    def __call__(self, offset):
        return self.evaluate(offset)


class BilinearMuteResolver:
    """Compute mute times at arbitrary grid locations and offsets from a `FunctionStore`.

    For a given location the closest inlines and crosslines of stored functions surrounding it are found, the 4 mute
    functions at their intersections are evaluated at the requested offset and the obtained times are bilinearly
    blended. If functions lie along a single inline or crossline, the interpolation is linear along the other axis. A
    store with a single function is evaluated directly.

    Parameters
    ----------
    store : FunctionStore
        Mute functions to interpolate.
    extrapolate_inline : {"none", "both", "low", "high"} or {0, 1, 2, 3}, optional
        Extrapolation policy beyond the first and last inline of the functions. `"none"` holds mute times constant.
        Defaults to `config["extrapolate_inline"]`.
    extrapolate_crossline : {"none", "both", "low", "high"} or {0, 1, 2, 3}, optional
        Extrapolation policy beyond the first and last crossline of the functions. Defaults to
        `config["extrapolate_crossline"]`.
    extrapolate_offset : {"none", "both", "low", "high"} or {0, 1, 2, 3}, optional
        Extrapolation policy beyond the first and last offset of each function. Defaults to
        `config["extrapolate_offset"]`.
    """

    def __init__(self, store, extrapolate_inline=None, extrapolate_crossline=None, extrapolate_offset=None):
        self.store = store
        self.extrapolate_inline = parse_extrapolation(get_first_defined(extrapolate_inline,
                                                                        config["extrapolate_inline"]))
        self.extrapolate_crossline = parse_extrapolation(get_first_defined(extrapolate_crossline,
                                                                           config["extrapolate_crossline"]))
        self.extrapolate_offset = parse_extrapolation(get_first_defined(extrapolate_offset,
                                                                        config["extrapolate_offset"]))

    @staticmethod
    def _get_bracket(value, axis, extrapolation):
        """Return ranks of the lower and higher brackets of `value` on the `axis` and the weight of the higher one."""
        rank, weight = locate(value, axis, extrapolation)
        if len(axis) == 1:
            return 0, 0, 0.0
        return rank - 1, rank, weight

    def locate(self, coords):
        """Return a `MuteNeighbourhood` of the `(inline, crossline)` location."""
        inline, crossline = coords
        low_i, high_i, inline_weight = self._get_bracket(inline, self.store.inline_axis, self.extrapolate_inline)
        low_c, high_c, crossline_weight = self._get_bracket(crossline, self.store.crossline_axis,
                                                            self.extrapolate_crossline)
        lookup = self.store.lookup
        corners = (lookup(low_i, low_c), lookup(high_i, low_c), lookup(low_i, high_c), lookup(high_i, high_c))
        return MuteNeighbourhood(corners, inline_weight, crossline_weight, self.extrapolate_offset)

    def resolve(self, coords, offset):
        """Return the mute time in seconds at the `(inline, crossline)` location for a trace with given `offset`."""
        if self.store.n_functions == 1:
            return self.store.functions[0].evaluate(offset, extrapolation=self.extrapolate_offset)
        return self.locate(coords).evaluate(offset)

    def __call__(self, coords, offset):
        return self.resolve(coords, offset)
