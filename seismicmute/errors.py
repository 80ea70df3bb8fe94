"""Exceptions and warnings raised while building and applying mutes"""


class ConfigurationError(ValueError):
    """Invalid muting parameters or malformed mute function definitions."""


class GeometryError(ValueError):
    """Mute function or trace locations that are inconsistent with the survey grid."""


class DegenerateInputWarning(UserWarning):
    """Degenerate input that was reset to a usable state."""
