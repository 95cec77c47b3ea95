"""Exceptions raised while converting heightmaps to STL."""


class HmstlError(Exception):
    """Base exception for heightmap conversion errors."""
    pass


class ConfigError(HmstlError):
    """Invalid conversion parameters (scale, offset, name, config file)."""
    pass


class InputError(HmstlError):
    """Raster input could not be read or decoded into a sample grid."""
    pass


class EmptyGridError(HmstlError):
    """Statistics were requested on a grid without samples."""
    pass


class OutputError(HmstlError):
    """The STL destination could not be opened or written."""
    pass


__all__ = [
    'HmstlError',
    'ConfigError',
    'InputError',
    'EmptyGridError',
    'OutputError',
]
