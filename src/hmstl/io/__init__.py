"""I/O utilities for hmstl."""

from .raster import read_heightmap
from .stl import emit_triangle, read_ascii_facets

__all__ = ['read_heightmap', 'emit_triangle', 'read_ascii_facets']
