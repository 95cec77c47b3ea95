"""ASCII STL facet writer (and a small reader used to verify output)."""

from __future__ import annotations

import re
from typing import List, TextIO

from hmstl.geometry_utils import Triangle, Vec3
from hmstl.grid import SampleGrid

_NUMBER = r'([eE\d.+-]+)'
_FACET_PATTERN = re.compile(
    r'facet\s+normal\s+' + r'\s+'.join([_NUMBER] * 3) + r'\s+'
    r'outer\s+loop\s+'
    r'vertex\s+' + r'\s+'.join([_NUMBER] * 3) + r'\s+'
    r'vertex\s+' + r'\s+'.join([_NUMBER] * 3) + r'\s+'
    r'vertex\s+' + r'\s+'.join([_NUMBER] * 3) + r'\s+'
    r'endloop\s+endfacet',
    re.IGNORECASE
)


def output_vertex(grid: SampleGrid, vertex: Vec3) -> Vec3:
    """Map a raw grid vertex to output coordinates.

    Raster rows grow downwards; the written Y is ``grid.height - y`` so the
    solid lands in a right-handed frame with the top row at ``Y = height``.
    """

    x, y, z = vertex
    return float(x), float(grid.height - y), float(z)


def output_triangle(grid: SampleGrid, tri: Triangle) -> Triangle:
    return tri.map(lambda v: output_vertex(grid, v))


def _format_vertex(v: Vec3) -> str:
    return f"vertex {v[0]:.6e} {v[1]:.6e} {v[2]:.6e}\n"


def emit_triangle(sink: TextIO, grid: SampleGrid, tri: Triangle) -> None:
    """Append one facet record for ``tri`` to ``sink``.

    The normal is always written as the zero vector; orientation is carried
    by the vertex winding alone.
    """

    out = output_triangle(grid, tri)
    sink.write(
        "facet normal 0 0 0\n"
        "outer loop\n"
        + _format_vertex(out.v0)
        + _format_vertex(out.v1)
        + _format_vertex(out.v2)
        + "endloop\n"
        "endfacet\n"
    )


def write_solid_open(sink: TextIO, name: str) -> None:
    sink.write(f"solid {name}\n")


def write_solid_close(sink: TextIO, name: str) -> None:
    sink.write(f"endsolid {name}\n")


def read_ascii_facets(text: str) -> List[Triangle]:
    """Parse ASCII STL text into triangles, in file order.

    Normals are discarded; vertices are returned exactly as written (i.e. in
    output coordinates).
    """

    triangles = []
    for match in _FACET_PATTERN.finditer(text):
        values = [float(g) for g in match.groups()]
        v0 = (values[3], values[4], values[5])
        v1 = (values[6], values[7], values[8])
        v2 = (values[9], values[10], values[11])
        triangles.append(Triangle(v0, v1, v2))
    return triangles


__all__ = [
    'output_vertex',
    'output_triangle',
    'emit_triangle',
    'write_solid_open',
    'write_solid_close',
    'read_ascii_facets',
]
