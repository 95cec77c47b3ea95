"""Assemble the surface, walls and base of a heightmap into one STL solid."""

from __future__ import annotations

import itertools
import logging
import sys
from pathlib import Path
from typing import Iterator, TextIO, Union

from hmstl.config import DEFAULT_NAME, ZMapping, check_name
from hmstl.errors import EmptyGridError, OutputError
from hmstl.geometry_utils import Triangle
from hmstl.grid import SampleGrid
from hmstl.io.stl import emit_triangle, write_solid_close, write_solid_open
from hmstl.mesher import (
    base_triangles,
    surface_triangle_count,
    surface_triangles,
    wall_triangle_count,
    wall_triangles,
)

logger = logging.getLogger(__name__)

STDIO_PATH = '-'

Destination = Union[str, Path, TextIO, None]


def facets(grid: SampleGrid, zmap: ZMapping) -> Iterator[Triangle]:
    """Yield every triangle of the solid in emission order (raw grid coordinates)."""

    return itertools.chain(
        surface_triangles(grid, zmap),
        wall_triangles(grid, zmap),
        base_triangles(grid),
    )


def expected_triangle_count(width: int, height: int) -> int:
    """Number of facets :func:`assemble_solid` writes for a ``width`` x ``height`` grid."""

    return surface_triangle_count(width, height) + wall_triangle_count(width, height) + 2


def assemble_solid(grid: SampleGrid, sink: TextIO, zmap: ZMapping, *, name: str = DEFAULT_NAME) -> int:
    """Stream the complete solid for ``grid`` to ``sink``.

    Triangles are written as they are generated; nothing is buffered and
    nothing already written is retracted if a later step fails. Returns the
    number of facets written.
    """

    check_name(name)
    if grid.is_empty():
        raise EmptyGridError("cannot build a solid from an empty grid")
    write_solid_open(sink, name)
    count = 0
    for tri in facets(grid, zmap):
        emit_triangle(sink, grid, tri)
        count += 1
    write_solid_close(sink, name)
    logger.debug("wrote %d facets for %dx%d grid", count, grid.width, grid.height)
    return count


def heightmap_to_stl(grid: SampleGrid, path_or_file: Destination, zmap: ZMapping, *,
                     name: str = DEFAULT_NAME) -> int:
    """Write ``grid`` as an ASCII STL solid.

    ``path_or_file`` can be a filesystem path or an open text stream; ``None``
    and ``"-"`` select standard output. Files opened here are always closed,
    streams supplied by the caller never are.
    """

    check_name(name)
    close_when_done = False
    if path_or_file is None or (isinstance(path_or_file, str) and path_or_file == STDIO_PATH):
        stream = sys.stdout
    elif hasattr(path_or_file, 'write'):
        stream = path_or_file
    else:
        try:
            stream = open(path_or_file, 'w', encoding='ascii')
        except OSError as exc:
            raise OutputError(f"cannot open output file {path_or_file}: {exc}") from exc
        close_when_done = True

    try:
        count = assemble_solid(grid, stream, zmap, name=name)
        stream.flush()
    except OSError as exc:
        raise OutputError(f"failed writing STL output: {exc}") from exc
    finally:
        if close_when_done:
            stream.close()
    return count


__all__ = [
    'STDIO_PATH',
    'facets',
    'expected_triangle_count',
    'assemble_solid',
    'heightmap_to_stl',
]
