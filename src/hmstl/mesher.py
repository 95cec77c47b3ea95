"""Triangulate a sample grid into a closed solid: surface, walls and base.

All triangles are produced in raw grid coordinates: ``x`` is the column,
``y`` the raster row (row 0 at the top) and ``z`` the mapped height. The Y
axis is flipped only when the triangles are written out, see
:func:`hmstl.io.stl.output_vertex`. Windings below are chosen so that,
after that flip, every face normal points out of the solid.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, List, Tuple

from hmstl.config import ZMapping
from hmstl.geometry_utils import Triangle, Vec3
from hmstl.grid import SampleGrid

GridPoint = Tuple[int, int]

BASE_Z = 0.0


def _vertex(grid: SampleGrid, zmap: ZMapping, x: int, y: int) -> Vec3:
    return float(x), float(y), zmap.z(grid.sample(x, y))


def surface_triangles(grid: SampleGrid, zmap: ZMapping) -> Iterator[Triangle]:
    """Yield two triangles for every cell of the height surface.

    For the cell whose top-left corner is ``A`` the quad is split along the
    ``B``-``D`` diagonal into ``ABD`` and ``BCD``::

        A-D
        |/|
        B-C

    The shared diagonal runs ``B -> D`` in the first triangle and
    ``D -> B`` in the second.
    """

    for row in range(grid.height - 1):
        for col in range(grid.width - 1):
            a = _vertex(grid, zmap, col, row)
            b = _vertex(grid, zmap, col, row + 1)
            c = _vertex(grid, zmap, col + 1, row + 1)
            d = _vertex(grid, zmap, col + 1, row)
            yield Triangle(a, b, d)
            yield Triangle(b, c, d)


class Side(Enum):
    """Grid border, valued by its outward direction in raster coordinates."""

    NORTH = (0, -1)
    SOUTH = (0, 1)
    WEST = (-1, 0)
    EAST = (1, 0)

    @property
    def outward(self) -> Tuple[int, int]:
        return self.value


# north, south, west, east
WALL_ORDER = (Side.NORTH, Side.SOUTH, Side.WEST, Side.EAST)


def border_points(grid: SampleGrid, side: Side) -> List[GridPoint]:
    """Return the border samples of ``side`` in wall traversal order.

    Each side is walked so that its outward direction lies to the left of
    the walk in raster coordinates, i.e. the direction of travel ``(dx, dy)``
    satisfies ``outward == (dy, -dx)``. Together the four walks form one
    clockwise circuit of the raster border.
    """

    right = grid.width - 1
    bottom = grid.height - 1
    if side is Side.NORTH:
        return [(x, 0) for x in range(grid.width)]
    if side is Side.EAST:
        return [(right, y) for y in range(grid.height)]
    if side is Side.SOUTH:
        return [(x, bottom) for x in range(right, -1, -1)]
    if side is Side.WEST:
        return [(0, y) for y in range(bottom, -1, -1)]
    raise ValueError(f"unknown side {side!r}")


def wall_segment(p: GridPoint, q: GridPoint, zp: float, zq: float) -> Tuple[Triangle, Triangle]:
    """Return the vertical quad between border samples ``p`` and ``q``.

    The quad runs from the surface heights ``zp``/``zq`` down to the base
    plane and is split along the ``q_top``-``p_bot`` diagonal. Its outward
    side is determined solely by the order of ``p`` and ``q``; see
    :func:`border_points`.
    """

    px, py = float(p[0]), float(p[1])
    qx, qy = float(q[0]), float(q[1])
    p_top = (px, py, zp)
    q_top = (qx, qy, zq)
    p_bot = (px, py, BASE_Z)
    q_bot = (qx, qy, BASE_Z)
    return Triangle(p_top, q_top, p_bot), Triangle(q_top, q_bot, p_bot)


def side_triangles(grid: SampleGrid, zmap: ZMapping, side: Side) -> Iterator[Triangle]:
    """Yield the wall triangles of one side of the grid."""

    points = border_points(grid, side)
    for p, q in zip(points, points[1:]):
        zp = zmap.z(grid.sample(*p))
        zq = zmap.z(grid.sample(*q))
        yield from wall_segment(p, q, zp, zq)


def wall_triangles(grid: SampleGrid, zmap: ZMapping) -> Iterator[Triangle]:
    """Yield the walls closing all four borders down to ``z = 0``."""

    for side in WALL_ORDER:
        yield from side_triangles(grid, zmap, side)


def base_triangles(grid: SampleGrid) -> Iterator[Triangle]:
    """Yield the two triangles of the flat base cap at ``z = 0``.

    The cap spans only the four footprint corners, so along the borders it
    meets the wall segments in T-junctions rather than shared vertices.
    """

    right = float(grid.width - 1)
    bottom = float(grid.height - 1)
    yield Triangle((0.0, 0.0, BASE_Z), (right, 0.0, BASE_Z), (0.0, bottom, BASE_Z))
    yield Triangle((right, 0.0, BASE_Z), (right, bottom, BASE_Z), (0.0, bottom, BASE_Z))


def surface_triangle_count(width: int, height: int) -> int:
    return 2 * max(width - 1, 0) * max(height - 1, 0)


def wall_triangle_count(width: int, height: int) -> int:
    return 4 * max(width - 1, 0) + 4 * max(height - 1, 0)


__all__ = [
    'BASE_Z',
    'Side',
    'WALL_ORDER',
    'surface_triangles',
    'border_points',
    'wall_segment',
    'side_triangles',
    'wall_triangles',
    'base_triangles',
    'surface_triangle_count',
    'wall_triangle_count',
]
