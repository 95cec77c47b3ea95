"""Vertex and triangle helpers shared by the mesher, emitter and checks."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

Vec3 = Tuple[float, float, float]

_EPS = 1e-12


@dataclass(frozen=True)
class Triangle:
    """Immutable triangle; the winding ``v0 -> v1 -> v2`` carries orientation."""

    v0: Vec3
    v1: Vec3
    v2: Vec3

    @property
    def vertices(self) -> Tuple[Vec3, Vec3, Vec3]:
        return self.v0, self.v1, self.v2

    def map(self, fn) -> "Triangle":
        """Return a triangle with ``fn`` applied to every vertex."""

        return Triangle(fn(self.v0), fn(self.v1), fn(self.v2))


def _cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _sub(a: Vec3, b: Vec3) -> Vec3:
    return a[0] - b[0], a[1] - b[1], a[2] - b[2]


def triangle_normal(v0: Vec3, v1: Vec3, v2: Vec3) -> Vec3 | None:
    """Return the unit normal implied by the winding, or ``None`` if degenerate."""

    n = _cross(_sub(v1, v0), _sub(v2, v0))
    length = math.sqrt(n[0] * n[0] + n[1] * n[1] + n[2] * n[2])
    if length <= _EPS:
        return None
    return (n[0] / length, n[1] / length, n[2] / length)


def directed_edges(triangles: Iterable[Triangle]) -> Iterator[Tuple[Vec3, Vec3]]:
    """Yield the three directed edges of every triangle in winding order."""

    for tri in triangles:
        yield tri.v0, tri.v1
        yield tri.v1, tri.v2
        yield tri.v2, tri.v0


__all__ = [
    'Vec3',
    'Triangle',
    'triangle_normal',
    'directed_edges',
]
