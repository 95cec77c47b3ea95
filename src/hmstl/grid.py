"""Sample grids decoded from heightmap rasters and their statistics."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

import numpy as np

from hmstl.errors import EmptyGridError, InputError

logger = logging.getLogger(__name__)

SAMPLE_MIN = 0
SAMPLE_MAX = 255


@dataclass(frozen=True, eq=False)
class SampleGrid:
    """Rectangular grid of unsigned 8-bit height samples.

    ``samples`` is a read-only, one-dimensional ``uint8`` array holding
    ``width * height`` values in row-major order. Row 0 is the top row of
    the raster.
    """

    width: int
    height: int
    samples: np.ndarray

    def __post_init__(self) -> None:
        width = int(self.width)
        height = int(self.height)
        if width < 0 or height < 0:
            raise InputError(f"grid dimensions must not be negative: {width}x{height}")

        samples = np.array(self.samples, dtype=np.uint8, copy=True).reshape(-1)
        if samples.size != width * height:
            raise InputError(
                f"expected {width * height} samples for a {width}x{height} grid, got {samples.size}"
            )
        samples.setflags(write=False)

        object.__setattr__(self, 'width', width)
        object.__setattr__(self, 'height', height)
        object.__setattr__(self, 'samples', samples)

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes) -> "SampleGrid":
        """Build a grid from a raw row-major byte payload."""

        return cls(width, height, np.frombuffer(bytes(data), dtype=np.uint8))

    @classmethod
    def from_array(cls, array) -> "SampleGrid":
        """Build a grid from a two-dimensional ``(height, width)`` array."""

        arr = np.asarray(array)
        if arr.ndim != 2:
            raise InputError(f"expected a two-dimensional array, got {arr.ndim} dimension(s)")
        if arr.size and (arr.min() < SAMPLE_MIN or arr.max() > SAMPLE_MAX):
            raise InputError("sample values must lie in the range [0, 255]")
        height, width = arr.shape
        return cls(width, height, arr.astype(np.uint8))

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[int]]) -> "SampleGrid":
        """Build a grid from nested row sequences, top row first."""

        rows = [list(row) for row in rows]
        if rows and any(len(row) != len(rows[0]) for row in rows):
            raise InputError("all rows of a sample grid must have the same length")
        for row in rows:
            for value in row:
                if not SAMPLE_MIN <= value <= SAMPLE_MAX:
                    raise InputError(f"sample value {value!r} outside the range [0, 255]")
        width = len(rows[0]) if rows else 0
        return cls(width, len(rows), np.array(rows, dtype=np.uint8).reshape(-1))

    @property
    def size(self) -> int:
        return self.width * self.height

    def is_empty(self) -> bool:
        return self.size == 0

    def index(self, x: int, y: int) -> int:
        """Return the offset of column ``x``, row ``y`` in ``samples``."""

        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"grid coordinate ({x}, {y}) outside {self.width}x{self.height} grid")
        return y * self.width + x

    def sample(self, x: int, y: int) -> int:
        return int(self.samples[self.index(x, y)])

    def rows(self) -> np.ndarray:
        """Return a ``(height, width)`` read-only view of the samples."""

        return self.samples.reshape(self.height, self.width)


@dataclass(frozen=True)
class GridStatistics:
    """Minimum, maximum and range of the samples in a grid."""

    min: int
    max: int
    range: int


def compute_statistics(grid: SampleGrid) -> GridStatistics:
    """Return min/max/range over every sample of ``grid``.

    Raises :class:`EmptyGridError` when the grid holds no samples.
    """

    if grid.samples is None or grid.is_empty():
        raise EmptyGridError("cannot compute statistics of an empty grid")
    lo = int(grid.samples.min())
    hi = int(grid.samples.max())
    return GridStatistics(min=lo, max=hi, range=hi - lo)


def report_grid(grid: SampleGrid, stats: Optional[GridStatistics] = None,
                log: Optional[logging.Logger] = None) -> None:
    """Log a human readable summary of ``grid``."""

    log = log or logger
    if stats is None:
        stats = compute_statistics(grid)
    log.info("Width: %d", grid.width)
    log.info("Height: %d", grid.height)
    log.info("Size: %d", grid.size)
    log.info("Min: %d", stats.min)
    log.info("Max: %d", stats.max)
    log.info("Range: %d", stats.range)


__all__ = [
    'SAMPLE_MIN',
    'SAMPLE_MAX',
    'SampleGrid',
    'GridStatistics',
    'compute_statistics',
    'report_grid',
]
