"""Decode grayscale raster images into :class:`~hmstl.grid.SampleGrid`.

Decoding is delegated to Pillow, which understands both ASCII (``P2``) and
binary (``P5``) PGM including header comments, as well as PNG and the other
formats Pillow ships with.
"""

from __future__ import annotations

import io
import logging
import sys
from pathlib import Path
from typing import BinaryIO, Union

import numpy as np
from PIL import Image

from hmstl.errors import InputError
from hmstl.grid import SampleGrid

logger = logging.getLogger(__name__)

STDIO_PATH = '-'

# Modes that reduce to 8-bit luminance without losing sample depth.
_CONVERTIBLE_MODES = {'1', 'L', 'LA', 'P', 'PA', 'RGB', 'RGBA', 'RGBX', 'CMYK', 'YCbCr'}

Source = Union[str, Path, BinaryIO, None]


def _read_source(source: Source) -> tuple[bytes, str]:
    if source is None or (isinstance(source, str) and source == STDIO_PATH):
        return sys.stdin.buffer.read(), '<stdin>'
    if hasattr(source, 'read'):
        data = source.read()
        if isinstance(data, str):
            raise InputError("raster input must be opened in binary mode")
        return data, getattr(source, 'name', '<stream>')
    path = Path(source)
    try:
        return path.read_bytes(), str(path)
    except OSError as exc:
        raise InputError(f"cannot open input file {path}: {exc}") from exc


def decode_heightmap(data: bytes, label: str = '<bytes>') -> SampleGrid:
    """Decode an in-memory raster image into a sample grid."""

    if not data:
        raise InputError(f"no image data in {label}")
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            mode = img.mode
            if mode not in _CONVERTIBLE_MODES:
                raise InputError(
                    f"unsupported sample depth in {label} (mode {mode}); only 8-bit samples are supported"
                )
            if mode != 'L':
                logger.debug("converting %s from mode %s to 8-bit grayscale", label, mode)
                img = img.convert('L')
            pixels = np.asarray(img, dtype=np.uint8)
    except InputError:
        raise
    except (OSError, ValueError, SyntaxError) as exc:
        raise InputError(f"cannot decode raster image {label}: {exc}") from exc

    grid = SampleGrid.from_array(pixels)
    if grid.is_empty():
        raise InputError(f"raster image {label} has no samples")
    logger.debug("decoded %s: %dx%d samples", label, grid.width, grid.height)
    return grid


def read_heightmap(source: Source = None) -> SampleGrid:
    """Read a heightmap from a path, a binary stream, or standard input.

    ``None`` and ``"-"`` select standard input. Caller-provided streams and
    standard input are read but never closed.
    """

    data, label = _read_source(source)
    return decode_heightmap(data, label)


__all__ = ['STDIO_PATH', 'decode_heightmap', 'read_heightmap']
