# -*- coding: utf-8 -*-
"""Convert grayscale heightmaps into closed ASCII STL solids."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("hmstl")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"
