#!/usr/bin/env python3
"""Convert a grayscale heightmap image into an ASCII STL solid.

Usage::

    hmstl [-z SCALE] [-b BASE] [-i INPUT] [-o OUTPUT] [-n NAME] [-c CONFIG] [-v]

Input defaults to standard input and output to standard output, so the tool
can sit in a pipeline::

    convert terrain.png pgm:- | hmstl -z 0.25 -b 2 > terrain.stl
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from hmstl import __version__
from hmstl.config import ConversionConfig, load_config
from hmstl.errors import HmstlError
from hmstl.grid import compute_statistics, report_grid
from hmstl.io.raster import read_heightmap
from hmstl.logging_config import setup_logging
from hmstl.solid import heightmap_to_stl


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hmstl",
        description="Convert a grayscale heightmap (PGM, PNG, ...) into an ASCII STL solid.",
    )
    parser.add_argument(
        "-z", "--scale",
        type=float,
        default=None,
        help="Z scale: output units per heightmap sample value (default: 1.0, must be > 0).",
    )
    parser.add_argument(
        "-b", "--base",
        dest="offset",
        type=float,
        default=None,
        help="Base height added to every scaled surface Z (default: 1.0, must be >= 1).",
    )
    parser.add_argument(
        "-i", "--input",
        default=None,
        help="Heightmap image to read (default: standard input).",
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="STL file to write (default: standard output).",
    )
    parser.add_argument(
        "-n", "--name",
        default=None,
        help="Solid name written to the STL header and footer (default: heightmap).",
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="YAML file with default settings; command-line flags take precedence.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=None,
        help="Report heightmap dimensions and statistics on stderr.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write diagnostics to this file.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_config(args: argparse.Namespace) -> ConversionConfig:
    """Combine defaults, an optional YAML file and command-line flags."""

    base = load_config(args.config) if args.config else ConversionConfig()
    return base.merged(
        scale=args.scale,
        offset=args.offset,
        name=args.name,
        input=args.input,
        output=args.output,
        verbose=args.verbose,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = resolve_config(args)
        log = setup_logging(logging.INFO if config.verbose else logging.WARNING, args.log_file)
    except HmstlError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    try:
        grid = read_heightmap(config.input)
        if config.verbose:
            report_grid(grid, compute_statistics(grid), log=log)
        count = heightmap_to_stl(grid, config.output, config.zmapping, name=config.name)
    except HmstlError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    log.info("Facets: %d", count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
