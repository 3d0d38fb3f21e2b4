# Copyright (c) 2026 ColorTrace
# SPDX-License-Identifier: MIT

"""Command-line front end: extract a palette from a file."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from typing import Optional, Sequence

from colortrace.config import ExtractionConfig
from colortrace.errors import ColorTraceError
from colortrace.measure.extract import analyze_file
from colortrace.runtime.export import to_export_json
from colortrace.runtime.naming import color_name
from colortrace.schema import Palette


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="colortrace",
        description="Extract a frequency-ranked color palette from a file.",
    )
    parser.add_argument("file", help="Image, SVG, PDF or Office document")
    parser.add_argument(
        "--mime-type",
        default=None,
        help="Declared MIME type (guessed from the file name by default)",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="RGB distance below which colors merge (default: 30)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Show at most this many colors",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Abort extraction after this many seconds",
    )
    parser.add_argument(
        "--export",
        action="store_true",
        help="Print the JSON export document instead of a table",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = ExtractionConfig.from_env()
    overrides = {}
    if args.threshold is not None:
        overrides["similarity_threshold"] = args.threshold
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    try:
        if overrides:
            config = dataclasses.replace(config, **overrides)
        result = analyze_file(args.file, mime_type=args.mime_type, config=config)
    except (ColorTraceError, ValueError) as e:
        print(f"Error processing file: {e}", file=sys.stderr)
        return 2

    palette = result.palette
    if args.limit is not None:
        palette = Palette(entries=palette.entries[:args.limit])

    if result.notice:
        print(f"Note: {result.notice}", file=sys.stderr)

    if not palette:
        print("No colors found", file=sys.stderr)
        return 1

    if args.export:
        print(to_export_json(palette))
        return 0

    print(f"{'Hex':<9} {'RGB':<18} {'Usage':>8}  Name")
    print("-" * 48)
    for entry in palette:
        rgb = f"{entry.rgb.r}, {entry.rgb.g}, {entry.rgb.b}"
        print(
            f"{entry.hex:<9} {rgb:<18} {entry.percentage + '%':>8}  "
            f"{color_name(entry.rgb)}"
        )
    print(f"\n{len(palette)} color{'s' if len(palette) != 1 else ''} found")
    return 0


if __name__ == "__main__":
    sys.exit(main())
