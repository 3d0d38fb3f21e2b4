# Copyright (c) 2026 ColorTrace
# SPDX-License-Identifier: MIT

"""
ColorTrace -- dominant color extraction.

Builds a frequency-ranked palette with usage percentages from images,
SVG markup and computed-style snapshots of a document.

Quick start::

    from colortrace import analyze_file

    result = analyze_file("logo.png")
    for entry in result.palette:
        print(entry.hex, entry.percentage)
"""

from __future__ import annotations

__version__ = "1.0.0"

from colortrace.config import ExtractionConfig
from colortrace.errors import (
    ColorTraceError,
    ExtractionCancelled,
    ExtractionTimeout,
    InvalidFormat,
    UnreadableSource,
    UnsupportedFileType,
)
from colortrace.measure import (
    ColorClusterer,
    add_manual_color,
    analyze_document,
    analyze_dom,
    analyze_file,
    analyze_image,
    analyze_pdf,
    analyze_svg,
    analyze_url,
)
from colortrace.schema import (
    ExtractionResult,
    Palette,
    PaletteEntry,
    RGBColor,
    SourceKind,
)

__all__ = [
    # Core API
    "analyze_file",
    "analyze_image",
    "analyze_svg",
    "analyze_dom",
    "analyze_url",
    "analyze_pdf",
    "analyze_document",
    "add_manual_color",
    "ColorClusterer",
    "ExtractionConfig",
    # Types
    "RGBColor",
    "PaletteEntry",
    "Palette",
    "ExtractionResult",
    "SourceKind",
    # Errors
    "ColorTraceError",
    "InvalidFormat",
    "UnreadableSource",
    "UnsupportedFileType",
    "ExtractionCancelled",
    "ExtractionTimeout",
    # Version
    "__version__",
]
