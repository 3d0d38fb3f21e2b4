# Copyright (c) 2026 ColorTrace
# SPDX-License-Identifier: MIT

"""
Extraction core for ColorTrace.

Sampling, parsing and clustering of colors from images, SVG markup and
computed-style snapshots. No rendering engine is required.
"""

from colortrace.measure.clustering import ColorCluster, ColorClusterer, ExtractionGuard
from colortrace.measure.extract import (
    add_manual_color,
    analyze_document,
    analyze_dom,
    analyze_file,
    analyze_image,
    analyze_pdf,
    analyze_svg,
    analyze_url,
)

__all__ = [
    "analyze_file",
    "analyze_image",
    "analyze_svg",
    "analyze_dom",
    "analyze_url",
    "analyze_pdf",
    "analyze_document",
    "add_manual_color",
    "ColorClusterer",
    "ColorCluster",
    "ExtractionGuard",
]
