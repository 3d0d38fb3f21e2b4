# Copyright (c) 2026 ColorTrace
# SPDX-License-Identifier: MIT

"""
Schema definitions for extracted palettes.

All types in this module are immutable (frozen dataclasses).
"""

from colortrace.schema.palette import (
    MANUAL_PERCENTAGE,
    ColorObservation,
    ExtractionResult,
    Palette,
    PaletteEntry,
    RGBColor,
    SourceKind,
)

__all__ = [
    # Core types
    "RGBColor",
    "ColorObservation",
    # Palette types
    "PaletteEntry",
    "Palette",
    "MANUAL_PERCENTAGE",
    # Adapter output
    "SourceKind",
    "ExtractionResult",
]
