# Copyright (c) 2026 ColorTrace
# SPDX-License-Identifier: MIT

"""
CSS color string parsing.

Turns the color values found in SVG attributes and computed styles into
canonical RGBColor. Resolution order:

1. ``rgb(...)`` / ``rgba(...)``: the three leading integers (alpha ignored)
2. ``#hex``: 3- or 6-digit hex
3. Anything else is a named/keyword color, handed to a resolver

The resolver is the one capability the core borrows from its host. The
default looks names up in the CSS3 table shipped with ``webcolors``; a
browser-backed host can inject its own.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional

import webcolors

from colortrace.errors import InvalidFormat
from colortrace.measure.colorspace import hex_to_rgb
from colortrace.schema import RGBColor


logger = logging.getLogger(__name__)

NamedColorResolver = Callable[[str], Optional[RGBColor]]

# Literal values that adapters treat as "no color"
TRANSPARENT_VALUES = frozenset({"rgba(0, 0, 0, 0)", "transparent"})

_RGB_FUNC_RE = re.compile(r"rgba?\((\d+),\s*(\d+),\s*(\d+)")


def resolve_named_color(name: str) -> Optional[RGBColor]:
    """
    Resolve a CSS named color ("red", "steelblue") to RGB.

    Returns None for keywords that are not colors in the CSS3 table,
    including "transparent", "none" and "currentColor".
    """
    try:
        rgb = webcolors.name_to_rgb(name.strip())
    except ValueError:
        return None
    return RGBColor(r=int(rgb.red), g=int(rgb.green), b=int(rgb.blue))


def is_transparent(value: str) -> bool:
    """True for the computed-style spellings of a fully transparent color."""
    return value in TRANSPARENT_VALUES


def parse_css_color(
    value: str,
    resolve_named: NamedColorResolver = resolve_named_color,
) -> Optional[RGBColor]:
    """
    Parse a CSS color string into RGB.

    Args:
        value: CSS color, e.g. "rgb(255, 0, 0)", "rgba(0,0,255,0.5)",
            "#F00", "#3941C8", "navy"
        resolve_named: Resolver for named/keyword colors

    Returns:
        RGBColor, or None when the value is not a parseable color.
        Callers skip None rather than aborting.
    """
    if not value:
        return None
    value = value.strip()

    match = _RGB_FUNC_RE.search(value)
    if match:
        channels = [int(group) for group in match.groups()]
        if any(c > 255 for c in channels):
            logger.debug("Skipping out-of-range color %r", value)
            return None
        return RGBColor(*channels)

    if value.startswith("#"):
        try:
            return hex_to_rgb(value)
        except InvalidFormat:
            logger.debug("Skipping malformed hex color %r", value)
            return None

    resolved = resolve_named(value)
    if resolved is None:
        logger.debug("Could not resolve color keyword %r", value)
    return resolved
