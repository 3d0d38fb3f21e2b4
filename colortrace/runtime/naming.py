# Copyright (c) 2026 ColorTrace
# SPDX-License-Identifier: MIT

"""
Coarse, rule-based color names for exports.

Cosmetic only: names label exported colors and play no part in extraction.
Rules are checked top to bottom and the first match wins, so an RGB value
can only ever get one name.
"""

from __future__ import annotations

from colortrace.measure.colorspace import relative_luminance
from colortrace.schema import RGBColor


def color_name(rgb: RGBColor) -> str:
    """
    Approximate human name for a color.

    Returns one of Red, Green, Blue, Yellow, Magenta, Cyan, White, Black,
    Gray, Orange, Purple, Beige, Teal, or "Mixed" when no rule matches.
    """
    r, g, b = rgb.r, rgb.g, rgb.b

    if r > 200 and g < 100 and b < 100:
        return "Red"
    if r < 100 and g > 200 and b < 100:
        return "Green"
    if r < 100 and g < 100 and b > 200:
        return "Blue"
    if r > 200 and g > 200 and b < 100:
        return "Yellow"
    if r > 200 and g < 100 and b > 200:
        return "Magenta"
    if r < 100 and g > 200 and b > 200:
        return "Cyan"
    if r > 200 and g > 200 and b > 200:
        return "White"
    if r < 55 and g < 55 and b < 55:
        return "Black"
    if abs(r - g) < 30 and abs(g - b) < 30:
        return "Gray"
    if r > 150 and g > 100 and b < 100:
        return "Orange"
    if r > 100 and g < 100 and b > 150:
        return "Purple"
    if r > 150 and g > 150 and b > 100:
        return "Beige"
    if r < 100 and g > 100 and b > 100:
        return "Teal"

    return "Mixed"


def color_brightness(rgb: RGBColor) -> str:
    """"light" if relative luminance exceeds 0.5, else "dark"."""
    return "light" if relative_luminance(rgb.r, rgb.g, rgb.b) > 0.5 else "dark"
