# Copyright (c) 2026 ColorTrace
# SPDX-License-Identifier: MIT

"""
RGB color utilities.

Hex conversion, WCAG relative luminance and Euclidean RGB distance.

References:
- WCAG 2.x relative luminance:
  https://www.w3.org/TR/WCAG21/#dfn-relative-luminance
"""

from __future__ import annotations

import math
import re

import numpy as np
from numpy.typing import NDArray

from colortrace.errors import InvalidFormat
from colortrace.schema import RGBColor


DEFAULT_SIMILARITY_THRESHOLD = 30.0

# sqrt(3 * 255^2)
MAX_DISTANCE = math.sqrt(3 * 255 ** 2)

_HEX_RE = re.compile(r"#?([0-9A-Fa-f]{6}|[0-9A-Fa-f]{3})")

# WCAG coefficients
_LUMA_WEIGHTS = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)
_LINEAR_KNEE = 0.03928


# =============================================================================
# Hex ↔ RGB
# =============================================================================


def _channel_to_byte(value: float) -> int:
    """Round half-up, then clamp into [0, 255]."""
    rounded = math.floor(float(value) + 0.5)
    return min(255, max(0, rounded))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """
    Convert RGB channels to an uppercase hex string.

    Channels are rounded to the nearest integer (halves round up) and
    clamped to [0, 255], so out-of-range input still yields a well-formed
    "#RRGGBB" string.

    Returns:
        Hex string like "#3941C8"
    """
    return "#{:02X}{:02X}{:02X}".format(
        _channel_to_byte(r), _channel_to_byte(g), _channel_to_byte(b)
    )


def is_valid_hex(value: str) -> bool:
    """True if value is 3 or 6 hex digits with an optional leading '#'."""
    if not isinstance(value, str):
        return False
    return _HEX_RE.fullmatch(value) is not None


def hex_to_rgb(hex_color: str) -> RGBColor:
    """
    Convert a hex color string to RGB.

    Args:
        hex_color: "#3941C8", "3941C8", or 3-digit shorthand "#F0A"
            (each digit doubled, so "F0A" -> "FF00AA")

    Raises:
        InvalidFormat: if the digits do not form a 3- or 6-digit hex color
    """
    if not isinstance(hex_color, str):
        raise InvalidFormat(f"Hex color must be a string, got {type(hex_color).__name__}")

    digits = hex_color[1:] if hex_color.startswith("#") else hex_color
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)

    if len(digits) != 6 or not is_valid_hex(digits):
        raise InvalidFormat(f"Invalid hex color: {hex_color!r}")

    return RGBColor(
        r=int(digits[0:2], 16),
        g=int(digits[2:4], 16),
        b=int(digits[4:6], 16),
    )


# =============================================================================
# Luminance
# =============================================================================


def relative_luminance(r: float, g: float, b: float) -> float:
    """
    WCAG relative luminance of an sRGB color.

    Each channel is normalized to [0, 1] and linearized:
    - For values <= 0.03928: c / 12.92
    - Otherwise: ((c + 0.055) / 1.055) ^ 2.4

    Returns:
        Luminance in [0, 1] (0 = black, 1 = white)
    """
    def linearize(c: float) -> float:
        c = c / 255.0
        return c / 12.92 if c <= _LINEAR_KNEE else ((c + 0.055) / 1.055) ** 2.4

    return (
        0.2126 * linearize(r)
        + 0.7152 * linearize(g)
        + 0.0722 * linearize(b)
    )


def relative_luminance_batch(pixels: NDArray) -> NDArray[np.float64]:
    """
    Vectorized relative luminance.

    Args:
        pixels: Array of shape (..., 3) with RGB values [0, 255]

    Returns:
        Array of shape (...) with luminance values
    """
    srgb = np.asarray(pixels, dtype=np.float64) / 255.0
    linear = np.where(
        srgb <= _LINEAR_KNEE,
        srgb / 12.92,
        np.power((srgb + 0.055) / 1.055, 2.4),
    )
    return linear @ _LUMA_WEIGHTS


# =============================================================================
# Distance
# =============================================================================


def color_distance(a: RGBColor, b: RGBColor) -> float:
    """
    Euclidean distance in RGB space.

    Range is [0, ~441.67]; 0 means identical.
    """
    return math.sqrt(
        (a.r - b.r) ** 2 + (a.g - b.g) ** 2 + (a.b - b.b) ** 2
    )


def colors_are_similar(
    a: RGBColor,
    b: RGBColor,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> bool:
    """
    True if the colors are closer than ``threshold``.

    The comparison is strict: a distance exactly equal to the threshold
    is NOT similar.
    """
    return color_distance(a, b) < threshold
