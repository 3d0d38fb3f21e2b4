# Copyright (c) 2026 ColorTrace
# SPDX-License-Identifier: MIT

"""
JSON export of a palette.

Produces the downloadable document::

    {
      "exportDate": "2026-01-31T12:00:00.000Z",
      "totalColors": 2,
      "colors": [
        {
          "hex": "#3941C8",
          "rgb": {"r": 57, "g": 65, "b": 200},
          "rgbString": "rgb(57, 65, 200)",
          "usage": "60.00%",
          "name": "Blue"
        }
      ]
    }

The export never modifies palette content; ``name`` is the only derived
field.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Optional

from colortrace.runtime.naming import color_name
from colortrace.schema import Palette, PaletteEntry


def _iso8601(moment: datetime) -> str:
    """UTC timestamp with millisecond precision and a trailing 'Z'."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def _export_color(entry: PaletteEntry) -> dict:
    return {
        "hex": entry.hex,
        "rgb": entry.rgb.to_dict(),
        "rgbString": entry.rgb.css,
        "usage": f"{entry.percentage}%" if entry.percentage else "N/A",
        "name": color_name(entry.rgb),
    }


def to_export_dict(
    palette: Palette,
    *,
    export_date: Optional[datetime] = None,
) -> dict:
    """
    Build the export document for a palette.

    Args:
        palette: Palette to export
        export_date: Timestamp to record (default: now, UTC)

    Raises:
        ValueError: if the palette is empty (nothing to export)
    """
    if not palette:
        raise ValueError("No colors to export")

    moment = export_date or datetime.now(timezone.utc)
    return {
        "exportDate": _iso8601(moment),
        "totalColors": len(palette),
        "colors": [_export_color(entry) for entry in palette],
    }


def to_export_json(
    palette: Palette,
    *,
    export_date: Optional[datetime] = None,
    indent: Optional[int] = 2,
) -> str:
    """Serialize the export document to a JSON string."""
    return json.dumps(to_export_dict(palette, export_date=export_date), indent=indent)


def export_filename(moment: Optional[datetime] = None) -> str:
    """Download name like "colortrace-export-1769860800000.json"."""
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    millis = int(moment.timestamp() * 1000)
    return f"colortrace-export-{millis}.json"
