# Copyright (c) 2026 ColorTrace
# SPDX-License-Identifier: MIT

"""
Delivery helpers for extracted palettes.

Export serialization and cosmetic color naming. Nothing here changes
what was measured.
"""

from colortrace.runtime.export import export_filename, to_export_dict, to_export_json
from colortrace.runtime.naming import color_brightness, color_name

__all__ = [
    "to_export_dict",
    "to_export_json",
    "export_filename",
    "color_name",
    "color_brightness",
]
