# Copyright (c) 2026 ColorTrace
# SPDX-License-Identifier: MIT

"""Tests for palette export and color naming."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from colortrace.runtime import (
    color_brightness,
    color_name,
    export_filename,
    to_export_dict,
    to_export_json,
)
from colortrace.schema import Palette, PaletteEntry, RGBColor


EXPORT_DATE = datetime(2026, 1, 31, 12, 0, 0, 123456, tzinfo=timezone.utc)


@pytest.fixture
def palette():
    return Palette(entries=(
        PaletteEntry(RGBColor(30, 60, 220), 3, "60.00"),
        PaletteEntry(RGBColor(250, 20, 20), 2, "40.00"),
    ))


class TestExportDocument:

    def test_structure(self, palette):
        doc = to_export_dict(palette, export_date=EXPORT_DATE)
        assert doc["exportDate"] == "2026-01-31T12:00:00.123Z"
        assert doc["totalColors"] == 2
        assert doc["colors"][0] == {
            "hex": "#1E3CDC",
            "rgb": {"r": 30, "g": 60, "b": 220},
            "rgbString": "rgb(30, 60, 220)",
            "usage": "60.00%",
            "name": "Blue",
        }
        assert doc["colors"][1]["name"] == "Red"

    def test_non_utc_date_is_converted(self, palette):
        local = datetime(2026, 1, 31, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        doc = to_export_dict(palette, export_date=local)
        assert doc["exportDate"] == "2026-01-31T12:00:00.000Z"

    def test_default_date_is_utc(self, palette):
        assert to_export_dict(palette)["exportDate"].endswith("Z")

    def test_empty_palette_raises(self):
        with pytest.raises(ValueError, match="No colors"):
            to_export_dict(Palette())

    def test_palette_is_not_modified(self, palette):
        before = palette.to_list()
        to_export_dict(palette, export_date=EXPORT_DATE)
        assert palette.to_list() == before

    def test_json(self, palette):
        text = to_export_json(palette, export_date=EXPORT_DATE)
        assert text.startswith("{\n  ")
        assert json.loads(text) == to_export_dict(palette, export_date=EXPORT_DATE)

    def test_filename(self):
        moment = datetime(2026, 1, 31, 12, 0, tzinfo=timezone.utc)
        assert export_filename(moment) == "colortrace-export-1769860800000.json"


class TestColorName:

    @pytest.mark.parametrize("rgb,name", [
        ((255, 0, 0), "Red"),
        ((0, 255, 0), "Green"),
        ((0, 0, 255), "Blue"),
        ((255, 255, 0), "Yellow"),
        ((255, 0, 255), "Magenta"),
        ((0, 255, 255), "Cyan"),
        ((255, 255, 255), "White"),
        ((10, 10, 10), "Black"),
        ((128, 128, 128), "Gray"),
        ((250, 128, 0), "Orange"),
        ((128, 0, 200), "Purple"),
        ((220, 200, 150), "Beige"),
        ((0, 128, 128), "Teal"),
        ((120, 60, 30), "Mixed"),
    ])
    def test_rules(self, rgb, name):
        assert color_name(RGBColor(*rgb)) == name


class TestColorBrightness:

    def test_light(self):
        assert color_brightness(RGBColor(255, 255, 255)) == "light"
        assert color_brightness(RGBColor(255, 255, 0)) == "light"

    def test_dark(self):
        assert color_brightness(RGBColor(0, 0, 0)) == "dark"
        assert color_brightness(RGBColor(0, 0, 255)) == "dark"
