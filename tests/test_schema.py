# Copyright (c) 2026 ColorTrace
# SPDX-License-Identifier: MIT

"""Tests for palette schema types."""

import json

import pytest

from colortrace.schema import (
    ExtractionResult,
    Palette,
    PaletteEntry,
    RGBColor,
    SourceKind,
)


class TestRGBColor:

    def test_hex_is_derived(self):
        assert RGBColor(57, 65, 200).hex == "#3941C8"

    def test_css(self):
        assert RGBColor(57, 65, 200).css == "rgb(57, 65, 200)"

    def test_hashable_and_equal(self):
        assert RGBColor(1, 2, 3) == RGBColor(1, 2, 3)
        assert len({RGBColor(1, 2, 3), RGBColor(1, 2, 3)}) == 1

    def test_immutable(self):
        color = RGBColor(1, 2, 3)
        with pytest.raises(AttributeError):
            color.r = 10

    @pytest.mark.parametrize("channels", [(256, 0, 0), (0, -1, 0), (0, 0, 1000)])
    def test_out_of_range(self, channels):
        with pytest.raises(ValueError):
            RGBColor(*channels)

    @pytest.mark.parametrize("channels", [(1.5, 0, 0), ("1", 0, 0), (True, 0, 0)])
    def test_non_int(self, channels):
        with pytest.raises(TypeError):
            RGBColor(*channels)

    def test_dict_roundtrip(self):
        color = RGBColor(9, 8, 7)
        assert RGBColor.from_dict(color.to_dict()) == color


class TestPaletteEntry:

    def test_to_dict(self):
        entry = PaletteEntry(rgb=RGBColor(57, 65, 200), count=3, percentage="60.00")
        assert entry.to_dict() == {
            "hex": "#3941C8",
            "rgb": {"r": 57, "g": 65, "b": 200},
            "count": 3,
            "percentage": "60.00",
        }

    def test_from_dict_recomputes_hex(self):
        entry = PaletteEntry.from_dict({
            "hex": "#000000",
            "rgb": {"r": 255, "g": 0, "b": 0},
            "count": 1,
            "percentage": "100.00",
        })
        assert entry.hex == "#FF0000"

    def test_count_must_be_positive(self):
        with pytest.raises(ValueError):
            PaletteEntry(rgb=RGBColor(0, 0, 0), count=0, percentage="0.00")


class TestPalette:

    @pytest.fixture
    def palette(self):
        return Palette(entries=(
            PaletteEntry(RGBColor(200, 0, 0), 3, "60.00"),
            PaletteEntry(RGBColor(0, 0, 200), 2, "40.00"),
        ))

    def test_sequence_behaviour(self, palette):
        assert len(palette) == 2
        assert palette[0].hex == "#C80000"
        assert [e.count for e in palette] == [3, 2]
        assert palette.hexes == ("#C80000", "#0000C8")
        assert palette.total_count == 5

    def test_empty_is_falsy(self):
        assert not Palette()

    def test_with_color_prepends(self, palette):
        updated, added = palette.with_color(RGBColor(0, 200, 0))
        assert added is True
        assert updated.hexes == ("#00C800", "#C80000", "#0000C8")
        assert palette.hexes == ("#C80000", "#0000C8")

    def test_with_existing_color(self, palette):
        updated, added = palette.with_color(RGBColor(200, 0, 0))
        assert added is False
        assert updated is palette

    def test_list_roundtrip(self, palette):
        assert Palette.from_list(palette.to_list()) == palette


class TestExtractionResult:

    def test_to_dict_is_json_ready(self):
        result = ExtractionResult(
            palette=Palette(entries=(PaletteEntry(RGBColor(1, 2, 3), 1, "100.00"),)),
            source=SourceKind.IMAGE,
        )
        data = json.loads(json.dumps(result.to_dict()))
        assert data["source"] == "image"
        assert data["colors"][0]["hex"] == "#010203"
        assert "notice" not in data

    def test_notice_included(self):
        result = ExtractionResult(Palette(), SourceKind.PDF, notice="Sample colors")
        assert result.to_dict() == {
            "source": "pdf",
            "colors": [],
            "notice": "Sample colors",
        }
