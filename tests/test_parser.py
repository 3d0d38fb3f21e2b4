# Copyright (c) 2026 ColorTrace
# SPDX-License-Identifier: MIT

"""Tests for CSS color string parsing."""

import pytest

from colortrace.measure.parser import (
    is_transparent,
    parse_css_color,
    resolve_named_color,
)
from colortrace.schema import RGBColor


class TestFunctionalNotation:

    def test_rgb(self):
        assert parse_css_color("rgb(255, 0, 0)") == RGBColor(255, 0, 0)

    def test_rgba_ignores_alpha(self):
        assert parse_css_color("rgba(0,0,255,0.5)") == RGBColor(0, 0, 255)

    def test_computed_style_spacing(self):
        assert parse_css_color("rgb(57, 65, 200)") == RGBColor(57, 65, 200)

    def test_out_of_range_is_skipped(self):
        assert parse_css_color("rgb(300, 0, 0)") is None


class TestHexNotation:

    def test_six_digit(self):
        assert parse_css_color("#3941C8") == RGBColor(57, 65, 200)

    def test_shorthand(self):
        assert parse_css_color("#0f0") == RGBColor(0, 255, 0)

    def test_malformed_hex_returns_none(self):
        assert parse_css_color("#12G") is None
        assert parse_css_color("#1234") is None


class TestNamedColors:

    @pytest.mark.parametrize("name,expected", [
        ("blue", RGBColor(0, 0, 255)),
        ("navy", RGBColor(0, 0, 128)),
        ("steelblue", RGBColor(70, 130, 180)),
        ("RED", RGBColor(255, 0, 0)),
    ])
    def test_css3_names(self, name, expected):
        assert parse_css_color(name) == expected

    def test_surrounding_whitespace(self):
        assert parse_css_color("  red  ") == RGBColor(255, 0, 0)

    @pytest.mark.parametrize("value", ["notacolor", "none", "currentColor", "url(#grad)"])
    def test_unresolvable_returns_none(self, value):
        assert parse_css_color(value) is None

    def test_default_resolver_rejects_unknown(self):
        assert resolve_named_color("blurple") is None

    def test_injected_resolver(self):
        calls = []

        def resolver(name):
            calls.append(name)
            return RGBColor(1, 2, 3) if name == "brand" else None

        assert parse_css_color("brand", resolver) == RGBColor(1, 2, 3)
        assert parse_css_color("red", resolver) is None
        assert calls == ["brand", "red"]

    def test_resolver_not_consulted_for_rgb_or_hex(self):
        def resolver(name):
            raise AssertionError(f"resolver called with {name!r}")

        assert parse_css_color("rgb(1, 2, 3)", resolver) == RGBColor(1, 2, 3)
        assert parse_css_color("#010203", resolver) == RGBColor(1, 2, 3)


class TestEmptyAndTransparent:

    def test_empty_returns_none(self):
        assert parse_css_color("") is None

    def test_transparent_literals(self):
        assert is_transparent("rgba(0, 0, 0, 0)") is True
        assert is_transparent("transparent") is True

    def test_opaque_is_not_transparent(self):
        assert is_transparent("rgb(0, 0, 0)") is False
        assert is_transparent("rgba(0, 0, 0, 0.5)") is False
