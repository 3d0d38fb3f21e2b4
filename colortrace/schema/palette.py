# Copyright (c) 2026 ColorTrace
# SPDX-License-Identifier: MIT

"""
Palette schema: the values an extraction produces.

Design principles:
- Immutable: RGBColor, PaletteEntry, Palette and ExtractionResult are
  frozen dataclasses
- Single source of truth: hex strings are always derived from ``rgb``,
  never stored alongside it
- Serializable: ``to_dict()`` output is JSON-ready

Percentages are carried as fixed 2-decimal strings ("60.00"), not floats,
so every consumer renders the same value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional


MANUAL_PERCENTAGE = "100.00"


# =============================================================================
# Core Color Type
# =============================================================================


@dataclass(frozen=True, slots=True)
class RGBColor:
    """
    An sRGB color with integer channels.

    Attributes:
        r: Red channel, 0-255
        g: Green channel, 0-255
        b: Blue channel, 0-255
    """
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        """Validate channel values."""
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"Channel {name} must be int, got {type(value).__name__}")
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name} must be 0-255, got {value}")

    @property
    def hex(self) -> str:
        """Canonical uppercase hex string like "#3941C8"."""
        from colortrace.measure.colorspace import rgb_to_hex
        return rgb_to_hex(self.r, self.g, self.b)

    @property
    def css(self) -> str:
        """CSS functional notation, e.g. "rgb(57, 65, 200)"."""
        return f"rgb({self.r}, {self.g}, {self.b})"

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"r": self.r, "g": self.g, "b": self.b}

    @classmethod
    def from_dict(cls, data: dict) -> RGBColor:
        """Deserialize from dictionary."""
        return cls(r=int(data["r"]), g=int(data["g"]), b=int(data["b"]))


# A single raw sample from a source adapter. Weight is implicitly 1.
ColorObservation = RGBColor


# =============================================================================
# Palette Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class PaletteEntry:
    """
    One ranked color in a palette.

    Attributes:
        rgb: Representative color of the cluster
        count: Observations assigned to the cluster
        percentage: Share of all observations, 2-decimal string
    """
    rgb: RGBColor
    count: int
    percentage: str

    def __post_init__(self) -> None:
        """Validate entry values."""
        if self.count < 1:
            raise ValueError(f"Count must be >= 1, got {self.count}")

    @property
    def hex(self) -> str:
        return self.rgb.hex

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "hex": self.hex,
            "rgb": self.rgb.to_dict(),
            "count": self.count,
            "percentage": self.percentage,
        }

    @classmethod
    def from_dict(cls, data: dict) -> PaletteEntry:
        """
        Deserialize from dictionary.

        The ``hex`` key is ignored; hex is always recomputed from ``rgb``.
        """
        return cls(
            rgb=RGBColor.from_dict(data["rgb"]),
            count=int(data["count"]),
            percentage=str(data["percentage"]),
        )


@dataclass(frozen=True, slots=True)
class Palette:
    """
    Ordered palette, most used color first.

    Behaves like a read-only sequence of PaletteEntry.
    """
    entries: tuple[PaletteEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[PaletteEntry]:
        return iter(self.entries)

    def __getitem__(self, index):
        return self.entries[index]

    def __bool__(self) -> bool:
        return bool(self.entries)

    @property
    def total_count(self) -> int:
        return sum(entry.count for entry in self.entries)

    @property
    def hexes(self) -> tuple[str, ...]:
        return tuple(entry.hex for entry in self.entries)

    def with_color(self, rgb: RGBColor) -> tuple[Palette, bool]:
        """
        Prepend a manually chosen color.

        The color bypasses clustering and is inserted as a one-off entry
        with count 1 and "100.00" usage. Deduplication is by exact hex
        string only: a visually similar color with a different hex is
        still added.

        Returns:
            (palette, added). When the hex is already present the same
            palette is returned with ``added=False``.
        """
        if rgb.hex in self.hexes:
            return self, False
        entry = PaletteEntry(rgb=rgb, count=1, percentage=MANUAL_PERCENTAGE)
        return Palette(entries=(entry,) + self.entries), True

    def to_list(self) -> list[dict]:
        """Serialize to a list of entry dictionaries."""
        return [entry.to_dict() for entry in self.entries]

    @classmethod
    def from_list(cls, data: list[dict]) -> Palette:
        """Deserialize from a list of entry dictionaries."""
        return cls(entries=tuple(PaletteEntry.from_dict(d) for d in data))


# =============================================================================
# Extraction Result
# =============================================================================


class SourceKind(Enum):
    """Which adapter produced a palette."""
    IMAGE = "image"
    SVG = "svg"
    DOM = "dom"
    URL = "url"
    PDF = "pdf"
    DOCUMENT = "document"
    MANUAL = "manual"


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """
    Palette plus the context the presentation layer needs to show it.

    Attributes:
        palette: Ranked colors
        source: Adapter that produced the palette
        notice: User-facing capability notice (placeholder palettes,
            degraded URL mode), None when the extraction was exact
    """
    palette: Palette
    source: SourceKind
    notice: Optional[str] = field(default=None)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        result = {
            "source": self.source.value,
            "colors": self.palette.to_list(),
        }
        if self.notice is not None:
            result["notice"] = self.notice
        return result
