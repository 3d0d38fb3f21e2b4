# Copyright (c) 2026 ColorTrace
# SPDX-License-Identifier: MIT

"""
Extraction settings.

Defaults reproduce the reference behaviour: a 30-unit RGB similarity
threshold, a 400px sampling canvas read at every 5th pixel, and palette
caps of 50 (raster) and 30 (DOM scans).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional


ENV_PREFIX = "COLORTRACE_"


@dataclass(frozen=True)
class ExtractionConfig:
    """Configuration for a single extraction pass."""

    # Euclidean RGB distance below which two colors share a cluster
    # (range 0 to ~441.67)
    similarity_threshold: float = 30.0

    # Longer image side is scaled down to this before sampling
    max_dimension: int = 400

    # Read every Nth pixel of the flattened buffer
    sample_stride: int = 5

    # Pixels with alpha below this are treated as transparent
    min_alpha: int = 128

    # Near-black / near-white suppression (relative luminance, 0-1)
    min_luminance: float = 0.05
    max_luminance: float = 0.95

    # Palette caps per source; None keeps every cluster
    image_palette_cap: Optional[int] = 50
    dom_palette_cap: Optional[int] = 30
    svg_palette_cap: Optional[int] = None

    # Wall-clock budget per extraction in seconds; None = unbounded
    timeout: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate settings."""
        if self.similarity_threshold <= 0:
            raise ValueError(
                f"similarity_threshold must be > 0, got {self.similarity_threshold}"
            )
        if self.max_dimension < 1:
            raise ValueError(f"max_dimension must be >= 1, got {self.max_dimension}")
        if self.sample_stride < 1:
            raise ValueError(f"sample_stride must be >= 1, got {self.sample_stride}")
        if not 0 <= self.min_alpha <= 255:
            raise ValueError(f"min_alpha must be 0-255, got {self.min_alpha}")
        if not 0.0 <= self.min_luminance <= self.max_luminance <= 1.0:
            raise ValueError(
                "Luminance bounds must satisfy 0 <= min <= max <= 1, got "
                f"{self.min_luminance}..{self.max_luminance}"
            )
        for name in ("image_palette_cap", "dom_palette_cap", "svg_palette_cap"):
            cap = getattr(self, name)
            if cap is not None and cap < 1:
                raise ValueError(f"{name} must be >= 1 or None, got {cap}")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be > 0 or None, got {self.timeout}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ExtractionConfig:
        """
        Build a config from ``COLORTRACE_*`` environment variables.

        Unset variables keep their defaults. Caps and the timeout accept
        ``none`` (case-insensitive) to disable them.

        Example::

            COLORTRACE_SIMILARITY_THRESHOLD=20
            COLORTRACE_IMAGE_PALETTE_CAP=none
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        def _get(name: str, cast, default):
            raw = env.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is None:
                return default
            return cast(raw)

        def _optional(cast):
            def _convert(raw: str):
                return None if raw.strip().lower() == "none" else cast(raw)
            return _convert

        return cls(
            similarity_threshold=_get(
                "similarity_threshold", float, defaults.similarity_threshold
            ),
            max_dimension=_get("max_dimension", int, defaults.max_dimension),
            sample_stride=_get("sample_stride", int, defaults.sample_stride),
            min_alpha=_get("min_alpha", int, defaults.min_alpha),
            min_luminance=_get("min_luminance", float, defaults.min_luminance),
            max_luminance=_get("max_luminance", float, defaults.max_luminance),
            image_palette_cap=_get(
                "image_palette_cap", _optional(int), defaults.image_palette_cap
            ),
            dom_palette_cap=_get(
                "dom_palette_cap", _optional(int), defaults.dom_palette_cap
            ),
            svg_palette_cap=_get(
                "svg_palette_cap", _optional(int), defaults.svg_palette_cap
            ),
            timeout=_get("timeout", _optional(float), defaults.timeout),
        )


DEFAULT_CONFIG = ExtractionConfig()
