# Copyright (c) 2026 ColorTrace
# SPDX-License-Identifier: MIT

"""
Greedy single-pass color clustering.

Each observation is compared, in cluster creation order, against the
representative of every existing cluster. The first representative within
the similarity threshold absorbs the observation; if none does, the
observation founds a new cluster and becomes its representative for good.

Properties worth knowing:
- Representatives are first-seen samples, never centroids
- Clusters are appended or incremented, never merged
- Results depend on input order: the same observations in a different
  order can produce different representatives and counts
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable, Optional

from colortrace.errors import ExtractionCancelled, ExtractionTimeout
from colortrace.measure.colorspace import (
    DEFAULT_SIMILARITY_THRESHOLD,
    colors_are_similar,
    rgb_to_hex,
)
from colortrace.schema import Palette, PaletteEntry, RGBColor


logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")


@dataclass(slots=True)
class ColorCluster:
    """
    A similarity group built during one extraction pass.

    Attributes:
        representative: First observation assigned to the group
        count: Observations assigned so far
    """
    representative: RGBColor
    count: int = 1

    @property
    def hex(self) -> str:
        return self.representative.hex


class ExtractionGuard:
    """
    Cooperative cancellation and time budget for one extraction.

    Args:
        cancel: Callable polled between observations; returning True
            aborts with ExtractionCancelled
        timeout: Seconds the extraction may run before ExtractionTimeout
    """

    def __init__(
        self,
        cancel: Optional[Callable[[], bool]] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.cancel = cancel
        self.timeout = timeout
        self.deadline = None if timeout is None else time.monotonic() + timeout

    def check(self) -> None:
        if self.cancel is not None and self.cancel():
            raise ExtractionCancelled("Extraction cancelled")
        if self.deadline is not None and time.monotonic() > self.deadline:
            raise ExtractionTimeout(
                f"Extraction exceeded its {self.timeout:g}s budget"
            )


def format_percentage(count: int, total: int) -> str:
    """
    ``count / total * 100`` as a 2-decimal string.

    Halves round up on the exact binary value of the float, so 12.125
    becomes "12.13".
    """
    if total <= 0:
        raise ValueError(f"Total must be > 0, got {total}")
    share = Decimal(count / total * 100)
    return str(share.quantize(_CENT, rounding=ROUND_HALF_UP))


class ColorClusterer:
    """
    Aggregates RGB observations into a bounded, ranked palette.

    One instance serves one extraction at a time. Adapters create a fresh
    instance per call; ``reset()`` is available for callers that reuse one.

    Example:
        >>> clusterer = ColorClusterer(threshold=30)
        >>> for rgb in observations:
        ...     clusterer.add_observation(rgb)
        >>> palette = clusterer.finalize(limit=50)
    """

    def __init__(self, threshold: float = DEFAULT_SIMILARITY_THRESHOLD) -> None:
        if not threshold > 0:
            raise ValueError(f"Threshold must be > 0, got {threshold}")
        self.threshold = threshold
        self._clusters: dict[str, ColorCluster] = {}
        # Exact value -> cluster it resolved to. Representatives never move
        # and clusters are only appended, so a repeated value always lands
        # in the same cluster the full scan would pick.
        self._resolved: dict[RGBColor, ColorCluster] = {}

    def reset(self) -> None:
        """Discard all clusters."""
        self._clusters.clear()
        self._resolved.clear()

    @property
    def clusters(self) -> tuple[ColorCluster, ...]:
        """Clusters in creation order."""
        return tuple(self._clusters.values())

    @property
    def total_count(self) -> int:
        return sum(c.count for c in self._clusters.values())

    def __len__(self) -> int:
        return len(self._clusters)

    def add_observation(self, rgb: RGBColor) -> ColorCluster:
        """
        Assign one observation to a cluster.

        Returns:
            The cluster that absorbed the observation (new or existing)
        """
        cluster = self._resolved.get(rgb)
        if cluster is None:
            cluster = self._find_similar(rgb)
            if cluster is None:
                cluster = ColorCluster(representative=rgb, count=0)
                self._clusters[rgb_to_hex(rgb.r, rgb.g, rgb.b)] = cluster
            self._resolved[rgb] = cluster

        cluster.count += 1
        return cluster

    def _find_similar(self, rgb: RGBColor) -> Optional[ColorCluster]:
        # First match in creation order wins, not the nearest
        for cluster in self._clusters.values():
            if colors_are_similar(rgb, cluster.representative, self.threshold):
                return cluster
        return None

    def add_observations(
        self,
        observations: Iterable[RGBColor],
        guard: Optional[ExtractionGuard] = None,
    ) -> int:
        """
        Feed an iterable of observations, in order.

        Args:
            observations: RGB observations (may be a lazy generator)
            guard: Checked before each observation

        Returns:
            Number of observations consumed
        """
        n = 0
        for rgb in observations:
            if guard is not None:
                guard.check()
            self.add_observation(rgb)
            n += 1
        return n

    def finalize(self, limit: Optional[int] = None) -> Palette:
        """
        Build the ranked palette.

        Percentages are computed against every observation, then the
        palette is sorted by count (stable, so ties keep creation order)
        and truncated to ``limit`` entries.

        Args:
            limit: Maximum entries to return, None for all

        Returns:
            Palette, most used first. Empty if nothing was observed.
        """
        total = self.total_count
        if total == 0:
            return Palette()

        ranked = sorted(self._clusters.values(), key=lambda c: c.count, reverse=True)
        logger.debug(
            "Finalizing %d clusters from %d observations (limit=%s)",
            len(ranked), total, limit,
        )
        if limit is not None:
            ranked = ranked[:limit]

        return Palette(entries=tuple(
            PaletteEntry(
                rgb=c.representative,
                count=c.count,
                percentage=format_percentage(c.count, total),
            )
            for c in ranked
        ))
