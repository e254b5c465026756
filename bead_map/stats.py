# bead_map/stats.py
from __future__ import annotations

"""
Colour usage statistics for a pattern: how many cells use each bead code.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .constants import EMPTY_INDEX
from .core_types import ColourCode, Palette, Pixels
from .pattern import Pattern, validate_dimensions
from .rle import flatten_pixels


@dataclass(frozen=True)
class UsageStats:
    """Per-code cell counts, sorted by count descending then code ascending."""

    items: List[Tuple[ColourCode, int]] = field(default_factory=list)
    total: int = 0
    empty_count: int = 0
    unknown_count: int = 0

    @property
    def used_count(self) -> int:
        return max(0, self.total - self.empty_count - self.unknown_count)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [{"code": code, "count": count} for code, count in self.items],
            "total": self.total,
            "emptyCount": self.empty_count,
            "unknownCount": self.unknown_count,
        }


def usage_stats(pixels: Pixels, palette: Palette) -> UsageStats:
    """
    Count cells per palette code.

    Index 0 and slots holding None/"" count as empty; an index outside the
    palette counts as unknown.
    """
    values = flatten_pixels(pixels)
    counts: Counter = Counter()
    empty = unknown = 0
    for index in values:
        if index == EMPTY_INDEX:
            empty += 1
            continue
        if index < 0 or index >= len(palette):
            unknown += 1
            continue
        code = palette[index]
        if not code:
            empty += 1
            continue
        counts[code] += 1

    items = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return UsageStats(items, len(values), empty, unknown)


def pattern_usage(pattern: Pattern) -> UsageStats:
    """usage_stats() over a pattern's decoded pixels."""
    validate_dimensions(pattern.width, pattern.height)
    return usage_stats(pattern.pixels(), pattern.palette)


__all__ = ["UsageStats", "usage_stats", "pattern_usage"]
