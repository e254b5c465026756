# bead_map/matcher.py
from __future__ import annotations

"""
Nearest reference colour lookup using CIEDE2000.

ColourMatcher is an immutable view of one reference table: entries in table
order, an O(1) code index and the precomputed Lab rows. It is safe to share
between threads.

A process-wide default matcher backs the module-level helpers. It is built
lazily from the configured table on first use, and load_reference_table()
replaces it wholesale under a lock, so readers never observe a half-built
table.
"""

import math
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping, Optional, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .colour_convert import delta_e2000_vec, rgb_from_hex, rgb_to_hex, rgb_to_lab
from .constants import DISTANCE_DECIMALS, MATCH_ALTERNATIVES
from .core_types import ColourMatch, Lab, MatchResult, ReferenceColour
from .errors import EmptyTableError, FormatError
from .palette_data import parse_table, read_table, resolve_table_path
from .utils import debug_log


def round_distance(distance: float, decimals: int = DISTANCE_DECIMALS) -> float:
    """Round half away from zero, e.g. 0.25 -> 0.3 and 2.25 -> 2.3."""
    scale = 10.0**decimals
    return math.copysign(math.floor(abs(distance) * scale + 0.5) / scale, distance)


class ColourMatcher:
    """Immutable reference table with code lookup and CIEDE2000 matching."""

    def __init__(self, entries: Iterable[ReferenceColour]):
        colours = tuple(entries)
        index = {}
        for colour in colours:
            if colour.code in index:
                raise FormatError(f"duplicate colour code {colour.code!r}")
            index[colour.code] = colour

        rgb = np.array([c.rgb for c in colours], dtype=np.float64).reshape(-1, 3)
        lab = rgb_to_lab(rgb)
        lab.setflags(write=False)

        self._colours: Tuple[ReferenceColour, ...] = colours
        self._index: Mapping[str, ReferenceColour] = MappingProxyType(index)
        self._lab: Lab = lab

    @classmethod
    def from_table(cls, entries: Iterable[ReferenceColour]) -> "ColourMatcher":
        return cls(entries)

    @classmethod
    def from_text(cls, text: str) -> "ColourMatcher":
        return cls(parse_table(text))

    @classmethod
    def from_path(cls, path: Optional[Union[str, Path]] = None) -> "ColourMatcher":
        return cls(read_table(path))

    # Lookup

    @property
    def colours(self) -> Tuple[ReferenceColour, ...]:
        return self._colours

    @property
    def lab(self) -> Lab:
        """Read-only Lab rows [N,3] in table order."""
        return self._lab

    def __len__(self) -> int:
        return len(self._colours)

    def __iter__(self) -> Iterator[ReferenceColour]:
        return iter(self._colours)

    def __contains__(self, code: object) -> bool:
        return self.is_valid_code(code)

    def get(self, code: object) -> Optional[ReferenceColour]:
        """Entry for `code`, or None when the code is unknown."""
        if not isinstance(code, str):
            return None
        return self._index.get(code)

    def is_valid_code(self, code: object) -> bool:
        return self.get(code) is not None

    # Matching

    def distances(self, hex_str: str) -> NDArray[np.float64]:
        """Exact CIEDE2000 distance from `hex_str` to every entry, table order."""
        src_lab = rgb_to_lab(rgb_from_hex(hex_str))
        return delta_e2000_vec(src_lab, self._lab)

    def match(self, hex_str: str, alternatives: int = MATCH_ALTERNATIVES) -> MatchResult:
        """
        Rank every entry by CIEDE2000 distance to `hex_str`.

        Ties keep table order. Distances in the result are rounded to one
        decimal; ranking uses the exact values.

        Raises:
          FormatError: hex_str is not 3 or 6 hex digits
          EmptyTableError: the table has no entries
        """
        rgb = rgb_from_hex(hex_str)
        if not self._colours:
            raise EmptyTableError("reference table is empty")

        dist = delta_e2000_vec(rgb_to_lab(rgb), self._lab)
        order = np.argsort(dist, kind="stable")[: max(0, alternatives) + 1]
        ranked: List[ColourMatch] = [
            ColourMatch(self._colours[i], round_distance(float(dist[i])))
            for i in order.tolist()
        ]
        return MatchResult(
            input=rgb_to_hex(rgb), best=ranked[0], alternatives=tuple(ranked[1:])
        )


# Process-wide default

_default: Optional[ColourMatcher] = None
_lock = threading.Lock()


def load_reference_table(
    path: Optional[Union[str, Path]] = None, *, verbose: bool = False
) -> ColourMatcher:
    """
    (Re)load the default reference table and return the new matcher.
    Safe to call repeatedly; each call replaces the previous table.
    """
    global _default
    source = resolve_table_path(path)
    with _lock:
        matcher = ColourMatcher.from_path(source)
        _default = matcher
    if verbose:
        debug_log(f"Loaded {len(matcher)} reference colours from {source}")
    return matcher


def default_matcher() -> ColourMatcher:
    """The default matcher, loading the configured table on first use."""
    global _default
    matcher = _default
    if matcher is None:
        with _lock:
            if _default is None:
                _default = ColourMatcher.from_path(resolve_table_path())
            matcher = _default
    return matcher


def set_default_matcher(matcher: Optional[ColourMatcher]) -> None:
    """Install `matcher` as the default; None forces a lazy reload."""
    global _default
    with _lock:
        _default = matcher


def all_colours() -> Tuple[ReferenceColour, ...]:
    return default_matcher().colours


def get_colour_by_code(code: str) -> Optional[ReferenceColour]:
    return default_matcher().get(code)


def is_valid_colour_code(code: str) -> bool:
    return default_matcher().is_valid_code(code)


def match_colour(hex_str: str) -> MatchResult:
    return default_matcher().match(hex_str)


# Compat aliases

get_color_by_code = get_colour_by_code
is_valid_color_code = is_valid_colour_code
match_color = match_colour


__all__ = [
    "ColourMatcher",
    "round_distance",
    "load_reference_table",
    "default_matcher",
    "set_default_matcher",
    "all_colours",
    "get_colour_by_code",
    "is_valid_colour_code",
    "match_colour",
    "get_color_by_code",
    "is_valid_color_code",
    "match_color",
]
