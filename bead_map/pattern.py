# bead_map/pattern.py
from __future__ import annotations

"""
Bead pattern model and the checks that gate persistence.

A pattern is a width x height grid of palette indices stored as an RLE
string, plus a palette whose slot 0 means "unpainted". Before a pattern is
written, the storage layer calls check_pattern() (or update_pattern() for a
partial update); both raise a BeadMapError describing the first problem.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .constants import MAX_GRID_SIZE
from .core_types import ColourCode, IndexGrid, Palette, Pixels
from .errors import InvalidPatternError, LengthMismatchError, UnknownColourCodeError
from .matcher import ColourMatcher, default_matcher
from .rle import decode, decode_grid, encode, validate


@dataclass(frozen=True)
class Pattern:
    """Grid dimensions, palette slots and RLE pixel data."""

    width: int
    height: int
    palette: Tuple[Optional[ColourCode], ...]
    data: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "palette", tuple(self.palette))

    @property
    def size(self) -> int:
        return self.width * self.height

    def pixels(self) -> List[int]:
        """Flat row-major palette indices."""
        return decode(self.data, self.size)

    def grid(self) -> IndexGrid:
        """Palette indices as an int32 array of shape (height, width)."""
        return decode_grid(self.data, self.width, self.height)

    @classmethod
    def from_pixels(
        cls, width: int, height: int, palette: Palette, pixels: Pixels
    ) -> "Pattern":
        """Build a pattern from flat (or (H, W)) indices; length must be width*height."""
        flat = np.asarray(pixels, dtype=np.int64).ravel()
        if flat.size != width * height:
            raise LengthMismatchError(width * height, int(flat.size))
        return cls(width, height, tuple(palette), encode(flat))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "palette": list(self.palette),
            "data": self.data,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Pattern":
        """Build from the JSON shape; raises InvalidPatternError on missing or mistyped fields."""
        try:
            width, height = payload["width"], payload["height"]
            palette, data = payload["palette"], payload["data"]
        except KeyError as exc:
            raise InvalidPatternError(f"pattern is missing field {exc.args[0]!r}") from exc
        if not isinstance(palette, (list, tuple)):
            raise InvalidPatternError(
                f"palette must be a list, got {type(palette).__name__}"
            )
        if data is not None and not isinstance(data, str):
            raise InvalidPatternError(
                f"data must be an RLE string, got {type(data).__name__}"
            )
        return cls(width=width, height=height, palette=tuple(palette), data=data)


# Checks


def validate_dimensions(width: int, height: int) -> None:
    """Width and height must be ints in [1, MAX_GRID_SIZE]."""
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidPatternError(f"{name} must be an integer, got {value!r}")
        if not 1 <= value <= MAX_GRID_SIZE:
            raise InvalidPatternError(
                f"{name} must be between 1 and {MAX_GRID_SIZE}, got {value}"
            )


def validate_palette(
    palette: Sequence[Optional[ColourCode]], matcher: Optional[ColourMatcher] = None
) -> None:
    """
    Every slot except an empty slot 0 must name a reference colour.

    Raises:
      InvalidPatternError: the palette has no slots
      UnknownColourCodeError: a slot names an unknown code
    """
    if not palette:
        raise InvalidPatternError("Invalid palette: at least one slot is required")
    table = matcher if matcher is not None else default_matcher()
    for slot, code in enumerate(palette):
        if slot == 0 and code in (None, ""):
            continue
        if not table.is_valid_code(code):
            raise UnknownColourCodeError(code, slot=slot)


def validate_pattern_data(
    data: Optional[str], width: int, height: int, palette_length: int
) -> None:
    """RLE data must cover width*height cells and only use palette slots."""
    result = validate(data, width * height, palette_length - 1)
    if not result.valid:
        raise InvalidPatternError(f"Invalid RLE data: {result.error}")


def check_pattern(pattern: Pattern, matcher: Optional[ColourMatcher] = None) -> Pattern:
    """Run every check on a full pattern and return it unchanged."""
    validate_dimensions(pattern.width, pattern.height)
    validate_palette(pattern.palette, matcher)
    validate_pattern_data(pattern.data, pattern.width, pattern.height, len(pattern.palette))
    return pattern


def update_pattern(
    pattern: Pattern, matcher: Optional[ColourMatcher] = None, **changes: Any
) -> Pattern:
    """
    Merge `changes` (any of width, height, palette, data) into `pattern`.

    None-valued changes are ignored. The palette is re-checked only when it
    changed; the data is re-checked when data, a dimension or the palette
    changed.
    """
    changes = {k: v for k, v in changes.items() if v is not None}
    if "palette" in changes:
        changes["palette"] = tuple(changes["palette"])
    merged = dataclasses.replace(pattern, **changes)

    if "width" in changes or "height" in changes:
        validate_dimensions(merged.width, merged.height)
    if "palette" in changes:
        validate_palette(merged.palette, matcher)
    if changes.keys() & {"data", "width", "height", "palette"}:
        validate_pattern_data(merged.data, merged.width, merged.height, len(merged.palette))
    return merged


__all__ = [
    "Pattern",
    "validate_dimensions",
    "validate_palette",
    "validate_pattern_data",
    "check_pattern",
    "update_pattern",
]
