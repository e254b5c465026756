# bead_map/core_types.py
from __future__ import annotations

"""
Core type aliases and small frozen value objects shared across bead_map.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .errors import BeadMapError

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str
ColourCode = str

Lab = NDArray[np.float64]  # (..., 3) CIE Lab
U8Image = NDArray[np.uint8]  # (H, W, 3)
IndexGrid = NDArray[np.int32]  # (H, W) palette indices

Pixels = Union[Sequence[int], NDArray[np.integer]]
Palette = Sequence[Optional[ColourCode]]

# Value objects


@dataclass(frozen=True)
class ReferenceColour:
    """One entry of the reference table. `hex` is 6 lowercase digits, no '#'."""

    code: ColourCode
    hex: HexStr
    group: str

    @property
    def rgb(self) -> RGBTuple:
        h = self.hex
        return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "hex": self.hex, "group": self.group}


@dataclass(frozen=True)
class ColourMatch:
    """A reference colour with its CIEDE2000 distance (one decimal) to a query."""

    colour: ReferenceColour
    distance: float

    @property
    def code(self) -> ColourCode:
        return self.colour.code

    @property
    def hex(self) -> HexStr:
        return self.colour.hex

    def to_dict(self) -> Dict[str, Any]:
        out = self.colour.to_dict()
        out["distance"] = self.distance
        return out


@dataclass(frozen=True)
class MatchResult:
    """Best match for a query colour plus the next ranked alternatives."""

    input: HexStr  # normalised '#rrggbb'
    best: ColourMatch
    alternatives: Tuple[ColourMatch, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "input": self.input,
            "best": self.best.to_dict(),
            "alternatives": [m.to_dict() for m in self.alternatives],
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of rle.validate(); never carries an exception."""

    valid: bool
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.valid

    def to_dict(self) -> Dict[str, Any]:
        if self.valid:
            return {"valid": True}
        return {"valid": False, "error": self.error}


@dataclass(frozen=True)
class DecodeResult:
    """
    Tagged outcome of rle.try_decode().

    Exactly one of `values` and `error` is set. `error` is one of the codec
    errors (FormatError, EmptyInputError, LengthMismatchError).
    """

    values: Optional[List[int]] = field(default=None)
    error: Optional[BeadMapError] = field(default=None)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> List[int]:
        """Return the decoded values or raise the carried error."""
        if self.error is not None:
            raise self.error
        return list(self.values or [])


__all__ = [
    # aliases
    "RGBTuple",
    "HexStr",
    "ColourCode",
    "Lab",
    "U8Image",
    "IndexGrid",
    "Pixels",
    "Palette",
    # value objects
    "ReferenceColour",
    "ColourMatch",
    "MatchResult",
    "ValidationResult",
    "DecodeResult",
]
