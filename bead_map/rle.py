# bead_map/rle.py
from __future__ import annotations

"""
Run-length codec for palette-indexed pixel grids.

Wire format: comma-separated "count*value" runs, e.g. "3*0,2*1,1*0" is
[0, 0, 0, 1, 1, 0]. Whitespace around runs and fields is tolerated.

Exports:
  encode(pixels)                               -> str
  decode(rle, expected_length)                 -> list[int]   (raises)
  try_decode(rle, expected_length)             -> DecodeResult
  validate(rle, expected_length, max_index)    -> ValidationResult (never raises)
  decode_grid(rle, width, height)              -> int32 array [H,W]
"""

import re
from itertools import groupby
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .core_types import DecodeResult, IndexGrid, Pixels, ValidationResult
from .errors import BeadMapError, EmptyInputError, FormatError, LengthMismatchError

_INT_FIELD = re.compile(r"-?[0-9]+")
# Far above any real count (128 * 128); keeps int() away from its digit limit.
_MAX_FIELD_DIGITS = 18


def flatten_pixels(pixels: Pixels | Iterable[int]) -> List[int]:
    """Flatten lists, tuples and arrays of any shape (row-major) to ints."""
    if isinstance(pixels, np.ndarray):
        return [int(v) for v in pixels.ravel().tolist()]
    return [int(v) for v in pixels]


def encode(pixels: Pixels | Iterable[int]) -> str:
    """Encode palette indices as "count*value" runs joined by commas."""
    values = flatten_pixels(pixels)
    if not values:
        return ""
    return ",".join(f"{len(list(run))}*{value}" for value, run in groupby(values))


def _parse_field(text: str, run: str) -> int:
    field = text.strip()
    if not _INT_FIELD.fullmatch(field):
        raise FormatError(f"Invalid RLE values in run {run!r}: {field!r} is not an integer")
    if len(field.lstrip("-")) > _MAX_FIELD_DIGITS:
        raise FormatError(f"Invalid RLE values in run {run!r}: too many digits")
    return int(field)


def _parse_runs(rle: str) -> List[Tuple[int, int]]:
    """Parse every run to (count, value). Raises FormatError on the first bad run."""
    runs: List[Tuple[int, int]] = []
    for raw in rle.split(","):
        run = raw.strip()
        parts = run.split("*")
        if len(parts) != 2:
            raise FormatError(f"Invalid RLE run format: {run!r}")
        count = _parse_field(parts[0], run)
        value = _parse_field(parts[1], run)
        if count <= 0:
            raise FormatError(f"Invalid RLE run {run!r}: count must be > 0")
        if value < 0:
            raise FormatError(f"Invalid RLE run {run!r}: palette index must be >= 0")
        runs.append((count, value))
    return runs


def decode(rle: Optional[str], expected_length: int) -> List[int]:
    """
    Decode an RLE string into exactly `expected_length` palette indices.

    Raises:
      EmptyInputError: rle is empty/whitespace while expected_length > 0
      FormatError: a run is malformed, count <= 0 or value < 0
      LengthMismatchError: the runs do not add up to expected_length
    """
    if rle is not None and not isinstance(rle, str):
        raise FormatError(f"RLE data must be a string, got {type(rle).__name__}")
    if rle is None or not rle.strip():
        if expected_length == 0:
            return []
        raise EmptyInputError(expected_length)

    runs = _parse_runs(rle)
    # Totalled before expansion so a bogus count cannot allocate a huge list.
    total = sum(count for count, _value in runs)
    if total != expected_length:
        raise LengthMismatchError(expected_length, total)

    out: List[int] = []
    for count, value in runs:
        out.extend([value] * count)
    return out


def try_decode(rle: Optional[str], expected_length: int) -> DecodeResult:
    """decode() with the outcome returned as a DecodeResult instead of raised."""
    try:
        return DecodeResult(values=decode(rle, expected_length))
    except BeadMapError as exc:
        return DecodeResult(error=exc)


def validate(
    rle: Optional[str], expected_length: int, max_palette_index: int
) -> ValidationResult:
    """
    Check that `rle` decodes to `expected_length` indices in [0, max_palette_index].
    Never raises; every failure is reported through the result.
    """
    result = try_decode(rle, expected_length)
    if result.error is not None:
        return ValidationResult(False, str(result.error))

    for index in result.values or []:
        if index < 0 or index > max_palette_index:
            return ValidationResult(
                False,
                f"Palette index {index} out of range [0, {max_palette_index}]",
            )
    return ValidationResult(True)


def decode_grid(rle: Optional[str], width: int, height: int) -> IndexGrid:
    """Decode to an int32 grid of shape (height, width), row-major."""
    flat = decode(rle, width * height)
    return np.asarray(flat, dtype=np.int32).reshape(height, width)


__all__ = [
    "encode",
    "decode",
    "try_decode",
    "validate",
    "decode_grid",
    "flatten_pixels",
]
