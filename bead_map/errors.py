# bead_map/errors.py
from __future__ import annotations

"""
Error taxonomy for the codec, the colour matcher and the pattern gate.

Every error derives from BeadMapError (a ValueError), so callers at a
boundary can catch one type and report the message.
"""


class BeadMapError(ValueError):
    """Base class for all bead_map errors."""


class FormatError(BeadMapError):
    """Malformed textual input: an RLE run, a hex colour or a table line."""


class EmptyInputError(BeadMapError):
    """RLE string is empty but non-empty pixel data was expected."""

    def __init__(self, expected_length: int):
        super().__init__(
            f"RLE string is empty but expected length is {expected_length}"
        )
        self.expected_length = expected_length


class LengthMismatchError(BeadMapError):
    """Decoded pixel count disagrees with the declared grid size."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"RLE length mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class UnknownColourCodeError(BeadMapError):
    """A palette slot names a code that is not in the reference table."""

    def __init__(self, code: object, slot: int | None = None):
        where = f" (palette slot {slot})" if slot is not None else ""
        super().__init__(
            f"Invalid palette: colour {code!r} not found in reference table{where}"
        )
        self.code = code
        self.slot = slot


class InvalidPatternError(BeadMapError):
    """A pattern failed the checks that gate persistence."""


class EmptyTableError(BeadMapError, LookupError):
    """Colour lookup against a reference table with no entries."""


# Compat aliases

UnknownColorCodeError = UnknownColourCodeError


__all__ = [
    "BeadMapError",
    "FormatError",
    "EmptyInputError",
    "LengthMismatchError",
    "UnknownColourCodeError",
    "UnknownColorCodeError",
    "InvalidPatternError",
    "EmptyTableError",
]
