# bead_map/__init__.py
"""
bead_map package.

Purpose:
  Compact storage for bead patterns (palette-indexed pixel grids) and
  nearest bead colour lookup against a fixed reference table. See cli.py for
  the command-line front end.

Public API:
  rle            : run-length codec (encode, decode, try_decode, validate).
  colour_convert : hex parsing, sRGB -> Lab, CIEDE2000.
  palette_data   : reference table parsing (parse_table, read_table).
  matcher        : ColourMatcher and the process-wide default table.
  pattern        : Pattern model and persistence checks.
  stats          : colour usage statistics.
  render         : PNG rendering and thumbnails.
  errors         : FormatError, EmptyInputError, LengthMismatchError, ...

Quick start:
  from bead_map import encode, decode, validate, match_colour
  from bead_map.matcher import ColourMatcher
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import colour_convert
from . import core_types
from . import errors
from . import matcher
from . import palette_data
from . import pattern
from . import rle
from . import utils

from .colour_convert import ciede2000, rgb_from_hex, rgb_to_lab  # noqa: E402,F401
from .core_types import MatchResult, ReferenceColour, ValidationResult  # noqa: E402,F401
from .errors import (  # noqa: E402,F401
    BeadMapError,
    EmptyInputError,
    FormatError,
    LengthMismatchError,
    UnknownColourCodeError,
)
from .matcher import (  # noqa: E402,F401
    ColourMatcher,
    get_colour_by_code,
    is_valid_colour_code,
    load_reference_table,
    match_colour,
)
from .palette_data import parse_table  # noqa: E402,F401
from .rle import decode, encode, try_decode, validate  # noqa: E402,F401

__all__ = [
    "__version__",
    "colour_convert",
    "core_types",
    "errors",
    "matcher",
    "palette_data",
    "pattern",
    "rle",
    "utils",
    "ciede2000",
    "rgb_from_hex",
    "rgb_to_lab",
    "MatchResult",
    "ReferenceColour",
    "ValidationResult",
    "BeadMapError",
    "EmptyInputError",
    "FormatError",
    "LengthMismatchError",
    "UnknownColourCodeError",
    "ColourMatcher",
    "get_colour_by_code",
    "is_valid_colour_code",
    "load_reference_table",
    "match_colour",
    "parse_table",
    "decode",
    "encode",
    "try_decode",
    "validate",
]
