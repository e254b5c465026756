# bead_map/palette_data.py
from __future__ import annotations

"""
Reference table parsing and location.

Table format: UTF-8 text, one '<code>\\t<hex>' entry per line, blank lines
skipped, no header row.

Exports:
  parse_table(text)          -> list[ReferenceColour]
  read_table(path)           -> list[ReferenceColour]
  resolve_table_path(path)   -> Path   (argument, then $BEAD_MAP_COLOURS, then bundled)
  DEFAULT_TABLE_PATH
"""

import os
from pathlib import Path
from typing import List, Optional, Set, Union

from .colour_convert import rgb_from_hex, rgb_to_hex
from .constants import DEFAULT_TABLE_PATH, TABLE_ENV_VAR
from .core_types import ReferenceColour
from .errors import FormatError


def _parse_line(line: str, line_no: int) -> ReferenceColour:
    fields = line.split("\t")
    if len(fields) != 2:
        raise FormatError(
            f"reference table line {line_no}: expected '<code>\\t<hex>', got {line!r}"
        )
    code, hex_field = fields[0].strip(), fields[1].strip()
    if not code:
        raise FormatError(f"reference table line {line_no}: empty colour code")
    try:
        rgb = rgb_from_hex(hex_field)
    except FormatError as exc:
        raise FormatError(f"reference table line {line_no}: {exc}") from exc
    return ReferenceColour(code=code, hex=rgb_to_hex(rgb, prefix=""), group=code[0])


def parse_table(text: str) -> List[ReferenceColour]:
    """
    Parse reference table text into entries, in file order.
    Raises FormatError for a malformed line or a duplicate code.
    """
    entries: List[ReferenceColour] = []
    seen: Set[str] = set()
    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        entry = _parse_line(line, line_no)
        if entry.code in seen:
            raise FormatError(
                f"reference table line {line_no}: duplicate colour code {entry.code!r}"
            )
        seen.add(entry.code)
        entries.append(entry)
    return entries


def resolve_table_path(path: Optional[Union[str, Path]] = None) -> Path:
    """Explicit path first, then $BEAD_MAP_COLOURS, then the bundled table."""
    if path:
        return Path(path)
    env_path = os.environ.get(TABLE_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_TABLE_PATH


def read_table(path: Optional[Union[str, Path]] = None) -> List[ReferenceColour]:
    """Read and parse the reference table at `path` (see resolve_table_path)."""
    return parse_table(resolve_table_path(path).read_text(encoding="utf-8"))


__all__ = [
    "parse_table",
    "read_table",
    "resolve_table_path",
    "DEFAULT_TABLE_PATH",
]
