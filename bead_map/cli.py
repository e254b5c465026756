"""
bead_map CLI
Bead pattern codec and nearest bead colour lookup.

Usage:
  bead-map [--colours PATH] [--debug] COMMAND ...

Commands:
  colours   : list the reference table (optionally one group).
  match     : nearest reference colours for a hex value (CIEDE2000).
  encode    : palette indices -> RLE string.
  decode    : RLE string -> rows of palette indices.
  validate  : check an RLE string against a grid size and palette size.
  check     : run every persistence check on a pattern JSON file.
  stats     : colour usage of a pattern JSON file.
  render    : write a pattern JSON file as PNG (full size or thumbnail).

Pattern JSON: {"width": W, "height": H, "palette": [null, "A1", ...], "data": "RLE"}

Reference table: --colours, else $BEAD_MAP_COLOURS, else the bundled sample.
Exit status: 0 ok, 1 validation failed, 2 error.
"""

from __future__ import annotations

import argparse
import json
import re
import sys
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from bead_map import rle
from bead_map.errors import BeadMapError
from bead_map.matcher import ColourMatcher, default_matcher, load_reference_table
from bead_map.pattern import Pattern, check_pattern
from bead_map.render import render_image, render_thumbnail, save_png
from bead_map.stats import pattern_usage
from bead_map.utils import (
    debug_log,
    error,
    format_seconds_compact,
    log,
    print_banner,
    print_config_line,
    warn,
)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2

# CLI args & small helpers


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with the global options (colours, debug), the chosen
      command and that command's own options.
    """
    parser = argparse.ArgumentParser(
        prog="bead-map",
        description="Bead pattern RLE codec and nearest bead colour lookup.",
    )
    parser.add_argument(
        "--colours", type=Path, default=None, help="Reference table (code<TAB>hex)"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("colours", help="List reference colours")
    p.add_argument("--group", default=None, help="Only codes in this group, e.g. A")
    p.add_argument("--json", action="store_true", help="Output JSON")

    p = sub.add_parser("match", help="Nearest reference colours for a hex value")
    p.add_argument("hex", help="rrggbb or rgb, '#' optional")
    p.add_argument("--alternatives", type=int, default=3, help="Ranked alternatives")
    p.add_argument("--json", action="store_true", help="Output JSON")

    p = sub.add_parser("encode", help="Palette indices to RLE")
    p.add_argument(
        "values",
        nargs="*",
        help="Indices (space/comma separated or a JSON list); stdin when omitted",
    )

    p = sub.add_parser("decode", help="RLE to rows of palette indices")
    p.add_argument("rle", help="RLE string, or - for stdin")
    p.add_argument("--width", type=int, required=True)
    p.add_argument("--height", type=int, required=True)
    p.add_argument("--json", action="store_true", help="Output JSON")

    p = sub.add_parser("validate", help="Validate RLE against grid and palette size")
    p.add_argument("rle", help="RLE string, or - for stdin")
    p.add_argument("--length", type=int, required=True, help="width*height")
    p.add_argument("--max-index", type=int, required=True, help="palette length - 1")
    p.add_argument("--json", action="store_true", help="Output JSON")

    p = sub.add_parser("check", help="Run persistence checks on a pattern file")
    p.add_argument("pattern", type=Path, help="Pattern JSON file")

    p = sub.add_parser("stats", help="Colour usage of a pattern file")
    p.add_argument("pattern", type=Path, help="Pattern JSON file")
    p.add_argument("--json", action="store_true", help="Output JSON")

    p = sub.add_parser("render", help="Render a pattern file to PNG")
    p.add_argument("pattern", type=Path, help="Pattern JSON file")
    p.add_argument("out", type=Path, help="Output PNG path")
    p.add_argument("--cell", type=int, default=8, help="Pixels per cell")
    p.add_argument(
        "--thumbnail",
        type=int,
        default=None,
        metavar="SIZE",
        help="Square thumbnail of SIZE pixels instead of full size",
    )
    return parser.parse_args(argv)


def _read_text_arg(value: str) -> str:
    return sys.stdin.read() if value == "-" else value


def _parse_indices(values: List[str]) -> List[int]:
    text = " ".join(values) if values else sys.stdin.read()
    text = text.strip()
    if text.startswith("["):
        return [int(v) for v in json.loads(text)]
    return [int(tok) for tok in re.split(r"[\s,]+", text) if tok]


def _load_pattern(path: Path) -> Pattern:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise BeadMapError(f"{path}: pattern file must hold a JSON object")
    return Pattern.from_dict(payload)


def _print_json(obj: Any) -> None:
    print(json.dumps(obj, indent=2, ensure_ascii=False), flush=True)


# Commands


def _cmd_colours(args: argparse.Namespace, matcher: ColourMatcher) -> int:
    colours = [c for c in matcher.colours if args.group in (None, c.group)]
    if args.json:
        _print_json([c.to_dict() for c in colours])
        return EXIT_OK
    group = None
    for c in colours:
        if c.group != group:
            group = c.group
            print_banner(f"group {group}")
        log(f"{c.code:<6} #{c.hex}")
    return EXIT_OK


def _cmd_match(args: argparse.Namespace, matcher: ColourMatcher) -> int:
    result = matcher.match(args.hex, alternatives=args.alternatives)
    if args.json:
        _print_json(result.to_dict())
        return EXIT_OK
    log(f"input  {result.input}")
    log(f"best   {result.best.code:<6} #{result.best.hex}  dE={result.best.distance}")
    for alt in result.alternatives:
        log(f"alt    {alt.code:<6} #{alt.hex}  dE={alt.distance}")
    return EXIT_OK


def _cmd_encode(args: argparse.Namespace, matcher: ColourMatcher) -> int:
    try:
        values = _parse_indices(args.values)
    except ValueError as exc:
        raise BeadMapError(f"invalid palette indices: {exc}") from exc
    if any(v < 0 for v in values):
        raise BeadMapError("palette indices must be >= 0")
    log(rle.encode(values))
    return EXIT_OK


def _cmd_decode(args: argparse.Namespace, matcher: ColourMatcher) -> int:
    grid = rle.decode_grid(_read_text_arg(args.rle), args.width, args.height)
    if args.json:
        _print_json(grid.tolist())
        return EXIT_OK
    for row in grid.tolist():
        log(" ".join(str(v) for v in row))
    return EXIT_OK


def _cmd_validate(args: argparse.Namespace, matcher: ColourMatcher) -> int:
    result = rle.validate(_read_text_arg(args.rle), args.length, args.max_index)
    if args.json:
        _print_json(result.to_dict())
    elif result.valid:
        log("valid")
    else:
        log(f"invalid: {result.error}")
    return EXIT_OK if result.valid else EXIT_INVALID


def _cmd_check(args: argparse.Namespace, matcher: ColourMatcher) -> int:
    pattern = _load_pattern(args.pattern)
    try:
        check_pattern(pattern, matcher)
    except BeadMapError as exc:
        log(f"invalid: {exc}")
        return EXIT_INVALID
    log(f"ok: {pattern.width}x{pattern.height}, {len(pattern.palette)} palette slots")
    return EXIT_OK


def _cmd_stats(args: argparse.Namespace, matcher: ColourMatcher) -> int:
    stats = pattern_usage(_load_pattern(args.pattern))
    if args.json:
        _print_json(stats.to_dict())
        return EXIT_OK
    log(f"used {stats.used_count} / {stats.total}")
    for code, count in stats.items:
        log(f"  {code:<6} {count:,}")
    log(f"empty: {stats.empty_count}")
    if stats.unknown_count:
        warn(f"{stats.unknown_count} cells use indices outside the palette")
    return EXIT_OK


def _cmd_render(args: argparse.Namespace, matcher: ColourMatcher) -> int:
    pattern = _load_pattern(args.pattern)
    missing = sorted(
        {c for c in pattern.palette[1:] if isinstance(c, str) and c and c not in matcher}
    )
    if missing:
        warn(f"codes not in the reference table draw black: {', '.join(missing)}")
    if args.thumbnail is not None:
        image = render_thumbnail(pattern, matcher, size=args.thumbnail)
    else:
        image = render_image(pattern, matcher, cell=args.cell)
    out = save_png(args.out, image)
    log(f"wrote {out} ({image.width}x{image.height})")
    return EXIT_OK


_COMMANDS: Dict[str, Callable[[argparse.Namespace, ColourMatcher], int]] = {
    "colours": _cmd_colours,
    "match": _cmd_match,
    "encode": _cmd_encode,
    "decode": _cmd_decode,
    "validate": _cmd_validate,
    "check": _cmd_check,
    "stats": _cmd_stats,
    "render": _cmd_render,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_cli_args(argv)
    t0 = time.perf_counter()
    try:
        if args.colours is not None:
            matcher = load_reference_table(args.colours, verbose=args.debug)
        else:
            matcher = default_matcher()
        if args.debug:
            print_config_line(
                "table", [("Entries", len(matcher)), ("Command", args.command)], True
            )
        code = _COMMANDS[args.command](args, matcher)
    except BeadMapError as exc:
        error(str(exc))
        return EXIT_ERROR
    except (OSError, json.JSONDecodeError) as exc:
        error(str(exc))
        return EXIT_ERROR
    if args.debug:
        debug_log(f"{args.command} done in {format_seconds_compact(time.perf_counter() - t0)}")
    return code


if __name__ == "__main__":
    sys.exit(main())
