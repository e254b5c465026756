# bead_map/render.py
from __future__ import annotations

"""
Render a pattern to RGB pixels and PNG images (Pillow).

Exports:
  pattern_to_rgb(pattern, matcher=None, cell=1)      -> uint8 [H*cell, W*cell, 3]
  render_image(pattern, matcher=None, cell=1)        -> PIL.Image
  render_thumbnail(pattern, matcher=None, size=120)  -> PIL.Image (size x size)
  save_png(path, image)                              -> Path

Empty cells draw as a light checkerboard; codes missing from the reference
table draw black.
"""

from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from PIL import Image

from .colour_convert import rgb_from_hex
from .constants import (
    EMPTY_CELL_DARK,
    EMPTY_CELL_LIGHT,
    EMPTY_INDEX,
    THUMBNAIL_BACKGROUND,
    THUMBNAIL_PADDING,
    THUMBNAIL_SIZE,
    UNKNOWN_CODE_HEX,
)
from .core_types import Palette, U8Image
from .errors import InvalidPatternError
from .matcher import ColourMatcher, default_matcher
from .pattern import Pattern, validate_dimensions


def _palette_lut(
    palette: Palette, matcher: ColourMatcher
) -> Tuple[U8Image, np.ndarray]:
    """RGB row per palette slot plus a bool mask of empty slots."""
    unknown = rgb_from_hex(UNKNOWN_CODE_HEX)
    lut = np.zeros((len(palette), 3), dtype=np.uint8)
    empty = np.zeros((len(palette),), dtype=bool)
    for slot, code in enumerate(palette):
        if slot == EMPTY_INDEX or not code:
            empty[slot] = True
            continue
        colour = matcher.get(code)
        lut[slot] = colour.rgb if colour is not None else unknown
    return lut, empty


def pattern_to_rgb(
    pattern: Pattern, matcher: Optional[ColourMatcher] = None, cell: int = 1
) -> U8Image:
    """Decode a pattern and paint each cell as a cell x cell block."""
    if cell < 1:
        raise ValueError(f"cell must be >= 1, got {cell}")
    validate_dimensions(pattern.width, pattern.height)
    if not pattern.palette:
        raise InvalidPatternError("Invalid palette: at least one slot is required")
    table = matcher if matcher is not None else default_matcher()
    grid = pattern.grid()
    lut, empty_slot = _palette_lut(pattern.palette, table)

    in_range = (grid >= 0) & (grid < len(pattern.palette))
    safe_idx = np.where(in_range, grid, 0)
    rgb = lut[safe_idx]
    rgb[~in_range] = rgb_from_hex(UNKNOWN_CODE_HEX)

    empty = in_range & empty_slot[safe_idx]
    ys, xs = np.indices(grid.shape)
    dark = (ys + xs) % 2 == 0
    rgb[empty & dark] = rgb_from_hex(EMPTY_CELL_DARK)
    rgb[empty & ~dark] = rgb_from_hex(EMPTY_CELL_LIGHT)

    if cell > 1:
        rgb = np.repeat(np.repeat(rgb, cell, axis=0), cell, axis=1)
    return rgb.astype(np.uint8, copy=False)


def render_image(
    pattern: Pattern, matcher: Optional[ColourMatcher] = None, cell: int = 1
) -> Image.Image:
    return Image.fromarray(pattern_to_rgb(pattern, matcher, cell))


def render_thumbnail(
    pattern: Pattern,
    matcher: Optional[ColourMatcher] = None,
    size: int = THUMBNAIL_SIZE,
) -> Image.Image:
    """
    Square preview: the pattern scaled (nearest) to fit size - padding,
    centred on a light background.
    """
    validate_dimensions(pattern.width, pattern.height)
    pixel_size = (size - THUMBNAIL_PADDING) / max(pattern.width, pattern.height)
    dst_w = max(1, int(round(pattern.width * pixel_size)))
    dst_h = max(1, int(round(pattern.height * pixel_size)))

    cells = render_image(pattern, matcher)
    scaled = cells.resize((dst_w, dst_h), resample=Image.Resampling.NEAREST)

    canvas = Image.new("RGB", (size, size), rgb_from_hex(THUMBNAIL_BACKGROUND))
    canvas.paste(scaled, ((size - dst_w) // 2, (size - dst_h) // 2))
    return canvas


def save_png(path: Union[str, Path], image: Image.Image) -> Path:
    """Save as PNG, forcing the .png suffix. Returns the written path."""
    out = Path(path)
    if out.suffix.lower() != ".png":
        out = out.with_suffix(".png")
    image.save(out, format="PNG")
    return out


__all__ = [
    "pattern_to_rgb",
    "render_image",
    "render_thumbnail",
    "save_png",
]
