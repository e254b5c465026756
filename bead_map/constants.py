"""
Tunables used across the project.

- Grid limits
- Colour science constants (sRGB companding, sRGB->XYZ matrix, D65 white, Lab)
- Matching defaults
- Render colours
- Reference table location
"""
from __future__ import annotations

from pathlib import Path
from typing import Tuple

# ==========
# Grid
# ==========
MAX_GRID_SIZE: int = 128
EMPTY_INDEX: int = 0

# ===========================
# sRGB -> XYZ (D65) -> CIE Lab
# ===========================
SRGB_LINEAR_THRESHOLD: float = 0.04045
SRGB_GAMMA: float = 2.4

RGB_TO_XYZ: Tuple[Tuple[float, float, float], ...] = (
    (0.4124564, 0.3575761, 0.1804375),
    (0.2126729, 0.7151522, 0.0721750),
    (0.0193339, 0.1191920, 0.9503041),
)
WHITE_D65: Tuple[float, float, float] = (0.95047, 1.00000, 1.08883)

LAB_EPSILON: float = 0.008856
LAB_KAPPA_SLOPE: float = 7.787
LAB_OFFSET: float = 16.0 / 116.0

# ==========
# CIEDE2000
# ==========
DE_KL: float = 1.0
DE_KC: float = 1.0
DE_KH: float = 1.0

# ==========
# Matching
# ==========
MATCH_ALTERNATIVES: int = 3
DISTANCE_DECIMALS: int = 1

# ==========
# Render
# ==========
EMPTY_CELL_DARK: str = "e8e8e8"
EMPTY_CELL_LIGHT: str = "f5f5f5"
UNKNOWN_CODE_HEX: str = "000000"
THUMBNAIL_BACKGROUND: str = "f5f5f5"
THUMBNAIL_SIZE: int = 120
THUMBNAIL_PADDING: int = 2

# ===============
# Reference table
# ===============
TABLE_ENV_VAR: str = "BEAD_MAP_COLOURS"
DEFAULT_TABLE_PATH: Path = Path(__file__).resolve().parent / "data" / "colours.txt"

__all__ = [
    "MAX_GRID_SIZE",
    "EMPTY_INDEX",
    "SRGB_LINEAR_THRESHOLD",
    "SRGB_GAMMA",
    "RGB_TO_XYZ",
    "WHITE_D65",
    "LAB_EPSILON",
    "LAB_KAPPA_SLOPE",
    "LAB_OFFSET",
    "DE_KL",
    "DE_KC",
    "DE_KH",
    "MATCH_ALTERNATIVES",
    "DISTANCE_DECIMALS",
    "EMPTY_CELL_DARK",
    "EMPTY_CELL_LIGHT",
    "UNKNOWN_CODE_HEX",
    "THUMBNAIL_BACKGROUND",
    "THUMBNAIL_SIZE",
    "THUMBNAIL_PADDING",
    "TABLE_ENV_VAR",
    "DEFAULT_TABLE_PATH",
]
