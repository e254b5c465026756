# bead_map/colour_convert.py
from __future__ import annotations

"""
Colour parsing, conversions and metrics (sRGB, D65).

Exports:
  rgb_from_hex(hex)              -> (r, g, b)
  normalise_hex(hex)             -> '#rrggbb'
  rgb_to_hex(rgb, prefix='#')    -> '#rrggbb'
  rgb_to_linear(srgb)
  rgb_to_lab(rgb)
  delta_e2000_pair(lab1, lab2)
  delta_e2000_vec(src_lab, cand_lab)

Compat aliases:
  hex_to_rgb     === rgb_from_hex
  ciede2000      === delta_e2000_pair
  ciede2000_vec  === delta_e2000_vec
"""

import math
import re
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from .constants import (
    DE_KC,
    DE_KH,
    DE_KL,
    LAB_EPSILON,
    LAB_KAPPA_SLOPE,
    LAB_OFFSET,
    RGB_TO_XYZ,
    SRGB_GAMMA,
    SRGB_LINEAR_THRESHOLD,
    WHITE_D65,
)
from .core_types import HexStr, Lab, RGBTuple
from .errors import FormatError

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]{3}|[0-9a-fA-F]{6}")


# Hex parsing


def rgb_from_hex(hex_str: str) -> RGBTuple:
    """
    Parse 'rrggbb' or 'rgb', with or without a leading '#', case-insensitive.
    3-digit shorthand expands per digit ('abc' -> 'aabbcc').
    Raises FormatError for anything else.
    """
    if not isinstance(hex_str, str):
        raise FormatError(f"Invalid hex colour: {hex_str!r}")
    s = hex_str[1:] if hex_str.startswith("#") else hex_str
    if not _HEX_DIGITS.fullmatch(s):
        raise FormatError(
            f"Invalid hex colour: {hex_str!r} (expected 3 or 6 hex digits)"
        )
    if len(s) == 3:
        s = "".join(ch * 2 for ch in s)
    return (int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))


def rgb_to_hex(rgb: Sequence[int], prefix: str = "#") -> HexStr:
    """RGB triple to lowercase hex, '#rrggbb' by default."""
    return f"{prefix}{int(rgb[0]):02x}{int(rgb[1]):02x}{int(rgb[2]):02x}"


def normalise_hex(hex_str: str) -> HexStr:
    """Canonical '#rrggbb' form of any accepted hex spelling."""
    return rgb_to_hex(rgb_from_hex(hex_str))


# sRGB to linear


def rgb_to_linear(srgb: np.ndarray) -> np.ndarray:
    """
    Convert sRGB (non-linear 0..1) to linear RGB (0..1). Vectorised.
    Returns float64 with the input shape.
    """
    srgb_f = np.asarray(srgb, dtype=np.float64)
    return np.where(
        srgb_f > SRGB_LINEAR_THRESHOLD,
        ((srgb_f + 0.055) / 1.055) ** SRGB_GAMMA,
        srgb_f / 12.92,
    )


# sRGB to Lab (D65)


def rgb_to_lab(rgb: Sequence[int] | np.ndarray) -> Lab:
    """
    sRGB [0..255] to CIE Lab (D65).
    Accepts a single (r, g, b) or any array shaped (..., 3). Returns float64
    with the same shape.
    """
    rgb_f = np.asarray(rgb, dtype=np.float64)
    if rgb_f.shape[-1:] != (3,):
        raise ValueError(f"expected (..., 3) RGB input, got shape {rgb_f.shape}")
    rgb_f = rgb_f / 255.0

    r_lin = rgb_to_linear(rgb_f[..., 0])
    g_lin = rgb_to_linear(rgb_f[..., 1])
    b_lin = rgb_to_linear(rgb_f[..., 2])

    # Linear RGB -> XYZ, normalised by the D65 white
    (m00, m01, m02), (m10, m11, m12), (m20, m21, m22) = RGB_TO_XYZ
    Xn, Yn, Zn = WHITE_D65
    x = (m00 * r_lin + m01 * g_lin + m02 * b_lin) / Xn
    y = (m10 * r_lin + m11 * g_lin + m12 * b_lin) / Yn
    z = (m20 * r_lin + m21 * g_lin + m22 * b_lin) / Zn

    def f(t: np.ndarray) -> np.ndarray:
        return np.where(t > LAB_EPSILON, np.cbrt(t), LAB_KAPPA_SLOPE * t + LAB_OFFSET)

    fx, fy, fz = f(x), f(y), f(z)
    out = np.empty(rgb_f.shape, dtype=np.float64)
    out[..., 0] = 116.0 * fy - 16.0
    out[..., 1] = 500.0 * (fx - fy)
    out[..., 2] = 200.0 * (fy - fz)
    return out


# CIEDE2000


def _hue_degrees(a_val: float, b_val: float) -> float:
    if a_val == 0.0 and b_val == 0.0:
        return 0.0
    ang = math.degrees(math.atan2(b_val, a_val))
    return ang + 360.0 if ang < 0.0 else ang


def delta_e2000_pair(
    lab1: Sequence[float] | NDArray[np.floating],
    lab2: Sequence[float] | NDArray[np.floating],
) -> float:
    """
    CIEDE2000 distance between two Lab colours (kL = kC = kH = 1).
    Scalar reference implementation; symmetric in its arguments.
    """
    L1, a1, b1 = float(lab1[0]), float(lab1[1]), float(lab1[2])
    L2, a2, b2 = float(lab2[0]), float(lab2[1]), float(lab2[2])

    C1 = math.hypot(a1, b1)
    C2 = math.hypot(a2, b2)
    C_bar = 0.5 * (C1 + C2)
    G = 0.5 * (1.0 - math.sqrt((C_bar**7) / (C_bar**7 + 25.0**7)))

    a1p = (1.0 + G) * a1
    a2p = (1.0 + G) * a2
    C1p = math.hypot(a1p, b1)
    C2p = math.hypot(a2p, b2)

    h1p = _hue_degrees(a1p, b1)
    h2p = _hue_degrees(a2p, b2)

    dLp = L2 - L1
    dCp = C2p - C1p

    # Hue difference; zero when either chroma vanishes
    dhp = h2p - h1p
    if C1p * C2p == 0.0:
        dhp = 0.0
    elif dhp > 180.0:
        dhp -= 360.0
    elif dhp < -180.0:
        dhp += 360.0

    dHp = 2.0 * math.sqrt(C1p * C2p) * math.sin(math.radians(dhp / 2.0))

    L_bar = 0.5 * (L1 + L2)
    C_bar_p = 0.5 * (C1p + C2p)

    # Mean hue; the sum (not the average) when either chroma vanishes
    h_sum = h1p + h2p
    if C1p * C2p == 0.0:
        h_bar_p = h_sum
    elif abs(h1p - h2p) <= 180.0:
        h_bar_p = 0.5 * h_sum
    elif h_sum < 360.0:
        h_bar_p = 0.5 * (h_sum + 360.0)
    else:
        h_bar_p = 0.5 * (h_sum - 360.0)

    T = (
        1.0
        - 0.17 * math.cos(math.radians(h_bar_p - 30.0))
        + 0.24 * math.cos(math.radians(2.0 * h_bar_p))
        + 0.32 * math.cos(math.radians(3.0 * h_bar_p + 6.0))
        - 0.20 * math.cos(math.radians(4.0 * h_bar_p - 63.0))
    )

    d_theta = 30.0 * math.exp(-(((h_bar_p - 275.0) / 25.0) ** 2.0))
    R_c = 2.0 * math.sqrt((C_bar_p**7) / (C_bar_p**7 + 25.0**7))

    S_l = 1.0 + (0.015 * ((L_bar - 50.0) ** 2.0)) / math.sqrt(
        20.0 + ((L_bar - 50.0) ** 2.0)
    )
    S_c = 1.0 + 0.045 * C_bar_p
    S_h = 1.0 + 0.015 * C_bar_p * T
    R_t = -math.sin(math.radians(2.0 * d_theta)) * R_c

    dL_term = dLp / (DE_KL * S_l)
    dC_term = dCp / (DE_KC * S_c)
    dH_term = dHp / (DE_KH * S_h)
    dE = math.sqrt(
        dL_term**2 + dC_term**2 + dH_term**2 + R_t * dC_term * dH_term
    )
    return float(dE)


def delta_e2000_vec(src_lab: Lab, cand_lab: Lab) -> NDArray[np.float64]:
    """
    Row-wise CIEDE2000 for one source Lab vs many candidate Labs.
    Uses the scalar routine per row for consistent results.

    Args:
      src_lab: Lab [3] or [1,3]
      cand_lab: Lab [N,3]
    Returns:
      float64 array [N]
    """
    s = np.asarray(src_lab, dtype=np.float64).reshape(3)
    cands = np.asarray(cand_lab, dtype=np.float64).reshape(-1, 3)
    out = np.empty((cands.shape[0],), dtype=np.float64)
    for i in range(cands.shape[0]):
        out[i] = delta_e2000_pair(s, cands[i])
    return out


# Compat aliases

hex_to_rgb = rgb_from_hex
ciede2000 = delta_e2000_pair
ciede2000_vec = delta_e2000_vec


__all__ = [
    "rgb_from_hex",
    "rgb_to_hex",
    "normalise_hex",
    "rgb_to_linear",
    "rgb_to_lab",
    "delta_e2000_pair",
    "delta_e2000_vec",
    "hex_to_rgb",
    "ciede2000",
    "ciede2000_vec",
]
