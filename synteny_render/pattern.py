"""
XOR/modulo background pattern.

A point (x, y) is coloured by the remainder of (x XOR y) divided by 19. The
remainder takes the sign of the dividend, as with 32-bit signed integer
arithmetic, so points whose XOR is negative get negative residues and are left
uncoloured, unlike Python's floored `%`.
"""

from typing import Dict, Optional

import numpy as np

from .canvas import DrawingArea
from .palette import Color

PATTERN_MODULUS = 19

RESIDUE_COLORS: Dict[int, Color] = {
    0: Color.WHITE,
    10: Color.WHITE,
    3: Color.YELLOW,
    1: Color.BLUE,
    11: Color.BLUE,
    4: Color.RED,
    5: Color.RED,
}


def _truncated_mod(value: int, modulus: int) -> int:
    remainder = abs(value) % modulus
    return -remainder if value < 0 else remainder


def pattern_residue(x: int, y: int) -> int:
    return _truncated_mod(x ^ y, PATTERN_MODULUS)


def pattern_color(x: int, y: int) -> Optional[Color]:
    """Colour of the pattern at (x, y), or None where the background shows through."""
    return RESIDUE_COLORS.get(pattern_residue(x, y))


def pattern_residues(xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """
    Vectorised pattern_residue over a grid.

    Args:
        xs: 1D array of x coordinates
        ys: 1D array of y coordinates

    Returns:
        (len(ys), len(xs)) int64 array; entry [j, i] is pattern_residue(xs[i], ys[j])
    """
    xs = np.asarray(xs, dtype=np.int64)
    ys = np.asarray(ys, dtype=np.int64)
    xor = np.bitwise_xor(xs[np.newaxis, :], ys[:, np.newaxis])
    return np.fmod(xor, PATTERN_MODULUS)


def draw_pattern(area: DrawingArea) -> int:
    """Paint the pattern over every integer point of a DrawingArea's data domain.

    Returns:
        Number of points painted
    """
    xs = np.arange(area.transform.x_range.start, area.transform.x_range.stop)
    ys = np.arange(area.transform.y_range.start, area.transform.y_range.stop)
    residues = pattern_residues(xs, ys)
    painted = 0
    for residue, color in RESIDUE_COLORS.items():
        rows, cols = np.nonzero(residues == residue)
        area.set_pixels(xs[cols], ys[rows], color)
        painted += len(rows)
    return painted
