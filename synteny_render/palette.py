from enum import Enum

import numpy as np


class Color(Enum):
    """
    Closed palette shared by the background pattern and the alignment plot.
    Members are RGB triples.
    """

    BACKGROUND = (4, 90, 141)
    WHITE = (255, 247, 251)
    BLUE = (54, 144, 192)
    RED = (227, 26, 28)
    YELLOW = (255, 237, 160)

    @property
    def rgb(self) -> np.ndarray:
        return np.array(self.value, dtype=np.uint8)


def strand_color(strand: str) -> Color:
    """Colour for an alignment strand. Unexpected strand values fall back to yellow."""
    if strand == "+":
        return Color.RED
    if strand == "-":
        return Color.BLUE
    return Color.YELLOW
