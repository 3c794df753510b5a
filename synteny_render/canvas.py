"""
Raster sink and data-space -> pixel-space plumbing.

A RasterCanvas is a plain RGB numpy buffer that is written out with Pillow. A
DrawingArea is a rectangle of a canvas, optionally carrying a CoordinateTransform
that maps integer data coordinates onto absolute canvas pixels.
"""

import logging
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np
from PIL import Image

from .io_helpers import PathLike
from .palette import Color

logger = logging.getLogger(__name__)


class Rect(NamedTuple):
    """Half-open pixel rectangle [x0, x1) x [y0, y1) in canvas coordinates."""

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0


def _map_axis(values: np.ndarray, domain: range, pixels: range) -> np.ndarray:
    span = pixels.stop - pixels.start
    if span == 0:
        return np.full(values.shape, pixels.stop, dtype=np.int64)
    extent = domain.stop - domain.start
    if extent == 0:
        return np.full(values.shape, pixels.start, dtype=np.int64)
    logical = (values - domain.start) / extent
    if span > 0:
        mapped = np.floor(span * logical + 1e-3)
    else:
        mapped = np.ceil(span * logical - 1e-3)
    return pixels.start + mapped.astype(np.int64)


class CoordinateTransform:
    """
    Affine map from a rectangular integer data domain onto a pixel rectangle.

    Each axis is independent: value v in domain [d0, d1) lands on pixel
    p0 + floor((p1 - p0) * (v - d0) / (d1 - d0) + 1e-3). A descending pixel range
    mirrors the axis (ceil with -1e-3).

    Attributes:
        x_range: Data domain along x
        y_range: Data domain along y
        x_pixels: Absolute canvas columns the x domain is stretched over
        y_pixels: Absolute canvas rows the y domain is stretched over
    """

    def __init__(self, x_range: range, y_range: range, x_pixels: range, y_pixels: range):
        self.x_range = x_range
        self.y_range = y_range
        self.x_pixels = x_pixels
        self.y_pixels = y_pixels

    def map(self, x: int, y: int) -> Tuple[int, int]:
        px, py = self.map_many(np.array([x]), np.array([y]))
        return int(px[0]), int(py[0])

    def map_many(self, xs: np.ndarray, ys: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        xs = np.asarray(xs, dtype=np.int64)
        ys = np.asarray(ys, dtype=np.int64)
        return (
            _map_axis(xs, self.x_range, self.x_pixels),
            _map_axis(ys, self.y_range, self.y_pixels),
        )

    def __repr__(self) -> str:
        return (
            f"CoordinateTransform({self.x_range}, {self.y_range}, "
            f"pixels=({self.x_pixels}, {self.y_pixels}))"
        )


class RasterCanvas:
    """RGB pixel buffer. Writes outside the canvas are dropped."""

    def __init__(self, width: int, height: int, color: Color = Color.BACKGROUND):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.empty((height, width, 3), dtype=np.uint8)
        self.pixels[:, :] = color.rgb

    @property
    def rect(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    def fill(self, color: Color, rect: Optional[Rect] = None) -> None:
        rect = rect or self.rect
        x0, x1 = max(rect.x0, 0), min(rect.x1, self.width)
        y0, y1 = max(rect.y0, 0), min(rect.y1, self.height)
        if x0 < x1 and y0 < y1:
            self.pixels[y0:y1, x0:x1] = color.rgb

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y, x] = color.rgb

    def set_pixels(self, xs: np.ndarray, ys: np.ndarray, color: Color) -> int:
        """Write one colour to many pixels. Returns how many landed on the canvas."""
        xs = np.asarray(xs, dtype=np.int64)
        ys = np.asarray(ys, dtype=np.int64)
        inside = (xs >= 0) & (xs < self.width) & (ys >= 0) & (ys < self.height)
        self.pixels[ys[inside], xs[inside]] = color.rgb
        return int(np.count_nonzero(inside))

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        return tuple(int(c) for c in self.pixels[y, x])

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels)

    def save(self, path: PathLike) -> None:
        """Save the canvas with Pillow; the format follows the file extension."""
        self.to_image().save(path)
        logger.info(f"Saved: {path}")


class DrawingArea:
    """
    A rectangle of a RasterCanvas.

    Without a transform, data coordinates are offsets from the rectangle's top left
    corner. With one, they go through it and land on absolute canvas pixels. Pixel
    writes are not clipped to the rectangle, only to the canvas; fill() is.
    """

    def __init__(
        self,
        canvas: RasterCanvas,
        rect: Optional[Rect] = None,
        transform: Optional[CoordinateTransform] = None,
    ):
        self.canvas = canvas
        self.rect = rect or canvas.rect
        self.transform = transform or CoordinateTransform(
            range(0, self.rect.width),
            range(0, self.rect.height),
            range(self.rect.x0, self.rect.x1),
            range(self.rect.y0, self.rect.y1),
        )

    def with_transform(
        self,
        x_range: range,
        y_range: range,
        x_pixels: Optional[range] = None,
        y_pixels: Optional[range] = None,
    ) -> "DrawingArea":
        """Same rectangle, new data domain. Pixel ranges default to the rectangle."""
        transform = CoordinateTransform(
            x_range,
            y_range,
            x_pixels if x_pixels is not None else range(self.rect.x0, self.rect.x1),
            y_pixels if y_pixels is not None else range(self.rect.y0, self.rect.y1),
        )
        return DrawingArea(self.canvas, self.rect, transform)

    def fill(self, color: Color) -> None:
        self.canvas.fill(color, self.rect)

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        px, py = self.transform.map(x, y)
        self.canvas.set_pixel(px, py, color)

    def set_pixels(self, xs: np.ndarray, ys: np.ndarray, color: Color) -> int:
        pxs, pys = self.transform.map_many(xs, ys)
        return self.canvas.set_pixels(pxs, pys, color)

    def split_by_breakpoints(
        self, x_breaks: Sequence[int], y_breaks: Sequence[int]
    ) -> List["DrawingArea"]:
        """Cut the area into a grid at the given offsets from its top left corner.

        Breakpoints are clamped to the area and sorted. Returns the cells row by row,
        so two x and two y breakpoints give nine cells with the middle one at index 4.
        The cells tile the area with no gaps or overlaps.
        """
        xs = _cuts(self.rect.x0, self.rect.width, x_breaks)
        ys = _cuts(self.rect.y0, self.rect.height, y_breaks)
        return [
            DrawingArea(self.canvas, Rect(x0, y0, x1, y1))
            for y0, y1 in zip(ys, ys[1:])
            for x0, x1 in zip(xs, xs[1:])
        ]

    def split_vertically(self, y: int) -> Tuple["DrawingArea", "DrawingArea"]:
        """Split into a top area `y` rows tall and a bottom area with the rest."""
        top, bottom = self.split_by_breakpoints([], [y])
        return top, bottom

    def __repr__(self) -> str:
        return f"DrawingArea({self.rect}, {self.transform})"


def _cuts(origin: int, size: int, breaks: Sequence[int]) -> List[int]:
    inner = sorted(min(max(b, 0), size) for b in breaks)
    return [origin] + [origin + b for b in inner] + [origin + size]
