import numpy as np
import pytest
from PIL import Image

from synteny_render.canvas import CoordinateTransform, DrawingArea, RasterCanvas, Rect
from synteny_render.palette import Color


class TestCoordinateTransform:
    """Test data -> pixel mapping."""

    @pytest.mark.fast
    @pytest.mark.unit
    def test_one_to_one_shift(self):
        t = CoordinateTransform(range(-190, 309), range(-438, 271), range(0, 499), range(0, 709))
        xs = np.arange(-190, 309)
        ys = np.arange(-438, 271)
        pxs, _ = t.map_many(xs, np.zeros_like(xs))
        _, pys = t.map_many(np.zeros_like(ys), ys)
        assert pxs.tolist() == list(range(499))
        assert pys.tolist() == list(range(709))

    @pytest.mark.fast
    @pytest.mark.unit
    def test_mirrored_domain(self):
        t = CoordinateTransform(range(-499, 0), range(0, 709), range(0, 499), range(0, 709))
        assert t.map(-499, 0) == (0, 0)
        assert t.map(-1, 708) == (498, 708)

    @pytest.mark.fast
    @pytest.mark.unit
    def test_scaled_domain(self):
        t = CoordinateTransform(range(0, 1000), range(0, 500), range(50, 150), range(10, 60))
        assert t.map(0, 0) == (50, 10)
        assert t.map(10, 10) == (51, 11)
        assert t.map(999, 499) == (149, 59)
        assert t.map(505, 250) == (100, 35)

    @pytest.mark.fast
    @pytest.mark.unit
    def test_descending_pixel_range(self):
        t = CoordinateTransform(range(0, 10), range(0, 10), range(9, -1, -1), range(0, 10))
        assert t.map(0, 0) == (9, 0)
        assert t.map(9, 0) == (0, 0)

    @pytest.mark.fast
    @pytest.mark.unit
    def test_empty_domain(self):
        t = CoordinateTransform(range(0, 0), range(0, 0), range(50, 449), range(260, 659))
        assert t.map(0, 0) == (50, 260)


class TestRasterCanvas:
    @pytest.mark.fast
    @pytest.mark.unit
    def test_initial_fill(self):
        canvas = RasterCanvas(5, 4)
        assert canvas.pixels.shape == (4, 5, 3)
        assert canvas.get_pixel(4, 3) == Color.BACKGROUND.value

    @pytest.mark.fast
    @pytest.mark.unit
    def test_invalid_size(self):
        with pytest.raises(ValueError):
            RasterCanvas(0, 10)

    @pytest.mark.fast
    @pytest.mark.unit
    def test_out_of_bounds_writes_dropped(self):
        canvas = RasterCanvas(10, 10)
        canvas.set_pixel(-1, 0, Color.RED)
        canvas.set_pixel(10, 0, Color.RED)
        written = canvas.set_pixels(
            np.array([-5, 0, 9, 10]), np.array([0, 0, 9, 3]), Color.RED
        )
        assert written == 2
        assert canvas.get_pixel(0, 0) == Color.RED.value
        assert canvas.get_pixel(9, 9) == Color.RED.value
        assert int(np.all(canvas.pixels == Color.RED.rgb, axis=2).sum()) == 2

    @pytest.mark.fast
    @pytest.mark.unit
    def test_later_writes_overwrite(self):
        canvas = RasterCanvas(3, 3)
        canvas.set_pixel(1, 1, Color.RED)
        canvas.set_pixel(1, 1, Color.BLUE)
        assert canvas.get_pixel(1, 1) == Color.BLUE.value

    @pytest.mark.fast
    @pytest.mark.unit
    def test_save(self, tmp_path):
        canvas = RasterCanvas(7, 3)
        canvas.set_pixel(2, 1, Color.YELLOW)
        path = tmp_path / "out.png"
        canvas.save(path)
        with Image.open(path) as img:
            assert img.size == (7, 3)
            assert img.convert("RGB").getpixel((2, 1)) == Color.YELLOW.value


class TestDrawingArea:
    @pytest.mark.fast
    @pytest.mark.unit
    def test_fill_is_clipped_to_rect(self):
        canvas = RasterCanvas(20, 20)
        area = DrawingArea(canvas, Rect(5, 5, 10, 8))
        area.fill(Color.WHITE)
        white = np.all(canvas.pixels == Color.WHITE.rgb, axis=2)
        assert white.sum() == 15
        assert white[5:8, 5:10].all()

    @pytest.mark.fast
    @pytest.mark.unit
    def test_default_transform_is_relative(self):
        canvas = RasterCanvas(20, 20)
        area = DrawingArea(canvas, Rect(5, 6, 10, 10))
        area.set_pixel(0, 0, Color.RED)
        assert canvas.get_pixel(5, 6) == Color.RED.value

    @pytest.mark.fast
    @pytest.mark.unit
    def test_split_by_breakpoints_tiles_parent(self):
        canvas = RasterCanvas(100, 80)
        parent = DrawingArea(canvas, Rect(0, 0, 100, 80))
        cells = parent.split_by_breakpoints([10, 90], [20, 60])
        assert len(cells) == 9
        assert cells[4].rect == Rect(10, 20, 90, 60)
        assert cells[0].rect == Rect(0, 0, 10, 20)
        assert cells[8].rect == Rect(90, 60, 100, 80)

        coverage = np.zeros((80, 100), dtype=int)
        for cell in cells:
            r = cell.rect
            coverage[r.y0:r.y1, r.x0:r.x1] += 1
        assert (coverage == 1).all()

    @pytest.mark.fast
    @pytest.mark.unit
    def test_split_nested_uses_local_offsets(self):
        canvas = RasterCanvas(100, 80)
        center = DrawingArea(canvas, Rect(10, 20, 90, 60))
        top, bottom = center.split_vertically(30)
        assert top.rect == Rect(10, 20, 90, 50)
        assert bottom.rect == Rect(10, 50, 90, 60)

    @pytest.mark.fast
    @pytest.mark.unit
    def test_split_clamps_breakpoints(self):
        canvas = RasterCanvas(10, 10)
        top, bottom = DrawingArea(canvas).split_vertically(25)
        assert top.rect == Rect(0, 0, 10, 10)
        assert bottom.rect.height == 0

    @pytest.mark.fast
    @pytest.mark.unit
    def test_with_transform_keeps_rect(self):
        canvas = RasterCanvas(50, 50)
        area = DrawingArea(canvas, Rect(10, 10, 40, 40))
        scaled = area.with_transform(range(0, 300), range(0, 300))
        assert scaled.rect == area.rect
        scaled.set_pixel(299, 0, Color.BLUE)
        assert canvas.get_pixel(39, 10) == Color.BLUE.value
