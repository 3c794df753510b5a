#!/usr/bin/env python3
"""
Synteny panel renderer

Draws two images for a whole-genome alignment between two assemblies:

* the back panel, a full-canvas XOR/modulo pattern
* the front panel, a mirrored copy of the pattern framed by the margins, a title
  box, and a synteny scatter where each PAF alignment is a strand-coloured
  diagonal run in the joint coordinate space of both assemblies

Usage:
    python -m synteny_render.renderer [config.yaml]
"""

import argparse
import logging
import sys
from typing import Optional

import yaml

from .canvas import DrawingArea, RasterCanvas
from .errors import ParseError, UnknownScaffoldError
from .io_helpers import PathLike, load_config, load_scaffold_sizes, read_paf
from .offsets import CumulativeOffsetIndex
from .palette import Color
from .pattern import draw_pattern
from .projection import SCALE_FACTOR, AlignmentProjector, ProjectionStats
from .render_config import CANVAS_HEIGHT, CANVAS_WIDTH, MARGIN, RenderConfig

logger = logging.getLogger(__name__)

# Data domain of the back panel pattern, one unit per pixel
BACK_X_RANGE = range(-190, 309)
BACK_Y_RANGE = range(-438, 271)

# Title box insets inside the strip above the plot
TITLE_INSET = 20
TITLE_BOTTOM_INSET = 40
# Inset of the alignment scatter inside its yellow frame
PLOT_INSET = 10


# =============================================================================
# Back panel
# =============================================================================

def render_back(
    config: RenderConfig, width: int = CANVAS_WIDTH, height: int = CANVAS_HEIGHT
) -> RasterCanvas:
    """Render and save the back panel."""
    canvas = RasterCanvas(width, height)
    area = DrawingArea(canvas).with_transform(BACK_X_RANGE, BACK_Y_RANGE)
    area.fill(Color.BACKGROUND)
    painted = draw_pattern(area)
    logger.debug(f"Back panel: painted {painted} pattern points")
    canvas.save(config.back_output)
    return canvas


# =============================================================================
# Front panel
# =============================================================================

def plot_alignments(
    area: DrawingArea,
    alignments_path: PathLike,
    target_index: CumulativeOffsetIndex,
    query_index: CumulativeOffsetIndex,
) -> ProjectionStats:
    """Fill the plot frame and draw every alignment in `alignments_path` onto it."""
    area.fill(Color.YELLOW)
    projector = AlignmentProjector(target_index, query_index)
    return projector.project(read_paf(alignments_path), area)


def render_front(
    config: RenderConfig, width: int = CANVAS_WIDTH, height: int = CANVAS_HEIGHT
) -> RasterCanvas:
    """Render and save the front panel.

    Raises:
        OSError: If an input can't be read or the image can't be written
        ParseError: If a size table or the PAF file has a malformed row
        UnknownScaffoldError: If an alignment names a scaffold missing from its size table
    """
    center_width = width - 2 * MARGIN
    center_height = height - 2 * MARGIN
    if center_width <= 0 or center_height < center_width:
        raise ValueError(f"Canvas {width}x{height} is too small for the front panel layout")

    canvas = RasterCanvas(width, height)
    main = DrawingArea(canvas)
    main.fill(Color.BACKGROUND)
    areas = main.split_by_breakpoints([MARGIN, width - MARGIN], [MARGIN, height - MARGIN])

    draw_pattern(main.with_transform(range(-width, 0), range(0, height)))

    title_strip, plot_frame = areas[4].split_vertically(center_height - center_width)
    title_areas = title_strip.split_by_breakpoints(
        [TITLE_INSET, center_width - TITLE_INSET],
        [TITLE_INSET, center_height - center_width - TITLE_BOTTOM_INSET],
    )
    title_areas[4].fill(Color.BACKGROUND)

    target_sizes = load_scaffold_sizes(config.target_sizes_path)
    query_sizes = load_scaffold_sizes(config.query_sizes_path)
    target_index = CumulativeOffsetIndex(target_sizes, side="target")
    query_index = CumulativeOffsetIndex(query_sizes, side="query")

    plot_top = height - MARGIN - center_width
    alignment_area = plot_frame.with_transform(
        range(0, target_index.total_size() // SCALE_FACTOR),
        range(0, query_index.total_size() // SCALE_FACTOR),
        range(MARGIN + PLOT_INSET, width - MARGIN - PLOT_INSET),
        range(plot_top + PLOT_INSET, height - MARGIN - PLOT_INSET),
    )
    stats = plot_alignments(alignment_area, config.alignments_path, target_index, query_index)
    logger.info(
        f"Front panel: drew {stats.drawn} of {stats.records} alignments "
        f"({stats.skipped} below the length threshold)"
    )
    canvas.save(config.front_output)
    return canvas


# =============================================================================
# Main Entry Point
# =============================================================================

def render_all(config: RenderConfig) -> int:
    """Render both panels. A failing panel doesn't stop the other from being tried.

    Returns:
        0 if both panels were written, 1 otherwise
    """
    status = 0
    for name, render in (("back", render_back), ("front", render_front)):
        try:
            render(config)
        except (OSError, ParseError, UnknownScaffoldError) as e:
            logger.error(f"Failed to render {name} panel: {e}")
            status = 1
    return status


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Render the synteny back and front panels"
    )
    parser.add_argument(
        "config", nargs="?", default=None, help="Optional YAML config with input/output paths"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    if args.config is None:
        config = RenderConfig()
    else:
        try:
            config = RenderConfig.from_config(load_config(args.config))
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Could not load config {args.config}: {e}")
            return 1
    return render_all(config)


if __name__ == "__main__":
    sys.exit(main())
