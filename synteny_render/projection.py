import logging
from typing import Iterable, NamedTuple

import numpy as np

from .canvas import DrawingArea
from .io_helpers import AlignmentRecord
from .offsets import CumulativeOffsetIndex
from .palette import strand_color

logger = logging.getLogger(__name__)

# Alignments shorter than this are not drawn
MIN_ALIGNMENT_LENGTH = 1000
# Global coordinates are divided by this before they reach the drawing area
SCALE_FACTOR = 100


class ProjectionStats(NamedTuple):
    records: int
    drawn: int
    skipped: int
    pixels: int


def alignment_run(
    target_origin: int, query_origin: int, aln_len: int, scale_factor: int = SCALE_FACTOR
) -> tuple[np.ndarray, np.ndarray]:
    """Scaled points of a diagonal alignment run.

    Base i of the run sits at (target_origin + i, query_origin + i) on the joint axes,
    assuming an ungapped 1:1 correspondence. Each point is floor-divided by
    scale_factor; consecutive points that scale to the same pixel are collapsed.

    Only the steps where x or y crosses a multiple of scale_factor are generated, so
    memory grows with aln_len / scale_factor rather than aln_len.

    Returns:
        (xs, ys) int64 arrays in run order
    """
    if aln_len <= 0:
        empty = np.empty(0, dtype=np.int64)
        return empty, empty.copy()
    x_steps = np.arange((-target_origin) % scale_factor or scale_factor, aln_len, scale_factor)
    y_steps = np.arange((-query_origin) % scale_factor or scale_factor, aln_len, scale_factor)
    steps = np.concatenate(([0], np.union1d(x_steps, y_steps))).astype(np.int64)
    return (target_origin + steps) // scale_factor, (query_origin + steps) // scale_factor


class AlignmentProjector:
    """
    Draws an alignment stream as strand-coloured diagonal runs.

    Target scaffolds lie along x and query scaffolds along y; each side has its own
    CumulativeOffsetIndex, which this projector fills in as it reads the stream.

    Attributes:
        target_index: Offsets for the target assembly (PAF columns 6-9)
        query_index: Offsets for the query assembly (PAF columns 1-4)
        scale_factor: Divisor from global coordinates to drawing-area coordinates
        min_length: Minimum alignment length to draw
    """

    def __init__(
        self,
        target_index: CumulativeOffsetIndex,
        query_index: CumulativeOffsetIndex,
        scale_factor: int = SCALE_FACTOR,
        min_length: int = MIN_ALIGNMENT_LENGTH,
    ):
        self.target_index = target_index
        self.query_index = query_index
        self.scale_factor = scale_factor
        self.min_length = min_length

    def project_record(self, aln: AlignmentRecord, area: DrawingArea) -> int:
        """Draw one alignment onto `area`. Returns the number of points written.

        Raises:
            UnknownScaffoldError: If either scaffold is missing from its size table
        """
        if aln.aln_len < self.min_length:
            return 0
        target_offset = self.target_index.resolve(aln.t_seqid)
        query_offset = self.query_index.resolve(aln.q_seqid)
        xs, ys = alignment_run(
            target_offset + aln.t_start,
            query_offset + aln.q_start,
            aln.aln_len,
            self.scale_factor,
        )
        area.set_pixels(xs, ys, strand_color(aln.strand))
        return len(xs)

    def project(self, records: Iterable[AlignmentRecord], area: DrawingArea) -> ProjectionStats:
        """Draw every alignment in a single pass over `records`.

        The first UnknownScaffoldError (or ParseError from a lazy reader) aborts the
        pass; whatever was drawn before it stays on the area.
        """
        n_records = drawn = pixels = 0
        for aln in records:
            n_records += 1
            written = self.project_record(aln, area)
            if written:
                drawn += 1
                pixels += written
        stats = ProjectionStats(
            records=n_records, drawn=drawn, skipped=n_records - drawn, pixels=pixels
        )
        logger.debug(
            f"Projected {stats.drawn}/{stats.records} alignments "
            f"({stats.skipped} skipped, {stats.pixels} points); "
            f"{len(self.target_index)} target and {len(self.query_index)} query scaffolds placed"
        )
        return stats
