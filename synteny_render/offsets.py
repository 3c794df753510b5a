import logging
from typing import Dict, Mapping

from .errors import UnknownScaffoldError

logger = logging.getLogger(__name__)


class CumulativeOffsetIndex:
    """
    Lays scaffolds of one assembly end to end in the order they are first resolved.

    Each scaffold gets the half-open interval [offset, offset + length) of a single
    global axis. Offsets are handed out lazily: the first resolve of a name places it
    at the current running total, which then grows by the scaffold's length. The
    index never forgets or moves an assignment, so for any scaffold s resolved before
    s', offset(s) + length(s) <= offset(s').

    One index per assembly, scoped to a single render pass.

    Attributes:
        sizes: Scaffold name -> length table the offsets are built from
        side: Label used in error messages (e.g. "target")
    """

    def __init__(self, sizes: Mapping[str, int], side: str = ""):
        self.sizes = sizes
        self.side = side
        self._offsets: Dict[str, int] = {}
        self._running_total = 0

    def resolve(self, scaffold: str) -> int:
        """Global start offset of a scaffold, assigning one on first sight.

        Raises:
            UnknownScaffoldError: If the scaffold isn't in the size table. The index
                is left untouched.
        """
        offset = self._offsets.get(scaffold)
        if offset is not None:
            return offset
        try:
            length = self.sizes[scaffold]
        except KeyError:
            raise UnknownScaffoldError(scaffold, self.side) from None

        offset = self._running_total
        self._offsets[scaffold] = offset
        self._running_total += length
        logger.debug(f"{self.side or 'index'}: placed {scaffold} ({length} bp) at {offset}")
        return offset

    @property
    def running_total(self) -> int:
        """End of the last placed scaffold, i.e. where the next one will start."""
        return self._running_total

    def offsets(self) -> Dict[str, int]:
        """Copy of the assignments so far, in placement order."""
        return dict(self._offsets)

    def total_size(self) -> int:
        """Sum of every length in the size table, placed or not."""
        return sum(self.sizes.values())

    def __contains__(self, scaffold: object) -> bool:
        return scaffold in self._offsets

    def __len__(self) -> int:
        return len(self._offsets)
