import csv
import logging
import re
from pathlib import Path
from typing import Dict, Iterator, List, NamedTuple

import yaml

from .errors import ParseError

logger = logging.getLogger(__name__)

PathLike = str | Path

ScaffoldSizes = Dict[str, int]

PAF_COLUMNS = 12


class AlignmentRecord(NamedTuple):
    """One PAF row. Columns past the twelfth (SAM-style tags) are not kept."""

    q_seqid: str
    q_len: int
    q_start: int
    q_end: int
    strand: str
    t_seqid: str
    t_len: int
    t_start: int
    t_end: int
    n_match: int
    aln_len: int
    map_q: int


_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)


def _parse_int(value: str, field: str, path: PathLike, line_number: int) -> int:
    # plain ASCII digits only; int() would also take "1_000", " 500 " and non-ASCII digits
    if not _INTEGER.fullmatch(value):
        raise ParseError(path, line_number, f"{field} is not an integer: {value!r}")
    return int(value)


def _tsv_rows(path: PathLike) -> Iterator[tuple[int, List[str]]]:
    """Yield (1-based line number, fields) for every non-empty line of a TSV file.

    Only truly empty lines are skipped; a line of tabs or spaces is returned as a row.

    Raises:
        ParseError: If a line isn't valid UTF-8 or csv can't split it
    """
    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.reader(f, delimiter="\t", quoting=csv.QUOTE_NONE)
        while True:
            try:
                row = next(reader)
            except StopIteration:
                return
            except UnicodeDecodeError as e:
                raise ParseError(path, reader.line_num + 1, f"not valid UTF-8 ({e.reason})") from e
            except csv.Error as e:
                raise ParseError(path, reader.line_num, str(e)) from e
            if not row:
                continue
            yield reader.line_num, row


def load_scaffold_sizes(path: PathLike) -> ScaffoldSizes:
    """Load a headerless two column `<scaffold>\\t<length>` table.

    If a scaffold name appears more than once the last length wins; each
    duplicate is logged as a warning.

    Args:
        path: Path to the scaffold lengths TSV

    Returns:
        Dict mapping scaffold name to length, in file order

    Raises:
        ParseError: If a row doesn't have exactly two columns or the length is not a
            non-negative integer
        OSError: If the file can't be read
    """
    sizes: ScaffoldSizes = {}
    for line_number, row in _tsv_rows(path):
        if len(row) != 2:
            raise ParseError(path, line_number, f"expected 2 columns, found {len(row)}")
        name, raw_length = row
        length = _parse_int(raw_length, "length", path, line_number)
        if length < 0:
            raise ParseError(path, line_number, f"negative length {length}")
        if name in sizes:
            logger.warning(
                f"Duplicate scaffold {name} in {path} (line {line_number}); "
                f"replacing length {sizes[name]} with {length}"
            )
        sizes[name] = length
    logger.debug(f"Loaded {len(sizes)} scaffold sizes from {path}")
    return sizes


def _parse_paf_row(row: List[str], path: PathLike, line_number: int) -> AlignmentRecord:
    if len(row) < PAF_COLUMNS:
        raise ParseError(
            path, line_number, f"expected at least {PAF_COLUMNS} columns, found {len(row)}"
        )
    strand = row[4]
    if len(strand) != 1:
        raise ParseError(path, line_number, f"strand must be one character: {strand!r}")

    def num(index: int, field: str) -> int:
        return _parse_int(row[index], field, path, line_number)

    return AlignmentRecord(
        q_seqid=row[0],
        q_len=num(1, "query length"),
        q_start=num(2, "query start"),
        q_end=num(3, "query end"),
        strand=strand,
        t_seqid=row[5],
        t_len=num(6, "target length"),
        t_start=num(7, "target start"),
        t_end=num(8, "target end"),
        n_match=num(9, "match count"),
        aln_len=num(10, "alignment length"),
        map_q=num(11, "mapping quality"),
    )


def read_paf(path: PathLike) -> Iterator[AlignmentRecord]:
    """Stream AlignmentRecords from a PAF file, one per non-empty line.

    The file stays open until the iterator is exhausted or closed. A malformed row
    raises ParseError when it is reached, after earlier records have been yielded.
    """
    for line_number, row in _tsv_rows(path):
        yield _parse_paf_row(row, path, line_number)


def load_config(yaml_path: PathLike):
    with open(yaml_path, "r") as file:
        config = yaml.safe_load(file)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"Config {yaml_path} must be a YAML mapping")
    return config
