"""Delimited variant table reader.

Variant tables are single-character delimited text (tab by default) with a
header line, as produced by field extraction from an annotated VCF:

CHROM  POS    REF  ALT  GENE   GT
1      10000  A    G    BICC1  0/1,0/0,1/1
"""

from collections.abc import Iterator
from pathlib import Path

from genotype_annotator.exceptions import SchemaError
from genotype_annotator.io_utils import iter_lines


def parse_records(
    filepath: Path | str,
    delimiter: str = "\t",
) -> Iterator[tuple[int, list[str]]]:
    """Stream the lines of a delimited table as field lists.

    The header is yielded like any other line (line number 1); blank
    lines are skipped.

    Args:
        filepath: Path to the table (may be gzipped), or "-" for stdin
        delimiter: Single-character field delimiter

    Yields:
        (line_number, fields) for each non-blank line

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    for line_num, line in enumerate(iter_lines(filepath), 1):
        if not line:
            continue
        yield line_num, line.split(delimiter)


def locate_column(header: list[str], name: str) -> int:
    """Find the 1-based position of a named column.

    Args:
        header: Header fields
        name: Column name to look for (exact match)

    Returns:
        1-based column index

    Raises:
        SchemaError: If the column is absent
    """
    try:
        return header.index(name) + 1
    except ValueError:
        raise SchemaError(
            f"Column '{name}' not found in header: {', '.join(header)}"
        ) from None
