"""Phenotype table filtering by sample identifiers.

Keeps the rows of a CSV/TSV phenotype table whose sample-id column
matches (case-insensitively) one of the given sample identifiers.
"""

import logging
from pathlib import Path

import pandas as pd

from genotype_annotator.exceptions import SchemaError
from genotype_annotator.parsers.roster import read_identifiers

logger = logging.getLogger(__name__)

DELIMITERS = {"csv": ",", "tsv": "\t"}


def delimiter_for(filepath: Path) -> str:
    """Pick the delimiter from a .csv/.tsv extension (ignoring .gz).

    Raises:
        ValueError: If the extension is neither .csv nor .tsv
    """
    suffixes = [s.lower() for s in filepath.suffixes if s.lower() != ".gz"]
    kind = suffixes[-1].lstrip(".") if suffixes else ""
    if kind not in DELIMITERS:
        raise ValueError(
            f"File must have either .csv or .tsv extension: {filepath.name}"
        )
    return DELIMITERS[kind]


def filter_phenotypes(
    input_file: Path,
    samples: str,
    column_name: str,
    list_delimiter: str = ",",
) -> pd.DataFrame:
    """Filter a phenotype table to the rows of the given samples.

    Args:
        input_file: CSV or TSV phenotype table
        samples: Inline sample list or path to a sample file
        column_name: Column holding the sample identifiers
        list_delimiter: Delimiter of inline sample lists

    Returns:
        Matching rows, in table order

    Raises:
        SchemaError: If the column is absent
    """
    df = pd.read_csv(
        input_file,
        sep=delimiter_for(input_file),
        dtype=str,
        keep_default_na=False,
        compression="infer",
    )

    if column_name not in df.columns:
        raise SchemaError(f"Column '{column_name}' not found in input file")

    wanted = {s.lower() for s in read_identifiers(samples, list_delimiter)}
    mask = df[column_name].str.strip().str.lower().isin(wanted)

    logger.info("Kept %d of %d phenotype rows", int(mask.sum()), len(df))
    return df[mask]


def write_phenotypes(
    df: pd.DataFrame,
    output_file: Path | None,
    output_delimiter: str | None = None,
    input_file: Path | None = None,
) -> str:
    """Write filtered phenotypes; returns the text when output_file is None.

    The output delimiter is, in order of precedence: the explicit
    "csv"/"tsv" choice, the output file extension, the input file extension.
    """
    if output_delimiter is not None:
        sep = DELIMITERS[output_delimiter]
    elif output_file is not None:
        sep = delimiter_for(output_file)
    elif input_file is not None:
        sep = delimiter_for(input_file)
    else:
        sep = "\t"

    if output_file is None:
        return df.to_csv(sep=sep, index=False)

    df.to_csv(output_file, sep=sep, index=False)
    return ""
