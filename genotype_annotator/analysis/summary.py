"""Basic statistics over an annotated variant table."""

import re

import pandas as pd

from genotype_annotator.exceptions import SchemaError
from genotype_annotator.models import SummaryStatistics

# "S1(0/1)" -> sample "S1", genotype "0/1"
TOKEN_PATTERN = re.compile(r"^(?P<sample>.*?)(?:\((?P<genotype>[^()]*)\))?$")

HET_CODES = {"0/1", "1/0"}
HOM_CODES = {"1/1"}


def split_genotype_tokens(field: str, separator: str = ",") -> list[tuple[str, str | None]]:
    """Split a rewritten genotype field into (sample, genotype) pairs.

    Example:
        >>> split_genotype_tokens("S1(0/1);S3(1/1)", ";")
        [("S1", "0/1"), ("S3", "1/1")]
    """
    pairs = []
    for token in field.split(separator):
        token = token.strip()
        if not token:
            continue
        match = TOKEN_PATTERN.match(token)
        pairs.append((match.group("sample"), match.group("genotype")))
    return pairs


def compute_summary(
    df: pd.DataFrame,
    gt_column: str = "GT",
    gene_column: str = "GENE",
    separator: str = ",",
) -> SummaryStatistics:
    """Compute variant, sample, gene and genotype counts.

    Het/hom counts are only available when genotypes were appended to
    the sample ids.

    Args:
        df: Annotated variant table
        gt_column: Rewritten genotype column
        gene_column: Gene identifier column (optional in the table)
        separator: Separator between sample tokens

    Returns:
        SummaryStatistics

    Raises:
        SchemaError: If the genotype column is missing
    """
    if gt_column not in df.columns:
        raise SchemaError(f"Missing required columns: {gt_column}")

    stats = SummaryStatistics(num_variants=len(df))

    samples: set[str] = set()
    for field in df[gt_column].fillna("").astype(str):
        for sample, genotype in split_genotype_tokens(field, separator):
            samples.add(sample)
            if genotype in HET_CODES:
                stats.het_counts += 1
            elif genotype in HOM_CODES:
                stats.hom_counts += 1
    stats.num_samples = len(samples)

    if gene_column in df.columns:
        stats.num_genes = int(df[gene_column].replace("", pd.NA).nunique())

    if "EFFECT" in df.columns:
        stats.effect_counts = {str(k): int(v) for k, v in df["EFFECT"].value_counts().items()}
    if "IMPACT" in df.columns:
        stats.impact_counts = {str(k): int(v) for k, v in df["IMPACT"].value_counts().items()}

    return stats
