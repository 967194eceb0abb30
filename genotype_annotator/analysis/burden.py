"""Gene burden analysis with Fisher's exact test.

Aggregates per-variant proband/control allele counts per gene and compares
alternate vs reference allele load with a two-sided Fisher exact test on

                 probands              controls
    alt      proband_alleles       control_alleles
    ref      proband_ref_alleles   control_ref_alleles

where ref alleles are derived as 2 * max(denominator) - alt alleles.
"""

import logging
import math
import warnings
from pathlib import Path

import pandas as pd
from scipy.stats import fisher_exact

from genotype_annotator.exceptions import (
    MissingInputError,
    NegativeDerivedCountAnomaly,
    SchemaError,
)
from genotype_annotator.models import GeneBurdenRow

logger = logging.getLogger(__name__)

PROBAND_STAT_COLUMNS = ("proband_count", "proband_allele_count")
CONTROL_STAT_COLUMNS = ("control_count", "control_allele_count")


def load_annotated_table(filepath: Path, delimiter: str = "\t") -> pd.DataFrame:
    """Read an annotated variant table (tab-separated by default, may be gzipped).

    Args:
        filepath: Path to the table written by the replace command
        delimiter: Single-character field delimiter

    Returns:
        DataFrame with one row per variant

    Raises:
        MissingInputError: If the file doesn't exist
    """
    if not filepath.exists():
        raise MissingInputError(f"Input file not found: {filepath}")

    logger.info("Reading data from %s", filepath)
    return pd.read_csv(
        filepath,
        sep=delimiter,
        dtype=str,
        keep_default_na=False,
        compression="infer",
    )


def validate_schema(df: pd.DataFrame, gene_column: str = "GENE") -> bool:
    """Check the columns required for gene burden analysis.

    Args:
        df: Annotated variant table
        gene_column: Name of the gene identifier column

    Returns:
        True if control statistic columns are present, False if absent

    Raises:
        SchemaError: If the gene or proband columns are missing, or only
            one of the control columns is present
    """
    required = [gene_column, *PROBAND_STAT_COLUMNS]
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise SchemaError(f"Missing required columns: {', '.join(missing)}")

    present = [c for c in CONTROL_STAT_COLUMNS if c in df.columns]
    if present and len(present) != len(CONTROL_STAT_COLUMNS):
        absent = [c for c in CONTROL_STAT_COLUMNS if c not in df.columns]
        raise SchemaError(f"Missing required columns: {', '.join(absent)}")

    return bool(present)


def _numeric_column(df: pd.DataFrame, column: str) -> pd.Series:
    values = pd.to_numeric(df[column], errors="coerce")
    if values.isna().any():
        bad = df.loc[values.isna(), column].iloc[0]
        raise SchemaError(f"Non-numeric value {bad!r} in column '{column}'")
    return values.astype("int64")


def fisher_p_value(table: list[list[int]]) -> float:
    """Two-sided Fisher exact test p-value of a 2x2 table."""
    _, p_value = fisher_exact(table, alternative="two-sided")
    return float(p_value)


def perform_gene_burden_analysis(
    df: pd.DataFrame,
    gene_column: str = "GENE",
) -> list[GeneBurdenRow]:
    """Aggregate allele counts per gene and test proband vs control burden.

    Genes are reported in order of first appearance. A gene whose derived
    reference allele count is negative is kept with a NaN p-value and
    flagged, and a NegativeDerivedCountAnomaly warning is issued.

    Args:
        df: Annotated variant table with statistic columns
        gene_column: Name of the gene identifier column

    Returns:
        One GeneBurdenRow per distinct gene

    Raises:
        SchemaError: If required columns are missing or non-numeric
    """
    has_controls = validate_schema(df, gene_column)

    counts = pd.DataFrame({"gene": df[gene_column].astype(str)})
    counts["proband_count"] = _numeric_column(df, "proband_count")
    counts["proband_allele_count"] = _numeric_column(df, "proband_allele_count")
    if has_controls:
        counts["control_count"] = _numeric_column(df, "control_count")
        counts["control_allele_count"] = _numeric_column(df, "control_allele_count")
    else:
        logger.info("No control statistic columns, control counts set to 0")
        counts["control_count"] = 0
        counts["control_allele_count"] = 0

    missing_gene = counts["gene"] == ""
    if missing_gene.any():
        logger.warning("Skipping %d variant(s) without a gene identifier", int(missing_gene.sum()))
        counts = counts[~missing_gene]

    grouped = counts.groupby("gene", sort=False).agg(
        proband_alleles=("proband_allele_count", "sum"),
        control_alleles=("control_allele_count", "sum"),
        max_proband_count=("proband_count", "max"),
        max_control_count=("control_count", "max"),
    )

    rows: list[GeneBurdenRow] = []
    for gene, agg in grouped.iterrows():
        proband_alleles = int(agg["proband_alleles"])
        control_alleles = int(agg["control_alleles"])
        max_proband_count = int(agg["max_proband_count"])
        max_control_count = int(agg["max_control_count"])
        proband_ref_alleles = max_proband_count * 2 - proband_alleles
        control_ref_alleles = max_control_count * 2 - control_alleles

        flagged = proband_ref_alleles < 0 or control_ref_alleles < 0
        if flagged:
            warnings.warn(
                f"Negative derived reference allele count for gene {gene} "
                f"(proband_ref_alleles={proband_ref_alleles}, "
                f"control_ref_alleles={control_ref_alleles}); p-value not computed",
                NegativeDerivedCountAnomaly,
                stacklevel=2,
            )
            p_value = math.nan
        else:
            p_value = fisher_p_value(
                [
                    [proband_alleles, control_alleles],
                    [proband_ref_alleles, control_ref_alleles],
                ]
            )

        rows.append(
            GeneBurdenRow(
                gene=str(gene),
                proband_alleles=proband_alleles,
                control_alleles=control_alleles,
                max_proband_count=max_proband_count,
                max_control_count=max_control_count,
                proband_ref_alleles=proband_ref_alleles,
                control_ref_alleles=control_ref_alleles,
                fisher_p_value=p_value,
                flagged=flagged,
            )
        )

    logger.info("Gene burden computed for %d genes", len(rows))
    return rows
