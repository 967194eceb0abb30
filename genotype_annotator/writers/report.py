"""TSV writers for gene burden results and summary statistics."""

from dataclasses import asdict
from pathlib import Path

import pandas as pd

from genotype_annotator.models import GeneBurdenRow, SummaryStatistics

BURDEN_COLUMNS = [
    "GENE",
    "proband_alleles",
    "control_alleles",
    "max_proband_count",
    "max_control_count",
    "proband_ref_alleles",
    "control_ref_alleles",
    "fisher_p_value",
    "flagged",
]


def burden_dataframe(rows: list[GeneBurdenRow]) -> pd.DataFrame:
    """Convert gene burden rows to a DataFrame with the output column names."""
    fields = ["gene", *BURDEN_COLUMNS[1:]]
    df = pd.DataFrame([asdict(row) for row in rows], columns=fields)
    return df.rename(columns={"gene": "GENE"})


def write_gene_burden(rows: list[GeneBurdenRow], output_path: Path) -> Path:
    """Write gene burden results as TSV (NaN p-values written as NA).

    Args:
        rows: Gene burden rows
        output_path: Output TSV path

    Returns:
        Path to the written file
    """
    burden_dataframe(rows).to_csv(output_path, sep="\t", index=False, na_rep="NA")
    return output_path


def write_statistics(stats: SummaryStatistics, output_path: Path) -> Path:
    """Write summary statistics as metric/value TSV blocks.

    The first block has no header; effect and impact counts follow as
    separate headed blocks, matching what downstream spreadsheets expect.
    """
    metrics = [
        ("Number of variants", stats.num_variants),
        ("Number of samples", stats.num_samples),
        ("Number of genes", stats.num_genes),
        ("Het counts", stats.het_counts),
        ("Hom counts", stats.hom_counts),
    ]

    with open(output_path, "w") as f:
        for metric, value in metrics:
            f.write(f"{metric}\t{value}\n")

        if stats.effect_counts:
            f.write("EFFECT\tn\n")
            for effect, n in stats.effect_counts.items():
                f.write(f"{effect}\t{n}\n")

        if stats.impact_counts:
            f.write("IMPACT\tn\n")
            for impact, n in stats.impact_counts.items():
                f.write(f"{impact}\t{n}\n")

    return output_path
