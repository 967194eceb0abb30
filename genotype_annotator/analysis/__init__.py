"""Gene burden testing and summary statistics over annotated tables."""

from genotype_annotator.analysis.burden import (
    fisher_p_value,
    load_annotated_table,
    perform_gene_burden_analysis,
    validate_schema,
)
from genotype_annotator.analysis.summary import compute_summary, split_genotype_tokens

__all__ = [
    "fisher_p_value",
    "load_annotated_table",
    "perform_gene_burden_analysis",
    "validate_schema",
    "compute_summary",
    "split_genotype_tokens",
]
