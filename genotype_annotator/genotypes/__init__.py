"""Genotype vector decoding, rewriting and carrier aggregation."""

from genotype_annotator.genotypes.cohort import CohortAggregator, aggregate_carriers
from genotype_annotator.genotypes.decoder import (
    classify_genotype,
    decode_genotypes,
    normalize_genotype,
)
from genotype_annotator.genotypes.rewriter import (
    CONTROL_COLUMNS,
    PROBAND_COLUMNS,
    ColumnPlan,
    RecordRewriter,
    RewriteOptions,
    compute_cohort_statistics,
    format_genotype_field,
    rewrite_records,
)

__all__ = [
    "CohortAggregator",
    "aggregate_carriers",
    "classify_genotype",
    "decode_genotypes",
    "normalize_genotype",
    "CONTROL_COLUMNS",
    "PROBAND_COLUMNS",
    "ColumnPlan",
    "RecordRewriter",
    "RewriteOptions",
    "compute_cohort_statistics",
    "format_genotype_field",
    "rewrite_records",
]
