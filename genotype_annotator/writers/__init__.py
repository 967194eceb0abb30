"""Output writers for gene burden results, statistics and console summaries."""

from genotype_annotator.writers.report import write_gene_burden, write_statistics

__all__ = ["write_gene_burden", "write_statistics"]
