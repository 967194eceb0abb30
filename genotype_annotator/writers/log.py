"""Console summaries of a run."""

from rich.console import Console

from genotype_annotator.models import GeneBurdenRow, RunStatistics, SummaryStatistics


def print_summary(stats: SummaryStatistics, console: Console) -> None:
    """Print summary statistics.

    Args:
        stats: Statistics computed over the annotated table
        console: Console to print to
    """
    console.print(f"Number of variants: {stats.num_variants}")
    console.print(f"Number of samples: {stats.num_samples}")
    console.print(f"Number of genes: {stats.num_genes}")
    console.print(f"Het counts: {stats.het_counts}")
    console.print(f"Hom counts: {stats.hom_counts}")

    if stats.effect_counts:
        console.print("Variant types:")
        for effect, n in stats.effect_counts.items():
            console.print(f"  {effect} {n}")

    if stats.impact_counts:
        console.print("Impact types:")
        for impact, n in stats.impact_counts.items():
            console.print(f"  {impact} {n}")


def print_run_summary(stats: RunStatistics, console: Console) -> None:
    """Print record counters collected in rewrite or list mode."""
    console.print(f"Records processed:       {stats.records:,}")
    console.print(f"Carrier genotypes:       {stats.emitted_tokens:,}")
    console.print(f"No-calls:                {stats.no_calls:,}")
    if stats.multiallelic_collapsed:
        console.print(
            f"[yellow]Multiallelic collapsed:  {stats.multiallelic_collapsed:,}[/yellow]"
        )


def print_burden_summary(rows: list[GeneBurdenRow], console: Console) -> None:
    """Print the number of tested genes and any flagged ones."""
    flagged = [row.gene for row in rows if row.flagged]
    console.print(f"Genes tested:            {len(rows) - len(flagged):,}")
    if flagged:
        console.print(
            f"[yellow]Genes flagged (negative reference counts): {', '.join(flagged)}[/yellow]"
        )
