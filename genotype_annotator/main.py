"""Main orchestration for the genotype annotator.

Implements the run functions behind the CLI commands:
- run_replace(): rewrite genotype fields (or list carriers) of a variant table
- run_analyze(): summary statistics and gene burden over an annotated table
- run_filter_phenotypes(): filter a phenotype table by sample ids
"""

import logging
from collections.abc import Iterator

from rich.console import Console

from genotype_annotator.analysis.burden import (
    load_annotated_table,
    perform_gene_burden_analysis,
)
from genotype_annotator.analysis.summary import compute_summary
from genotype_annotator.config import AnalyzeConfig, PhenotypeFilterConfig, ReplaceConfig
from genotype_annotator.exceptions import MissingInputError
from genotype_annotator.filters import filter_phenotypes, write_phenotypes
from genotype_annotator.genotypes.cohort import aggregate_carriers
from genotype_annotator.genotypes.rewriter import (
    RecordRewriter,
    RewriteOptions,
    rewrite_records,
)
from genotype_annotator.io_utils import open_output
from genotype_annotator.models import RunStatistics
from genotype_annotator.parsers.records import locate_column, parse_records
from genotype_annotator.parsers.roster import resolve_roster
from genotype_annotator.writers.log import (
    print_burden_summary,
    print_run_summary,
    print_summary,
)
from genotype_annotator.writers.report import write_gene_burden, write_statistics

logger = logging.getLogger(__name__)

# Diagnostics never share stdout with data
console = Console(stderr=True)


def run_replace(config: ReplaceConfig, console: Console = console) -> RunStatistics:
    """Rewrite the genotype field of a variant table, or list carrier samples.

    Steps:
    1. Resolve the sample roster
    2. Read the header and locate the genotype field
    3. Stream records through the rewriter (or the carrier aggregator)
    4. Write output in input order

    Args:
        config: Replace configuration
        console: Console for progress output (stderr)

    Returns:
        RunStatistics collected while processing

    Raises:
        MissingInputError: If the roster or input is missing
        RosterConsistencyError: If the roster is inconsistent
        GenotypeArityError: If a genotype vector doesn't match the roster
        SchemaError: If the genotype column cannot be located
    """
    roster = resolve_roster(
        config.samples,
        config.probands,
        config.controls,
        delimiter=config.list_delimiter,
    )
    console.print(
        f"Roster: {len(roster.samples)} samples, {len(roster.probands)} probands, "
        f"{len(roster.controls)} controls"
    )

    records = parse_records(config.input_file, config.delimiter)
    try:
        header_line, header = next(records)
    except StopIteration:
        raise MissingInputError(f"Input is empty: {config.input_file}") from None
    except FileNotFoundError as e:
        raise MissingInputError(str(e)) from e

    gt_field = config.gt_field or locate_column(header, config.gt_column)
    logger.debug("Genotype field is column %d", gt_field)

    options = RewriteOptions(
        append_genotype=config.append_genotype,
        separator=config.separator,
        include_nocalls=config.include_nocalls,
        count_genotypes=config.count_genotypes,
    )
    stats = RunStatistics()
    rewriter = RecordRewriter(roster, gt_field, options, stats)

    # Put the header back in front of the remaining records
    stream = _chain_header(header_line, header, records)

    if config.list_samples:
        aggregator = aggregate_carriers(stream, rewriter)
        with open_output(config.output_file) as out:
            out.write(aggregator.finalize(config.separator) + "\n")
        console.print(f"Carrier samples:         {len(aggregator):,}")
    else:
        with open_output(config.output_file) as out:
            for fields in rewrite_records(stream, rewriter):
                out.write(config.delimiter.join(fields) + "\n")

    print_run_summary(stats, console)
    return stats


def _chain_header(
    header_line: int,
    header: list[str],
    records: Iterator[tuple[int, list[str]]],
) -> Iterator[tuple[int, list[str]]]:
    yield header_line, header
    yield from records


def run_analyze(config: AnalyzeConfig, console: Console = console) -> None:
    """Compute summary statistics and (optionally) the gene burden test.

    Args:
        config: Analyze configuration
        console: Console for the summary output

    Raises:
        MissingInputError: If the input table doesn't exist
        SchemaError: If required columns are missing
    """
    df = load_annotated_table(config.input_file, config.delimiter)

    # Schema problems must surface before anything is written
    rows = None
    if config.gene_burden:
        console.print("Performing gene burden analysis with Fisher's exact test...")
        rows = perform_gene_burden_analysis(df, config.gene_column)

    console.print("Calculating basic statistics...")
    stats = compute_summary(
        df,
        gt_column=config.gt_column,
        gene_column=config.gene_column,
        separator=config.separator,
    )
    print_summary(stats, console)

    if rows is not None:
        assert config.output_file is not None  # Checked in AnalyzeConfig.validate
        write_gene_burden(rows, config.output_file)
        print_burden_summary(rows, console)
        console.print(f"Gene burden results written to {config.output_file}")
    else:
        console.print("Skipping gene burden analysis...")

    if config.stats_file is not None:
        write_statistics(stats, config.stats_file)
        console.print(f"Statistics written to {config.stats_file}")


def run_filter_phenotypes(
    config: PhenotypeFilterConfig,
    console: Console = console,
) -> None:
    """Filter a phenotype table to the configured samples.

    Writes to the output file, or to stdout when none is configured.
    """
    df = filter_phenotypes(
        config.input_file,
        config.samples,
        config.column_name,
        list_delimiter=config.list_delimiter,
    )
    text = write_phenotypes(
        df,
        config.output_file,
        output_delimiter=config.output_delimiter,
        input_file=config.input_file,
    )
    if config.output_file is None:
        with open_output("-") as out:
            out.write(text)
        console.print("Filtering completed. Output sent to stdout.")
    else:
        console.print(f"Filtering completed. Output saved to {config.output_file}")
