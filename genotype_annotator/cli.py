"""Typer CLI for the genotype annotator.

Usage:
    # Replace genotypes with sample ids (stdin -> stdout)
    extract_fields ... | genotype-annotator replace -s samples.txt -g 14

    # Append genotypes and proband/control statistics
    genotype-annotator replace -i variants.tsv -o out.tsv -s samples.txt \\
        -p probands.txt --append-genotype --count-genotypes

    # List all samples carrying at least one variant
    genotype-annotator replace -i variants.tsv -s "S1,S2,S3" --list-samples

    # Summary statistics and gene burden test
    genotype-annotator analyze -i out.tsv -o burden.tsv --gene-burden
"""

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from genotype_annotator import __version__
from genotype_annotator.exceptions import GenotypeAnnotatorError

app = typer.Typer(
    name="genotype-annotator",
    help="Annotate variant tables with per-sample genotypes and test gene burden",
    add_completion=False,
)

# Data may go to stdout, so everything human-readable goes to stderr
console = Console(stderr=True)


class OutputDelimiter(str, Enum):
    """Phenotype output delimiter."""

    csv = "csv"
    tsv = "tsv"


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"genotype-annotator version {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version", "-V",
            help="Show version and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Genotype annotation and gene burden tools."""


def _fail(error: Exception, verbose: bool) -> None:
    console.print(f"[red]ERROR:[/red] {error}")
    if verbose:
        import traceback
        console.print(traceback.format_exc())
    raise typer.Exit(code=1)


def _field_delimiter(value: str) -> str:
    if value in ("\\t", "tab"):
        return "\t"
    return value


def _report_config_errors(errors: list[str]) -> None:
    if errors:
        for error in errors:
            console.print(f"[red]ERROR:[/red] {error}")
        raise typer.Exit(code=1)


@app.command()
def replace(
    samples: Annotated[
        str,
        typer.Option(
            "--samples", "-s",
            help=(
                "Sample ids in genotype vector order: comma-separated list or file "
                "(a single value that is not an existing file is read as one sample id)"
            ),
        ),
    ],
    probands: Annotated[
        str | None,
        typer.Option(
            "--probands", "-p",
            help="Proband ids: list or file (default: all samples)",
        ),
    ] = None,
    controls: Annotated[
        str | None,
        typer.Option(
            "--controls", "-c",
            help="Control ids: list or file (default: samples that are not probands)",
        ),
    ] = None,
    input_file: Annotated[
        str,
        typer.Option(
            "--input", "-i",
            help="Variant table (tab-delimited with header, may be gzipped); '-' for stdin",
        ),
    ] = "-",
    output_file: Annotated[
        str,
        typer.Option(
            "--output", "-o",
            help="Output file; '-' for stdout",
        ),
    ] = "-",
    gt_field: Annotated[
        int | None,
        typer.Option(
            "--gt-field", "-g",
            help="1-based column number of the genotype field (default: locate by --gt-column)",
            min=1,
        ),
    ] = None,
    gt_column: Annotated[
        str,
        typer.Option(
            "--gt-column",
            help="Header name of the genotype field",
        ),
    ] = "GT",
    delimiter: Annotated[
        str,
        typer.Option(
            "--delimiter", "-d",
            help="Single-character field delimiter of the table ('\\t' or 'tab' for tab)",
        ),
    ] = "\\t",
    separator: Annotated[
        str,
        typer.Option(
            "--separator",
            help="Separator between sample ids in the rewritten field",
        ),
    ] = ",",
    append_genotype: Annotated[
        bool,
        typer.Option(
            "--append-genotype",
            help="Append the genotype in parentheses after each sample id",
        ),
    ] = False,
    include_nocalls: Annotated[
        bool,
        typer.Option(
            "--include-nocalls",
            help="Count no-call genotypes into the proband/control counts",
        ),
    ] = False,
    count_genotypes: Annotated[
        bool,
        typer.Option(
            "--count-genotypes",
            help="Append proband/control count, variant count and allele count columns",
        ),
    ] = False,
    list_samples: Annotated[
        bool,
        typer.Option(
            "--list-samples",
            help="Only output the samples carrying at least one variant",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose", "-v",
            help="Enable verbose logging",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Also write detailed logs to this file",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """Replace genotype vectors with the ids of the samples carrying a variant.

    Reference (0/0) and no-call genotypes are removed; phased genotypes are
    unphased and alternate alleles >= 2 are collapsed to 1.
    """
    from genotype_annotator.config import ReplaceConfig
    from genotype_annotator.logging_config import setup_logging
    from genotype_annotator.main import run_replace

    setup_logging(verbose=verbose, log_file=log_file)

    config = ReplaceConfig(
        samples=samples,
        probands=probands,
        controls=controls,
        input_file=input_file,
        output_file=output_file,
        gt_field=gt_field,
        gt_column=gt_column,
        delimiter=_field_delimiter(delimiter),
        separator=separator,
        append_genotype=append_genotype,
        include_nocalls=include_nocalls,
        count_genotypes=count_genotypes,
        list_samples=list_samples,
        verbose=verbose,
        log_file=log_file,
    )
    _report_config_errors(config.validate())

    try:
        run_replace(config, console=console)
    except (GenotypeAnnotatorError, OSError, ValueError) as e:
        _fail(e, verbose)


@app.command()
def analyze(
    input_file: Annotated[
        Path,
        typer.Option(
            "--input", "-i",
            help="Annotated variant table written by 'replace --count-genotypes'",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    output_file: Annotated[
        Path | None,
        typer.Option(
            "--output", "-o",
            help="Gene burden output TSV",
            dir_okay=False,
        ),
    ] = None,
    stats_file: Annotated[
        Path | None,
        typer.Option(
            "--stats", "-s",
            help="Write summary statistics to this TSV",
            dir_okay=False,
        ),
    ] = None,
    gene_burden: Annotated[
        bool,
        typer.Option(
            "--gene-burden", "-g",
            help="Perform gene burden analysis with Fisher's exact test",
        ),
    ] = False,
    gene_column: Annotated[
        str,
        typer.Option(
            "--gene-column",
            help="Name of the gene identifier column",
        ),
    ] = "GENE",
    gt_column: Annotated[
        str,
        typer.Option(
            "--gt-column",
            help="Name of the rewritten genotype column",
        ),
    ] = "GT",
    delimiter: Annotated[
        str,
        typer.Option(
            "--delimiter", "-d",
            help="Single-character field delimiter of the table ('\\t' or 'tab' for tab)",
        ),
    ] = "\\t",
    separator: Annotated[
        str,
        typer.Option(
            "--separator",
            help="Separator between sample ids in the genotype column",
        ),
    ] = ",",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose", "-v",
            help="Enable verbose logging",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Also write detailed logs to this file",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """Calculate basic statistics and per-gene burden of an annotated table."""
    from genotype_annotator.config import AnalyzeConfig
    from genotype_annotator.logging_config import setup_logging
    from genotype_annotator.main import run_analyze

    setup_logging(verbose=verbose, log_file=log_file)

    config = AnalyzeConfig(
        input_file=input_file,
        output_file=output_file,
        stats_file=stats_file,
        gene_burden=gene_burden,
        gene_column=gene_column,
        gt_column=gt_column,
        delimiter=_field_delimiter(delimiter),
        separator=separator,
        verbose=verbose,
        log_file=log_file,
    )
    _report_config_errors(config.validate())

    try:
        run_analyze(config, console=console)
    except (GenotypeAnnotatorError, OSError, ValueError) as e:
        _fail(e, verbose)


@app.command("filter-phenotypes")
def filter_phenotypes_command(
    input_file: Annotated[
        Path,
        typer.Option(
            "--input-file", "-f",
            help="CSV/TSV phenotype table",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    column_name: Annotated[
        str,
        typer.Option(
            "--column-name", "-c",
            help="Column containing sample ids",
        ),
    ],
    samples: Annotated[
        str,
        typer.Option(
            "--samples", "-s",
            help="Sample ids: comma-separated list or file",
        ),
    ],
    output_file: Annotated[
        Path | None,
        typer.Option(
            "--output-file", "-o",
            help="Output CSV/TSV (default: stdout)",
            dir_okay=False,
        ),
    ] = None,
    output_delimiter: Annotated[
        OutputDelimiter | None,
        typer.Option(
            "--output-delimiter", "-d",
            help="Output format (default: from output or input extension)",
        ),
    ] = None,
) -> None:
    """Filter a phenotype table to the rows of the given samples."""
    from genotype_annotator.config import PhenotypeFilterConfig
    from genotype_annotator.logging_config import setup_logging
    from genotype_annotator.main import run_filter_phenotypes

    setup_logging()

    config = PhenotypeFilterConfig(
        input_file=input_file,
        samples=samples,
        column_name=column_name,
        output_file=output_file,
        output_delimiter=output_delimiter.value if output_delimiter else None,
    )
    _report_config_errors(config.validate())

    try:
        run_filter_phenotypes(config, console=console)
    except (GenotypeAnnotatorError, OSError, ValueError) as e:
        _fail(e, verbose=False)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
