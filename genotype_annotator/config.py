"""Configuration dataclasses for the genotype annotator commands."""

from dataclasses import dataclass
from pathlib import Path

from genotype_annotator.io_utils import STDIO

DEFAULT_GT_COLUMN = "GT"
DEFAULT_GENE_COLUMN = "GENE"


@dataclass
class ReplaceConfig:
    """Configuration for genotype replacement (rewrite or list mode).

    Attributes:
        samples: Inline sample list or path to a sample file
        probands: Inline proband list or path (default: all samples)
        controls: Inline control list or path (default: samples minus probands)
        input_file: Variant table path, or "-" for stdin
        output_file: Output path, or "-" for stdout
        gt_field: 1-based index of the genotype column (located by name if None)
        gt_column: Header name used to locate the genotype column
        delimiter: Single-character field delimiter of the variant table
        list_delimiter: Delimiter of inline roster lists
        separator: Separator between sample tokens in the rewritten field
        append_genotype: Append "(genotype)" after each sample id
        include_nocalls: Count no-calls into the cohort denominators
        count_genotypes: Append proband/control statistic columns
        list_samples: Emit only the set of carrier samples (list mode)
        verbose: Enable debug logging
        log_file: Optional log file path
    """

    samples: str
    probands: str | None = None
    controls: str | None = None
    input_file: Path | str = STDIO
    output_file: Path | str = STDIO
    gt_field: int | None = None
    gt_column: str = DEFAULT_GT_COLUMN
    delimiter: str = "\t"
    list_delimiter: str = ","
    separator: str = ","
    append_genotype: bool = False
    include_nocalls: bool = False
    count_genotypes: bool = False
    list_samples: bool = False
    verbose: bool = False
    log_file: Path | None = None

    def __post_init__(self) -> None:
        if isinstance(self.input_file, str) and self.input_file != STDIO:
            self.input_file = Path(self.input_file)
        if isinstance(self.output_file, str) and self.output_file != STDIO:
            self.output_file = Path(self.output_file)
        if isinstance(self.log_file, str):
            self.log_file = Path(self.log_file)

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors.

        Returns:
            List of error messages (empty if valid)
        """
        errors: list[str] = []

        if not self.samples:
            errors.append("A sample list or sample file is required")

        if isinstance(self.input_file, Path) and not self.input_file.exists():
            errors.append(f"Input file not found: {self.input_file}")

        if self.gt_field is not None and self.gt_field < 1:
            errors.append(f"gt_field must be a positive 1-based index: {self.gt_field}")

        if len(self.delimiter) != 1:
            errors.append(f"Field delimiter must be a single character: {self.delimiter!r}")

        if not self.separator:
            errors.append("Sample separator must not be empty")
        elif not self.list_samples and self.delimiter in self.separator:
            errors.append(
                f"Sample separator {self.separator!r} must not contain the field "
                f"delimiter {self.delimiter!r}"
            )

        if self.list_samples and self.count_genotypes:
            errors.append("--list-samples cannot be combined with --count-genotypes")

        return errors


@dataclass
class AnalyzeConfig:
    """Configuration for summary statistics and gene burden analysis.

    Attributes:
        input_file: Annotated variant table (output of replace with statistics)
        output_file: Gene burden TSV path
        stats_file: Optional statistics TSV path
        gene_burden: Run the gene burden test
        gene_column: Name of the gene identifier column
        gt_column: Name of the rewritten genotype column
        delimiter: Single-character field delimiter of the table
        separator: Separator between sample tokens in the genotype column
        verbose: Enable debug logging
        log_file: Optional log file path
    """

    input_file: Path
    output_file: Path | None = None
    stats_file: Path | None = None
    gene_burden: bool = False
    gene_column: str = DEFAULT_GENE_COLUMN
    gt_column: str = DEFAULT_GT_COLUMN
    delimiter: str = "\t"
    separator: str = ","
    verbose: bool = False
    log_file: Path | None = None

    def __post_init__(self) -> None:
        if isinstance(self.input_file, str):
            self.input_file = Path(self.input_file)
        if isinstance(self.output_file, str):
            self.output_file = Path(self.output_file)
        if isinstance(self.stats_file, str):
            self.stats_file = Path(self.stats_file)
        if isinstance(self.log_file, str):
            self.log_file = Path(self.log_file)

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors: list[str] = []

        if not self.input_file.exists():
            errors.append(f"Input file not found: {self.input_file}")

        if self.gene_burden and self.output_file is None:
            errors.append("An output file is required for gene burden analysis")

        if len(self.delimiter) != 1:
            errors.append(f"Field delimiter must be a single character: {self.delimiter!r}")

        return errors


@dataclass
class PhenotypeFilterConfig:
    """Configuration for filtering a phenotype table by sample ids."""

    input_file: Path
    samples: str
    column_name: str
    output_file: Path | None = None
    output_delimiter: str | None = None
    list_delimiter: str = ","

    def __post_init__(self) -> None:
        if isinstance(self.input_file, str):
            self.input_file = Path(self.input_file)
        if isinstance(self.output_file, str):
            self.output_file = Path(self.output_file)

    def validate(self) -> list[str]:
        errors: list[str] = []

        if not self.input_file.exists():
            errors.append(f"Input file not found: {self.input_file}")

        if not self.column_name:
            errors.append("Column name is required")

        if not self.samples:
            errors.append("A sample list or sample file is required")

        return errors
