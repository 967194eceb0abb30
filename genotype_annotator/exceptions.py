"""Error types raised by the genotype annotator.

All fatal conditions derive from GenotypeAnnotatorError so the CLI can
report them uniformly and exit non-zero.
"""


class GenotypeAnnotatorError(Exception):
    """Base class for all fatal genotype annotator errors."""


class MissingInputError(GenotypeAnnotatorError, FileNotFoundError):
    """A required roster or input source is absent or unreadable."""


class RosterConsistencyError(GenotypeAnnotatorError, ValueError):
    """Proband/control identifier missing from samples, or duplicate sample."""


class GenotypeArityError(GenotypeAnnotatorError, ValueError):
    """Genotype vector length does not match the sample roster length."""

    def __init__(self, line_number: int, observed: int, expected: int) -> None:
        self.line_number = line_number
        self.observed = observed
        self.expected = expected
        super().__init__(
            f"Genotype vector at line {line_number} has {observed} entries, "
            f"expected {expected} (one per sample)"
        )


class GenotypeCodeError(GenotypeAnnotatorError, ValueError):
    """A genotype code could not be parsed."""


class SchemaError(GenotypeAnnotatorError, ValueError):
    """A required column is absent from the input table."""


class NegativeDerivedCountAnomaly(UserWarning):
    """A gene's derived reference-allele count is negative.

    Happens when per-record denominators vary within a gene, for example
    when no-calls were counted into the denominator for some records.
    """
