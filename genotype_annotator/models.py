"""Data models for the genotype annotator.

Roster, decoded genotypes, per-record cohort statistics and gene burden
rows.
"""

from dataclasses import dataclass, field
from enum import Enum, auto


class GenotypeClass(Enum):
    """Classification of a single normalized genotype code."""

    REFERENCE = auto()
    HETEROZYGOUS = auto()
    HOMOZYGOUS_ALT = auto()
    NO_CALL = auto()
    VARIANT_OTHER = auto()  # haploid alt or other non-reference call

    @property
    def is_variant(self) -> bool:
        """Anything that is neither reference nor a no-call."""
        return self not in (GenotypeClass.REFERENCE, GenotypeClass.NO_CALL)


@dataclass(frozen=True, slots=True)
class SampleRoster:
    """Ordered sample identifier sets.

    Attributes:
        samples: All samples, in genotype vector order
        probands: Case samples (subset of samples)
        controls: Control samples (subset of samples)
    """

    samples: tuple[str, ...]
    probands: tuple[str, ...]
    controls: tuple[str, ...]

    @property
    def has_controls(self) -> bool:
        return bool(self.controls)


@dataclass(slots=True)
class DecodedGenotype:
    """One roster position of a decoded genotype vector.

    Attributes:
        sample_id: Sample identifier at this position
        raw: Genotype code as read from the vector
        code: Genotype code after phasing and multiallelic normalization
        genotype_class: Classification of the normalized code
        collapsed: True if an allele index >= 2 was collapsed to 1
    """

    sample_id: str
    raw: str
    code: str
    genotype_class: GenotypeClass
    collapsed: bool = False


@dataclass
class CohortStatistics:
    """Genotype statistics of one cohort for a single record."""

    denominator: int = 0
    variant_count: int = 0
    het_count: int = 0
    hom_count: int = 0

    @property
    def allele_count(self) -> int:
        """Alternate alleles carried: one per het, two per hom-alt."""
        return self.het_count + 2 * self.hom_count

    def as_columns(self) -> list[str]:
        return [str(self.denominator), str(self.variant_count), str(self.allele_count)]


@dataclass(frozen=True, slots=True)
class GeneBurdenRow:
    """Per-gene allele burden comparison between probands and controls.

    Attributes:
        gene: Gene identifier
        proband_alleles: Summed proband alternate allele count
        control_alleles: Summed control alternate allele count
        max_proband_count: Largest proband denominator seen for the gene
        max_control_count: Largest control denominator seen for the gene
        proband_ref_alleles: max_proband_count * 2 - proband_alleles
        control_ref_alleles: max_control_count * 2 - control_alleles
        fisher_p_value: Two-sided Fisher exact p-value (NaN when flagged)
        flagged: True if a derived reference count was negative
    """

    gene: str
    proband_alleles: int
    control_alleles: int
    max_proband_count: int
    max_control_count: int
    proband_ref_alleles: int
    control_ref_alleles: int
    fisher_p_value: float
    flagged: bool = False

    @property
    def contingency_table(self) -> list[list[int]]:
        return [
            [self.proband_alleles, self.control_alleles],
            [self.proband_ref_alleles, self.control_ref_alleles],
        ]


@dataclass
class SummaryStatistics:
    """Basic statistics over an annotated variant table."""

    num_variants: int = 0
    num_samples: int = 0
    num_genes: int = 0
    het_counts: int = 0
    hom_counts: int = 0
    effect_counts: dict[str, int] = field(default_factory=dict)
    impact_counts: dict[str, int] = field(default_factory=dict)


@dataclass
class RunStatistics:
    """Counters collected while streaming records in rewrite or list mode."""

    records: int = 0
    emitted_tokens: int = 0
    no_calls: int = 0
    multiallelic_collapsed: int = 0
