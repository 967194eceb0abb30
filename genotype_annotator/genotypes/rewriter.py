"""Genotype field rewriting and per-record cohort statistics.

Replaces the genotype vector of each record with the ids of the samples
carrying a variant, optionally annotated with their genotype, and appends
proband/control statistic columns:

    0/1,0/0,1/1   ->   S1,S3            (default)
                  ->   S1(0/1),S3(1/1)  (append_genotype)

Reference and no-call entries are dropped. Sample order follows the
roster, never sorted.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from genotype_annotator.exceptions import SchemaError
from genotype_annotator.genotypes.decoder import decode_genotypes
from genotype_annotator.models import (
    CohortStatistics,
    DecodedGenotype,
    GenotypeClass,
    RunStatistics,
    SampleRoster,
)

logger = logging.getLogger(__name__)

PROBAND_COLUMNS = ("proband_count", "proband_variant_count", "proband_allele_count")
CONTROL_COLUMNS = ("control_count", "control_variant_count", "control_allele_count")


@dataclass(frozen=True, slots=True)
class RewriteOptions:
    """Options controlling the rewritten genotype field.

    Attributes:
        append_genotype: Emit "sample(genotype)" instead of "sample"
        separator: Separator between emitted sample tokens
        include_nocalls: Add one to the cohort denominator per no-call
        count_genotypes: Append proband/control statistic columns
    """

    append_genotype: bool = False
    separator: str = ","
    include_nocalls: bool = False
    count_genotypes: bool = False


@dataclass(frozen=True, slots=True)
class ColumnPlan:
    """Output layout resolved once before any record is processed.

    Attributes:
        gt_index: 0-based index of the genotype vector field
        trailing_columns: Statistic column names appended to every line
        probands: Proband ids as a set for membership tests
        controls: Control ids as a set (empty when there are no controls)
    """

    gt_index: int
    trailing_columns: tuple[str, ...]
    probands: frozenset[str]
    controls: frozenset[str]

    @classmethod
    def build(
        cls,
        gt_field: int,
        roster: SampleRoster,
        options: RewriteOptions,
    ) -> "ColumnPlan":
        """Resolve the column plan for a roster and options.

        Args:
            gt_field: 1-based index of the genotype vector field
            roster: Sample roster
            options: Rewrite options

        Returns:
            ColumnPlan with 0, 3 or 6 trailing columns
        """
        if gt_field < 1:
            raise ValueError(f"Genotype field index must be >= 1: {gt_field}")

        trailing: tuple[str, ...] = ()
        if options.count_genotypes:
            trailing = PROBAND_COLUMNS
            if roster.has_controls:
                trailing += CONTROL_COLUMNS

        return cls(
            gt_index=gt_field - 1,
            trailing_columns=trailing,
            probands=frozenset(roster.probands),
            controls=frozenset(roster.controls),
        )

    @property
    def counts_controls(self) -> bool:
        return len(self.trailing_columns) == len(PROBAND_COLUMNS) + len(CONTROL_COLUMNS)


def format_genotype_field(
    decoded: Iterable[DecodedGenotype],
    append_genotype: bool = False,
    separator: str = ",",
) -> str:
    """Render the carriers of a decoded vector as the new genotype field.

    Args:
        decoded: Decoded genotype entries in roster order
        append_genotype: Append the normalized genotype in parentheses
        separator: Separator between sample tokens

    Returns:
        Joined sample tokens, or "" if no sample carries a variant
    """
    tokens = []
    for entry in decoded:
        if not entry.genotype_class.is_variant:
            continue
        if append_genotype:
            tokens.append(f"{entry.sample_id}({entry.code})")
        else:
            tokens.append(entry.sample_id)
    return separator.join(tokens)


def compute_cohort_statistics(
    decoded: Iterable[DecodedGenotype],
    members: frozenset[str],
    include_nocalls: bool = False,
) -> CohortStatistics:
    """Count genotypes of one cohort for a single record.

    The denominator starts at the cohort size and grows by one per
    no-call when include_nocalls is set.

    Args:
        decoded: Decoded genotype entries of the record
        members: Sample ids belonging to the cohort
        include_nocalls: Count no-calls into the denominator

    Returns:
        CohortStatistics for the cohort
    """
    stats = CohortStatistics(denominator=len(members))
    for entry in decoded:
        if entry.sample_id not in members:
            continue
        genotype_class = entry.genotype_class
        if genotype_class is GenotypeClass.NO_CALL:
            if include_nocalls:
                stats.denominator += 1
            continue
        if not genotype_class.is_variant:
            continue
        stats.variant_count += 1
        if genotype_class is GenotypeClass.HETEROZYGOUS:
            stats.het_count += 1
        elif genotype_class is GenotypeClass.HOMOZYGOUS_ALT:
            stats.hom_count += 1
    return stats


class RecordRewriter:
    """Rewrite the genotype field of variant records.

    Usage:
        rewriter = RecordRewriter(roster, gt_field=6, options=options)
        header = rewriter.rewrite_header(header_fields)
        for line_num, fields in records:
            out = rewriter.rewrite(fields, line_num)
    """

    def __init__(
        self,
        roster: SampleRoster,
        gt_field: int,
        options: RewriteOptions | None = None,
        stats: RunStatistics | None = None,
    ) -> None:
        self.roster = roster
        self.options = options or RewriteOptions()
        self.plan = ColumnPlan.build(gt_field, roster, self.options)
        self.stats = stats if stats is not None else RunStatistics()

    def rewrite_header(self, fields: list[str]) -> list[str]:
        """Return the header with the statistic column names appended."""
        return fields + list(self.plan.trailing_columns)

    def decode(self, fields: list[str], line_number: int) -> list[DecodedGenotype]:
        """Decode the genotype field of a record and report collapses.

        Raises:
            SchemaError: If the record has no field at the genotype position
            GenotypeArityError: If the vector length differs from the roster
        """
        if len(fields) <= self.plan.gt_index:
            raise SchemaError(
                f"Line {line_number} has {len(fields)} fields, genotype field "
                f"is column {self.plan.gt_index + 1}"
            )

        decoded = decode_genotypes(fields[self.plan.gt_index], self.roster, line_number)

        self.stats.records += 1
        for entry in decoded:
            if entry.collapsed:
                self.stats.multiallelic_collapsed += 1
                logger.warning(
                    "Multiallelic genotype collapsed at line %d, sample %s: %s -> %s",
                    line_number,
                    entry.sample_id,
                    entry.raw,
                    entry.code,
                )
            if entry.genotype_class is GenotypeClass.NO_CALL:
                self.stats.no_calls += 1
        return decoded

    def rewrite(self, fields: list[str], line_number: int) -> list[str]:
        """Rewrite one record.

        Args:
            fields: Fields of the record
            line_number: Line number, for diagnostics

        Returns:
            New field list: genotype field replaced, statistic columns appended
        """
        decoded = self.decode(fields, line_number)
        options = self.options

        new_field = format_genotype_field(
            decoded,
            append_genotype=options.append_genotype,
            separator=options.separator,
        )
        self.stats.emitted_tokens += sum(1 for e in decoded if e.genotype_class.is_variant)

        out = list(fields)
        out[self.plan.gt_index] = new_field

        if self.plan.trailing_columns:
            proband_stats = compute_cohort_statistics(
                decoded, self.plan.probands, options.include_nocalls
            )
            out.extend(proband_stats.as_columns())
            if self.plan.counts_controls:
                control_stats = compute_cohort_statistics(
                    decoded, self.plan.controls, options.include_nocalls
                )
                out.extend(control_stats.as_columns())

        return out


def rewrite_records(
    records: Iterable[tuple[int, list[str]]],
    rewriter: RecordRewriter,
) -> Iterator[list[str]]:
    """Rewrite a record stream whose first element is the header.

    Output order equals input order.
    """
    is_header = True
    for line_num, fields in records:
        if is_header:
            is_header = False
            yield rewriter.rewrite_header(fields)
            continue
        yield rewriter.rewrite(fields, line_num)
