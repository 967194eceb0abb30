"""Carrier sample aggregation (list mode).

Collects, over a whole record stream, the samples with at least one
variant genotype. Nothing is emitted until the stream is exhausted.
"""

from collections.abc import Iterable

from genotype_annotator.genotypes.rewriter import RecordRewriter
from genotype_annotator.models import DecodedGenotype


class CohortAggregator:
    """Accumulates carrier samples in first-seen order.

    Example:
        >>> aggregator = CohortAggregator()
        >>> aggregator.add(decoded_record)
        >>> aggregator.finalize(",")
        "S1,S3"
    """

    def __init__(self) -> None:
        # dict keeps insertion order, giving a deterministic rendering
        self._carriers: dict[str, None] = {}

    def add(self, decoded: Iterable[DecodedGenotype]) -> None:
        """Add the variant carriers of one decoded record."""
        for entry in decoded:
            if entry.genotype_class.is_variant:
                self._carriers.setdefault(entry.sample_id, None)

    @property
    def carriers(self) -> list[str]:
        return list(self._carriers)

    def __len__(self) -> int:
        return len(self._carriers)

    def finalize(self, separator: str = ",") -> str:
        """Render the accumulated carriers as one delimited line ("" if none)."""
        return separator.join(self._carriers)


def aggregate_carriers(
    records: Iterable[tuple[int, list[str]]],
    rewriter: RecordRewriter,
) -> CohortAggregator:
    """Run list mode over a record stream whose first element is the header.

    The rewriter is only used to decode the genotype field, so collapse
    diagnostics and run statistics behave as in rewrite mode.
    """
    aggregator = CohortAggregator()
    is_header = True
    for line_num, fields in records:
        if is_header:
            is_header = False
            continue
        aggregator.add(rewriter.decode(fields, line_num))
    return aggregator
