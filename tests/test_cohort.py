"""Tests for carrier sample aggregation (list mode)."""

from genotype_annotator.genotypes.cohort import CohortAggregator, aggregate_carriers
from genotype_annotator.genotypes.decoder import decode_genotypes
from genotype_annotator.genotypes.rewriter import RecordRewriter
from genotype_annotator.models import SampleRoster


class TestCohortAggregator:
    """Tests for the carrier accumulator."""

    def test_union_over_records(self) -> None:
        roster = SampleRoster(samples=("S1", "S2"), probands=("S1", "S2"), controls=())
        aggregator = CohortAggregator()

        aggregator.add(decode_genotypes("0/1,0/0", roster))
        aggregator.add(decode_genotypes("0/0,1/1", roster))

        assert aggregator.finalize(",") == "S1,S2"

    def test_first_seen_order(self, roster: SampleRoster) -> None:
        aggregator = CohortAggregator()

        aggregator.add(decode_genotypes("0/0,0/0,0/1", roster))
        aggregator.add(decode_genotypes("1/1,0/0,0/1", roster))

        assert aggregator.carriers == ["S3", "S1"]

    def test_nocalls_never_qualify(self, roster: SampleRoster) -> None:
        aggregator = CohortAggregator()

        aggregator.add(decode_genotypes("./.,0/0,./1", roster))

        assert aggregator.finalize() == ""
        assert len(aggregator) == 0

    def test_custom_separator(self, roster: SampleRoster) -> None:
        aggregator = CohortAggregator()
        aggregator.add(decode_genotypes("0/1,0/1,0/0", roster))

        assert aggregator.finalize(";") == "S1;S2"


class TestAggregateCarriers:
    """Tests for list mode over a record stream."""

    def test_header_skipped(self, roster: SampleRoster) -> None:
        records = [
            (1, ["GENE", "GT"]),
            (2, ["BICC1", "0/0,0/1,0/0"]),
            (3, ["PKD1", "0/0,0/0,0|2"]),
        ]
        rewriter = RecordRewriter(roster, gt_field=2)

        aggregator = aggregate_carriers(records, rewriter)

        assert aggregator.carriers == ["S2", "S3"]
        assert rewriter.stats.records == 2
        assert rewriter.stats.multiallelic_collapsed == 1
