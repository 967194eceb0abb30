"""End-to-end tests for the replace and analyze commands."""

from pathlib import Path

import pandas as pd
import pytest
from typer.testing import CliRunner

from genotype_annotator.cli import app
from genotype_annotator.config import AnalyzeConfig, ReplaceConfig
from genotype_annotator.exceptions import GenotypeArityError, MissingInputError
from genotype_annotator.main import run_analyze, run_replace

runner = CliRunner()


def replace_config(files: dict[str, Path], **kwargs) -> ReplaceConfig:
    return ReplaceConfig(
        samples=str(files["samples"]),
        probands=str(files["probands"]),
        input_file=files["variants"],
        output_file=files["dir"] / "annotated.tsv",
        **kwargs,
    )


class TestRunReplace:
    """Tests for run_replace()."""

    def test_rewrite_with_statistics(self, variant_files: dict[str, Path]) -> None:
        config = replace_config(variant_files, count_genotypes=True, append_genotype=True)

        stats = run_replace(config)

        lines = config.output_file.read_text().splitlines()
        assert lines[0].split("\t") == [
            "CHROM", "POS", "REF", "ALT", "GENE", "GT",
            "proband_count", "proband_variant_count", "proband_allele_count",
            "control_count", "control_variant_count", "control_allele_count",
        ]
        assert lines[1].split("\t")[5:] == ["S1(0/1),S4(1/1)", "2", "1", "1", "2", "1", "2"]
        assert lines[2].split("\t")[5:] == ["S2(1/0)", "2", "1", "1", "2", "0", "0"]
        assert lines[3].split("\t")[5:] == ["S4(0/1)", "2", "0", "0", "2", "1", "1"]
        assert stats.records == 3
        assert stats.multiallelic_collapsed == 1

    def test_include_nocalls_grows_denominator(self, variant_files: dict[str, Path]) -> None:
        config = replace_config(variant_files, count_genotypes=True, include_nocalls=True)

        run_replace(config)

        lines = config.output_file.read_text().splitlines()
        assert lines[1].split("\t")[5:] == ["S1,S4", "2", "1", "1", "2", "1", "2"]
        # S3 is a control with a no-call at PKD1
        assert lines[3].split("\t")[5:] == ["S4", "2", "0", "0", "3", "1", "1"]

    def test_gt_field_by_index(self, variant_files: dict[str, Path]) -> None:
        config = replace_config(variant_files, gt_field=6)

        run_replace(config)

        lines = config.output_file.read_text().splitlines()
        assert [line.split("\t")[5] for line in lines] == ["GT", "S1,S4", "S2", "S4"]

    def test_list_mode(self, variant_files: dict[str, Path]) -> None:
        config = replace_config(variant_files, list_samples=True)

        run_replace(config)

        assert config.output_file.read_text() == "S1,S4,S2\n"

    def test_arity_mismatch_aborts(self, variant_files: dict[str, Path]) -> None:
        config = replace_config(variant_files)
        config.samples = "S1,S2,S3"
        config.probands = None

        with pytest.raises(GenotypeArityError):
            run_replace(config)

    def test_empty_input(self, variant_files: dict[str, Path]) -> None:
        empty = variant_files["dir"] / "empty.tsv"
        empty.write_text("")
        config = replace_config(variant_files)
        config.input_file = empty

        with pytest.raises(MissingInputError, match="empty"):
            run_replace(config)


class TestRunAnalyze:
    """Tests for run_analyze() on replace output."""

    def test_gene_burden_pipeline(self, variant_files: dict[str, Path]) -> None:
        replace = replace_config(variant_files, count_genotypes=True)
        run_replace(replace)

        burden = variant_files["dir"] / "burden.tsv"
        stats_file = variant_files["dir"] / "stats.tsv"
        run_analyze(
            AnalyzeConfig(
                input_file=replace.output_file,
                output_file=burden,
                stats_file=stats_file,
                gene_burden=True,
            )
        )

        result = pd.read_csv(burden, sep="\t")
        bicc1 = result[result["GENE"] == "BICC1"].iloc[0]
        assert bicc1["proband_alleles"] == 2
        assert bicc1["control_alleles"] == 2
        assert bicc1["proband_ref_alleles"] == 2
        assert bicc1["control_ref_alleles"] == 2
        assert bicc1["fisher_p_value"] == pytest.approx(1.0)
        assert "Number of variants\t3" in stats_file.read_text()


class TestCli:
    """Tests for the typer CLI."""

    def test_replace_command(self, variant_files: dict[str, Path]) -> None:
        out = variant_files["dir"] / "cli.tsv"

        result = runner.invoke(app, [
            "replace",
            "-i", str(variant_files["variants"]),
            "-o", str(out),
            "-s", str(variant_files["samples"]),
            "--separator", ";",
            "--append-genotype",
        ])

        assert result.exit_code == 0
        assert out.read_text().splitlines()[1].split("\t")[5] == "S1(0/1);S4(1/1)"

    def test_pipe_delimited_table(self, tmp_path: Path) -> None:
        table = tmp_path / "variants.txt"
        table.write_text(
            "CHROM|POS|GENE|GT\n"
            "1|100|BICC1|0/1,0/0,1/1\n"
            "1|200|BICC1|0/0,./.,0/0\n"
        )
        annotated = tmp_path / "annotated.txt"
        burden = tmp_path / "burden.tsv"

        replaced = runner.invoke(app, [
            "replace",
            "-i", str(table),
            "-o", str(annotated),
            "-s", "S1,S2,S3",
            "-p", "S1",
            "--delimiter", "|",
            "--count-genotypes",
        ])
        analyzed = runner.invoke(app, [
            "analyze",
            "-i", str(annotated),
            "-o", str(burden),
            "--delimiter", "|",
            "--gene-burden",
        ])

        assert replaced.exit_code == 0
        assert annotated.read_text().splitlines()[1] == "1|100|BICC1|S1,S3|1|1|1|2|1|2"
        assert analyzed.exit_code == 0
        result = pd.read_csv(burden, sep="\t")
        assert result["proband_alleles"].tolist() == [1]
        assert result["control_alleles"].tolist() == [2]

    def test_tab_delimiter_spelled_out(self, variant_files: dict[str, Path]) -> None:
        out = variant_files["dir"] / "cli.tsv"

        result = runner.invoke(app, [
            "replace",
            "-i", str(variant_files["variants"]),
            "-o", str(out),
            "-s", str(variant_files["samples"]),
            "--delimiter", "tab",
        ])

        assert result.exit_code == 0
        assert out.read_text().splitlines()[1].split("\t")[5] == "S1,S4"

    def test_separator_equal_to_delimiter_rejected(self, variant_files: dict[str, Path]) -> None:
        out = variant_files["dir"] / "cli.tsv"

        result = runner.invoke(app, [
            "replace",
            "-i", str(variant_files["variants"]),
            "-o", str(out),
            "-s", str(variant_files["samples"]),
            "--separator", ",",
            "--delimiter", ",",
        ])

        assert result.exit_code == 1
        assert not out.exists()

    def test_unknown_proband_exits_nonzero(self, variant_files: dict[str, Path]) -> None:
        out = variant_files["dir"] / "cli.tsv"

        result = runner.invoke(app, [
            "replace",
            "-i", str(variant_files["variants"]),
            "-o", str(out),
            "-s", str(variant_files["samples"]),
            "-p", "S1,S9",
        ])

        assert result.exit_code == 1
        assert not out.exists()

    def test_arity_error_exits_nonzero(self, variant_files: dict[str, Path]) -> None:
        result = runner.invoke(app, [
            "replace",
            "-i", str(variant_files["variants"]),
            "-o", str(variant_files["dir"] / "cli.tsv"),
            "-s", "S1,S2",
        ])

        assert result.exit_code == 1

    def test_conflicting_modes_rejected(self, variant_files: dict[str, Path]) -> None:
        result = runner.invoke(app, [
            "replace",
            "-i", str(variant_files["variants"]),
            "-s", str(variant_files["samples"]),
            "--list-samples",
            "--count-genotypes",
        ])

        assert result.exit_code == 1

    def test_analyze_missing_columns(self, variant_files: dict[str, Path]) -> None:
        burden = variant_files["dir"] / "burden.tsv"

        result = runner.invoke(app, [
            "analyze",
            "-i", str(variant_files["variants"]),
            "-o", str(burden),
            "--gene-burden",
        ])

        assert result.exit_code == 1
        assert not burden.exists()

    def test_filter_phenotypes_command(self, tmp_path: Path) -> None:
        table = tmp_path / "pheno.tsv"
        table.write_text("ID\tHPO\nS1\tHP:1\nS2\tHP:2\n")
        out = tmp_path / "filtered.csv"

        result = runner.invoke(app, [
            "filter-phenotypes",
            "-f", str(table),
            "-c", "ID",
            "-s", "S2",
            "-o", str(out),
        ])

        assert result.exit_code == 0
        assert out.read_text().splitlines() == ["ID,HPO", "S2,HP:2"]

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
