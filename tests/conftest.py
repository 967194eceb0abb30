"""Pytest fixtures for genotype_annotator tests."""

from pathlib import Path

import pytest

from genotype_annotator.logging_config import reset_logging
from genotype_annotator.models import SampleRoster


@pytest.fixture(autouse=True)
def clean_logging():
    """Drop handlers bound to streams of a previous CLI invocation."""
    yield
    reset_logging()


@pytest.fixture
def roster() -> SampleRoster:
    """Three samples, all probands, no controls."""
    return SampleRoster(
        samples=("S1", "S2", "S3"),
        probands=("S1", "S2", "S3"),
        controls=(),
    )


@pytest.fixture
def case_control_roster() -> SampleRoster:
    """Four samples: S1, S2 probands; S3, S4 controls."""
    return SampleRoster(
        samples=("S1", "S2", "S3", "S4"),
        probands=("S1", "S2"),
        controls=("S3", "S4"),
    )


@pytest.fixture
def variant_files(tmp_path: Path) -> dict[str, Path]:
    """Create a small variant table and roster files.

    Records:
    - BICC1 10000: S1 het, S4 hom
    - BICC1 20000: S2 het (phased)
    - PKD1  30000: S3 no-call, S4 multiallelic het (0/2)
    """
    variants = tmp_path / "variants.tsv"
    variants.write_text(
        "CHROM\tPOS\tREF\tALT\tGENE\tGT\n"
        "1\t10000\tA\tG\tBICC1\t0/1,0/0,0/0,1/1\n"
        "1\t20000\tC\tT\tBICC1\t0/0,1|0,0/0,0/0\n"
        "16\t30000\tG\tA\tPKD1\t0/0,0/0,./.,0/2\n"
    )

    samples = tmp_path / "samples.txt"
    samples.write_text("S1\nS2\nS3\nS4\n")

    probands = tmp_path / "probands.txt"
    probands.write_text("S1,S2\n")

    return {
        "variants": variants,
        "samples": samples,
        "probands": probands,
        "dir": tmp_path,
    }
