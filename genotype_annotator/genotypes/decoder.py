"""Genotype vector decoding and classification.

A genotype vector is the comma-separated list of per-sample genotype
codes of one variant, in sample roster order:

    0/1,0/0,1|1,./.

Codes are normalized before classification:
- the phasing separator "|" becomes "/"
- any allele index >= 2 becomes 1 (multiallelic collapse), so the result
  reports the presence of a non-reference allele, not which one
"""

import re
from functools import lru_cache

from genotype_annotator.exceptions import GenotypeArityError, GenotypeCodeError
from genotype_annotator.models import DecodedGenotype, GenotypeClass, SampleRoster

NO_CALL = "."

# Placeholders written by field extraction tools for a missing genotype
MISSING_CODES = {"", "NA"}

GENOTYPE_PATTERN = re.compile(r"^(?:\d+|\.)(?:[/|](?:\d+|\.))*$")


def normalize_genotype(code: str) -> tuple[str, bool]:
    """Normalize phasing and collapse alternate alleles >= 2 to 1.

    Args:
        code: Raw genotype code (e.g. "1|0", "0/2")

    Returns:
        Tuple of (normalized code, whether a multiallelic collapse happened)

    Raises:
        GenotypeCodeError: If the code is not an allele-pair/haploid code

    Example:
        >>> normalize_genotype("0|2")
        ("0/1", True)
    """
    normalized, collapsed, _ = _parse_code(code)
    return normalized, collapsed


def classify_genotype(code: str) -> GenotypeClass:
    """Classify a genotype code (normalizing it first).

    Example:
        >>> classify_genotype("1/0")
        GenotypeClass.HETEROZYGOUS
    """
    return _parse_code(code)[2]


@lru_cache(maxsize=1024)
def _parse_code(code: str) -> tuple[str, bool, GenotypeClass]:
    code = code.strip()
    if code in MISSING_CODES:
        return code, False, GenotypeClass.NO_CALL

    if not GENOTYPE_PATTERN.match(code):
        raise GenotypeCodeError(f"Unrecognized genotype code: {code!r}")

    collapsed = False
    alleles: list[str] = []
    for allele in code.replace("|", "/").split("/"):
        if allele != NO_CALL and int(allele) >= 2:
            allele = "1"
            collapsed = True
        elif allele != NO_CALL:
            allele = str(int(allele))
        alleles.append(allele)

    return "/".join(alleles), collapsed, _classify_alleles(alleles)


def _classify_alleles(alleles: list[str]) -> GenotypeClass:
    if NO_CALL in alleles:
        return GenotypeClass.NO_CALL
    if all(a == "0" for a in alleles):
        return GenotypeClass.REFERENCE
    if len(alleles) == 2:
        # Alleles are already collapsed to 0/1, so order doesn't matter
        if alleles[0] != alleles[1]:
            return GenotypeClass.HETEROZYGOUS
        return GenotypeClass.HOMOZYGOUS_ALT
    return GenotypeClass.VARIANT_OTHER


def decode_genotypes(
    field: str,
    roster: SampleRoster,
    line_number: int = 0,
) -> list[DecodedGenotype]:
    """Decode a genotype vector into per-sample classified entries.

    Args:
        field: Comma-separated genotype vector
        roster: Sample roster; entry i belongs to roster.samples[i]
        line_number: Line number of the record, for error messages

    Returns:
        One DecodedGenotype per roster position, in roster order

    Raises:
        GenotypeArityError: If the vector length differs from the roster length
        GenotypeCodeError: If an entry is not a genotype code
    """
    codes = field.split(",")
    if len(codes) != len(roster.samples):
        raise GenotypeArityError(line_number, len(codes), len(roster.samples))

    decoded: list[DecodedGenotype] = []
    for sample_id, raw in zip(roster.samples, codes):
        try:
            code, collapsed, genotype_class = _parse_code(raw)
        except GenotypeCodeError as e:
            raise GenotypeCodeError(
                f"{e} (line {line_number}, sample {sample_id})"
            ) from None
        decoded.append(
            DecodedGenotype(
                sample_id=sample_id,
                raw=raw,
                code=code,
                genotype_class=genotype_class,
                collapsed=collapsed,
            )
        )
    return decoded
