"""Sample roster resolution.

A roster specification is either an inline delimited list
("S1,S2,S3") or a path to a file. File content containing the delimiter
is read as a single delimited line, otherwise as one identifier per line:

    S1          S1,S2,S3
    S2
    S3
"""

import logging
from pathlib import Path

from genotype_annotator.exceptions import MissingInputError, RosterConsistencyError
from genotype_annotator.io_utils import smart_open
from genotype_annotator.models import SampleRoster

logger = logging.getLogger(__name__)

# Suffixes that mark a specification as a file path even if it doesn't exist
PATH_SUFFIXES = {".txt", ".tsv", ".csv", ".list", ".lst", ".ids", ".gz"}


def _looks_like_path(spec: str) -> bool:
    return "/" in spec or Path(spec).suffix.lower() in PATH_SUFFIXES


def _split_ids(text: str, delimiter: str) -> list[str]:
    if delimiter in text:
        parts = text.replace("\n", delimiter).split(delimiter)
    else:
        parts = text.splitlines()
    return [p.strip() for p in parts if p.strip()]


def read_identifiers(spec: str, delimiter: str = ",") -> list[str]:
    """Read an ordered identifier list from an inline list or a file.

    Args:
        spec: Inline delimited list, or path to an identifier file
        delimiter: Delimiter of inline lists and single-line files

    Returns:
        Identifiers in the order given (duplicates kept)

    Raises:
        MissingInputError: If spec names a file that doesn't exist or can't be read
    """
    path = Path(spec)
    if path.is_file():
        try:
            with smart_open(path) as f:
                content = f.read()
        except OSError as e:
            raise MissingInputError(f"Cannot read identifier file {path}: {e}") from e
        logger.debug("Read identifiers from file %s", path)
        return _split_ids(content, delimiter)

    if delimiter not in spec and _looks_like_path(spec):
        raise MissingInputError(f"Identifier file not found: {spec}")

    return _split_ids(spec, delimiter)


def _dedupe(ids: list[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(ids))


def resolve_roster(
    samples: str | None,
    probands: str | None = None,
    controls: str | None = None,
    delimiter: str = ",",
) -> SampleRoster:
    """Resolve the sample, proband and control identifier sets.

    Probands default to all samples, controls default to the samples
    that are not probands. Order always follows the given specification,
    never re-sorted.

    Args:
        samples: Sample specification (inline list or path), required
        probands: Optional proband specification
        controls: Optional control specification
        delimiter: Delimiter for inline lists and single-line files

    Returns:
        Resolved SampleRoster

    Raises:
        MissingInputError: If samples are not given, or any given
            specification is unreadable or empty
        RosterConsistencyError: If a sample id is duplicated, or a
            proband/control id is not among the samples
    """
    if not samples:
        raise MissingInputError("No sample list or sample file given")

    sample_ids = read_identifiers(samples, delimiter)
    if not sample_ids:
        raise MissingInputError(f"Sample specification is empty: {samples}")
    if len(sample_ids) == 1 and not Path(samples).is_file():
        logger.warning(
            "Sample specification %r is neither a file nor a delimited list, "
            "using it as a single sample id",
            samples,
        )

    # Position is the join key to the genotype vector, so duplicates are fatal
    seen: set[str] = set()
    duplicates: list[str] = []
    for sample_id in sample_ids:
        if sample_id in seen:
            duplicates.append(sample_id)
        seen.add(sample_id)
    if duplicates:
        raise RosterConsistencyError(
            f"Duplicate sample identifiers: {', '.join(dict.fromkeys(duplicates))}"
        )

    sample_tuple = tuple(sample_ids)

    if probands is not None:
        proband_tuple = _read_subset("proband", probands, delimiter)
    else:
        proband_tuple = sample_tuple
    _check_subset("proband", proband_tuple, seen)

    if controls is not None:
        control_tuple = _read_subset("control", controls, delimiter)
        _check_subset("control", control_tuple, seen)
    else:
        proband_set = set(proband_tuple)
        control_tuple = tuple(s for s in sample_tuple if s not in proband_set)

    logger.info(
        "Roster: %d samples, %d probands, %d controls",
        len(sample_tuple),
        len(proband_tuple),
        len(control_tuple),
    )

    return SampleRoster(
        samples=sample_tuple,
        probands=proband_tuple,
        controls=control_tuple,
    )


def _read_subset(label: str, spec: str, delimiter: str) -> tuple[str, ...]:
    ids = _dedupe(read_identifiers(spec, delimiter))
    if not ids:
        raise MissingInputError(f"The {label} specification is empty: {spec!r}")
    return ids


def _check_subset(label: str, ids: tuple[str, ...], samples: set[str]) -> None:
    missing = [i for i in ids if i not in samples]
    if missing:
        raise RosterConsistencyError(
            f"{len(missing)} {label} identifier(s) not in sample list: {', '.join(missing)}"
        )
