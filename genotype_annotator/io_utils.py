"""I/O utilities for transparent gzip and standard stream handling.

Input paths may be gzip-compressed (detected by magic bytes) or "-" for
stdin; output paths may be "-" for stdout or end in ".gz" for compressed
output.

Example:
    with smart_open(Path("variants.tsv.gz")) as f:
        for line in f:
            process(line)
"""

import gzip
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

# Gzip magic bytes (first two bytes of gzip file)
GZIP_MAGIC = b"\x1f\x8b"

STDIO = "-"


def is_gzipped(filepath: Path) -> bool:
    """Detect if a file is gzip-compressed.

    Checks magic bytes first, falls back to extension if the file
    is too small or unreadable.

    Args:
        filepath: Path to file to check

    Returns:
        True if file is gzip-compressed
    """
    try:
        with open(filepath, "rb") as f:
            magic = f.read(2)
            if len(magic) >= 2:
                return magic == GZIP_MAGIC
    except OSError:
        pass

    return filepath.suffix == ".gz"


@contextmanager
def smart_open(filepath: Path | str) -> Iterator[IO[str]]:
    """Open a text input with automatic gzip detection.

    Args:
        filepath: Path to file (may be .gz or uncompressed), or "-" for stdin

    Yields:
        Text file handle. Stdin is yielded as-is and never closed.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    if filepath == STDIO:
        yield sys.stdin
        return

    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Input file not found: {filepath}")

    if is_gzipped(filepath):
        f = gzip.open(filepath, "rt", encoding="utf-8")
    else:
        f = open(filepath, "rt", encoding="utf-8")

    try:
        yield f
    finally:
        f.close()


@contextmanager
def open_output(filepath: Path | str) -> Iterator[IO[str]]:
    """Open a text output, stdout for "-", gzip for a ".gz" suffix.

    Args:
        filepath: Output path or "-"

    Yields:
        Writable text handle. Stdout is flushed but never closed.
    """
    if filepath == STDIO:
        try:
            yield sys.stdout
        finally:
            sys.stdout.flush()
        return

    filepath = Path(filepath)
    if filepath.suffix == ".gz":
        f = gzip.open(filepath, "wt", encoding="utf-8")
    else:
        f = open(filepath, "w", encoding="utf-8")

    try:
        yield f
    finally:
        f.close()


def iter_lines(filepath: Path | str) -> Iterator[str]:
    """Iterate over lines of an input with trailing newlines stripped.

    Args:
        filepath: Path to file (may be gzipped), or "-" for stdin

    Yields:
        Lines without their line terminator
    """
    with smart_open(filepath) as f:
        for line in f:
            yield line.rstrip("\r\n")
