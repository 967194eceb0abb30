"""Parsers for sample rosters and delimited variant tables."""

from genotype_annotator.parsers.records import locate_column, parse_records
from genotype_annotator.parsers.roster import read_identifiers, resolve_roster

__all__ = [
    "locate_column",
    "parse_records",
    "read_identifiers",
    "resolve_roster",
]
