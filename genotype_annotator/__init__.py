"""Genotype field annotation and gene burden tool.

Rewrites per-sample genotype vectors in variant tables into sample
identifiers, computes proband/control genotype statistics per variant and
aggregates them per gene into a Fisher exact burden test.
"""

__version__ = "0.6.0"
__author__ = "Bernt Popp"
