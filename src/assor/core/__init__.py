"""
Core module for assor.

Provides the SOR calculator and the per-allele reducer.
"""

from .reducer import (
    MIN_COUNT,
    allele_statistic,
    build_table,
    calculate_site_sor,
    pool_alts,
    reduce_per_allele,
    reduce_site,
)
from .sor import ZERO_COUNT_FLOOR, calculate_sor, calculate_sor_many

__all__ = [
    "MIN_COUNT",
    "ZERO_COUNT_FLOOR",
    "allele_statistic",
    "build_table",
    "calculate_site_sor",
    "calculate_sor",
    "calculate_sor_many",
    "pool_alts",
    "reduce_per_allele",
    "reduce_site",
]
