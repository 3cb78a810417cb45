"""
Data models for assor.

Provides Pydantic models for strand counts, contingency tables, per-allele
results, and configuration.
"""

from .core import (
    ABSENT,
    Absent,
    AlleleStatistic,
    AlleleStatisticMap,
    AnnotationConfig,
    ContingencyTable,
    Present,
    SiteResult,
    SiteStrandCounts,
    StrandCount,
)

__all__ = [
    "ABSENT",
    "Absent",
    "AlleleStatistic",
    "AlleleStatisticMap",
    "AnnotationConfig",
    "ContingencyTable",
    "Present",
    "SiteResult",
    "SiteStrandCounts",
    "StrandCount",
]
