"""
Annotation keys and fixed-precision rendering of SOR values.
"""

from .models.core import AlleleStatisticMap, Present

AS_SOR_KEY = "AS_SOR"
SOR_KEY = "SOR"

MISSING_VALUE = "."
PRECISION = 3


def format_value(value: float) -> str:
    """Render a statistic with ``PRECISION`` decimals."""
    return f"{value:.{PRECISION}f}"


def round_value(value: float) -> float:
    return round(value, PRECISION)


def format_allele_map(stats: AlleleStatisticMap) -> dict[str, str | None]:
    """Allele -> formatted value, with ``None`` for alleles without evidence."""
    return {
        allele: format_value(stat.value) if isinstance(stat, Present) else None
        for allele, stat in stats.items()
    }


def per_allele_annotation(stats: AlleleStatisticMap) -> dict[str, dict[str, str | None]]:
    """``{AS_SOR: {allele: value-or-None}}`` for the record formatter."""
    return {AS_SOR_KEY: format_allele_map(stats)}


def site_annotation(value: float) -> dict[str, str]:
    """``{SOR: value}`` for the pooled multi-allele path."""
    return {SOR_KEY: format_value(value)}


def render_info_value(stats: AlleleStatisticMap) -> str:
    """Comma-joined per-ALT values as they appear in a VCF INFO column."""
    return ",".join(
        value if value is not None else MISSING_VALUE for value in format_allele_map(stats).values()
    )
