"""
Per-allele reduction of strand counts into SOR values.

The reference row is shared by every ALT at a site; each ALT gets its own
REF-vs-ALT table, built by a pluggable table builder, and an independent
SOR value.
"""

import logging
from collections.abc import Callable, Iterable, Mapping

from ..models.core import (
    ABSENT,
    AlleleStatistic,
    AlleleStatisticMap,
    ContingencyTable,
    Present,
    SiteResult,
    SiteStrandCounts,
    StrandCount,
)
from .sor import calculate_sor

logger = logging.getLogger(__name__)

TableBuilder = Callable[[StrandCount, StrandCount], ContingencyTable]

# Minimum reads an ALT needs to contribute to the pooled site-level table.
MIN_COUNT = 2


def build_table(ref: StrandCount, alt: StrandCount) -> ContingencyTable:
    """Default builder: ``[[ref_fwd, ref_rev], [alt_fwd, alt_rev]]``."""
    return ContingencyTable.from_counts(ref, alt)


def allele_statistic(
    ref: StrandCount,
    alt: StrandCount | None,
    builder: TableBuilder = build_table,
) -> AlleleStatistic:
    """SOR for a single ALT, or ``ABSENT`` when it has no supporting reads."""
    if alt is None or alt.total == 0:
        return ABSENT
    return Present(value=calculate_sor(builder(ref, alt)))


def reduce_per_allele(
    ref: StrandCount,
    alts: Mapping[str, StrandCount | None],
    builder: TableBuilder = build_table,
) -> AlleleStatisticMap:
    """
    Compute the SOR for every alternate allele at a site.

    Args:
        ref: Strand counts of the reference allele.
        alts: ALT allele -> strand counts. ``None`` means no data was
            recorded for that allele.
        builder: Contingency table builder.

    Returns:
        AlleleStatisticMap in the order of ``alts``. Alleles with zero
        supporting reads map to ``Absent``, never to a numeric zero.
    """
    return AlleleStatisticMap(
        {allele: allele_statistic(ref, counts, builder) for allele, counts in alts.items()}
    )


def pool_alts(alts: Iterable[StrandCount | None], min_count: int = MIN_COUNT) -> StrandCount:
    """Sum ALT strand counts, skipping alleles with fewer than ``min_count`` reads."""
    pooled = StrandCount(forward=0, reverse=0)
    for counts in alts:
        if counts is None or counts.total < min_count:
            continue
        pooled = pooled + counts
    return pooled


def calculate_site_sor(
    ref: StrandCount,
    alts: Iterable[StrandCount | None],
    min_count: int = MIN_COUNT,
    builder: TableBuilder = build_table,
) -> float | None:
    """
    SOR of the reference row against all ALTs pooled together.

    Returns ``None`` when no reads at all support the site.
    """
    pooled = pool_alts(alts, min_count=min_count)
    if ref.total == 0 and pooled.total == 0:
        return None
    return calculate_sor(builder(ref, pooled))


def reduce_site(
    site: SiteStrandCounts,
    site_level: bool = True,
    min_count: int = MIN_COUNT,
    builder: TableBuilder = build_table,
) -> SiteResult:
    """Per-allele map plus, optionally, the pooled site-level SOR."""
    per_allele = reduce_per_allele(site.ref, site.alts, builder)
    site_sor = None
    if site_level:
        site_sor = calculate_site_sor(site.ref, site.alts.values(), min_count, builder)
    logger.debug("Reduced site: ref=%s alts=%d", site.ref.as_tuple(), len(site.alts))
    return SiteResult(per_allele=per_allele, site_sor=site_sor)
