"""
Raw allele-specific strand tables.

The raw form carries one ``forward,reverse`` pair per allele, reference
first, separated by ``|``:

    10,1|9,2|0,0

An empty or ``.`` slot means no data was recorded for that allele.
"""

from collections.abc import Sequence

from pydantic import ValidationError

from ..models.core import SiteStrandCounts, StrandCount
from ..utils.errors import RawDataError

ALLELE_SEPARATOR = "|"
STRAND_SEPARATOR = ","
MISSING_SLOTS = {"", "."}


def parse_strand_pair(text: str) -> StrandCount | None:
    """Parse ``"F,R"``; returns ``None`` for a missing slot."""
    text = text.strip()
    if text in MISSING_SLOTS:
        return None
    parts = text.split(STRAND_SEPARATOR)
    if len(parts) != 2:
        raise RawDataError(
            f"Expected 'forward,reverse' strand pair, got '{text}'",
            suggestion="Each allele slot must hold exactly two comma-separated counts.",
        )
    try:
        return StrandCount(forward=int(parts[0]), reverse=int(parts[1]))
    except (ValueError, ValidationError) as e:
        raise RawDataError(f"Invalid strand counts '{text}': {e}") from e


def parse_raw_table(text: str) -> tuple[StrandCount, list[StrandCount | None]]:
    """
    Parse a raw allele-specific strand table.

    Returns:
        The reference counts and the per-ALT counts in order.
    """
    slots = text.strip().split(ALLELE_SEPARATOR)
    if len(slots) < 2:
        raise RawDataError(
            f"Raw strand table needs a reference and at least one ALT slot: '{text}'"
        )
    ref = parse_strand_pair(slots[0])
    if ref is None:
        # No reference evidence is recorded as zero reads.
        ref = StrandCount(forward=0, reverse=0)
    return ref, [parse_strand_pair(slot) for slot in slots[1:]]


def parse_site(text: str, alts: Sequence[str]) -> SiteStrandCounts:
    """Parse a raw table and key its ALT slots by allele."""
    ref, alt_counts = parse_raw_table(text)
    if len(alt_counts) != len(alts):
        raise RawDataError(
            f"Raw strand table has {len(alt_counts)} ALT slot(s) but the record has "
            f"{len(alts)} ALT allele(s): '{text}'"
        )
    return SiteStrandCounts(ref=ref, alts=dict(zip(alts, alt_counts, strict=True)))


def format_raw_table(ref: StrandCount, alts: Sequence[StrandCount | None]) -> str:
    def slot(counts: StrandCount | None) -> str:
        if counts is None:
            return ""
        return f"{counts.forward}{STRAND_SEPARATOR}{counts.reverse}"

    return ALLELE_SEPARATOR.join([slot(ref), *(slot(c) for c in alts)])


def site_from_sample_tables(
    tables: Sequence[Sequence[int | None]], alts: Sequence[str]
) -> SiteStrandCounts | None:
    """
    Sum per-sample ``refF,refR,altF,altR`` strand tables.

    The per-sample tables pool all ALTs into a single row, so the result is
    keyed by the joined ALT string and only usable for the site-level SOR.
    Returns ``None`` when no sample carries a complete table.
    """
    ref = StrandCount(forward=0, reverse=0)
    alt = StrandCount(forward=0, reverse=0)
    seen = False
    for values in tables:
        if values is None or len(values) != 4 or any(v is None for v in values):
            continue
        try:
            ref = ref + StrandCount(forward=values[0], reverse=values[1])
            alt = alt + StrandCount(forward=values[2], reverse=values[3])
        except ValidationError as e:
            raise RawDataError(f"Invalid per-sample strand table {tuple(values)}: {e}") from e
        seen = True
    if not seen:
        return None
    return SiteStrandCounts(ref=ref, alts={",".join(alts): alt})
