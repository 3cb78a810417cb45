"""
VCF adapters: extracting strand counts from records and writing SOR fields.

Strand counts are taken from the allele-specific raw INFO table
(``AS_SB_TABLE``) when present; the per-sample ``SB`` FORMAT tables
(``refF,refR,altF,altR``) are summed as a fallback for the site-level value.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

import pysam

from ..formatting import AS_SOR_KEY, SOR_KEY, round_value
from ..models.core import AS_SB_TABLE_KEY, SB_KEY, SiteResult, SiteStrandCounts
from .raw import parse_site, site_from_sample_tables

logger = logging.getLogger(__name__)

AS_SOR_DESCRIPTION = "Allele-specific strand odds ratio (ln-scaled), one value per ALT allele"
SOR_DESCRIPTION = "Symmetric odds ratio of 2x2 contingency table to detect strand bias (ln-scaled)"


class VcfReader:
    """Reads variant records and the strand counts attached to them."""

    def __init__(self, path: Path, raw_key: str = AS_SB_TABLE_KEY, sample_key: str = SB_KEY):
        self.path = path
        self.raw_key = raw_key
        self.sample_key = sample_key
        self._vcf = pysam.VariantFile(str(path))

    @property
    def header(self) -> pysam.VariantHeader:
        return self._vcf.header

    @property
    def has_raw_table(self) -> bool:
        return self.raw_key in self._vcf.header.info

    @property
    def has_sample_tables(self) -> bool:
        return self.sample_key in self._vcf.header.formats

    def __iter__(self) -> Iterator[pysam.VariantRecord]:
        return iter(self._vcf)

    def allele_counts(self, record: pysam.VariantRecord) -> SiteStrandCounts | None:
        """Per-ALT strand counts from the raw INFO table, if the record has one."""
        if not record.alts or not self.has_raw_table:
            return None
        raw = record.info.get(self.raw_key)
        if raw is None:
            return None
        # A header declaring Number=. splits the table on commas.
        if isinstance(raw, tuple):
            raw = ",".join(str(part) for part in raw)
        return parse_site(raw, record.alts)

    def sample_counts(self, record: pysam.VariantRecord) -> SiteStrandCounts | None:
        """ALT-pooled strand counts summed over the per-sample tables."""
        if not record.alts or not self.has_sample_tables:
            return None
        tables = [sample.get(self.sample_key) for sample in record.samples.values()]
        return site_from_sample_tables(tables, record.alts)

    def close(self):
        self._vcf.close()


class VcfWriter:
    """Writes records with ``AS_SOR`` (Number=A) and ``SOR`` INFO fields."""

    def __init__(self, path: Path, header: pysam.VariantHeader, site_level: bool = True):
        self.path = path
        self.site_level = site_level
        self._add_header_lines(header)
        mode = "wz" if path.suffix == ".gz" else "w"
        self._vcf = pysam.VariantFile(str(path), mode, header=header)

    def _add_header_lines(self, header: pysam.VariantHeader):
        if AS_SOR_KEY not in header.info:
            header.info.add(AS_SOR_KEY, "A", "Float", AS_SOR_DESCRIPTION)
        else:
            logger.debug("Header already declares INFO/%s; existing values are dropped", AS_SOR_KEY)
        if self.site_level and SOR_KEY not in header.info:
            header.info.add(SOR_KEY, 1, "Float", SOR_DESCRIPTION)

    def write(self, record: pysam.VariantRecord, result: SiteResult | None = None):
        # Drop values carried over from the input.
        record.info.pop(AS_SOR_KEY, None)
        if self.site_level:
            record.info.pop(SOR_KEY, None)
        if result is not None:
            if len(result.per_allele):
                record.info[AS_SOR_KEY] = tuple(
                    round_value(value) if value is not None else None
                    for value in result.per_allele.values_or_none().values()
                )
            if self.site_level and result.site_sor is not None:
                record.info[SOR_KEY] = round_value(result.site_sor)
        self._vcf.write(record)

    def close(self):
        self._vcf.close()

    def __enter__(self) -> "VcfWriter":
        return self

    def __exit__(self, *exc):
        self.close()
