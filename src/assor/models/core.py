"""
Core data models for assor.
"""

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Input fields holding strand tables.
AS_SB_TABLE_KEY = "AS_SB_TABLE"
SB_KEY = "SB"


class StrandCount(BaseModel):
    """
    Read support for one allele, split by strand.

    Counts are validated at construction; a negative count, or a value that
    is not an ``int`` (strings, floats, bools), is a contract violation and
    raises ``pydantic.ValidationError``.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    forward: int = Field(ge=0, description="Reads supporting the allele on the forward strand")
    reverse: int = Field(ge=0, description="Reads supporting the allele on the reverse strand")

    @classmethod
    def of(cls, forward: int, reverse: int) -> "StrandCount":
        return cls(forward=forward, reverse=reverse)

    @property
    def total(self) -> int:
        return self.forward + self.reverse

    def __add__(self, other: "StrandCount") -> "StrandCount":
        return StrandCount(forward=self.forward + other.forward, reverse=self.reverse + other.reverse)

    def as_tuple(self) -> tuple[int, int]:
        return self.forward, self.reverse


class ContingencyTable(BaseModel):
    """
    2x2 read-count table: rows are (reference, alternate), columns are
    (forward, reverse).

        ref  [[a, b],
        alt   [c, d]]
    """

    model_config = ConfigDict(frozen=True)

    ref: StrandCount
    alt: StrandCount

    @classmethod
    def from_counts(cls, ref: StrandCount, alt: StrandCount) -> "ContingencyTable":
        return cls(ref=ref, alt=alt)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "ContingencyTable":
        """Build a table from a nested ``[[a, b], [c, d]]`` sequence."""
        if len(rows) != 2 or any(len(row) != 2 for row in rows):
            raise ValueError(f"Contingency table must be 2x2, got {rows!r}")
        (a, b), (c, d) = rows
        return cls(ref=StrandCount(forward=a, reverse=b), alt=StrandCount(forward=c, reverse=d))

    @property
    def rows(self) -> tuple[tuple[int, int], tuple[int, int]]:
        return (
            (self.ref.forward, self.ref.reverse),
            (self.alt.forward, self.alt.reverse),
        )

    def as_array(self) -> np.ndarray:
        return np.array(self.rows, dtype=np.int64)

    def swap_strands(self) -> "ContingencyTable":
        """Return the table with forward and reverse columns exchanged."""
        return ContingencyTable(
            ref=StrandCount(forward=self.ref.reverse, reverse=self.ref.forward),
            alt=StrandCount(forward=self.alt.reverse, reverse=self.alt.forward),
        )

    def swap_alleles(self) -> "ContingencyTable":
        """Return the table with reference and alternate rows exchanged."""
        return ContingencyTable(ref=self.alt, alt=self.ref)


class Present(BaseModel):
    """A computed per-allele statistic."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["present"] = "present"
    value: float


class Absent(BaseModel):
    """No statistic: the allele had no supporting reads."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["absent"] = "absent"


AlleleStatistic = Present | Absent

ABSENT = Absent()


class AlleleStatisticMap(Mapping[str, AlleleStatistic]):
    """
    Read-only mapping from alternate allele to its statistic.

    Insertion order of the input alleles is preserved so that callers
    rendering a per-ALT field line up with the record's ALT column.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, AlleleStatistic] | None = None):
        self._entries: dict[str, AlleleStatistic] = dict(entries or {})

    def __getitem__(self, allele: str) -> AlleleStatistic:
        return self._entries[allele]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AlleleStatisticMap({self._entries!r})"

    def values_or_none(self) -> dict[str, float | None]:
        """Plain mapping with ``None`` for alleles without evidence."""
        return {
            allele: stat.value if isinstance(stat, Present) else None
            for allele, stat in self._entries.items()
        }


class SiteStrandCounts(BaseModel):
    """
    Strand counts collected for one variant site.

    ``alts`` maps each alternate allele (in ALT-column order) to its counts,
    or ``None`` when no data was recorded for that allele.
    """

    model_config = ConfigDict(frozen=True)

    ref: StrandCount
    alts: dict[str, StrandCount | None]


@dataclass(frozen=True)
class SiteResult:
    """Statistics computed for one site."""

    per_allele: AlleleStatisticMap
    site_sor: float | None = None


class AnnotationConfig(BaseModel):
    """
    Configuration for annotating a VCF with strand odds ratios.
    """

    # Input / Output
    input_vcf: Path
    output_vcf: Path
    overwrite: bool = False

    # Statistics
    site_level: bool = Field(default=True, description="Also emit the pooled-ALT SOR INFO field")
    min_count: int = Field(default=2, ge=0, description="Minimum reads for an ALT to enter the pooled table")
    raw_key: str = AS_SB_TABLE_KEY
    sample_key: str = SB_KEY
    strict: bool = Field(default=False, description="Fail on malformed strand tables instead of skipping")

    # Performance
    threads: int = Field(default=1, ge=1)
    chunk_size: int = Field(default=10_000, ge=1)

    @field_validator("input_vcf")
    @classmethod
    def validate_input_exists(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"File not found: {v}")
        return v

    @model_validator(mode="after")
    def validate_output(self) -> "AnnotationConfig":
        if self.output_vcf.is_dir():
            raise ValueError(f"Output path must be a file, not a directory: {self.output_vcf}")
        if self.output_vcf.exists() and not self.overwrite:
            raise ValueError(f"Output file already exists: {self.output_vcf}")
        if self.output_vcf.resolve() == self.input_vcf.resolve():
            raise ValueError("Output VCF must differ from input VCF")
        return self
