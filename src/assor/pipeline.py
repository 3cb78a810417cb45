"""
Pipeline Orchestrator: annotates a VCF with strand odds ratios.

This module handles:
1. Reading records and their strand counts from the input VCF.
2. Computing per-ALT and site-level SOR values, in chunks, optionally in parallel.
3. Writing the annotated records to the output VCF.
"""

import logging
from dataclasses import dataclass
from functools import partial
from pathlib import Path

from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from .core.reducer import calculate_site_sor, reduce_site
from .io.vcf import VcfReader, VcfWriter
from .models.core import AlleleStatisticMap, AnnotationConfig, Absent, SiteResult, SiteStrandCounts
from .parallel import ParallelProcessor
from .utils.errors import AssorError, RawDataError
from .utils.logging import console, log_call, timed

logger = logging.getLogger(__name__)

SiteInput = tuple[SiteStrandCounts | None, SiteStrandCounts | None]


def annotate_site(item: SiteInput, site_level: bool = True, min_count: int = 2) -> SiteResult | None:
    """
    Compute the statistics for one record.

    Args:
        item: (allele-specific counts, ALT-pooled per-sample counts); either may be None.
        site_level: Whether to compute the pooled SOR.
        min_count: Minimum reads for an ALT to enter the pooled table.

    Returns:
        SiteResult, or None when the record carries no strand counts at all.
    """
    allele_counts, sample_counts = item
    if allele_counts is not None:
        return reduce_site(allele_counts, site_level=site_level, min_count=min_count)
    if sample_counts is not None and site_level:
        # Per-sample tables are already pooled over ALTs.
        site_sor = calculate_site_sor(sample_counts.ref, sample_counts.alts.values(), min_count=0)
        return SiteResult(per_allele=AlleleStatisticMap(), site_sor=site_sor)
    return None


@dataclass
class PipelineSummary:
    records: int = 0
    annotated: int = 0
    skipped: int = 0
    malformed: int = 0
    absent_alleles: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "Records": self.records,
            "Annotated": self.annotated,
            "Not annotated": self.skipped,
            "Malformed strand tables": self.malformed,
            "ALT alleles without reads": self.absent_alleles,
        }


class Pipeline:
    def __init__(self, config: AnnotationConfig, processor: ParallelProcessor | None = None):
        self.config = config
        self.processor = processor or ParallelProcessor(n_jobs=config.threads)
        self.summary = PipelineSummary()
        self._annotate = partial(
            annotate_site, site_level=config.site_level, min_count=config.min_count
        )

    def run(self) -> PipelineSummary:
        """Execute the pipeline."""
        logger.info("Annotating [bold]%s[/bold]", self.config.input_vcf)

        reader = VcfReader(
            self.config.input_vcf, raw_key=self.config.raw_key, sample_key=self.config.sample_key
        )
        try:
            if not reader.has_raw_table and not reader.has_sample_tables:
                raise AssorError(
                    f"{self.config.input_vcf} declares neither INFO/{self.config.raw_key} "
                    f"nor FORMAT/{self.config.sample_key}",
                    suggestion="Annotate the calls with allele-specific strand tables first, "
                    "or point --raw-key/--sample-key at the fields that hold them.",
                )
            if not reader.has_raw_table:
                logger.warning(
                    "No INFO/%s in header; only the site-level SOR can be computed",
                    self.config.raw_key,
                )

            # Records go to a sibling file that replaces the output only on success.
            partial_vcf = self._partial_path()
            try:
                with timed("Annotating records", logger):
                    with VcfWriter(
                        partial_vcf, reader.header, site_level=self.config.site_level
                    ) as writer:
                        self._process(reader, writer)
            except BaseException:
                partial_vcf.unlink(missing_ok=True)
                raise
            partial_vcf.replace(self.config.output_vcf)
        finally:
            reader.close()

        logger.info(
            "Annotated %d of %d records -> %s",
            self.summary.annotated,
            self.summary.records,
            self.config.output_vcf,
        )
        return self.summary

    def _partial_path(self) -> Path:
        # Keeps the final suffix so a .gz output is still written bgzipped.
        output = self.config.output_vcf
        return output.with_name(f".{output.stem}.partial{output.suffix}")

    def _process(self, reader: VcfReader, writer: VcfWriter):
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("{task.completed} records"),
            TimeElapsedColumn(),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("[cyan]Annotating...", total=None)

            chunk: list = []
            inputs: list[SiteInput] = []
            for record in reader:
                chunk.append(record)
                inputs.append(self._site_input(reader, record))
                if len(chunk) >= self.config.chunk_size:
                    self._flush(writer, chunk, inputs)
                    progress.advance(task, len(chunk))
                    chunk, inputs = [], []

            if chunk:
                self._flush(writer, chunk, inputs)
                progress.advance(task, len(chunk))

    def _site_input(self, reader: VcfReader, record) -> SiteInput:
        self.summary.records += 1
        try:
            allele_counts = reader.allele_counts(record)
            sample_counts = reader.sample_counts(record)
        except RawDataError as e:
            if self.config.strict:
                raise AssorError(f"{record.chrom}:{record.pos}: {e.message}", e.suggestion) from e
            self.summary.malformed += 1
            if self.summary.malformed <= 5:
                logger.warning("Skipping malformed strand table at %s:%d: %s", record.chrom, record.pos, e)
            return None, None
        return allele_counts, sample_counts

    @log_call()
    def _flush(self, writer: VcfWriter, records: list, inputs: list[SiteInput]):
        results = self.processor.map(self._annotate, inputs)
        for record, result in zip(records, results, strict=True):
            if result is None:
                self.summary.skipped += 1
                logger.debug("No strand counts at %s:%d", record.chrom, record.pos)
            else:
                self.summary.annotated += 1
                self.summary.absent_alleles += sum(
                    isinstance(stat, Absent) for stat in result.per_allele.values()
                )
            writer.write(record, result)
