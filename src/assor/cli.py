"""
CLI Entry Point: Exposes the assor functionality via command line.
"""

import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from . import __version__
from .core.reducer import MIN_COUNT, calculate_site_sor, reduce_per_allele
from .formatting import AS_SOR_KEY, SOR_KEY, format_allele_map, format_value
from .io.raw import format_raw_table, parse_raw_table, parse_strand_pair
from .models.core import AS_SB_TABLE_KEY, SB_KEY, AnnotationConfig, StrandCount
from .pipeline import Pipeline
from .utils.errors import AssorError, format_file_not_found
from .utils.logging import setup_logging

app = typer.Typer(help="assor: allele-specific strand odds ratio")

logger = logging.getLogger(__name__)


@app.callback()
def main():
    """
    assor: allele-specific strand odds ratio
    """
    pass


@app.command()
def version():
    """Show the installed version."""
    Console().print(f"py-assor {__version__}")


@app.command()
def annotate(
    input_vcf: Path = typer.Option(
        ..., "--input", "-i", help="VCF carrying INFO/AS_SB_TABLE and/or FORMAT/SB strand tables"
    ),
    output_vcf: Path = typer.Option(..., "--output", "-o", help="Path of the annotated VCF"),
    site_level: bool = typer.Option(
        True, "--site-level/--no-site-level", help="Also write the pooled-ALT SOR field"
    ),
    min_count: int = typer.Option(
        MIN_COUNT, "--min-count", help="Minimum reads for an ALT to enter the pooled table"
    ),
    raw_key: str = typer.Option(AS_SB_TABLE_KEY, "--raw-key", help="INFO field with per-allele strand tables"),
    sample_key: str = typer.Option(SB_KEY, "--sample-key", help="FORMAT field with per-sample strand tables"),
    strict: bool = typer.Option(False, "--strict", help="Fail on malformed strand tables"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Replace an existing output file"),
    threads: int = typer.Option(1, "--threads", "-t", help="Number of worker processes"),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
):
    """
    Annotate a VCF with AS_SOR (per ALT) and SOR (pooled) INFO fields.
    """
    setup_logging(verbose=verbose, quiet=quiet)
    logger.debug("assor %s annotate %s -> %s", __version__, input_vcf, output_vcf)

    if not input_vcf.exists():
        AssorError(format_file_not_found(input_vcf, "Input VCF")).display()
        raise typer.Exit(code=1)

    try:
        config = AnnotationConfig(
            input_vcf=input_vcf,
            output_vcf=output_vcf,
            overwrite=overwrite,
            site_level=site_level,
            min_count=min_count,
            raw_key=raw_key,
            sample_key=sample_key,
            strict=strict,
            threads=threads,
        )
    except ValidationError as e:
        messages = "; ".join(err["msg"] for err in e.errors())
        AssorError(f"Invalid configuration: {messages}").display()
        raise typer.Exit(code=1) from e

    try:
        summary = Pipeline(config).run()
    except AssorError as e:
        e.display()
        raise typer.Exit(code=1) from e
    except (OSError, ValueError) as e:
        AssorError(str(e)).display()
        raise typer.Exit(code=1) from e

    if not quiet:
        table = Table(title="Summary", show_header=False)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        for key, value in summary.as_dict().items():
            table.add_row(key, f"{value:,}")
        Console(stderr=True).print(table)


def _parse_alt(text: str, index: int) -> tuple[str, StrandCount | None]:
    """``ALLELE=F,R`` or bare ``F,R`` (named ``alt<index>``)."""
    if "=" in text:
        allele, counts = text.split("=", 1)
    else:
        allele, counts = f"alt{index}", text
    return allele, parse_strand_pair(counts)


@app.command()
def compute(
    ref: str | None = typer.Option(None, "--ref", "-r", help="Reference strand counts as F,R"),
    alts: list[str] | None = typer.Option(
        None, "--alt", "-a", help="ALT strand counts as [ALLELE=]F,R. Can be given multiple times."
    ),
    raw: str | None = typer.Option(None, "--raw", help="Raw table 'refF,refR|altF,altR|...'"),
    min_count: int = typer.Option(
        MIN_COUNT, "--min-count", help="Minimum reads for an ALT to enter the pooled table"
    ),
):
    """
    Compute SOR values for strand counts given on the command line.
    """
    console = Console()

    try:
        if raw is not None:
            ref_counts, alt_list = parse_raw_table(raw)
            alt_counts = {f"alt{i}": counts for i, counts in enumerate(alt_list, start=1)}
        elif ref is not None and alts:
            ref_counts = parse_strand_pair(ref) or StrandCount(forward=0, reverse=0)
            alt_counts = dict(_parse_alt(text, i) for i, text in enumerate(alts, start=1))
        else:
            raise AssorError(
                "No strand counts given",
                suggestion="Pass --raw 'refF,refR|altF,altR', or --ref F,R with one or more --alt F,R.",
            )
    except AssorError as e:
        e.display()
        raise typer.Exit(code=1) from e

    stats = reduce_per_allele(ref_counts, alt_counts)
    formatted = format_allele_map(stats)

    table = Table(title=f"{AS_SOR_KEY} (ref {ref_counts.forward},{ref_counts.reverse})")
    table.add_column("Allele", style="cyan")
    table.add_column("Table")
    table.add_column(AS_SOR_KEY, justify="right")
    for allele, counts in alt_counts.items():
        shown = format_raw_table(ref_counts, [counts]) if counts else "."
        table.add_row(allele, shown, formatted[allele] or ".")
    console.print(table)

    site_sor = calculate_site_sor(ref_counts, alt_counts.values(), min_count=min_count)
    console.print(f"{SOR_KEY}: {format_value(site_sor) if site_sor is not None else '.'}")


if __name__ == "__main__":
    app()
