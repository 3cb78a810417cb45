"""
assor (Allele-Specific Strand Odds Ratio) - strand-bias statistics for variant calls.

This package computes the ln-scaled symmetric odds ratio (SOR) from
per-strand, per-allele read counts, per ALT allele and pooled per site,
and annotates VCF files with the results.

Example usage:
    $ assor annotate -i calls.vcf.gz -o calls.sor.vcf.gz
    $ assor compute --raw '10,1|9,2'
"""

__version__ = "1.0.0"

from .core import calculate_sor, reduce_per_allele
from .models.core import (
    Absent,
    AlleleStatisticMap,
    AnnotationConfig,
    ContingencyTable,
    Present,
    StrandCount,
)
from .pipeline import Pipeline

__all__ = [
    "__version__",
    "Absent",
    "AlleleStatisticMap",
    "AnnotationConfig",
    "ContingencyTable",
    "Pipeline",
    "Present",
    "StrandCount",
    "calculate_sor",
    "reduce_per_allele",
]
