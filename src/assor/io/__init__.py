"""
I/O module for assor.

Provides the raw strand-table codec and VCF readers/writers.
"""

from .raw import format_raw_table, parse_raw_table, parse_site, site_from_sample_tables
from .vcf import VcfReader, VcfWriter

__all__ = [
    "VcfReader",
    "VcfWriter",
    "format_raw_table",
    "parse_raw_table",
    "parse_site",
    "site_from_sample_tables",
]
