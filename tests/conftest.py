"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add src directory to path so tests use local code, not installed package
project_root = Path(__file__).parent.parent
src_dir = project_root / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

VCF_HEADER = (
    "##fileformat=VCFv4.2\n"
    "##contig=<ID=chr1,length=100000>\n"
    '##INFO=<ID=AS_SB_TABLE,Number=1,Type=String,Description="Allele-specific forward/reverse read counts">\n'
    '##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">\n'
    '##FORMAT=<ID=SB,Number=4,Type=Integer,Description="Per-sample component statistics for strand bias">\n'
)


def write_vcf(path: Path, rows: list[str], header: str = VCF_HEADER, samples: tuple[str, ...] = ("S1",)) -> Path:
    """Write a small VCF; each row is CHROM..INFO plus optional FORMAT/sample columns."""
    columns = ["#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO"]
    if samples:
        columns += ["FORMAT", *samples]
    with open(path, "w") as f:
        f.write(header)
        f.write("\t".join(columns) + "\n")
        for row in rows:
            f.write(row + "\n")
    return path


def read_data_lines(path: Path) -> list[list[str]]:
    with open(path) as f:
        return [line.rstrip("\n").split("\t") for line in f if not line.startswith("#")]


def info_dict(info: str) -> dict[str, str]:
    entries = {}
    for item in info.split(";"):
        key, _, value = item.partition("=")
        entries[key] = value
    return entries


@pytest.fixture
def sample_vcf(tmp_path: Path) -> Path:
    """Three sites: biallelic, multiallelic with an ALT without reads, and no strand data."""
    return write_vcf(
        tmp_path / "calls.vcf",
        [
            "chr1\t100\trs1\tA\tT\t50\tPASS\tAS_SB_TABLE=10,1|9,2\tGT:SB\t0/1:10,1,9,2",
            "chr1\t200\t.\tC\tG,T\t50\tPASS\tAS_SB_TABLE=5,5|5,0|0,0\tGT:SB\t1/2:5,5,5,0",
            "chr1\t300\t.\tG\tA\t50\tPASS\t.\tGT\t0/1",
        ],
    )


@pytest.fixture
def sample_only_vcf(tmp_path: Path) -> Path:
    """Per-sample SB tables only, no allele-specific INFO table."""
    header = (
        "##fileformat=VCFv4.2\n"
        "##contig=<ID=chr1,length=100000>\n"
        '##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">\n'
        '##FORMAT=<ID=SB,Number=4,Type=Integer,Description="Per-sample component statistics for strand bias">\n'
    )
    return write_vcf(
        tmp_path / "samples.vcf",
        ["chr1\t100\t.\tA\tT\t50\tPASS\t.\tGT:SB\t0/1:6,0,4,1\t0/1:4,1,5,1"],
        header=header,
        samples=("S1", "S2"),
    )
