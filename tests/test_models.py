"""Tests for data models."""

import pytest
from pydantic import ValidationError

from assor.models.core import (
    ABSENT,
    AS_SB_TABLE_KEY,
    SB_KEY,
    Absent,
    AlleleStatisticMap,
    AnnotationConfig,
    ContingencyTable,
    Present,
    StrandCount,
)


class TestStrandCount:
    def test_total(self):
        assert StrandCount(forward=3, reverse=4).total == 7

    @pytest.mark.parametrize("forward,reverse", [(-1, 0), (0, -1), (-5, -5)])
    def test_negative_counts_rejected(self, forward, reverse):
        with pytest.raises(ValidationError):
            StrandCount(forward=forward, reverse=reverse)

    @pytest.mark.parametrize("forward,reverse", [("5", 2), (5, 2.0), (True, 0), (1.5, 1)])
    def test_non_integer_counts_rejected(self, forward, reverse):
        with pytest.raises(ValidationError):
            StrandCount(forward=forward, reverse=reverse)

    def test_immutable(self):
        counts = StrandCount(forward=1, reverse=2)
        with pytest.raises(ValidationError):
            counts.forward = 5

    def test_addition(self):
        assert StrandCount.of(1, 2) + StrandCount.of(3, 4) == StrandCount.of(4, 6)


class TestContingencyTable:
    def test_from_rows(self):
        t = ContingencyTable.from_rows([[10, 1], [9, 2]])
        assert t.ref == StrandCount.of(10, 1)
        assert t.alt == StrandCount.of(9, 2)
        assert t.rows == ((10, 1), (9, 2))
        assert t.as_array().tolist() == [[10, 1], [9, 2]]

    @pytest.mark.parametrize("rows", [[[1, 2]], [[1, 2, 3], [4, 5, 6]], [[1], [2]]])
    def test_bad_shape_rejected(self, rows):
        with pytest.raises(ValueError, match="2x2"):
            ContingencyTable.from_rows(rows)

    def test_negative_entry_rejected(self):
        with pytest.raises(ValidationError):
            ContingencyTable.from_rows([[1, 2], [-3, 4]])

    def test_swaps(self):
        t = ContingencyTable.from_rows([[1, 2], [3, 4]])
        assert t.swap_strands().rows == ((2, 1), (4, 3))
        assert t.swap_alleles().rows == ((3, 4), (1, 2))


class TestAlleleStatisticMap:
    def test_absent_is_distinct_from_zero(self):
        stats = AlleleStatisticMap({"T": Present(value=0.0), "G": ABSENT})

        assert isinstance(stats["T"], Present)
        assert isinstance(stats["G"], Absent)
        assert stats["T"] != stats["G"]
        assert stats.values_or_none() == {"T": 0.0, "G": None}

    def test_preserves_order(self):
        stats = AlleleStatisticMap({"C": ABSENT, "A": Present(value=1.0), "G": ABSENT})
        assert list(stats) == ["C", "A", "G"]
        assert len(stats) == 3

    def test_read_only(self):
        stats = AlleleStatisticMap({"T": ABSENT})
        with pytest.raises(TypeError):
            stats["T"] = Present(value=1.0)


class TestAnnotationConfig:
    def test_valid(self, tmp_path):
        vcf = tmp_path / "in.vcf"
        vcf.write_text("")
        config = AnnotationConfig(input_vcf=vcf, output_vcf=tmp_path / "out.vcf")
        assert config.min_count == 2
        assert config.site_level is True
        assert config.threads == 1

    def test_missing_input(self, tmp_path):
        with pytest.raises(ValidationError, match="File not found"):
            AnnotationConfig(input_vcf=tmp_path / "nope.vcf", output_vcf=tmp_path / "out.vcf")

    def test_existing_output_requires_overwrite(self, tmp_path):
        vcf = tmp_path / "in.vcf"
        out = tmp_path / "out.vcf"
        vcf.write_text("")
        out.write_text("")
        with pytest.raises(ValidationError, match="already exists"):
            AnnotationConfig(input_vcf=vcf, output_vcf=out)
        assert AnnotationConfig(input_vcf=vcf, output_vcf=out, overwrite=True).overwrite

    def test_output_same_as_input(self, tmp_path):
        vcf = tmp_path / "in.vcf"
        vcf.write_text("")
        with pytest.raises(ValidationError, match="differ"):
            AnnotationConfig(input_vcf=vcf, output_vcf=vcf, overwrite=True)

    def test_threads_must_be_positive(self, tmp_path):
        vcf = tmp_path / "in.vcf"
        vcf.write_text("")
        with pytest.raises(ValidationError):
            AnnotationConfig(input_vcf=vcf, output_vcf=tmp_path / "out.vcf", threads=0)

    def test_default_strand_table_fields(self, tmp_path):
        vcf = tmp_path / "in.vcf"
        vcf.write_text("")
        config = AnnotationConfig(input_vcf=vcf, output_vcf=tmp_path / "out.vcf")
        assert (config.raw_key, config.sample_key) == (AS_SB_TABLE_KEY, SB_KEY) == ("AS_SB_TABLE", "SB")
