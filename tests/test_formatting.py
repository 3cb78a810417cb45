"""Tests for annotation keys and value rendering."""

import pytest

from assor.core.reducer import reduce_per_allele
from assor.formatting import (
    AS_SOR_KEY,
    SOR_KEY,
    format_allele_map,
    format_value,
    per_allele_annotation,
    render_info_value,
    site_annotation,
)
from assor.models.core import StrandCount


def sc(forward, reverse):
    return StrandCount(forward=forward, reverse=reverse)


@pytest.mark.parametrize(
    "value,expected",
    [(0.18440, "0.184"), (0.6931471805599453, "0.693"), (0.0, "0.000"), (4.6151205, "4.615")],
)
def test_format_value(value, expected):
    assert format_value(value) == expected


@pytest.mark.parametrize("value", [0.0, 0.0004, 0.18440, 1.23456789, 17.0305])
def test_parsed_value_within_precision(value):
    assert float(format_value(value)) == pytest.approx(value, abs=5e-4)


def test_absent_alleles_render_as_missing_not_zero():
    stats = reduce_per_allele(sc(5, 5), {"G": sc(5, 0), "T": sc(0, 0)})

    assert format_allele_map(stats) == {"G": "4.615", "T": None}
    assert render_info_value(stats) == "4.615,."
    assert per_allele_annotation(stats) == {AS_SOR_KEY: {"G": "4.615", "T": None}}


def test_site_annotation_key():
    assert site_annotation(0.18440) == {SOR_KEY: "0.184"}
    assert AS_SOR_KEY == "AS_SOR"
