#!/usr/bin/env python3
"""
Tests for nominal pipe size parsing and size table resolution.
"""

from fractions import Fraction

import pytest

from pressure_design.exceptions import InvalidInputError, NotFoundError
from pressure_design.nominal_sizes import normalize_nps, nps_sort_key, nps_value, parse_bore_mm
from pressure_design.tables import NominalSizeRecord, SizeTable
from utils.reference_data import default_tables


class TestNpsParsing:
    """Token normalisation and exact rational values."""

    def test_normalize_variants(self):
        assert normalize_nps("6") == "6"
        assert normalize_nps('6"') == "6"
        assert normalize_nps("NPS 6") == "6"
        assert normalize_nps("1 1/4") == "1-1/4"
        assert normalize_nps('NPS 1 1/4"') == "1-1/4"
        assert normalize_nps("6 in") == "6"
        assert normalize_nps("6INCH") == "6"
        assert normalize_nps("6 inches") == "6"
        assert normalize_nps("1-1/4 in") == "1-1/4"

    def test_values(self):
        assert nps_value("1/8") == Fraction(1, 8)
        assert nps_value("1-1/4") == Fraction(5, 4)
        assert nps_value("2.5") == Fraction(5, 2)
        assert nps_value("24") == 24
        assert nps_value("abc") is None
        assert nps_value("1/0") is None

    def test_numeric_sort_order(self):
        tokens = ["10", "1-1/4", "2", "1/2", "3/4", "1", "1/8", "bogus"]
        assert sorted(tokens, key=nps_sort_key) == ["1/8", "1/2", "3/4", "1", "1-1/4", "2", "10", "bogus"]

    def test_bore_tokens(self):
        assert parse_bore_mm("DN150") == 150.0
        assert parse_bore_mm("dn 150") == 150.0
        assert parse_bore_mm("NB150") == 150.0
        assert parse_bore_mm("150mm") == 150.0
        assert parse_bore_mm("150") is None
        assert parse_bore_mm("6") is None


class TestSizeTable:
    """Resolving NPS and bore tokens against the size table."""

    def test_resolves_nps_tokens(self):
        sizes = default_tables().sizes
        assert sizes.resolve("6").outside_diameter_in == 6.625
        assert sizes.resolve("NPS 1 1/4").nps == "1-1/4"
        assert sizes.resolve('2"').nps == "2"
        assert sizes.resolve("6INCH").nps == "6"
        assert sizes.resolve("4 inches").outside_diameter_in == 4.5

    def test_resolves_bore_tokens(self):
        sizes = default_tables().sizes
        assert sizes.resolve("DN150").nps == "6"
        assert sizes.resolve("150mm").nps == "6"
        assert sizes.resolve("150").nps == "6"

    def test_nps_wins_over_bore(self):
        # "20" is NPS 20, not the 20 mm bore of NPS 3/4
        assert default_tables().sizes.resolve("20").nps == "20"

    def test_unknown_bore_is_invalid(self):
        with pytest.raises(InvalidInputError):
            default_tables().sizes.resolve("DN175")

    def test_unparseable_token_is_invalid(self):
        with pytest.raises(InvalidInputError) as exc_info:
            default_tables().sizes.resolve("six inch")
        assert exc_info.value.field == "nominal_size"

    def test_empty_token_is_invalid(self):
        with pytest.raises(InvalidInputError):
            default_tables().sizes.resolve("   ")

    def test_missing_outside_diameter(self):
        sizes = SizeTable([NominalSizeRecord(nps="6", nb_mm=150, outside_diameter_in=6.625)])
        with pytest.raises(NotFoundError) as exc_info:
            sizes.resolve("7")
        assert exc_info.value.lookup == "outside_diameter"

    def test_nominal_sizes_sorted(self):
        sizes = default_tables().sizes.nominal_sizes()
        assert sizes[:4] == ["1/8", "1/4", "3/8", "1/2"]
        assert sizes.index("1-1/4") < sizes.index("1-1/2") < sizes.index("2")
        assert sizes[-1] == "48"

    def test_duplicate_size_rejected(self):
        with pytest.raises(InvalidInputError):
            SizeTable([
                NominalSizeRecord(nps="6", outside_diameter_in=6.625),
                NominalSizeRecord(nps="NPS 6", outside_diameter_in=6.625),
            ])
