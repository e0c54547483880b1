"""
Tests for unit tables and gram conversion.
"""

import math

import pytest

from bread_converter.unit_converter import (
    UNIT_CONVERSIONS,
    apply_unicode_fractions,
    convert_to_grams,
    format_quantity,
    lookup_unit_weight,
    normalize_unit,
    round_grams,
)


class TestNormalizeUnit:
    """Tests for unit spelling normalization."""

    @pytest.mark.parametrize("spelling,expected", [
        ("Cups", "cup"),
        ("tablespoons", "tbsp"),
        ("Tbsp.", "tbsp"),
        ("teaspoon", "tsp"),
        ("grams", "g"),
        ("lbs", "lb"),
        ("litre", "l"),
    ])
    def test_known_spellings(self, spelling, expected):
        assert normalize_unit(spelling) == expected

    def test_empty_unit_is_none(self):
        assert normalize_unit("") is None
        assert normalize_unit(None) is None

    def test_unknown_unit_is_returned_cleaned(self):
        assert normalize_unit("Handfuls") == "handfuls"


class TestLookupUnitWeight:
    """Tests for the per-ingredient unit table."""

    def test_specific_entry_wins_over_generic(self):
        """'cup bread flour' is declared before 'cup flour'."""
        assert lookup_unit_weight("cup", "bread flour") == 130
        assert lookup_unit_weight("cup", "flour") == 120

    def test_word_subset_fallback(self):
        assert lookup_unit_weight("cup", "warm water") == 240

    def test_unknown_ingredient(self):
        assert lookup_unit_weight("cup", "raisins") is None

    def test_whole_wheat_with_and_without_flour(self):
        assert lookup_unit_weight("cup", "whole wheat flour") == 113
        assert lookup_unit_weight("cup", "whole wheat") == 113

    def test_no_key_is_shadowed_by_an_earlier_one(self):
        keys = list(UNIT_CONVERSIONS)
        for index, key in enumerate(keys):
            for earlier in keys[:index]:
                assert earlier not in key, f"'{earlier}' hides '{key}'"


class TestConvertToGrams:
    """Tests for gram conversion of stated quantities."""

    def test_half_cup_water(self):
        assert convert_to_grams(0.5, "cup", "water") == pytest.approx(120)

    def test_gram_and_ml_pass_through(self):
        assert convert_to_grams(250, "g", "flour") == 250
        assert convert_to_grams(250, "ml", "milk") == 250

    def test_weight_units(self):
        assert convert_to_grams(1, "kg", "flour") == 1000
        assert convert_to_grams(2, "oz", "butter") == pytest.approx(56.7)
        assert convert_to_grams(1, "lb", "flour") == pytest.approx(453.592)
        assert convert_to_grams(0.5, "l", "water") == 500

    def test_eggs_weigh_fifty_grams(self):
        assert convert_to_grams(2, "large", "eggs") == 100
        assert convert_to_grams(3, None, "eggs") == 150

    def test_heavy_cream_table_entries(self):
        assert convert_to_grams(2, "tbsp", "heavy cream") == 30
        assert convert_to_grams(0.25, "cup", "heavy cream") == pytest.approx(59.5)

    def test_no_unit_keeps_amount(self):
        assert convert_to_grams(500, None, "bread flour") == 500

    def test_unknown_unit_falls_back_to_grams(self):
        assert convert_to_grams(3, "handful", "raisins") == 3

    def test_unknown_unit_rejected_in_strict_mode(self):
        assert convert_to_grams(3, "handful", "raisins", strict=True) is None


class TestFormatting:
    """Tests for quantity formatting helpers."""

    def test_unicode_fractions(self):
        assert apply_unicode_fractions("½ cup water") == "0.5 cup water"
        assert apply_unicode_fractions("2½ cups flour") == "2.5 cups flour"

    @pytest.mark.parametrize("value,expected", [
        (2.0, "2"),
        (2.5, "2.5"),
        (3.8500000000000005, "3.85"),
        (None, ""),
    ])
    def test_format_quantity(self, value, expected):
        assert format_quantity(value) == expected

    def test_round_grams_rounds_halves_up(self):
        assert round_grams(10.5) == 11
        assert round_grams(2.4) == 2
        assert math.isnan(round_grams(math.nan))
