"""
Tests for single ingredient line parsing.
"""

import pytest

from bread_converter.parsers.ingredient_parser import (
    classify_ingredient,
    clean_ingredient_name,
    is_excluded_line,
    is_supplementary_line,
    parse_ingredient_line,
)


class TestParseIngredientLine:
    """Tests for quantity extraction and typing of one line."""

    def test_grams_line(self):
        ingredient = parse_ingredient_line("500g bread flour")
        assert ingredient.name == "bread flour"
        assert ingredient.amount == 500
        assert ingredient.unit == "g"
        assert ingredient.type == "flour"

    def test_fraction_cup(self):
        ingredient = parse_ingredient_line("1/2 cup water")
        assert ingredient.amount == pytest.approx(120)
        assert ingredient.type == "liquid"

    def test_mixed_number(self):
        ingredient = parse_ingredient_line("2 1/2 cups bread flour")
        assert ingredient.amount == pytest.approx(325)
        assert ingredient.type == "flour"

    def test_unicode_fraction(self):
        ingredient = parse_ingredient_line("½ cup water")
        assert ingredient.amount == pytest.approx(120)

    def test_volume_line(self):
        ingredient = parse_ingredient_line("2 tsp salt")
        assert ingredient.amount == pytest.approx(12)
        assert ingredient.type == "salt"

    def test_parenthetical_grams_win(self):
        ingredient = parse_ingredient_line("2 tbsp (30g) heavy cream")
        assert ingredient.amount == 30
        assert ingredient.name == "heavy cream"
        assert ingredient.type == "liquid"

    def test_trailing_parenthetical_grams(self):
        ingredient = parse_ingredient_line("1/4 cup heavy cream (60g)")
        assert ingredient.amount == 60
        assert ingredient.name == "heavy cream"

    def test_alternate_gram_measure(self):
        ingredient = parse_ingredient_line("1 cup or 240g water")
        assert ingredient.amount == 240
        assert ingredient.name == "water"

    def test_alternate_gram_measure_after_slash(self):
        ingredient = parse_ingredient_line("1 cup / 240g water")
        assert ingredient.amount == 240
        assert ingredient.name == "water"

    @pytest.mark.parametrize("line, expected", [
        ("1/2 g instant yeast", 0.5),
        ("1 1/2 g instant yeast", 1.5),
    ])
    def test_fractional_gram_amounts(self, line, expected):
        ingredient = parse_ingredient_line(line)
        assert ingredient.name == "instant yeast"
        assert ingredient.amount == pytest.approx(expected)
        assert ingredient.type == "yeast"

    def test_optional_ingredient_is_kept(self):
        ingredient = parse_ingredient_line("50g rye flour (optional)")
        assert ingredient.amount == 50
        assert ingredient.type == "flour"

    def test_bullets_are_stripped(self):
        ingredient = parse_ingredient_line("- 10g salt")
        assert ingredient.amount == 10
        assert ingredient.type == "salt"

    def test_eggs_by_count(self):
        ingredient = parse_ingredient_line("2 large eggs")
        assert ingredient.amount == 100
        assert ingredient.type == "enrichment"

    def test_beaten_eggs_keep_enrichment_type(self):
        ingredient = parse_ingredient_line("3 eggs, beaten with flour dusting")
        assert ingredient.name == "eggs"
        assert ingredient.amount == 150
        assert ingredient.type == "enrichment"

    def test_starter_with_extra_for_dusting_is_kept(self):
        ingredient = parse_ingredient_line("100g starter plus extra for dusting")
        assert ingredient is not None
        assert ingredient.amount == 100
        assert ingredient.name == "starter"
        assert ingredient.type == "starter"

    def test_dusting_flour_is_dropped(self):
        assert parse_ingredient_line("10g flour for dusting") is None

    def test_line_without_number_is_dropped(self):
        assert parse_ingredient_line("bread flour") is None

    def test_line_without_ingredient_keyword_is_dropped(self):
        assert parse_ingredient_line("2 loaves") is None

    @pytest.mark.parametrize("line", [
        "Egg wash: 1 egg beaten with 1 tbsp milk",
        "1 egg, beaten with 1 tbsp water, for brushing",
        "20g butter, melted, for brushing after baking",
        "Posted 11/8/25 by the bakery",
        "6 min read",
    ])
    def test_finishing_and_page_lines_are_dropped(self, line):
        assert parse_ingredient_line(line) is None

    def test_strict_mode_rejects_unknown_unit(self):
        lenient = parse_ingredient_line("2 cups semolina")
        assert lenient.amount == 2
        assert lenient.type == "flour"
        assert parse_ingredient_line("2 cups semolina", strict_unit_mode=True) is None


class TestLineFilters:
    """Tests for exclusion and supplementary-flour filters."""

    def test_exclusions(self):
        assert is_excluded_line("Visit https://example.com for 500g flour")
        assert is_excluded_line("Prep time: 20 minutes")
        assert not is_excluded_line("500g bread flour")

    def test_supplementary(self):
        assert is_supplementary_line("extra flour for dusting")
        assert is_supplementary_line("10g flour for dusting")
        assert not is_supplementary_line("100g starter plus extra for dusting")


class TestCleanIngredientName:
    """Tests for instructional phrase removal."""

    @pytest.mark.parametrize("raw,expected", [
        ("bread flour, plus extra for dusting", "bread flour"),
        ("eggs, beaten", "eggs"),
        ("butter, softened", "butter"),
        ("milk, at room temperature", "milk"),
        ("water", "water"),
    ])
    def test_suffixes_removed(self, raw, expected):
        assert clean_ingredient_name(raw) == expected

    def test_never_empties_the_name(self):
        assert clean_ingredient_name("melted") == "melted"


class TestClassifyIngredient:
    """Tests for first-match keyword classification."""

    @pytest.mark.parametrize("name,expected", [
        ("bread flour", "flour"),
        ("whole wheat flour", "flour"),
        ("water", "liquid"),
        ("whole milk", "liquid"),
        ("buttermilk", "liquid"),
        ("instant yeast", "yeast"),
        ("sea salt", "salt"),
        ("active starter", "starter"),
        ("levain", "starter"),
        ("unsalted butter", "fat"),
        ("olive oil", "fat"),
        ("granulated sugar", "sweetener"),
        ("honey", "sweetener"),
        ("eggs", "enrichment"),
        ("egg yolks", "enrichment"),
        ("dry milk powder", "enrichment"),
        ("raisins", "other"),
    ])
    def test_types(self, name, expected):
        assert classify_ingredient(name) == expected

    def test_enrichment_checked_before_flour(self):
        assert classify_ingredient("eggs, beaten with flour dusting") == "enrichment"

    def test_sweetener_checked_before_flour(self):
        assert classify_ingredient("sugar for the flour mix") == "sweetener"
