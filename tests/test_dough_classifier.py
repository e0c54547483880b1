"""
Tests for dough classification and composition analysis.
"""

import pytest

from bread_converter.models.recipe import ParsedIngredient, ParsedRecipe
from bread_converter.services.dough_classifier import (
    analyze_dough,
    classify_dough,
    classify_recipe,
)


class TestClassifyDough:
    """Tests for the lean/enriched/sweet cut points."""

    def test_lean(self):
        result = classify_dough(0, 0, 0, 500)
        assert result.type == "lean"
        assert result.sugar_percent == 0

    @pytest.mark.parametrize("sugar,fat,milk,eggs", [
        (30, 0, 0, False),      # 6% sugar
        (0, 30, 0, False),      # 6% fat
        (0, 0, 150, False),     # 30% milk
        (0, 0, 0, True),
    ])
    def test_enriched(self, sugar, fat, milk, eggs):
        assert classify_dough(sugar, fat, milk, 500, has_eggs=eggs).type == "enriched"

    def test_exactly_five_percent_is_lean(self):
        assert classify_dough(25, 25, 100, 500).type == "lean"

    @pytest.mark.parametrize("sugar,fat", [(80, 0), (0, 80)])
    def test_sweet(self, sugar, fat):
        assert classify_dough(sugar, fat, 0, 500).type == "sweet"

    def test_zero_flour_is_lean(self):
        assert classify_dough(0, 0, 0, 0).type == "lean"


class TestClassifyRecipe:
    def test_sourdough_is_lean(self, sourdough_recipe):
        assert classify_recipe(sourdough_recipe).type == "lean"

    def test_butter_loaf_is_enriched(self, yeast_recipe):
        result = classify_recipe(yeast_recipe)
        assert result.type == "enriched"
        assert result.fat_percent == pytest.approx(6)

    def test_brioche_is_sweet(self, brioche_recipe):
        result = classify_recipe(brioche_recipe)
        assert result.type == "sweet"
        assert result.has_eggs


class TestAnalyzeDough:
    """Tests for composition details."""

    def test_brioche_composition(self, brioche_recipe):
        composition = analyze_dough(brioche_recipe)
        assert composition.has_eggs
        assert composition.has_butter
        assert composition.has_milk
        assert composition.has_sugar
        assert composition.is_enriched
        # 80g butter plus 30% of 100g eggs
        assert composition.fat_percent == pytest.approx(110 / 450 * 100)

    def test_flour_types(self):
        recipe = ParsedRecipe(
            ingredients=[
                ParsedIngredient(name="all-purpose flour", amount=300, type="flour"),
                ParsedIngredient(name="whole wheat flour", amount=200, type="flour"),
            ],
            total_flour=500,
        )
        composition = analyze_dough(recipe)
        assert composition.has_all_purpose
        assert composition.has_whole_wheat
        assert not composition.has_bread_flour

    def test_zero_flour(self):
        composition = analyze_dough(ParsedRecipe())
        assert composition.sugar_percent == 0
        assert not composition.is_enriched
