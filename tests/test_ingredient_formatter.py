"""
Tests for plain-text rendering of converted recipes.
"""

from bread_converter.models.recipe import MethodChange, ParsedIngredient, ParsedRecipe
from bread_converter.services.converter import convert_yeast_to_sourdough
from bread_converter.services.ingredient_formatter import (
    format_ingredient_line,
    format_ingredient_lines,
    format_method_steps,
)


class TestFormatIngredientLine:
    def test_rounded(self):
        yeast = ParsedIngredient(name="instant yeast", amount=3.85, type="yeast")
        assert format_ingredient_line(yeast) == "4g instant yeast"

    def test_unrounded(self):
        yeast = ParsedIngredient(name="instant yeast", amount=3.85, type="yeast")
        assert format_ingredient_line(yeast, rounded=False) == "3.85g instant yeast"


class TestFormatIngredientLines:
    """Tests for grouped ingredient lists."""

    def test_flat_list(self, sourdough_recipe):
        assert format_ingredient_lines(sourdough_recipe) == [
            "500g bread flour",
            "350g water",
            "100g active starter (100% hydration)",
            "10g salt",
        ]

    def test_groups_get_headers(self, yeast_recipe):
        converted = convert_yeast_to_sourdough(yeast_recipe).converted
        lines = format_ingredient_lines(converted)

        assert lines[0] == "Levain:"
        assert lines[1] == "  33g active sourdough starter (100% hydration)"
        assert lines[4] == ""
        assert lines[5] == "Dough:"
        assert lines[6] == "  500g bread flour"

    def test_ungrouped_items_come_first(self):
        recipe = ParsedRecipe(ingredients=[
            ParsedIngredient(name="flour", amount=100, type="flour", group="Dough"),
            ParsedIngredient(name="salt", amount=2, type="salt"),
        ])
        assert format_ingredient_lines(recipe) == ["2g salt", "", "Dough:", "  100g flour"]


class TestFormatMethodSteps:
    def test_timing_in_header(self):
        steps = [
            MethodChange(step="1. MIX", change="Mix everything.", timing="5 min"),
            MethodChange(step="2. BAKE", change="Bake."),
        ]
        assert format_method_steps(steps) == [
            "1. MIX (5 min)", "  Mix everything.", "2. BAKE", "  Bake."]
