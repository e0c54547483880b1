"""
Tests for the validation and auto-fix pass.
"""

import pytest

from bread_converter.models.recipe import ParsedIngredient
from bread_converter.services.validator import validate_conversion

SALT_FIX = "Added 10g salt (2% of flour), please verify this matches your original recipe"


def _messages(warnings):
    return [w.message for w in warnings]


class TestSaltCheck:
    """Tests for missing and out-of-range salt."""

    def test_missing_salt_is_added(self, make_conversion):
        result = validate_conversion(make_conversion(salt=0))
        converted = result.recipe.converted

        assert result.auto_fixes == [SALT_FIX]
        assert converted.salt_amount == 10
        [salt] = [i for i in converted.ingredients if i.type == "salt"]
        assert salt.amount == 10
        assert salt.group is None

    def test_second_pass_makes_no_fixes(self, make_conversion):
        first = validate_conversion(make_conversion(salt=0))
        second = validate_conversion(first.recipe)
        assert second.auto_fixes == []
        assert second.recipe.converted.salt_amount == 10

    def test_added_salt_joins_dough_group(self, make_conversion):
        ingredients = [
            ParsedIngredient(name="bread flour", amount=500, type="flour", group="Dough"),
            ParsedIngredient(name="water", amount=350, type="liquid", group="Dough"),
            ParsedIngredient(name="starter", amount=100, type="starter", group="Levain"),
        ]
        result = validate_conversion(make_conversion(salt=0, ingredients=ingredients))
        [salt] = [i for i in result.recipe.converted.ingredients if i.type == "salt"]
        assert salt.group == "Dough"

    def test_salt_in_range_is_quiet(self, make_conversion):
        result = validate_conversion(make_conversion(salt=10))
        assert result.auto_fixes == []
        assert result.validation_warnings == []

    def test_low_salt_caution(self, make_conversion):
        result = validate_conversion(make_conversion(salt=5))
        [warning] = result.validation_warnings
        assert warning.severity == "caution"
        assert "lower than typical 1.5-2%" in warning.message

    def test_high_salt_caution(self, make_conversion):
        result = validate_conversion(make_conversion(salt=16))
        [warning] = result.validation_warnings
        assert "higher than typical 2-3%" in warning.message
        assert "3.2%" in warning.message

    def test_original_conversion_untouched(self, make_conversion):
        conversion = make_conversion(salt=0)
        validate_conversion(conversion)
        assert conversion.converted.salt_amount == 0


class TestHydrationCheck:
    def test_small_difference_is_tolerated(self, make_conversion):
        result = validate_conversion(make_conversion(hydration=69))
        assert result.auto_fixes == []
        assert result.recipe.converted.hydration == 69

    def test_hydration_is_corrected(self, make_conversion):
        result = validate_conversion(make_conversion(hydration=60))
        assert result.auto_fixes == [
            "Corrected hydration calculation: 70.0% (was showing 60.0%)"]
        assert result.recipe.converted.hydration == pytest.approx(70)
        assert result.validation_warnings == []

    def test_large_correction_warns(self, make_conversion):
        result = validate_conversion(make_conversion(hydration=50))
        assert result.recipe.converted.hydration == pytest.approx(70)
        assert _messages(result.validation_warnings) == [
            "Large hydration adjustment made (20.0%). Please verify ingredient amounts."]


class TestZeroFlour:
    def test_no_fix_and_a_warning(self, make_conversion):
        result = validate_conversion(make_conversion(flour=0, salt=0))
        assert result.auto_fixes == []
        assert any("baker's percentages cannot be calculated" in m
                   for m in _messages(result.validation_warnings))


class TestEssentialIngredients:
    """Tests for missing-ingredient warnings."""

    def test_flour_only(self, make_conversion):
        ingredients = [ParsedIngredient(name="bread flour", amount=500, type="flour")]
        result = validate_conversion(make_conversion(ingredients=ingredients))
        messages = _messages(result.validation_warnings)

        assert "No liquid detected in recipe. Bread requires water, milk, or other liquid." in messages
        assert "No leavening agent detected. Recipe needs yeast or sourdough starter." in messages
        assert any(m.startswith("No salt detected") for m in messages)
        assert not any(m.startswith("No flour detected") for m in messages)

    def test_finishing_flour_info(self, make_conversion):
        ingredients = [
            ParsedIngredient(name="bread flour", amount=480, type="flour"),
            ParsedIngredient(name="rice flour for dusting", amount=20, type="flour"),
            ParsedIngredient(name="water", amount=350, type="liquid"),
            ParsedIngredient(name="instant yeast", amount=3.5, type="yeast"),
            ParsedIngredient(name="salt", amount=10, type="salt"),
        ]
        result = validate_conversion(make_conversion(ingredients=ingredients))
        [warning] = result.validation_warnings
        assert warning.severity == "info"
        assert "rice flour for dusting" in warning.message


class TestWarningMerge:
    def test_validation_warnings_join_recipe_warnings_once(self, make_conversion):
        first = validate_conversion(make_conversion(salt=5))
        second = validate_conversion(first.recipe)
        assert len(second.recipe.warnings) == 1
        assert second.recipe.warnings == first.validation_warnings
