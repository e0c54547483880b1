"""
Validation and auto-fix pass.

Runs after every conversion. Each check sees the output of the previous
one; corrections are reported as auto-fix messages and everything else as
warnings. The pass never raises and always returns a recipe.
"""
from __future__ import annotations

import logging
import math

from ..const import (
    DEFAULT_SALT_RATIO,
    DIRECTION_YEAST_TO_SOURDOUGH,
    GROUP_DOUGH,
    GROUP_LEVAIN,
    HYDRATION_TOLERANCE,
    LARGE_HYDRATION_CORRECTION,
    MAX_SALT_RANGE_PERCENT,
    MIN_SALT_PERCENT,
)
from ..models.recipe import (
    ConvertedRecipe,
    ParsedIngredient,
    RecipeWarning,
    ValidationResult,
)
from ..parsers.base_parser import sum_amounts
from ..unit_converter import format_quantity, round_grams

_LOGGER = logging.getLogger(__name__)

FINISHING_FLOUR_KEYWORDS = ("dusting", "topping", "finishing")


def _check_salt(conversion: ConvertedRecipe, auto_fixes: list[str],
                warnings: list[RecipeWarning]) -> ConvertedRecipe:
    recipe = conversion.converted
    total_flour = recipe.total_flour
    salt = recipe.salt_amount

    if not total_flour > 0:
        return conversion

    if salt == 0 or math.isnan(salt):
        recommended = round_grams(total_flour * DEFAULT_SALT_RATIO)
        grouped = any(i.group for i in recipe.ingredients)
        ingredients = recipe.ingredients + [ParsedIngredient(
            name="salt", amount=recommended, type="salt",
            group=GROUP_DOUGH if grouped else None,
        )]
        auto_fixes.append(
            f"Added {format_quantity(recommended)}g salt (2% of flour), please "
            "verify this matches your original recipe")
        return conversion.model_copy(update={"converted": recipe.model_copy(
            update={"ingredients": ingredients, "salt_amount": recommended})})

    salt_percent = salt / total_flour * 100
    if salt_percent < MIN_SALT_PERCENT:
        warnings.append(RecipeWarning(
            severity="caution",
            message=f"Salt amount ({format_quantity(salt)}g, {salt_percent:.1f}%) is "
                    "lower than typical 1.5-2%. Bread may taste bland.",
        ))
    elif salt_percent > MAX_SALT_RANGE_PERCENT:
        warnings.append(RecipeWarning(
            severity="caution",
            message=f"Salt amount ({format_quantity(salt)}g, {salt_percent:.1f}%) is "
                    "higher than typical 2-3%. Bread may taste very salty.",
        ))
    return conversion


def _check_flour_structure(conversion: ConvertedRecipe, auto_fixes: list[str],
                           warnings: list[RecipeWarning]) -> ConvertedRecipe:
    finishing = [
        i.name for i in conversion.converted.ingredients
        if i.type == "flour" and any(k in i.name.lower() for k in FINISHING_FLOUR_KEYWORDS)
    ]
    if finishing:
        warnings.append(RecipeWarning(
            severity="info",
            message=f"Found flour ingredients that may be for finishing: "
                    f"{', '.join(finishing)}. These are included in flour totals.",
        ))
    return conversion


def _check_hydration(conversion: ConvertedRecipe, auto_fixes: list[str],
                     warnings: list[RecipeWarning]) -> ConvertedRecipe:
    recipe = conversion.converted
    if not recipe.total_flour > 0:
        return conversion

    calculated = recipe.total_liquid / recipe.total_flour * 100
    displayed = recipe.hydration
    difference = abs(calculated - displayed)

    if math.isnan(difference) or difference > HYDRATION_TOLERANCE:
        auto_fixes.append(
            f"Corrected hydration calculation: {calculated:.1f}% "
            f"(was showing {displayed:.1f}%)")
        if difference > LARGE_HYDRATION_CORRECTION:
            warnings.append(RecipeWarning(
                severity="warning",
                message=f"Large hydration adjustment made ({difference:.1f}%). "
                        "Please verify ingredient amounts.",
            ))
        return conversion.model_copy(update={
            "converted": recipe.model_copy(update={"hydration": calculated})})
    return conversion


def check_levain_totals(conversion: ConvertedRecipe, auto_fixes: list[str],
                        warnings: list[RecipeWarning]) -> ConvertedRecipe:
    """Cross-check the levain subtotal of a yeast to sourdough conversion.

    Only logs the comparison today; stricter validation can add warnings
    or fixes here without changing the pass order.
    """
    if conversion.direction != DIRECTION_YEAST_TO_SOURDOUGH:
        return conversion

    recipe = conversion.converted
    levain = [i for i in recipe.ingredients if i.group == GROUP_LEVAIN]
    if not levain:
        levain = [i for i in recipe.ingredients if i.type == "starter"]

    levain_total = sum(i.amount for i in levain)
    _LOGGER.debug("Levain check: starter %.1fg, water %.1fg, flour %.1fg, total %.1fg "
                  "(starter amount %.1fg)",
                  sum_amounts(levain, "starter"), sum_amounts(levain, "liquid"),
                  sum_amounts(levain, "flour"), levain_total, recipe.starter_amount)
    return conversion


def _check_bakers_percentages(conversion: ConvertedRecipe, auto_fixes: list[str],
                              warnings: list[RecipeWarning]) -> ConvertedRecipe:
    if not conversion.converted.total_flour > 0:
        _LOGGER.warning("Converted recipe has no usable flour total")
        warnings.append(RecipeWarning(
            severity="warning",
            message="Total flour is zero or missing, so baker's percentages "
                    "cannot be calculated.",
        ))
    return conversion


def _check_essential_ingredients(conversion: ConvertedRecipe, auto_fixes: list[str],
                                 warnings: list[RecipeWarning]) -> ConvertedRecipe:
    types = {i.type for i in conversion.converted.ingredients}

    if "flour" not in types:
        warnings.append(RecipeWarning(
            severity="warning",
            message="No flour detected in recipe. This may not be a bread recipe.",
        ))
    if "liquid" not in types:
        warnings.append(RecipeWarning(
            severity="warning",
            message="No liquid detected in recipe. Bread requires water, milk, or "
                    "other liquid.",
        ))
    if not types & {"yeast", "starter"}:
        warnings.append(RecipeWarning(
            severity="warning",
            message="No leavening agent detected. Recipe needs yeast or sourdough "
                    "starter.",
        ))
    if "salt" not in types:
        warnings.append(RecipeWarning(
            severity="info",
            message="No salt detected. Salt enhances flavor and controls "
                    "fermentation.",
        ))
    return conversion


VALIDATION_CHECKS = [
    _check_salt,
    _check_flour_structure,
    _check_hydration,
    check_levain_totals,
    _check_bakers_percentages,
    _check_essential_ingredients,
]


def validate_conversion(conversion: ConvertedRecipe) -> ValidationResult:
    """Validate a converted recipe and apply automatic fixes.

    Running the pass on its own output produces no further auto-fixes.

    Args:
        conversion: The result of a conversion

    Returns:
        ValidationResult with the possibly corrected recipe, the warnings
        found and the fixes applied. Validation warnings are also appended
        to the recipe's own warnings, without duplicates.
    """
    auto_fixes: list[str] = []
    validation_warnings: list[RecipeWarning] = []

    for check in VALIDATION_CHECKS:
        conversion = check(conversion, auto_fixes, validation_warnings)

    merged = list(conversion.warnings)
    for warning in validation_warnings:
        if warning not in merged:
            merged.append(warning)
    conversion = conversion.model_copy(update={"warnings": merged})

    _LOGGER.info("Validation complete: %d fixes, %d warnings",
                 len(auto_fixes), len(validation_warnings))
    return ValidationResult(
        recipe=conversion,
        validation_warnings=validation_warnings,
        auto_fixes=auto_fixes,
    )
