"""
Baker's percentage calculations.

Every ingredient is expressed as a percentage of total flour weight.
"""
from __future__ import annotations

import math

from ..models.recipe import BakersPercentage, ParsedRecipe


def percent_of_flour(amount: float, total_flour: float) -> float:
    """Return amount as a percentage of total flour.

    Division by zero flour does not raise: a non-zero amount gives an
    infinite percentage and a zero amount gives NaN. Callers that display
    these values must guard against zero flour themselves.
    """
    if total_flour == 0:
        if amount == 0 or math.isnan(amount):
            return math.nan
        return math.copysign(math.inf, amount)
    return amount / total_flour * 100


def calculate_bakers_percentages(recipe: ParsedRecipe) -> list[BakersPercentage]:
    """Calculate the baker's percentage of each ingredient.

    Args:
        recipe: The parsed recipe

    Returns:
        One entry per ingredient, in ingredient order
    """
    return [
        BakersPercentage(
            ingredient=ingredient.name,
            amount=ingredient.amount,
            percentage=percent_of_flour(ingredient.amount, recipe.total_flour),
        )
        for ingredient in recipe.ingredients
    ]
