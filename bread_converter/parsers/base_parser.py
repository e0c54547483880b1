"""
Base Recipe Parser.

This module defines the interface that all recipe parsers implement, plus
the total and hydration aggregation every parser shares so that a recipe
read by the regex parser and one read by the AI parser carry identical
numbers.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from ..const import DEFAULT_STARTER_HYDRATION
from ..models.recipe import ParsedIngredient, ParsedRecipe

_LOGGER = logging.getLogger(__name__)


class BaseRecipeParser(ABC):
    """Abstract base class for recipe parsers.

    All recipe parsers must implement the parse_recipe method to convert
    raw text into structured ParsedRecipe objects.
    """

    def __init__(self, starter_hydration: float = DEFAULT_STARTER_HYDRATION) -> None:
        check_starter_hydration(starter_hydration)
        self.starter_hydration = starter_hydration

    @abstractmethod
    def parse_recipe(self, text: str) -> ParsedRecipe | None:
        """Parse recipe information from text.

        Args:
            text: The raw recipe text to parse

        Returns:
            A ParsedRecipe, or None if parsing fails
        """
        pass


def check_starter_hydration(starter_hydration: float) -> None:
    """Raise ValueError for a negative starter hydration."""
    if starter_hydration < 0:
        raise ValueError(
            f"Starter hydration must be non-negative, got {starter_hydration}")


def split_starter(
    starter_amount: float,
    starter_hydration: float = DEFAULT_STARTER_HYDRATION,
) -> tuple[float, float]:
    """Split a starter weight into the flour and water it contains.

    Args:
        starter_amount: Starter weight in grams
        starter_hydration: Water as a percentage of flour inside the starter

    Returns:
        Tuple of (starter_flour, starter_water); they always sum to the
        starter weight

    Examples:
        >>> split_starter(100, 100)
        (50.0, 50.0)
        >>> split_starter(150, 50)
        (100.0, 50.0)
    """
    check_starter_hydration(starter_hydration)
    ratio = starter_hydration / 100
    starter_flour = starter_amount / (1 + ratio)
    starter_water = starter_amount * ratio / (1 + ratio)
    return starter_flour, starter_water


def sum_amounts(ingredients: list[ParsedIngredient], ingredient_type: str) -> float:
    """Sum the gram amounts of every ingredient of one type."""
    return sum(i.amount for i in ingredients if i.type == ingredient_type)


def calculate_hydration(total_liquid: float, total_flour: float) -> float:
    """Return liquid as a percentage of flour, or 0 when there is no flour."""
    if total_flour > 0:
        return total_liquid / total_flour * 100
    return 0.0


def build_parsed_recipe(
    ingredients: list[ParsedIngredient],
    method: str = "",
    starter_hydration: float = DEFAULT_STARTER_HYDRATION,
) -> ParsedRecipe:
    """Aggregate parsed ingredients into a ParsedRecipe.

    Flour and liquid totals include the flour and water held inside the
    starter, split according to the starter hydration. The starter stays a
    single ingredient in the list.

    Args:
        ingredients: Parsed ingredients in source order
        method: The method section text
        starter_hydration: Starter hydration percentage used for the split

    Returns:
        The aggregated ParsedRecipe

    Raises:
        ValueError: If starter_hydration is negative
    """
    total_flour = sum_amounts(ingredients, "flour")
    total_liquid = sum_amounts(ingredients, "liquid")
    starter_amount = sum_amounts(ingredients, "starter")
    yeast_amount = sum_amounts(ingredients, "yeast")
    salt_amount = sum_amounts(ingredients, "salt")

    starter_flour, starter_water = split_starter(
        starter_amount, starter_hydration)
    adjusted_flour = total_flour + starter_flour
    adjusted_liquid = total_liquid + starter_water

    _LOGGER.debug(
        "Totals: flour %.1fg (+%.1fg from starter), liquid %.1fg (+%.1fg from starter)",
        total_flour, starter_flour, total_liquid, starter_water)

    return ParsedRecipe(
        ingredients=list(ingredients),
        method=method.strip(),
        total_flour=adjusted_flour,
        total_liquid=adjusted_liquid,
        starter_amount=starter_amount,
        yeast_amount=yeast_amount,
        salt_amount=salt_amount,
        hydration=calculate_hydration(adjusted_liquid, adjusted_flour),
    )
