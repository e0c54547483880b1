"""
Dough Classifier.

This module classifies a dough as lean, enriched or sweet from its sugar,
fat, milk and egg content, and analyses the composition details that the
baker warnings key off.
"""
from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from ..const import (
    ENRICHED_FAT_PERCENT,
    ENRICHED_MILK_PERCENT,
    ENRICHED_SUGAR_PERCENT,
    SWEET_FAT_PERCENT,
    SWEET_SUGAR_PERCENT,
)
from ..models.recipe import DoughClassification, ParsedIngredient, ParsedRecipe
from .bakers_percentage import percent_of_flour

_LOGGER = logging.getLogger(__name__)

# Eggs are roughly 30% fat by weight
EGG_FAT_RATIO = 0.3


def classify_dough(
    sugar_amount: float,
    fat_amount: float,
    milk_amount: float,
    total_flour: float,
    has_eggs: bool = False,
) -> DoughClassification:
    """Classify a dough from its enrichment amounts.

    Args:
        sugar_amount: Grams of sugar and other sweeteners
        fat_amount: Grams of butter, oil and other fats
        milk_amount: Grams of milk
        total_flour: Grams of flour
        has_eggs: Whether the dough contains eggs

    Returns:
        The classification: 'sweet' above 15% sugar or fat, 'enriched' above
        5% sugar or fat, above 20% milk or with eggs, otherwise 'lean'
    """
    sugar_percent = percent_of_flour(sugar_amount, total_flour)
    fat_percent = percent_of_flour(fat_amount, total_flour)
    milk_percent = percent_of_flour(milk_amount, total_flour)

    if sugar_percent > SWEET_SUGAR_PERCENT or fat_percent > SWEET_FAT_PERCENT:
        dough_type = "sweet"
    elif (sugar_percent > ENRICHED_SUGAR_PERCENT
          or fat_percent > ENRICHED_FAT_PERCENT
          or milk_percent > ENRICHED_MILK_PERCENT
          or has_eggs):
        dough_type = "enriched"
    else:
        dough_type = "lean"

    return DoughClassification(
        type=dough_type,
        sugar_percent=sugar_percent,
        fat_percent=fat_percent,
        milk_percent=milk_percent,
        has_eggs=has_eggs,
    )


def is_egg(ingredient: ParsedIngredient) -> bool:
    name = ingredient.name.lower()
    return ingredient.type == "enrichment" and ("egg" in name or "yolk" in name)


def is_milk(ingredient: ParsedIngredient) -> bool:
    return ingredient.type == "liquid" and "milk" in ingredient.name.lower()


def _amount(ingredients: list[ParsedIngredient], predicate) -> float:
    return sum(i.amount for i in ingredients if predicate(i))


def classify_recipe(recipe: ParsedRecipe) -> DoughClassification:
    """Classify a parsed recipe by summing its sweeteners, fats and milk."""
    ingredients = recipe.ingredients
    classification = classify_dough(
        sugar_amount=_amount(ingredients, lambda i: i.type == "sweetener"),
        fat_amount=_amount(ingredients, lambda i: i.type == "fat"),
        milk_amount=_amount(ingredients, is_milk),
        total_flour=recipe.total_flour,
        has_eggs=any(is_egg(i) for i in ingredients),
    )
    _LOGGER.debug("Dough classified as %s (sugar %.1f%%, fat %.1f%%, milk %.1f%%)",
                  classification.type, classification.sugar_percent,
                  classification.fat_percent, classification.milk_percent)
    return classification


class DoughComposition(BaseModel):
    """Composition details used for context-aware baking advice."""

    is_enriched: bool
    has_eggs: bool
    has_butter: bool
    has_milk: bool
    has_sugar: bool
    sugar_percent: float
    fat_percent: float
    enrichment_total: float
    flour_types: list[str] = Field(default_factory=list)
    has_all_purpose: bool = False
    has_bread_flour: bool = False
    has_whole_wheat: bool = False


def analyze_dough(recipe: ParsedRecipe) -> DoughComposition:
    """Analyse the enrichments and flour types of a recipe.

    Fat includes the fat carried by eggs. A dough counts as enriched when
    sugar, fat and milk together exceed 5% of the flour.
    """
    ingredients = recipe.ingredients
    total_flour = recipe.total_flour

    egg_amount = _amount(ingredients, is_egg)
    butter_amount = _amount(
        ingredients, lambda i: i.type == "fat" and "butter" in i.name.lower())
    milk_amount = _amount(ingredients, is_milk)
    sugar_amount = _amount(
        ingredients,
        lambda i: i.type == "sweetener" and any(
            k in i.name.lower() for k in ("sugar", "honey")))

    fat_amount = butter_amount + egg_amount * EGG_FAT_RATIO
    enrichment_total = sugar_amount + fat_amount + milk_amount

    if total_flour > 0:
        sugar_percent = sugar_amount / total_flour * 100
        fat_percent = fat_amount / total_flour * 100
    else:
        sugar_percent = fat_percent = 0.0

    flour_types = [i.name.lower() for i in ingredients if i.type == "flour"]

    return DoughComposition(
        is_enriched=enrichment_total > total_flour * ENRICHED_SUGAR_PERCENT / 100,
        has_eggs=any(is_egg(i) for i in ingredients),
        has_butter=any(i.type == "fat" and "butter" in i.name.lower() for i in ingredients),
        has_milk=any(is_milk(i) for i in ingredients),
        has_sugar=sugar_amount > 0,
        sugar_percent=sugar_percent,
        fat_percent=fat_percent,
        enrichment_total=enrichment_total,
        flour_types=flour_types,
        has_all_purpose=any(
            "all-purpose" in f or "ap flour" in f
            or ("flour" in f and "bread" not in f and "whole" not in f)
            for f in flour_types),
        has_bread_flour=any("bread" in f for f in flour_types),
        has_whole_wheat=any("whole wheat" in f or "wholemeal" in f for f in flour_types),
    )
