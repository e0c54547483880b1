"""
Conversion Engine.

This module converts a parsed bread recipe from sourdough starter to
commercial yeast and back. Conversions are pure arithmetic over the parsed
totals: the input recipe is never mutated, and zero or NaN totals flow
through as numbers rather than raising.
"""
from __future__ import annotations

import logging
import math
import re

from ..const import (
    ACTIVE_DRY_YEAST_RATIO,
    DEFAULT_STARTER_HYDRATION,
    DIRECTION_SOURDOUGH_TO_YEAST,
    DIRECTION_YEAST_TO_SOURDOUGH,
    ENRICHMENT_HYDRATION_BOOST,
    GROUP_DOUGH,
    GROUP_LEVAIN,
    INSTANT_YEAST_RATIO,
    LEVAIN_SPLIT_MIN_INGREDIENTS,
    LEVAIN_STARTER_HYDRATION,
    STARTER_RATIO,
    YEAST_HYDRATION_FACTOR,
)
from ..models.recipe import (
    ConvertedRecipe,
    DoughDetails,
    LevainDetails,
    ParsedIngredient,
    ParsedRecipe,
    TroubleshootingTip,
)
from ..parsers.base_parser import calculate_hydration, split_starter, sum_amounts
from ..unit_converter import format_quantity, round_grams
from .baker_warnings import detect_special_techniques, generate_baker_warnings
from .dough_classifier import classify_recipe, is_egg
from .method_templates import select_method_template, template_family
from .substitutions import generate_substitutions

_LOGGER = logging.getLogger(__name__)

HIGH_SUGAR_TIP_PERCENT = 10
HIGH_FAT_TIP_PERCENT = 15
FAT_NAME_PATTERN = re.compile(r"\b(?:oil|butter)\b")

YEAST_TROUBLESHOOTING = [
    TroubleshootingTip(
        issue="Dense Crumb",
        solution="Dough was likely under-proofed or yeast too old. Ensure yeast "
                 "is fresh and active, and proof until dough springs back slowly "
                 "when pressed.",
    ),
    TroubleshootingTip(
        issue="Crust Too Hard",
        solution="Loaf may be overbaked or hydration too low. Check internal "
                 "temperature (target 190-195°F) and consider increasing water "
                 "by 2-3%.",
    ),
    TroubleshootingTip(
        issue="Flat Loaf",
        solution="Over-proofed dough. Watch for the \"slow spring back\" test "
                 "during final proof. If dough doesn't spring back at all, it's "
                 "gone too far.",
    ),
]


def _grams(value: float) -> float:
    """Clamp a computed amount to a valid ingredient weight."""
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def _has_fat(ingredient: ParsedIngredient) -> bool:
    return ingredient.type == "fat" or bool(FAT_NAME_PATTERN.search(ingredient.name.lower()))


def _has_egg(ingredient: ParsedIngredient) -> bool:
    return is_egg(ingredient) or "egg" in ingredient.name.lower()


def _has_sweetener(ingredient: ParsedIngredient) -> bool:
    name = ingredient.name.lower()
    return ingredient.type == "sweetener" or "sugar" in name or "honey" in name


def enrichment_boost(ingredients: list[ParsedIngredient]) -> float:
    """Hydration points added back for fat, egg and sweetener presence.

    Each category detected adds ENRICHMENT_HYDRATION_BOOST points, so the
    boost is at most three times that.
    """
    detected = [
        any(_has_fat(i) for i in ingredients),
        any(_has_egg(i) for i in ingredients),
        any(_has_sweetener(i) for i in ingredients),
    ]
    return ENRICHMENT_HYDRATION_BOOST * sum(detected)


def _fold_starter_flour(
    ingredients: list[ParsedIngredient], starter_flour: float,
) -> list[ParsedIngredient]:
    """Add the flour held by a removed starter to the first flour ingredient."""
    for index, ingredient in enumerate(ingredients):
        if ingredient.type == "flour":
            ingredients[index] = ingredient.model_copy(
                update={"amount": _grams(ingredient.amount + starter_flour)})
            break
    return ingredients


def convert_sourdough_to_yeast(
    recipe: ParsedRecipe,
    raw_text: str | None = None,
    starter_hydration: float = DEFAULT_STARTER_HYDRATION,
    fill_missing_liquid: bool = False,
) -> ConvertedRecipe:
    """Convert a sourdough recipe to commercial yeast.

    The starter is removed; its flour is folded into the first flour
    ingredient since the parsed totals already count it. Instant yeast is
    added at 0.7% of flour (active dry at 0.9% shown alongside). Hydration
    drops by a factor of 0.92 and regains 2 points for each of fat, egg and
    sweetener. The first liquid ingredient absorbs the recomputed liquid.

    Args:
        recipe: The parsed sourdough recipe
        raw_text: The original recipe text, used for technique detection
        starter_hydration: Starter hydration used when the recipe was parsed
        fill_missing_liquid: Append a water ingredient when the recipe has no
            liquid ingredient to carry the recomputed amount. When False the
            ingredient list is left without liquid while total_liquid still
            changes.

    Returns:
        The ConvertedRecipe; `original` is the input recipe unchanged
    """
    total_flour = recipe.total_flour
    starter_flour, _ = split_starter(recipe.starter_amount, starter_hydration)

    ingredients = [i.model_copy() for i in recipe.ingredients if i.type != "starter"]
    ingredients = _fold_starter_flour(ingredients, starter_flour)

    instant_yeast = total_flour * INSTANT_YEAST_RATIO
    active_dry_yeast = total_flour * ACTIVE_DRY_YEAST_RATIO
    ingredients.append(ParsedIngredient(
        name=f"instant yeast, or {format_quantity(active_dry_yeast)}g active dry yeast",
        amount=_grams(instant_yeast),
        type="yeast",
    ))

    boost = enrichment_boost(recipe.ingredients)
    hydration = recipe.hydration * YEAST_HYDRATION_FACTOR + boost
    new_liquid = total_flour * hydration / 100

    liquids = [index for index, i in enumerate(ingredients) if i.type == "liquid"]
    if liquids:
        first = liquids[0]
        other_liquid = sum(ingredients[index].amount for index in liquids[1:])
        ingredients[first] = ingredients[first].model_copy(
            update={"amount": _grams(new_liquid - other_liquid)})
    elif fill_missing_liquid:
        ingredients.append(ParsedIngredient(
            name="water", amount=_grams(new_liquid), type="liquid"))
    else:
        _LOGGER.debug("No liquid ingredient to receive %.1fg; total_liquid updated only",
                      new_liquid)

    _LOGGER.debug("Sourdough to yeast: flour %.1fg, hydration %.1f%% -> %.1f%% (boost %.0f)",
                  total_flour, recipe.hydration, hydration, boost)

    converted = recipe.model_copy(update={
        "ingredients": ingredients,
        "total_liquid": new_liquid,
        "hydration": hydration,
        "starter_amount": 0.0,
        "yeast_amount": instant_yeast,
    })

    classification = classify_recipe(recipe)
    first_liquid = next((i.amount for i in ingredients if i.type == "liquid"), new_liquid)
    method_changes = select_method_template(
        classification,
        DIRECTION_SOURDOUGH_TO_YEAST,
        dough=DoughDetails(
            flour=round_grams(total_flour),
            water=round_grams(first_liquid),
            salt=round_grams(recipe.salt_amount),
        ),
        has_eggs=any(_has_egg(i) for i in recipe.ingredients),
    )

    return ConvertedRecipe(
        original=recipe,
        converted=converted,
        direction=DIRECTION_SOURDOUGH_TO_YEAST,
        method_changes=method_changes,
        troubleshooting_tips=[tip.model_copy() for tip in YEAST_TROUBLESHOOTING],
        warnings=_conversion_warnings(converted, raw_text),
        substitutions=generate_substitutions(converted),
    )


def _sourdough_troubleshooting(enriched: bool, sugar_percent: float,
                               fat_percent: float) -> list[TroubleshootingTip]:
    if enriched:
        tight_crumb = ("Dough was under-fermented. Enriched doughs take longer, "
                       "so extend bulk fermentation by 1-2 hours.")
    else:
        tight_crumb = ("Dough was under-fermented or starter too weak. Build strong "
                       "levain and extend bulk fermentation.")

    tips = [
        TroubleshootingTip(issue="Tight Crumb", solution=tight_crumb),
        TroubleshootingTip(
            issue="Gummy Crumb",
            solution="Sliced too soon. Cool completely before slicing.",
        ),
        TroubleshootingTip(
            issue="Weak Rise",
            solution="Inactive starter or cold temperature. Ensure starter doubles "
                     "in 6-8 hours and maintain 75–78°F.",
        ),
    ]

    if sugar_percent > HIGH_SUGAR_TIP_PERCENT:
        tips.append(TroubleshootingTip(
            issue="High Sugar Content",
            solution=f"Sugar is {sugar_percent:.0f}% of flour. This slows "
                     "fermentation. Consider increasing starter to 25% or "
                     "extending bulk fermentation 2-3 hours.",
        ))
    if fat_percent > HIGH_FAT_TIP_PERCENT:
        tips.append(TroubleshootingTip(
            issue="High Fat Content",
            solution=f"Fat is {fat_percent:.0f}% of flour. Add butter AFTER initial "
                     "mixing to prevent coating flour particles.",
        ))
    return tips


def convert_yeast_to_sourdough(
    recipe: ParsedRecipe,
    raw_text: str | None = None,
    starter_hydration: float = DEFAULT_STARTER_HYDRATION,
    levain_uses_starter_hydration: bool = False,
) -> ConvertedRecipe:
    """Convert a commercial-yeast recipe to sourdough.

    Yeast is removed and starter is added at 20% of flour. The added starter
    is decomposed as a 100% hydration starter unless
    levain_uses_starter_hydration is set, in which case the parse-time
    starter hydration is used. When more than three ingredients result, the
    list is laid out as a Levain build (seed starter, water and flour in
    equal thirds of the starter weight) followed by the Dough.

    Args:
        recipe: The parsed yeast recipe
        raw_text: The original recipe text, used for technique detection
        starter_hydration: Starter hydration used when the recipe was parsed
        levain_uses_starter_hydration: Decompose the added starter with
            starter_hydration instead of 100%

    Returns:
        The ConvertedRecipe; `original` is the input recipe unchanged
    """
    levain_hydration = (starter_hydration if levain_uses_starter_hydration
                        else LEVAIN_STARTER_HYDRATION)

    remaining = [i.model_copy() for i in recipe.ingredients if i.type != "yeast"]
    starter_amount = recipe.total_flour * STARTER_RATIO
    starter_flour, starter_water = split_starter(starter_amount, levain_hydration)

    total_flour = recipe.total_flour + starter_flour
    total_liquid = recipe.total_liquid + starter_water

    seed = starter_amount / 3
    seed_flour, seed_water = split_starter(seed, levain_hydration)
    levain_flour = starter_flour - seed_flour
    levain_water = starter_water - seed_water

    starter_name = f"active sourdough starter ({format_quantity(levain_hydration)}% hydration)"

    if len(remaining) + 1 > LEVAIN_SPLIT_MIN_INGREDIENTS:
        ingredients = [
            ParsedIngredient(name=starter_name, amount=_grams(seed),
                             type="starter", group=GROUP_LEVAIN),
            ParsedIngredient(name="water (80-85°F)", amount=_grams(levain_water),
                             type="liquid", group=GROUP_LEVAIN),
            ParsedIngredient(name="bread flour", amount=_grams(levain_flour),
                             type="flour", group=GROUP_LEVAIN),
        ]
        ingredients.extend(i.model_copy(update={"group": GROUP_DOUGH}) for i in remaining)
    else:
        ingredients = remaining + [
            ParsedIngredient(name=starter_name, amount=_grams(starter_amount), type="starter"),
        ]

    _LOGGER.debug("Yeast to sourdough: starter %.1fg (%.1fg flour, %.1fg water), "
                  "flour %.1fg, liquid %.1fg", starter_amount, starter_flour,
                  starter_water, total_flour, total_liquid)

    converted = recipe.model_copy(update={
        "ingredients": ingredients,
        "total_flour": total_flour,
        "total_liquid": total_liquid,
        "hydration": calculate_hydration(total_liquid, total_flour),
        "starter_amount": starter_amount,
        "yeast_amount": 0.0,
    })

    classification = classify_recipe(recipe)
    method_changes = select_method_template(
        classification,
        DIRECTION_YEAST_TO_SOURDOUGH,
        levain=LevainDetails(
            starter=round_grams(seed),
            water=round_grams(levain_water),
            flour=round_grams(levain_flour),
            total=round_grams(starter_amount),
        ),
        dough=DoughDetails(
            flour=round_grams(sum_amounts(remaining, "flour")),
            water=round_grams(sum_amounts(remaining, "liquid")),
            salt=round_grams(recipe.salt_amount),
        ),
    )

    tips = _sourdough_troubleshooting(
        template_family(classification) == "enriched",
        classification.sugar_percent,
        classification.fat_percent,
    )

    return ConvertedRecipe(
        original=recipe,
        converted=converted,
        direction=DIRECTION_YEAST_TO_SOURDOUGH,
        method_changes=method_changes,
        troubleshooting_tips=tips,
        warnings=_conversion_warnings(converted, raw_text),
        substitutions=generate_substitutions(converted),
    )


def _conversion_warnings(converted: ParsedRecipe, raw_text: str | None):
    warnings = generate_baker_warnings(converted)
    if raw_text:
        warnings = detect_special_techniques(raw_text) + warnings
    return warnings


def convert_recipe(
    recipe: ParsedRecipe,
    direction: str,
    raw_text: str | None = None,
    starter_hydration: float = DEFAULT_STARTER_HYDRATION,
    fill_missing_liquid: bool = False,
    levain_uses_starter_hydration: bool = False,
) -> ConvertedRecipe:
    """Convert a recipe in the given direction.

    Raises:
        ValueError: If direction is not a known conversion direction
    """
    if direction == DIRECTION_SOURDOUGH_TO_YEAST:
        return convert_sourdough_to_yeast(
            recipe, raw_text, starter_hydration, fill_missing_liquid=fill_missing_liquid)
    if direction == DIRECTION_YEAST_TO_SOURDOUGH:
        return convert_yeast_to_sourdough(
            recipe, raw_text, starter_hydration,
            levain_uses_starter_hydration=levain_uses_starter_hydration)
    raise ValueError(f"Unknown conversion direction: {direction}")
