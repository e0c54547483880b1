"""
Baker warnings.

Context-aware advice computed from a dough-composition analysis, plus
detection of special techniques (tangzhong, preferments, cold retards...)
mentioned in the raw recipe text.
"""
from __future__ import annotations

import logging
import re

from ..models.recipe import ParsedRecipe, RecipeWarning
from .dough_classifier import DoughComposition, analyze_dough

_LOGGER = logging.getLogger(__name__)


def _hydration_warnings(recipe: ParsedRecipe, comp: DoughComposition) -> list[RecipeWarning]:
    warnings = []
    hydration = recipe.hydration

    if hydration > 75:
        if comp.is_enriched:
            warnings.append(RecipeWarning(
                severity="caution",
                message=f"High hydration ({hydration:.0f}%) with enrichments makes "
                        "sticky dough. Enriched doughs typically work best at 60-68% "
                        "hydration. Consider reducing water by 5-10% for easier handling.",
            ))
        elif comp.has_all_purpose and not comp.has_bread_flour:
            warnings.append(RecipeWarning(
                severity="caution",
                message=f"All-purpose flour at {hydration:.0f}% hydration can be "
                        "challenging. All-purpose handles 70-75% max. Consider "
                        "switching to bread flour or reducing hydration to 72-75%.",
            ))
        elif hydration > 85:
            warnings.append(RecipeWarning(
                severity="warning",
                message=f"Very high hydration ({hydration:.0f}%) creates extremely "
                        "sticky dough. This requires excellent gluten development and "
                        "gentle handling techniques. Consider autolyse and "
                        "stretch-and-fold instead of kneading.",
            ))
        elif hydration > 78 and not comp.has_bread_flour:
            warnings.append(RecipeWarning(
                severity="info",
                message=f"High hydration ({hydration:.0f}%) works best with "
                        "high-protein bread flour. Expect a very extensible, sticky "
                        "dough that benefits from coil folds rather than traditional "
                        "kneading.",
            ))

    if hydration < 60 and not comp.is_enriched:
        warnings.append(RecipeWarning(
            severity="info",
            message=f"Lower hydration ({hydration:.0f}%) creates a stiffer dough. "
                    "This is typical for bagels or some artisan loaves, but may be "
                    "drier than expected for standard bread. Increase water if you "
                    "want a softer crumb.",
        ))

    if comp.has_whole_wheat and hydration < 70:
        warnings.append(RecipeWarning(
            severity="info",
            message="Whole wheat flour absorbs more water than white flour. Consider "
                    "increasing hydration by 5-10% for a softer texture, or allow "
                    "longer autolyse time for better water absorption.",
        ))

    return warnings


def _enrichment_warnings(recipe: ParsedRecipe, comp: DoughComposition) -> list[RecipeWarning]:
    warnings = []

    if comp.sugar_percent > 15:
        warnings.append(RecipeWarning(
            severity="info",
            message=f"High sugar content ({comp.sugar_percent:.0f}% of flour). Sugar "
                    "slows fermentation and creates tender crumb. Allow extra time "
                    "for rises, and watch for over-browning in the oven. Tent with "
                    "foil if needed.",
        ))

    if comp.fat_percent > 20:
        warnings.append(RecipeWarning(
            severity="info",
            message=f"High fat content ({comp.fat_percent:.0f}% of flour). Fat "
                    "inhibits gluten development and slows fermentation. Knead "
                    "longer to develop structure, and expect a rich, tender crumb "
                    "with shorter shelf life.",
        ))

    if comp.has_milk and not comp.has_sugar:
        warnings.append(RecipeWarning(
            severity="info",
            message="Milk adds richness and browning but can slow yeast activity "
                    "slightly. If using cold milk, warm it to room temperature for "
                    "better fermentation.",
        ))

    if comp.has_eggs and recipe.hydration > 65:
        warnings.append(RecipeWarning(
            severity="info",
            message="Eggs contribute to hydration (75% water). The dough may be "
                    "stickier than expected. Dust work surface generously and use "
                    "bench scraper for easier handling.",
        ))

    return warnings


def _flour_type_warnings(recipe: ParsedRecipe, comp: DoughComposition) -> list[RecipeWarning]:
    warnings = []

    if comp.has_whole_wheat and comp.has_bread_flour:
        warnings.append(RecipeWarning(
            severity="info",
            message="Whole wheat + bread flour blend creates hearty texture with "
                    "good rise. The whole wheat adds nutty flavor but shortens shelf "
                    "life, so it is best eaten within 2-3 days.",
        ))

    if comp.has_all_purpose and recipe.yeast_amount > 0 and recipe.hydration > 70:
        warnings.append(RecipeWarning(
            severity="caution",
            message="All-purpose flour with high hydration can struggle to hold "
                    "structure. Reduce mixing time to avoid overworking the weaker "
                    "gluten network, or increase bread flour proportion.",
        ))

    return warnings


def _fermentation_warnings(recipe: ParsedRecipe, comp: DoughComposition) -> list[RecipeWarning]:
    warnings = []

    if comp.is_enriched and recipe.starter_amount > 0:
        warnings.append(RecipeWarning(
            severity="info",
            message="Enriched sourdough doughs ferment slower due to sugar and fat. "
                    "Allow 50% longer for bulk ferment (6-9 hours instead of 4-6), "
                    "or use warmer environment (78-80°F).",
        ))

    if comp.sugar_percent > 10 and recipe.yeast_amount > 0:
        warnings.append(RecipeWarning(
            severity="info",
            message="High sugar content osmotically stresses yeast. First rise may "
                    "take 25% longer than standard recipes. Be patient, the yeast "
                    "will adapt and ferment successfully.",
        ))

    if comp.has_whole_wheat and recipe.starter_amount > 0:
        warnings.append(RecipeWarning(
            severity="info",
            message="Whole wheat accelerates sourdough fermentation due to extra "
                    "nutrients. Watch bulk ferment closely. It may be ready 30-60 "
                    "minutes earlier than white flour versions.",
        ))

    return warnings


def _handling_warnings(recipe: ParsedRecipe, comp: DoughComposition) -> list[RecipeWarning]:
    warnings = []

    if recipe.hydration > 75 and comp.is_enriched:
        warnings.append(RecipeWarning(
            severity="caution",
            message="Sticky enriched dough at high hydration requires confident "
                    "handling. Use well-oiled hands, work quickly, and avoid adding "
                    "excess flour which toughens the crumb.",
        ))

    if comp.has_butter and comp.fat_percent > 15:
        warnings.append(RecipeWarning(
            severity="info",
            message="High butter content creates very soft dough. Chill dough for "
                    "15-30 minutes if too soft to handle. Cold butter firms up, "
                    "making shaping much easier.",
        ))

    if recipe.hydration > 80 and not comp.is_enriched:
        warnings.append(RecipeWarning(
            severity="info",
            message="Very wet dough requires gentle touch. Use stretch-and-fold "
                    "technique instead of traditional kneading. Flour your hands, "
                    "not the dough, and work with confidence to maintain structure.",
        ))

    return warnings


WARNING_CHECKS = [
    _hydration_warnings,
    _enrichment_warnings,
    _flour_type_warnings,
    _fermentation_warnings,
    _handling_warnings,
]


def generate_baker_warnings(recipe: ParsedRecipe) -> list[RecipeWarning]:
    """Generate context-aware baking advice for a recipe.

    Args:
        recipe: The recipe to advise on, usually the converted one

    Returns:
        Warnings in check order: hydration, enrichment, flour type,
        fermentation, handling
    """
    composition = analyze_dough(recipe)
    warnings = []
    for check in WARNING_CHECKS:
        warnings.extend(check(recipe, composition))
    _LOGGER.debug("Generated %d baker warnings", len(warnings))
    return warnings


SPECIAL_TECHNIQUES = [
    (
        re.compile(r"\b(?:tangzhong|yudane|water\s*roux|milk\s*roux)\b", re.IGNORECASE),
        "This recipe uses a tangzhong or yudane (cooked flour paste). Its flour "
        "and liquid are part of the totals. Prepare it first and let it cool to "
        "room temperature before mixing.",
    ),
    (
        re.compile(r"\b(?:poolish|biga|sponge|pre-?ferment)\b", re.IGNORECASE),
        "This recipe uses a preferment (poolish, biga or sponge). The conversion "
        "treats it as part of the main dough; keep the preferment step for "
        "flavor, or mix everything at once for a quicker bake.",
    ),
    (
        re.compile(r"\b(?:cold\s*retard|retard(?:ed|ing)?|overnight|refrigerat\w*|fridge)\b",
                   re.IGNORECASE),
        "This recipe includes a cold or overnight fermentation. Cold retards "
        "slow fermentation a lot, so adjust rise times to your schedule and "
        "check the dough rather than the clock.",
    ),
    (
        re.compile(r"\b(?:laminat\w*|croissant|puff\s*pastry)\b", re.IGNORECASE),
        "This recipe involves lamination. Keep the dough and butter cold between "
        "folds; the converted leavening does not change the lamination steps.",
    ),
    (
        re.compile(r"\bscald(?:ed|ing)?\b", re.IGNORECASE),
        "This recipe uses scalded flour or milk. Let the scald cool completely "
        "before adding the starter or yeast.",
    ),
]


def detect_special_techniques(raw_text: str) -> list[RecipeWarning]:
    """Detect special techniques mentioned in the recipe text.

    Args:
        raw_text: The original recipe text

    Returns:
        One info warning per detected technique, in a fixed order
    """
    warnings = [
        RecipeWarning(severity="info", message=message)
        for pattern, message in SPECIAL_TECHNIQUES
        if pattern.search(raw_text)
    ]
    if warnings:
        _LOGGER.debug("Detected %d special techniques", len(warnings))
    return warnings
