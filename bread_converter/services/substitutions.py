"""
Substitution Advisor.

A static rule table keyed by ingredient-name substrings. Each matching rule
contributes suggested alternates with a ratio, a hydration adjustment in
percentage points and a short rationale.
"""
from __future__ import annotations

from collections.abc import Callable

from ..models.recipe import IngredientSubstitution, ParsedRecipe


def _contains(*keywords: str, unless: tuple[str, ...] = ()) -> Callable[[str], bool]:
    def matcher(name: str) -> bool:
        return (any(k in name for k in keywords)
                and not any(u in name for u in unless))
    return matcher


SUBSTITUTION_RULES: list[tuple[Callable[[str], bool], list[IngredientSubstitution]]] = [
    (
        _contains("bread flour", "strong flour"),
        [
            IngredientSubstitution(
                original="Bread flour",
                substitute="All-purpose flour",
                ratio="1:1",
                hydration_adjustment=0,
                notes="Slightly less protein (10-11% vs 12-14%). May result in "
                      "softer texture. No hydration adjustment needed.",
            ),
            IngredientSubstitution(
                original="Bread flour",
                substitute="Whole wheat flour (50/50 blend)",
                ratio="1:1 (replace up to 50%)",
                hydration_adjustment=5,
                notes="Replace half the bread flour with whole wheat. Add 5-7% "
                      "more water (e.g., if recipe uses 300g water, add 15-20g "
                      "more). Dough will be denser and nuttier.",
            ),
        ],
    ),
    (
        _contains("all-purpose", "plain flour"),
        [
            IngredientSubstitution(
                original="All-purpose flour",
                substitute="Bread flour",
                ratio="1:1",
                hydration_adjustment=0,
                notes="Higher protein content (12-14% vs 10-11%). Will produce "
                      "chewier texture. No hydration adjustment needed.",
            ),
        ],
    ),
    (
        _contains("sugar", unless=("brown",)),
        [
            IngredientSubstitution(
                original="Granulated sugar",
                substitute="Honey",
                ratio="1:0.75 (use 25% less honey)",
                hydration_adjustment=-2,
                notes="Honey is liquid. For every 100g sugar replaced, reduce "
                      "water by 20-25g (about 2% of flour weight). Adds moisture "
                      "and deeper flavor.",
            ),
            IngredientSubstitution(
                original="Granulated sugar",
                substitute="Brown sugar",
                ratio="1:1",
                hydration_adjustment=0,
                notes="Brown sugar adds molasses flavor and slightly more "
                      "moisture. Use equal amounts.",
            ),
        ],
    ),
    (
        _contains("honey"),
        [
            IngredientSubstitution(
                original="Honey",
                substitute="Granulated sugar",
                ratio="1:1.25 (use 25% more sugar)",
                hydration_adjustment=2,
                notes="Sugar is dry. For every 100g honey replaced, add 20-25g "
                      "more water (about 2% of flour weight). Less complex flavor.",
            ),
        ],
    ),
    (
        _contains("butter", unless=("buttermilk",)),
        [
            IngredientSubstitution(
                original="Butter",
                substitute="Olive oil or neutral oil",
                ratio="1:0.75 (use 25% less oil)",
                hydration_adjustment=0,
                notes="Butter is ~80% fat, 20% water/milk solids. Use 75g oil "
                      "for every 100g butter. Texture will be slightly softer "
                      "but less rich.",
            ),
        ],
    ),
    (
        _contains("oil"),
        [
            IngredientSubstitution(
                original="Oil",
                substitute="Butter (melted)",
                ratio="1:1.25 (use 25% more butter)",
                hydration_adjustment=0,
                notes="Use 125g melted butter for every 100g oil. Adds richer "
                      "flavor and flakier texture.",
            ),
        ],
    ),
    (
        _contains("instant yeast"),
        [
            IngredientSubstitution(
                original="Instant yeast",
                substitute="Active dry yeast",
                ratio="1:1.25",
                hydration_adjustment=0,
                notes="Use 25% more active dry yeast. Dissolve in warm water "
                      "(105-110°F) for 5-10 minutes before adding to dough.",
            ),
        ],
    ),
    (
        lambda name: "yeast" in name and "dry" in name,
        [
            IngredientSubstitution(
                original="Active dry yeast",
                substitute="Instant yeast",
                ratio="1:0.75",
                hydration_adjustment=0,
                notes="Use 25% less instant yeast. Can be mixed directly with "
                      "flour, no need to dissolve first.",
            ),
        ],
    ),
    (
        _contains("egg", unless=("wash",)),
        [
            IngredientSubstitution(
                original="Eggs (whole)",
                substitute="Flax eggs (vegan)",
                ratio="1 egg : 1 tbsp ground flaxseed + 3 tbsp water",
                hydration_adjustment=0,
                notes="Mix ground flaxseed with water, let sit 5 minutes until "
                      "gel-like. Works best in dense breads. Provides binding "
                      "but not leavening.",
            ),
            IngredientSubstitution(
                original="Eggs (whole)",
                substitute="Aquafaba (chickpea liquid)",
                ratio="1 egg : 3 tbsp aquafaba",
                hydration_adjustment=0,
                notes="Use liquid from canned chickpeas. Best for enriched "
                      "doughs. Provides structure and some lift.",
            ),
        ],
    ),
    (
        _contains("milk", unless=("powder", "buttermilk")),
        [
            IngredientSubstitution(
                original="Whole milk",
                substitute="Water",
                ratio="1:1",
                hydration_adjustment=0,
                notes="Direct 1:1 replacement. Bread will be slightly less rich "
                      "and tender. Add 1 tbsp butter per cup of milk for richer "
                      "flavor.",
            ),
            IngredientSubstitution(
                original="Whole milk",
                substitute="Plant-based milk (soy, oat, almond)",
                ratio="1:1",
                hydration_adjustment=0,
                notes="Use unsweetened varieties. Soy milk is closest to dairy "
                      "milk in protein. Oat adds sweetness. Almond is thinner.",
            ),
            IngredientSubstitution(
                original="Whole milk",
                substitute="Buttermilk",
                ratio="1:1 (add 1/4 tsp baking soda per cup)",
                hydration_adjustment=0,
                notes="Adds tanginess and tenderness. Add 1/4 tsp baking soda "
                      "per cup to neutralize acidity.",
            ),
        ],
    ),
]


def generate_substitutions(recipe: ParsedRecipe) -> list[IngredientSubstitution]:
    """Suggest ingredient substitutions for a recipe.

    Every ingredient is checked against every rule. Suggestions keep the
    order in which they were first produced and each (original, substitute)
    pair appears once.

    Args:
        recipe: The recipe to advise on

    Returns:
        De-duplicated substitution suggestions
    """
    seen: set[tuple[str, str]] = set()
    substitutions: list[IngredientSubstitution] = []

    for ingredient in recipe.ingredients:
        name = ingredient.name.lower()
        for matcher, suggestions in SUBSTITUTION_RULES:
            if not matcher(name):
                continue
            for suggestion in suggestions:
                key = (suggestion.original, suggestion.substitute)
                if key in seen:
                    continue
                seen.add(key)
                substitutions.append(suggestion.model_copy())

    return substitutions
