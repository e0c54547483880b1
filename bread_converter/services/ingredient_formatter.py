"""Plain-text rendering of converted recipes for the command line."""
from __future__ import annotations

from ..models.recipe import MethodChange, ParsedIngredient, ParsedRecipe
from ..unit_converter import format_quantity, round_grams


def format_ingredient_line(ingredient: ParsedIngredient, rounded: bool = True) -> str:
    """Render one ingredient, e.g. '500g bread flour'."""
    amount = round_grams(ingredient.amount) if rounded else ingredient.amount
    return f"{format_quantity(amount)}{ingredient.unit} {ingredient.name}"


def format_ingredient_lines(recipe: ParsedRecipe, rounded: bool = True) -> list[str]:
    """Render the ingredient list, grouped under section headers.

    Ungrouped ingredients come first without a header. Grouped ingredients
    are listed under '<Group>:' in the order their groups first appear.
    The yeast name keeps its own decimal figures, so rounding the amount
    column does not hide them.
    """
    lines = []
    groups: dict[str, list[ParsedIngredient]] = {}

    for ingredient in recipe.ingredients:
        if ingredient.group:
            groups.setdefault(ingredient.group, []).append(ingredient)
        else:
            lines.append(format_ingredient_line(ingredient, rounded))

    for group, ingredients in groups.items():
        if lines:
            lines.append("")
        lines.append(f"{group}:")
        lines.extend(f"  {format_ingredient_line(i, rounded)}" for i in ingredients)

    return lines


def format_method_steps(method_changes: list[MethodChange]) -> list[str]:
    lines = []
    for change in method_changes:
        header = change.step
        if change.timing:
            header = f"{header} ({change.timing})"
        lines.append(header)
        lines.append(f"  {change.change}")
    return lines
