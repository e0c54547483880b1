"""
Regex Recipe Parser.

This module handles parsing of free-form recipe text (pasted, OCR'd or
scraped) into a ParsedRecipe without any AI inference, and the pre-conversion
validation gate that decides whether a parsed recipe is usable.
"""
from __future__ import annotations

import logging
import re

from ..const import (
    DEFAULT_STARTER_HYDRATION,
    MAX_HYDRATION,
    MAX_SALT_PERCENT,
    MIN_HYDRATION_ENRICHED,
    MIN_HYDRATION_LEAN,
    MIN_LINE_LENGTH,
    MIN_TOTAL_FLOUR,
    MIN_TOTAL_LIQUID,
)
from ..models.recipe import ParsedIngredient, ParsedRecipe
from ..unit_converter import UNIT_ALIASES, UNIT_PATTERN
from .base_parser import BaseRecipeParser, build_parsed_recipe, check_starter_hydration
from .ingredient_parser import is_supplementary_line, parse_ingredient_line

_LOGGER = logging.getLogger(__name__)

METHOD_KEYWORDS = ["method:", "instructions:", "directions:", "steps:"]

METADATA_LABEL_PATTERN = re.compile(
    r"^\s*(?:prep|bake|fermentation|total|yield|servings?|category|cuisine|"
    r"difficulty|calories)\b[^:\n]*:",
    re.IGNORECASE,
)

# Where a synthetic line break may go: a mixed number, a fraction, or a
# number followed by a unit word
MEASUREMENT_TOKEN_PATTERN = re.compile(
    rf"(?<![\d./])(?:\d+\s+\d+/\d+|\d+/\d+|\d+(?:\.\d+)?\s*{UNIT_PATTERN}\b)",
    re.IGNORECASE,
)

# A measurement right after one of these words belongs to the same ingredient
NO_SPLIT_WORDS = {
    "or", "plus", "about", "approx", "approximately", "to", "extra",
    "additional", "with",
}

BULLET_SPLIT_PATTERN = re.compile(r"\s*\*\s*")


def split_sections(text: str) -> tuple[str, str]:
    """Split recipe text into (ingredients section, method section).

    The method starts at the earliest method keyword, case-insensitive.
    Without one, the whole text is the ingredients section.
    """
    lower = text.lower()
    indexes = [lower.find(k) for k in METHOD_KEYWORDS if k in lower]
    if not indexes:
        return text, ""
    start = min(indexes)
    return text[:start], text[start:].strip()


def _paren_depths(text: str) -> list[int]:
    depths = []
    depth = 0
    for char in text:
        depths.append(depth)
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(0, depth - 1)
        elif char == "\n":
            depth = 0
    return depths


def _should_split(text: str, position: int, depth: int) -> bool:
    if depth > 0:
        return False

    line_start = text.rfind("\n", 0, position) + 1
    before = text[line_start:position].rstrip()
    if not before:
        return False

    previous = before[-1]
    if not (previous.isalpha() or previous in "),"):
        return False

    words = re.findall(r"[a-z]+", before.lower())
    if words and (words[-1] in NO_SPLIT_WORDS or words[-1] in UNIT_ALIASES):
        return False
    return True


def normalize_ingredient_lines(section: str) -> str:
    """Put each ingredient on its own line.

    Asterisk bullets become line breaks, and a line break is inserted before
    each measurement that follows text on the same line, so that
    "120ml water (warm) 57g butter" becomes two lines. Measurements inside
    parentheses or right after words like "or" and "plus" stay put.
    """
    text = BULLET_SPLIT_PATTERN.sub("\n", section)
    depths = _paren_depths(text)

    pieces = []
    last = 0
    for match in MEASUREMENT_TOKEN_PATTERN.finditer(text):
        position = match.start()
        if _should_split(text, position, depths[position]):
            pieces.append(text[last:position].rstrip())
            pieces.append("\n")
            last = position
    pieces.append(text[last:])
    return "".join(pieces)


def candidate_lines(section: str) -> list[str]:
    """Return the lines of an ingredients section worth parsing."""
    lines = []
    for line in normalize_ingredient_lines(section).split("\n"):
        trimmed = line.strip()
        if len(trimmed) < MIN_LINE_LENGTH:
            continue
        if not re.search(r"\d", trimmed):
            continue
        if METADATA_LABEL_PATTERN.match(trimmed):
            _LOGGER.debug("Skipping metadata line: %s", trimmed)
            continue
        if is_supplementary_line(trimmed):
            _LOGGER.debug("Skipping supplementary line: %s", trimmed)
            continue
        lines.append(trimmed)
    return lines


class RegexRecipeParser(BaseRecipeParser):
    """Parses free-form recipe text with ingredient line patterns."""

    def __init__(
        self,
        starter_hydration: float = DEFAULT_STARTER_HYDRATION,
        strict_unit_mode: bool = False,
    ) -> None:
        super().__init__(starter_hydration)
        self.strict_unit_mode = strict_unit_mode

    def parse_ingredients(self, section: str) -> list[ParsedIngredient]:
        ingredients = []
        for line in candidate_lines(section):
            ingredient = parse_ingredient_line(line, self.strict_unit_mode)
            if ingredient:
                ingredients.append(ingredient)
        return ingredients

    def parse_recipe(self, text: str) -> ParsedRecipe:
        """Parse raw recipe text.

        Args:
            text: The raw recipe text

        Returns:
            The parsed recipe; an unrecognizable text yields a recipe with
            no ingredients rather than an error

        Raises:
            TypeError: If text is not a string
        """
        if not isinstance(text, str):
            raise TypeError(
                f"Recipe text must be a string, got {type(text).__name__}")

        ingredients_section, method_section = split_sections(text)
        ingredients = self.parse_ingredients(ingredients_section)

        recipe = build_parsed_recipe(
            ingredients, method_section, self.starter_hydration)
        _LOGGER.info(
            "Parsed %d ingredients (flour %.0fg, liquid %.0fg, hydration %.1f%%)",
            len(recipe.ingredients), recipe.total_flour,
            recipe.total_liquid, recipe.hydration)
        return recipe


def parse_recipe(
    raw_text: str,
    starter_hydration: float = DEFAULT_STARTER_HYDRATION,
    strict_unit_mode: bool = False,
) -> ParsedRecipe:
    """Parse raw recipe text into a ParsedRecipe.

    Args:
        raw_text: The recipe text
        starter_hydration: Hydration percentage of the starter, used to
            split its weight into flour and water for the totals
        strict_unit_mode: Reject ingredient lines with unconvertible units

    Returns:
        The parsed recipe

    Raises:
        TypeError: If raw_text is not a string
        ValueError: If starter_hydration is negative
    """
    if not isinstance(raw_text, str):
        raise TypeError(
            f"Recipe text must be a string, got {type(raw_text).__name__}")
    check_starter_hydration(starter_hydration)
    parser = RegexRecipeParser(starter_hydration, strict_unit_mode)
    return parser.parse_recipe(raw_text)


def _looks_enriched(recipe: ParsedRecipe) -> bool:
    for ingredient in recipe.ingredients:
        if ingredient.type in ("fat", "enrichment", "sweetener"):
            return True
        if ingredient.type == "liquid" and "milk" in ingredient.name.lower():
            return True
    return False


def validate_recipe(recipe: ParsedRecipe) -> list[str]:
    """Check a parsed recipe before conversion.

    Args:
        recipe: The parsed recipe

    Returns:
        User-facing error messages; an empty list means the recipe can be
        converted
    """
    errors = []

    if recipe.total_flour < MIN_TOTAL_FLOUR:
        errors.append(
            "I couldn't find any flour. Please list at least one flour with an amount.")

    if recipe.total_liquid < MIN_TOTAL_LIQUID:
        errors.append(
            "I couldn't find enough liquid. Please include water or other liquids.")

    min_hydration = MIN_HYDRATION_ENRICHED if _looks_enriched(recipe) else MIN_HYDRATION_LEAN
    if recipe.hydration > MAX_HYDRATION:
        errors.append(
            f"Your hydration calculates to {recipe.hydration:.0f}%. That's more batter "
            "than bread dough. Double-check your flour and water amounts.")
    elif recipe.hydration < min_hydration:
        errors.append(
            f"Your hydration is {recipe.hydration:.0f}%. That's quite low. "
            "Double-check your amounts.")

    if recipe.starter_amount > 0 and recipe.yeast_amount > 0:
        errors.append("I found both yeast and starter. Pick one, then try again.")

    if recipe.total_flour > 0:
        salt_percent = recipe.salt_amount / recipe.total_flour * 100
        if salt_percent > MAX_SALT_PERCENT:
            errors.append(
                f"Your salt is at {salt_percent:.1f}% of flour weight, which would taste "
                "like the ocean. Check your salt amount.")

    if errors:
        _LOGGER.debug("Recipe validation found %d errors", len(errors))
    return errors
