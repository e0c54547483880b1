"""
Recipe Conversion Service.

This module orchestrates a full conversion of pasted or fetched recipe
text: title extraction, parsing (AI when configured, regex otherwise),
the pre-conversion validation gate, conversion, the auto-fix pass and
baker's percentages.
"""
from __future__ import annotations

import logging
from typing import Any

from ..config import validate_options
from ..const import (
    CONF_API_KEY,
    CONF_DIRECTION,
    CONF_FILL_MISSING_LIQUID,
    CONF_LEVAIN_USES_STARTER_HYDRATION,
    CONF_MODEL,
    CONF_STARTER_HYDRATION,
    CONF_STRICT_UNIT_MODE,
    CONF_USE_AI,
    DIRECTION_SOURDOUGH_TO_YEAST,
    DIRECTION_YEAST_TO_SOURDOUGH,
    SOURCE_AI,
    SOURCE_REGEX,
)
from ..models.recipe import ParsedRecipe
from ..parsers.ai_parser import AIRecipeParser
from ..parsers.text_parser import parse_recipe, validate_recipe
from ..parsers.title_extractor import extract_recipe_info
from .bakers_percentage import calculate_bakers_percentages
from .converter import convert_recipe
from .validator import validate_conversion

_LOGGER = logging.getLogger(__name__)


def detect_direction(recipe: ParsedRecipe) -> str:
    """Pick a direction: recipes with a starter go to yeast, others to sourdough."""
    if recipe.starter_amount > 0:
        return DIRECTION_SOURDOUGH_TO_YEAST
    return DIRECTION_YEAST_TO_SOURDOUGH


def _parse(text: str, options: dict[str, Any]) -> tuple[ParsedRecipe, str]:
    if options[CONF_USE_AI] and options[CONF_API_KEY]:
        parser = AIRecipeParser(
            api_key=options[CONF_API_KEY],
            model=options[CONF_MODEL],
            starter_hydration=options[CONF_STARTER_HYDRATION],
            strict_unit_mode=options[CONF_STRICT_UNIT_MODE],
        )
        recipe = parser.parse_recipe(text)
        if recipe:
            return recipe, SOURCE_AI
        _LOGGER.info("AI parser found no ingredients, falling back to regex parser")
    elif options[CONF_USE_AI]:
        _LOGGER.warning("AI parsing requested without an API key, using regex parser")

    recipe = parse_recipe(
        text,
        starter_hydration=options[CONF_STARTER_HYDRATION],
        strict_unit_mode=options[CONF_STRICT_UNIT_MODE],
    )
    return recipe, SOURCE_REGEX


def convert_recipe_text(
    text: str,
    options: dict[str, Any] | None = None,
    direction: str | None = None,
) -> dict[str, Any]:
    """Convert recipe text end to end.

    Args:
        text: The raw recipe text
        options: Converter options (see config.OPTIONS_SCHEMA)
        direction: Conversion direction; overrides the direction option.
            When neither is set the direction is detected from the recipe.

    Returns:
        A JSON-ready dictionary. On a failed validation gate it holds the
        title, description, source, parsed recipe and the error messages;
        otherwise the conversion, validation warnings, auto-fixes and
        baker's percentages, with an empty error list.

    Raises:
        TypeError: If text is not a string
        voluptuous.Invalid: If options are invalid
    """
    if not isinstance(text, str):
        raise TypeError(f"Recipe text must be a string, got {type(text).__name__}")

    options = validate_options(options)
    info = extract_recipe_info(text)
    _LOGGER.info("Converting recipe '%s'", info.title)

    recipe, source = _parse(text, options)

    errors = validate_recipe(recipe)
    if errors:
        _LOGGER.warning("Recipe '%s' failed validation: %s", info.title, "; ".join(errors))
        return {
            "title": info.title,
            "description": info.description,
            "source": source,
            "recipe": recipe.model_dump(by_alias=True),
            "errors": errors,
        }

    direction = direction or options[CONF_DIRECTION] or detect_direction(recipe)
    conversion = convert_recipe(
        recipe,
        direction,
        raw_text=text,
        starter_hydration=options[CONF_STARTER_HYDRATION],
        fill_missing_liquid=options[CONF_FILL_MISSING_LIQUID],
        levain_uses_starter_hydration=options[CONF_LEVAIN_USES_STARTER_HYDRATION],
    )
    result = validate_conversion(conversion)
    percentages = calculate_bakers_percentages(result.recipe.converted)

    _LOGGER.info("Converted '%s' %s with %d auto-fixes",
                 info.title, direction, len(result.auto_fixes))

    return {
        "title": info.title,
        "description": info.description,
        "source": source,
        "direction": direction,
        "errors": [],
        "conversion": result.recipe.model_dump(by_alias=True),
        "validation_warnings": [w.model_dump(by_alias=True) for w in result.validation_warnings],
        "auto_fixes": result.auto_fixes,
        "bakers_percentages": [p.model_dump(by_alias=True) for p in percentages],
    }
