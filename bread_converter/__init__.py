"""Sourdough and commercial-yeast bread recipe converter."""
from .parsers.text_parser import parse_recipe, validate_recipe
from .services.bakers_percentage import calculate_bakers_percentages
from .services.converter import (
    convert_recipe,
    convert_sourdough_to_yeast,
    convert_yeast_to_sourdough,
)
from .services.recipe_service import convert_recipe_text
from .services.validator import validate_conversion

__version__ = "1.0.0"

__all__ = [
    "calculate_bakers_percentages",
    "convert_recipe",
    "convert_recipe_text",
    "convert_sourdough_to_yeast",
    "convert_yeast_to_sourdough",
    "parse_recipe",
    "validate_conversion",
    "validate_recipe",
]
