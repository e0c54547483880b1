"""Unit conversion tables and gram normalization for bread ingredients."""
from __future__ import annotations

import logging
import math
import re

_LOGGER = logging.getLogger(__name__)

# Unit spellings normalized to the canonical unit used in UNIT_CONVERSIONS keys
UNIT_ALIASES = {
    # Metric weight / volume
    "g": "g",
    "gr": "g",
    "gram": "g",
    "grams": "g",
    "gramme": "g",
    "grammes": "g",
    "kg": "kg",
    "kilogram": "kg",
    "kilograms": "kg",
    "ml": "ml",
    "milliliter": "ml",
    "milliliters": "ml",
    "millilitre": "ml",
    "millilitres": "ml",
    "l": "l",
    "liter": "l",
    "liters": "l",
    "litre": "l",
    "litres": "l",
    # Imperial weight
    "oz": "oz",
    "ounce": "oz",
    "ounces": "oz",
    "lb": "lb",
    "lbs": "lb",
    "pound": "lb",
    "pounds": "lb",
    # US volume
    "cup": "cup",
    "cups": "cup",
    "c": "cup",
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "tbsp": "tbsp",
    "tbsps": "tbsp",
    "tbs": "tbsp",
    "tb": "tbsp",
    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "tsp": "tsp",
    "tsps": "tsp",
    # Counts
    "packet": "packet",
    "packets": "packet",
    "package": "packet",
    "sachet": "packet",
    "stick": "stick",
    "sticks": "stick",
    "pinch": "pinch",
    "large": "large",
    "medium": "medium",
    "small": "small",
    "whole": "whole",
}

# Units whose number is already a gram weight (1 ml of liquid is taken as 1 g)
GRAM_UNITS = {"g", "ml"}

# Weight conversions to grams (g)
WEIGHT_TO_G = {
    "kg": 1000,
    "oz": 28.35,
    "lb": 453.592,
    "l": 1000,
}

EGG_WEIGHT_G = 50

# Per-ingredient gram weight of one unit, keyed "<canonical unit> <ingredient>".
# Declaration order matters: the first key contained in the lookup string wins,
# so more specific entries come before the generic ones.
UNIT_CONVERSIONS = {
    "cup ap flour": 120,
    "cup all-purpose flour": 120,
    "cup unbleached all-purpose flour": 120,
    "cup bread flour": 130,
    "cup whole wheat flour": 113,
    "cup whole wheat": 113,
    "cup rye flour": 102,
    "cup spelt flour": 100,
    "cup flour": 120,
    "cup water": 240,
    "cup buttermilk": 245,
    "cup milk": 240,
    "cup heavy cream": 238,
    "cup cream": 240,
    "cup olive oil": 216,
    "cup vegetable oil": 224,
    "cup oil": 224,
    "cup butter": 227,
    "cup brown sugar": 213,
    "cup sugar": 200,
    "cup honey": 340,
    "cup starter": 240,
    "tbsp active dry yeast": 10,
    "tbsp instant yeast": 10,
    "tbsp yeast": 10,
    "tbsp salt": 20,
    "tbsp vegetable oil": 15,
    "tbsp olive oil": 15,
    "tbsp oil": 15,
    "tbsp butter": 14,
    "tbsp honey": 21,
    "tbsp molasses": 20,
    "tbsp syrup": 20,
    "tbsp sugar": 12.5,
    "tbsp milk powder": 7,
    "tbsp milk": 15,
    "tbsp heavy cream": 15,
    "tbsp cream": 15,
    "tbsp water": 15,
    "tbsp flour": 8,
    "tsp instant yeast": 3,
    "tsp active dry yeast": 3,
    "tsp yeast": 3,
    "tsp salt": 6,
    "tsp sugar": 4,
    "tsp honey": 7,
    "tsp oil": 5,
    "tsp butter": 5,
    "packet yeast": 7,
    "stick butter": 113,
    "pinch salt": 0.4,
}

UNICODE_FRACTIONS = {
    '½': 0.5,
    '⅓': 0.333,
    '⅔': 0.667,
    '¼': 0.25,
    '¾': 0.75,
    '⅛': 0.125,
    '⅜': 0.375,
    '⅝': 0.625,
    '⅞': 0.875,
}


def _unit_pattern() -> str:
    # Longest spellings first so "tablespoons" is not cut to "tablespoon"
    spellings = sorted(UNIT_ALIASES, key=len, reverse=True)
    return "(?:" + "|".join(re.escape(spelling) for spelling in spellings) + ")"


UNIT_PATTERN = _unit_pattern()
GRAM_UNIT_PATTERN = r"(?:grams?|grammes?|gr|g|milliliters?|millilitres?|ml)"


def normalize_unit(unit: str | None) -> str | None:
    """Normalize a unit spelling to its canonical form.

    Args:
        unit: A unit string (e.g., "Cups", "tablespoons", "g.")

    Returns:
        Canonical unit (e.g., "cup", "tbsp", "g"), the cleaned spelling if
        it is not a known unit, or None for an empty unit
    """
    if not unit:
        return None
    cleaned = unit.lower().strip().rstrip('.')
    if not cleaned:
        return None
    return UNIT_ALIASES.get(cleaned, cleaned)


def lookup_unit_weight(unit: str, name: str) -> float | None:
    """Find the gram weight of one unit of a named ingredient.

    The lookup string is "<unit> <name>". A first pass returns the first
    table key contained in it. When nothing matches, a second pass accepts
    the first key with the same unit whose ingredient words all appear in
    the name, so "cup warm water" still resolves through "cup water".

    Args:
        unit: Canonical unit (e.g., "cup")
        name: Lowercase ingredient name

    Returns:
        Grams per unit, or None if the table has no matching entry
    """
    lookup = f"{unit} {name}"
    for key, grams in UNIT_CONVERSIONS.items():
        if key in lookup:
            return grams

    name_words = set(re.findall(r"[a-z\-]+", name))
    for key, grams in UNIT_CONVERSIONS.items():
        key_unit, _, key_name = key.partition(" ")
        if key_unit != unit:
            continue
        if set(key_name.split()) <= name_words:
            return grams

    return None


def convert_to_grams(
    amount: float,
    unit: str | None,
    name: str,
    strict: bool = False,
) -> float | None:
    """Convert a quantity of an ingredient to grams.

    Args:
        amount: The numeric quantity
        unit: The stated unit, or None when the line had no unit token
        name: The ingredient name, used for per-ingredient lookups
        strict: Reject units with no conversion instead of assuming grams

    Returns:
        Gram weight, or None when strict mode cannot convert the unit

    Examples:
        >>> convert_to_grams(0.5, 'cup', 'water')
        120.0
        >>> convert_to_grams(2, None, 'large eggs')
        100
    """
    canonical = normalize_unit(unit)
    lower_name = name.lower()

    if canonical in GRAM_UNITS:
        return amount

    if 'egg' in lower_name:
        return amount * EGG_WEIGHT_G

    if canonical is None:
        return amount

    if canonical in WEIGHT_TO_G:
        return amount * WEIGHT_TO_G[canonical]

    grams = lookup_unit_weight(canonical, lower_name)
    if grams is not None:
        return amount * grams

    if strict:
        _LOGGER.debug("No conversion for '%s %s' in strict mode", unit, name)
        return None

    # Last resort: assume the number already is a gram weight
    _LOGGER.debug("No conversion for '%s %s', treating %s as grams",
                  unit, name, amount)
    return amount


def apply_unicode_fractions(text: str) -> str:
    """Replace unicode fraction characters with decimal equivalents.

    Handles both standalone fractions (½) and mixed numbers (2½).

    Args:
        text: String potentially containing unicode fractions

    Returns:
        String with unicode fractions replaced by decimals
    """
    for fraction_char, decimal_value in UNICODE_FRACTIONS.items():
        if fraction_char not in text:
            continue

        pattern = rf'(\d+)\s?{re.escape(fraction_char)}'

        def replace_mixed(match: re.Match, value: float = decimal_value) -> str:
            return format_quantity(int(match.group(1)) + value)

        text = re.sub(pattern, replace_mixed, text)
        text = text.replace(fraction_char, str(decimal_value))

    return text


def format_quantity(quantity: float | int | None) -> str:
    """
    Format quantity to remove unnecessary decimals.

    Args:
        quantity: The numeric quantity (can be int, float, or None)

    Returns:
        Formatted string (empty string if quantity is None)

    Examples:
        >>> format_quantity(2.0)
        '2'
        >>> format_quantity(2.5)
        '2.5'
        >>> format_quantity(3.8500000000000005)
        '3.85'
    """
    if quantity is None:
        return ""

    if quantity != quantity or quantity in (float('inf'), float('-inf')):
        return str(quantity)

    if quantity == int(quantity):
        return str(int(quantity))

    return f"{quantity:.2f}".rstrip('0').rstrip('.')


def round_grams(quantity: float) -> float:
    """Round to the nearest gram, halves up.

    Non-finite values are returned unchanged so NaN and infinities pass
    through arithmetic instead of raising.

    Examples:
        >>> round_grams(10.5)
        11.0
        >>> round_grams(2.4)
        2.0
    """
    if not math.isfinite(quantity):
        return quantity
    return float(math.floor(quantity + 0.5))
