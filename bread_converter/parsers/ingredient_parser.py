"""
Ingredient Line Parser.

Turns one line of free recipe text into a ParsedIngredient, or rejects it.
The pattern lists below are data: each entry documents what it matches and
they are evaluated in the order given.
"""
from __future__ import annotations

import logging
import re

from ..models.recipe import ParsedIngredient
from ..unit_converter import (
    GRAM_UNIT_PATTERN,
    UNIT_PATTERN,
    apply_unicode_fractions,
    convert_to_grams,
)

_LOGGER = logging.getLogger(__name__)

NUMBER = r"\d+(?:\.\d+)?"

# Lines that are page furniture or finishing steps, never formula ingredients
EXCLUSION_PATTERNS = [
    re.compile(r"https?://|www\."),                          # URLs
    re.compile(r"\b\d{1,2}/\d{1,2}/\d{2,4}\b"),              # dates (11/8/25)
    re.compile(r"\d+\s*min(?:ute)?s?\s*read"),               # "6 min read"
    re.compile(r"back\s*to\s*blog"),                         # navigation
    re.compile(r"page\s+\d+\s+of\s+\d+"),                    # page footers
    re.compile(r"©|copyright|all\s+rights\s+reserved"),      # footers
    re.compile(r"baking\s*great\s*bread"),                   # site name
    re.compile(r"\b(?:posted|written)\s+by\b"),              # author bylines
    re.compile(r"\b(?:prep|cook|bake|total|rise|proof)\s*time\s*:"),
    re.compile(r"\b\d{1,2}:\d{2}\s*(?:am|pm)\b"),            # times (2:15 am)
    re.compile(r"egg\s*wash"),
    re.compile(r"\bbeaten\s+with\s+\d"),                     # egg wash mix
    re.compile(r"for\s+brushing"),
    re.compile(r"after\s+baking"),
]

INGREDIENT_KEYWORDS = [
    "flour", "wheat", "rye", "spelt", "semolina",
    "water", "milk", "buttermilk", "cream",
    "butter", "oil", "lard", "shortening",
    "egg", "yolk",
    "sugar", "honey", "syrup", "molasses",
    "salt", "yeast", "starter", "levain", "sourdough",
]

# Supplementary dusting/kneading flour, unless a 3+ digit amount is present
SUPPLEMENTARY_PATTERNS = [
    re.compile(
        r"\b(?:extra|additional|plus)\b.*\bfor\s+(?:kneading|dusting|rolling|sprinkling)\b"),
    re.compile(
        r"^\d+(?:-\d+)?\s*g\b.*\bfor\s+(?:kneading|dusting|rolling|sprinkling)\b"),
]
REAL_AMOUNT_PATTERN = re.compile(r"\d{3,}")

# Instructional phrases cut from the point they begin to the end of the name
NAME_SUFFIX_PATTERNS = [
    re.compile(r",?\s*\b(?:beaten|whisked|whisk|mixed|mix|combined|combine|"
               r"stirred|stir|kneaded|knead)\b"),
    re.compile(r",?\s*\b(?:softened|melted|warmed|cooled|lukewarm|sifted)\b"),
    re.compile(r",?\s*\b(?:to|at)\s+room\s+temp(?:erature)?\b"),
    re.compile(r",\s*room\s+temp(?:erature)?\b"),
    re.compile(r",?\s*\bfor\s+(?:dusting|greasing|kneading|topping)\b"),
    re.compile(r",?\s*\b(?:plus|and)\s+(?:extra|more)\b"),
]


def _keyword_pattern(*keywords: str) -> re.Pattern:
    alternatives = "|".join(re.escape(k) for k in keywords)
    return re.compile(rf"\b(?:{alternatives})(?:s|es)?\b")


# First matching rule sets the type. Enrichment, sweetener and fat come
# before flour so a contaminated egg or butter line is never read as flour.
TYPE_RULES = [
    ("enrichment", _keyword_pattern("egg", "yolk", "milk powder",
                                    "dry milk", "powdered milk")),
    ("sweetener", _keyword_pattern("sugar", "honey", "syrup", "molasses")),
    ("fat", _keyword_pattern("butter", "oil", "lard", "shortening")),
    ("flour", _keyword_pattern("flour", "wheat", "rye", "spelt", "semolina")),
    ("yeast", _keyword_pattern("yeast")),
    ("salt", _keyword_pattern("salt")),
    ("liquid", _keyword_pattern("water", "milk", "buttermilk", "cream")),
    ("starter", _keyword_pattern("starter", "levain", "sourdough")),
]

BULLET_PATTERN = re.compile(r"^[-•*·–]\s*")
RANGE_PATTERN = re.compile(rf"^({NUMBER})\s*[-–]\s*{NUMBER}(?=\s*[a-z])")
PAREN_GRAMS_PATTERN = re.compile(
    rf"\(\s*(?:about|approx\.?|approximately|~)?\s*({NUMBER})\s*"
    rf"{GRAM_UNIT_PATTERN}\b[^)]*\)")
LEADING_QUANTITY_PATTERN = re.compile(
    rf"^(?:{NUMBER}(?:\s+\d+/\d+|/\d+)?)\s*(?:{UNIT_PATTERN}\b\.?)?\s*")
ALT_MEASURE_PREFIX = re.compile(
    rf"^(?:or|/)\s*(?:\d+/\d+|{NUMBER})\s*(?:{UNIT_PATTERN}\b\.?)?\s*")

# (a) NUMBER g/ml NAME, skipping a parenthetical right after the unit
GRAMS_PATTERN = re.compile(
    rf"^({NUMBER})\s*{GRAM_UNIT_PATTERN}\b\.?\s*(?:\([^)]*\)\s*)?(.+)$")
# (b) "... or 240g water" / "... / 240g water"
ALTERNATE_GRAMS_PATTERN = re.compile(
    rf"(?:\bor\b|(?<!\d)\s*/)\s*({NUMBER})\s*{GRAM_UNIT_PATTERN}\b\.?\s*(.+)$")
# (b) "1 tablespoon 10g yeast"
DIRECT_GRAMS_PATTERN = re.compile(
    rf"^{NUMBER}\s*{UNIT_PATTERN}\b\.?\s+({NUMBER})\s*{GRAM_UNIT_PATTERN}\b\.?\s*(.+)$")
# (c) "2 1/2 cups flour", "1/2 cup water"
FRACTION_PATTERN = re.compile(
    rf"^(?:(\d+)\s+)?(\d+)/(\d+)\s*(?:({UNIT_PATTERN})\b\.?\s*)?(.+)$")
# (d) "2 cups water", "1 large egg"
UNIT_AMOUNT_PATTERN = re.compile(
    rf"^({NUMBER})\s*({UNIT_PATTERN})\b\.?\s+(.+)$")
# (e) "2 eggs", no unit token
BARE_AMOUNT_PATTERN = re.compile(rf"^({NUMBER})\s+(.+)$")


def is_excluded_line(line: str) -> bool:
    """Return True if the line matches a known non-ingredient pattern."""
    lower = line.lower()
    return any(pattern.search(lower) for pattern in EXCLUSION_PATTERNS)


def has_ingredient_keyword(line: str) -> bool:
    lower = line.lower()
    return any(keyword in lower for keyword in INGREDIENT_KEYWORDS)


def is_supplementary_line(line: str) -> bool:
    """Return True for extra dusting/kneading flour lines.

    A line with a three digit (or longer) number is treated as a real
    formula amount and never skipped.
    """
    lower = BULLET_PATTERN.sub("", line.strip().lower())
    if REAL_AMOUNT_PATTERN.search(lower):
        return False
    return any(pattern.search(lower) for pattern in SUPPLEMENTARY_PATTERNS)


def clean_ingredient_name(name: str) -> str:
    """Strip trailing instructional phrases from an ingredient name.

    Text is only removed from the earliest matching phrase to the end of
    the name, never from the middle, and never when that would leave the
    name empty.

    Examples:
        >>> clean_ingredient_name('bread flour, plus extra for dusting')
        'bread flour'
        >>> clean_ingredient_name('eggs, beaten')
        'eggs'
    """
    cleaned = name.strip()
    cut = len(cleaned)
    for pattern in NAME_SUFFIX_PATTERNS:
        match = pattern.search(cleaned)
        if match and match.start() < cut and cleaned[:match.start()].strip(" ,;-"):
            cut = match.start()
    return cleaned[:cut].strip(" ,;-")


def classify_ingredient(text: str) -> str:
    """Classify an ingredient name by keyword, first matching rule wins.

    Returns:
        One of the ingredient types, or 'other' when nothing matches
    """
    lower = text.lower()
    for ingredient_type, pattern in TYPE_RULES:
        if pattern.search(lower):
            return ingredient_type
    return "other"


def _name_without_parenthetical(line: str, match: re.Match) -> str:
    after = line[match.end():].strip(" ,;-")
    if after:
        return after
    without = (line[:match.start()] + line[match.end():]).strip()
    return LEADING_QUANTITY_PATTERN.sub("", without).strip(" ,;-")


def _match_amount(line: str, strict: bool) -> tuple[float, str] | None:
    """Apply the quantity patterns in order and return (grams, name)."""
    paren = PAREN_GRAMS_PATTERN.search(line)
    if paren:
        return float(paren.group(1)), _name_without_parenthetical(line, paren)

    match = GRAMS_PATTERN.match(line)
    if match:
        name = ALT_MEASURE_PREFIX.sub("", match.group(2))
        return float(match.group(1)), name

    match = ALTERNATE_GRAMS_PATTERN.search(line) or DIRECT_GRAMS_PATTERN.match(line)
    if match:
        return float(match.group(1)), match.group(2)

    match = FRACTION_PATTERN.match(line)
    if match:
        whole, numerator, denominator, unit, name = match.groups()
        if float(denominator) == 0:
            _LOGGER.debug("Zero denominator in '%s'", line)
            return None
        amount = float(whole or 0) + float(numerator) / float(denominator)
        grams = convert_to_grams(amount, unit, name, strict=strict)
        return (grams, name) if grams is not None else None

    match = UNIT_AMOUNT_PATTERN.match(line)
    if match:
        amount, unit, name = float(match.group(1)), match.group(2), match.group(3)
        grams = convert_to_grams(amount, unit, name, strict=strict)
        return (grams, name) if grams is not None else None

    match = BARE_AMOUNT_PATTERN.match(line)
    if match:
        amount, name = float(match.group(1)), match.group(2)
        return convert_to_grams(amount, None, name, strict=strict), name

    return None


def parse_ingredient_line(line: str, strict_unit_mode: bool = False) -> ParsedIngredient | None:
    """Parse one ingredient line into a ParsedIngredient.

    Args:
        line: A single line of recipe text
        strict_unit_mode: Reject lines whose unit has no gram conversion
            instead of treating the number as grams

    Returns:
        The parsed ingredient, or None if the line is not an ingredient

    Examples:
        >>> parse_ingredient_line('500g bread flour').amount
        500.0
        >>> parse_ingredient_line('1/2 cup water').amount
        120.0
    """
    trimmed = line.strip()
    if len(trimmed) < 3:
        return None

    lower = BULLET_PATTERN.sub("", trimmed.lower())
    lower = apply_unicode_fractions(lower)
    lower = RANGE_PATTERN.sub(r"\1", lower)

    if not re.search(r"\d", lower):
        return None
    if is_excluded_line(lower):
        _LOGGER.debug("Excluded non-ingredient line: %s", trimmed)
        return None
    if not has_ingredient_keyword(lower):
        _LOGGER.debug("No ingredient keyword in line: %s", trimmed)
        return None
    if is_supplementary_line(lower):
        _LOGGER.debug("Skipping supplementary line: %s", trimmed)
        return None

    result = _match_amount(lower, strict_unit_mode)
    if result is None:
        _LOGGER.debug("No quantity pattern matched: %s", trimmed)
        return None

    grams, raw_name = result
    name = clean_ingredient_name(raw_name) or raw_name.strip()

    ingredient_type = classify_ingredient(name)
    if ingredient_type == "other":
        ingredient_type = classify_ingredient(lower)

    _LOGGER.debug("Parsed '%s' -> %.2fg %s [%s]",
                  trimmed, grams, name, ingredient_type)
    return ParsedIngredient(name=name, amount=grams, unit="g", type=ingredient_type)
