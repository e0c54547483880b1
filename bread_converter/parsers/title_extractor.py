"""
Recipe title and description extraction.

Finds a plausible recipe title in the first lines of pasted or scraped text
and a short description following it.
"""
from __future__ import annotations

import logging
import re

from ..const import DEFAULT_TITLE
from ..models.recipe import RecipeInfo

_LOGGER = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 60
MIN_TITLE_LENGTH = 2
MAX_DESCRIPTION_LENGTH = 150
TITLE_SEARCH_LINES = 5
TITLE_MAX_WORDS = 8

METADATA_PATTERNS = [
    re.compile(r"https?://", re.IGNORECASE),                  # URLs
    re.compile(r"\d{1,2}/\d{1,2}/\d{2,4}"),                   # dates (11/8/25)
    re.compile(r"\d+\s*min\s*read", re.IGNORECASE),
    re.compile(r"back\s*to\s*blog", re.IGNORECASE),
    re.compile(r"baking\s*great\s*bread", re.IGNORECASE),     # site name
    re.compile(r"prep\s*time|cook\s*time|total\s*time", re.IGNORECASE),
    re.compile(r"\b(?:january|february|march|april|may|june|july|august|"
               r"september|october|november|december)\b", re.IGNORECASE),
    re.compile(r"\d{1,2}:\d{2}\s*(?:am|pm)", re.IGNORECASE),  # times (2:15 am)
]

TITLE_MARKERS = [
    re.compile(r"^recipe:\s*", re.IGNORECASE),
    re.compile(r"^title:\s*", re.IGNORECASE),
    re.compile(r"^name:\s*", re.IGNORECASE),
]

INVALID_TITLE_PATTERNS = [
    re.compile(r"\d+\s*(?:g|grams?|ml|cups?|tablespoons?|tbsp|teaspoons?|tsp)\b",
               re.IGNORECASE),
    re.compile(r"\*"),                 # bullet points
    re.compile(r"\d+\s*[-–]\s*\d+"),   # ranges like "2-3 cups"
]

MEASUREMENT_PATTERN = re.compile(r"\d+\s*(?:g|ml|cup|tbsp|tsp)", re.IGNORECASE)
SECTION_HEADINGS = {"ingredients", "ingredients:", "method", "method:",
                    "instructions", "instructions:", "directions:"}


def is_metadata(line: str) -> bool:
    return any(pattern.search(line) for pattern in METADATA_PATTERNS)


def _title_from_marker(line: str) -> str | None:
    for marker in TITLE_MARKERS:
        if marker.search(line):
            return marker.sub("", line).strip()
    return None


def is_valid_title(text: str) -> bool:
    """Return True for 2-60 characters with no measurements or metadata."""
    if not MIN_TITLE_LENGTH <= len(text) <= MAX_TITLE_LENGTH:
        return False
    if text.lower() in SECTION_HEADINGS:
        return False
    if any(pattern.search(text) for pattern in INVALID_TITLE_PATTERNS):
        return False
    return not is_metadata(text)


def _description_from(lines: list[str], start: int) -> str:
    description = ""
    for line in lines[start:start + 3]:
        if is_metadata(line) or MEASUREMENT_PATTERN.search(line):
            continue
        if line.lower() in SECTION_HEADINGS:
            break

        description = f"{description} {line}".strip()
        if len(description) > MAX_DESCRIPTION_LENGTH or len(re.findall(r"[.!?]", description)) >= 2:
            break

    if len(description) > MAX_DESCRIPTION_LENGTH:
        description = description[:MAX_DESCRIPTION_LENGTH - 3] + "..."
    return description


def extract_recipe_info(text: str) -> RecipeInfo:
    """Extract a recipe title and a short description from recipe text.

    Only the first five non-empty lines are considered for the title. A line
    may carry an explicit "Recipe:", "Title:" or "Name:" marker; otherwise
    the whole line, or its first eight words, must look like a title.

    Args:
        text: The raw recipe text

    Returns:
        RecipeInfo with the title (DEFAULT_TITLE when none is found) and a
        description of at most 150 characters
    """
    lines = [line.strip() for line in text.split("\n") if line.strip()]

    for index, line in enumerate(lines[:TITLE_SEARCH_LINES]):
        if is_metadata(line):
            continue

        marker_title = _title_from_marker(line)
        if marker_title and is_valid_title(marker_title):
            return RecipeInfo(title=marker_title,
                              description=_description_from(lines, index + 1))

        if is_valid_title(line):
            return RecipeInfo(title=line,
                              description=_description_from(lines, index + 1))

        first_words = " ".join(line.split()[:TITLE_MAX_WORDS])
        if is_valid_title(first_words):
            remainder = line[len(first_words):].strip()
            if len(remainder) > 10:
                description = remainder[:MAX_DESCRIPTION_LENGTH]
            else:
                description = _description_from(lines, index + 1)
            return RecipeInfo(title=first_words, description=description)

    _LOGGER.debug("No title found, using default")
    return RecipeInfo(title=DEFAULT_TITLE)
