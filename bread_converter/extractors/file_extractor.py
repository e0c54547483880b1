"""
Text extraction for uploaded recipe files.

Only text-bearing formats are handled here; images and PDFs need an
external OCR or PDF text service that hands its output to the parsers.
"""
from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from .scraper import find_jsonld_recipe, html_to_text, jsonld_to_text

_LOGGER = logging.getLogger(__name__)

TEXT_TYPES = ("text/plain", "text/markdown")
HTML_TYPES = ("text/html", "application/xhtml+xml")


def _decode(data: bytes | str) -> str:
    if isinstance(data, str):
        return data
    return data.decode("utf-8", errors="replace")


def extract_text(data: bytes | str, content_type: str = "text/plain") -> str:
    """Extract recipe text from an uploaded file.

    Args:
        data: The file contents
        content_type: MIME type of the file; parameters such as charset
            are ignored

    Returns:
        The recipe text

    Raises:
        ValueError: If the content type is not supported
    """
    mime = content_type.split(";")[0].strip().lower()

    if mime in TEXT_TYPES:
        text = _decode(data)
    elif mime in HTML_TYPES:
        soup = BeautifulSoup(_decode(data), features="html.parser")
        recipe = find_jsonld_recipe(soup)
        text = jsonld_to_text(recipe) if recipe else html_to_text(soup)
    else:
        raise ValueError(f"Unsupported content type: {content_type}")

    _LOGGER.debug("Extracted %d characters from %s upload", len(text), mime)
    return text.strip()
