"""
Web scraper utilities for fetching bread recipe text from websites.

This module fetches a recipe page and turns it into plain recipe text the
parsers understand: schema.org JSON-LD Recipe data when the page has it,
otherwise the cleaned visible text of the page.
"""
from __future__ import annotations

import ipaddress
import json
import logging
import time
from typing import Any
from urllib.parse import urlparse

import cloudscraper
import requests
from bs4 import BeautifulSoup

from ..const import (
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_MAX_RESPONSE_SIZE,
    DEFAULT_MAX_TEXT_LENGTH,
    DEFAULT_TIMEOUT,
)

_LOGGER = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = ("text/html", "application/xhtml", "application/xml")
REMOVED_TAGS = ["script", "style", "nav", "header", "footer", "aside",
                "iframe", "noscript", "svg"]
REMOVED_SECTIONS = ["advertisement", "social-share", "comment", "navigation",
                    "sidebar", "newsletter", "cookie-banner", "popup", "modal"]
RECIPE_CONTAINERS = ['[itemtype*="Recipe"]', ".recipe", "#recipe", "article"]


def validate_url(url: str) -> None:
    """Reject empty, non-HTTP and internal-network URLs.

    Raises:
        ValueError: If the URL may not be fetched
    """
    if not url or not url.strip():
        raise ValueError("URL cannot be empty")

    parsed = urlparse(url.strip())
    if parsed.scheme not in ("http", "https"):
        raise ValueError("Only HTTP/HTTPS protocols allowed")
    if not parsed.hostname:
        raise ValueError(f"URL has no host: {url}")
    if parsed.hostname == "localhost":
        raise ValueError("Cannot access internal IP addresses")

    try:
        ip = ipaddress.ip_address(parsed.hostname)
    except ValueError:
        # Hostname is not an IP
        return
    if ip.is_private or ip.is_loopback or ip.is_link_local:
        raise ValueError("Cannot access internal IP addresses")


def _fetch_with_retry(session: requests.Session, url: str, max_retries: int = 3) -> bytes:
    """Fetch URL with exponential backoff retry logic.

    Args:
        session: Requests session to use
        url: URL to fetch
        max_retries: Maximum number of retry attempts

    Returns:
        Response content as bytes

    Raises:
        requests.exceptions.RequestException: If all retries fail
        ValueError: If response is too large or invalid content type
    """
    for attempt in range(max_retries):
        try:
            _LOGGER.debug("Fetching %s (attempt %d/%d)",
                          url, attempt + 1, max_retries)
            response = session.get(
                url,
                timeout=DEFAULT_TIMEOUT,
                allow_redirects=True,
                stream=True
            )
            response.raise_for_status()

            content_type = response.headers.get('content-type', '').lower()
            if not any(allowed in content_type for allowed in ALLOWED_CONTENT_TYPES):
                _LOGGER.warning(
                    "Invalid content type for %s: %s", url, content_type)
                raise ValueError(
                    f"Invalid content type: {content_type}. Only HTML/XHTML content is allowed.")

            content_length = response.headers.get('content-length')
            if content_length and int(content_length) > DEFAULT_MAX_RESPONSE_SIZE:
                _LOGGER.warning(
                    "Response too large for %s: %s bytes", url, content_length)
                raise ValueError(
                    f"Response size ({content_length} bytes) exceeds maximum "
                    f"allowed size ({DEFAULT_MAX_RESPONSE_SIZE} bytes)")

            content = b''
            for chunk in response.iter_content(chunk_size=8192):
                content += chunk
                if len(content) > DEFAULT_MAX_RESPONSE_SIZE:
                    _LOGGER.warning(
                        "Response exceeded size limit while downloading from %s", url)
                    raise ValueError(
                        f"Response size exceeds maximum allowed size ({DEFAULT_MAX_RESPONSE_SIZE} bytes)")

            return content
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status == 403 and attempt < max_retries - 1:
                wait_time = 2 ** attempt
                _LOGGER.warning(
                    "Got 403 for %s, retrying after %ds", url, wait_time)
                time.sleep(wait_time)
                continue
            raise
        except requests.exceptions.RequestException as e:
            if attempt < max_retries - 1:
                wait_time = 2 ** attempt
                _LOGGER.warning(
                    "Error fetching %s: %s, retrying after %ds", url, e, wait_time)
                time.sleep(wait_time)
                continue
            raise

    raise requests.exceptions.RequestException(
        f"Failed to fetch {url} after {max_retries} attempts")


def _is_recipe(item: Any) -> bool:
    """Check if a JSON-LD item represents a Recipe."""
    if not isinstance(item, dict):
        return False
    item_type = item.get('@type')
    if isinstance(item_type, str):
        return item_type == 'Recipe'
    if isinstance(item_type, list):
        return 'Recipe' in item_type
    return False


def find_jsonld_recipe(soup: BeautifulSoup) -> dict[str, Any] | None:
    """Return the first schema.org Recipe object in the page's JSON-LD."""
    json_lds = soup.find_all('script', type='application/ld+json')
    _LOGGER.debug("Found %d JSON-LD scripts", len(json_lds))

    for idx, json_ld in enumerate(json_lds):
        if not json_ld.string:
            continue
        try:
            parsed_data = json.loads(json_ld.string)
        except json.JSONDecodeError as e:
            _LOGGER.debug("Failed to parse JSON-LD script %d: %s", idx, e)
            continue

        if isinstance(parsed_data, dict) and isinstance(parsed_data.get('@graph'), list):
            candidates = parsed_data['@graph']
        elif isinstance(parsed_data, list):
            candidates = parsed_data
        else:
            candidates = [parsed_data]

        data = next((item for item in candidates if _is_recipe(item)), None)
        if data:
            _LOGGER.debug("Found recipe data in JSON-LD script %d", idx)
            return data
    return None


def _instruction_steps(instructions: Any) -> list[str]:
    """Flatten recipeInstructions (text, HowToStep or HowToSection) to steps."""
    if isinstance(instructions, str):
        return [instructions.strip()] if instructions.strip() else []
    if isinstance(instructions, dict):
        if 'itemListElement' in instructions:
            return _instruction_steps(instructions['itemListElement'])
        text = instructions.get('text') or instructions.get('name') or ''
        return [text.strip()] if text.strip() else []
    if isinstance(instructions, list):
        steps = []
        for item in instructions:
            steps.extend(_instruction_steps(item))
        return steps
    return []


def jsonld_to_text(data: dict[str, Any]) -> str:
    """Render a JSON-LD Recipe as recipe text with Ingredients and Method sections."""
    parts = []
    if data.get('name'):
        parts.append(f"Recipe: {data['name']}")
    if data.get('description'):
        parts.append(str(data['description']).strip())
    if data.get('recipeIngredient'):
        parts.append("\nIngredients:")
        for ingredient in data['recipeIngredient']:
            parts.append(f"- {ingredient}")

    steps = _instruction_steps(data.get('recipeInstructions'))
    if steps:
        parts.append("\nMethod:")
        for i, step in enumerate(steps, 1):
            parts.append(f"{i}. {step}")

    return '\n'.join(parts)


def html_to_text(soup: BeautifulSoup) -> str:
    """Extract the cleaned visible text of a page, preferring a recipe container."""
    recipe_container = None
    for selector in RECIPE_CONTAINERS:
        recipe_container = soup.select_one(selector)
        if recipe_container:
            break

    if recipe_container:
        soup = recipe_container

    for element in soup(REMOVED_TAGS):
        element.extract()

    patterns_to_remove = list(REMOVED_SECTIONS)
    if not recipe_container:
        patterns_to_remove.extend(['related', 'recommendation'])

    for pattern in patterns_to_remove:
        for element in soup.find_all(class_=lambda x, p=pattern: x and p in x.lower()):
            element.extract()
        for element in soup.find_all(id=lambda x, p=pattern: x and p in x.lower()):
            element.extract()

    text = soup.get_text(separator='\n')

    lines = (line.strip() for line in text.splitlines())
    chunks = (phrase.strip() for line in lines for phrase in line.split("  "))
    text = '\n'.join(chunk for chunk in chunks if chunk)

    if len(text) > DEFAULT_MAX_TEXT_LENGTH:
        _LOGGER.debug("Truncating text from %d to %d characters",
                      len(text), DEFAULT_MAX_TEXT_LENGTH)
        text = text[:DEFAULT_MAX_TEXT_LENGTH]
    return text


def fetch_recipe_text(url: str) -> str:
    """Fetch a bread recipe page and return its recipe text.

    Args:
        url: The URL of the recipe website

    Returns:
        Recipe text, built from JSON-LD Recipe data when available

    Raises:
        requests.exceptions.RequestException: If fetching fails
        ValueError: If the URL is invalid or the response is not usable HTML
    """
    validate_url(url)
    _LOGGER.info("Fetching recipe from %s", url)

    session = cloudscraper.create_scraper(
        browser={
            'browser': 'chrome',
            'platform': 'windows',
            'desktop': True
        }
    )
    session.max_redirects = DEFAULT_MAX_REDIRECTS

    try:
        html = _fetch_with_retry(session, url)
    except requests.exceptions.RequestException as e:
        _LOGGER.error("Failed to fetch %s: %s", url, str(e))
        raise
    _LOGGER.debug("Successfully fetched %d bytes from %s", len(html), url)

    soup = BeautifulSoup(html, features="html.parser")

    data = find_jsonld_recipe(soup)
    if data:
        text = jsonld_to_text(data)
    else:
        text = html_to_text(soup)

    _LOGGER.info("Extracted %d characters of text from %s", len(text), url)
    return text
