"""
Tests for the web scraper and file text extraction.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from bread_converter.extractors import extract_text, fetch_recipe_text, validate_url
from bread_converter.extractors.scraper import jsonld_to_text

RECIPE_JSONLD = {
    "@context": "https://schema.org",
    "@type": "Recipe",
    "name": "Weekend Sourdough",
    "description": "An open-crumb loaf.",
    "recipeIngredient": ["500g bread flour", "350g water", "100g active starter", "10g salt"],
    "recipeInstructions": [
        {"@type": "HowToSection", "name": "Day one", "itemListElement": [
            {"@type": "HowToStep", "text": "Mix flour and water."},
            {"@type": "HowToStep", "text": "Add starter and salt."},
        ]},
        {"@type": "HowToStep", "text": "Shape and bake."},
    ],
}

JSONLD_PAGE = (
    "<html><head><script type=\"application/ld+json\">"
    + json.dumps({"@graph": [{"@type": "WebPage"}, RECIPE_JSONLD]})
    + "</script></head><body><p>Lots of blog text</p></body></html>"
)

PLAIN_PAGE = (
    "<html><body><nav>Home | Blog</nav>"
    "<article><h1>Bagels</h1><p>500g bread flour</p>"
    "<div class=\"social-share\">Share this</div></article>"
    "<footer>Copyright</footer></body></html>"
)


def _response(body: bytes, content_type="text/html; charset=utf-8", status=200):
    response = MagicMock()
    response.status_code = status
    response.headers = {"content-type": content_type}
    response.iter_content.return_value = [body]
    if status >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
    return response


class TestValidateUrl:
    """Tests for URL safety checks."""

    @pytest.mark.parametrize("url", [
        "",
        "ftp://example.com/recipe",
        "http://localhost/recipe",
        "http://127.0.0.1/recipe",
        "http://192.168.1.10/recipe",
        "http://169.254.169.254/latest",
    ])
    def test_rejected(self, url):
        with pytest.raises(ValueError):
            validate_url(url)

    def test_public_host_allowed(self):
        validate_url("https://example.com/bread")


class TestJsonLdToText:
    def test_sections_and_steps(self):
        text = jsonld_to_text(RECIPE_JSONLD)
        assert text.startswith("Recipe: Weekend Sourdough\nAn open-crumb loaf.")
        assert "\nIngredients:\n- 500g bread flour\n- 350g water" in text
        assert text.endswith(
            "Method:\n1. Mix flour and water.\n2. Add starter and salt.\n3. Shape and bake.")

    def test_plain_string_instructions(self):
        text = jsonld_to_text({"name": "Rolls", "recipeInstructions": "Mix and bake."})
        assert text == "Recipe: Rolls\n\nMethod:\n1. Mix and bake."


class TestExtractText:
    """Tests for uploaded file extraction."""

    def test_plain_text(self):
        assert extract_text(b"  500g bread flour\n350g water \n") == "500g bread flour\n350g water"

    def test_markdown_with_charset(self):
        assert extract_text("# Loaf", "text/markdown; charset=utf-8") == "# Loaf"

    def test_html_prefers_jsonld(self):
        text = extract_text(JSONLD_PAGE.encode(), "text/html")
        assert text.startswith("Recipe: Weekend Sourdough")
        assert "Lots of blog text" not in text

    def test_html_falls_back_to_page_text(self):
        text = extract_text(PLAIN_PAGE, "text/html")
        assert text == "Bagels\n500g bread flour"

    def test_unsupported_type(self):
        with pytest.raises(ValueError, match="Unsupported content type"):
            extract_text(b"%PDF-1.7", "application/pdf")


class TestFetchRecipeText:
    """Tests for fetching with a mocked scraper session."""

    @patch("bread_converter.extractors.scraper.cloudscraper.create_scraper")
    def test_fetches_jsonld_recipe(self, mock_create):
        session = mock_create.return_value
        session.get.return_value = _response(JSONLD_PAGE.encode())

        text = fetch_recipe_text("https://example.com/sourdough")

        assert text.startswith("Recipe: Weekend Sourdough")
        session.get.assert_called_once()
        assert session.max_redirects == 5

    @patch("bread_converter.extractors.scraper.time.sleep")
    @patch("bread_converter.extractors.scraper.cloudscraper.create_scraper")
    def test_retries_after_403(self, mock_create, mock_sleep):
        session = mock_create.return_value
        session.get.side_effect = [
            _response(b"", status=403),
            _response(PLAIN_PAGE.encode()),
        ]

        assert fetch_recipe_text("https://example.com/bagels") == "Bagels\n500g bread flour"
        mock_sleep.assert_called_once_with(1)

    @patch("bread_converter.extractors.scraper.cloudscraper.create_scraper")
    def test_rejects_non_html(self, mock_create):
        session = mock_create.return_value
        session.get.return_value = _response(b"{}", content_type="application/json")

        with pytest.raises(ValueError, match="Invalid content type"):
            fetch_recipe_text("https://example.com/api")

    @patch("bread_converter.extractors.scraper.cloudscraper.create_scraper")
    def test_private_address_is_never_fetched(self, mock_create):
        with pytest.raises(ValueError):
            fetch_recipe_text("http://10.0.0.1/recipe")
        mock_create.assert_not_called()
