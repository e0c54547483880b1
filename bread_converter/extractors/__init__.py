"""Extractors package."""
from .file_extractor import extract_text
from .scraper import fetch_recipe_text, validate_url

__all__ = ["extract_text", "fetch_recipe_text", "validate_url"]
