"""
Pytest configuration and fixtures for bread converter tests.
"""

import pytest

from bread_converter.models.recipe import (
    ConvertedRecipe,
    ParsedIngredient,
    ParsedRecipe,
)
from bread_converter.parsers.text_parser import parse_recipe


SOURDOUGH_TEXT = (
    "500g bread flour\n"
    "350g water\n"
    "100g active starter (100% hydration)\n"
    "10g salt\n"
    "Method:\n"
    "Mix and bake"
)

YEAST_TEXT = (
    "Buttery Sandwich Loaf\n"
    "500g bread flour\n"
    "325g water\n"
    "7g instant yeast\n"
    "10g salt\n"
    "30g butter\n"
    "Method:\n"
    "Mix everything, let rise and bake."
)

BRIOCHE_TEXT = (
    "Sourdough Brioche\n"
    "400g bread flour\n"
    "100g active starter\n"
    "150g milk\n"
    "2 large eggs\n"
    "60g sugar\n"
    "80g butter, softened\n"
    "8g salt\n"
    "Egg wash: 1 egg beaten with 1 tbsp milk\n"
    "Method:\n"
    "Mix, ferment overnight in the fridge and bake."
)


@pytest.fixture
def sourdough_text():
    """Lean sourdough recipe text used in the end-to-end scenario."""
    return SOURDOUGH_TEXT


@pytest.fixture
def yeast_text():
    """Lightly enriched commercial-yeast recipe text."""
    return YEAST_TEXT


@pytest.fixture
def brioche_text():
    """Enriched sourdough recipe text with an egg wash line."""
    return BRIOCHE_TEXT


@pytest.fixture
def sourdough_recipe():
    return parse_recipe(SOURDOUGH_TEXT)


@pytest.fixture
def yeast_recipe():
    return parse_recipe(YEAST_TEXT)


@pytest.fixture
def brioche_recipe():
    return parse_recipe(BRIOCHE_TEXT)


@pytest.fixture
def make_conversion():
    """Factory for a hand-built yeast conversion with chosen totals."""

    def _make(flour=500.0, liquid=350.0, salt=10.0, hydration=None, ingredients=None):
        if ingredients is None:
            ingredients = [
                ParsedIngredient(name="bread flour", amount=flour, type="flour"),
                ParsedIngredient(name="water", amount=liquid, type="liquid"),
                ParsedIngredient(name="instant yeast", amount=3.5, type="yeast"),
            ]
            if salt:
                ingredients.append(ParsedIngredient(name="salt", amount=salt, type="salt"))
        if hydration is None:
            hydration = liquid / flour * 100 if flour else 0.0
        recipe = ParsedRecipe(
            ingredients=ingredients,
            total_flour=flour,
            total_liquid=liquid,
            salt_amount=salt,
            yeast_amount=3.5,
            hydration=hydration,
        )
        return ConvertedRecipe(
            original=recipe,
            converted=recipe,
            direction="sourdough-to-yeast",
        )

    return _make


@pytest.fixture
def isolated_env(monkeypatch, tmp_path):
    """Run without converter environment variables, in an empty directory."""
    for name in ("LANGEXTRACT_API_KEY", "BREAD_CONVERTER_MODEL",
                 "BREAD_CONVERTER_STARTER_HYDRATION", "BREAD_CONVERTER_STRICT_UNITS"):
        # set first so teardown also removes values loaded from .env
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path
