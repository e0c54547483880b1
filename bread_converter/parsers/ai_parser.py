"""
AI-based Recipe Parser using LangExtract.

This module handles AI-powered extraction of bread recipes from unstructured
text using Google's LangExtract library with Gemini models. Extracted
quantities go through the same unit tables and total aggregation as the
regex parser, so the result is an ordinary ParsedRecipe.
"""
from __future__ import annotations

import logging
import math

import langextract as lx
from langextract import tokenizer

from ..const import DEFAULT_MODEL, DEFAULT_STARTER_HYDRATION
from ..models.recipe import ParsedIngredient, ParsedRecipe
from ..unit_converter import convert_to_grams
from .ai_examples import RECIPE_EXAMPLES
from .ai_prompts import EXTRACTION_PROMPT
from .base_parser import BaseRecipeParser, build_parsed_recipe
from .ingredient_parser import classify_ingredient, clean_ingredient_name

_LOGGER = logging.getLogger(__name__)

INGREDIENT_TYPES = {
    "flour", "liquid", "starter", "yeast", "salt",
    "fat", "enrichment", "sweetener", "other",
}


class AIRecipeParser(BaseRecipeParser):
    """Parses bread recipes from unstructured text using AI (LangExtract)."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        starter_hydration: float = DEFAULT_STARTER_HYDRATION,
        strict_unit_mode: bool = False,
    ) -> None:
        """Initialize the AI recipe parser.

        Args:
            api_key: API key for the language model
            model: The model to use for extraction
            starter_hydration: Starter hydration used for the totals
            strict_unit_mode: Drop ingredients whose unit has no conversion

        Raises:
            ValueError: If API key is empty or starter hydration is negative
        """
        if not api_key or not api_key.strip():
            raise ValueError("API key cannot be empty")
        super().__init__(starter_hydration)

        self.api_key = api_key
        self.model = model
        self.strict_unit_mode = strict_unit_mode
        self.tokenizer = tokenizer.UnicodeTokenizer()
        _LOGGER.debug("Initialized AIRecipeParser with model %s", model)

    def _to_ingredient(self, extraction) -> ParsedIngredient | None:
        attrs = extraction.attributes or {}
        raw_name = attrs.get('name') or extraction.extraction_text or ""
        name = clean_ingredient_name(raw_name.lower()) or raw_name.lower().strip()

        quantity_str = attrs.get('quantity')
        try:
            quantity = float(quantity_str)
        except (ValueError, TypeError):
            _LOGGER.debug("Skipping '%s' without a usable quantity", raw_name)
            return None

        grams = convert_to_grams(
            quantity, attrs.get('unit'), name, strict=self.strict_unit_mode)
        if grams is None or not math.isfinite(grams) or grams < 0:
            _LOGGER.debug("Skipping '%s': cannot convert %s %s",
                          raw_name, quantity_str, attrs.get('unit'))
            return None

        ingredient_type = (attrs.get('type') or "").lower()
        if ingredient_type not in INGREDIENT_TYPES:
            ingredient_type = classify_ingredient(name)

        return ParsedIngredient(name=name, amount=grams, unit="g", type=ingredient_type)

    def parse_recipe(self, text: str) -> ParsedRecipe | None:
        """Parse a bread recipe from unstructured text using AI.

        Args:
            text: The raw recipe text

        Returns:
            A ParsedRecipe, or None if no ingredients were extracted
        """
        if not text or not text.strip():
            _LOGGER.warning("Empty text passed to AI parser")
            return None

        _LOGGER.info(
            "Parsing recipe from %d characters of text using AI", len(text))

        try:
            _LOGGER.debug("Calling LangExtract with model %s", self.model)
            result = lx.extract(
                text_or_documents=text,
                prompt_description=EXTRACTION_PROMPT,
                model_id=self.model,
                examples=RECIPE_EXAMPLES,
                tokenizer=self.tokenizer,
                api_key=self.api_key
            )
        except Exception as e:
            _LOGGER.error("Error during AI recipe parsing: %s",
                          str(e), exc_info=True)
            raise

        if not (result and getattr(result, 'extractions', None)):
            _LOGGER.warning("No extractions found in LangExtract result")
            return None

        ingredients = []
        method_parts = []
        for extraction in result.extractions:
            if extraction.extraction_class == "ingredient":
                ingredient = self._to_ingredient(extraction)
                if ingredient:
                    ingredients.append(ingredient)
            elif extraction.extraction_class == "method":
                method_parts.append(extraction.extraction_text)

        if not ingredients:
            _LOGGER.warning("AI parsing completed but no ingredients found")
            return None

        recipe = build_parsed_recipe(
            ingredients, "\n".join(method_parts), self.starter_hydration)
        _LOGGER.info("Successfully parsed %d ingredients using AI",
                     len(recipe.ingredients))
        return recipe
