#!/usr/bin/env python3
"""
Recipe Converter - Convert bread recipes between sourdough and yeast

Reads a recipe from a file, a URL or stdin, converts it between sourdough
starter and commercial yeast, and saves the result as JSON.
"""
import argparse
import json
import logging
import sys
from pathlib import Path

import voluptuous as vol

from bread_converter.config import load_options
from bread_converter.const import (
    AVAILABLE_MODELS,
    CONF_API_KEY,
    CONF_DIRECTION,
    CONF_MODEL,
    CONF_STARTER_HYDRATION,
    CONF_STRICT_UNIT_MODE,
    CONF_USE_AI,
    DIRECTIONS,
)
from bread_converter.extractors import extract_text, fetch_recipe_text
from bread_converter.services.ingredient_formatter import (
    format_ingredient_lines,
    format_method_steps,
)
from bread_converter.services.recipe_service import convert_recipe_text
from bread_converter.models.recipe import ConvertedRecipe

logger = logging.getLogger(__name__)


def read_source(source: str) -> str:
    """Read recipe text from a URL, a file path, or '-' for stdin.

    Raises:
        ValueError: If the URL or file type is not supported
        OSError: If the file cannot be read
        requests.exceptions.RequestException: If the URL cannot be fetched
    """
    if source == "-":
        return sys.stdin.read()
    if source.startswith(("http://", "https://")):
        return fetch_recipe_text(source)

    path = Path(source)
    content_type = "text/html" if path.suffix.lower() in (".html", ".htm") else "text/plain"
    return extract_text(path.read_bytes(), content_type)


def safe_filename(title: str) -> str:
    safe_title = "".join(c for c in title if c.isalnum() or c in (' ', '-', '_')).rstrip()
    safe_title = safe_title.replace(' ', '_').lower()
    return safe_title or "recipe"


def print_summary(result: dict, json_file: Path) -> None:
    conversion = ConvertedRecipe.model_validate(result["conversion"])
    converted = conversion.converted

    print(f"\nRecipe converted: {result['title']} ({result['direction']})")
    print(f"Flour {converted.total_flour:.0f}g, liquid {converted.total_liquid:.0f}g, "
          f"hydration {converted.hydration:.1f}%\n")
    print("Ingredients:")
    for line in format_ingredient_lines(converted):
        print(f"  {line}" if line else "")
    print("\nMethod:")
    for line in format_method_steps(conversion.method_changes):
        print(f"  {line}")
    for fix in result["auto_fixes"]:
        print(f"\nAuto-fix: {fix}")
    for warning in conversion.warnings:
        print(f"[{warning.severity}] {warning.message}")
    print(f"\nJSON: {json_file}")


def convert_from_source(source: str, output_dir: Path, options: dict) -> bool:
    """Convert a recipe and save the results.

    Args:
        source: File path, URL or '-' for stdin
        output_dir: Directory to save the output file
        options: Validated converter options

    Returns:
        True if successful, False otherwise
    """
    try:
        recipe_text = read_source(source)
        if not recipe_text.strip():
            logger.error("No recipe text found in %s", source)
            return False

        result = convert_recipe_text(recipe_text, options)
        if result["errors"]:
            for error in result["errors"]:
                logger.error("%s", error)
            return False

        output_dir.mkdir(parents=True, exist_ok=True)
        json_file = output_dir / f"{safe_filename(result['title'])}.json"
        logger.info("Saving converted recipe to: %s", json_file)
        with open(json_file, 'w', encoding='utf-8') as f:
            json.dump(result, f, indent=2, ensure_ascii=False)

        print_summary(result, json_file)
        return True

    except Exception as e:
        logger.error("Error converting recipe: %s", str(e), exc_info=True)
        return False


def main(argv=None) -> int:
    """Main entry point for the recipe converter."""
    parser = argparse.ArgumentParser(
        description="Convert bread recipes between sourdough starter and commercial yeast"
    )
    parser.add_argument(
        "source",
        type=str,
        help="Recipe file path, URL of a recipe website, or '-' to read stdin"
    )
    parser.add_argument(
        "--direction",
        choices=DIRECTIONS,
        help="Conversion direction (default: detected from the recipe)"
    )
    parser.add_argument(
        "--starter-hydration",
        type=float,
        help="Hydration of your starter in percent (default: 100)"
    )
    parser.add_argument(
        "--strict-units",
        action="store_true",
        default=None,
        help="Skip ingredients whose unit cannot be converted to grams"
    )
    parser.add_argument(
        "--ai",
        action="store_true",
        default=None,
        help="Parse the recipe with the AI parser (needs LANGEXTRACT_API_KEY)"
    )
    parser.add_argument(
        "--api-key",
        help="API key for the language model (can also be set via LANGEXTRACT_API_KEY env var)"
    )
    parser.add_argument(
        "--model",
        choices=AVAILABLE_MODELS,
        help="Model to use for AI parsing (default: gemini-2.5-flash-lite)"
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("output"),
        help="Directory to save output files (default: ./output)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        options = load_options({
            CONF_DIRECTION: args.direction,
            CONF_STARTER_HYDRATION: args.starter_hydration,
            CONF_STRICT_UNIT_MODE: args.strict_units,
            CONF_USE_AI: args.ai,
            CONF_API_KEY: args.api_key,
            CONF_MODEL: args.model,
        })
    except vol.Invalid as e:
        logger.error("Invalid options: %s", e)
        return 1

    success = convert_from_source(args.source, args.output_dir, options)
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
