"""
Recipe data models for the bread converter.

This module defines the Pydantic models used to structure parsed bread
recipes, conversions between sourdough and yeast, and the advisory content
attached to a conversion. Field names are snake_case in Python and camelCase
on the wire, so JSON from the AI parser validates into the same models.
"""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

IngredientType = Literal[
    "flour", "liquid", "starter", "yeast", "salt",
    "fat", "enrichment", "sweetener", "other",
]
Severity = Literal["info", "warning", "caution"]
Direction = Literal["sourdough-to-yeast", "yeast-to-sourdough"]
DoughType = Literal["lean", "enriched", "sweet"]


class CamelModel(BaseModel):
    """Base model serializing to camelCase and accepting either spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ParsedIngredient(CamelModel):
    """A single recognized ingredient occurrence.

    Attributes:
        name: Cleaned ingredient label (e.g., 'bread flour')
        amount: Weight in grams
        unit: Always 'g' once parsed
        type: Ingredient category used for totals and classification
        group: Optional section label (e.g., 'Levain', 'Dough')
    """

    name: str = Field(
        description="The ingredient name, e.g., 'bread flour'"
    )
    amount: float = Field(
        ge=0,
        description="The weight in grams, e.g., 500"
    )
    unit: str = Field(
        default="g",
        description="The unit of the amount, always grams after parsing"
    )
    type: IngredientType = Field(
        default="other",
        description="The ingredient category, e.g., 'flour', 'liquid'"
    )
    group: str | None = Field(
        default=None,
        description="The ingredient group or section, e.g., 'Levain'"
    )


class ParsedRecipe(CamelModel):
    """An entire recipe in structured form.

    The flour and liquid totals already include the flour and water held
    inside the starter; the starter itself stays a single ingredient.
    """

    ingredients: list[ParsedIngredient] = Field(
        default_factory=list,
        description="Ingredients in source text order"
    )
    method: str = Field(
        default="",
        description="The method section, verbatim"
    )
    total_flour: float = Field(
        default=0.0,
        description="Total flour in grams, including flour from the starter"
    )
    total_liquid: float = Field(
        default=0.0,
        description="Total liquid in grams, including water from the starter"
    )
    starter_amount: float = Field(default=0.0)
    yeast_amount: float = Field(default=0.0)
    salt_amount: float = Field(default=0.0)
    hydration: float = Field(
        default=0.0,
        description="Total liquid as a percentage of total flour"
    )


class MethodChange(CamelModel):
    """One method step with an optional timing annotation."""

    step: str
    change: str
    timing: str | None = None


class TroubleshootingTip(CamelModel):
    issue: str
    solution: str


class RecipeWarning(CamelModel):
    """An advisory message.

    Attributes:
        severity: 'caution' for a likely taste or structure problem,
            'warning' for a numeric inconsistency, 'info' for advice
        message: Human-readable text
    """

    severity: Severity
    message: str


class IngredientSubstitution(CamelModel):
    original: str
    substitute: str
    ratio: str
    hydration_adjustment: float = 0
    notes: str


class ConvertedRecipe(CamelModel):
    """A before/after pair plus the narrative content of a conversion."""

    original: ParsedRecipe
    converted: ParsedRecipe
    direction: Direction
    method_changes: list[MethodChange] = Field(default_factory=list)
    troubleshooting_tips: list[TroubleshootingTip] = Field(default_factory=list)
    warnings: list[RecipeWarning] = Field(default_factory=list)
    substitutions: list[IngredientSubstitution] = Field(default_factory=list)


class BakersPercentage(CamelModel):
    ingredient: str
    amount: float
    percentage: float


class DoughClassification(CamelModel):
    """Lean/enriched/sweet classification with the percentages behind it."""

    type: DoughType
    sugar_percent: float
    fat_percent: float
    milk_percent: float
    has_eggs: bool = False


class LevainDetails(CamelModel):
    """Gram amounts for the levain build step."""

    starter: float
    water: float
    flour: float
    total: float


class DoughDetails(CamelModel):
    """Gram amounts for the final dough mix step."""

    flour: float
    water: float
    salt: float


class ValidationResult(CamelModel):
    recipe: ConvertedRecipe
    validation_warnings: list[RecipeWarning] = Field(default_factory=list)
    auto_fixes: list[str] = Field(default_factory=list)


class RecipeInfo(CamelModel):
    title: str
    description: str = ""
