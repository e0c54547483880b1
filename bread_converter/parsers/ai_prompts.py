"""
Prompt for AI-based bread recipe extraction using LangExtract.
"""

EXTRACTION_PROMPT = """
Extract the dough formula and the method from the provided bread recipe text.

Identify and extract:
1. Every DOUGH ingredient with its quantity and unit
2. The method / instructions as one block of text

For each ingredient, break it down into:
- name: the ingredient name without preparation notes (e.g., "bread flour", "whole milk", "unsalted butter")
- quantity: the numeric amount (e.g., 500, 2.5, 0.5), or null if not specified
- unit: ONLY the measurement unit (e.g., "g", "ml", "cups", "tbsp", "tsp", "large"), or null if not specified
- type: one of flour, liquid, starter, yeast, salt, fat, enrichment, sweetener, other
  - eggs and milk powder are "enrichment"
  - sugar, honey, syrup and molasses are "sweetener"
  - butter, oil, lard and shortening are "fat"
  - water, milk, buttermilk and cream are "liquid"
  - sourdough starter and levain are "starter"

CRITICAL RULES:
- Extract ONLY dough ingredients. Skip toppings, egg wash, "for brushing" and "after baking" items
- Skip extra flour used for dusting, kneading or rolling
- If a line gives both a gram weight and a volume (e.g., "1 cup (240g) water"), extract ONLY the gram weight
- Extract each ingredient ONLY ONCE, even if it is mentioned again in the method
- Do not include ingredients that only appear inside the method
"""
