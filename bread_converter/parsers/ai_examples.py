"""
Example bread recipes for guiding the LangExtract model.
"""
from langextract.data import ExampleData, Extraction


RECIPE_EXAMPLES = [
    ExampleData(
        text="""
Country Sourdough

Ingredients:
- 450g bread flour, plus extra for dusting
- 50g whole wheat flour
- 1 1/2 cups (350g) water
- 100g active starter
- 10g salt

Method:
Mix flour and water, rest 1 hour. Add starter and salt. Bulk ferment 5 hours, shape, proof overnight and bake at 450°F.
""",
        extractions=[
            Extraction(
                extraction_class="ingredient",
                extraction_text="450g bread flour",
                attributes={"name": "bread flour", "quantity": "450",
                            "unit": "g", "type": "flour"}
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="50g whole wheat flour",
                attributes={"name": "whole wheat flour", "quantity": "50",
                            "unit": "g", "type": "flour"}
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="1 1/2 cups (350g) water",
                attributes={"name": "water", "quantity": "350",
                            "unit": "g", "type": "liquid"}
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="100g active starter",
                attributes={"name": "active starter", "quantity": "100",
                            "unit": "g", "type": "starter"}
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="10g salt",
                attributes={"name": "salt", "quantity": "10",
                            "unit": "g", "type": "salt"}
            ),
            Extraction(
                extraction_class="method",
                extraction_text="Mix flour and water, rest 1 hour. Add starter and salt. Bulk ferment 5 hours, shape, proof overnight and bake at 450°F."
            ),
        ]
    ),

    ExampleData(
        text="""
Soft Sandwich Bread

3 1/4 cups all-purpose flour
1 cup warm milk
2 tablespoons sugar
2 1/4 teaspoons instant yeast
1 teaspoon salt
3 tablespoons butter, softened
1 large egg
1 egg, beaten with 1 tablespoon water, for egg wash

Instructions:
Combine everything, knead 10 minutes, rise until doubled, shape, proof 45 minutes and bake at 350°F.
""",
        extractions=[
            Extraction(
                extraction_class="ingredient",
                extraction_text="3 1/4 cups all-purpose flour",
                attributes={"name": "all-purpose flour", "quantity": "3.25",
                            "unit": "cups", "type": "flour"}
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="1 cup warm milk",
                attributes={"name": "milk", "quantity": "1",
                            "unit": "cup", "type": "liquid"}
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="2 tablespoons sugar",
                attributes={"name": "sugar", "quantity": "2",
                            "unit": "tablespoons", "type": "sweetener"}
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="2 1/4 teaspoons instant yeast",
                attributes={"name": "instant yeast", "quantity": "2.25",
                            "unit": "teaspoons", "type": "yeast"}
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="1 teaspoon salt",
                attributes={"name": "salt", "quantity": "1",
                            "unit": "teaspoon", "type": "salt"}
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="3 tablespoons butter, softened",
                attributes={"name": "butter", "quantity": "3",
                            "unit": "tablespoons", "type": "fat"}
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="1 large egg",
                attributes={"name": "egg", "quantity": "1",
                            "unit": "large", "type": "enrichment"}
            ),
            Extraction(
                extraction_class="method",
                extraction_text="Combine everything, knead 10 minutes, rise until doubled, shape, proof 45 minutes and bake at 350°F."
            ),
        ]
    ),
]
