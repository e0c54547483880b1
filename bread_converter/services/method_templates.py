"""
Method Template Selector.

Method steps are static prose kept as data. A template is picked by
conversion direction and by whether the dough is lean or enriched; numeric
placeholders are filled from the levain and dough details of the
conversion.
"""
from __future__ import annotations

from ..const import DIRECTION_SOURDOUGH_TO_YEAST, DIRECTION_YEAST_TO_SOURDOUGH
from ..models.recipe import DoughClassification, DoughDetails, LevainDetails, MethodChange
from ..unit_converter import format_quantity

# Each step is (label, change, timing)
LEAN_SOURDOUGH_BUILD = [
    (
        "1. BUILD LEVAIN (Night Before)",
        "Mix {starter}g active starter, {levain_water}g water (80–85°F), and "
        "{levain_flour}g flour. Cover loosely and rest overnight (8-12 hours) "
        "until doubled and bubbly.",
        "8-12 hours overnight",
    ),
    (
        "2. MIX DOUGH (Morning)",
        "In a large bowl, dissolve levain into {dough_water}g warm water. Add "
        "{dough_flour}g flour and mix until shaggy. Rest 45–60 minutes "
        "(autolyse) to allow flour to fully hydrate.",
        "45-60 min autolyse",
    ),
    (
        "3. ADD SALT & DEVELOP STRENGTH",
        "Sprinkle in {salt}g salt, mix or pinch to incorporate throughout the "
        "dough. Rest 20–30 minutes.",
        "20-30 min rest",
    ),
    (
        "4. BULK FERMENTATION",
        "Perform 3–4 sets of stretch and folds every 30–45 minutes during the "
        "first 2–3 hours. Then let rest undisturbed for 4–6 hours total at "
        "75–78°F. Stop when dough has risen ~50%, looks airy, and holds its shape.",
        "4-6 hours at 75-78°F",
    ),
    (
        "5. SHAPE",
        "Turn dough onto lightly floured surface. Pre-shape into a round, rest "
        "20 minutes, then perform final shape (boule or batard).",
        "20 min bench rest + shaping",
    ),
    (
        "6. FINAL PROOF",
        "Place shaped dough seam-side up in a floured banneton. Proof 2–4 hours "
        "at room temperature OR refrigerate overnight (8–12 hours).",
        "2-4 hours room temp or 8-12 hours cold",
    ),
    (
        "7. BAKE",
        "Preheat Dutch oven to 450°F (232°C). Score the top. Bake covered 20 "
        "minutes, then uncovered 25–30 minutes until internal temp 205–210°F.",
        "45-50 min at 450°F",
    ),
    (
        "8. COOL",
        "Cool on wire rack minimum 2 hours before slicing.",
        "2 hours minimum",
    ),
]

ENRICHED_SOURDOUGH_BUILD = [
    (
        "1. BUILD LEVAIN (Night Before)",
        "Mix {starter}g active starter, {levain_water}g water (80–85°F), and "
        "{levain_flour}g flour. Cover loosely and rest overnight (8-12 hours) "
        "until doubled and bubbly. This provides 20% inoculation for this "
        "enriched dough.",
        "8-12 hours overnight",
    ),
    (
        "2. MIX DOUGH (Morning)",
        "In a large bowl, dissolve levain into liquids (water + milk). Add "
        "{dough_flour}g flour and mix until shaggy. Rest 30-45 minutes "
        "(autolyse). Add softened butter gradually during first fold, not in "
        "initial mix. Add eggs at room temperature after autolyse.",
        "30-45 min autolyse",
    ),
    (
        "3. ADD SALT & DEVELOP STRENGTH",
        "Sprinkle in {salt}g salt, mix or pinch to incorporate throughout the "
        "dough. Rest 20–30 minutes to allow salt to dissolve and gluten to relax.",
        "20-30 min rest",
    ),
    (
        "4. BULK FERMENTATION",
        "Perform 3-4 sets of stretch and folds every 30-45 minutes during the "
        "first 2-3 hours. Enriched doughs ferment more slowly due to sugar and "
        "fat. Bulk fermentation may take 5-7 hours at 75-78°F. Stop when dough "
        "has risen 50-75% and looks airy.",
        "5-7 hours at 75-78°F",
    ),
    (
        "5. SHAPE",
        "Turn dough onto lightly floured surface. Shape into desired form "
        "(rolls, loaf, etc.). Enriched doughs are softer and more forgiving to shape.",
        "10-15 min",
    ),
    (
        "6. FINAL PROOF",
        "Place shaped dough in greased pan or banneton. Proof 2-3 hours at room "
        "temperature until puffy and nearly doubled. When pressed, dough should "
        "spring back slowly.",
        "2-3 hours room temp",
    ),
    (
        "7. BAKE",
        "Preheat oven to 375°F (190°C). Brush with egg wash if desired. Bake "
        "25-35 minutes until deep golden and internal temperature reaches 190-195°F.",
        "25-35 min at 375°F",
    ),
    (
        "8. COOL",
        "Cool on wire rack for at least 1 hour before slicing.",
        "1 hour minimum",
    ),
]

LEAN_YEAST = [
    (
        "1. MIX & KNEAD",
        "Combine {dough_flour}g flour, {dough_water}g water (90–95°F), "
        "{salt}g salt and the yeast. Knead by hand for 8–10 minutes or with a "
        "stand mixer (dough hook) for 5–6 minutes until smooth and elastic.",
        "8-10 min by hand, 5-6 min mixer",
    ),
    (
        "2. FIRST RISE",
        "Place in a lightly oiled bowl, cover, and let rise 1–1.5 hours at "
        "75–78°F until doubled in size.",
        "1-1.5 hours",
    ),
    (
        "3. SHAPE",
        "Degas gently, pre-shape into a round, rest 15 minutes, then shape "
        "into a boule or batard.",
        "15 min bench rest + shaping",
    ),
    (
        "4. FINAL PROOF",
        "Proof seam-side up in a floured banneton for 45–60 minutes, until the "
        "dough springs back slowly when gently pressed.",
        "45-60 min",
    ),
    (
        "5. BAKE",
        "Preheat Dutch oven to 450°F (232°C). Score the top. Bake covered 20 "
        "minutes, then uncovered 15–20 minutes until internal temp 200–205°F.",
        "35-40 min at 450°F",
    ),
    (
        "6. COOL",
        "Cool on wire rack at least 1 hour before slicing.",
        "1 hour minimum",
    ),
]

ENRICHED_YEAST = [
    (
        "1. MIX & KNEAD",
        "Combine {dough_flour}g flour, the liquids, {salt}g salt and the yeast. "
        "Knead by hand for 8–10 minutes or with a stand mixer (dough hook) for "
        "5–6 minutes until smooth and elastic. Dough should pass the windowpane test.",
        "8-10 min by hand, 5-6 min mixer",
    ),
    (
        "2. FIRST RISE",
        "Place in a lightly oiled bowl, cover, and let rise 1–1.5 hours at "
        "75–78°F until doubled in size.",
        "1-1.5 hours",
    ),
    (
        "3. SHAPE",
        "Punch down gently, shape as desired (loaf, braid, or boule), and place "
        "on a greased pan or parchment.",
        "5-10 min",
    ),
    (
        "4. FINAL PROOF",
        "Cover and let rise 45–60 minutes, or until dough springs back slowly "
        "when gently pressed.",
        "45-60 min",
    ),
    (
        "5. BAKE",
        "Preheat oven to {bake_temp}. {glaze}Bake {bake_time} until deep golden "
        "and internal temperature is 190–195°F.",
        "{bake_time} at {bake_temp}",
    ),
    (
        "6. COOL",
        "Remove from pan and cool on wire rack at least 1 hour before slicing.",
        "1 hour minimum",
    ),
]

# Eggs brown faster, so egg doughs bake cooler and shorter
EGG_BAKE = {
    "bake_temp": "350°F (175°C)",
    "bake_time": "30–35 minutes",
    "glaze": "Brush with egg wash for a golden crust. ",
}
EGGLESS_BAKE = {
    "bake_temp": "375°F (190°C)",
    "bake_time": "35–40 minutes",
    "glaze": "",
}

TEMPLATES = {
    (DIRECTION_YEAST_TO_SOURDOUGH, "lean"): LEAN_SOURDOUGH_BUILD,
    (DIRECTION_YEAST_TO_SOURDOUGH, "enriched"): ENRICHED_SOURDOUGH_BUILD,
    (DIRECTION_SOURDOUGH_TO_YEAST, "lean"): LEAN_YEAST,
    (DIRECTION_SOURDOUGH_TO_YEAST, "enriched"): ENRICHED_YEAST,
}


def template_family(classification: DoughClassification) -> str:
    """Map a dough type onto a template family: 'lean' or 'enriched'."""
    return "enriched" if classification.type in ("enriched", "sweet") else "lean"


def select_method_template(
    classification: DoughClassification,
    direction: str,
    levain: LevainDetails | None = None,
    dough: DoughDetails | None = None,
    has_eggs: bool | None = None,
) -> list[MethodChange]:
    """Select and fill the method steps for a conversion.

    Args:
        classification: The dough classification
        direction: The conversion direction
        levain: Gram amounts for the levain build
        dough: Gram amounts for the final dough
        has_eggs: Egg presence for the bake step; defaults to the
            classification's egg flag

    Returns:
        Ordered method steps

    Raises:
        KeyError: If direction is not a known conversion direction
    """
    steps = TEMPLATES[(direction, template_family(classification))]

    if has_eggs is None:
        has_eggs = classification.has_eggs

    values = dict(EGG_BAKE if has_eggs else EGGLESS_BAKE)
    if levain:
        values.update(
            starter=format_quantity(levain.starter),
            levain_water=format_quantity(levain.water),
            levain_flour=format_quantity(levain.flour),
        )
    if dough:
        values.update(
            dough_flour=format_quantity(dough.flour),
            dough_water=format_quantity(dough.water),
            salt=format_quantity(dough.salt),
        )

    return [
        MethodChange(
            step=label,
            change=change.format_map(_Placeholders(values)),
            timing=timing.format_map(_Placeholders(values)),
        )
        for label, change, timing in steps
    ]


class _Placeholders(dict):
    """Leaves a placeholder readable when no value was supplied for it."""

    def __missing__(self, key: str) -> str:
        return "?"
