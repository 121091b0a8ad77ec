from mise_recipes.app.services.ocr_text_parser import (
    analyze_ocr_line,
    build_ocr_recipe_payload,
    clean_ocr_text,
    normalize_ocr_line,
    parse_ocr_text,
)

BANANA_BREAD = """~~ | ^^
Banana Bread
Serves 8
Prep 15 min
Ingredients
3 ripe bananas
2 cups flour
1 tsp baking soda
Method
1. Mash the bananas in a bowl.
2. Stir in the flour and baking soda.
3. Bake for 60 minutes.
Notes
Use ripe bananas
Page 12
"""


def test_normalize_ocr_line_strips_noise_tokens():
    assert normalize_ocr_line("|| ~ Xq 2 cups flour") == "2 cups flour"
    assert normalize_ocr_line("@#$ %^ &") == ""
    assert normalize_ocr_line("a pinch of salt") == "a pinch of salt"


def test_analyze_ocr_line_scores():
    assert analyze_ocr_line("Page 12").keep is False
    unit_line = analyze_ocr_line("2 cups flour")
    assert unit_line.keep and unit_line.anchor
    heading = analyze_ocr_line("Ingredients")
    assert heading.anchor
    assert analyze_ocr_line("~~ ^^").keep is False


def test_clean_ocr_text_drops_header_and_footer_noise():
    cleaned = clean_ocr_text(BANANA_BREAD).split("\n")
    assert cleaned[0] == "Banana Bread"
    assert cleaned[-1] == "Use ripe bananas"
    assert "Page 12" not in cleaned


def test_parse_ocr_text_sections_and_metadata():
    parsed = parse_ocr_text(BANANA_BREAD)
    assert parsed.title == "Banana Bread"
    assert parsed.servings == 8
    assert parsed.prep_time == 15
    assert parsed.cook_time is None
    assert parsed.ingredients == ["3 ripe bananas", "2 cups flour", "1 tsp baking soda"]
    assert parsed.instructions == [
        "Mash the bananas in a bowl.",
        "Stir in the flour and baking soda.",
        "Bake for 60 minutes.",
    ]
    assert parsed.notes == ["Use ripe bananas"]


def test_payload_builds_prep_groups_from_instructions():
    payload = build_ocr_recipe_payload(BANANA_BREAD)
    assert [group.title for group in payload.prep_groups] == ["Step 1", "Step 2"]
    assert payload.prep_groups[0].items == ["3 ripe bananas"]
    assert payload.prep_groups[1].items == ["2 cups flour", "1 tsp baking soda"]
    assert payload.prep_groups[1].step_index == 1


def test_payload_defaults_title_when_first_line_is_heading():
    payload = build_ocr_recipe_payload("Ingredients\n2 cups flour\nMethod\nStir the flour.")
    assert payload.title == "Untitled Recipe"
    assert payload.ingredients == ["2 cups flour"]
    assert payload.instructions == ["Stir the flour."]
