from mise_recipes.app.schemas.ingestion import (
    IngestionAttemptResult,
    IngestionErrorCode,
    IngestionStage,
    RecipeIngestionCandidate,
)
from mise_recipes.app.services.ingestion_quality import (
    classify_ingestion_failure,
    is_balanced,
    is_high_confidence,
    score_candidate,
    select_best_candidate,
)

INGREDIENTS = ["1 cup basmati rice", "2 cups chicken stock", "1 brown onion", "2 garlic cloves"]
INSTRUCTIONS = [
    "Rinse the rice until the water runs clear.",
    "Soften the onion and garlic in a little oil.",
    "Add the rice and stock, cover and simmer for 15 minutes.",
]


def make_candidate(stage=IngestionStage.MARKDOWN, **overrides):
    fields = {"stage": stage, "success": True, "title": "Pilaf", "ingredients": INGREDIENTS, "instructions": INSTRUCTIONS}
    fields.update(overrides)
    return RecipeIngestionCandidate(**fields)


def test_score_rewards_complete_candidates():
    # 4 * 2.2 + 3 * 2.8 + title + long ingredients + long instructions
    assert score_candidate(make_candidate()) == 37
    assert score_candidate(make_candidate(description="Fluffy rice.")) == 41


def test_score_penalises_lopsided_candidates():
    ingredients_only = make_candidate(title=None, instructions=[], ingredients=["1 cup rice", "2 cups water", "1 tsp salt"])
    assert score_candidate(ingredients_only) == 0

    steps_only = make_candidate(title=None, ingredients=[], instructions=INSTRUCTIONS[:2])
    assert score_candidate(steps_only) == 2


def test_score_penalises_error_code():
    clean = score_candidate(make_candidate())
    errored = score_candidate(make_candidate(error_code=IngestionErrorCode.PARSE_FAILED))
    assert clean - errored == 12


def test_stage_priority_breaks_ties():
    html = make_candidate(stage=IngestionStage.HTTP_HTML)
    markdown = make_candidate(stage=IngestionStage.MARKDOWN)
    selection = select_best_candidate([html, markdown])
    assert selection.candidate is markdown
    assert selection.score == 37


def test_higher_score_beats_stage_priority():
    markdown = make_candidate(stage=IngestionStage.MARKDOWN, ingredients=INGREDIENTS[:1])
    readability = make_candidate(stage=IngestionStage.READABILITY)
    assert select_best_candidate([markdown, readability]).candidate is readability


def test_select_best_candidate_empty():
    selection = select_best_candidate([])
    assert selection.candidate is None
    assert selection.score == 0


def test_high_confidence_threshold():
    ingredients = INGREDIENTS * 2
    instructions = INSTRUCTIONS * 2
    assert not is_high_confidence(make_candidate(ingredients=ingredients, instructions=instructions))
    assert is_high_confidence(make_candidate(ingredients=ingredients, instructions=instructions, description="Fluffy rice."))
    assert not is_high_confidence(None)


def test_is_balanced():
    assert is_balanced(make_candidate())
    assert not is_balanced(make_candidate(instructions=[]))
    assert not is_balanced(make_candidate(ingredients=INGREDIENTS[:3]))
    assert not is_balanced(make_candidate(instructions=INSTRUCTIONS[:2]))


def _failed(code):
    return IngestionAttemptResult(stage=IngestionStage.HTTP_HTML, success=False, error_code=code)


def test_classify_insufficient_steps_first():
    best = make_candidate(instructions=[])
    reason = classify_ingestion_failure([_failed(IngestionErrorCode.BLOCKED)], best)
    assert reason == IngestionErrorCode.INSUFFICIENT_STEPS


def test_classify_blocked_and_timeout():
    assert classify_ingestion_failure([_failed(IngestionErrorCode.BLOCKED)], None) == IngestionErrorCode.BLOCKED
    assert (
        classify_ingestion_failure([_failed(IngestionErrorCode.TIMEOUT), _failed(IngestionErrorCode.FETCH_FAILED)], None)
        == IngestionErrorCode.FETCH_FAILED
    )


def test_classify_defaults_to_no_recipe_data():
    assert classify_ingestion_failure([_failed(IngestionErrorCode.PARSE_FAILED)], None) == IngestionErrorCode.NO_RECIPE_DATA
    assert classify_ingestion_failure([], make_candidate()) == IngestionErrorCode.NO_RECIPE_DATA
