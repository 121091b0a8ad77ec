"""Heuristic quality scoring and winner selection across ingestion stages."""

import math
from typing import Iterable, List, Optional

from mise_recipes.app.schemas.ingestion import (
    STAGE_PRIORITY,
    CandidateSelection,
    IngestionAttemptResult,
    IngestionErrorCode,
    RecipeIngestionCandidate,
)

MIN_INGESTION_SCORE = 35
HIGH_CONFIDENCE_INGESTION_SCORE = 55
MIN_BALANCED_INGREDIENTS = 4
MIN_BALANCED_INSTRUCTIONS = 3

INGREDIENT_WEIGHT = 2.2
INSTRUCTION_WEIGHT = 2.8
COUNT_CAP = 20


def _average_length(lines: List[str]) -> float:
    if not lines:
        return 0
    return sum(len(" ".join(line.split())) for line in lines) / len(lines)


def score_candidate(candidate: RecipeIngestionCandidate) -> int:
    """Score a candidate; instructions weigh more than ingredients and lopsided results are penalised."""
    ingredient_count = len(candidate.ingredients)
    instruction_count = len(candidate.instructions)

    score = min(ingredient_count, COUNT_CAP) * INGREDIENT_WEIGHT
    score += min(instruction_count, COUNT_CAP) * INSTRUCTION_WEIGHT

    if candidate.title:
        score += 10
    if candidate.description:
        score += 4
    if _average_length(candidate.ingredients) >= 8:
        score += 4
    if _average_length(candidate.instructions) >= 18:
        score += 6

    if ingredient_count > 0 and instruction_count == 0:
        score -= 14
    if instruction_count > 0 and ingredient_count == 0:
        score -= 10
    if candidate.error_code:
        score -= 12

    # Half rounds up, matching how scores were tuned.
    return max(0, math.floor(score + 0.5))


def select_best_candidate(candidates: List[RecipeIngestionCandidate]) -> CandidateSelection:
    if not candidates:
        return CandidateSelection(candidate=None, score=0)
    ranked = sorted(
        candidates,
        key=lambda candidate: (score_candidate(candidate), STAGE_PRIORITY[candidate.stage]),
        reverse=True,
    )
    winner = ranked[0]
    return CandidateSelection(candidate=winner, score=score_candidate(winner))


def classify_ingestion_failure(
    attempts: Iterable[IngestionAttemptResult],
    best_candidate: Optional[RecipeIngestionCandidate],
) -> IngestionErrorCode:
    attempts = list(attempts)
    if best_candidate is not None and best_candidate.ingredients and not best_candidate.instructions:
        return IngestionErrorCode.INSUFFICIENT_STEPS
    if any(attempt.error_code == IngestionErrorCode.BLOCKED for attempt in attempts):
        return IngestionErrorCode.BLOCKED
    # A timeout surfaces to the user as a failed fetch.
    if any(attempt.error_code == IngestionErrorCode.TIMEOUT for attempt in attempts):
        return IngestionErrorCode.FETCH_FAILED
    return IngestionErrorCode.NO_RECIPE_DATA


def is_balanced(candidate: RecipeIngestionCandidate) -> bool:
    """Enough ingredients and steps to stand on its own as a recipe."""
    return (
        len(candidate.ingredients) >= MIN_BALANCED_INGREDIENTS
        and len(candidate.instructions) >= MIN_BALANCED_INSTRUCTIONS
    )


def is_high_confidence(candidate: Optional[RecipeIngestionCandidate]) -> bool:
    if candidate is None:
        return False
    return score_candidate(candidate) >= HIGH_CONFIDENCE_INGESTION_SCORE and is_balanced(candidate)
