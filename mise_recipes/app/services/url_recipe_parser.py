"""Multi-stage recipe ingestion from a URL.

Stages run one at a time in priority order: markdown service, direct HTML,
rendered HTML (render worker), readability. Each stage handler records an
``IngestionAttemptResult`` and, when it produced something usable, a
``RecipeIngestionCandidate``. Later stages only run while the best candidate is
still below the acceptance score.
"""

import logging
import time
from typing import Any, List, NamedTuple, Optional

import httpx

from mise_recipes.app.core.config import get_settings
from mise_recipes.app.schemas.ingestion import (
    CandidateSelection,
    IngestionAttemptResult,
    IngestionErrorCode,
    IngestionOutcome,
    IngestionStage,
    NormalizedRecipe,
    PrepGroup,
    RecipeIngestionCandidate,
)
from mise_recipes.app.services.ingestion_diagnostics import (
    build_diagnostics_payload,
    log_ingestion_diagnostics,
)
from mise_recipes.app.services.ingestion_quality import (
    MIN_INGESTION_SCORE,
    classify_ingestion_failure,
    is_balanced,
    is_high_confidence,
    select_best_candidate,
)
from mise_recipes.app.services.prep_groups import (
    build_prep_groups,
    build_prep_groups_from_instructions,
    clean_ingredient_groups,
    extract_ingredient_groups_from_lines,
)
from mise_recipes.app.services.recipe_notes import (
    clean_description,
    dedupe_lines,
    extract_notes_from_description,
    normalize_imported_notes,
)
from mise_recipes.app.services.text_normalizer import (
    clean_ingredient_lines,
    clean_instruction_lines,
    convert_ingredient_measurement_to_metric,
)
from mise_recipes.app.services.url_parsing.extractors import (
    extract_notes_from_html,
    extract_page_metadata,
    extract_recipe_from_html,
    extract_recipe_from_markdown,
    extract_recipe_from_readability,
    extract_video_from_html,
)
from mise_recipes.app.services.url_parsing.html_fetcher import (
    classify_fetch_error,
    fetch_html,
    source_host,
    validate_source_url,
)
from mise_recipes.app.services.url_parsing.markdown_client import fetch_markdown
from mise_recipes.app.services.url_parsing.models import MarkdownRecipeDraft, PageMetadata
from mise_recipes.app.services.url_parsing.parsing_utils import (
    normalize_source_url,
    normalize_text,
    normalize_video_url,
    to_optional_url,
)
from mise_recipes.app.services.url_parsing.render_worker_client import (
    fetch_rendered_page,
    is_render_fallback_enabled,
)
from mise_recipes.app.services.url_parsing.site_adapters import apply_site_adapters

logger = logging.getLogger(__name__)


class StageOutcome(NamedTuple):
    """Tagged result of one stage: the recorded attempt plus an optional candidate."""

    attempt: IngestionAttemptResult
    candidate: Optional[RecipeIngestionCandidate] = None


class MetadataFallback(NamedTuple):
    tags: List[str] = []
    servings: Optional[int] = None
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def failed_attempt(stage: IngestionStage, error_code: IngestionErrorCode, latency_ms: int) -> IngestionAttemptResult:
    return IngestionAttemptResult(stage=stage, success=False, error_code=error_code, latency_ms=latency_ms)


def clean_candidate_lines(lines: List[str]) -> List[str]:
    return [line for line in (normalize_text(line) for line in lines) if line]


def build_candidate_from_html(
    stage: IngestionStage,
    source_url: str,
    html: str,
    latency_ms: int,
    json_ld_blocks: Optional[List[Any]] = None,
) -> Optional[RecipeIngestionCandidate]:
    """JSON-LD recipe plus meta-tag fallbacks; None when the page has no Recipe node."""
    adapted = apply_site_adapters(source_url, html).html
    draft = extract_recipe_from_html(adapted, json_ld_blocks)
    if draft is None:
        return None

    metadata = extract_page_metadata(adapted)
    ingredients = clean_candidate_lines(draft.ingredients)
    instructions = clean_candidate_lines(draft.instructions)
    title = draft.title or metadata.title
    description = draft.description or metadata.description

    return RecipeIngestionCandidate(
        stage=stage,
        success=bool(title or description or ingredients or instructions),
        title=title,
        description=description,
        image_url=to_optional_url(draft.image_url) or metadata.image_url,
        video_url=normalize_video_url(draft.video_url or metadata.video_url),
        ingredients=ingredients,
        instructions=instructions,
        notes=extract_notes_from_html(adapted),
        ingredient_groups=draft.ingredient_groups,
        tags=draft.tags,
        servings=draft.servings,
        prep_time=draft.prep_time,
        cook_time=draft.cook_time,
        latency_ms=latency_ms,
        html=adapted,
    )


def build_readability_candidate(html: str, source_url: str, latency_ms: int) -> Optional[RecipeIngestionCandidate]:
    draft = extract_recipe_from_readability(html, source_url)
    if draft is None:
        return None
    ingredients = clean_candidate_lines(draft.ingredients)
    instructions = clean_candidate_lines(draft.instructions)
    return RecipeIngestionCandidate(
        stage=IngestionStage.READABILITY,
        success=bool(ingredients or instructions or draft.description),
        title=draft.title,
        description=draft.description,
        image_url=to_optional_url(draft.image_url),
        video_url=normalize_video_url(extract_video_from_html(html)),
        ingredients=ingredients,
        instructions=instructions,
        notes=clean_candidate_lines(draft.notes),
        latency_ms=latency_ms,
        html=html,
    )


class IngestionRun:
    """State for one ingestion request; never shared between requests."""

    def __init__(self, source_url: str):
        self.source_url = source_url
        self.source_host = source_host(source_url)
        self.attempts: List[IngestionAttemptResult] = []
        self.candidates: List[RecipeIngestionCandidate] = []
        self.markdown_draft: Optional[MarkdownRecipeDraft] = None
        self.markdown_title: Optional[str] = None
        self.direct_html = ""
        self.rendered_html = ""
        self.metadata_fallback = MetadataFallback()

    def record(self, outcome: StageOutcome) -> None:
        self.attempts.append(outcome.attempt)
        if outcome.candidate is not None:
            self.candidates.append(outcome.candidate)

    def select(self) -> CandidateSelection:
        return select_best_candidate(self.candidates)

    async def run_markdown_stage(self) -> StageOutcome:
        if not get_settings().markdown_enabled:
            return StageOutcome(failed_attempt(IngestionStage.MARKDOWN, IngestionErrorCode.DISABLED, 0))

        started = time.perf_counter()
        document = await fetch_markdown(self.source_url)
        latency_ms = _elapsed_ms(started)
        if document is None or not document.content:
            return StageOutcome(failed_attempt(IngestionStage.MARKDOWN, IngestionErrorCode.FETCH_FAILED, latency_ms))

        self.markdown_title = document.title
        draft = extract_recipe_from_markdown(document.content, document.title)
        self.markdown_draft = draft
        candidate = RecipeIngestionCandidate(
            stage=IngestionStage.MARKDOWN,
            success=bool(draft.title or draft.description or draft.ingredients or draft.instructions),
            title=draft.title,
            description=draft.description,
            image_url=draft.image_url,
            video_url=draft.video_url,
            ingredients=clean_candidate_lines(draft.ingredients),
            instructions=clean_candidate_lines(draft.instructions),
            notes=clean_candidate_lines(draft.notes),
            tags=draft.tags,
            latency_ms=latency_ms,
        )
        if not candidate.success:
            return StageOutcome(failed_attempt(IngestionStage.MARKDOWN, IngestionErrorCode.PARSE_FAILED, latency_ms))
        logger.info(
            "Markdown stage for %s: ingredients=%d instructions=%d",
            self.source_host,
            len(candidate.ingredients),
            len(candidate.instructions),
        )
        return StageOutcome(candidate, candidate)

    async def run_metadata_fetch(self) -> StageOutcome:
        """Direct HTML fetch used only for media and metadata fallbacks."""
        settings = get_settings()
        started = time.perf_counter()
        try:
            self.direct_html = await fetch_html(self.source_url, settings.metadata_fetch_timeout_seconds)
        except httpx.HTTPError as exc:
            logger.warning("Metadata fetch failed for %s: %s", self.source_url, exc)
            return StageOutcome(failed_attempt(IngestionStage.HTTP_HTML, classify_fetch_error(exc), _elapsed_ms(started)))

        latency_ms = _elapsed_ms(started)
        candidate = build_candidate_from_html(IngestionStage.HTTP_HTML, self.source_url, self.direct_html, latency_ms)
        if candidate is not None:
            self.metadata_fallback = MetadataFallback(
                tags=candidate.tags,
                servings=candidate.servings,
                prep_time=candidate.prep_time,
                cook_time=candidate.cook_time,
            )
        return StageOutcome(IngestionAttemptResult(stage=IngestionStage.HTTP_HTML, success=True, latency_ms=latency_ms))

    async def run_html_stage(self) -> StageOutcome:
        settings = get_settings()
        started = time.perf_counter()
        try:
            self.direct_html = await fetch_html(self.source_url, settings.html_fetch_timeout_seconds)
        except httpx.HTTPError as exc:
            logger.warning("Direct HTML fetch failed for %s: %s", self.source_url, exc)
            return StageOutcome(failed_attempt(IngestionStage.HTTP_HTML, classify_fetch_error(exc), _elapsed_ms(started)))

        latency_ms = _elapsed_ms(started)
        candidate = build_candidate_from_html(IngestionStage.HTTP_HTML, self.source_url, self.direct_html, latency_ms)
        if candidate is None or not candidate.success:
            return StageOutcome(failed_attempt(IngestionStage.HTTP_HTML, IngestionErrorCode.PARSE_FAILED, latency_ms))
        return StageOutcome(candidate, candidate)

    async def run_rendered_stage(self) -> StageOutcome:
        started = time.perf_counter()
        page = await fetch_rendered_page(self.source_url)
        latency_ms = _elapsed_ms(started)
        if page is None:
            return StageOutcome(failed_attempt(IngestionStage.RENDERED_HTML, IngestionErrorCode.FETCH_FAILED, latency_ms))

        self.rendered_html = page.html
        candidate = build_candidate_from_html(
            IngestionStage.RENDERED_HTML,
            page.final_url or self.source_url,
            page.html,
            latency_ms,
            json_ld_blocks=page.json_ld,
        )
        if candidate is None or not candidate.success:
            return StageOutcome(failed_attempt(IngestionStage.RENDERED_HTML, IngestionErrorCode.PARSE_FAILED, latency_ms))
        return StageOutcome(candidate, candidate)

    def run_readability_stage(self, html: str) -> StageOutcome:
        started = time.perf_counter()
        candidate = build_readability_candidate(html, self.source_url, 0)
        latency_ms = _elapsed_ms(started)
        if candidate is None or not candidate.success:
            return StageOutcome(failed_attempt(IngestionStage.READABILITY, IngestionErrorCode.PARSE_FAILED, latency_ms))
        candidate = candidate.model_copy(update={"latency_ms": latency_ms})
        return StageOutcome(candidate, candidate)

    def rescue_unbalanced_markdown(self, selected: CandidateSelection) -> CandidateSelection:
        """Prefer a balanced HTML-derived candidate over a thin markdown winner."""
        winner = selected.candidate
        if winner is None or winner.stage != IngestionStage.MARKDOWN or is_balanced(winner):
            return selected
        balanced = [
            candidate
            for candidate in self.candidates
            if candidate.stage != IngestionStage.MARKDOWN and is_balanced(candidate)
        ]
        if not balanced:
            return selected
        rescued = select_best_candidate(balanced)
        logger.info("Replacing unbalanced markdown result with %s candidate", rescued.candidate.stage.value)
        return rescued

    def build_recipe(self, candidate: RecipeIngestionCandidate) -> NormalizedRecipe:
        candidate_html = candidate.html or self.rendered_html or self.direct_html
        metadata = extract_page_metadata(candidate_html) if candidate_html else PageMetadata()

        title = candidate.title or self.markdown_title or metadata.title or self.source_host

        source_groups = candidate.ingredient_groups or extract_ingredient_groups_from_lines(candidate.ingredients)
        grouped = clean_ingredient_groups(source_groups) if source_groups else None
        has_groups = grouped is not None and bool(grouped.groups) and bool(grouped.ingredients)
        if has_groups:
            ingredient_lines, ingredient_notes = grouped.ingredients, grouped.notes
        else:
            ingredient_lines, ingredient_notes = clean_ingredient_lines(candidate.ingredients)
        instructions = clean_instruction_lines(candidate.instructions)
        html_notes = extract_notes_from_html(candidate_html) if candidate_html else []

        prep_groups: List[PrepGroup]
        if has_groups:
            prep_groups = grouped.groups
        else:
            prep_groups = build_prep_groups_from_instructions(ingredient_lines, instructions.lines) or build_prep_groups(
                ingredient_lines
            )

        description_notes = extract_notes_from_description(
            clean_description(candidate.description or metadata.description)
        )
        image_url = to_optional_url(candidate.image_url or metadata.image_url)
        video_url = normalize_video_url(candidate.video_url or metadata.video_url)

        markdown_tags = self.markdown_draft.tags if self.markdown_draft else []
        markdown_notes = self.markdown_draft.notes if self.markdown_draft else []
        tags = candidate.tags or markdown_tags or self.metadata_fallback.tags
        notes = normalize_imported_notes(
            dedupe_lines(
                ingredient_notes
                + instructions.notes
                + markdown_notes
                + candidate.notes
                + html_notes
                + description_notes.notes
            )
        )

        if get_settings().convert_to_metric:
            ingredient_lines = [convert_ingredient_measurement_to_metric(line) for line in ingredient_lines]
            prep_groups = [
                group.model_copy(update={"items": [convert_ingredient_measurement_to_metric(item) for item in group.items]})
                for group in prep_groups
            ]

        return NormalizedRecipe(
            title=title,
            description=description_notes.description,
            source_url=normalize_source_url(self.source_url) or self.source_url,
            image_url=image_url,
            video_url=video_url,
            servings=candidate.servings if candidate.servings is not None else self.metadata_fallback.servings,
            prep_time=candidate.prep_time if candidate.prep_time is not None else self.metadata_fallback.prep_time,
            cook_time=candidate.cook_time if candidate.cook_time is not None else self.metadata_fallback.cook_time,
            tags=list(tags),
            ingredients=ingredient_lines,
            instructions=instructions.lines,
            notes=notes,
            prep_groups=prep_groups,
        )


async def ingest_recipe_from_url(url: str) -> IngestionOutcome:
    """Run the ingestion stages for ``url`` and build the normalized recipe.

    Raises ``InvalidSourceUrlError`` before any stage runs when the URL cannot
    be ingested. Every other problem is reported through ``failure_reason``.
    Exactly one diagnostics record is logged per call.
    """
    source_url = validate_source_url(url)
    run = IngestionRun(source_url)
    logger.info("Starting recipe ingestion for %s", run.source_host)

    run.record(await run.run_markdown_stage())
    selected = run.select()
    markdown_is_high_confidence = (
        selected.candidate is not None
        and selected.candidate.stage == IngestionStage.MARKDOWN
        and is_high_confidence(selected.candidate)
    )

    if markdown_is_high_confidence:
        if not run.markdown_draft.image_url or not run.markdown_draft.video_url:
            run.record(await run.run_metadata_fetch())
    else:
        run.record(await run.run_html_stage())

    selected = run.select()
    if selected.score < MIN_INGESTION_SCORE and is_render_fallback_enabled():
        run.record(await run.run_rendered_stage())

    selected = run.select()
    if selected.score < MIN_INGESTION_SCORE:
        readability_html = run.rendered_html or run.direct_html
        if readability_html:
            run.record(run.run_readability_stage(readability_html))

    selected = run.rescue_unbalanced_markdown(run.select())
    winner = selected.candidate
    failure_reason = classify_ingestion_failure(run.attempts, winner)

    if winner is None or selected.score < MIN_INGESTION_SCORE:
        logger.info("Recipe ingestion failed for %s: %s", run.source_host, failure_reason.value)
        log_ingestion_diagnostics(
            build_diagnostics_payload(
                source_url=source_url,
                source_host=run.source_host,
                attempts=run.attempts,
                quality_score=selected.score,
                failure_reason=failure_reason,
            )
        )
        return IngestionOutcome(
            failure_reason=failure_reason,
            quality_score=selected.score,
            source_host=run.source_host,
            attempts=run.attempts,
        )

    recipe = run.build_recipe(winner)
    log_ingestion_diagnostics(
        build_diagnostics_payload(
            source_url=source_url,
            source_host=run.source_host,
            attempts=run.attempts,
            quality_score=selected.score,
            stage_used=winner.stage,
            selected=winner,
        )
    )
    return IngestionOutcome(
        recipe=recipe,
        stage_used=winner.stage,
        quality_score=selected.score,
        source_host=run.source_host,
        attempts=run.attempts,
    )
