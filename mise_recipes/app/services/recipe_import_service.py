"""Import a recipe from a URL into a recipe store, backfilling metadata on re-import."""

import logging
from typing import Optional

from mise_recipes.app.schemas.ingestion import NormalizedRecipe
from mise_recipes.app.schemas.recipe import ImportResult, RecipeMetadataPatch, StoredRecipe
from mise_recipes.app.services.storage.base import RecipeStore
from mise_recipes.app.services.url_parsing.html_fetcher import validate_source_url
from mise_recipes.app.services.url_parsing.parsing_utils import (
    build_source_url_candidates,
    get_video_kind,
)
from mise_recipes.app.services.url_recipe_parser import ingest_recipe_from_url

logger = logging.getLogger(__name__)


def _should_update_video(existing: Optional[str], incoming: Optional[str]) -> bool:
    if not incoming:
        return False
    if not existing:
        return True
    existing_kind = get_video_kind(existing)
    incoming_kind = get_video_kind(incoming)
    if existing_kind != "youtube" and incoming_kind == "youtube":
        return True
    return existing_kind is None and incoming_kind is not None


def compute_metadata_patch(existing: StoredRecipe, recipe: NormalizedRecipe) -> RecipeMetadataPatch:
    """Only fill what the stored recipe is missing; populated fields are never replaced.

    The one exception is the video: a YouTube link replaces a non-YouTube one and
    any recognised video host replaces an unrecognised link.
    """
    return RecipeMetadataPatch(
        image_url=recipe.image_url if not existing.image_url and recipe.image_url else None,
        video_url=recipe.video_url if _should_update_video(existing.video_url, recipe.video_url) else None,
        servings=recipe.servings if existing.servings is None else None,
        prep_time=recipe.prep_time if existing.prep_time is None else None,
        cook_time=recipe.cook_time if existing.cook_time is None else None,
        tags=list(recipe.tags) if not existing.tags and recipe.tags else None,
    )


async def import_recipe_from_url(url: str, store: RecipeStore) -> ImportResult:
    """Ingest ``url`` and create the recipe, or patch the one already stored for it.

    ``InvalidSourceUrlError`` propagates to the caller. A failed ingestion of a
    URL that is already stored still reports the stored recipe's id.
    """
    source_url = validate_source_url(url)
    existing = store.find_by_source_urls(build_source_url_candidates(source_url))
    outcome = await ingest_recipe_from_url(source_url)

    if outcome.recipe is None:
        return ImportResult(
            recipe_id=existing.id if existing else None,
            failure_reason=outcome.failure_reason,
        )

    if existing is None:
        created = store.create(outcome.recipe)
        logger.info("Imported recipe %s from %s via %s", created.id, outcome.source_host, outcome.stage_used.value)
        return ImportResult(recipe_id=created.id, created=True)

    patch = compute_metadata_patch(existing, outcome.recipe)
    if patch.is_empty():
        logger.info("Recipe %s already up to date for %s", existing.id, outcome.source_host)
        return ImportResult(recipe_id=existing.id)

    store.update_metadata(existing.id, patch)
    logger.info("Backfilled %s on recipe %s", ", ".join(patch.updated_fields()), existing.id)
    return ImportResult(recipe_id=existing.id, updated_fields=patch.updated_fields())
