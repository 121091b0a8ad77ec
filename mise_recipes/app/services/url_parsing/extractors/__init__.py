"""Recipe extractors for the different ingestion stages."""

from mise_recipes.app.services.url_parsing.extractors.markdown import (
    extract_recipe_from_markdown,
    parse_markdown_recipe,
)
from mise_recipes.app.services.url_parsing.extractors.page_metadata import (
    extract_ingredient_groups_from_html,
    extract_notes_from_html,
    extract_page_metadata,
    extract_video_from_html,
)
from mise_recipes.app.services.url_parsing.extractors.readability_fallback import (
    extract_recipe_from_readability,
)
from mise_recipes.app.services.url_parsing.extractors.schema_org import (
    extract_recipe_from_html,
    parse_json_ld_blocks,
)

__all__ = [
    "extract_ingredient_groups_from_html",
    "extract_notes_from_html",
    "extract_page_metadata",
    "extract_recipe_from_html",
    "extract_recipe_from_markdown",
    "extract_recipe_from_readability",
    "extract_video_from_html",
    "parse_json_ld_blocks",
    "parse_markdown_recipe",
]
