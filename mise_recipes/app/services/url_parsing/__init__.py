"""URL recipe parsing package.

Fetching, site clean-ups and the per-stage extractors used to turn a recipe
URL into ingestion candidates: markdown service, schema.org JSON-LD from the
raw or rendered page, and a readability fallback.
"""

from mise_recipes.app.services.url_parsing.html_fetcher import (
    classify_fetch_error,
    fetch_html,
    is_private_host,
    source_host,
    validate_source_url,
)
from mise_recipes.app.services.url_parsing.markdown_client import fetch_markdown
from mise_recipes.app.services.url_parsing.models import (
    HtmlRecipeDraft,
    InstructionSection,
    InvalidSourceUrlError,
    MarkdownDocument,
    MarkdownRecipeDraft,
    PageMetadata,
    PlainStep,
    ReadabilityDraft,
    RenderedPage,
)
from mise_recipes.app.services.url_parsing.parsing_utils import (
    build_source_url_candidates,
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

__all__ = [
    # Models
    "HtmlRecipeDraft",
    "InstructionSection",
    "InvalidSourceUrlError",
    "MarkdownDocument",
    "MarkdownRecipeDraft",
    "PageMetadata",
    "PlainStep",
    "ReadabilityDraft",
    "RenderedPage",
    # Fetching
    "classify_fetch_error",
    "fetch_html",
    "fetch_markdown",
    "fetch_rendered_page",
    "is_private_host",
    "is_render_fallback_enabled",
    "source_host",
    "validate_source_url",
    # Site adapters
    "apply_site_adapters",
    # Parsing utilities
    "build_source_url_candidates",
    "normalize_source_url",
    "normalize_text",
    "normalize_video_url",
    "to_optional_url",
]
