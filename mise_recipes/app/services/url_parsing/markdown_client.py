"""Client for the external URL-to-markdown extraction service."""

import logging
from typing import Optional

import httpx

from mise_recipes.app.core.config import get_settings
from mise_recipes.app.services.url_parsing.models import MarkdownDocument
from mise_recipes.app.services.url_parsing.parsing_utils import normalize_text

logger = logging.getLogger(__name__)


async def fetch_markdown(url: str) -> Optional[MarkdownDocument]:
    """Ask the markdown service for a page; None on any failure or unusable payload."""
    settings = get_settings()
    try:
        async with httpx.AsyncClient(timeout=settings.markdown_timeout_seconds) as client:
            response = await client.post(
                settings.markdown_service_url,
                json={"url": url},
                headers={"Content-Type": "application/json"},
            )
        if not response.is_success:
            logger.warning("Markdown service returned %s for %s", response.status_code, url)
            return None
        payload = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Markdown service request failed for %s: %s", url, exc)
        return None

    if not isinstance(payload, dict) or not payload.get("success") or not isinstance(payload.get("content"), str):
        return None

    title = payload.get("title")
    return MarkdownDocument(
        title=normalize_text(title) or None if isinstance(title, str) else None,
        content=payload["content"],
    )
