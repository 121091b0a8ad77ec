"""Client for the headless-browser render worker."""

import logging
from typing import Dict, Optional

import httpx

from mise_recipes.app.core.config import get_settings
from mise_recipes.app.services.url_parsing.models import RenderedPage

logger = logging.getLogger(__name__)


def is_render_fallback_enabled() -> bool:
    return get_settings().render_fallback_enabled


async def fetch_rendered_page(url: str) -> Optional[RenderedPage]:
    """Render ``url`` through the worker.

    Returns None when rendering is disabled, on timeout, on a non-2xx answer
    or when the payload carries no HTML. Never raises for transport problems.
    """
    settings = get_settings()
    if not settings.render_worker_url or not settings.render_flag_enabled:
        return None

    headers: Dict[str, str] = {"Content-Type": "application/json"}
    if settings.render_worker_token:
        headers["Authorization"] = f"Bearer {settings.render_worker_token}"

    try:
        async with httpx.AsyncClient(timeout=settings.render_timeout_seconds) as client:
            response = await client.post(settings.render_worker_url, json={"url": url}, headers=headers)
        if not response.is_success:
            logger.warning("Render worker returned %s for %s", response.status_code, url)
            return None
        payload = response.json()
    except httpx.TimeoutException:
        logger.warning("Render worker timed out after %.1fs for %s", settings.render_timeout_seconds, url)
        return None
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Render worker request failed for %s: %s", url, exc)
        return None

    if not isinstance(payload, dict) or not isinstance(payload.get("html"), str):
        return None

    final_url = payload.get("finalUrl")
    json_ld = payload.get("jsonLd")
    return RenderedPage(
        final_url=final_url if isinstance(final_url, str) else url,
        html=payload["html"],
        json_ld=json_ld if isinstance(json_ld, list) else [],
    )
