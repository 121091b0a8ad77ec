"""HTML fetching and URL validation utilities."""

import ipaddress
import logging
import re
from typing import Dict, Optional
from urllib.parse import urlparse

import httpx

from mise_recipes.app.core.config import get_settings
from mise_recipes.app.schemas.ingestion import IngestionErrorCode
from mise_recipes.app.services.url_parsing.models import InvalidSourceUrlError

logger = logging.getLogger(__name__)

BLOCKED_STATUS_CODES = {401, 403, 429}


def is_private_host(host: str) -> bool:
    """Check if a host (as returned by ``urlparse(...).hostname``) is private/localhost."""
    hostname = host.strip("[]").rstrip(".").lower()
    try:
        ip = ipaddress.ip_address(hostname)
    except ValueError:
        return hostname == "localhost" or hostname.endswith(".localhost")
    return ip.is_private or ip.is_loopback or ip.is_link_local or ip.is_reserved or ip.is_unspecified


def validate_source_url(url: str) -> str:
    """Return the trimmed URL or raise ``InvalidSourceUrlError``."""
    candidate = (url or "").strip()
    parsed = urlparse(candidate)
    if parsed.scheme not in {"http", "https"}:
        raise InvalidSourceUrlError("URL must start with http or https.")
    if not parsed.netloc or not parsed.hostname:
        raise InvalidSourceUrlError("URL is missing a host.")
    if is_private_host(parsed.hostname):
        raise InvalidSourceUrlError("Host is blocked (localhost/private).")
    return candidate


def source_host(url: str) -> str:
    hostname = urlparse(url).hostname or ""
    return re.sub(r"^www\.", "", hostname.lower())


def build_request_headers() -> Dict[str, str]:
    settings = get_settings()
    return {
        "User-Agent": settings.scraper_user_agent,
        "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }


def classify_fetch_error(exc: Exception) -> IngestionErrorCode:
    """Map an httpx failure to the stage error it represents."""
    if isinstance(exc, httpx.HTTPStatusError):
        if exc.response.status_code in BLOCKED_STATUS_CODES:
            return IngestionErrorCode.BLOCKED
        return IngestionErrorCode.FETCH_FAILED
    if isinstance(exc, httpx.TimeoutException):
        return IngestionErrorCode.TIMEOUT
    return IngestionErrorCode.FETCH_FAILED


def _decode_response(response: httpx.Response) -> str:
    content_type = response.headers.get("content-type", "")
    encoding: Optional[str] = None
    if "charset=" in content_type.lower():
        encoding = content_type.lower().split("charset=")[1].split(";")[0].strip().strip("\"'")
    try:
        return response.content.decode(encoding or "utf-8")
    except (UnicodeDecodeError, LookupError):
        logger.warning("Could not decode %s as %s, using replacement characters", response.url, encoding)
        return response.content.decode("utf-8", errors="replace")


async def fetch_html(url: str, timeout: float) -> str:
    """Fetch a page's HTML.

    Non-2xx responses raise ``httpx.HTTPStatusError`` and transport problems
    propagate as ``httpx.HTTPError`` so the caller can classify them.
    """
    async with httpx.AsyncClient(
        timeout=timeout, follow_redirects=True, headers=build_request_headers()
    ) as client:
        response = await client.get(url)
        response.raise_for_status()
    return _decode_response(response)
