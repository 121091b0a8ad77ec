"""Host-specific HTML clean-ups applied before extraction."""

import logging
import re
from typing import Callable, List, NamedTuple, Optional
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

_NOSCRIPT = re.compile(r"<noscript[\s\S]*?</noscript>", re.IGNORECASE)
_WPRM_CONTAINER = re.compile(
    r"(<div[^>]+class=[\"'][^\"']*wprm-recipe-container[^\"']*[\"'][^>]*>[\s\S]*?</div>)",
    re.IGNORECASE,
)


class SiteAdapter(NamedTuple):
    id: str
    host_pattern: re.Pattern
    run: Callable[[str], str]


class AdapterResult(NamedTuple):
    html: str
    adapter: Optional[str] = None


def strip_noscript_blocks(html: str) -> str:
    return _NOSCRIPT.sub("", html)


def remove_duplicate_wprm_blocks(html: str) -> str:
    """Keep only the first copy of each repeated WP Recipe Maker container."""
    if len(_WPRM_CONTAINER.findall(html)) <= 1:
        return html

    seen = set()

    def keep_first(match: re.Match) -> str:
        block = match.group(1)
        if block in seen:
            return ""
        seen.add(block)
        return block

    return _WPRM_CONTAINER.sub(keep_first, html)


ADAPTERS: List[SiteAdapter] = [
    SiteAdapter(
        id="wprm-dedupe",
        host_pattern=re.compile(
            r"(^|\.)allrecipes\.com$|(^|\.)foodnetwork\.com$|(^|\.)pinchofyum\.com$", re.IGNORECASE
        ),
        run=remove_duplicate_wprm_blocks,
    ),
    SiteAdapter(id="noscript-strip", host_pattern=re.compile(r"."), run=strip_noscript_blocks),
]


def apply_site_adapters(source_url: str, html: str) -> AdapterResult:
    hostname = re.sub(r"^www\.", "", (urlparse(source_url).hostname or "").lower())
    if not hostname:
        return AdapterResult(html=html)

    applied: List[str] = []
    current = html
    for adapter in ADAPTERS:
        if not adapter.host_pattern.search(hostname):
            continue
        transformed = adapter.run(current)
        if transformed != current:
            current = transformed
            applied.append(adapter.id)

    if applied:
        logger.debug("Applied site adapters %s for %s", applied, hostname)
    return AdapterResult(html=current, adapter=",".join(applied) if applied else None)
