"""Meta-tag, video, notes and ingredient-group extraction from raw HTML."""

import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup, NavigableString, PageElement, Tag

from mise_recipes.app.schemas.ingestion import PrepGroup
from mise_recipes.app.services.prep_groups import normalize_ingredient_heading
from mise_recipes.app.services.url_parsing.models import PageMetadata
from mise_recipes.app.services.url_parsing.parsing_utils import (
    get_video_kind,
    normalize_text,
    normalize_video_url,
    to_optional_url,
)

logger = logging.getLogger(__name__)

VIDEO_HOST_PATTERN = re.compile(r"youtube\.com|youtu\.be|youtube-nocookie\.com|vimeo\.com", re.IGNORECASE)
VIDEO_LINK_PATTERN = re.compile(
    r"(https?://(?:www\.)?(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/shorts/|"
    r"youtube-nocookie\.com/embed/|vimeo\.com/)\S+)",
    re.IGNORECASE,
)
VIDEO_SOURCE_ATTRIBUTES = ("data-cmp-src", "data-src", "data-lazy-src", "data-yt-src", "src")
NOTES_CONTAINER_PATTERN = re.compile(r"wprm-recipe-notes|recipe[-_ ]?notes", re.IGNORECASE)
NOTES_BLOCK_TAGS = ["p", "li", "div", "section", "tr", "ul", "ol", "h2", "h3", "h4", "h5", "h6"]


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "lxml")


def extract_meta(soup: BeautifulSoup, key: str, attribute: str) -> Optional[str]:
    tag = soup.find("meta", attrs={attribute: re.compile(rf"^{re.escape(key)}$", re.IGNORECASE)})
    if tag is None:
        return None
    content = normalize_text(tag.get("content"))
    return content or None


def extract_title_tag(soup: BeautifulSoup) -> Optional[str]:
    if soup.title is None or not soup.title.string:
        return None
    return normalize_text(soup.title.string) or None


def extract_video_from_html(html: str) -> Optional[str]:
    """Find an embedded recipe video, preferring YouTube over Vimeo."""
    soup = _soup(html)
    candidates: List[str] = []

    meta_candidate = (
        extract_meta(soup, "og:video:secure_url", "property")
        or extract_meta(soup, "og:video:url", "property")
        or extract_meta(soup, "og:video", "property")
        or extract_meta(soup, "twitter:player", "name")
    )
    meta_url = to_optional_url(meta_candidate)
    if meta_url:
        candidates.append(meta_url)

    for element in soup.find_all(["iframe", "video"]):
        for attribute in VIDEO_SOURCE_ATTRIBUTES:
            raw = element.get(attribute)
            if isinstance(raw, str) and VIDEO_HOST_PATTERN.search(raw):
                url = to_optional_url(raw)
                if url:
                    candidates.append(url)
                break

    link_match = VIDEO_LINK_PATTERN.search(html or "")
    if link_match:
        link_url = to_optional_url(link_match.group(1))
        if link_url:
            candidates.append(link_url)

    normalized = [video for video in (normalize_video_url(candidate) for candidate in candidates) if video]
    for kind in ("youtube", "vimeo"):
        for video in normalized:
            if get_video_kind(video) == kind:
                return video
    return None


def extract_page_metadata(html: str) -> PageMetadata:
    soup = _soup(html)
    return PageMetadata(
        title=(
            extract_meta(soup, "og:title", "property")
            or extract_meta(soup, "twitter:title", "name")
            or extract_title_tag(soup)
        ),
        description=(
            extract_meta(soup, "description", "name")
            or extract_meta(soup, "og:description", "property")
            or extract_meta(soup, "twitter:description", "name")
        ),
        image_url=to_optional_url(
            extract_meta(soup, "og:image", "property") or extract_meta(soup, "twitter:image", "name")
        ),
        video_url=extract_video_from_html(html),
    )


def _matches_notes_container(tag: Tag) -> bool:
    if tag.name not in {"div", "section"}:
        return False
    classes = " ".join(tag.get("class") or [])
    return bool(NOTES_CONTAINER_PATTERN.search(classes) or NOTES_CONTAINER_PATTERN.search(tag.get("id") or ""))


def _text_lines(node: PageElement) -> List[str]:
    """Text of a soup node split on block boundaries and ``<br>``."""
    if not isinstance(node, Tag):
        text = str(node) if type(node) is NavigableString else ""
        return [normalize_text(part) for part in text.split("\n")]
    for br in node.find_all("br"):
        br.replace_with("\n")
    for block in node.find_all(NOTES_BLOCK_TAGS):
        block.append("\n")
    return [normalize_text(part) for part in node.get_text().split("\n")]


def extract_notes_from_html(html: str) -> List[str]:
    """Lines from recipe-notes containers, else from a "Recipe Notes" heading section."""
    soup = _soup(html)
    for tag in soup(["script", "style", "template"]):
        tag.decompose()

    nodes: List[PageElement] = []
    for container in soup.find_all(_matches_notes_container):
        if any(parent in nodes for parent in container.parents):
            continue
        nodes.append(container)

    if not nodes:
        heading = soup.find(
            re.compile(r"^h[2-4]$"),
            string=re.compile(r"^\s*Recipe Notes[:\s]*$", re.IGNORECASE),
        )
        if heading is not None:
            for sibling in heading.next_siblings:
                if isinstance(sibling, Tag) and re.match(r"^h[2-4]$", sibling.name or ""):
                    break
                nodes.append(sibling)

    lines: List[str] = []
    for node in nodes:
        lines.extend(line for line in _text_lines(node) if line)
    return [line for line in lines if not re.match(r"^nutrition\b", line, re.IGNORECASE)]


def extract_ingredient_groups_from_html(html: str) -> List[PrepGroup]:
    """Read WP Recipe Maker ingredient groups ("For the sauce" + items)."""
    soup = _soup(html)
    groups: List[PrepGroup] = []
    for group in soup.select("div.wprm-recipe-ingredient-group"):
        name = group.select_one(".wprm-recipe-group-name")
        title = normalize_ingredient_heading(name.get_text(" ")) if name is not None else ""
        items = [
            text
            for text in (normalize_text(item.get_text(" ")) for item in group.select("li.wprm-recipe-ingredient"))
            if text
        ]
        if title and items:
            groups.append(PrepGroup(title=title, items=items))
    if groups:
        logger.debug("Found %d WPRM ingredient groups", len(groups))
    return groups
