"""Recipe extraction from markdown returned by the markdown service."""

import logging
import re
from typing import Dict, List, NamedTuple, Optional

from mise_recipes.app.services.recipe_notes import clean_description, dedupe_lines
from mise_recipes.app.services.text_normalizer import parse_tags
from mise_recipes.app.services.url_parsing.extractors.page_metadata import extract_video_from_html
from mise_recipes.app.services.url_parsing.models import MarkdownRecipeDraft
from mise_recipes.app.services.url_parsing.parsing_utils import (
    normalize_text,
    normalize_video_url,
    to_optional_url,
)

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(r"^---\s*\n([\s\S]*?)\n---\s*(?:\n|$)")
FRONTMATTER_ENTRY = re.compile(r"^([A-Za-z][A-Za-z0-9_-]*)\s*:\s*(.*)$")
HEADING_CANDIDATE = re.compile(r"^#{1,6}\s+|^[A-Za-z][A-Za-z\s'/-]{2,40}:?$")
TAGS_LINE = re.compile(r"^tags?:\s*", re.IGNORECASE)
MARKDOWN_IMAGE = re.compile(r"!\[[^\]]*]\((https?://[^)\s]+)\)")
FRONTMATTER_IMAGE = re.compile(r"^\s*image\s*:\s*(.+)$", re.IGNORECASE | re.MULTILINE)
FRONTMATTER_VIDEO = re.compile(r"^\s*(?:video|video_url|youtube)\s*:\s*(.+)$", re.IGNORECASE | re.MULTILINE)

INGREDIENT_HEADING = re.compile(
    r"^(ingredients?|for\s+the\s+.+|for\s+serving|to\s+serve|serving|sauce|dressing|marinade|filling|topping|garnish)$",
    re.IGNORECASE,
)
INSTRUCTION_HEADING = re.compile(r"^(instructions?|directions?|method|preparation|steps?)$", re.IGNORECASE)
NOTE_HEADING = re.compile(r"^(recipe\s+)?(notes?|tips?|cook'?s?\s+notes?)$", re.IGNORECASE)
# Blog furniture that sits inside a recipe section; its lines are skipped.
NOISE_HEADING = re.compile(
    r"^(recipe\s+video(\s+above)?|watch\s+(the\s+)?video|video|jump\s+to\s+recipe|print(\s+recipe)?|pin(\s+(it|recipe))?)$",
    re.IGNORECASE,
)

MAX_DESCRIPTION_LINES = 3


class Frontmatter(NamedTuple):
    values: Dict[str, str]
    body: str


def parse_frontmatter(markdown: str) -> Frontmatter:
    match = FRONTMATTER_PATTERN.match(markdown)
    if not match:
        return Frontmatter(values={}, body=markdown)
    values: Dict[str, str] = {}
    for line in match.group(1).split("\n"):
        entry = FRONTMATTER_ENTRY.match(line.strip())
        if entry:
            values[entry.group(1).lower()] = entry.group(2).strip().strip("\"'")
    return Frontmatter(values=values, body=markdown[match.end():])


def markdown_heading(line: str) -> str:
    text = re.sub(r"^#{1,6}\s+", "", line.strip())
    return normalize_text(re.sub(r"[:#\s]+$", "", text))


def heading_level(line: str) -> Optional[int]:
    match = re.match(r"^(#{1,6})\s+", line.strip())
    return len(match.group(1)) if match else None


def markdown_to_line(line: str) -> str:
    text = re.sub(r"^>\s*", "", line.strip())
    text = re.sub(r"^\s*[-*+]\s+", "", text)
    text = re.sub(r"^\s*\d+[.)]\s+", "", text)
    text = re.sub(r"\[([^\]]+)\]\([^)]*\)", r"\1", text)
    text = text.replace("`", "")
    text = re.sub(r"[*_~]+", "", text)
    return normalize_text(text)


def _section_for(heading: str) -> Optional[str]:
    if INGREDIENT_HEADING.match(heading):
        return "ingredients"
    if INSTRUCTION_HEADING.match(heading):
        return "instructions"
    if NOTE_HEADING.match(heading):
        return "notes"
    return None


def parse_markdown_recipe(markdown: str, fallback_title: Optional[str] = None) -> MarkdownRecipeDraft:
    """Split markdown into title, description, ingredients, instructions, notes and tags.

    Headings drive a small state machine. A recognised section heading opens a
    section; a deeper subheading keeps it open, except that blog furniture such
    as "Recipe Video Above" suspends it until the next subheading. Any other
    heading at the same or a shallower level closes the section.
    """
    frontmatter = parse_frontmatter(markdown or "")
    title = normalize_text(fallback_title) or normalize_text(frontmatter.values.get("title")) or None
    frontmatter_description = normalize_text(frontmatter.values.get("description")) or None

    sections: Dict[str, List[str]] = {"ingredients": [], "instructions": [], "notes": []}
    description_lines: List[str] = []
    tags: List[str] = []
    section: Optional[str] = None
    section_level = 2
    suspended_section: Optional[str] = None
    reached_recipe_section = False

    for raw_line in frontmatter.body.split("\n"):
        stripped = raw_line.strip()
        if not stripped:
            continue

        if HEADING_CANDIDATE.match(stripped):
            heading = markdown_heading(stripped)
            level = heading_level(stripped)
            heading_section = _section_for(heading)

            if heading_section:
                section = heading_section
                section_level = level or 2
                suspended_section = None
                reached_recipe_section = True
                continue

            if not title:
                title = heading
                continue

            active = section or suspended_section
            if active and level is not None and level > section_level:
                if NOISE_HEADING.match(heading):
                    suspended_section = active
                    section = None
                else:
                    section = active
                    suspended_section = None
                continue

            section = None
            suspended_section = None
            continue

        line = markdown_to_line(stripped)
        if not line:
            continue

        if TAGS_LINE.match(line):
            tags.extend(parse_tags(TAGS_LINE.sub("", line)))
            continue

        if section is None:
            if (
                not reached_recipe_section
                and not frontmatter_description
                and suspended_section is None
                and len(description_lines) < MAX_DESCRIPTION_LINES
            ):
                description_lines.append(line)
            continue

        sections[section].append(line)

    return MarkdownRecipeDraft(
        title=title,
        description=clean_description(frontmatter_description or " ".join(description_lines)),
        ingredients=sections["ingredients"],
        instructions=sections["instructions"],
        notes=sections["notes"],
        tags=dedupe_lines(tags),
    )


def _frontmatter_block(markdown: str) -> str:
    match = FRONTMATTER_PATTERN.match(markdown)
    return match.group(1) if match else ""


def extract_recipe_from_markdown(markdown: str, fallback_title: Optional[str] = None) -> MarkdownRecipeDraft:
    """Parse markdown and attach the image and video it references."""
    draft = parse_markdown_recipe(markdown, fallback_title)
    frontmatter = _frontmatter_block(markdown or "")

    image_url: Optional[str] = None
    image_match = FRONTMATTER_IMAGE.search(frontmatter)
    if image_match:
        image_url = to_optional_url(image_match.group(1))
    if not image_url:
        inline = MARKDOWN_IMAGE.search(markdown or "")
        image_url = to_optional_url(inline.group(1)) if inline else None

    video_url: Optional[str] = None
    video_match = FRONTMATTER_VIDEO.search(frontmatter)
    if video_match:
        video_url = normalize_video_url(to_optional_url(video_match.group(1)))
    if not video_url:
        video_url = extract_video_from_html(markdown or "")

    logger.debug(
        "Markdown recipe: title=%s ingredients=%d instructions=%d",
        draft.title,
        len(draft.ingredients),
        len(draft.instructions),
    )
    return draft.model_copy(update={"image_url": image_url, "video_url": video_url})
