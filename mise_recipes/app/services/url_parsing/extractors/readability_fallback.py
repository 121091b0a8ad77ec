"""Last-resort extraction from the main article text of a page."""

import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup
from readability import Document
from readability.readability import Unparseable

from mise_recipes.app.services.recipe_notes import dedupe_lines
from mise_recipes.app.services.url_parsing.models import ReadabilityDraft
from mise_recipes.app.services.url_parsing.parsing_utils import normalize_text, to_optional_url

logger = logging.getLogger(__name__)

INGREDIENT_HEADING = re.compile(r"^(ingredients?|for\s+the\s+.+|sauce|dressing|marinade|filling|topping)$", re.IGNORECASE)
INSTRUCTION_HEADING = re.compile(r"^(instructions?|directions?|method|preparation|steps?)$", re.IGNORECASE)
NOTE_HEADING = re.compile(r"^(notes?|tips?|cook'?s\s+notes?)$", re.IGNORECASE)

LIKELY_INGREDIENT_AMOUNT = re.compile(r"\b\d+(?:/\d+)?\b")
LIKELY_INGREDIENT_UNIT = re.compile(r"\b(cup|cups|tbsp|tsp|g|kg|oz|lb|ml|l)\b", re.IGNORECASE)
LIKELY_INSTRUCTION_NUMBER = re.compile(r"^\d+[.)]\s+")
LIKELY_INSTRUCTION_VERB = re.compile(
    r"\b(mix|stir|bake|cook|heat|whisk|combine|add|serve|preheat|simmer|fold|saute)\b", re.IGNORECASE
)

MAX_GUESSED_LINES = 30
NO_TITLE = "[no-title]"


def normalize_list_line(line: str) -> str:
    text = re.sub(r"^[-*•]\s*", "", line)
    text = re.sub(r"^\d+[.)]\s*", "", text)
    return normalize_text(re.sub(r"[•·]", " ", text))


def likely_ingredient(value: str) -> bool:
    return bool(LIKELY_INGREDIENT_AMOUNT.search(value) or LIKELY_INGREDIENT_UNIT.search(value))


def likely_instruction(value: str) -> bool:
    return bool(LIKELY_INSTRUCTION_NUMBER.match(value) or LIKELY_INSTRUCTION_VERB.search(value))


def _page_title(document: Document, html: str) -> Optional[str]:
    title = normalize_text(document.short_title())
    if title and title != NO_TITLE:
        return title
    heading = BeautifulSoup(html, "lxml").find("h1")
    return normalize_text(heading.get_text(" ")) or None if heading is not None else None


def extract_recipe_from_readability(html: str, source_url: str) -> Optional[ReadabilityDraft]:
    """Guess recipe sections from the readable article; None when no article is found."""
    if not html or not html.strip():
        return None
    document = Document(html, url=source_url)
    try:
        summary = document.summary(html_partial=True)
    except Unparseable as exc:
        logger.warning("Readability could not parse %s: %s", source_url, exc)
        return None

    article = BeautifulSoup(summary, "lxml")
    lines = [line for line in (normalize_text(part) for part in article.get_text("\n").split("\n")) if line]

    ingredients: List[str] = []
    instructions: List[str] = []
    notes: List[str] = []
    section: Optional[str] = None

    for line in lines:
        if INGREDIENT_HEADING.match(line):
            section = "ingredients"
            continue
        if INSTRUCTION_HEADING.match(line):
            section = "instructions"
            continue
        if NOTE_HEADING.match(line):
            section = "notes"
            continue

        cleaned = normalize_list_line(line)
        if not cleaned:
            continue

        if section == "ingredients":
            ingredients.append(cleaned)
        elif section == "instructions":
            instructions.append(cleaned)
        elif section == "notes":
            notes.append(cleaned)
        elif likely_ingredient(cleaned) and len(ingredients) < MAX_GUESSED_LINES:
            ingredients.append(cleaned)
        elif likely_instruction(cleaned) and len(instructions) < MAX_GUESSED_LINES:
            instructions.append(cleaned)

    first_paragraph = article.find("p")
    image = article.find("img", src=True)

    draft = ReadabilityDraft(
        title=_page_title(document, html),
        description=normalize_text(first_paragraph.get_text(" ")) or None if first_paragraph is not None else None,
        image_url=to_optional_url(image["src"]) if image is not None else None,
        ingredients=dedupe_lines(ingredients),
        instructions=dedupe_lines(instructions),
        notes=dedupe_lines(notes),
    )
    logger.debug(
        "Readability draft for %s: ingredients=%d instructions=%d",
        source_url,
        len(draft.ingredients),
        len(draft.instructions),
    )
    return draft
