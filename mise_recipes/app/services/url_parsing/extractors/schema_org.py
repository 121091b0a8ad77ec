"""Schema.org JSON-LD recipe extraction."""

import json
import logging
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from mise_recipes.app.services.text_normalizer import decode_entities, parse_tags
from mise_recipes.app.services.url_parsing.extractors.page_metadata import (
    extract_ingredient_groups_from_html,
)
from mise_recipes.app.services.url_parsing.models import (
    HtmlRecipeDraft,
    InstructionNode,
    InstructionSection,
    PlainStep,
)
from mise_recipes.app.services.url_parsing.parsing_utils import (
    extract_image,
    normalize_text,
    parse_duration_minutes,
    parse_yield,
    to_optional_url,
)

logger = logging.getLogger(__name__)


def parse_json_ld_blocks(html: str) -> List[Any]:
    """Parse every ``application/ld+json`` script; malformed blocks are skipped."""
    soup = BeautifulSoup(html or "", "lxml")
    scripts = soup.find_all("script", attrs={"type": "application/ld+json"})
    logger.debug("Found %d JSON-LD script blocks", len(scripts))

    blocks: List[Any] = []
    for idx, script in enumerate(scripts):
        raw_json = (script.string or script.get_text() or "").strip()
        if not raw_json:
            continue
        try:
            blocks.append(json.loads(raw_json))
        except json.JSONDecodeError as exc:
            logger.warning("JSON-LD block %d failed to parse: %s (first 200 chars: %s)", idx, exc, raw_json[:200])
    return blocks


def is_recipe_type(value: Any) -> bool:
    if isinstance(value, str):
        return value.lower() == "recipe"
    if isinstance(value, list):
        return any(isinstance(entry, str) and entry.lower() == "recipe" for entry in value)
    return False


def collect_recipe_nodes(node: Any, results: List[Dict[str, Any]]) -> None:
    """Depth-first walk collecting every object typed as a Recipe."""
    if isinstance(node, list):
        for entry in node:
            collect_recipe_nodes(entry, results)
        return
    if not isinstance(node, dict):
        return
    if is_recipe_type(node.get("@type")):
        results.append(node)
    for value in node.values():
        if isinstance(value, (dict, list)):
            collect_recipe_nodes(value, results)


def split_extracted_text(value: str) -> List[str]:
    return [line.strip() for line in decode_entities(value).split("\n") if line.strip()]


def parse_instruction_nodes(value: Any) -> List[InstructionNode]:
    """Turn ``recipeInstructions`` into plain steps and named sections."""
    if not value:
        return []
    if isinstance(value, str):
        return [PlainStep(text=line) for line in split_extracted_text(value)]
    if isinstance(value, list):
        nodes: List[InstructionNode] = []
        for entry in value:
            nodes.extend(parse_instruction_nodes(entry))
        return nodes
    if not isinstance(value, dict):
        return []

    name = value.get("name")
    text = value.get("text")
    if isinstance(name, str) and not isinstance(text, str):
        children = value.get("itemListElement") or value.get("recipeInstructions") or value.get("steps")
        steps = flatten_instruction_nodes(parse_instruction_nodes(children))
        return [InstructionSection(name=normalize_text(name) or None, steps=[PlainStep(text=step) for step in steps])]
    if isinstance(text, str):
        return parse_instruction_nodes(text)
    for key in ("recipeInstructions", "itemListElement", "steps"):
        if value.get(key):
            return parse_instruction_nodes(value[key])
    return []


def flatten_instruction_nodes(nodes: List[InstructionNode]) -> List[str]:
    """Steps in document order; a section without steps contributes its name."""
    lines: List[str] = []
    for node in nodes:
        if isinstance(node, InstructionSection):
            if node.steps:
                lines.extend(step.text for step in node.steps)
            elif node.name:
                lines.extend(split_extracted_text(node.name))
        else:
            lines.append(node.text)
    return lines


def extract_text_list(value: Any) -> List[str]:
    return flatten_instruction_nodes(parse_instruction_nodes(value))


def extract_ingredient_value(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return split_extracted_text(value)
    if isinstance(value, list):
        lines: List[str] = []
        for entry in value:
            lines.extend(extract_ingredient_value(entry))
        return lines
    if not isinstance(value, dict):
        return []

    name = value.get("name")
    amount = value.get("value")
    if isinstance(name, str) and isinstance(amount, str):
        quantity, label = normalize_text(amount), normalize_text(name)
        return [f"{quantity} {label}".strip()] if quantity and label else []
    if isinstance(name, str) and isinstance(value.get("unitText"), str):
        parts = [
            normalize_text(amount) if isinstance(amount, str) else "",
            normalize_text(value["unitText"]),
            normalize_text(name),
        ]
        combined = " ".join(part for part in parts if part)
        return [combined] if combined else []
    for key in ("recipeIngredient", "ingredients", "itemListElement"):
        if value.get(key):
            return extract_ingredient_value(value[key])
    if isinstance(value.get("text"), str):
        return extract_ingredient_value(value["text"])
    return []


def extract_video_url(value: Any) -> Optional[str]:
    if not value:
        return None
    if isinstance(value, str):
        return to_optional_url(value)
    if isinstance(value, list):
        for entry in value:
            found = extract_video_url(entry)
            if found:
                return found
        return None
    if isinstance(value, dict):
        for key in ("embedUrl", "contentUrl", "url", "@id"):
            if value.get(key):
                return extract_video_url(value[key])
    return None


def _extract_tags(keywords: Any) -> List[str]:
    if isinstance(keywords, str):
        return parse_tags(normalize_text(keywords))
    return extract_text_list(keywords)


def extract_recipe_from_html(html: str, json_ld_blocks: Optional[List[Any]] = None) -> Optional[HtmlRecipeDraft]:
    """Build a draft from the first usable Recipe node; None when the page has none."""
    blocks = json_ld_blocks if json_ld_blocks else parse_json_ld_blocks(html)
    recipe_nodes: List[Dict[str, Any]] = []
    for block in blocks:
        collect_recipe_nodes(block, recipe_nodes)

    recipe = next(
        (
            node
            for node in recipe_nodes
            if any(node.get(key) for key in ("recipeIngredient", "ingredients", "recipeInstructions", "name", "headline"))
        ),
        None,
    )
    if recipe is None:
        logger.info("No schema.org Recipe node found (%d JSON-LD blocks)", len(blocks))
        return None

    ingredient_source = recipe.get("recipeIngredient")
    if ingredient_source is None:
        ingredient_source = recipe.get("ingredients")

    draft = HtmlRecipeDraft(
        title=normalize_text(recipe.get("name")) or normalize_text(recipe.get("headline")) or None,
        description=normalize_text(recipe.get("description")) or None,
        image_url=extract_image(recipe.get("image")),
        video_url=extract_video_url(recipe.get("video") or recipe.get("videoUrl")),
        ingredients=extract_ingredient_value(ingredient_source),
        ingredient_groups=extract_ingredient_groups_from_html(html),
        instructions=extract_text_list(recipe.get("recipeInstructions")),
        tags=_extract_tags(recipe.get("keywords")),
        servings=parse_yield(recipe.get("recipeYield")),
        prep_time=parse_duration_minutes(recipe.get("prepTime")),
        cook_time=parse_duration_minutes(recipe.get("cookTime")),
    )
    logger.info(
        "Schema.org recipe: title=%s, ingredients=%d, steps=%d",
        (draft.title or "None")[:50],
        len(draft.ingredients),
        len(draft.instructions),
    )
    return draft
