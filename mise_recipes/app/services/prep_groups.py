"""Prep groups (mise en place clusters) and ingredient section groups."""

import re
from typing import Any, Dict, List, NamedTuple, Optional

from mise_recipes.app.schemas.ingestion import PrepGroup
from mise_recipes.app.services.ingredient_classifier import extract_ingredient_keywords
from mise_recipes.app.services.text_normalizer import (
    clean_ingredient_line,
    clean_text,
    decode_entities,
    parse_lines,
)

# Participle found in an ingredient line -> group title.
PREP_HINTS: Dict[str, str] = {
    "sliced": "Slice",
    "chopped": "Chop",
    "diced": "Dice",
    "minced": "Mince",
    "grated": "Grate",
    "shredded": "Shred",
    "peeled": "Peel",
    "crushed": "Crush",
    "julienned": "Julienne",
    "halved": "Halve",
    "quartered": "Quarter",
    "cubed": "Cube",
    "trimmed": "Trim",
    "zested": "Zest",
    "juiced": "Juice",
    "rinsed": "Rinse",
    "drained": "Drain",
    "beaten": "Beat",
    "softened": "Soften",
    "melted": "Melt",
    "toasted": "Toast",
}

# Leading instruction verbs that describe prep rather than cooking.
PREP_VERBS = frozenset(
    {
        "slice", "chop", "dice", "mince", "grate", "shred", "peel", "crush", "cut",
        "trim", "halve", "quarter", "cube", "zest", "juice", "rinse", "drain",
        "soak", "marinate", "whisk", "beat",
    }
)

INGREDIENT_HEADING_WORDS = re.compile(
    r"^(sauce|dressing|marinade|filling|topping|crust|base|glaze|broth|stock|seasoning)$",
    re.IGNORECASE,
)


class CleanedGroups(NamedTuple):
    groups: List[PrepGroup]
    ingredients: List[str]
    notes: List[str]


def _prep_hint(line: str) -> Optional[str]:
    lowered = line.lower()
    for participle, title in PREP_HINTS.items():
        if re.search(rf"\b{participle}\b", lowered):
            return title
    return None


def _keyword_pattern(keyword: str) -> re.Pattern:
    return re.compile(rf"\b(?:{re.escape(keyword)}|{re.escape(keyword)}s|{re.escape(keyword)}es)\b", re.IGNORECASE)


def _instruction_title(instruction: str, index: int) -> str:
    words = re.findall(r"[A-Za-z]+", instruction)
    if words and words[0].lower() in PREP_VERBS:
        return words[0].capitalize()
    return f"Step {index + 1}"


def _add_to_group(groups: List[PrepGroup], title: str, line: str, step_index: Optional[int]) -> None:
    for group in groups:
        if group.title.lower() == title.lower():
            if line not in group.items:
                group.items.append(line)
            return
    groups.append(PrepGroup(title=title, items=[line], step_index=step_index))


def build_prep_groups_from_instructions(ingredients: List[str], instructions: List[str]) -> List[PrepGroup]:
    """Cluster ingredients by the prep action they need.

    Lines that already say how they are prepped ("1 onion, sliced") are grouped by
    that action. The rest attach to the first instruction mentioning them, titled by
    the instruction's prep verb or ``Step N``. Anything left over lands in
    ``Other Prep``, but only when at least one group was formed.
    """
    if not ingredients or not instructions:
        return []

    groups: List[PrepGroup] = []
    assigned: set = set()

    for line in ingredients:
        hint = _prep_hint(line)
        if hint:
            _add_to_group(groups, hint, line, None)
            assigned.add(line)

    patterns = {
        line: [_keyword_pattern(keyword) for keyword in extract_ingredient_keywords(line)]
        for line in ingredients
        if line not in assigned
    }
    for index, instruction in enumerate(instructions):
        for line, line_patterns in patterns.items():
            if line in assigned:
                continue
            if any(pattern.search(instruction) for pattern in line_patterns):
                _add_to_group(groups, _instruction_title(instruction, index), line, index)
                assigned.add(line)

    if not groups:
        return []

    remaining = [line for line in ingredients if line not in assigned]
    if remaining:
        groups.append(PrepGroup(title="Other Prep", items=remaining, source_group=False))
    return groups


def build_prep_groups(ingredients: List[str]) -> List[PrepGroup]:
    if not ingredients:
        return []
    return [PrepGroup(title="Prep", items=list(ingredients))]


def coerce_string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [entry.strip() for entry in value if isinstance(entry, str) and entry.strip()]


def coerce_prep_groups(value: Any) -> List[PrepGroup]:
    """Decode stored prep groups, skipping entries without a title or items."""
    if not isinstance(value, list):
        return []
    groups: List[PrepGroup] = []
    for entry in value:
        if not isinstance(entry, dict):
            continue
        title = entry.get("title") if isinstance(entry.get("title"), str) else ""
        items = coerce_string_list(entry.get("items"))
        if not title or not items:
            continue
        step_index = entry.get("stepIndex", entry.get("step_index"))
        source_group = entry.get("sourceGroup", entry.get("source_group"))
        groups.append(
            PrepGroup(
                title=title,
                items=items,
                step_index=step_index if isinstance(step_index, int) and not isinstance(step_index, bool) else None,
                source_group=source_group if isinstance(source_group, bool) else None,
            )
        )
    return groups


def serialize_prep_groups_to_text(groups: List[PrepGroup]) -> str:
    blocks = []
    for group in groups:
        item_lines = "\n".join(f"- {item}" for item in group.items)
        blocks.append(f"{group.title}\n{item_lines}")
    return "\n\n".join(blocks)


def parse_prep_groups_from_text(text: str) -> List[PrepGroup]:
    groups: List[PrepGroup] = []
    current: Optional[PrepGroup] = None
    for line in parse_lines(text):
        is_item = line.startswith(("-", "*"))
        cleaned = re.sub(r"^[-*]\s*", "", line).strip()
        if not cleaned:
            continue
        if is_item:
            if current is None:
                current = PrepGroup(title="Prep", items=[])
                groups.append(current)
            current.items.append(cleaned)
        else:
            current = PrepGroup(title=cleaned, items=[])
            groups.append(current)
    return [group for group in groups if group.items]


def is_ingredient_group_title(value: str) -> bool:
    normalized = (value or "").strip().lower()
    if not normalized:
        return False
    if re.search(r"\b(prep|preparation)\b", normalized):
        return False
    if re.match(r"^step\s+\d+", normalized):
        return False
    return True


def normalize_ingredient_heading(value: str) -> str:
    return re.sub(r":\s*$", "", clean_text(decode_entities(value)))


def is_likely_ingredient_heading(value: str) -> bool:
    """Guess whether a line inside an ingredient list is a sub-heading ("For the sauce:")."""
    normalized = clean_text(decode_entities(value))
    if not normalized or re.search(r"\d", normalized):
        return False
    words = normalized.split()
    if re.search(r":\s*$", normalized):
        return True
    if re.match(r"^(for|to)\b", normalized, re.IGNORECASE):
        return True
    letters = re.sub(r"[^A-Za-z]", "", normalized)
    uppercase = len(re.sub(r"[^A-Z]", "", letters))
    upper_ratio = uppercase / len(letters) if letters else 0
    if upper_ratio >= 0.8 and len(words) >= 2 and len(letters) >= 6:
        return True
    return len(words) == 1 and bool(INGREDIENT_HEADING_WORDS.match(normalized))


def extract_ingredient_groups_from_lines(lines: List[str]) -> List[PrepGroup]:
    """Split a flat ingredient list on sub-headings; leading ungrouped lines go last."""
    groups: List[PrepGroup] = []
    ungrouped: List[str] = []
    current: Optional[PrepGroup] = None

    for line in lines:
        normalized = re.sub(r"^[-*]\s*", "", clean_text(decode_entities(line)))
        if not normalized:
            continue
        if is_likely_ingredient_heading(normalized):
            current = PrepGroup(title=normalize_ingredient_heading(normalized), items=[])
            groups.append(current)
            continue
        if current is not None:
            current.items.append(normalized)
        else:
            ungrouped.append(normalized)

    if groups and ungrouped:
        groups.append(PrepGroup(title="Other Ingredients", items=ungrouped))
    return [group for group in groups if group.items]


def clean_ingredient_groups(groups: List[PrepGroup]) -> CleanedGroups:
    cleaned_groups: List[PrepGroup] = []
    ingredients: List[str] = []
    notes: List[str] = []

    for group in groups:
        title = normalize_ingredient_heading(group.title)
        items: List[str] = []
        for item in group.items:
            result = clean_ingredient_line(re.sub(r"^[-*]\s*", "", item).strip())
            if result.line:
                items.append(result.line)
                ingredients.append(result.line)
            notes.extend(result.notes)
        if title and items:
            cleaned_groups.append(PrepGroup(title=title, items=items))

    return CleanedGroups(groups=cleaned_groups, ingredients=ingredients, notes=notes)
