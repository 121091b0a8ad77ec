"""Turn raw OCR text from a recipe photo into recipe sections.

OCR output is noisier than scraped HTML: stray glyphs, page furniture, half-read
words. Each line is scored on recipe-like signals (units, cooking verbs, section
headings, metadata words) and penalised for symbol soup and fragmentary tokens.
Lines outside the window spanned by the first and last confident line are dropped
as header/footer noise before the usual heading-driven section split runs.
"""

import logging
import re
from typing import List, Optional

from mise_recipes.app.schemas.ocr import OcrLineAnalysis, OcrRecipePayload, ParsedOcrRecipe
from mise_recipes.app.services.prep_groups import build_prep_groups, build_prep_groups_from_instructions
from mise_recipes.app.services.recipe_notes import dedupe_lines
from mise_recipes.app.services.text_normalizer import (
    FRACTION_MAP,
    clean_ingredient_lines,
    clean_instruction_lines,
    clean_text_lines,
)

logger = logging.getLogger(__name__)

HEADING_MAP = {
    "ingredients": "ingredients",
    "ingredient": "ingredients",
    "what you need": "ingredients",
    "instructions": "instructions",
    "direction": "instructions",
    "directions": "instructions",
    "method": "instructions",
    "steps": "instructions",
    "preparation": "instructions",
    "notes": "notes",
    "tips": "notes",
    "chef s notes": "notes",
}

OCR_UNIT_WORDS = [
    "g", "kg", "mg", "ml", "l", "oz", "lb", "lbs", "pound", "pounds", "tbsp", "tsp",
    "cup", "cups", "tablespoon", "tablespoons", "teaspoon", "teaspoons", "clove", "cloves",
    "pinch", "dash", "package", "packages", "can", "cans", "slice", "slices", "inch", "inches",
]

OCR_VERBS = [
    "add", "stir", "mix", "cook", "bake", "heat", "simmer", "boil", "saute", "whisk",
    "combine", "pour", "bring", "place", "transfer", "serve", "fold", "reduce", "season", "drain",
]

OCR_SHORT_WORDS = frozenset(
    {
        "a", "am", "an", "as", "at", "be", "by", "do", "go", "he", "if", "in", "is",
        "it", "me", "my", "no", "of", "oh", "on", "or", "so", "to", "up", "us", "we",
    }
)

UNIT_PATTERN = re.compile(rf"\b({'|'.join(OCR_UNIT_WORDS)})\b", re.IGNORECASE)
VERB_PATTERN = re.compile(rf"\b({'|'.join(OCR_VERBS)})\b", re.IGNORECASE)
META_PATTERN = re.compile(r"\b(serves?|yield|prep|cook|total|time)\b", re.IGNORECASE)
PAGE_PATTERN = re.compile(r"\bpage\s*\d+\b", re.IGNORECASE)
ANCHOR_SCORE = 2


def _normalize(value: str) -> str:
    lowered = re.sub(r"[^a-z0-9\s]", " ", value.lower())
    return re.sub(r"\s+", " ", lowered).strip()


def parse_heading(line: str) -> Optional[str]:
    return HEADING_MAP.get(_normalize(line))


def parse_servings(line: str) -> Optional[int]:
    match = re.search(r"serves\s+(\d+)", line, re.IGNORECASE) or re.search(r"yield\s+(\d+)", line, re.IGNORECASE)
    return int(match.group(1)) if match else None


def parse_minutes(line: str, label: str) -> Optional[int]:
    match = re.search(rf"{label}[^\d]*(\d+)", line, re.IGNORECASE)
    return int(match.group(1)) if match else None


def _replace_ocr_characters(value: str) -> str:
    cleaned = value
    for glyph, replacement in FRACTION_MAP.items():
        cleaned = cleaned.replace(glyph, replacement)
    cleaned = re.sub("[‘’]", "'", cleaned)
    cleaned = re.sub("[“”]", '"', cleaned)
    return cleaned.replace("°", "")


def _strip_leading_noise_tokens(tokens: List[str]) -> List[str]:
    start = 0
    while start < len(tokens):
        token = tokens[start]
        lower = token.lower()
        if re.fullmatch(r"[^A-Za-z0-9]+", token):
            start += 1
            continue
        if re.fullmatch(r"[A-Za-z]{1,2}", token) and lower not in OCR_SHORT_WORDS and lower not in OCR_UNIT_WORDS:
            start += 1
            continue
        break
    return tokens[start:]


def normalize_ocr_line(line: str) -> str:
    normalized = _replace_ocr_characters(line or "")
    normalized = re.sub(r"\|+", " ", normalized)
    normalized = re.sub(r"_{2,}", " ", normalized)
    normalized = re.sub(r"[^\x20-\x7E]", " ", normalized)
    normalized = re.sub(r"\s+", " ", normalized).strip()
    if not normalized:
        return ""
    tokens = _strip_leading_noise_tokens(normalized.split(" "))
    return " ".join(token for token in tokens if not re.fullmatch(r"[^A-Za-z0-9]+", token)).strip()


def analyze_ocr_line(line: str) -> OcrLineAnalysis:
    cleaned = normalize_ocr_line(line)
    if not cleaned or PAGE_PATTERN.search(cleaned):
        return OcrLineAnalysis(cleaned=cleaned, keep=False, score=-1, anchor=False)

    total_chars = len(re.sub(r"\s+", "", cleaned))
    letters = len(re.findall(r"[A-Za-z]", cleaned))
    digits = len(re.findall(r"\d", cleaned))
    symbols = len(re.findall(r"[^A-Za-z0-9\s]", cleaned))
    symbol_ratio = symbols / total_chars if total_chars else 1
    tokens = cleaned.split()
    short_ratio = sum(1 for token in tokens if len(token) <= 2) / len(tokens) if tokens else 1
    single_char_ratio = sum(1 for token in tokens if len(token) == 1) / len(tokens) if tokens else 0

    has_unit = bool(UNIT_PATTERN.search(cleaned))
    has_verb = bool(VERB_PATTERN.search(cleaned))
    is_heading = parse_heading(cleaned) is not None
    has_meta = bool(META_PATTERN.search(cleaned))
    structural = has_unit or is_heading or has_meta

    score = 0
    if is_heading:
        score += 3
    if has_meta:
        score += 2
    if has_unit:
        score += 2
    if has_verb:
        score += 2
    if letters >= 6:
        score += 1
    if len(cleaned) >= 24:
        score += 1
    if digits > 0 and letters > 0:
        score += 1
    if digits == 0 and len(tokens) <= 3 and letters >= 4:
        score += 1

    if symbol_ratio > 0.35:
        score -= 2
    if short_ratio > 0.6 and not structural:
        score -= 2
    if single_char_ratio > 0.4 and not structural:
        score -= 2
    if len(cleaned) <= 3 and not has_unit and not has_meta:
        score -= 2

    anchor = score >= ANCHOR_SCORE
    single_word_keep = len(tokens) == 1 and letters >= 4 and symbol_ratio <= 0.1
    if anchor or single_word_keep:
        return OcrLineAnalysis(cleaned=cleaned, keep=True, score=score, anchor=anchor)
    if score < 1:
        return OcrLineAnalysis(cleaned=cleaned, keep=False, score=score, anchor=False)

    strong_tokens = sum(1 for token in tokens if len(token) >= 3)
    keep = len(cleaned) >= 20 or strong_tokens >= 2
    return OcrLineAnalysis(cleaned=cleaned, keep=keep, score=score, anchor=False)


def clean_ocr_text(text: str) -> str:
    analyses = [analyze_ocr_line(line) for line in re.split(r"\r?\n", text or "")]
    anchors = [index for index, analysis in enumerate(analyses) if analysis.anchor]
    if len(anchors) >= 2:
        window = analyses[anchors[0] : anchors[-1] + 1]
    else:
        window = analyses
    kept = [analysis.cleaned for analysis in window if analysis.keep]
    logger.debug("OCR cleanup kept %d of %d lines", len(kept), len(analyses))
    return "\n".join(kept).strip()


def parse_ocr_text(text: str) -> ParsedOcrRecipe:
    lines = [line.strip() for line in re.split(r"\r?\n", clean_ocr_text(text)) if line.strip()]
    title: Optional[str] = None
    section: Optional[str] = None
    ingredients: List[str] = []
    instructions: List[str] = []
    notes: List[str] = []
    servings: Optional[int] = None
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None

    for index, line in enumerate(lines):
        heading = parse_heading(line)
        if heading:
            section = heading
            continue
        if title is None and index == 0:
            title = line
            continue

        if servings is None:
            servings = parse_servings(line)
        if prep_time is None:
            prep_time = parse_minutes(line, "prep")
        if cook_time is None:
            cook_time = parse_minutes(line, "cook")

        if section == "ingredients":
            ingredients.append(re.sub(r"^[-*]\s*", "", line))
        elif section == "instructions":
            instructions.append(re.sub(r"^\d+[).]?\s*", "", line))
        elif section == "notes":
            notes.append(re.sub(r"^[-*]\s*", "", line))

    cleaned_ingredients = clean_ingredient_lines(ingredients)
    cleaned_instructions = clean_instruction_lines(instructions)
    cleaned_notes = clean_text_lines(notes)

    return ParsedOcrRecipe(
        title=title,
        ingredients=cleaned_ingredients.lines,
        instructions=cleaned_instructions.lines,
        notes=dedupe_lines(cleaned_ingredients.notes + cleaned_instructions.notes + cleaned_notes),
        servings=servings,
        prep_time=prep_time,
        cook_time=cook_time,
    )


def build_ocr_recipe_payload(text: str) -> OcrRecipePayload:
    parsed = parse_ocr_text(text)
    prep_groups = build_prep_groups_from_instructions(parsed.ingredients, parsed.instructions)
    if not prep_groups:
        prep_groups = build_prep_groups(parsed.ingredients)

    return OcrRecipePayload(
        title=parsed.title or "Untitled Recipe",
        ingredients=parsed.ingredients,
        instructions=parsed.instructions,
        notes=parsed.notes,
        servings=parsed.servings,
        prep_time=parsed.prep_time,
        cook_time=parsed.cook_time,
        prep_groups=prep_groups,
    )
