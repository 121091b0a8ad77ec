"""Map raw ingredient lines to a shopping category and canonical name."""

import re
from functools import lru_cache
from typing import Dict, List, NamedTuple

from mise_recipes.app.schemas.shopping import IngredientClassification
from mise_recipes.app.services.ingredient_taxonomy import INGREDIENT_TAXONOMY

UNIT_WORDS = frozenset(
    {
        "g", "kg", "mg", "ml", "l", "oz", "lb", "lbs", "pound", "pounds",
        "tbsp", "tsp", "cup", "cups", "tablespoon", "tablespoons", "teaspoon", "teaspoons",
        "clove", "cloves", "pinch", "dash", "package", "packages", "can", "cans",
        "slice", "slices", "inch", "inches", "cm", "mm", "meter", "meters",
        "stalk", "stalks", "bunch", "bunches", "sprig", "sprigs",
    }
)

STOP_WORDS = frozenset(
    {
        "a", "an", "and", "or", "of", "the", "to", "with", "for", "each",
        "fresh", "freshly", "optional", "taste", "about", "approx", "roughly",
        "finely", "thinly", "thickly", "coarsely", "small", "medium", "large",
        "whole", "raw", "ripe", "extra", "virgin", "boneless", "skinless",
        "halved", "chopped", "diced", "minced", "sliced", "peeled", "grated",
        "shredded", "ground",
    }
)

# Adjectives that start many taxonomy phrases but say nothing about the ingredient.
DESCRIPTOR_WORDS = frozenset(
    {"red", "green", "yellow", "white", "black", "brown", "sweet", "baby", "dark", "light", "mixed"}
)

STORAGE_FORM_WORDS = frozenset({"can", "cans", "canned", "tinned", "dried", "jar", "jars", "jarred", "powder", "paste", "frozen"})

_QUANTITY_TOKEN = re.compile(r"^\d+(?:[./]\d+)?(?:g|kg|mg|ml|l|oz|lb|lbs)?$")
_MAX_NGRAM = 4


class TaxonomyIndex(NamedTuple):
    aliases: Dict[str, str]
    canonicals: Dict[str, str]
    categories: Dict[str, str]
    heads: Dict[str, str]


def singularize_token(token: str) -> str:
    if len(token) > 3 and token.endswith("ies"):
        return token[:-3] + "y"
    if len(token) > 3 and token.endswith("oes"):
        return token[:-2]
    if len(token) > 4 and token.endswith(("ches", "shes", "sses", "xes", "zes")):
        return token[:-2]
    if len(token) > 3 and token.endswith("s") and not token.endswith(("ss", "us", "is")):
        return token[:-1]
    return token


def normalize(value: str) -> str:
    """Lowercase, drop parenthesised asides and collapse punctuation to spaces.

    Commas survive so callers can split a line into descriptive segments.
    """
    lowered = (value or "").lower()
    lowered = re.sub(r"\([^)]*\)", " ", lowered)
    lowered = re.sub(r"[^a-z0-9.,/\s]", " ", lowered)
    lowered = re.sub(r"(?<!\d)[./]|[./](?!\d)", " ", lowered)
    return re.sub(r"\s+", " ", lowered).strip()


def tokenize(value: str) -> List[str]:
    return [singularize_token(token) for token in value.replace(",", " ").split() if token]


def normalize_phrase(value: str) -> str:
    return " ".join(tokenize(normalize(value)))


def is_quantity_token(token: str) -> bool:
    return token == "x" or bool(_QUANTITY_TOKEN.match(token))


def is_measure_token(token: str) -> bool:
    return is_quantity_token(token) or token in UNIT_WORDS


def strip_leading_measure_tokens(tokens: List[str]) -> List[str]:
    index = 0
    while index < len(tokens) and is_measure_token(tokens[index]):
        index += 1
    return tokens[index:]


@lru_cache
def get_taxonomy_index() -> TaxonomyIndex:
    """Build the lookup tables once; the first entry to claim a key wins."""
    aliases: Dict[str, str] = {}
    canonicals: Dict[str, str] = {}
    categories: Dict[str, str] = {}
    heads: Dict[str, str] = {}

    for entry in INGREDIENT_TAXONOMY:
        canonical = normalize_phrase(entry.canonical)
        canonicals.setdefault(canonical, canonical)
        categories.setdefault(canonical, entry.category)
        head = canonical.split(" ")[0]
        if head not in STOP_WORDS and head not in DESCRIPTOR_WORDS:
            heads.setdefault(head, canonical)
        for alias in entry.aliases:
            normalized_alias = normalize_phrase(alias)
            aliases.setdefault(normalized_alias, canonical)
            alias_tokens = normalized_alias.split(" ")
            if len(alias_tokens) == 1 and normalized_alias not in STOP_WORDS:
                heads.setdefault(normalized_alias, canonical)

    return TaxonomyIndex(aliases=aliases, canonicals=canonicals, categories=categories, heads=heads)


def build_candidate_phrases(line: str) -> List[str]:
    """Phrases to try, most specific first: full line, segments, measure-stripped, n-grams."""
    normalized = normalize(line)
    candidates: List[str] = []

    def push(tokens: List[str]) -> None:
        phrase = " ".join(tokens)
        if phrase and phrase not in candidates:
            candidates.append(phrase)

    push(tokenize(normalized))
    for segment in normalized.split(","):
        tokens = tokenize(segment)
        if not tokens:
            continue
        push(tokens)
        stripped = strip_leading_measure_tokens(tokens)
        push(stripped)
        for size in range(min(_MAX_NGRAM, len(stripped)), 0, -1):
            for start in range(0, len(stripped) - size + 1):
                push(stripped[start : start + size])
    return candidates


def fallback_canonical(line: str) -> str:
    """Deduplicated tokens after the leading measure, or the normalized line if none survive."""
    normalized = normalize(line)
    tokens: List[str] = []
    for token in strip_leading_measure_tokens(tokenize(normalized)):
        if token in STOP_WORDS or len(token) <= 1:
            continue
        if token not in tokens:
            tokens.append(token)
    return " ".join(tokens) or normalized


def _apply_storage_override(
    classification: IngredientClassification, tokens: List[str]
) -> IngredientClassification:
    if classification.category == "Produce" and any(token in STORAGE_FORM_WORDS for token in tokens):
        return IngredientClassification(
            category="Canned & Jarred",
            canonical=classification.canonical,
            matched_by="override",
        )
    return classification


def classify_ingredient(line: str) -> IngredientClassification:
    """Classify a raw ingredient line.

    Lookup order is alias then canonical for each candidate phrase, then the first
    candidate whose leading word heads a known term. Produce in a storage form
    (canned, dried, frozen, jarred, ...) is re-filed under "Canned & Jarred".
    """
    if not (line or "").strip():
        return IngredientClassification(category="Other", canonical="", matched_by="fallback")

    index = get_taxonomy_index()
    raw_tokens = normalize(line).replace(",", " ").split()
    candidates = build_candidate_phrases(line)

    for candidate in candidates:
        if candidate in index.aliases:
            canonical = index.aliases[candidate]
            return _apply_storage_override(
                IngredientClassification(
                    category=index.categories[canonical], canonical=canonical, matched_by="alias"
                ),
                raw_tokens,
            )
        if candidate in index.canonicals:
            return _apply_storage_override(
                IngredientClassification(
                    category=index.categories[candidate], canonical=candidate, matched_by="canonical"
                ),
                raw_tokens,
            )

    for candidate in candidates:
        head = candidate.split(" ")[0]
        if head in index.heads:
            canonical = index.heads[head]
            return _apply_storage_override(
                IngredientClassification(
                    category=index.categories[canonical], canonical=canonical, matched_by="fallback"
                ),
                raw_tokens,
            )

    return IngredientClassification(category="Other", canonical=fallback_canonical(line), matched_by="fallback")


def extract_ingredient_keywords(line: str) -> List[str]:
    """Content words before the first comma, singular, without measures or stop words."""
    keywords: List[str] = []
    head = normalize(line).split(",")[0]
    for token in tokenize(head):
        if is_measure_token(token) or token in STOP_WORDS or len(token) <= 2:
            continue
        if token[0].isdigit():
            continue
        if token not in keywords:
            keywords.append(token)
    return keywords
