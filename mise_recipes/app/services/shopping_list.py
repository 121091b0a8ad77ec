"""Aggregate ingredient lines from several recipes into a categorized shopping list."""

import logging
from typing import Dict, List, Mapping, Optional

from mise_recipes.app.schemas.shopping import (
    CATEGORY_ORDER,
    ShoppingCategory,
    ShoppingIngredientEntry,
    ShoppingItem,
)
from mise_recipes.app.services.ingredient_classifier import classify_ingredient
from mise_recipes.app.services.quantity_parser import summarize_amounts
from mise_recipes.app.services.shopping_location import (
    build_shopping_location_preference_key,
    normalize_shopping_location,
)

logger = logging.getLogger(__name__)


class _Accumulator:
    def __init__(self, key: str, category: str) -> None:
        self.key = key
        self.category = category
        self.count = 0
        self.amount_lines: List[str] = []
        self.recipes: set = set()

    def add(self, line: str, category: str, recipe_title: Optional[str]) -> None:
        self.count += 1
        self.amount_lines.append(line)
        if recipe_title:
            self.recipes.add(recipe_title)
        # Other can be upgraded by a later, better classified mention, never the reverse.
        if self.category == "Other" and category != "Other":
            self.category = category


def title_case(value: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in value.split(" ") if word)


def build_shopping_list(
    entries: List[ShoppingIngredientEntry],
    location_preferences: Optional[Mapping[str, str]] = None,
) -> List[ShoppingCategory]:
    """Group, count and sum ingredient mentions by canonical ingredient.

    ``location_preferences`` maps ``build_shopping_location_preference_key`` values
    to a location; items without a preference get the default location.
    """
    accumulators: Dict[str, _Accumulator] = {}

    for entry in entries:
        trimmed = (entry.line or "").strip()
        if not trimmed:
            continue
        classification = classify_ingredient(trimmed)
        key = classification.canonical or trimmed.lower()
        accumulator = accumulators.get(key)
        if accumulator is None:
            accumulator = _Accumulator(key, classification.category)
            accumulators[key] = accumulator
        accumulator.add(trimmed, classification.category, entry.recipe_title)

    preferences = location_preferences or {}
    buckets: Dict[str, List[ShoppingItem]] = {}
    for accumulator in accumulators.values():
        line = title_case(accumulator.key)
        location = preferences.get(build_shopping_location_preference_key(accumulator.category, line))
        buckets.setdefault(accumulator.category, []).append(
            ShoppingItem(
                line=line,
                count=accumulator.count,
                amount_summary=summarize_amounts(accumulator.amount_lines),
                recipes=sorted(accumulator.recipes),
                location=normalize_shopping_location(location),
            )
        )

    logger.debug("Built shopping list with %d items from %d entries", len(accumulators), len(entries))

    categories: List[ShoppingCategory] = []
    for name in CATEGORY_ORDER:
        items = buckets.get(name)
        if not items:
            continue
        items.sort(key=lambda item: item.line)
        categories.append(ShoppingCategory(name=name, items=items))
    return categories
