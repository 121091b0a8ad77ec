"""Shopping location tags and the keys used to remember them per item."""

import re
from typing import List, Optional

from mise_recipes.app.core.config import get_settings

DEFAULT_SHOPPING_LOCATIONS: List[str] = ["Woolies", "Tong Li", "Dan Murphys", "Butcher"]


def normalize_shopping_text(value: str) -> str:
    lowered = re.sub(r"[^a-z0-9\s]", " ", (value or "").lower())
    return re.sub(r"\s+", " ", lowered).strip()


def default_shopping_location() -> str:
    return get_settings().default_shopping_location


def normalize_shopping_location(value: Optional[str]) -> str:
    """Collapse whitespace; blank or missing values become the default location."""
    trimmed = str(value).strip() if value is not None else ""
    if not trimmed:
        return default_shopping_location()
    return re.sub(r"\s+", " ", trimmed)


def build_shopping_item_key(category: str, line: str, manual: bool) -> str:
    prefix = "manual" if manual else "auto"
    return f"{prefix}-{normalize_shopping_text(category)}-{normalize_shopping_text(line)}"


def build_shopping_location_preference_key(category: str, line: str) -> str:
    return f"{normalize_shopping_text(category)}-{normalize_shopping_text(line)}"
