from typing import List, Literal, Optional

from pydantic import BaseModel, Field

IngredientCategory = Literal[
    "Produce",
    "Meat",
    "Dairy",
    "Canned & Jarred",
    "Dry Goods",
    "Pantry",
    "Other",
]

# Display order for shopping lists.
CATEGORY_ORDER: List[str] = [
    "Produce",
    "Meat",
    "Dairy",
    "Canned & Jarred",
    "Dry Goods",
    "Pantry",
    "Other",
]

MatchProvenance = Literal["alias", "canonical", "override", "fallback"]


class IngredientClassification(BaseModel):
    category: IngredientCategory
    canonical: str
    matched_by: MatchProvenance


class ShoppingIngredientEntry(BaseModel):
    line: str
    recipe_title: Optional[str] = None


class ShoppingItem(BaseModel):
    line: str
    count: int
    amount_summary: Optional[str] = None
    recipes: List[str] = Field(default_factory=list)
    location: str


class ShoppingCategory(BaseModel):
    name: str
    items: List[ShoppingItem] = Field(default_factory=list)
