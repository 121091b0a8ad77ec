from typing import List, Optional

from pydantic import BaseModel, Field

from mise_recipes.app.schemas.ingestion import PrepGroup


class OcrLineAnalysis(BaseModel):
    cleaned: str
    keep: bool
    score: int
    anchor: bool


class ParsedOcrRecipe(BaseModel):
    title: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)
    servings: Optional[int] = None
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None


class OcrRecipePayload(BaseModel):
    title: str
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)
    servings: Optional[int] = None
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    prep_groups: List[PrepGroup] = Field(default_factory=list)
