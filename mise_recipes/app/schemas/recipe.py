from typing import List, Optional

from pydantic import BaseModel, Field

from mise_recipes.app.schemas.ingestion import IngestionErrorCode, NormalizedRecipe


class StoredRecipe(NormalizedRecipe):
    id: str


class RecipeMetadataPatch(BaseModel):
    """Fields to backfill on re-import. ``None`` means leave untouched."""

    image_url: Optional[str] = None
    video_url: Optional[str] = None
    servings: Optional[int] = None
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    tags: Optional[List[str]] = None

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)

    def updated_fields(self) -> List[str]:
        return sorted(self.model_dump(exclude_none=True).keys())


class ImportResult(BaseModel):
    recipe_id: Optional[str] = None
    created: bool = False
    updated_fields: List[str] = Field(default_factory=list)
    failure_reason: Optional[IngestionErrorCode] = None
