from typing import Dict, List, Optional
from uuid import uuid4

from mise_recipes.app.schemas.ingestion import NormalizedRecipe
from mise_recipes.app.schemas.recipe import RecipeMetadataPatch, StoredRecipe
from mise_recipes.app.services.storage.base import RecipeStore


class InMemoryRecipeStore(RecipeStore):
    def __init__(self):
        self.recipes: Dict[str, StoredRecipe] = {}

    def find_by_source_urls(self, candidates: List[str]) -> Optional[StoredRecipe]:
        wanted = set(candidates)
        for recipe in self.recipes.values():
            if recipe.source_url in wanted:
                return recipe
        return None

    def create(self, recipe: NormalizedRecipe) -> StoredRecipe:
        stored = StoredRecipe(id=uuid4().hex, **recipe.model_dump())
        self.recipes[stored.id] = stored
        return stored

    def update_metadata(self, recipe_id: str, patch: RecipeMetadataPatch) -> StoredRecipe:
        existing = self.recipes.get(recipe_id)
        if existing is None:
            raise KeyError(recipe_id)
        updated = existing.model_copy(update=patch.model_dump(exclude_none=True))
        self.recipes[recipe_id] = updated
        return updated
