from abc import ABC, abstractmethod
from typing import List, Optional

from mise_recipes.app.schemas.ingestion import NormalizedRecipe
from mise_recipes.app.schemas.recipe import RecipeMetadataPatch, StoredRecipe


class RecipeStore(ABC):
    @abstractmethod
    def find_by_source_urls(self, candidates: List[str]) -> Optional[StoredRecipe]:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    def create(self, recipe: NormalizedRecipe) -> StoredRecipe:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    def update_metadata(self, recipe_id: str, patch: RecipeMetadataPatch) -> StoredRecipe:  # pragma: no cover - interface
        raise NotImplementedError
