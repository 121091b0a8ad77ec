from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class IngestionStage(str, Enum):
    MARKDOWN = "markdown"
    HTTP_HTML = "http_html"
    RENDERED_HTML = "rendered_html"
    READABILITY = "readability"


# Tie-break only; the quality score always ranks first.
STAGE_PRIORITY = {
    IngestionStage.MARKDOWN: 4,
    IngestionStage.HTTP_HTML: 3,
    IngestionStage.RENDERED_HTML: 2,
    IngestionStage.READABILITY: 1,
}


class IngestionErrorCode(str, Enum):
    FETCH_FAILED = "fetch_failed"
    BLOCKED = "blocked"
    TIMEOUT = "timeout"
    NO_RECIPE_DATA = "no_recipe_data"
    INSUFFICIENT_STEPS = "insufficient_steps"
    PARSE_FAILED = "parse_failed"
    DISABLED = "disabled"


class PrepGroup(BaseModel):
    title: str
    items: List[str] = Field(default_factory=list)
    step_index: Optional[int] = None
    source_group: Optional[bool] = None


def _drop_blank_lines(value: List[str]) -> List[str]:
    return [line.strip() for line in value if isinstance(line, str) and line.strip()]


class IngestionAttemptResult(BaseModel):
    """One stage's raw output."""

    model_config = ConfigDict(frozen=True)

    stage: IngestionStage
    success: bool
    title: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)
    error_code: Optional[IngestionErrorCode] = None
    latency_ms: int = 0

    @field_validator("ingredients", "instructions", "notes")
    @classmethod
    def strip_blank_lines(cls, value: List[str]) -> List[str]:
        return _drop_blank_lines(value)


class RecipeIngestionCandidate(IngestionAttemptResult):
    description: Optional[str] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    servings: Optional[int] = None
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    ingredient_groups: List[PrepGroup] = Field(default_factory=list)
    html: Optional[str] = None


class CandidateSelection(BaseModel):
    candidate: Optional[RecipeIngestionCandidate] = None
    score: int = 0


class NormalizedRecipe(BaseModel):
    """Final recipe handed to the recipe store."""

    title: str
    description: Optional[str] = None
    source_url: str
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    servings: Optional[int] = None
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    tags: List[str] = Field(default_factory=list)
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)
    prep_groups: List[PrepGroup] = Field(default_factory=list)


class IngestionOutcome(BaseModel):
    recipe: Optional[NormalizedRecipe] = None
    failure_reason: Optional[IngestionErrorCode] = None
    stage_used: Optional[IngestionStage] = None
    quality_score: int = 0
    source_host: str = ""
    attempts: List[IngestionAttemptResult] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.recipe is not None
