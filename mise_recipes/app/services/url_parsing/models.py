"""Pydantic models for URL recipe parsing."""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field

from mise_recipes.app.schemas.ingestion import PrepGroup


class InvalidSourceUrlError(ValueError):
    """Raised before any stage runs when a source URL cannot be ingested."""


class PlainStep(BaseModel):
    """A single instruction step from JSON-LD."""

    text: str


class InstructionSection(BaseModel):
    """A ``HowToSection`` holding steps in document order."""

    name: Optional[str] = None
    steps: List[PlainStep] = Field(default_factory=list)


InstructionNode = Union[PlainStep, InstructionSection]


class MarkdownRecipeDraft(BaseModel):
    """Recipe sections recovered from markdown."""

    title: Optional[str] = None
    description: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    video_url: Optional[str] = None


class HtmlRecipeDraft(BaseModel):
    """Recipe fields recovered from a page's JSON-LD and meta tags."""

    title: Optional[str] = None
    description: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)
    ingredient_groups: List[PrepGroup] = Field(default_factory=list)
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    servings: Optional[int] = None
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None


class ReadabilityDraft(BaseModel):
    """Recipe-like lines found in the main article of a page."""

    title: Optional[str] = None
    description: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None


class PageMetadata(BaseModel):
    """Open Graph / Twitter / title tag fallbacks."""

    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None


class RenderedPage(BaseModel):
    """Result of the headless render worker."""

    final_url: str
    html: str
    json_ld: List[Any] = Field(default_factory=list)


class MarkdownDocument(BaseModel):
    """Markdown returned by the markdown extraction service."""

    title: Optional[str] = None
    content: str
