"""Request and response models exchanged with text providers."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class PromptType(StrEnum):
    """What kind of content a request asks for."""

    NARRATIVE = "narrative"
    CHARACTER = "character"
    LOCATION = "location"
    DIALOGUE = "dialogue"
    STORY_TEMPLATE = "story_template"


class ProviderRequest(BaseModel):
    """A single text-generation request."""

    context: str
    prompt_type: str = "general"  # usually a PromptType value
    parameters: dict[str, Any] = Field(default_factory=dict)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=500, ge=1)


class ProviderResponse(BaseModel):
    """The outcome of a request. Failed responses carry an error message."""

    content: str = ""
    success: bool = False
    error: str = ""
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    metadata: dict[str, Any] = Field(default_factory=dict)
