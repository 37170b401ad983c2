"""Offline provider returning canned text per prompt type."""

import logging

from story_generator.services.text_provider._base import TextProvider
from story_generator.services.text_provider._types import (
    PromptType,
    ProviderRequest,
    ProviderResponse,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_CONFIDENCE = 0.5

PLACEHOLDER_CONTENT: dict[str, str] = {
    PromptType.NARRATIVE: (
        "The story unfolds with unexpected twists and compelling character development..."
    ),
    PromptType.CHARACTER: "A mysterious figure with hidden depths and conflicting motivations...",
    PromptType.LOCATION: "A place where shadows dance and secrets whisper in the wind...",
    PromptType.DIALOGUE: "Words that carry weight and reveal hidden truths...",
    PromptType.STORY_TEMPLATE: "An epic tale of courage, betrayal, and redemption...",
}


class PlaceholderProvider(TextProvider):
    """Default provider. Always succeeds without touching the network."""

    name = "placeholder"

    def generate(self, request: ProviderRequest) -> ProviderResponse:
        content = PLACEHOLDER_CONTENT.get(
            request.prompt_type, f"AI-generated content based on: {request.context}"
        )
        return ProviderResponse(
            content=content,
            success=True,
            confidence=PLACEHOLDER_CONFIDENCE,
            metadata={"provider": self.name},
        )
