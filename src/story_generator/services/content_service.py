"""Content service - turns text-provider output into story entities.

Every method returns a usable entity. Provider failures are logged and the
matching default generator takes over, so nothing raised by a provider
reaches the caller.
"""

import logging
from typing import Any

from pydantic import ValidationError

from story_generator.memory.dialogue import DialogueNode, DialogueType
from story_generator.memory.entities import CharacterProfile, CharacterRole, StoryLocation
from story_generator.memory.templates import StoryTemplate
from story_generator.services.text_provider import (
    PromptType,
    ProviderRequest,
    ProviderResponse,
    TextProvider,
)
from story_generator.utils.json_parser import extract_json_object
from story_generator.utils.validation import validate_not_empty

logger = logging.getLogger(__name__)

GENERATED_CHARACTER_NAME = "AI Generated Character"
GENERATED_CHARACTER_TRAITS = ("mysterious", "complex")
GENERATED_LOCATION_NAME = "AI Generated Location"


class ContentService:
    """Requests story content from a provider and parses the answers."""

    def __init__(self, provider: TextProvider, temperature: float = 0.7, max_tokens: int = 500):
        """Initialize the content service.

        Args:
            provider: Backend to ask for text.
            temperature: Sampling temperature sent with every request.
            max_tokens: Token budget sent with every request.
        """
        self.provider = provider
        self.temperature = temperature
        self.max_tokens = max_tokens
        logger.debug("ContentService initialized with provider %s", provider.name)

    def _request(
        self, context: str, prompt_type: PromptType, **parameters: Any
    ) -> ProviderResponse:
        request = ProviderRequest(
            context=context,
            prompt_type=prompt_type,
            parameters=parameters,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return self.provider.complete(request)

    # Narrative

    def generate_narrative(self, context: str) -> str:
        """Ask for free-form narrative text.

        Returns:
            The provider's text, or "Failed to generate narrative: {error}".
        """
        response = self._request(context, PromptType.NARRATIVE)
        if response.success:
            return response.content
        logger.warning("Narrative generation failed: %s", response.error)
        return f"Failed to generate narrative: {response.error}"

    # Characters

    def generate_character(self, context: str, role: CharacterRole) -> CharacterProfile:
        """Generate a character for the given role."""
        response = self._request(
            f"Generate a {role} character for: {context}",
            PromptType.CHARACTER,
            role=str(role),
        )
        if not response.success:
            logger.warning("Character generation failed: %s", response.error)
            return default_character(role)
        return self._parse_character(response.content, role)

    def _parse_character(self, content: str, role: CharacterRole) -> CharacterProfile:
        data = extract_json_object(content)
        if data is not None:
            try:
                return CharacterProfile(
                    name=str(data.get("name") or GENERATED_CHARACTER_NAME),
                    role=role,
                    motivation=str(data.get("motivation", "")),
                    personality_traits=_string_list(data.get("personality_traits")),
                )
            except ValidationError as e:
                logger.warning("Could not build character from provider JSON: %s", e)
        return CharacterProfile(
            name=GENERATED_CHARACTER_NAME,
            role=role,
            motivation=content.strip(),
            personality_traits=list(GENERATED_CHARACTER_TRAITS),
        )

    # Locations

    def generate_location(self, context: str, genre: str) -> StoryLocation:
        """Generate a location that fits the genre."""
        validate_not_empty(genre, "genre")
        response = self._request(
            f"Generate a {genre} location for: {context}",
            PromptType.LOCATION,
            genre=genre,
        )
        if not response.success:
            logger.warning("Location generation failed: %s", response.error)
            return default_location()
        return self._parse_location(response.content)

    def _parse_location(self, content: str) -> StoryLocation:
        data = extract_json_object(content)
        if data is not None:
            try:
                return StoryLocation(
                    name=str(data.get("name") or GENERATED_LOCATION_NAME),
                    description=str(data.get("description", "")),
                )
            except ValidationError as e:
                logger.warning("Could not build location from provider JSON: %s", e)
        return StoryLocation(name=GENERATED_LOCATION_NAME, description=content.strip())

    # Dialogue

    def generate_dialogue(
        self, context: str, speaker: str, characters: list[CharacterProfile]
    ) -> DialogueNode:
        """Generate one dialogue line spoken by speaker."""
        validate_not_empty(speaker, "speaker")
        character_context = ", ".join(f"{c.name}({c.role})" for c in characters)
        response = self._request(
            f"Generate dialogue for {speaker} in context: {context}. "
            f"Characters: {character_context}",
            PromptType.DIALOGUE,
            speaker=speaker,
            characters=character_context,
        )
        if not response.success:
            logger.warning("Dialogue generation failed: %s", response.error)
            return default_dialogue(speaker)

        data = extract_json_object(response.content)
        line = str(data.get("line", "")) if data else ""
        return DialogueNode(
            speaker=speaker,
            line=line or response.content.strip(),
            type=DialogueType.STATEMENT,
        )

    # Templates

    def generate_template(self, genre: str, theme: str) -> StoryTemplate:
        """Generate a story template for a genre and theme."""
        validate_not_empty(genre, "genre")
        response = self._request(
            f"Generate a {genre} story template with theme: {theme}",
            PromptType.STORY_TEMPLATE,
            genre=genre,
            theme=theme,
        )
        if not response.success:
            logger.warning("Story template generation failed: %s", response.error)
            return default_story_template(genre)

        data = extract_json_object(response.content)
        if data is not None:
            try:
                return StoryTemplate(
                    genre=genre,
                    setting=str(data.get("setting", "")),
                    conflict=str(data.get("conflict", "")),
                    resolution=str(data.get("resolution", "")),
                    description=str(data.get("description", "")),
                    tags=_string_list(data.get("tags")),
                )
            except ValidationError as e:
                logger.warning("Could not build template from provider JSON: %s", e)
        return StoryTemplate(
            genre=genre,
            setting="AI-generated setting",
            conflict="AI-generated conflict",
            resolution="AI-generated resolution",
            description=response.content.strip(),
        )


def _string_list(value: Any) -> list[str]:
    """Coerce a JSON list field, treating a bare string as a one-item list."""
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item]


def default_character(role: CharacterRole) -> CharacterProfile:
    return CharacterProfile(
        name=f"Default {role}", role=role, motivation=f"Default motivation for {role}"
    )


def default_location() -> StoryLocation:
    return StoryLocation(name="Default Location", description="A generic place in the story")


def default_dialogue(speaker: str) -> DialogueNode:
    return DialogueNode(speaker=speaker, line="Default dialogue line", type=DialogueType.STATEMENT)


def default_story_template(genre: str) -> StoryTemplate:
    return StoryTemplate(
        genre=genre,
        setting=f"Default {genre} setting",
        conflict=f"Default {genre} conflict",
        resolution=f"Default {genre} resolution",
    )
