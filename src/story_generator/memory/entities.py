"""Character and location models.

Entities refer to each other by name only. A character lists the names of
the characters it relates to and a location lists the names of characters
present; lookups go through the pipeline's per-run collections.
"""

import logging
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from story_generator.memory.templates import dedupe_preserving_order

logger = logging.getLogger(__name__)


class CharacterRole(StrEnum):
    """Narrative role a character plays."""

    PROTAGONIST = "Protagonist"
    ANTAGONIST = "Antagonist"
    SIDEKICK = "Sidekick"
    MENTOR = "Mentor"
    LOVE_INTEREST = "LoveInterest"
    NEUTRAL = "Neutral"
    MINOR_CHARACTER = "MinorCharacter"


class LocationTone(StrEnum):
    """Overall mood of a location."""

    PEACEFUL = "Peaceful"
    DANGEROUS = "Dangerous"
    MYSTERIOUS = "Mysterious"
    BUSTLING = "Bustling"
    ABANDONED = "Abandoned"
    SACRED = "Sacred"
    CORRUPTED = "Corrupted"


def _append_unique(values: list[str], value: str) -> bool:
    """Append value unless already present. Returns True if appended."""
    if value in values:
        return False
    values.append(value)
    return True


class CharacterProfile(BaseModel):
    """A character in the generated story."""

    name: str
    role: CharacterRole = CharacterRole.NEUTRAL
    motivation: str = ""
    personality_traits: list[str] = Field(default_factory=list)
    relationship_names: list[str] = Field(default_factory=list)  # other characters, by name
    associated_events: list[str] = Field(default_factory=list)
    is_alive: bool = True
    has_been_introduced: bool = False

    @field_validator("personality_traits", "relationship_names", "associated_events", mode="before")
    @classmethod
    def _dedupe(cls, v: Any) -> Any:
        """Keep list fields ordered sets."""
        return dedupe_preserving_order(v)

    def add_personality_trait(self, trait: str) -> None:
        """Add a trait unless the character already has it."""
        _append_unique(self.personality_traits, trait)

    def add_relationship(self, other: "str | CharacterProfile | None") -> None:
        """Record a relationship with another character by name.

        Self-references, empty names and repeats are ignored.

        Args:
            other: The other character, or its name.
        """
        if other is None:
            return
        other_name = other.name if isinstance(other, CharacterProfile) else other
        if not other_name or other_name == self.name:
            logger.debug("Ignoring relationship %r for character %s", other_name, self.name)
            return
        _append_unique(self.relationship_names, other_name)

    def add_event(self, event: str) -> None:
        """Associate a story event with the character."""
        _append_unique(self.associated_events, event)

    def introduce(self) -> None:
        """Mark the character as introduced to the reader."""
        self.has_been_introduced = True

    def __str__(self) -> str:
        traits = ", ".join(self.personality_traits) if self.personality_traits else "None"
        return f"{self.name}: {self.role}, {traits}"


class StoryLocation(BaseModel):
    """A location in the generated story."""

    name: str
    description: str = ""
    tone: LocationTone = LocationTone.PEACEFUL
    associated_events: list[str] = Field(default_factory=list)
    possible_actions: list[str] = Field(default_factory=list)
    has_been_visited: bool = False
    hidden_secrets: list[str] = Field(default_factory=list)
    characters_present_names: list[str] = Field(default_factory=list)

    @field_validator(
        "associated_events",
        "possible_actions",
        "hidden_secrets",
        "characters_present_names",
        mode="before",
    )
    @classmethod
    def _dedupe(cls, v: Any) -> Any:
        """Keep list fields ordered sets."""
        return dedupe_preserving_order(v)

    def add_event(self, event: str) -> None:
        """Associate a story event with the location."""
        _append_unique(self.associated_events, event)

    def add_character(self, character: "str | CharacterProfile | None") -> None:
        """Place a character at this location by name. Empty names are ignored."""
        if character is None:
            return
        name = character.name if isinstance(character, CharacterProfile) else character
        if not name:
            return
        _append_unique(self.characters_present_names, name)

    def add_possible_action(self, action: str) -> None:
        """Add an action the player can take here."""
        _append_unique(self.possible_actions, action)

    def add_secret(self, secret: str) -> None:
        """Hide a secret at this location."""
        _append_unique(self.hidden_secrets, secret)

    def visit(self) -> None:
        """Mark the location as visited."""
        self.has_been_visited = True

    def __str__(self) -> str:
        return f"{self.name}: {self.description}"
