"""World state ledger - flags, events, relationships and story metrics.

Every query is total: a missing key yields a defined default instead of an
error. The three story metrics are clamped to their ranges on every
mutation, including direct attribute assignment.
"""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

PROGRESSION_MIN, PROGRESSION_MAX = 0, 100
MORALITY_MIN, MORALITY_MAX = -1.0, 1.0
TENSION_MIN, TENSION_MAX = 0, 10
INITIAL_TENSION = 1

DEFAULT_RELATIONSHIP = "neutral"
DEFAULT_LOCATION_STATE = "normal"


def _clamp(value: Any, low: Any, high: Any) -> Any:
    return max(low, min(high, value))


class WorldStateSnapshot(BaseModel):
    """Read-only copy of the world state for presentation and serialization."""

    model_config = ConfigDict(frozen=True)

    flags: dict[str, str] = Field(default_factory=dict)
    completed_events: list[str] = Field(default_factory=list)
    story_progression: int = 0
    morality: float = 0.0
    tension_level: int = INITIAL_TENSION


class WorldState(BaseModel):
    """Mutable ledger shared by every stage of story generation.

    Relationships are directional: the value stored for (a, b) says nothing
    about (b, a), which keeps the default until set on its own.
    """

    model_config = ConfigDict(validate_assignment=True)

    flags: dict[str, str] = Field(default_factory=dict)
    completed_events: list[str] = Field(default_factory=list)
    character_states: dict[str, bool] = Field(default_factory=dict)  # alive/present
    character_relationships: dict[tuple[str, str], str] = Field(default_factory=dict)
    visited_locations: list[str] = Field(default_factory=list)
    location_states: dict[str, str] = Field(default_factory=dict)
    story_progression: int = PROGRESSION_MIN  # percentage
    morality: float = 0.0  # -1.0 (evil) to 1.0 (good)
    tension_level: int = INITIAL_TENSION

    @field_validator("story_progression")
    @classmethod
    def _clamp_progression(cls, v: int) -> int:
        return _clamp(v, PROGRESSION_MIN, PROGRESSION_MAX)

    @field_validator("morality")
    @classmethod
    def _clamp_morality(cls, v: float) -> float:
        return _clamp(v, MORALITY_MIN, MORALITY_MAX)

    @field_validator("tension_level")
    @classmethod
    def _clamp_tension(cls, v: int) -> int:
        return _clamp(v, TENSION_MIN, TENSION_MAX)

    # Flags

    def set_flag(self, name: str, value: str | bool) -> None:
        """Store a flag. Booleans are stored as "True" / "False"."""
        self.flags[name] = str(value)
        logger.debug("Set flag '%s' to '%s'", name, self.flags[name])

    def get_flag(self, name: str) -> str:
        """Return the flag value, or "" when unset."""
        return self.flags.get(name, "")

    def get_flag_as_bool(self, name: str) -> bool:
        """Interpret a flag as a boolean ("true" in any case, or "1")."""
        value = self.get_flag(name)
        return value.lower() == "true" or value == "1"

    def has_flag(self, name: str) -> bool:
        return name in self.flags

    def remove_flag(self, name: str) -> None:
        """Remove a flag if present."""
        if self.flags.pop(name, None) is not None:
            logger.debug("Removed flag '%s'", name)

    # Events

    def complete_event(self, name: str) -> None:
        """Record an event as completed. Repeated calls are no-ops."""
        if name not in self.completed_events:
            self.completed_events.append(name)
            logger.debug("Completed event '%s'", name)

    def is_event_completed(self, name: str) -> bool:
        return name in self.completed_events

    # Characters

    def set_character_state(self, name: str, state: bool) -> None:
        self.character_states[name] = state
        logger.debug("Set character '%s' state to %s", name, state)

    def get_character_state(self, name: str) -> bool:
        """Return the character's state, True when never set."""
        return self.character_states.get(name, True)

    def set_character_relationship(self, a: str, b: str, relationship_type: str) -> None:
        """Record how a relates to b. Does not touch the reverse direction."""
        self.character_relationships[(a, b)] = relationship_type
        logger.debug("Set relationship %s -> %s: %s", a, b, relationship_type)

    def get_character_relationship(self, a: str, b: str) -> str:
        """Return how a relates to b, "neutral" when never set."""
        return self.character_relationships.get((a, b), DEFAULT_RELATIONSHIP)

    # Locations

    def visit_location(self, name: str) -> None:
        """Record a location visit. Repeated visits are no-ops."""
        if name not in self.visited_locations:
            self.visited_locations.append(name)
            logger.debug("Visited location '%s'", name)

    def has_visited_location(self, name: str) -> bool:
        return name in self.visited_locations

    def set_location_state(self, name: str, state: str) -> None:
        self.location_states[name] = state

    def get_location_state(self, name: str) -> str:
        """Return the location state, "normal" when never set."""
        return self.location_states.get(name, DEFAULT_LOCATION_STATE)

    # Metrics

    def advance_story(self, points: int = 10) -> None:
        """Move story progression forward, clamped to 0-100."""
        self.story_progression = self.story_progression + points
        logger.debug("Story progression now at %d%%", self.story_progression)

    def adjust_morality(self, delta: float) -> None:
        """Shift morality, clamped to -1.0..1.0."""
        self.morality = self.morality + delta
        logger.debug("Morality adjusted to %.2f", self.morality)

    def set_tension_level(self, level: int) -> None:
        """Set tension, clamped to 0-10."""
        self.tension_level = level
        logger.debug("Tension level set to %d", self.tension_level)

    # Lifecycle

    def reset(self) -> None:
        """Return to the initial state in place.

        Tension resets to 1, not 0, matching a freshly created ledger.
        """
        self.flags.clear()
        self.completed_events.clear()
        self.character_states.clear()
        self.character_relationships.clear()
        self.visited_locations.clear()
        self.location_states.clear()
        self.story_progression = PROGRESSION_MIN
        self.morality = 0.0
        self.tension_level = INITIAL_TENSION
        logger.debug("World state reset to initial state")

    def get_snapshot(self) -> WorldStateSnapshot:
        """Copy flags, completed events and metrics into a frozen snapshot."""
        return WorldStateSnapshot(
            flags=dict(self.flags),
            completed_events=list(self.completed_events),
            story_progression=self.story_progression,
            morality=self.morality,
            tension_level=self.tension_level,
        )

    def __str__(self) -> str:
        return (
            f"WorldState: {len(self.completed_events)} events completed, "
            f"{len(self.flags)} flags set, {self.story_progression}% progression"
        )
