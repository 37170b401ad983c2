"""Story generation pipeline.

One call to StoryGenerator.generate_story() runs every stage in order:

1. Validate entity pools
2. Reset the world state and clear the previous run
3. Select a template
4. Generate characters, then locations
5. Apply the three scripted story beats
6. Build the sample dialogue tree
7. Optionally ask the content service for narrative text
8. Assemble a StoryResult

The generator is not reentrant. Callers serialize access.
"""

import logging
import random

from pydantic import BaseModel, Field

from story_generator.memory.dialogue import DialogueNode, DialogueType
from story_generator.memory.entities import CharacterProfile, StoryLocation
from story_generator.memory.pools import EntityPools
from story_generator.memory.templates import StoryTemplate, default_template
from story_generator.memory.world_state import WorldState, WorldStateSnapshot
from story_generator.services.content_service import ContentService
from story_generator.services.entity_generator import MIN_LOCATIONS, EntityGenerator
from story_generator.settings import Settings
from story_generator.utils.exceptions import ConfigError
from story_generator.utils.logging_config import log_context, log_performance

logger = logging.getLogger(__name__)

BEAT_POINTS_CLUES = 30
BEAT_POINTS_SHOWDOWN = 50
SHOWDOWN_TENSION = 10


class StoryResult(BaseModel):
    """Everything one generation run produced."""

    template: StoryTemplate
    characters: list[CharacterProfile] = Field(default_factory=list)
    locations: list[StoryLocation] = Field(default_factory=list)
    dialogue: DialogueNode | None = None
    beats: list[str] = Field(default_factory=list)
    events_generated: bool = False
    dialogue_generated: bool = False
    narrative: str = ""  # provider text, empty when disabled
    world_state: WorldStateSnapshot


class StoryGenerator:
    """Orchestrates template selection, entities, beats and dialogue.

    The world state instance is owned by the generator and reset, never
    replaced, at the start of each run.
    """

    def __init__(
        self,
        pools: EntityPools,
        settings: Settings | None = None,
        world_state: WorldState | None = None,
        content: ContentService | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize the generator.

        Args:
            pools: Templates, names, location names and traits to draw from.
            settings: Generation settings. Loaded from disk when omitted.
            world_state: Ledger to reuse. A new one is created when omitted.
            content: Content service for optional narrative text.
            rng: Random source. Seeded from settings.random_seed when omitted.
        """
        self.pools = pools
        self.settings = settings or Settings.load()
        self.world_state = world_state if world_state is not None else WorldState()
        self.content = content
        self.rng = rng or random.Random(self.settings.random_seed)
        self.entities = EntityGenerator(pools, self.rng)

        self._template: StoryTemplate | None = None
        self._characters: list[CharacterProfile] = []
        self._locations: list[StoryLocation] = []
        self._dialogue: DialogueNode | None = None

    # Lookups

    @property
    def current_template(self) -> StoryTemplate | None:
        return self._template

    @property
    def current_dialogue(self) -> DialogueNode | None:
        return self._dialogue

    def get_character_by_name(self, name: str) -> CharacterProfile | None:
        """Return the first character of the current run with this name."""
        return next((c for c in self._characters if c.name == name), None)

    def get_location_by_name(self, name: str) -> StoryLocation | None:
        """Return the first location of the current run with this name."""
        return next((loc for loc in self._locations if loc.name == name), None)

    def get_all_characters(self) -> list[CharacterProfile]:
        return list(self._characters)

    def get_all_locations(self) -> list[StoryLocation]:
        return list(self._locations)

    # Pipeline

    def generate_story(self) -> StoryResult:
        """Run the full pipeline once.

        Returns:
            The assembled StoryResult.

        Raises:
            ConfigError: If the name or trait pool is empty.
        """
        missing = self.pools.empty_required_pools()
        if missing:
            raise ConfigError(
                f"Cannot generate characters, empty entity pool(s): {', '.join(missing)}",
                field_name=missing[0],
            )

        with log_context() as correlation_id, log_performance(logger, "story_generation"):
            logger.info("Generating story (run %s)", correlation_id)
            self._reset()

            self._template = self._select_template()
            self._characters = self.entities.generate_characters(self.world_state)
            self._locations = self.entities.generate_locations(self.settings.max_locations)

            beats = self._apply_story_beats()
            self._dialogue = self._build_dialogue()

            narrative = ""
            if self.settings.use_provider_narrative and self.content is not None:
                narrative = self.content.generate_narrative(self._narrative_context())

            result = StoryResult(
                template=self._template,
                characters=list(self._characters),
                locations=list(self._locations),
                dialogue=self._dialogue,
                beats=beats,
                events_generated=bool(beats),
                dialogue_generated=self._dialogue is not None,
                narrative=narrative,
                world_state=self.world_state.get_snapshot(),
            )
            logger.info("Story generation complete: %s", self.world_state)
            return result

    def _reset(self) -> None:
        self.world_state.reset()
        self._template = None
        self._characters = []
        self._locations = []
        self._dialogue = None

    def _select_template(self) -> StoryTemplate:
        if not self.pools.templates:
            logger.warning("No story templates available, using the default template")
            return default_template()
        template = self.rng.choice(self.pools.templates)
        logger.info("Selected template: %s (%s)", template.genre, template.id or "unnamed")
        return template

    def _apply_story_beats(self) -> list[str]:
        """Write the three scripted beats into the world state.

        Returns:
            The beat sentences, or an empty list when the cast or locations
            are too small.
        """
        if not self._characters:
            logger.error("No characters available for story events")
            return []
        if len(self._locations) < MIN_LOCATIONS:
            logger.error(
                "Insufficient locations for story events: found %d, need at least %d",
                len(self._locations),
                MIN_LOCATIONS,
            )
            return []

        protagonist = self._characters[0]
        first, second, third = self._locations[:3]

        discovery = f"{protagonist.name} discovers their brother is missing."
        self.world_state.set_flag("brother_kidnapped", True)
        protagonist.add_event(discovery)

        clues = f"{protagonist.name} hacks into {first.name} and finds clues about {second.name}."
        self.world_state.complete_event("clues_discovered")
        self.world_state.visit_location(first.name)
        self.world_state.advance_story(BEAT_POINTS_CLUES)
        protagonist.add_event(clues)
        first.visit()
        first.add_event(clues)
        first.add_character(protagonist)

        showdown = f"Final showdown at {third.name} with a moral dilemma."
        self.world_state.complete_event("final_confrontation")
        self.world_state.visit_location(third.name)
        self.world_state.advance_story(BEAT_POINTS_SHOWDOWN)
        self.world_state.set_tension_level(SHOWDOWN_TENSION)
        protagonist.add_event(showdown)
        third.visit()
        third.add_event(showdown)
        third.add_character(protagonist)

        logger.info("Applied story beats: %s", self.world_state)
        return [discovery, clues, showdown]

    def _build_dialogue(self) -> DialogueNode | None:
        """Build the confrontation between protagonist and antagonist."""
        if len(self._characters) < 2:
            logger.error(
                "Insufficient characters for dialogue: found %d, need at least 2",
                len(self._characters),
            )
            return None

        protagonist, antagonist = self._characters[0], self._characters[1]

        root = DialogueNode(
            speaker=protagonist.name,
            line=f"I'm not afraid of you, {antagonist.name}.",
            type=DialogueType.STATEMENT,
            emotional_weight=5,
        )
        reply = DialogueNode(
            speaker=antagonist.name,
            line="You should be. But fear is irrelevant.",
            type=DialogueType.RESPONSE,
            emotional_weight=-3,
        )
        root.add_response(reply)

        defiant = reply.add_response_line(protagonist.name, "I'll never give up!")
        defiant.emotional_weight = 8
        defiant.add_set_flag("player_defiant")

        diplomatic = reply.add_response_line(protagonist.name, "Maybe we can work together?")
        diplomatic.emotional_weight = 2
        diplomatic.add_set_flag("player_diplomatic")

        logger.debug("Built dialogue tree rooted at %s", root.id)
        return root

    def _narrative_context(self) -> str:
        template = self._template or default_template()
        cast = ", ".join(f"{c.name} ({c.role})" for c in self._characters)
        places = ", ".join(loc.name for loc in self._locations)
        return (
            f"A {template.genre} story set in {template.setting}. "
            f"Conflict: {template.conflict}. Characters: {cast}. Locations: {places}."
        )
