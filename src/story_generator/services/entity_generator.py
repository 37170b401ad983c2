"""Entity generator - builds the cast and locations for one story run."""

import logging
import random

from story_generator.memory.entities import (
    CharacterProfile,
    CharacterRole,
    LocationTone,
    StoryLocation,
)
from story_generator.memory.pools import EntityPools
from story_generator.memory.world_state import WorldState
from story_generator.utils.validation import validate_in_range

logger = logging.getLogger(__name__)

ANTAGONIST_NAME = "Rho"

PROTAGONIST_MOTIVATION = "Save their kidnapped brother and uncover the truth"
ANTAGONIST_MOTIVATION = "Maintain control over the city and eliminate threats"
SIDEKICK_MOTIVATION = "Help the protagonist and provide moral support"

ANTAGONIST_TRAITS = ("cold", "logical")
SIDEKICK_TRAITS = ("sarcastic", "loyal")

MIN_LOCATIONS = 3
FALLBACK_LOCATION_NAMES = (
    "The Unknown Place",
    "The Mysterious Area",
    "The Hidden Realm",
    "The Secret Chamber",
    "The Lost Zone",
)
FALLBACK_LOCATION_DESCRIPTION = "A place that emerged from the void of necessity"


class EntityGenerator:
    """Draws characters and locations from entity pools.

    All randomness goes through the injected random.Random, so a seeded
    generator reproduces the same cast and locations.
    """

    def __init__(self, pools: EntityPools, rng: random.Random | None = None):
        """Initialize the generator.

        Args:
            pools: Names, location names and traits to draw from.
            rng: Random source. A fresh unseeded one is used when omitted.
        """
        self.pools = pools
        self.rng = rng or random.Random()

    def _random_name(self) -> str:
        return self.rng.choice(self.pools.names)

    def _random_trait(self) -> str:
        return self.rng.choice(self.pools.traits)

    def generate_characters(self, world_state: WorldState) -> list[CharacterProfile]:
        """Build the protagonist, antagonist and sidekick, in that order.

        Names are drawn with replacement, so protagonist and sidekick may
        share a name. Relationships between the three are recorded both on
        the profiles and in world_state.

        Args:
            world_state: Ledger that receives the directional relationships.

        Returns:
            Exactly three characters.
        """
        protagonist = CharacterProfile(
            name=self._random_name(),
            role=CharacterRole.PROTAGONIST,
            motivation=PROTAGONIST_MOTIVATION,
        )
        # Two independent draws; a repeat collapses to a single trait
        protagonist.add_personality_trait(self._random_trait())
        protagonist.add_personality_trait(self._random_trait())

        antagonist = CharacterProfile(
            name=ANTAGONIST_NAME,
            role=CharacterRole.ANTAGONIST,
            motivation=ANTAGONIST_MOTIVATION,
            personality_traits=list(ANTAGONIST_TRAITS),
        )

        sidekick = CharacterProfile(
            name=self._random_name(),
            role=CharacterRole.SIDEKICK,
            motivation=SIDEKICK_MOTIVATION,
            personality_traits=list(SIDEKICK_TRAITS),
        )

        protagonist.add_relationship(sidekick)
        sidekick.add_relationship(protagonist)
        world_state.set_character_relationship(protagonist.name, sidekick.name, "allies")
        world_state.set_character_relationship(protagonist.name, antagonist.name, "enemies")

        characters = [protagonist, antagonist, sidekick]
        logger.info("Generated characters: %s", ", ".join(c.name for c in characters))
        return characters

    def generate_locations(self, max_locations: int) -> list[StoryLocation]:
        """Draw locations from the pool, then top up with fallbacks.

        Up to min(max_locations, pool size) distinct pool names are used.
        Fallback locations are appended until at least three exist, even
        when max_locations is smaller.

        Args:
            max_locations: Upper bound on locations drawn from the pool.

        Raises:
            ValueError: If max_locations is negative.
        """
        validate_in_range(max_locations, "max_locations", min_val=0)
        count = min(max_locations, len(self.pools.location_names))
        names = self.rng.sample(self.pools.location_names, count)
        tones = list(LocationTone)
        locations = [
            StoryLocation(
                name=name,
                description=f"A mysterious place known as {name}",
                tone=self.rng.choice(tones),
            )
            for name in names
        ]

        fallback_index = 0
        while len(locations) < MIN_LOCATIONS:
            name = FALLBACK_LOCATION_NAMES[fallback_index % len(FALLBACK_LOCATION_NAMES)]
            locations.append(
                StoryLocation(
                    name=name,
                    description=FALLBACK_LOCATION_DESCRIPTION,
                    tone=LocationTone.MYSTERIOUS,
                )
            )
            fallback_index += 1

        if fallback_index:
            logger.warning(
                "Location pool too small, added %d fallback location(s)", fallback_index
            )
        logger.info("Generated locations: %s", ", ".join(loc.name for loc in locations))
        return locations
