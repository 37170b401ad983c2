"""Tests for character and location generation."""

import random

from story_generator.memory.entities import CharacterRole, LocationTone
from story_generator.memory.pools import EntityPools
from story_generator.memory.world_state import WorldState
from story_generator.services.entity_generator import (
    ANTAGONIST_NAME,
    FALLBACK_LOCATION_DESCRIPTION,
    FALLBACK_LOCATION_NAMES,
    EntityGenerator,
)


class TestGenerateCharacters:
    """Tests for EntityGenerator.generate_characters."""

    def test_three_fixed_roles_in_order(self, sample_pools, rng, world_state):
        """Protagonist, antagonist and sidekick, always in that order."""
        characters = EntityGenerator(sample_pools, rng).generate_characters(world_state)
        assert [c.role for c in characters] == [
            CharacterRole.PROTAGONIST,
            CharacterRole.ANTAGONIST,
            CharacterRole.SIDEKICK,
        ]

    def test_fixed_antagonist_and_sidekick(self, sample_pools, rng, world_state):
        """The antagonist is Rho; both supporting roles have fixed traits."""
        _, antagonist, sidekick = EntityGenerator(sample_pools, rng).generate_characters(
            world_state
        )
        assert antagonist.name == ANTAGONIST_NAME == "Rho"
        assert antagonist.personality_traits == ["cold", "logical"]
        assert antagonist.motivation == "Maintain control over the city and eliminate threats"
        assert sidekick.personality_traits == ["sarcastic", "loyal"]
        assert sidekick.motivation == "Help the protagonist and provide moral support"
        assert sidekick.name in sample_pools.names

    def test_protagonist_drawn_from_pools(self, sample_pools, rng, world_state):
        """The protagonist's name and one or two traits come from the pools."""
        protagonist = EntityGenerator(sample_pools, rng).generate_characters(world_state)[0]
        assert protagonist.name in sample_pools.names
        assert protagonist.motivation == "Save their kidnapped brother and uncover the truth"
        assert 1 <= len(protagonist.personality_traits) <= 2
        assert set(protagonist.personality_traits) <= set(sample_pools.traits)

    def test_repeated_trait_draw_collapses(self, world_state):
        """With a single trait, both draws collapse into one trait."""
        pools = EntityPools(names=["Kai"], traits=["brave"])
        protagonist = EntityGenerator(pools, random.Random(0)).generate_characters(world_state)[0]
        assert protagonist.personality_traits == ["brave"]

    def test_names_may_repeat(self, world_state):
        """Names are drawn with replacement, so protagonist and sidekick can match."""
        pools = EntityPools(names=["Kai"], traits=["brave"])
        protagonist, _, sidekick = EntityGenerator(pools, random.Random(0)).generate_characters(
            world_state
        )
        assert protagonist.name == sidekick.name == "Kai"

    def test_relationships_recorded(self, sample_pools, rng, world_state):
        """Protagonist and sidekick are linked; the world state knows allies and enemies."""
        protagonist, antagonist, sidekick = EntityGenerator(
            sample_pools, rng
        ).generate_characters(world_state)
        assert sidekick.name in protagonist.relationship_names or protagonist.name == sidekick.name
        assert world_state.get_character_relationship(protagonist.name, sidekick.name) == "allies"
        assert (
            world_state.get_character_relationship(protagonist.name, antagonist.name) == "enemies"
        )
        assert (
            world_state.get_character_relationship(antagonist.name, protagonist.name) == "neutral"
        )

    def test_same_seed_same_cast(self, sample_pools):
        """Equal seeds produce equal casts."""
        first = EntityGenerator(sample_pools, random.Random(7)).generate_characters(WorldState())
        second = EntityGenerator(sample_pools, random.Random(7)).generate_characters(WorldState())
        assert [c.model_dump() for c in first] == [c.model_dump() for c in second]


class TestGenerateLocations:
    """Tests for EntityGenerator.generate_locations."""

    def test_draws_distinct_pool_locations(self, sample_pools, rng):
        """Up to max_locations distinct names come from the pool."""
        locations = EntityGenerator(sample_pools, rng).generate_locations(4)
        names = [loc.name for loc in locations]
        assert len(names) == 4
        assert len(set(names)) == 4
        assert set(names) <= set(sample_pools.location_names)

    def test_pool_location_description_and_tone(self, sample_pools, rng):
        """Pooled locations get the standard description and any tone."""
        for location in EntityGenerator(sample_pools, rng).generate_locations(3):
            assert location.description == f"A mysterious place known as {location.name}"
            assert location.tone in set(LocationTone)

    def test_single_pool_entry_gets_two_fallbacks(self, rng):
        """A pool of one plus max_locations=3 yields one pooled and two fallback locations."""
        pools = EntityPools(names=["Kai"], traits=["brave"], location_names=["The Grid"])
        locations = EntityGenerator(pools, rng).generate_locations(3)
        assert [loc.name for loc in locations] == [
            "The Grid",
            "The Unknown Place",
            "The Mysterious Area",
        ]
        for fallback in locations[1:]:
            assert fallback.tone == LocationTone.MYSTERIOUS
            assert fallback.description == FALLBACK_LOCATION_DESCRIPTION

    def test_minimum_applies_even_when_max_is_smaller(self, sample_pools, rng):
        """max_locations below three still ends with three locations."""
        locations = EntityGenerator(sample_pools, rng).generate_locations(1)
        assert len(locations) == 3
        assert locations[1].name == FALLBACK_LOCATION_NAMES[0]
        assert locations[2].name == FALLBACK_LOCATION_NAMES[1]

    def test_empty_pool_uses_fallbacks_only(self, rng):
        """With no pooled names the first three fallbacks are used."""
        pools = EntityPools(names=["Kai"], traits=["brave"])
        locations = EntityGenerator(pools, rng).generate_locations(3)
        assert [loc.name for loc in locations] == list(FALLBACK_LOCATION_NAMES[:3])

    def test_zero_max_locations(self, sample_pools, rng):
        """max_locations=0 skips the pool entirely."""
        locations = EntityGenerator(sample_pools, rng).generate_locations(0)
        assert [loc.name for loc in locations] == list(FALLBACK_LOCATION_NAMES[:3])
