"""Pytest fixtures for story generator tests."""

import logging
import random

import pytest

from story_generator.memory.pools import EntityPools
from story_generator.memory.templates import StoryTemplate
from story_generator.memory.world_state import WorldState
from story_generator.settings import Settings


@pytest.fixture(autouse=True, scope="function")
def cleanup_production_log_handlers():
    """Remove file handlers pointing to the production log after each test.

    Tests that call setup_logging() with the default log file would otherwise
    leave a handler writing to logs/story_generator.log.
    """
    yield

    root_logger = logging.getLogger()
    production_log_name = "story_generator.log"

    handlers_to_remove = [
        handler
        for handler in root_logger.handlers
        if isinstance(handler, logging.FileHandler)
        and production_log_name in getattr(handler, "baseFilename", "")
    ]
    for handler in handlers_to_remove:
        handler.close()
        root_logger.removeHandler(handler)


@pytest.fixture(autouse=True)
def clear_settings_cache_per_test():
    """Clear Settings cache before each test to ensure isolation."""
    Settings.clear_cache()
    yield
    Settings.clear_cache()


@pytest.fixture(autouse=True)
def isolate_settings_file(tmp_path, monkeypatch):
    """Redirect the settings file to a temp directory.

    Without this, Settings.load() and save() would read and write the real
    settings.json next to the package.
    """
    settings_file = tmp_path / "settings.json"
    monkeypatch.setattr("story_generator.settings._paths.SETTINGS_FILE", settings_file)
    return settings_file


@pytest.fixture
def settings() -> Settings:
    """Default settings with a fixed seed."""
    return Settings(random_seed=1234)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(42)


@pytest.fixture
def sample_template() -> StoryTemplate:
    """A small fantasy template."""
    return StoryTemplate(
        id="fantasy",
        genre="Fantasy",
        setting="A kingdom at the edge of the world",
        conflict="A dragon has stolen the crown",
        resolution="The heir must choose between the crown and the dragon's life",
        tags=["fantasy", "dragons"],
    )


@pytest.fixture
def sample_pools(sample_template) -> EntityPools:
    """Entity pools large enough for a full run."""
    return EntityPools(
        templates=[sample_template],
        names=["Rhea", "Kai", "Zara", "Milo"],
        location_names=["The Grid", "Neon Market", "Data Vault", "Old Harbor", "Sky Tower"],
        traits=["brave", "curious", "stubborn"],
    )


@pytest.fixture
def world_state() -> WorldState:
    """A fresh world state."""
    return WorldState()
