"""Services layer - story generation and optional content providers."""

import logging
import random
import time
from dataclasses import dataclass

from story_generator.memory.builtin_data import get_builtin_pools
from story_generator.memory.pools import EntityPools
from story_generator.settings import Settings

from .content_service import ContentService
from .entity_generator import EntityGenerator
from .story_formatter import format_dialogue_tree, format_story
from .story_pipeline import StoryGenerator, StoryResult
from .text_provider import TextProvider, create_provider

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Dependency injection container wiring settings, provider and generator.

    Usage:
        settings = Settings.load()
        services = ServiceContainer(settings)
        result = services.generator.generate_story()
    """

    settings: Settings
    provider: TextProvider
    content: ContentService
    generator: StoryGenerator

    def __init__(
        self,
        settings: Settings | None = None,
        pools: EntityPools | None = None,
        provider: TextProvider | None = None,
    ):
        """Create and wire service instances that share a Settings object.

        Args:
            settings: Application settings. Loaded via Settings.load() when omitted.
            pools: Entity pools. The built-in sample data is used when omitted.
            provider: Text provider. Built from settings.text_provider when omitted.
        """
        t0 = time.perf_counter()
        logger.info("Initializing ServiceContainer...")
        self.settings = settings or Settings.load()
        self.provider = provider or create_provider(self.settings)
        self.content = ContentService(
            self.provider,
            temperature=self.settings.provider_temperature,
            max_tokens=self.settings.provider_max_tokens,
        )
        self.generator = StoryGenerator(
            pools if pools is not None else get_builtin_pools(),
            settings=self.settings,
            content=self.content,
            rng=random.Random(self.settings.random_seed),
        )
        logger.info("ServiceContainer initialized in %.2fs", time.perf_counter() - t0)


__all__ = [
    "ContentService",
    "EntityGenerator",
    "ServiceContainer",
    "StoryGenerator",
    "StoryResult",
    "format_dialogue_tree",
    "format_story",
]
