"""Built-in story templates and entity pools loaded from YAML files."""

from story_generator.memory.builtin_data._registry import (
    SampleDataRegistry,
    get_builtin_pools,
    get_builtin_registry,
)

__all__ = [
    "SampleDataRegistry",
    "get_builtin_pools",
    "get_builtin_registry",
]
