"""Settings package for the story generator.

- _paths.py: Path constant for the settings file
- _types.py: Log level and provider choices
- _validation.py: Settings validation functions
- _settings.py: Main Settings dataclass
"""

from story_generator.settings._paths import SETTINGS_FILE
from story_generator.settings._settings import Settings
from story_generator.settings._types import LOG_LEVELS, TEXT_PROVIDERS

__all__ = [
    "LOG_LEVELS",
    "SETTINGS_FILE",
    "TEXT_PROVIDERS",
    "Settings",
]
