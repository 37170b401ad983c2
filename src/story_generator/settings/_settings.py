"""Main Settings dataclass for the story generator.

Settings are stored in settings.json next to the package.
"""

import copy
import json
import logging
import os
import tempfile
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, ClassVar

from story_generator.settings import _validation as _validation_mod
from story_generator.settings import _paths

logger = logging.getLogger(__name__)


def _merge_with_defaults(data: dict[str, Any], settings_cls: "type[Settings]") -> bool:
    """Merge loaded JSON data with dataclass defaults.

    - Adds missing keys with their default values
    - Removes keys that no longer exist in the dataclass

    Modifies *data* in place.

    Returns:
        True if any changes were made, False otherwise.
    """
    default_dict = asdict(settings_cls())
    known_fields = {f.name for f in fields(settings_cls)}
    changed = False

    for key in list(data):
        if key not in known_fields:
            logger.info("Removing obsolete setting: %s", key)
            del data[key]
            changed = True

    for key in known_fields:
        if key not in data:
            logger.info("Adding new setting with default: %s", key)
            data[key] = default_dict[key]
            changed = True

    return changed


def _atomic_write_json(path: Path | str, data: dict[str, Any]) -> None:
    """Write JSON to *path* atomically via a temp file + rename."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, str(path))
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError as cleanup_err:
            logger.warning("Failed to remove temp settings file %s: %s", tmp_path, cleanup_err)
        raise


@dataclass
class Settings:
    """Application settings, stored as JSON."""

    # General
    log_level: str = "INFO"

    # Generation
    max_characters: int = 5  # Accepted but unused: the cast is always three fixed roles
    max_locations: int = 3  # Upper bound on locations drawn from the pool
    random_seed: int | None = None  # Fixed seed for reproducible runs

    # Text provider
    text_provider: str = "placeholder"  # none, placeholder, ollama
    use_provider_narrative: bool = False  # Ask the provider for a narrative summary
    ollama_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.2"
    ollama_timeout: int = 120  # seconds
    provider_temperature: float = 0.7
    provider_max_tokens: int = 500

    # Class-level cache for settings (speeds up repeated load() calls)
    _cached_instance: ClassVar["Settings | None"] = None

    def validate(self) -> None:
        """Validate all settings fields. Delegates to _validation module.

        Raises:
            ValueError: If any field contains an invalid value.
        """
        _validation_mod.validate(self)

    def save(self) -> None:
        """Validate and save settings to the JSON file."""
        self.validate()
        _atomic_write_json(_paths.SETTINGS_FILE, asdict(self))
        logger.info("Settings saved to %s", _paths.SETTINGS_FILE)

    @classmethod
    def load(cls, use_cache: bool = True) -> "Settings":
        """Load settings from JSON file, or create defaults.

        New settings get default values and removed settings are cleaned
        up; customized values are preserved.

        Args:
            use_cache: If True, return cached instance if available. Set to False
                to force reload from disk (useful after save() or in tests).

        Returns:
            Settings instance.

        Raises:
            ValueError: If a stored value has the wrong type or is out of range.
        """
        if use_cache and cls._cached_instance is not None:
            return cls._cached_instance

        settings_file = _paths.SETTINGS_FILE
        data: dict[str, Any] = {}
        loaded_from_file = False

        if settings_file.exists():
            try:
                with open(settings_file) as f:
                    raw = json.load(f)
                if isinstance(raw, dict):
                    data = raw
                    loaded_from_file = bool(data)
                else:
                    logger.error(
                        "Corrupted settings file (expected JSON object, got %s)",
                        type(raw).__name__,
                    )
            except json.JSONDecodeError as e:
                logger.error("Corrupted settings file (invalid JSON): %s", e)
            except OSError as e:
                logger.error("Cannot read settings file: %s", e)

        original_data = copy.deepcopy(data)
        changed = _merge_with_defaults(data, cls)

        # TypeError surfaces when a comparison in validate() meets a wrong-typed value
        try:
            settings = cls(**data)
            settings.validate()
        except TypeError as e:
            raise ValueError(f"A setting has an invalid type: {e}") from e

        if changed and loaded_from_file:
            logger.info(
                "Settings updated during load (%d keys before merge), saving to disk",
                len(original_data),
            )
            try:
                _atomic_write_json(settings_file, asdict(settings))
            except OSError as write_err:
                logger.warning("Could not persist updated settings to disk: %s", write_err)

        logger.info("Settings load: loaded_from_file=%s", loaded_from_file)
        cls._cached_instance = settings
        return settings

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the cached settings instance.

        Use this in tests that need to verify settings loading behavior,
        or after programmatically modifying settings files.
        """
        cls._cached_instance = None
