"""Validation functions for Settings."""

import logging
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from story_generator.settings._types import LOG_LEVELS, TEXT_PROVIDERS

if TYPE_CHECKING:
    from story_generator.settings._settings import Settings

logger = logging.getLogger(__name__)


def validate(settings: "Settings") -> None:
    """Validate all settings fields.

    Raises:
        ValueError: If any field contains an invalid value.
    """
    _validate_log_level(settings)
    _validate_generation_counts(settings)
    _validate_random_seed(settings)
    _validate_text_provider(settings)
    _validate_ollama(settings)
    _validate_provider_request(settings)


def _validate_log_level(settings: "Settings") -> None:
    """Validate log_level is a known logging level."""
    if settings.log_level not in LOG_LEVELS:
        raise ValueError(
            f"log_level must be one of {list(LOG_LEVELS.keys())}, got {settings.log_level}"
        )


def _validate_generation_counts(settings: "Settings") -> None:
    """Validate the cast and location bounds."""
    if not 1 <= settings.max_characters <= 50:
        raise ValueError(
            f"max_characters must be between 1 and 50, got {settings.max_characters}"
        )
    if not 0 <= settings.max_locations <= 100:
        raise ValueError(f"max_locations must be between 0 and 100, got {settings.max_locations}")


def _validate_random_seed(settings: "Settings") -> None:
    if settings.random_seed is not None and (
        isinstance(settings.random_seed, bool) or not isinstance(settings.random_seed, int)
    ):
        raise ValueError(f"random_seed must be an integer or null, got {settings.random_seed!r}")


def _validate_text_provider(settings: "Settings") -> None:
    if settings.text_provider not in TEXT_PROVIDERS:
        raise ValueError(
            f"text_provider must be one of {list(TEXT_PROVIDERS.keys())}, "
            f"got {settings.text_provider}"
        )


def _validate_ollama(settings: "Settings") -> None:
    """Validate the Ollama URL, model and timeout."""
    parsed = urlparse(settings.ollama_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Invalid Ollama URL: {settings.ollama_url}")
    if not settings.ollama_model.strip():
        raise ValueError("ollama_model cannot be empty")
    if not 1 <= settings.ollama_timeout <= 3600:
        raise ValueError(
            f"ollama_timeout must be between 1 and 3600 seconds, got {settings.ollama_timeout}"
        )


def _validate_provider_request(settings: "Settings") -> None:
    """Validate the temperature and token budget sent with provider requests."""
    if not 0.0 <= settings.provider_temperature <= 2.0:
        raise ValueError(
            f"provider_temperature must be between 0.0 and 2.0, "
            f"got {settings.provider_temperature}"
        )
    if not 1 <= settings.provider_max_tokens <= 32768:
        raise ValueError(
            f"provider_max_tokens must be between 1 and 32768, "
            f"got {settings.provider_max_tokens}"
        )
