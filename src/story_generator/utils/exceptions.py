"""Centralized exception hierarchy for the story generator.

Exception Hierarchy:

    StoryGeneratorError (base for all application errors)
    ├── ConfigError (unusable configuration or entity pools)
    ├── SampleDataError (built-in YAML data failed to load)
    ├── ProviderError (text-generation provider failures)
    │   └── ProviderConnectionError (provider backend unreachable)
    └── JSONParseError (JSON parsing failures)

Usage:
    from story_generator.utils.exceptions import ConfigError

    try:
        generator.generate_story()
    except ConfigError:
        logger.error("Entity pools are not configured")
"""

import logging

logger = logging.getLogger(__name__)


class StoryGeneratorError(Exception):
    """Base exception for all story generator errors.

    All custom exceptions should inherit from this class to allow
    catching all application-specific errors with a single except clause.
    """

    pass


class ConfigError(StoryGeneratorError):
    """Raised when configuration makes generation impossible.

    The one unrecoverable input is an empty name or trait pool: characters
    cannot be generated without them, so the pipeline refuses to start.

    Attributes:
        field_name: The configuration field or pool that is invalid.
    """

    def __init__(self, message: str, field_name: str | None = None):
        """Initialize ConfigError with the offending field.

        Args:
            message: Human-readable error message.
            field_name: Name of the invalid pool or setting, if known.
        """
        super().__init__(message)
        self.field_name = field_name
        logger.debug("ConfigError initialized: field=%s", field_name)


class SampleDataError(StoryGeneratorError):
    """Raised when built-in templates or entity pools fail to load."""

    pass


class ProviderError(StoryGeneratorError):
    """Base exception for text-generation provider failures.

    Provider errors never escape the content service; they are converted
    into failed responses and the default generators take over.
    """

    pass


class ProviderConnectionError(ProviderError):
    """Raised when the provider backend cannot be reached.

    This typically indicates the Ollama server is not running or
    the connection timed out.
    """

    pass


class JSONParseError(StoryGeneratorError):
    """Raised when JSON extraction or parsing fails.

    Attributes:
        response_preview: First 500 chars of the raw response for debugging.
        expected_type: The expected type (dict, list, or model class name).
    """

    def __init__(
        self,
        message: str,
        response_preview: str | None = None,
        expected_type: str | None = None,
    ):
        """Initialize JSONParseError with parsing context.

        Args:
            message: Human-readable error message describing the parse failure.
            response_preview: Optional preview of the raw text that failed to parse.
            expected_type: Optional description of the expected JSON structure.
        """
        super().__init__(message)
        self.response_preview = response_preview
        self.expected_type = expected_type
