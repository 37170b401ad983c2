"""Base class for text-generation providers."""

import logging
from abc import ABC, abstractmethod

from story_generator.services.text_provider._types import ProviderRequest, ProviderResponse

logger = logging.getLogger(__name__)


class TextProvider(ABC):
    """Strategy interface for an optional text-generation backend.

    Subclasses implement generate(), which may raise. Callers go through
    complete(), which never does.
    """

    name: str = "base"

    @abstractmethod
    def generate(self, request: ProviderRequest) -> ProviderResponse:
        """Produce content for a request.

        Raises:
            ProviderError: If the backend fails.
        """

    def complete(self, request: ProviderRequest) -> ProviderResponse:
        """Run generate() and turn any exception into a failed response."""
        logger.debug(
            "%s provider request: type=%s, context=%.80s",
            self.name,
            request.prompt_type,
            request.context,
        )
        try:
            return self.generate(request)
        except Exception as e:
            logger.error("%s provider request failed: %s", self.name, e)
            return ProviderResponse(success=False, error=str(e))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
