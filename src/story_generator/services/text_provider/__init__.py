"""Optional text-generation backends.

Providers are plain strategy objects. The generator core never needs one;
the content service consults whichever provider it was given.
"""

import logging
from typing import TYPE_CHECKING

from story_generator.services.text_provider._base import TextProvider
from story_generator.services.text_provider._ollama import OllamaProvider
from story_generator.services.text_provider._placeholder import PlaceholderProvider
from story_generator.services.text_provider._types import (
    PromptType,
    ProviderRequest,
    ProviderResponse,
)

if TYPE_CHECKING:
    from story_generator.settings import Settings

logger = logging.getLogger(__name__)

# "none" keeps the placeholder: there is always something to answer with
PROVIDERS: dict[str, type[TextProvider]] = {
    "none": PlaceholderProvider,
    "placeholder": PlaceholderProvider,
    "ollama": OllamaProvider,
}


def create_provider(settings: "Settings") -> TextProvider:
    """Build the provider named by settings.text_provider.

    Raises:
        ValueError: If the provider name is unknown.
    """
    provider_cls = PROVIDERS.get(settings.text_provider)
    if provider_cls is None:
        raise ValueError(
            f"Unknown text provider '{settings.text_provider}', "
            f"expected one of {sorted(PROVIDERS)}"
        )
    if provider_cls is OllamaProvider:
        provider: TextProvider = OllamaProvider(
            host=settings.ollama_url,
            model=settings.ollama_model,
            timeout=float(settings.ollama_timeout),
        )
    else:
        provider = provider_cls()
    logger.info("Using text provider: %s", provider.name)
    return provider


__all__ = [
    "PROVIDERS",
    "OllamaProvider",
    "PlaceholderProvider",
    "PromptType",
    "ProviderRequest",
    "ProviderResponse",
    "TextProvider",
    "create_provider",
]
