"""Provider backed by a local Ollama server."""

import logging
import time

import httpx
import ollama

from story_generator.services.text_provider._base import TextProvider
from story_generator.services.text_provider._types import ProviderRequest, ProviderResponse
from story_generator.utils.exceptions import ProviderConnectionError, ProviderError
from story_generator.utils.json_parser import clean_provider_text

logger = logging.getLogger(__name__)

OLLAMA_CONFIDENCE = 0.7

SYSTEM_PROMPT = (
    "You write short, vivid fiction for a procedural story generator. "
    "When asked for a character, location, dialogue line or story template, "
    "answer with a single JSON object using the field names given in the request. "
    "When asked for a narrative, answer with plain prose."
)

# Field hints appended to structured requests
_FIELD_HINTS: dict[str, str] = {
    "character": "Fields: name, motivation, personality_traits (list of strings).",
    "location": "Fields: name, description.",
    "dialogue": "Fields: line.",
    "story_template": "Fields: setting, conflict, resolution, description, tags (list).",
}


class OllamaProvider(TextProvider):
    """Sends each request as one chat call to an Ollama model."""

    name = "ollama"

    def __init__(self, host: str, model: str, timeout: float = 120.0):
        """Create a provider bound to one Ollama host and model.

        Args:
            host: Base URL of the Ollama server.
            model: Model name to chat with.
            timeout: Request timeout in seconds.
        """
        self.host = host
        self.model = model
        self.timeout = timeout
        self._client = ollama.Client(host=host, timeout=timeout)
        logger.debug("Created Ollama client for %s (timeout=%.0fs)", host, timeout)

    def _build_prompt(self, request: ProviderRequest) -> str:
        hint = _FIELD_HINTS.get(request.prompt_type)
        return f"{request.context}\n\n{hint}" if hint else request.context

    def generate(self, request: ProviderRequest) -> ProviderResponse:
        """Chat with the model once.

        Raises:
            ProviderConnectionError: If the server cannot be reached.
            ProviderError: If Ollama rejects the request or the reply is malformed.
        """
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": self._build_prompt(request)},
        ]
        start_time = time.time()
        try:
            response = self._client.chat(
                model=self.model,
                messages=messages,
                options={
                    "temperature": request.temperature,
                    "num_predict": request.max_tokens,
                },
            )
        except (ConnectionError, httpx.ConnectError, httpx.TimeoutException) as e:
            raise ProviderConnectionError(f"Cannot reach Ollama at {self.host}: {e}") from e
        except ollama.ResponseError as e:
            raise ProviderError(f"Ollama rejected request for model {self.model}: {e}") from e

        try:
            content = response["message"]["content"]
        except (KeyError, TypeError) as e:
            raise ProviderError(f"Malformed Ollama response: {e}") from e

        logger.info(
            "Ollama call complete: model=%s, type=%s, %.2fs",
            self.model,
            request.prompt_type,
            time.time() - start_time,
        )
        return ProviderResponse(
            content=clean_provider_text(content),
            success=True,
            confidence=OLLAMA_CONFIDENCE,
            metadata={"provider": self.name, "model": self.model},
        )

    def __repr__(self) -> str:
        return f"OllamaProvider(host={self.host!r}, model={self.model!r})"
