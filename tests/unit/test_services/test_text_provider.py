"""Tests for text providers and the provider registry."""

from unittest.mock import MagicMock, patch

import httpx
import ollama
import pytest

from story_generator.services.text_provider import (
    PROVIDERS,
    OllamaProvider,
    PlaceholderProvider,
    PromptType,
    ProviderRequest,
    ProviderResponse,
    TextProvider,
    create_provider,
)
from story_generator.settings import Settings
from story_generator.utils.exceptions import ProviderConnectionError, ProviderError


class TestProviderModels:
    """Tests for request and response models."""

    def test_request_defaults(self):
        """Requests default to temperature 0.7 and 500 tokens."""
        request = ProviderRequest(context="a hacker")
        assert request.temperature == 0.7
        assert request.max_tokens == 500
        assert request.parameters == {}

    def test_response_defaults_to_failure(self):
        """An empty response is unsuccessful."""
        response = ProviderResponse()
        assert response.success is False
        assert response.metadata == {}


class TestPlaceholderProvider:
    """Tests for PlaceholderProvider."""

    @pytest.mark.parametrize(
        "prompt_type,prefix",
        [
            (PromptType.NARRATIVE, "The story unfolds"),
            (PromptType.CHARACTER, "A mysterious figure"),
            (PromptType.LOCATION, "A place where shadows dance"),
            (PromptType.DIALOGUE, "Words that carry weight"),
            (PromptType.STORY_TEMPLATE, "An epic tale"),
        ],
    )
    def test_canned_content_per_type(self, prompt_type, prefix):
        """Each prompt type has its own canned answer."""
        response = PlaceholderProvider().generate(
            ProviderRequest(context="x", prompt_type=prompt_type)
        )
        assert response.success is True
        assert response.content.startswith(prefix)
        assert response.confidence == 0.5

    def test_unknown_type_echoes_context(self):
        """Other prompt types echo the context."""
        response = PlaceholderProvider().generate(
            ProviderRequest(context="a heist", prompt_type="general")
        )
        assert response.content == "AI-generated content based on: a heist"


class TestComplete:
    """Tests for TextProvider.complete."""

    def test_exception_becomes_failed_response(self):
        """complete() never raises; the error text is kept."""

        class BrokenProvider(TextProvider):
            name = "broken"

            def generate(self, request):
                raise ProviderError("backend down")

        response = BrokenProvider().complete(ProviderRequest(context="x"))
        assert response.success is False
        assert response.error == "backend down"

    def test_success_passes_through(self):
        """Successful responses are returned unchanged."""
        request = ProviderRequest(context="x", prompt_type=PromptType.NARRATIVE)
        assert PlaceholderProvider().complete(request).success is True


class TestOllamaProvider:
    """Tests for OllamaProvider with a mocked client."""

    @pytest.fixture
    def mock_client(self):
        """Patch ollama.Client so no server is needed."""
        with patch("story_generator.services.text_provider._ollama.ollama.Client") as client_cls:
            client = MagicMock()
            client_cls.return_value = client
            yield client

    def test_successful_chat(self, mock_client):
        """Chat content becomes a successful response with provider metadata."""
        mock_client.chat.return_value = {"message": {"content": "<think>hmm</think>A dark alley."}}
        provider = OllamaProvider(host="http://localhost:11434", model="llama3.2")

        response = provider.generate(
            ProviderRequest(
                context="a place", prompt_type=PromptType.LOCATION, temperature=0.3, max_tokens=64
            )
        )

        assert response.success is True
        assert response.content == "A dark alley."
        assert response.confidence == 0.7
        assert response.metadata == {"provider": "ollama", "model": "llama3.2"}
        kwargs = mock_client.chat.call_args.kwargs
        assert kwargs["model"] == "llama3.2"
        assert kwargs["options"] == {"temperature": 0.3, "num_predict": 64}
        assert "description" in kwargs["messages"][-1]["content"]

    def test_connection_error(self, mock_client):
        """Unreachable servers raise ProviderConnectionError."""
        mock_client.chat.side_effect = httpx.ConnectError("refused")
        provider = OllamaProvider(host="http://localhost:11434", model="llama3.2")
        with pytest.raises(ProviderConnectionError, match="Cannot reach Ollama"):
            provider.generate(ProviderRequest(context="x"))

    def test_response_error(self, mock_client):
        """Ollama errors raise ProviderError."""
        mock_client.chat.side_effect = ollama.ResponseError("model not found")
        provider = OllamaProvider(host="http://localhost:11434", model="missing")
        with pytest.raises(ProviderError, match="missing"):
            provider.generate(ProviderRequest(context="x"))

    def test_malformed_response(self, mock_client):
        """A reply without message content raises ProviderError."""
        mock_client.chat.return_value = {"unexpected": True}
        provider = OllamaProvider(host="http://localhost:11434", model="llama3.2")
        with pytest.raises(ProviderError, match="Malformed"):
            provider.generate(ProviderRequest(context="x"))

    def test_complete_converts_connection_error(self, mock_client):
        """Through complete(), connection failures become failed responses."""
        mock_client.chat.side_effect = httpx.ConnectError("refused")
        provider = OllamaProvider(host="http://localhost:11434", model="llama3.2")
        response = provider.complete(ProviderRequest(context="x"))
        assert response.success is False
        assert "Cannot reach Ollama" in response.error


class TestCreateProvider:
    """Tests for create_provider."""

    @pytest.mark.parametrize("name", ["none", "placeholder"])
    def test_offline_names_give_placeholder(self, name):
        """"none" and "placeholder" both give the placeholder provider."""
        provider = create_provider(Settings(text_provider=name))
        assert isinstance(provider, PlaceholderProvider)

    def test_ollama_uses_settings(self):
        """The Ollama provider is bound to the configured host and model."""
        with patch("story_generator.services.text_provider._ollama.ollama.Client") as client_cls:
            provider = create_provider(
                Settings(
                    text_provider="ollama",
                    ollama_url="http://gpu-box:11434",
                    ollama_model="mistral",
                    ollama_timeout=30,
                )
            )
        assert isinstance(provider, OllamaProvider)
        assert provider.model == "mistral"
        client_cls.assert_called_once_with(host="http://gpu-box:11434", timeout=30.0)

    def test_unknown_provider_raises(self):
        """Unknown names are rejected."""
        with pytest.raises(ValueError, match="Unknown text provider"):
            create_provider(Settings(text_provider="gpt"))

    def test_registry_matches_settings_choices(self):
        """Every provider name accepted by settings has an implementation."""
        from story_generator.settings import TEXT_PROVIDERS

        assert set(PROVIDERS) == set(TEXT_PROVIDERS)
