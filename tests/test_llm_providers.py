"""Unit tests for the llm module."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from neallm.llm import (
    LLMProvider,
    LMStudioProvider,
    ModelInfo,
    OllamaProvider,
    ProviderKind,
    create_llm_provider,
    default_base_url,
    resolve_provider_kind,
)
from neallm.llm.models import LISTING_TIMEOUT_SECONDS, NO_RESPONSE_PLACEHOLDER


class TestLLMProvider:
    """Tests for LLMProvider interface."""

    def test_provider_is_abstract(self):
        """Test that LLMProvider cannot be instantiated directly."""
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore

    def test_trailing_slash_is_not_doubled(self):
        """Test that a base address ending in '/' joins cleanly."""
        provider = OllamaProvider(base_url="http://box:11434/")
        assert provider.build_listing_request().url == "http://box:11434/api/tags"


class TestOllamaProvider:
    """Tests for the Ollama request shapes and parsing."""

    def test_completion_request(self):
        """Test the generate request carries prompt, model and no timeout."""
        request = OllamaProvider().build_completion_request("Hi", "llama2")

        assert request.method == "POST"
        assert request.url == "http://localhost:11434/api/generate"
        assert request.json_body == {"model": "llama2", "prompt": "Hi", "stream": False}
        assert request.headers == {"Content-Type": "application/json"}
        assert request.timeout is None

    def test_listing_request(self):
        """Test the tags request has a timeout and no headers."""
        request = OllamaProvider().build_listing_request()

        assert request.method == "GET"
        assert request.url == "http://localhost:11434/api/tags"
        assert request.json_body is None
        assert request.headers == {}
        assert request.timeout == LISTING_TIMEOUT_SECONDS

    def test_parse_completion(self):
        """Test the assistant text is read from 'response'."""
        assert OllamaProvider().parse_completion_response({"response": "Hello!"}) == "Hello!"

    @pytest.mark.parametrize("body", [{}, {"response": ""}, {"response": None}, [], "text"])
    def test_parse_completion_placeholder(self, body):
        """Test missing or empty text yields the placeholder."""
        assert OllamaProvider().parse_completion_response(body) == NO_RESPONSE_PLACEHOLDER

    def test_parse_listing(self):
        """Test entries map directly onto ModelInfo."""
        body = {"models": [{"name": "llama2", "size": 3800000000, "modified_at": "2024-01-01"}]}

        models = OllamaProvider().parse_model_listing(body)

        assert models == [ModelInfo(name="llama2", size=3800000000, modified_at="2024-01-01")]

    def test_parse_listing_fallbacks(self):
        """Test nameless entries and foreign shapes are normalized."""
        body = {"models": [{"size": 10}, "not-a-dict", {"name": "phi", "size": True}]}

        models = OllamaProvider().parse_model_listing(body)

        assert [m.name for m in models] == ["Unknown Model", "phi"]
        assert models[0].size == 10
        assert models[1].size is None

    @pytest.mark.parametrize("body", [None, [], {}, {"models": "nope"}])
    def test_parse_listing_unrecognized(self, body):
        """Test unrecognized listing shapes yield no models."""
        assert OllamaProvider().parse_model_listing(body) == []


class TestLMStudioProvider:
    """Tests for the LM Studio request shapes and parsing."""

    def test_completion_request(self):
        """Test the chat request sends a single user message."""
        request = LMStudioProvider().build_completion_request("Hi", "qwen")

        assert request.method == "POST"
        assert request.url == "http://localhost:1234/v1/chat/completions"
        assert request.json_body == {
            "model": "qwen",
            "messages": [{"role": "user", "content": "Hi"}],
            "stream": False,
        }
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["Accept"] == "application/json"
        assert request.timeout is None

    def test_listing_request(self):
        """Test the models request sends JSON headers and a timeout."""
        request = LMStudioProvider(base_url="http://gpu:1234").build_listing_request()

        assert request.method == "GET"
        assert request.url == "http://gpu:1234/v1/models"
        assert request.headers["Accept"] == "application/json"
        assert request.timeout == LISTING_TIMEOUT_SECONDS

    def test_parse_completion(self):
        """Test the text is read from choices[0].message.content."""
        body = {"choices": [{"message": {"role": "assistant", "content": "Sure."}}]}
        assert LMStudioProvider().parse_completion_response(body) == "Sure."

    @pytest.mark.parametrize("body", [
        {},
        {"choices": []},
        {"choices": ["x"]},
        {"choices": [{}]},
        {"choices": [{"message": {}}]},
        {"choices": [{"message": {"content": ""}}]},
        None,
    ])
    def test_parse_completion_placeholder(self, body):
        """Test any missing level yields the placeholder."""
        assert LMStudioProvider().parse_completion_response(body) == NO_RESPONSE_PLACEHOLDER

    def test_parse_listing_wrapped(self):
        """Test a 'data' wrapped listing uses id and object."""
        body = {"data": [{"id": "qwen", "object": "model"}, {"name": "phi", "owned_by": "me"}]}

        models = LMStudioProvider().parse_model_listing(body)

        assert models == [ModelInfo(name="qwen", size="model"), ModelInfo(name="phi", size="me")]

    def test_parse_listing_bare_array(self):
        """Test a bare array listing with empty entries falls back to defaults."""
        models = LMStudioProvider().parse_model_listing([{}, 42])

        assert models == [ModelInfo(name="Unknown Model", size="model")]

    @pytest.mark.parametrize("body", [None, {}, {"data": "x"}, "models"])
    def test_parse_listing_unrecognized(self, body):
        """Test unrecognized listing shapes yield no models."""
        assert LMStudioProvider().parse_model_listing(body) == []


class TestFactory:
    """Tests for create_llm_provider and friends."""

    def test_create_ollama(self):
        """Test creating an Ollama provider with its default address."""
        provider = create_llm_provider("ollama")

        assert isinstance(provider, OllamaProvider)
        assert provider.base_url == "http://localhost:11434"

    def test_create_lmstudio_with_base_url(self):
        """Test creating an LM Studio provider bound to another address."""
        provider = create_llm_provider(ProviderKind.LMSTUDIO, base_url="http://gpu:1234")

        assert isinstance(provider, LMStudioProvider)
        assert provider.base_url == "http://gpu:1234"

    def test_names_are_case_insensitive(self):
        """Test provider names ignore case and surrounding spaces."""
        assert resolve_provider_kind("  LMStudio ") is ProviderKind.LMSTUDIO

    def test_default_base_url(self):
        """Test each provider's default address."""
        assert default_base_url("ollama") == "http://localhost:11434"
        assert default_base_url(ProviderKind.LMSTUDIO) == "http://localhost:1234"

    def test_unsupported_provider(self):
        """Test an unknown name is rejected with the supported list."""
        with pytest.raises(ValueError, match="Unsupported provider: openai"):
            create_llm_provider("openai")

    @given(st.text())
    def test_resolve_accepts_only_known_names(self, name: str):
        """Property test: only 'ollama' and 'lmstudio' resolve."""
        if name.strip().lower() in ("ollama", "lmstudio"):
            assert resolve_provider_kind(name).value == name.strip().lower()
        else:
            with pytest.raises(ValueError):
                resolve_provider_kind(name)
