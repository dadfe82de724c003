from abc import ABC, abstractmethod
from typing import Any

from .models import ModelInfo, ProviderKind, ProviderRequest


class LLMProvider(ABC):
    """Abstract base class for local LLM server providers.

    This module hides the design decision of which server API is in use.
    Implementations own the provider-specific details:
    - Endpoint paths for completions and model listings
    - Request body shape and headers
    - Where the assistant text lives in a completion response
    - How a model listing is normalized into ModelInfo entries

    Providers never perform I/O themselves. They describe requests and
    interpret decoded JSON bodies; the session controller sends them.
    """

    kind: ProviderKind
    display_name: str
    default_base_url: str

    def __init__(self, base_url: str | None = None):
        """Initialize the provider.

        Args:
            base_url: Server address; None uses the provider's default
        """
        self._base_url = base_url if base_url is not None else self.default_base_url

    @property
    def base_url(self) -> str:
        """Get the configured server address."""
        return self._base_url

    def _url(self, path: str) -> str:
        """Join an endpoint path onto the base address."""
        return f"{self._base_url.rstrip('/')}{path}"

    @abstractmethod
    def build_completion_request(self, prompt: str, model: str) -> ProviderRequest:
        """Describe the call that submits a single prompt.

        Args:
            prompt: The user's text, sent as the only message
            model: Model to generate with

        Returns:
            ProviderRequest with no client timeout
        """

    @abstractmethod
    def parse_completion_response(self, body: Any) -> str:
        """Extract assistant text from a decoded completion response.

        Returns the no-response placeholder when the expected field is
        missing or empty.
        """

    @abstractmethod
    def build_listing_request(self) -> ProviderRequest:
        """Describe the call that enumerates available models."""

    @abstractmethod
    def parse_model_listing(self, body: Any) -> list[ModelInfo]:
        """Normalize a decoded listing response.

        Unrecognized shapes yield an empty list rather than an error.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self._base_url!r})"
