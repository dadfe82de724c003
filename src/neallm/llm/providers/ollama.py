from typing import Any

from ..base import LLMProvider
from ..models import (
    LISTING_TIMEOUT_SECONDS,
    NO_RESPONSE_PLACEHOLDER,
    UNKNOWN_MODEL_NAME,
    ModelInfo,
    ProviderKind,
    ProviderRequest,
)


class OllamaProvider(LLMProvider):
    """Ollama provider using the native generate API.

    Hidden design decisions:
    - Completions go through /api/generate with a bare prompt
    - Models are listed by /api/tags
    - Listing requests are sent without extra headers
    """

    kind = ProviderKind.OLLAMA
    display_name = "Ollama"
    default_base_url = "http://localhost:11434"

    def build_completion_request(self, prompt: str, model: str) -> ProviderRequest:
        return ProviderRequest(
            method="POST",
            url=self._url("/api/generate"),
            json_body={
                "model": model,
                "prompt": prompt,
                "stream": False,
            },
            headers={"Content-Type": "application/json"},
            timeout=None,
        )

    def parse_completion_response(self, body: Any) -> str:
        if not isinstance(body, dict):
            return NO_RESPONSE_PLACEHOLDER
        content = body.get("response")
        if isinstance(content, str) and content:
            return content
        return NO_RESPONSE_PLACEHOLDER

    def build_listing_request(self) -> ProviderRequest:
        return ProviderRequest(
            method="GET",
            url=self._url("/api/tags"),
            timeout=LISTING_TIMEOUT_SECONDS,
        )

    def parse_model_listing(self, body: Any) -> list[ModelInfo]:
        """Map each entry of the ``models`` array directly.

        Args:
            body: Decoded /api/tags response

        Returns:
            Models in listing order, empty for any other shape
        """
        if not isinstance(body, dict):
            return []
        entries = body.get("models")
        if not isinstance(entries, list):
            return []

        models = []
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            name = entry.get("name")
            size = entry.get("size")
            modified_at = entry.get("modified_at")
            models.append(ModelInfo(
                name=name if isinstance(name, str) and name else UNKNOWN_MODEL_NAME,
                size=size if isinstance(size, (int, str)) and not isinstance(size, bool) else None,
                modified_at=modified_at if isinstance(modified_at, str) else None,
            ))
        return models
