from typing import Any

from ..base import LLMProvider
from ..models import (
    DEFAULT_MODEL_LABEL,
    LISTING_TIMEOUT_SECONDS,
    NO_RESPONSE_PLACEHOLDER,
    UNKNOWN_MODEL_NAME,
    ModelInfo,
    ProviderKind,
    ProviderRequest,
)

_JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class LMStudioProvider(LLMProvider):
    """LM Studio provider using its OpenAI-compatible API.

    Hidden design decisions:
    - Completions go through /v1/chat/completions with a one-message list
    - Models are listed by /v1/models
    - Listings may be wrapped in ``data`` or returned as a bare array
    """

    kind = ProviderKind.LMSTUDIO
    display_name = "LM Studio"
    default_base_url = "http://localhost:1234"

    def build_completion_request(self, prompt: str, model: str) -> ProviderRequest:
        return ProviderRequest(
            method="POST",
            url=self._url("/v1/chat/completions"),
            json_body={
                "model": model,
                "messages": [{"role": "user", "content": prompt}],
                "stream": False,
            },
            headers=dict(_JSON_HEADERS),
            timeout=None,
        )

    def parse_completion_response(self, body: Any) -> str:
        """Read ``choices[0].message.content``, tolerating any missing level."""
        if not isinstance(body, dict):
            return NO_RESPONSE_PLACEHOLDER
        choices = body.get("choices")
        if not isinstance(choices, list) or not choices:
            return NO_RESPONSE_PLACEHOLDER
        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if isinstance(content, str) and content:
            return content
        return NO_RESPONSE_PLACEHOLDER

    def build_listing_request(self) -> ProviderRequest:
        return ProviderRequest(
            method="GET",
            url=self._url("/v1/models"),
            headers=dict(_JSON_HEADERS),
            timeout=LISTING_TIMEOUT_SECONDS,
        )

    def parse_model_listing(self, body: Any) -> list[ModelInfo]:
        if isinstance(body, dict) and isinstance(body.get("data"), list):
            entries = body["data"]
        elif isinstance(body, list):
            entries = body
        else:
            return []

        models = []
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            name = entry.get("id") or entry.get("name") or UNKNOWN_MODEL_NAME
            label = entry.get("object") or entry.get("owned_by") or DEFAULT_MODEL_LABEL
            models.append(ModelInfo(name=str(name), size=str(label)))
        return models
