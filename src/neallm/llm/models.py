from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Listing requests and connection probes give up after this many seconds
LISTING_TIMEOUT_SECONDS = 5.0

# Assistant text used when a provider answers without the expected field
NO_RESPONSE_PLACEHOLDER = "No response received"

# Name used for listed models that carry neither an id nor a name
UNKNOWN_MODEL_NAME = "Unknown Model"

# Size label used for LM Studio models without an object type or owner
DEFAULT_MODEL_LABEL = "model"


class ProviderKind(str, Enum):
    """Supported local model servers."""

    OLLAMA = "ollama"
    LMSTUDIO = "lmstudio"


class ProviderRequest(BaseModel):
    """An outbound HTTP call described independently of the HTTP client."""

    model_config = ConfigDict(frozen=True)

    method: str = Field(description="HTTP method")
    url: str = Field(description="Absolute request URL")
    json_body: dict[str, Any] | None = Field(
        default=None,
        description="JSON payload, None for requests without a body"
    )
    headers: dict[str, str] = Field(default_factory=dict)
    timeout: float | None = Field(
        default=None,
        description="Client-side timeout in seconds, None waits indefinitely"
    )


class ModelInfo(BaseModel):
    """A model advertised by a provider's listing endpoint."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Model name, unique within one listing")
    size: int | str | None = Field(
        default=None,
        description="Size in bytes (Ollama) or a category label (LM Studio)"
    )
    modified_at: str | None = Field(default=None, description="Last modification time")
