"""Data models for the chat session.

These models define the conversation, the provider settings and the
snapshot written to a host state slot, independent of the UI.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..llm.models import ProviderKind

DEFAULT_MODEL = "llama2"


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ConnectionStatus(str, Enum):
    """Reachability of the configured provider."""

    CONNECTED = "connected"
    CONNECTING = "connecting"
    DISCONNECTED = "disconnected"


class SessionEvent(str, Enum):
    """Which part of the controller state changed."""

    MESSAGES = "messages"
    SETTINGS = "settings"
    STATUS = "status"
    MODELS = "models"
    PENDING = "pending"
    DRAFT = "draft"


class Message(BaseModel):
    """One turn in the conversation. Never modified after creation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique id derived from creation time in milliseconds")
    role: MessageRole = Field(description="Who produced the message")
    content: str = Field(description="Message text")
    timestamp: datetime = Field(default_factory=datetime.now)


class ProviderSettings(BaseModel):
    """The active configuration for talking to a provider."""

    model_config = ConfigDict(frozen=True)

    provider: ProviderKind = Field(default=ProviderKind.OLLAMA)
    base_url: str = Field(default="http://localhost:11434", description="Server address")
    model: str = Field(default=DEFAULT_MODEL, description="Selected model name")


class SessionSnapshot(BaseModel):
    """Full session state as stored in a host state slot."""

    messages: list[Message] = Field(default_factory=list)
    settings: ProviderSettings = Field(default_factory=ProviderSettings)
