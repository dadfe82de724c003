"""Chat session module for NeaLLM.

Holds the conversation state and mediates every call to the provider.
"""

from .controller import (
    ChatSessionController,
    CompletionHTTPError,
    DebugCallback,
    SessionListener,
    format_error_notice,
)
from .models import (
    ConnectionStatus,
    Message,
    MessageRole,
    ProviderSettings,
    SessionEvent,
    SessionSnapshot,
)
from .scheduler import ProbeScheduler

__all__ = [
    "ChatSessionController",
    "CompletionHTTPError",
    "ConnectionStatus",
    "DebugCallback",
    "Message",
    "MessageRole",
    "ProbeScheduler",
    "ProviderSettings",
    "SessionEvent",
    "SessionListener",
    "SessionSnapshot",
    "format_error_notice",
]
