"""
NeaLLM: chat with local LLM servers (Ollama and LM Studio) from the terminal.

Each module hides a specific design decision: `llm` the provider APIs,
`session` the conversation state, `host` the optional embedding shell,
`ui` the Textual interface and `cli` the command line.
"""

__version__ = "0.1.0"

from .host import HostBridge, create_host_bridge
from .llm import LLMProvider, ModelInfo, ProviderKind, create_llm_provider
from .session import (
    ChatSessionController,
    ConnectionStatus,
    Message,
    MessageRole,
    ProviderSettings,
    SessionSnapshot,
)

__all__ = [
    "ChatSessionController",
    "ConnectionStatus",
    "HostBridge",
    "LLMProvider",
    "Message",
    "MessageRole",
    "ModelInfo",
    "ProviderKind",
    "ProviderSettings",
    "SessionSnapshot",
    "create_host_bridge",
    "create_llm_provider",
]
