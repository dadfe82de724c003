"""Host integration for NeaLLM.

Optional message channel and state slot supplied by an embedding shell.
"""

from .base import HostBridge
from .factory import create_host_bridge
from .file import FileHostBridge
from .in_memory import InMemoryHostBridge, NullHostBridge

__all__ = [
    "FileHostBridge",
    "HostBridge",
    "InMemoryHostBridge",
    "NullHostBridge",
    "create_host_bridge",
]
