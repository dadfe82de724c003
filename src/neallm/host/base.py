"""Abstract base class for host bridges.

A host is an optional shell embedding the chat session (an editor panel,
a desktop wrapper). The abstraction hides:
- How messages reach the host
- Where the session state slot lives (memory, file, host API)
"""

from abc import ABC, abstractmethod
from typing import Any


class HostBridge(ABC):
    """Message channel and key/value state slot offered by a host.

    The session controller always receives a bridge; running without a
    host means receiving a NullHostBridge.
    """

    @abstractmethod
    def post_message(self, message: dict[str, Any]) -> None:
        """Send a notification to the host."""

    @abstractmethod
    def get_state(self) -> dict[str, Any] | None:
        """Read the state slot, None when nothing was stored."""

    @abstractmethod
    def set_state(self, state: dict[str, Any]) -> None:
        """Replace the state slot contents."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
