"""Host bridges that keep everything in process memory."""

import copy
from typing import Any

from .base import HostBridge


class NullHostBridge(HostBridge):
    """Bridge used when no host is present. Every call is a no-op."""

    def post_message(self, message: dict[str, Any]) -> None:
        pass

    def get_state(self) -> dict[str, Any] | None:
        return None

    def set_state(self, state: dict[str, Any]) -> None:
        pass

    @property
    def backend_type(self) -> str:
        return "none"


class InMemoryHostBridge(HostBridge):
    """In-memory host (session-only).

    Keeps the last stored state and every posted message.
    Suitable for embedding in tests or another Python process.
    """

    def __init__(self, initial_state: dict[str, Any] | None = None):
        self._state = copy.deepcopy(initial_state)
        self.posted: list[dict[str, Any]] = []

    def post_message(self, message: dict[str, Any]) -> None:
        self.posted.append(dict(message))

    def get_state(self) -> dict[str, Any] | None:
        return copy.deepcopy(self._state)

    def set_state(self, state: dict[str, Any]) -> None:
        self._state = copy.deepcopy(state)

    @property
    def backend_type(self) -> str:
        return "memory"
