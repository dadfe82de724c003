"""Factory for creating host bridges."""

from typing import Any

from .base import HostBridge


def create_host_bridge(
    backend: str = "none",
    **kwargs: Any
) -> HostBridge:
    """Create a host bridge.

    Args:
        backend: Backend type ("none", "memory" or "file")
        **kwargs: Backend-specific configuration
            For memory:
                - initial_state: dict | None
            For file:
                - path: str | Path (default: ./neallm_state.json)

    Returns:
        HostBridge instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "none":
        from .in_memory import NullHostBridge
        return NullHostBridge()

    elif backend == "memory":
        from .in_memory import InMemoryHostBridge
        return InMemoryHostBridge(**kwargs)

    elif backend == "file":
        from .file import FileHostBridge
        return FileHostBridge(**kwargs)

    raise ValueError(
        f"Unsupported host backend: {backend}. "
        f"Supported backends: none, memory, file"
    )
