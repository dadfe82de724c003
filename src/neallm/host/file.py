"""JSON file host bridge.

Lets a terminal session survive a restart by keeping the state slot in a
file. Posted messages stay in memory; there is no host to receive them.
"""

import json
from pathlib import Path
from typing import Any

from .in_memory import InMemoryHostBridge


class FileHostBridge(InMemoryHostBridge):
    """State slot stored as a JSON document on disk.

    The file is created on the first write. A missing, unreadable or
    non-object file reads as an empty slot.
    """

    def __init__(self, path: str | Path = "./neallm_state.json"):
        super().__init__()
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get_state(self) -> dict[str, Any] | None:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return None
        return data if isinstance(data, dict) else None

    def set_state(self, state: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        tmp_path.write_text(json.dumps(state, indent=2), encoding="utf-8")
        tmp_path.replace(self._path)

    @property
    def backend_type(self) -> str:
        return "file"
