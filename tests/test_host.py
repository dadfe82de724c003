"""Unit tests for the host module."""
import json

import pytest

from neallm.host import (
    FileHostBridge,
    HostBridge,
    InMemoryHostBridge,
    NullHostBridge,
    create_host_bridge,
)


class TestHostBridge:
    """Tests for HostBridge interface."""

    def test_host_bridge_is_abstract(self):
        """Test that HostBridge cannot be instantiated directly."""
        with pytest.raises(TypeError):
            HostBridge()  # type: ignore


class TestNullHostBridge:
    def test_everything_is_noop(self):
        """Test the null bridge stores and posts nothing."""
        host = NullHostBridge()

        host.post_message({"type": "connectionStatus", "status": "connected"})
        host.set_state({"messages": []})

        assert host.get_state() is None
        assert host.backend_type == "none"


class TestInMemoryHostBridge:
    """Tests for the in-memory bridge."""

    def test_state_is_copied(self):
        """Test stored state is isolated from later mutation."""
        state = {"messages": [{"id": "1"}]}
        host = InMemoryHostBridge()

        host.set_state(state)
        state["messages"].append({"id": "2"})
        read = host.get_state()
        read["messages"].clear()

        assert host.get_state() == {"messages": [{"id": "1"}]}

    def test_initial_state(self):
        """Test the bridge starts with the given state."""
        host = InMemoryHostBridge({"settings": {"model": "phi"}})
        assert host.get_state() == {"settings": {"model": "phi"}}

    def test_posted_messages(self):
        """Test posted messages are recorded in order."""
        host = InMemoryHostBridge()

        host.post_message({"type": "a"})
        host.post_message({"type": "b"})

        assert host.posted == [{"type": "a"}, {"type": "b"}]
        assert host.backend_type == "memory"


class TestFileHostBridge:
    """Tests for the JSON file bridge."""

    def test_missing_file_reads_empty(self, tmp_path):
        """Test a missing file is an empty slot."""
        host = FileHostBridge(tmp_path / "state.json")
        assert host.get_state() is None

    def test_write_then_read(self, tmp_path):
        """Test state survives a new bridge on the same file."""
        path = tmp_path / "nested" / "state.json"
        FileHostBridge(path).set_state({"messages": [], "settings": {"model": "phi"}})

        assert json.loads(path.read_text(encoding="utf-8"))["settings"]["model"] == "phi"
        assert FileHostBridge(path).get_state() == {"messages": [], "settings": {"model": "phi"}}
        assert not path.with_name("state.json.tmp").exists()

    @pytest.mark.parametrize("content", ["not json", "[1, 2]", ""])
    def test_unreadable_file_reads_empty(self, tmp_path, content):
        """Test a corrupt or non-object file is an empty slot."""
        path = tmp_path / "state.json"
        path.write_text(content, encoding="utf-8")

        assert FileHostBridge(path).get_state() is None

    def test_backend_type(self, tmp_path):
        assert FileHostBridge(tmp_path / "s.json").backend_type == "file"


class TestFactory:
    """Tests for create_host_bridge."""

    def test_default_is_null(self):
        assert isinstance(create_host_bridge(), NullHostBridge)

    def test_memory(self):
        host = create_host_bridge("memory", initial_state={"messages": []})
        assert isinstance(host, InMemoryHostBridge)
        assert host.get_state() == {"messages": []}

    def test_file(self, tmp_path):
        host = create_host_bridge("file", path=tmp_path / "s.json")
        assert isinstance(host, FileHostBridge)
        assert host.path == tmp_path / "s.json"

    def test_unsupported(self):
        """Test an unknown backend is rejected."""
        with pytest.raises(ValueError, match="Unsupported host backend: redis"):
            create_host_bridge("redis")
