"""Tests for the Textual app driven through Textual's pilot."""
import pytest

from neallm.session import ConnectionStatus
from neallm.ui import NeaLLMApp
from neallm.ui.widgets import ChatHistoryWidget, ClickableMessage, ConnectionAlert


@pytest.mark.asyncio
async def test_startup_probe_and_chat(server, make_controller, clipboard, ollama_tags):
    """Test the app probes on start, renders replies and copies them."""
    server.route("GET", "/api/tags", json=ollama_tags)
    server.route("POST", "/api/generate", json={"response": "Hi there"})
    app = NeaLLMApp(controller=make_controller())

    async with app.run_test() as pilot:
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert app.controller.status is ConnectionStatus.CONNECTED
        assert app.controller.settings.model == "llama3:8b"
        assert not app.query_one("#connection-alert", ConnectionAlert).display

        await app.controller.submit("hello")
        await pilot.pause()

        assert len(app.query(ClickableMessage)) == 2
        assert app.query_one("#chat-history", ChatHistoryWidget).get_last_response() == "Hi there"

        await pilot.press("ctrl+r")
        assert clipboard == ["Hi there"]

        await pilot.press("ctrl+k")
        await pilot.pause()

        assert app.controller.messages == []
        assert len(app.query(ClickableMessage)) == 0


@pytest.mark.asyncio
async def test_unreachable_server_shows_alert(server, make_controller):
    """Test the alert is shown when the probe fails."""
    server.route("GET", "/api/tags", status=500, json={})
    app = NeaLLMApp(controller=make_controller())

    async with app.run_test() as pilot:
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert app.controller.status is ConnectionStatus.DISCONNECTED
        assert app.query_one("#connection-alert", ConnectionAlert).display
