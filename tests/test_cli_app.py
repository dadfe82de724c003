"""Tests for the Typer commands."""
import functools
import importlib

import pytest
from typer.testing import CliRunner

from neallm.session import ChatSessionController

cli_app = importlib.import_module("neallm.cli.app")
runner = CliRunner()


@pytest.fixture
def fake_cli(server, monkeypatch):
    """Point every command's controller at the fake server."""
    for name in ("NEALLM_PROVIDER", "NEALLM_BASE_URL", "NEALLM_MODEL", "NEALLM_STATE_FILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(
        cli_app,
        "ChatSessionController",
        functools.partial(ChatSessionController, client=server.client()),
    )
    return server


class TestStatus:
    def test_connected(self, fake_cli):
        """Test a reachable server exits cleanly."""
        fake_cli.route("GET", "/api/tags", json={"models": []})

        result = runner.invoke(cli_app.app, ["status"])

        assert result.exit_code == 0
        assert "Connected" in result.output

    def test_unreachable(self, fake_cli):
        """Test an unreachable server exits with an error code."""
        fake_cli.route("GET", "/v1/models", status=500, json={})

        result = runner.invoke(cli_app.app, ["status", "-p", "lmstudio"])

        assert result.exit_code == 1
        assert "Disconnected" in result.output


class TestModels:
    def test_lists_models(self, fake_cli, ollama_tags):
        """Test models are printed with the selected one marked."""
        fake_cli.route("GET", "/api/tags", json=ollama_tags)

        result = runner.invoke(cli_app.app, ["models", "-m", "mistral:7b"])

        assert result.exit_code == 0
        assert "llama3:8b" in result.output
        assert "mistral:7b" in result.output
        assert "4.3 GB" in result.output

    def test_no_models(self, fake_cli):
        fake_cli.route("GET", "/api/tags", json={"models": []})

        result = runner.invoke(cli_app.app, ["models"])

        assert result.exit_code == 0
        assert "No models reported by Ollama" in result.output


class TestAsk:
    def test_prints_reply(self, fake_cli):
        """Test the reply is printed."""
        fake_cli.route("POST", "/api/generate", json={"response": "Forty-two"})

        result = runner.invoke(cli_app.app, ["ask", "What is the answer?"])

        assert result.exit_code == 0
        assert "Forty-two" in result.output

    def test_failure_exits(self, fake_cli):
        """Test a failed completion prints the notice and exits with 1."""
        fake_cli.route("POST", "/api/generate", status=500, json={})

        result = runner.invoke(cli_app.app, ["ask", "hello"])

        assert result.exit_code == 1
        assert "HTTP error! status: 500" in result.output

    def test_blank_prompt(self, fake_cli):
        result = runner.invoke(cli_app.app, ["ask", "   "])

        assert result.exit_code == 1
        assert fake_cli.requests == []

    def test_state_file(self, fake_cli, tmp_path):
        """Test the exchange is appended to the session file."""
        fake_cli.route("POST", "/api/generate", json={"response": "ok"})
        state = tmp_path / "session.json"

        runner.invoke(cli_app.app, ["ask", "hello", "-s", str(state)])

        assert '"content": "hello"' in state.read_text(encoding="utf-8")
