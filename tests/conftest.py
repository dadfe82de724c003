"""Pytest configuration and shared fixtures."""
import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from neallm.session import ChatSessionController


class FakeServer:
    """In-process stand-in for a local LLM server.

    Routes are matched on (method, path); the host part of the URL is
    ignored so any base address reaches the same fake.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Callable[[httpx.Request], Any]] = {}

    def route(
        self,
        method: str,
        path: str,
        handler: Callable[[httpx.Request], Any] | None = None,
        *,
        json: Any = None,
        status: int = 200,
        text: str | None = None,
    ) -> None:
        """Register a response for a route.

        Either pass a handler (sync or async, returning httpx.Response) or
        describe a fixed response with json/status/text.
        """
        if handler is None:
            def handler(request: httpx.Request) -> httpx.Response:
                if text is not None:
                    return httpx.Response(status, text=text)
                return httpx.Response(status, json=json)
        self._routes[(method, path)] = handler

    def fail(self, method: str, path: str, error: type[httpx.TransportError]) -> None:
        """Make a route raise a transport error."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise error("simulated failure", request=request)
        self._routes[(method, path)] = handler

    def handle(self, request: httpx.Request) -> Any:
        self.requests.append(request)
        handler = self._routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"error": "not found"})
        return handler(request)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and r.url.path == path
        ]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))


def request_json(request: httpx.Request) -> Any:
    """Decode the JSON body a request was sent with."""
    return json.loads(request.content)


@pytest.fixture
def server():
    """Return a fresh fake LLM server."""
    return FakeServer()


@pytest.fixture
def clipboard():
    """Collects copied text instead of touching the system clipboard."""
    return []


@pytest.fixture
def make_controller(server, clipboard):
    """Factory for controllers talking to the fake server."""
    def _make(**kwargs: Any) -> ChatSessionController:
        kwargs.setdefault("client", server.client())
        kwargs.setdefault("clipboard", clipboard.append)
        kwargs.setdefault("probe_delay", 0.01)
        return ChatSessionController(**kwargs)
    return _make


@pytest.fixture
def ollama_tags():
    """Return a sample Ollama /api/tags payload."""
    return {
        "models": [
            {"name": "llama3:8b", "size": 4661224676, "modified_at": "2024-05-01T10:00:00Z"},
            {"name": "mistral:7b", "size": 4109865159, "modified_at": "2024-04-20T08:30:00Z"},
        ]
    }
