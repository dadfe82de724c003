"""Chat session controller.

Owns the conversation and every piece of state derived from talking to
the configured provider. Hides:
- How requests are sent (httpx) and how failures are classified
- When connection probes and model refreshes happen
- How state is mirrored into a host state slot
"""

import time
from collections.abc import Callable
from typing import Any

import httpx
import pyperclip
from pydantic import ValidationError

from ..host import HostBridge, NullHostBridge
from ..llm import (
    LLMProvider,
    ModelInfo,
    ProviderKind,
    ProviderRequest,
    create_llm_provider,
    default_base_url,
)
from .models import (
    ConnectionStatus,
    Message,
    MessageRole,
    ProviderSettings,
    SessionEvent,
    SessionSnapshot,
)
from .scheduler import ProbeScheduler

DebugCallback = Callable[[str, str, str], None]
SessionListener = Callable[[SessionEvent], None]

# Seconds between a provider/address change and the connection probe it triggers
PROBE_DEBOUNCE_SECONDS = 0.1


class CompletionHTTPError(Exception):
    """Raised when a provider answers a completion with a non-2xx status."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP error! status: {status_code}")
        self.status_code = status_code


def format_error_notice(error: BaseException) -> str:
    """Render a failure as the text of an assistant message."""
    description = str(error) or type(error).__name__
    return f"❌ **Error**: {description}"


class ChatSessionController:
    """Controller for a single chat session.

    All methods are called from one event loop. At most one completion
    request is outstanding at a time; probes and model refreshes run
    independently of it.

    Usage:
        async with ChatSessionController() as session:
            await session.start()
            reply = await session.submit("hello")
    """

    def __init__(
        self,
        settings: ProviderSettings | None = None,
        host: HostBridge | None = None,
        client: httpx.AsyncClient | None = None,
        clipboard: Callable[[str], None] | None = None,
        probe_delay: float = PROBE_DEBOUNCE_SECONDS,
        auto_refresh_models: bool = True,
        debug_callback: DebugCallback | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            settings: Provider settings; None restores them from the host
                or falls back to the built-in default
            host: Host bridge; None runs without a host
            client: HTTP client; None creates one owned by the controller
            clipboard: Function copying text to the clipboard (default: pyperclip)
            probe_delay: Debounce delay before a settings-triggered probe
            auto_refresh_models: Fetch models after a successful probe when
                the cached list is empty
            debug_callback: Receives (level, component, message) trace records
        """
        self._host = host or NullHostBridge()
        self._client = client
        self._owns_client = client is None
        self._clipboard = clipboard or pyperclip.copy
        self._auto_refresh_models = auto_refresh_models
        self._debug_callback = debug_callback
        self._listeners: list[SessionListener] = []

        self._messages: list[Message] = []
        self._draft = ""
        self._pending = False
        self._status = ConnectionStatus.DISCONNECTED
        self._models: list[ModelInfo] = []
        self._loading_models = False
        self._last_message_id = 0
        # Bumped by every settings change; listings fetched under an older
        # generation are discarded
        self._settings_generation = 0

        snapshot = self._load_snapshot()
        if snapshot is not None:
            self._messages = list(snapshot.messages)
            self._last_message_id = max(
                (int(m.id) for m in self._messages if m.id.isdigit()), default=0
            )
        if settings is not None:
            self._settings = settings
        elif snapshot is not None:
            self._settings = snapshot.settings
        else:
            self._settings = ProviderSettings()

        self._provider = create_llm_provider(self._settings.provider, self._settings.base_url)
        self._probe_scheduler = ProbeScheduler(self.probe_connection, delay=probe_delay)
        self._refresh_scheduler = ProbeScheduler(self.refresh_models, delay=probe_delay)

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    @property
    def draft(self) -> str:
        return self._draft

    @property
    def is_pending(self) -> bool:
        return self._pending

    @property
    def settings(self) -> ProviderSettings:
        return self._settings

    @property
    def provider(self) -> LLMProvider:
        return self._provider

    @property
    def status(self) -> ConnectionStatus:
        return self._status

    @property
    def models(self) -> list[ModelInfo]:
        return list(self._models)

    @property
    def is_loading_models(self) -> bool:
        return self._loading_models

    @property
    def probe_scheduler(self) -> ProbeScheduler:
        return self._probe_scheduler

    @property
    def refresh_scheduler(self) -> ProbeScheduler:
        return self._refresh_scheduler

    def snapshot(self) -> SessionSnapshot:
        """Capture the persistent part of the session."""
        return SessionSnapshot(messages=list(self._messages), settings=self._settings)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def add_listener(self, listener: SessionListener) -> None:
        """Register a callback invoked with the SessionEvent of every change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Route trace records to a (level, component, message) callback."""
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback is not None:
            self._debug_callback(level, component, message)

    def _emit(self, event: SessionEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
        if event in (SessionEvent.MESSAGES, SessionEvent.SETTINGS):
            try:
                self._host.set_state(self.snapshot().model_dump(mode="json"))
            except OSError as e:
                self._debug("warning", "Host", f"Could not save session state: {e}")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> ConnectionStatus:
        """Probe the provider once at session start."""
        return await self.probe_connection()

    async def aclose(self) -> None:
        """Cancel the scheduled probe and close the owned HTTP client."""
        self._probe_scheduler.cancel()
        self._refresh_scheduler.cancel()
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ChatSessionController":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def set_draft(self, text: str) -> None:
        """Replace the input draft."""
        if text != self._draft:
            self._draft = text
            self._emit(SessionEvent.DRAFT)

    async def submit(self, text: str | None = None) -> Message | None:
        """Send one user message and record the provider's answer.

        Only the trimmed text is sent; earlier turns are not included.

        Args:
            text: Message text (default: the current draft)

        Returns:
            The assistant message appended for this submit, or None when the
            text was blank or another submit is still pending
        """
        prompt = (self._draft if text is None else text).strip()
        if not prompt or self._pending:
            return None

        self._append(MessageRole.USER, prompt)
        self.set_draft("")
        self._set_pending(True)

        provider = self._provider
        model = self._settings.model
        try:
            request = provider.build_completion_request(prompt, model)
            self._debug("info", "LLM", f"{request.method} {request.url} (model={model})")
            response = await self._send(request)
            if not response.is_success:
                raise CompletionHTTPError(response.status_code)
            content = provider.parse_completion_response(response.json())
        except Exception as e:
            self._debug("error", "LLM", f"Completion failed: {e!r}")
            self._set_status(ConnectionStatus.DISCONNECTED)
            reply = self._append(MessageRole.ASSISTANT, format_error_notice(e))
        else:
            self._debug("debug", "LLM", f"Received {len(content)} characters")
            reply = self._append(MessageRole.ASSISTANT, content)
            self._set_status(ConnectionStatus.CONNECTED)
        finally:
            self._set_pending(False)
        return reply

    async def probe_connection(self) -> ConnectionStatus:
        """Check whether the provider's listing endpoint answers with 2xx.

        Never raises for network or timeout errors.
        """
        self._set_status(ConnectionStatus.CONNECTING)
        provider = self._provider
        request = provider.build_listing_request()
        try:
            response = await self._send(request)
        except Exception as e:
            self._debug("warning", "Probe", f"{request.url} unreachable: {e!r}")
            status = ConnectionStatus.DISCONNECTED
        else:
            self._debug("debug", "Probe", f"{request.url} -> {response.status_code}")
            if response.is_success:
                status = ConnectionStatus.CONNECTED
            else:
                status = ConnectionStatus.DISCONNECTED

        if provider is not self._provider:
            # The endpoint changed meanwhile and has a probe of its own scheduled
            self._debug("debug", "Probe", f"Discarding result for {request.url}")
            return self._status
        self._set_status(status)

        if status is ConnectionStatus.CONNECTED and self._auto_refresh_models and not self._models:
            await self.refresh_models()
        return status

    async def refresh_models(self) -> list[ModelInfo]:
        """Refetch the model list from the provider.

        Failures of any kind produce an empty list. When the refreshed list
        does not contain the selected model, the first listed model is
        selected instead.

        A listing that arrives after a settings change is discarded and
        the current (empty) list is returned.
        """
        provider = self._provider
        generation = self._settings_generation
        self._models = []
        self._loading_models = True
        self._emit(SessionEvent.MODELS)
        try:
            response = await self._send(provider.build_listing_request())
            if response.is_success:
                models = provider.parse_model_listing(response.json())
            else:
                self._debug("warning", "Models", f"Listing returned {response.status_code}")
                models = []
        except Exception as e:
            self._debug("warning", "Models", f"Listing failed: {e!r}")
            models = []

        if generation != self._settings_generation:
            self._debug("debug", "Models", "Settings changed during the listing, result dropped")
            return list(self._models)

        self._loading_models = False
        self._models = models
        self._emit(SessionEvent.MODELS)
        self._debug("info", "Models", f"{len(models)} model(s) available")

        names = {m.name for m in models}
        if models and self._settings.model not in names:
            self._debug("info", "Models", f"Selecting {models[0].name}")
            self._settings = self._settings.model_copy(update={"model": models[0].name})
            self._emit(SessionEvent.SETTINGS)
        return list(models)

    def update_settings(self, **changes: Any) -> ProviderSettings:
        """Merge changes into the provider settings.

        The cached model list is always discarded. Changing the provider or
        base address schedules a connection probe after the debounce delay;
        a later change replaces the earlier schedule. Any other change made
        while connected schedules a model refresh instead.

        Raises:
            ValueError: If a field name or value is invalid
        """
        unknown = set(changes) - set(ProviderSettings.model_fields)
        if unknown:
            raise ValueError(f"Unknown settings field(s): {', '.join(sorted(unknown))}")

        previous = self._settings
        try:
            updated = ProviderSettings.model_validate({**previous.model_dump(), **changes})
        except ValidationError as e:
            raise ValueError(str(e)) from e

        self._settings = updated
        endpoint_changed = (
            updated.provider != previous.provider or updated.base_url != previous.base_url
        )
        if endpoint_changed:
            self._provider = create_llm_provider(updated.provider, updated.base_url)

        self._settings_generation += 1
        self._models = []
        self._loading_models = False
        self._emit(SessionEvent.MODELS)
        self._emit(SessionEvent.SETTINGS)

        if endpoint_changed:
            self._refresh_scheduler.cancel()
            if not self._probe_scheduler.schedule():
                self._debug("debug", "Probe", "No running event loop, probe not scheduled")
        elif self._status is ConnectionStatus.CONNECTED and self._auto_refresh_models:
            if not self._refresh_scheduler.schedule():
                self._debug("debug", "Models", "No running event loop, refresh not scheduled")
        return updated

    def switch_provider(self, provider: ProviderKind | str) -> ProviderSettings:
        """Select a provider and its default base address."""
        return self.update_settings(provider=provider, base_url=default_base_url(provider))

    def clear_session(self) -> None:
        """Drop every message. Settings and status are kept."""
        self._messages = []
        self._emit(SessionEvent.MESSAGES)

    def copy_message_text(self, text: str) -> None:
        """Copy text to the system clipboard without reporting the outcome."""
        try:
            self._clipboard(text)
        except Exception as e:
            self._debug("warning", "Clipboard", f"Copy failed: {e}")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    async def _send(self, request: ProviderRequest) -> httpx.Response:
        return await self._get_client().request(
            request.method,
            request.url,
            json=request.json_body,
            headers=request.headers,
            timeout=request.timeout,
        )

    def _next_message_id(self) -> str:
        now_ms = time.time_ns() // 1_000_000
        self._last_message_id = max(now_ms, self._last_message_id + 1)
        return str(self._last_message_id)

    def _append(self, role: MessageRole, content: str) -> Message:
        message = Message(id=self._next_message_id(), role=role, content=content)
        self._messages.append(message)
        self._emit(SessionEvent.MESSAGES)
        return message

    def _set_pending(self, pending: bool) -> None:
        self._pending = pending
        self._emit(SessionEvent.PENDING)

    def _set_status(self, status: ConnectionStatus) -> None:
        if status is self._status:
            return
        self._status = status
        self._host.post_message({"type": "connectionStatus", "status": status.value})
        self._emit(SessionEvent.STATUS)

    def _load_snapshot(self) -> SessionSnapshot | None:
        state = self._host.get_state()
        if not state:
            return None
        try:
            return SessionSnapshot.model_validate(state)
        except ValidationError as e:
            self._debug("warning", "Host", f"Ignoring invalid saved state: {e}")
            return None
