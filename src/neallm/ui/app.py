"""Main Textual TUI application.

Orchestrates the UI components and forwards user interaction to the
chat session controller.
"""

import asyncio
import contextlib

import pyperclip
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..host import HostBridge
from ..session import ChatSessionController, ConnectionStatus, ProviderSettings, SessionEvent
from .config import LogLevel
from .formatting import provider_name, status_label
from .screens import SettingsScreen
from .styles import APP_CSS
from .themes import NEALLM_DARK
from .widgets import (
    ChatHistoryWidget,
    ChatInputBar,
    ClickableMessage,
    ConnectionAlert,
    ConnectionStatusBar,
    DebugPanel,
)


class NeaLLMApp(App):
    """Textual TUI for chatting with a local LLM server."""

    CSS = APP_CSS
    TITLE = "NeaLLM"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+k", "clear_chat", "Clear Chat", priority=True),
        Binding("ctrl+s", "show_settings", "Settings"),
        Binding("ctrl+t", "test_connection", "Test Connection"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
    ]

    def __init__(
        self,
        settings: ProviderSettings | None = None,
        host: HostBridge | None = None,
        log_level: str | None = None,
        controller: ChatSessionController | None = None,
    ) -> None:
        super().__init__()
        self._log_level = log_level
        self.controller = controller or ChatSessionController(
            settings=settings,
            host=host,
            clipboard=self._copy_text,
        )

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ConnectionStatusBar(id="status-bar")
        yield ChatHistoryWidget(id="chat-history")
        yield DebugPanel(id="debug-panel")
        yield ConnectionAlert(id="connection-alert")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(NEALLM_DARK)
        self.theme = "neallm-dark"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.add_entry(
                "TUI", f"Log panel enabled with level: {self._log_level.upper()}", LogLevel.INFO
            )

        def debug_callback(level: str, component: str, message: str) -> None:
            """Route controller trace records to the log panel."""
            log_panel.add_entry(component, message, LogLevel.from_string(level))

        self.controller.set_debug_callback(debug_callback)
        self.controller.add_listener(self._on_session_event)

        self._render_conversation()
        self._render_connection()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

        self.run_worker(self.controller.start(), group="probe")

    def on_unmount(self) -> None:
        self.controller.remove_listener(self._on_session_event)
        self.controller.set_debug_callback(None)

    # ------------------------------------------------------------------
    # Controller events
    # ------------------------------------------------------------------

    def _on_session_event(self, event: SessionEvent) -> None:
        if event in (SessionEvent.MESSAGES, SessionEvent.PENDING):
            self._render_conversation()
        elif event in (SessionEvent.STATUS, SessionEvent.SETTINGS):
            self._render_connection()
        elif event is SessionEvent.DRAFT:
            self.query_one("#chat-input-bar", ChatInputBar).set_text(self.controller.draft)

    def _render_conversation(self) -> None:
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.sync(self.controller.messages, self.controller.is_pending)
        self.query_one("#chat-input-bar", ChatInputBar).set_busy(self.controller.is_pending)

    def _render_connection(self) -> None:
        status = self.controller.status
        settings = self.controller.settings
        self.query_one("#status-bar", ConnectionStatusBar).update_status(status, settings)
        self.query_one("#connection-alert", ConnectionAlert).update_status(status, settings)
        self.sub_title = f"{provider_name(settings)} | {settings.model} | {status_label(status)}"

    # ------------------------------------------------------------------
    # Widget events
    # ------------------------------------------------------------------

    def on_chat_input_bar_draft_changed(self, event: ChatInputBar.DraftChanged) -> None:
        self.controller.set_draft(event.value)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        self.controller.set_draft(event.value)
        if self.controller.is_pending or not event.value.strip():
            return
        self._submit()

    @work(group="completion")
    async def _submit(self) -> None:
        """Send the current draft as a background async worker."""
        reply = await self.controller.submit()
        if reply is not None and self.controller.status is ConnectionStatus.DISCONNECTED:
            self.notify("Request failed", severity="error", timeout=5)

    def on_clickable_message_copy_requested(self, event: ClickableMessage.CopyRequested) -> None:
        self.controller.copy_message_text(event.content)
        self.notify("Copied to clipboard", timeout=2)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_clear_chat(self) -> None:
        """Clear the chat history."""
        self.controller.clear_session()
        self.notify("Chat cleared", timeout=2)

    def action_show_settings(self) -> None:
        self.push_screen(SettingsScreen(self.controller))

    def action_test_connection(self) -> None:
        self.run_worker(self.controller.probe_connection(), group="probe")

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.controller.copy_message_text(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")

    def _copy_text(self, text: str) -> None:
        """Copy via the system clipboard, falling back to the terminal (OSC 52)."""
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException:
            self.copy_to_clipboard(text)


async def run_textual_tui(
    settings: ProviderSettings | None = None,
    host: HostBridge | None = None,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        settings: Provider settings, None restores them from the host or
            uses the defaults
        host: Host bridge holding the session state slot
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = NeaLLMApp(settings=settings, host=host, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        with contextlib.suppress(RuntimeError):
            await app.controller.aclose()
