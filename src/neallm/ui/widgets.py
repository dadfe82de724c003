"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Chat message rendering and incremental updates
- Connection status display
- Log rendering and level filtering
"""

from datetime import datetime

from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import Button, Markdown, RichLog, Static, TextArea

from ..session import ConnectionStatus, Message, MessageRole, ProviderSettings
from .config import (
    INPUT_HISTORY_MAX_SIZE,
    INPUT_PLACEHOLDER,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    THINKING_TEXT,
    WELCOME_LINES,
    WELCOME_TITLE,
    LogLevel,
)
from .formatting import connection_alert_text, format_message_time, format_status_bar


class ClickableMessage(Vertical):
    """A chat message container that asks for its content to be copied when clicked."""

    class CopyRequested(TextualMessage):
        """Posted when the user clicks a message."""

        def __init__(self, content: str) -> None:
            super().__init__()
            self.content = content

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        self.post_message(self.CopyRequested(self._content))


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and Send button."""

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class DraftChanged(TextualMessage):
        """Message sent whenever the input text changes."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Send message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        text_area.highlight_cursor_line = False
        text_area.border_title = INPUT_PLACEHOLDER
        text_area.focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self._submit()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        event.stop()
        self.post_message(self.DraftChanged(event.text_area.text))

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Note: ctrl+enter cannot work in terminals (terminal doesn't pass
        ctrl/shift modifiers with Enter). Use ctrl+j as the submit shortcut.
        """
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()
        elif event.key == "up" and self._is_cursor_at_start():
            self._navigate_history(-1)
            event.prevent_default()
            event.stop()
        elif event.key == "down" and self._is_cursor_at_end():
            self._navigate_history(1)
            event.prevent_default()
            event.stop()

    def _is_cursor_at_start(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        return text_area.cursor_location == (0, 0)

    def _is_cursor_at_end(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        lines = text_area.text.split("\n")
        return text_area.cursor_location == (len(lines) - 1, len(lines[-1]))

    def _navigate_history(self, direction: int) -> None:
        if not self._history:
            return
        text_area = self.query_one("#chat-input", TextArea)
        if direction < 0:  # Up
            if self._history_index == -1:
                self._history_index = len(self._history) - 1
            elif self._history_index > 0:
                self._history_index -= 1
        else:  # Down
            if self._history_index < len(self._history) - 1:
                self._history_index += 1
            else:
                self._history_index = -1
                text_area.text = ""
                return
        text_area.text = self._history[self._history_index]

    def _submit(self) -> None:
        if self.has_class("-busy"):
            return
        value = self.query_one("#chat-input", TextArea).text
        stripped = value.strip()
        if stripped and (not self._history or self._history[-1] != stripped):
            self._history.append(stripped)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._history_index = -1
        self.post_message(self.Submitted(value))

    def set_text(self, text: str) -> None:
        """Replace the input text unless it already matches."""
        text_area = self.query_one("#chat-input", TextArea)
        if text_area.text != text:
            text_area.text = text

    def set_busy(self, busy: bool) -> None:
        """Disable input and the Send button while a request is pending."""
        self.set_class(busy, "-busy")
        self.query_one("#chat-input", TextArea).read_only = busy
        self.query_one("#send-btn", Button).disabled = busy

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()


class ConnectionStatusBar(Static):
    """One-line summary of connection status, provider and model."""

    def update_status(self, status: ConnectionStatus, settings: ProviderSettings) -> None:
        self.update(format_status_bar(status, settings))


class ConnectionAlert(Static):
    """Banner shown while the provider is unreachable."""

    def update_status(self, status: ConnectionStatus, settings: ProviderSettings) -> None:
        self.display = status is ConnectionStatus.DISCONNECTED
        self.update(f"[bold]![/] {connection_alert_text(settings)}")


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped log messages from the session controller and the UI.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    _LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    _COMPONENT_COLORS = {
        "TUI": "cyan",
        "LLM": "magenta",
        "Probe": "green",
        "Models": "bright_blue",
        "Host": "bright_green",
        "Clipboard": "bright_yellow",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def add_entry(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, LLM, Probe, Models, etc.)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        from rich.markup import escape

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."
        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_color = self._LEVEL_COLORS.get(level, "white")
        comp_color = self._COMPONENT_COLORS.get(component, "white")

        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{LogLevel.name(level):<5}[/] "
            f"[{comp_color}]\\[{component}][/] {escape(message)}"
        )

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history kept in sync with the session's message list."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_MAXIMIZE = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._rendered_ids: list[str] = []
        self._messages: list[Message] = []

    def compose(self):
        welcome = "\n".join((f"[bold]{WELCOME_TITLE}[/]", "", *WELCOME_LINES))
        yield Static(welcome, id="empty-state")
        yield Static(THINKING_TEXT, id="thinking")

    def on_mount(self) -> None:
        self.query_one("#thinking", Static).display = False

    def sync(self, messages: list[Message], pending: bool) -> None:
        """Render the given conversation.

        Messages already on screen are kept when the new list extends the
        rendered one; any other change re-renders from scratch.
        """
        ids = [m.id for m in messages]
        if ids[:len(self._rendered_ids)] != self._rendered_ids:
            self.query(".chat-message").remove()
            self._rendered_ids = []

        thinking = self.query_one("#thinking", Static)
        for msg in messages[len(self._rendered_ids):]:
            self.mount(self._build_message(msg), before=thinking)
            self._rendered_ids.append(msg.id)
        self._messages = list(messages)

        self.query_one("#empty-state", Static).display = not messages and not pending
        thinking.display = pending
        if messages:
            self.border_subtitle = f"{len(messages)} messages"
        else:
            self.border_subtitle = "Conversation history"
        self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Get the last assistant response."""
        for msg in reversed(self._messages):
            if msg.role is MessageRole.ASSISTANT:
                return msg.content
        return None

    def _build_message(self, msg: Message) -> ClickableMessage:
        if msg.role is MessageRole.USER:
            prefix, border_class, icon = "You", "user-message", ">"
        else:
            prefix, border_class, icon = "Assistant", "assistant-message", "<"

        header_text = f"{icon} {prefix} [{format_message_time(msg.timestamp)}]"
        container = ClickableMessage(content=msg.content, classes=f"chat-message {border_class}")
        container.compose_add_child(Static(header_text, classes="message-header", markup=False))
        if msg.role is MessageRole.ASSISTANT:
            container.compose_add_child(Markdown(msg.content, classes="message-content"))
        else:
            container.compose_add_child(
                Static(msg.content, classes="message-content", markup=False)
            )
        return container
