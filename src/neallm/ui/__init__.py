"""Terminal UI module for NeaLLM.

Provides a Textual-based TUI on top of the chat session controller.

Module structure (each module hides a design decision):
- config.py: Constants (log levels, display strings)
- formatting.py: Status labels, model sizes, hints
- widgets.py: Custom widgets (chat history, input bar, status, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette and theme configuration
- screens.py: Modal dialogs (provider settings)
- app.py: Application orchestration (user interaction flow)
"""

from .app import NeaLLMApp, run_textual_tui
from .config import LogLevel
from .screens import SettingsScreen
from .widgets import ChatHistoryWidget, ChatInputBar, ConnectionStatusBar, DebugPanel

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "ConnectionStatusBar",
    "DebugPanel",
    "LogLevel",
    "NeaLLMApp",
    "SettingsScreen",
    "run_textual_tui",
]
