"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout - single column
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Connection Status Bar
   ============================================ */
#status-bar {
    height: 1;
    padding: 0 2;
    background: $surface;
    color: $foreground;
}

/* ============================================
   Chat History Panel - Primary Focus Area
   ============================================ */
#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

#empty-state {
    width: 100%;
    height: auto;
    padding: 2 4;
    content-align: center middle;
    text-align: center;
    color: $text-muted;
}

#thinking {
    height: auto;
    margin: 0 0 1 0;
    padding: 0 2;
    border-left: tall $warning;
    color: $warning;
    text-style: italic;
}

/* ============================================
   Chat Messages - Conversation Display
   ============================================ */
.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 1 2;
    background: transparent;
}

.user-message {
    border-left: tall $success;
    background: $success 8%;

    & .message-header {
        color: $success;
        text-style: bold;
    }

    &:hover {
        background: $success 12%;
    }
}

.assistant-message {
    border-left: tall $secondary;
    background: $secondary 8%;

    & .message-header {
        color: $secondary;
        text-style: bold;
    }

    &:hover {
        background: $secondary 12%;
    }
}

.message-header {
    height: auto;
}

.message-content {
    height: auto;
    color: $foreground;
}

/* ============================================
   Debug/Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    overflow-y: scroll;
    scrollbar-gutter: stable;
}

/* ============================================
   Connection Alert
   ============================================ */
#connection-alert {
    height: 1;
    padding: 0 2;
    background: $error 15%;
    color: $error;
}

/* ============================================
   Chat Input Bar - Text Entry + Send
   ============================================ */
ChatInputBar {
    height: 5;
    border: round $primary 60%;
    background: $panel;

    &:focus-within {
        border: round $primary;
    }

    &.-busy {
        border: round $warning 60%;
    }
}

#chat-input {
    width: 1fr;
    height: 100%;
    border: none;
    padding: 0 1;
    background: transparent;
}

#send-btn {
    width: 10;
    height: 100%;
    margin: 0 0 0 1;
    min-width: 8;
    text-style: bold;
}

/* ============================================
   Markdown Content
   ============================================ */
Markdown {
    margin: 0;
    padding: 0;
}

MarkdownFence {
    background: $panel;
    margin: 1 0;
}

Header {
    background: $panel;
    height: 1;
}

HeaderTitle {
    color: $primary;
    text-style: bold;
}
"""

SETTINGS_CSS = """
SettingsScreen {
    align: center middle;
    background: $background 70%;
}

#settings-dialog {
    width: 72;
    height: auto;
    max-height: 90%;
    border: tall $accent;
    background: $surface;
    padding: 1 2;
}

#settings-title {
    width: 100%;
    text-align: center;
    text-style: bold;
    color: $accent;
    padding: 0 0 1 0;
    border-bottom: solid $border;
    margin-bottom: 1;
}

.settings-label {
    margin-top: 1;
    color: $text-muted;
    text-style: bold;
}

#model-row {
    height: auto;
}

#model-select, #model-input {
    width: 1fr;
}

#refresh-models {
    width: 14;
    margin-left: 1;
}

#model-info {
    color: $success;
    height: auto;
}

#settings-hint {
    margin-top: 1;
    padding: 1 2;
    background: $panel;
    border: round $border;
    color: $text-muted;
}

#settings-buttons {
    height: 3;
    align: center middle;
    margin-top: 1;
}
"""
