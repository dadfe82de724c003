"""UI configuration constants.

Display strings, limits and the log panel's level scale.
"""

import logging


class LogLevel:
    """Log panel thresholds, numbered like the stdlib logging levels.

    A record is shown when its level is at or above the panel's threshold.
    """

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR

    _LEVELS = (DEBUG, INFO, WARNING, ERROR)

    @classmethod
    def name(cls, level: int) -> str:
        return logging.getLevelName(level) if level in cls._LEVELS else "UNKNOWN"

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Parse a level name such as 'warning'; unknown names mean DEBUG."""
        level = logging.getLevelName(level_str.strip().upper())
        return level if level in cls._LEVELS else cls.DEBUG


# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages

# Chat display configuration
MESSAGE_TIME_FORMAT = "%H:%M"
THINKING_TEXT = "Thinking..."
INPUT_PLACEHOLDER = "Type your question or code request here..."

WELCOME_TITLE = "Welcome to NeaLLM"
WELCOME_LINES = (
    "Chat with local LLMs. Ollama & LM Studio supported.",
    "",
    "Lightning Fast - instant local responses, no cloud.",
    "100% Private - all data stays on your device.",
    "Smart Assistant - switch providers and models any time.",
    "",
    "Click on any message to copy it to clipboard.",
)
