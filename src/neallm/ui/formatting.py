"""Text formatting utilities for the TUI.

Hides how session state is turned into labels, icons and hints.
"""

from datetime import datetime

from ..llm import ModelInfo, create_llm_provider
from ..session import ConnectionStatus, ProviderSettings
from .config import MESSAGE_TIME_FORMAT

_STATUS_LABELS = {
    ConnectionStatus.CONNECTED: "Connected",
    ConnectionStatus.CONNECTING: "Connecting...",
    ConnectionStatus.DISCONNECTED: "Disconnected",
}

_STATUS_ICONS = {
    ConnectionStatus.CONNECTED: "●",
    ConnectionStatus.CONNECTING: "◌",
    ConnectionStatus.DISCONNECTED: "○",
}

_STATUS_STYLES = {
    ConnectionStatus.CONNECTED: "bold green",
    ConnectionStatus.CONNECTING: "bold yellow",
    ConnectionStatus.DISCONNECTED: "bold red",
}

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def status_label(status: ConnectionStatus) -> str:
    return _STATUS_LABELS[status]


def status_markup(status: ConnectionStatus) -> str:
    """Render the connection status as Rich markup with an icon."""
    style = _STATUS_STYLES[status]
    return f"[{style}]{_STATUS_ICONS[status]} {_STATUS_LABELS[status]}[/]"


def provider_name(settings: ProviderSettings) -> str:
    """Human-readable name of the configured provider."""
    return create_llm_provider(settings.provider).display_name


def format_status_bar(status: ConnectionStatus, settings: ProviderSettings) -> str:
    """Build the one-line status bar shown under the header."""
    return (
        f"{status_markup(status)}  "
        f"[bold cyan]Provider:[/] {provider_name(settings)}  "
        f"[bold magenta]Model:[/] {settings.model}  "
        f"[dim]{settings.base_url}[/]"
    )


def connection_alert_text(settings: ProviderSettings) -> str:
    return f"Unable to connect to {settings.provider.value}. Please check your settings."


def server_hint_text(settings: ProviderSettings) -> str:
    return f"Make sure your {settings.provider.value} server is running on {settings.base_url}"


def model_count_text(count: int) -> str:
    return f"{count} model{'' if count == 1 else 's'} available"


def format_model_size(size: int | str | None) -> str:
    """Format a listing size field.

    Byte counts become a human-readable size; labels pass through.
    """
    if size is None:
        return ""
    if isinstance(size, str):
        return size
    value = float(size)
    for unit in _SIZE_UNITS:
        if value < 1024 or unit == _SIZE_UNITS[-1]:
            break
        value /= 1024
    if unit == "B":
        return f"{int(value)} B"
    return f"{value:.1f} {unit}"


def format_model_option(model: ModelInfo) -> str:
    """Label for a model in the settings picker."""
    size = format_model_size(model.size)
    return f"{model.name} ({size})" if size else model.name


def format_message_time(timestamp: datetime) -> str:
    return timestamp.strftime(MESSAGE_TIME_FORMAT)
