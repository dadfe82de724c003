"""Session factory functions for CLI.

Centralizes creation of provider settings and host bridges from command
options and environment variables. Hides configuration details from
command implementations.
"""

import os
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from ..host import HostBridge, create_host_bridge
from ..llm import ProviderKind, default_base_url, resolve_provider_kind
from ..session import ProviderSettings
from ..session.models import DEFAULT_MODEL

# Default console for output
_console = Console()


def get_settings(
    provider: str | None = None,
    base_url: str | None = None,
    model: str | None = None,
    console: Console | None = None,
) -> ProviderSettings | None:
    """Build provider settings from options, falling back to the environment.

    Args:
        provider: Provider name from the command line
        base_url: Server address from the command line
        model: Model name from the command line
        console: Optional Rich console for output

    Returns:
        ProviderSettings, or None when nothing was configured so a saved
        session (or the defaults) applies

    Raises:
        typer.Exit: If the provider name is not supported

    Environment variables:
        NEALLM_PROVIDER: Provider type (ollama, lmstudio; default: ollama)
        NEALLM_BASE_URL: Server address (default: the provider's default)
        NEALLM_MODEL: Model name (default: llama2)
    """
    import typer

    con = console or _console
    provider = provider or os.getenv("NEALLM_PROVIDER")
    base_url = base_url or os.getenv("NEALLM_BASE_URL")
    model = model or os.getenv("NEALLM_MODEL")

    if not any((provider, base_url, model)):
        return None

    try:
        kind = resolve_provider_kind(provider or ProviderKind.OLLAMA.value)
    except ValueError as e:
        con.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    return ProviderSettings(
        provider=kind,
        base_url=base_url or default_base_url(kind),
        model=model or DEFAULT_MODEL,
    )


def get_host(state_file: Path | None = None) -> HostBridge:
    """Create the host bridge holding the session state slot.

    Args:
        state_file: JSON file for the state slot; None reads NEALLM_STATE_FILE

    Returns:
        File-backed bridge when a state file is configured, else a null bridge
    """
    path = state_file or os.getenv("NEALLM_STATE_FILE")
    if path:
        return create_host_bridge("file", path=path)
    return create_host_bridge("none")


def make_debug_printer(console: Console | None = None):
    """Create a debug callback that prints trace records to the console."""
    con = console or _console

    def _print(level: str, component: str, message: str) -> None:
        con.print(f"[dim]{level.upper():<7} \\[{component}] {escape(message)}[/dim]")

    return _print
