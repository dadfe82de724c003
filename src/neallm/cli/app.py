"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.table import Table

from ..session import ChatSessionController, ConnectionStatus
from ..ui.formatting import (
    connection_alert_text,
    format_model_size,
    provider_name,
    status_label,
)
from .providers import get_host, get_settings, make_debug_printer

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="neallm",
    help="Chat with local LLM servers (Ollama and LM Studio)",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


@app.command()
def chat(
    provider: str | None = typer.Option(
        None,
        "--provider",
        "-p",
        help="Provider: 'ollama' or 'lmstudio' (env: NEALLM_PROVIDER)"
    ),
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        "-u",
        help="Server address (env: NEALLM_BASE_URL)"
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Model name (env: NEALLM_MODEL)"
    ),
    state_file: Path | None = typer.Option(
        None,
        "--state-file",
        "-s",
        dir_okay=False,
        help="Keep messages and settings in this JSON file (env: NEALLM_STATE_FILE)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch interactive TUI chat interface."""
    from ..ui import run_textual_tui

    settings = get_settings(provider, base_url, model, console)
    host = get_host(state_file)

    try:
        asyncio.run(run_textual_tui(settings=settings, host=host, log_level=log_level))
    except KeyboardInterrupt:
        pass
    console.print("\n[dim]Goodbye![/dim]")


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Message to send"),
    provider: str | None = typer.Option(
        None,
        "--provider",
        "-p",
        help="Provider: 'ollama' or 'lmstudio' (env: NEALLM_PROVIDER)"
    ),
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        "-u",
        help="Server address (env: NEALLM_BASE_URL)"
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Model name (env: NEALLM_MODEL)"
    ),
    state_file: Path | None = typer.Option(
        None,
        "--state-file",
        "-s",
        dir_okay=False,
        help="Append the exchange to this session file (env: NEALLM_STATE_FILE)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show request tracing"
    ),
):
    """Send one message and print the reply."""
    async def _ask():
        controller = ChatSessionController(
            settings=get_settings(provider, base_url, model, console),
            host=get_host(state_file),
            auto_refresh_models=False,
            debug_callback=make_debug_printer(console) if verbose else None,
        )
        try:
            with console.status("[dim]Thinking...[/dim]"):
                reply = await controller.submit(prompt)
        finally:
            await controller.aclose()

        if reply is None:
            console.print("[yellow]Nothing to send.[/yellow]")
            raise typer.Exit(code=1)

        if controller.status is ConnectionStatus.DISCONNECTED:
            console.print(f"[red]{escape(reply.content)}[/red]")
            console.print(f"[dim]{connection_alert_text(controller.settings)}[/dim]")
            raise typer.Exit(code=1)

        console.print(Markdown(reply.content))

    asyncio.run(_ask())


@app.command()
def status(
    provider: str | None = typer.Option(
        None,
        "--provider",
        "-p",
        help="Provider: 'ollama' or 'lmstudio' (env: NEALLM_PROVIDER)"
    ),
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        "-u",
        help="Server address (env: NEALLM_BASE_URL)"
    ),
):
    """Check whether the provider's server is reachable."""
    async def _status():
        async with ChatSessionController(
            settings=get_settings(provider, base_url, None, console),
            auto_refresh_models=False,
        ) as controller:
            result = await controller.probe_connection()
            settings = controller.settings

        name = provider_name(settings)
        if result is ConnectionStatus.CONNECTED:
            console.print(f"[green]+[/green] {name} at {settings.base_url}: {status_label(result)}")
        else:
            console.print(f"[red]x[/red] {name} at {settings.base_url}: {status_label(result)}")
            raise typer.Exit(code=1)

    asyncio.run(_status())


@app.command()
def models(
    provider: str | None = typer.Option(
        None,
        "--provider",
        "-p",
        help="Provider: 'ollama' or 'lmstudio' (env: NEALLM_PROVIDER)"
    ),
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        "-u",
        help="Server address (env: NEALLM_BASE_URL)"
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Model to mark as selected (env: NEALLM_MODEL)"
    ),
):
    """List the models available on the provider's server."""
    async def _models():
        async with ChatSessionController(
            settings=get_settings(provider, base_url, model, console),
        ) as controller:
            result = await controller.probe_connection()
            available = controller.models
            settings = controller.settings

        if result is not ConnectionStatus.CONNECTED:
            console.print(f"[red]Error: {connection_alert_text(settings)}[/red]")
            raise typer.Exit(code=1)

        if not available:
            console.print(f"[yellow]No models reported by {provider_name(settings)}.[/yellow]")
            return

        table = Table(title=f"{provider_name(settings)} models")
        table.add_column("", width=1)
        table.add_column("Name", style="bold cyan")
        table.add_column("Size")
        table.add_column("Modified", style="dim")
        for info in available:
            marker = "*" if info.name == settings.model else ""
            table.add_row(marker, info.name, format_model_size(info.size), info.modified_at or "")
        console.print(table)

    asyncio.run(_models())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
