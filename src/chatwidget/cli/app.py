"""Main CLI application using Typer."""
import asyncio
import json
from enum import Enum
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..session import INACTIVITY_TIMEOUT_SECONDS, ConversationSession
from .providers import configure_logging, get_backend, get_config, get_transcript_store

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="chatwidget",
    help="Terminal chat widget with local history and an inactivity rating prompt",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


class StorageBackend(str, Enum):
    MEMORY = "memory"
    FILE = "file"


class LogLevelName(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@app.command()
def run(
    api_url: str | None = typer.Option(
        None,
        "--api-url",
        "-u",
        help="Base URL of the conversation API (env: CHATWIDGET_API_URL)"
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="Widget template, .json or .yaml (env: CHATWIDGET_CONFIG)"
    ),
    storage: StorageBackend = typer.Option(
        StorageBackend.FILE,
        "--storage",
        "-s",
        help="History storage: 'file' (persistent) or 'memory' (session-only)"
    ),
    storage_path: Path | None = typer.Option(
        None,
        "--storage-path",
        help="History file (env: CHATWIDGET_STORAGE_PATH)"
    ),
    timeout: float = typer.Option(
        INACTIVITY_TIMEOUT_SECONDS,
        "--timeout",
        "-t",
        min=1.0,
        help="Seconds of inactivity before asking for a rating"
    ),
    log_level: LogLevelName | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the chat widget."""
    level = log_level.value if log_level else None
    configure_logging(level or "warning", console_output=False)
    config = get_config(config_path, console)
    store = get_transcript_store(storage.value, storage_path)

    async def _run():
        from ..ui import run_textual_tui

        backend = get_backend(api_url)
        session = ConversationSession(
            backend=backend,
            config=config,
            store=store,
            inactivity_timeout=timeout,
        )
        try:
            await run_textual_tui(session, config, log_level=level)
        finally:
            await backend.close()
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        pass


@app.command(name="config")
def show_config(
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="Widget template, .json or .yaml (env: CHATWIDGET_CONFIG)"
    ),
):
    """Print the effective widget configuration."""
    configure_logging()
    config = get_config(config_path, console)
    console.print_json(json.dumps(config.model_dump(by_alias=True), ensure_ascii=False))


@app.command()
def history(
    storage_path: Path | None = typer.Option(
        None,
        "--storage-path",
        help="History file (env: CHATWIDGET_STORAGE_PATH)"
    ),
    limit: int = typer.Option(
        0,
        "--limit",
        "-n",
        min=0,
        help="Show only the last N messages (0 = all)"
    ),
):
    """Print the stored chat history."""
    configure_logging()
    store = get_transcript_store("file", storage_path)
    messages = store.load()

    if not messages:
        console.print("[yellow]No chat history stored[/yellow]")
        return

    shown = messages[-limit:] if limit else messages

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Role", style="yellow", width=10)
    table.add_column("Content")
    table.add_column("Rating", style="green", width=6)

    from ..ui.formatting import render_message

    offset = len(messages) - len(shown)
    for i, message in enumerate(shown, offset + 1):
        table.add_row(
            str(i),
            message.role.value,
            render_message(message),
            "yes" if message.is_rating else "",
        )

    console.print(table)
    console.print(f"[dim]{len(messages)} message(s) in history[/dim]")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
