"""Provider factory functions for CLI.

Centralizes creation of the backend, transcript store, and widget config
from CLI options and environment variables. Hides configuration details
from command implementations.
"""

import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ..api import ChatBackend, HttpChatBackend
from ..config import BotConfig, ConfigError, load_bot_config
from ..storage import DEFAULT_STORAGE_PATH, TranscriptStore, create_key_value_store

DEFAULT_API_URL = "http://localhost:3000"

# Default console for output
_console = Console()


def get_backend(api_url: str | None = None) -> ChatBackend:
    """Create the chat backend.

    Environment variables:
        CHATWIDGET_API_URL: Base URL of the conversation API
            (default: http://localhost:3000)
    """
    base_url = api_url or os.getenv("CHATWIDGET_API_URL", DEFAULT_API_URL)
    return HttpChatBackend(base_url=base_url)


def get_config(path: Path | None = None, console: Console | None = None) -> BotConfig:
    """Load the widget template, exiting on failure.

    Environment variables:
        CHATWIDGET_CONFIG: Path to a .json/.yaml template (default: built-in)
    """
    con = console or _console
    config_path = path or os.getenv("CHATWIDGET_CONFIG") or None
    try:
        return load_bot_config(config_path)
    except ConfigError as e:
        con.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def get_transcript_store(
    backend: str = "file",
    path: Path | None = None,
) -> TranscriptStore:
    """Create the transcript persistence adapter.

    Environment variables:
        CHATWIDGET_STORAGE_PATH: History file (default: ~/.chatwidget/storage.json)
    """
    if backend == "file":
        storage_path = path or os.getenv("CHATWIDGET_STORAGE_PATH") or DEFAULT_STORAGE_PATH
        return TranscriptStore(create_key_value_store("file", path=storage_path))
    return TranscriptStore(create_key_value_store(backend))


def configure_logging(level: str = "warning", console_output: bool = True) -> None:
    """Configure the package logger.

    Console commands log through Rich. The TUI owns the terminal, so it
    passes console_output=False and attaches its own panel handler.
    """
    package_logger = logging.getLogger("chatwidget")
    package_logger.setLevel(level.upper())
    package_logger.handlers.clear()
    if console_output:
        package_logger.addHandler(
            RichHandler(console=Console(stderr=True), show_path=False, markup=False)
        )
    else:
        # Keep records off stderr until the TUI attaches its panel handler
        package_logger.addHandler(logging.NullHandler())
