"""Logging integration for the TUI.

Hides the details of how log records reach the screen. While Textual owns
the terminal, records are routed into the log panel instead of stderr.
Uses thread-safe methods to update UI from worker threads.
"""

import logging
import threading
from typing import TYPE_CHECKING, Any

from .config import LOG_COMPONENTS

if TYPE_CHECKING:
    from textual.app import App

    from .widgets import LogPanel


def component_for(logger_name: str) -> str:
    """Map a logger name to a short component label."""
    for prefix, component in LOG_COMPONENTS.items():
        if logger_name == prefix or logger_name.startswith(prefix + "."):
            return component
    return logger_name.rsplit(".", 1)[-1] or "root"


class TUILogHandler(logging.Handler):
    """Logging handler that writes records into the log panel.

    Uses call_from_thread for thread-safe UI updates from workers.
    """

    def __init__(self, panel: "LogPanel", app: "App | None" = None) -> None:
        super().__init__(level=logging.DEBUG)
        self.panel = panel
        self.app = app
        self.setFormatter(logging.Formatter("%(message)s"))

    def _call_thread_safe(self, func: Any, *args: Any, **kwargs: Any) -> None:
        """Call a function in a thread-safe manner for UI updates."""
        if self.app is not None and self.app._thread_id != threading.get_ident():
            self.app.call_from_thread(func, *args, **kwargs)
        else:
            func(*args, **kwargs)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            self._call_thread_safe(
                self.panel.add_record,
                component_for(record.name),
                message,
                record.levelno,
            )
        except Exception:
            self.handleError(record)
