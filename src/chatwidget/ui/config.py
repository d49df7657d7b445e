"""UI configuration constants.

Centralizes magic numbers and configuration values for the UI module.
"""

import logging


class LogLevel:
    """Log panel thresholds, numerically equal to the `logging` levels."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR

    _BY_NAME = {"debug": DEBUG, "info": INFO, "warning": WARNING, "error": ERROR}

    @classmethod
    def name(cls, level: int) -> str:
        """Display name; CRITICAL and above show as ERROR."""
        level = min(level, cls.ERROR)
        if level not in cls._BY_NAME.values():
            return "UNKNOWN"
        return logging.getLevelName(level)

    @classmethod
    def from_string(cls, value: str) -> int:
        """Parse a CLI level name; unknown names mean DEBUG."""
        return cls._BY_NAME.get(value.strip().lower(), cls.DEBUG)


INPUT_HISTORY_MAX_SIZE = 100

LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500

# Pixel size of one terminal cell, for converting template sizes
CELL_WIDTH_PX = 8
CELL_HEIGHT_PX = 16

# Smallest usable widget size in cells
MIN_CHAT_WIDTH = 30
MIN_CHAT_HEIGHT = 12

# Logger name prefix -> log panel component label
LOG_COMPONENTS = {
    "chatwidget.session": "Session",
    "chatwidget.api": "API",
    "chatwidget.storage": "Storage",
    "chatwidget.config": "Config",
    "chatwidget.ui": "TUI",
}
