"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Static rules live in APP_CSS; sizes and border shapes that depend on the
template's style block are computed here and applied inline at mount time.
"""

import re

from ..config import CssConfig
from .config import CELL_HEIGHT_PX, CELL_WIDTH_PX, MIN_CHAT_HEIGHT, MIN_CHAT_WIDTH

APP_CSS = """
Screen {
    align: center middle;
    background: $background;
}

#chat-panel {
    width: 50;
    height: 37;
    background: $panel;
    border: round $primary;
    border-title-color: $primary;
    border-title-style: bold;
}

#heading {
    width: 100%;
    height: auto;
    padding: 0 1;
    background: $secondary 40%;
    text-align: center;
}

#transcript {
    height: 1fr;
    padding: 0 1;
    scrollbar-gutter: stable;
}

.chat-message {
    height: auto;
    margin: 1 0 0 0;
    padding: 0 1;
}

.user-message {
    margin-left: 6;
    background: $primary 20%;
}

.assistant-message {
    margin-right: 6;
    background: $surface;
}

.rating-message {
    background: $accent 15%;
    text-style: italic;
}

.message-header {
    color: $text-muted;
    text-style: bold;
}

#typing-indicator {
    height: 1;
    color: $secondary;
}

#chat-input-bar {
    height: auto;
    padding: 0 1;
}

#chat-input {
    width: 1fr;
}

#send-btn {
    min-width: 10;
}

#log-panel {
    height: 10;
    border: tall $warning 40%;
    border-title-color: $warning;
}
"""

_LENGTH_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(px)?\s*$", re.IGNORECASE)


def parse_px(value: str) -> float | None:
    """Parse a CSS pixel length ("400px" or "400"). None if not pixels."""
    match = _LENGTH_RE.match(value)
    if match is None:
        return None
    return float(match.group(1))


def px_to_cells(value: str, cell_px: int, minimum: int) -> int | None:
    """Convert a CSS pixel length to terminal cells, clamped to a minimum."""
    pixels = parse_px(value)
    if pixels is None:
        return None
    return max(minimum, round(pixels / cell_px))


def border_type(radius: str) -> str:
    """Rounded borders for a positive radius, square ones otherwise."""
    pixels = parse_px(radius)
    return "round" if pixels and pixels > 0 else "solid"


def chat_size(css: CssConfig) -> tuple[int | None, int | None]:
    """Widget (width, height) in cells. None keeps the stylesheet default."""
    return (
        px_to_cells(css.chat_width, CELL_WIDTH_PX, MIN_CHAT_WIDTH),
        px_to_cells(css.chat_height, CELL_HEIGHT_PX, MIN_CHAT_HEIGHT),
    )
