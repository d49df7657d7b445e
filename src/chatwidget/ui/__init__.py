"""Terminal UI module for chatwidget.

Provides a Textual-based chat widget bound to a ConversationSession.

Module structure (Parnas principle - each module hides a design decision):
- models.py: View-side message representation
- formatting.py: Plain text vs trusted markup rendering
- widgets.py: Custom widgets (transcript, input bar, typing indicator, log panel)
- styles.py: CSS styling and template size conversion
- themes.py: Color palettes derived from the template style block
- callbacks.py: Logging integration (how the TUI receives log records)
- app.py: Application orchestration (user interaction flow)
"""

from .app import ChatWidgetApp, run_textual_tui
from .callbacks import TUILogHandler
from .config import LogLevel
from .models import RenderedMessage
from .widgets import ChatInputBar, LogPanel, TranscriptView, TypingIndicator

__all__ = [
    "ChatInputBar",
    "ChatWidgetApp",
    "LogLevel",
    "LogPanel",
    "RenderedMessage",
    "TUILogHandler",
    "TranscriptView",
    "TypingIndicator",
    "run_textual_tui",
]
