"""Main Textual TUI application.

Orchestrates the UI components and wires user interaction to the
conversation session. The view only reads session state; every change goes
through the session.
"""

import asyncio
import logging

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header, Static

from ..config import BotConfig
from ..session import ConversationSession
from .callbacks import TUILogHandler
from .config import LogLevel
from .styles import APP_CSS, border_type, chat_size
from .themes import THEME_NAME, build_theme
from .widgets import (
    ChatInputBar,
    LogPanel,
    TranscriptView,
    TypingIndicator,
)

logger = logging.getLogger(__name__)


class ChatWidgetApp(App):
    """Textual chat widget bound to one conversation session."""

    CSS = APP_CSS

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+r", "copy_last_response", "Copy Reply"),
        Binding("ctrl+d", "toggle_log", "Log"),
    ]

    def __init__(
        self,
        session: ConversationSession,
        config: BotConfig,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._config = config
        self._log_level = log_level
        self._log_handler: TUILogHandler | None = None
        self.title = config.page_title

    @property
    def session(self) -> ConversationSession:
        return self._session

    def compose(self) -> ComposeResult:
        css = self._config.css_config
        yield Header(show_clock=True)

        with Vertical(id="chat-panel"):
            yield Static(self._heading_text(), id="heading")
            yield TranscriptView(
                id="transcript",
                user_color=css.primary_color,
                assistant_color=css.secondary_color,
                bubble_border=border_type(css.message_radius),
            )
            yield TypingIndicator(id="typing-indicator")
            yield ChatInputBar(
                id="chat-input-bar",
                placeholder=self._config.input_placeholder,
                button_label=self._config.submit_button_text,
            )

        yield LogPanel(id="log-panel")

        if self._config.show_branding:
            yield Footer()

    def _heading_text(self) -> str:
        from rich.markup import escape

        heading = f"[bold]{escape(self._config.main_heading)}[/]"
        if self._config.sub_heading:
            heading += f"\n[dim]{escape(self._config.sub_heading)}[/]"
        return heading

    def on_mount(self) -> None:
        """Called when app is mounted."""
        css = self._config.css_config
        self.register_theme(build_theme(css))
        self.theme = THEME_NAME

        panel = self.query_one("#chat-panel", Vertical)
        width, height = chat_size(css)
        if width is not None:
            panel.styles.width = width
        if height is not None:
            panel.styles.height = height
        panel.styles.border = (border_type(css.input_radius), css.primary_color)
        panel.border_title = self._config.page_title

        self._attach_log_panel()

        self._session.add_listener(self._on_session_changed)
        self._session.restore()
        self._initialize_session()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def _attach_log_panel(self) -> None:
        log_panel = self.query_one("#log-panel", LogPanel)
        self._log_handler = TUILogHandler(log_panel, app=self)
        logging.getLogger("chatwidget").addHandler(self._log_handler)

        if self._log_level is not None:
            log_panel.threshold = LogLevel.from_string(self._log_level)
            log_panel.set_visible(True)
            log_panel.add_record(
                "TUI",
                f"Log panel enabled with level: {self._log_level.upper()}",
                LogLevel.INFO,
            )

    def on_unmount(self) -> None:
        """Stop timers and detach from logging."""
        self._session.remove_listener(self._on_session_changed)
        self._session.close()
        if self._log_handler is not None:
            logging.getLogger("chatwidget").removeHandler(self._log_handler)
            self._log_handler = None

    def _on_session_changed(self, session: ConversationSession) -> None:
        """Re-render after a transcript or loading-state change."""
        transcript = self.query_one("#transcript", TranscriptView)
        transcript.sync(session.messages)

        indicator = self.query_one("#typing-indicator", TypingIndicator)
        indicator.display = (
            session.is_loading and self._config.css_config.show_typing_indicator
        )
        self.query_one("#chat-input-bar", ChatInputBar).set_loading(session.is_loading)
        transcript.scroll_end(animate=False)

    @work(group="init")
    async def _initialize_session(self) -> None:
        await self._session.initialize()

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if not event.value.strip() or self._session.is_loading:
            return
        self._send_message(event.value)

    @work(group="send")
    async def _send_message(self, text: str) -> None:
        await self._session.send_message(text)

    def action_toggle_log(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#log-panel", LogPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        transcript = self.query_one("#transcript", TranscriptView)
        response = transcript.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(
    session: ConversationSession,
    config: BotConfig,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        session: Conversation session to display and drive
        config: Widget template
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = ChatWidgetApp(session=session, config=config, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        session.close()
