"""Custom Textual widgets for the chat widget.

Hides widget implementation details:
- Recall of previously submitted input
- Transcript rendering and scrolling
- Typing indicator
- Log panel rendering
"""

from collections.abc import Sequence
from datetime import datetime

from rich.markup import escape
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click, Paste
from textual.message import Message as TextualMessage
from textual.widgets import Button, Input, LoadingIndicator, RichLog, Static

from ..models import Message
from .config import INPUT_HISTORY_MAX_SIZE, LOG_MAX_MESSAGE_LENGTH, LOG_TIMESTAMP_FORMAT, LogLevel
from .formatting import plain_text, render_message
from .models import RenderedMessage

_LEVEL_STYLES = {
    LogLevel.DEBUG: "dim white",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
}


class ClickableMessage(Vertical):
    """Message bubble; clicking copies its plain text."""

    def __init__(self, text: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self._text = text

    def on_click(self, event: Click) -> None:
        event.stop()
        self.app.copy_to_clipboard(self._text)
        self.app.notify("Copied to clipboard", timeout=2)


class HistoryInput(Input):
    """Single-line input that recalls earlier submissions with Up/Down.

    Pasted newlines are folded into spaces.
    """

    BINDINGS = [
        Binding("up", "history_previous", "Previous", show=False),
        Binding("down", "history_next", "Next", show=False),
    ]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._recalled: list[str] = []
        self._cursor: int | None = None
        self._draft = ""

    def _on_paste(self, event: Paste) -> None:
        if event.text:
            event.prevent_default()
            event.stop()
            self.insert_text_at_cursor(" ".join(event.text.split()))

    def _show(self, value: str) -> None:
        self.value = value
        self.cursor_position = len(value)

    def action_history_previous(self) -> None:
        """Step back to an older submission."""
        if not self._recalled:
            return
        if self._cursor is None:
            self._draft = self.value
            self._cursor = len(self._recalled) - 1
        else:
            self._cursor = max(0, self._cursor - 1)
        self._show(self._recalled[self._cursor])

    def action_history_next(self) -> None:
        """Step forward; past the newest entry the unsent draft comes back."""
        if self._cursor is None:
            return
        self._cursor += 1
        if self._cursor < len(self._recalled):
            self._show(self._recalled[self._cursor])
        else:
            self._cursor = None
            self._show(self._draft)

    def remember(self, value: str) -> None:
        """Record a submission, skipping immediate repeats."""
        if value and self._recalled[-1:] != [value]:
            self._recalled.append(value)
            del self._recalled[:-INPUT_HISTORY_MAX_SIZE]
        self._cursor = None
        self._draft = ""


class ChatInputBar(Horizontal):
    """Text input plus submit button."""

    class Submitted(TextualMessage):
        """Posted with the text of a non-blank submission."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *, placeholder: str = "", button_label: str = "Send", **kwargs) -> None:
        super().__init__(**kwargs)
        self._placeholder = placeholder
        self._button_label = button_label

    def compose(self):
        yield HistoryInput(placeholder=self._placeholder, id="chat-input")
        yield Button(self._button_label, id="send-btn", variant="primary")

    @property
    def text_input(self) -> HistoryInput:
        return self.query_one("#chat-input", HistoryInput)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self._submit()

    def _submit(self) -> None:
        text_input = self.text_input
        value = text_input.value
        if text_input.disabled or not value.strip():
            return
        text_input.remember(value)
        # Cleared before the send starts, not when it completes
        text_input.value = ""
        self.post_message(self.Submitted(value))

    def set_loading(self, loading: bool) -> None:
        """Disable the controls while a send is in flight.

        Focus returns to the input only when a send finishes, not on every
        idle refresh.
        """
        was_loading = self.text_input.disabled
        self.text_input.disabled = loading
        self.query_one("#send-btn", Button).disabled = loading
        if was_loading and not loading:
            self.text_input.focus()

    def focus_input(self) -> None:
        self.text_input.focus()


class TypingIndicator(LoadingIndicator):
    """Animated dots shown while the assistant is replying."""

    def on_mount(self) -> None:
        self.display = False


class TranscriptView(VerticalScroll):
    """Scrollable transcript, oldest message at the top.

    The transcript is append-only, so `sync` mounts only the messages not
    on screen yet.
    """

    BORDER_TITLE = "Chat"
    ALLOW_SELECT = True

    def __init__(
        self,
        *,
        user_color: str | None = None,
        assistant_color: str | None = None,
        bubble_border: str = "round",
        **kwargs
    ) -> None:
        super().__init__(**kwargs)
        self._rendered: list[RenderedMessage] = []
        self._colors = {True: user_color, False: assistant_color}
        self._bubble_border = bubble_border

    @property
    def rendered_count(self) -> int:
        return len(self._rendered)

    def sync(self, messages: Sequence[Message]) -> None:
        """Mount unseen messages and scroll to the latest."""
        for message in messages[len(self._rendered):]:
            rendered = RenderedMessage(message=message)
            self._rendered.append(rendered)
            self.mount(self._bubble(rendered))
        self.border_subtitle = f"{len(self._rendered)} messages"
        self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Plain text of the newest assistant message, if any."""
        replies = [r.message for r in self._rendered if not r.is_user]
        return plain_text(replies[-1]) if replies else None

    def _bubble(self, rendered: RenderedMessage) -> ClickableMessage:
        message = rendered.message
        author = "> You" if rendered.is_user else "< Assistant"
        classes = ["chat-message", "user-message" if rendered.is_user else "assistant-message"]
        if message.is_rating:
            classes.append("rating-message")

        bubble = ClickableMessage(plain_text(message), classes=" ".join(classes))
        color = self._colors[rendered.is_user]
        if color is not None:
            bubble.styles.border_left = (self._bubble_border, color)
        bubble.compose_add_child(
            Static(f"{author} [{rendered.shown_at:%H:%M}]", classes="message-header", markup=False)
        )
        bubble.compose_add_child(Static(render_message(message), classes="message-content"))
        return bubble


class LogPanel(RichLog):
    """Application log records, filtered by a level threshold.

    Hidden unless the app starts with a log level; Ctrl+D toggles it.
    """

    BORDER_TITLE = "Log"

    def __init__(self, *, threshold: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(markup=True, highlight=False, wrap=True, **kwargs)
        self._threshold = threshold
        self.display = False

    @property
    def threshold(self) -> int:
        return self._threshold

    @threshold.setter
    def threshold(self, level: int) -> None:
        self._threshold = level
        self._refresh_subtitle()

    def on_mount(self) -> None:
        self._refresh_subtitle()

    def _refresh_subtitle(self) -> None:
        self.border_subtitle = (
            f"Level: {LogLevel.name(self._threshold)}" if self.display else "Hidden"
        )

    def add_record(self, component: str, message: str, level: int = LogLevel.INFO) -> None:
        """Append one line; records below the threshold are dropped."""
        if level < self._threshold:
            return
        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."
        style = _LEVEL_STYLES.get(min(level, LogLevel.ERROR), "white")
        self.write(
            f"[dim]{datetime.now():{LOG_TIMESTAMP_FORMAT}}[/] "
            f"[{style}]{LogLevel.name(level):<7}[/] "
            f"[bold]\\[{escape(component)}][/] {escape(message)}"
        )

    def set_visible(self, visible: bool) -> None:
        self.display = visible
        self._refresh_subtitle()

    def toggle(self) -> bool:
        """Flip visibility and return the new state."""
        self.set_visible(not self.display)
        return bool(self.display)
