"""Text formatting utilities for the TUI.

Hides how message content becomes terminal text. Plain text is never parsed
for markup. Trusted markup is reduced to what a terminal can show: anchors
become hyperlinks and every other tag is dropped.
"""

import html
import re

from rich.style import Style
from rich.text import Text

from ..models import Message

_ANCHOR_RE = re.compile(
    r"<a\s[^>]*?href\s*=\s*\"([^\"]*)\"[^>]*>(.*?)</a\s*>",
    re.IGNORECASE | re.DOTALL,
)
_TAG_RE = re.compile(r"<[^>]*>")
_LINK_SCHEMES = ("http://", "https://", "mailto:")


def strip_tags(fragment: str) -> str:
    """Remove tags and decode entities."""
    return html.unescape(_TAG_RE.sub("", fragment))


def render_markup(markup: str) -> Text:
    """Render trusted markup as Rich text with clickable links.

    Links with schemes other than http(s)/mailto are shown as plain text.
    """
    text = Text(overflow="fold")
    position = 0
    for match in _ANCHOR_RE.finditer(markup):
        text.append(strip_tags(markup[position:match.start()]))
        url = match.group(1).strip().replace("&amp;", "&")
        label = strip_tags(match.group(2)) or url
        if url.lower().startswith(_LINK_SCHEMES):
            text.append(label, style=Style(link=url, underline=True, bold=True))
        else:
            text.append(label)
        position = match.end()
    text.append(strip_tags(markup[position:]))
    return text


def render_plain(content: str) -> Text:
    """Render untrusted content verbatim."""
    return Text(content, overflow="fold")


def render_message(message: Message) -> Text:
    """Render a message body according to its trust level."""
    if message.is_rating:
        return render_markup(message.content)
    return render_plain(message.content)


def plain_text(message: Message) -> str:
    """Message content without markup, for clipboard use."""
    return render_message(message).plain
