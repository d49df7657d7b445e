"""Data models for chat messages.

Hides the internal representation of message content. Content is a tagged
variant: `PlainText` for anything that came from the user or the backend,
`TrustedMarkup` for content the widget builds itself. The persisted form is
the flat `{role, content, isRating}` record.
"""

import html
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Author of a message."""

    USER = "user"
    ASSISTANT = "assistant"


class PlainText(BaseModel):
    """Content rendered as escaped text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str


class TrustedMarkup(BaseModel):
    """Content rendered as markup.

    Only built by system code (see `rating_message`); never from user or
    remote input.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["markup"] = "markup"
    markup: str


class Message(BaseModel):
    """A single transcript entry. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    role: Role
    body: PlainText | TrustedMarkup = Field(discriminator="kind")

    @classmethod
    def user(cls, text: str) -> "Message":
        return cls(role=Role.USER, body=PlainText(text=text))

    @classmethod
    def assistant(cls, text: str) -> "Message":
        return cls(role=Role.ASSISTANT, body=PlainText(text=text))

    @property
    def content(self) -> str:
        """Raw content string (text or markup)."""
        if isinstance(self.body, TrustedMarkup):
            return self.body.markup
        return self.body.text

    @property
    def is_rating(self) -> bool:
        return isinstance(self.body, TrustedMarkup)

    def to_record(self) -> dict[str, Any]:
        """Convert to the persisted `{role, content, isRating}` record."""
        return {
            "role": self.role.value,
            "content": self.content,
            "isRating": self.is_rating,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Message":
        """Build a message from a persisted record.

        Raises:
            ValueError: If the record is not a valid message
        """
        if not isinstance(record, dict):
            raise ValueError(f"Message record must be an object, got {type(record).__name__}")

        content = record.get("content")
        if not isinstance(content, str):
            raise ValueError("Message record has no string 'content'")

        role = Role(record.get("role"))
        # Only a JSON true marks trusted markup
        if record.get("isRating") is True:
            body: PlainText | TrustedMarkup = TrustedMarkup(markup=content)
        else:
            body = PlainText(text=content)
        return cls(role=role, body=body)


def rating_message(prompt: str, url: str, link_text: str) -> Message:
    """Build the system rating message.

    The URL goes into the href as configured, except that double quotes
    are percent-encoded so they cannot end the attribute. Prompt and link
    text are escaped. This is the only place `TrustedMarkup` is built from
    configuration values.
    """
    href = url.replace('"', "%22")
    markup = (
        f"{html.escape(prompt, quote=False)}"
        f'<a href="{href}" target="_blank" '
        f'rel="noopener noreferrer">{html.escape(link_text, quote=False)}</a>'
    )
    return Message(role=Role.ASSISTANT, body=TrustedMarkup(markup=markup))
