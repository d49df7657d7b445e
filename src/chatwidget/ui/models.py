"""Data models for the TUI.

Hides the view-side representation of a rendered transcript entry.
"""

from dataclasses import dataclass, field
from datetime import datetime

from ..models import Message, Role


@dataclass
class RenderedMessage:
    """A transcript message as shown on screen."""

    message: Message
    shown_at: datetime = field(default_factory=datetime.now)

    @property
    def is_user(self) -> bool:
        return self.message.role is Role.USER
