"""Conversation session module.

Owns the transcript, the thread identifier, and the inactivity-triggered
rating prompt.
"""

from ..models import Message, PlainText, Role, TrustedMarkup, rating_message
from .monitor import INACTIVITY_TIMEOUT_SECONDS, InactivityMonitor, MonitorState
from .session import ConversationSession, SessionListener

__all__ = [
    "INACTIVITY_TIMEOUT_SECONDS",
    "ConversationSession",
    "InactivityMonitor",
    "Message",
    "MonitorState",
    "PlainText",
    "Role",
    "SessionListener",
    "TrustedMarkup",
    "rating_message",
]
