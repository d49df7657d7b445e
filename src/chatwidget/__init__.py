"""
Chatwidget: a terminal chat widget with local history and a rating prompt.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .config import BotConfig, CssConfig, load_bot_config
from .session import ConversationSession, InactivityMonitor, Message

__all__ = [
    "BotConfig",
    "ConversationSession",
    "CssConfig",
    "InactivityMonitor",
    "Message",
    "load_bot_config",
]
