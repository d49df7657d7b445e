"""Backend conversation API module.

Hides how the widget talks to the thread-initialization and chat endpoints.
"""

from .base import ChatBackend
from .errors import BackendError, BackendUnavailableError, MalformedResponseError
from .http_backend import HttpChatBackend
from .models import ChatRequest, ChatResponse, InitThreadResponse

__all__ = [
    "BackendError",
    "BackendUnavailableError",
    "ChatBackend",
    "ChatRequest",
    "ChatResponse",
    "HttpChatBackend",
    "InitThreadResponse",
    "MalformedResponseError",
]
