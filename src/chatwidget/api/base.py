from abc import ABC, abstractmethod
from typing import Any


class ChatBackend(ABC):
    """Abstract base class for the backend conversation API.

    This module hides the design decision of how the widget reaches the
    backend. Implementations must handle:
    - Transport setup and teardown
    - Request/response format conversion
    - Mapping transport failures onto BackendError subclasses

    Supports async context manager protocol for proper resource cleanup:
        async with backend:
            thread_id = await backend.init_thread()
    """

    @abstractmethod
    async def init_thread(self) -> str:
        """Request a new opaque thread identifier.

        Returns:
            The thread identifier

        Raises:
            BackendError: If the request fails or the reply is malformed
        """

    @abstractmethod
    async def send_message(self, message: str, thread_id: str | None) -> str:
        """Send one user message and return the assistant reply.

        Args:
            message: The user's text, as typed
            thread_id: Thread identifier, or None if initialization failed

        Returns:
            Non-empty reply text

        Raises:
            BackendError: If the request fails or the reply is missing/empty
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "ChatBackend":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
