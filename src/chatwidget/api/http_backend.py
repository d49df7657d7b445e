"""HTTP implementation of the backend conversation API."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from .base import ChatBackend
from .errors import BackendUnavailableError, MalformedResponseError
from .models import ChatRequest, ChatResponse, InitThreadResponse

logger = logging.getLogger(__name__)

INIT_THREAD_PATH = "/api/init-thread"
CHAT_PATH = "/api/chat"
DEFAULT_TIMEOUT = 60.0


class HttpChatBackend(ChatBackend):
    """Backend reached over HTTP with httpx.

    One attempt per call; no retries.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self._base_url, timeout=timeout
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Perform one request and return the decoded JSON body."""
        logger.debug("%s %s", method, path)
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise BackendUnavailableError(f"{method} {path} failed: {e}") from e

        logger.debug("Response status: %s", response.status_code)
        if not response.is_success:
            raise BackendUnavailableError(
                f"{method} {path} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"{method} {path} returned invalid JSON") from e

    async def init_thread(self) -> str:
        data = await self._request("GET", INIT_THREAD_PATH)
        try:
            parsed = InitThreadResponse.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(f"Invalid init-thread response: {e}") from e
        logger.info("Thread initialized: %s", parsed.thread_id)
        return parsed.thread_id

    async def send_message(self, message: str, thread_id: str | None) -> str:
        request = ChatRequest(message=message, thread_id=thread_id)
        data = await self._request(
            "POST", CHAT_PATH, json=request.model_dump(by_alias=True)
        )
        try:
            parsed = ChatResponse.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(f"Invalid chat response: {e}") from e
        if not parsed.reply:
            raise MalformedResponseError("Chat response has no reply")
        return parsed.reply

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
