"""Persistence adapter for the chat transcript.

Hides how a transcript becomes a stored value: a JSON array of
`{role, content, isRating}` records under one fixed key. Neither loading
nor saving ever raises; failures degrade and are logged.
"""

import json
import logging
from collections.abc import Sequence

from ..models import Message
from .base import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "chat_history"


class TranscriptStore:
    """Loads and saves the transcript through a key/value store."""

    def __init__(self, backend: KeyValueStore, key: str = STORAGE_KEY):
        self._backend = backend
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    @property
    def backend(self) -> KeyValueStore:
        return self._backend

    def load(self) -> list[Message]:
        """Return the stored transcript, or an empty list.

        Absent, unreadable, or undecodable values all yield an empty list.
        """
        try:
            raw = self._backend.get_item(self._key)
        except (OSError, ValueError) as e:
            logger.warning("Failed to read chat history: %s", e)
            return []

        if raw is None:
            return []

        try:
            records = json.loads(raw)
            if not isinstance(records, list):
                raise ValueError("stored chat history is not a list")
            messages = [Message.from_record(record) for record in records]
        except ValueError as e:
            # json.JSONDecodeError and pydantic.ValidationError are ValueErrors
            logger.warning("Failed to load chat history: %s", e)
            return []

        logger.debug("Loaded %d message(s) from chat history", len(messages))
        return messages

    def save(self, transcript: Sequence[Message]) -> None:
        """Write the full transcript, replacing the stored value."""
        payload = json.dumps(
            [message.to_record() for message in transcript],
            ensure_ascii=False,
        )
        try:
            self._backend.set_item(self._key, payload)
        except OSError as e:
            logger.error("Failed to save chat history: %s", e)
