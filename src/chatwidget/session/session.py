"""Conversation session.

Owns the thread identifier and the transcript, and is the only place the
transcript is mutated. Every append runs the same sequence synchronously:
persist, reset the inactivity monitor, notify listeners.
"""

import asyncio
import logging
from collections.abc import Callable

from ..api import BackendError, ChatBackend
from ..config import BotConfig
from ..models import Message, rating_message
from ..storage import TranscriptStore
from .monitor import INACTIVITY_TIMEOUT_SECONDS, InactivityMonitor

logger = logging.getLogger(__name__)

SessionListener = Callable[["ConversationSession"], None]


class ConversationSession:
    """Transcript, thread id and send state of one widget instance.

    Example:
        session = ConversationSession(backend, config, store)
        session.add_listener(view.refresh)
        session.restore()
        await session.initialize()
        await session.send_message("hola")
    """

    def __init__(
        self,
        backend: ChatBackend,
        config: BotConfig,
        store: TranscriptStore | None = None,
        inactivity_timeout: float = INACTIVITY_TIMEOUT_SECONDS,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._backend = backend
        self._config = config
        self._store = store
        self._messages: list[Message] = []
        self._thread_id: str | None = None
        self._is_loading = False
        self._rating_sent = False
        self._restored = False
        self._listeners: list[SessionListener] = []
        self._monitor = InactivityMonitor(
            on_expire=self._on_inactivity,
            timeout=inactivity_timeout,
            loop=loop,
        )

    @property
    def messages(self) -> tuple[Message, ...]:
        """Transcript in display order."""
        return tuple(self._messages)

    @property
    def thread_id(self) -> str | None:
        return self._thread_id

    @property
    def is_loading(self) -> bool:
        """True while a send is in flight."""
        return self._is_loading

    @property
    def rating_sent(self) -> bool:
        return self._rating_sent

    @property
    def monitor(self) -> InactivityMonitor:
        return self._monitor

    def add_listener(self, listener: SessionListener) -> None:
        """Register a callback run after every transcript or loading change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _transcript_changed(self) -> None:
        if self._store is not None:
            self._store.save(self._messages)
        self._monitor.reset()
        self._notify()

    def _append(self, message: Message) -> None:
        self._load_history()
        self._messages.append(message)
        self._transcript_changed()

    def _set_loading(self, value: bool) -> None:
        self._is_loading = value
        self._notify()

    def restore(self) -> int:
        """Rehydrate the transcript from storage.

        Only the first load has an effect. Appends and `initialize` load
        the history themselves if this has not run yet, so stored messages
        always come first and are never overwritten.

        Returns:
            Number of messages restored
        """
        count = self._load_history()
        if count:
            self._transcript_changed()
        return count

    def _load_history(self) -> int:
        # Runs before the first save so stored history is never overwritten
        if self._restored or self._store is None:
            return 0
        self._restored = True

        history = self._store.load()
        self._messages[:0] = history
        if history:
            logger.info("Restored %d message(s) from history", len(history))
        return len(history)

    async def initialize(self) -> None:
        """Obtain a thread id and greet or report failure.

        The welcome message is only added if the transcript is still empty
        when the backend answers.
        """
        try:
            thread_id = await self._backend.init_thread()
        except BackendError as e:
            logger.error("Thread initialization failed: %s", e)
            self._append(Message.assistant(self._config.error_message))
            return
        except Exception:
            logger.exception("Unexpected error during thread initialization")
            self._append(Message.assistant(self._config.error_message))
            return

        self._thread_id = thread_id
        self.restore()
        if not self._messages:
            self._append(Message.assistant(self._config.welcome_message))

    async def send_message(self, text: str) -> bool:
        """Send user input to the backend.

        Returns:
            False if the input was dropped (blank, or a send in flight)
        """
        if not text.strip() or self._is_loading:
            return False

        self._append(Message.user(text))
        self._set_loading(True)
        try:
            reply = await self._backend.send_message(text, self._thread_id)
        except BackendError as e:
            logger.error("Sending message failed: %s", e)
            self._append(Message.assistant(self._config.error_message))
        except Exception:
            logger.exception("Unexpected error while sending message")
            self._append(Message.assistant(self._config.error_message))
        else:
            if reply:
                self._append(Message.assistant(reply))
            else:
                logger.error("Backend returned an empty reply")
                self._append(Message.assistant(self._config.error_message))
        finally:
            self._set_loading(False)
        return True

    def _on_inactivity(self) -> None:
        if self._rating_sent or not self._messages:
            return
        self._rating_sent = True
        logger.info("Inactivity timeout reached, asking for a rating")
        self._append(
            rating_message(
                self._config.rating_prompt,
                self._config.rating_url,
                self._config.rating_link_text,
            )
        )

    def close(self) -> None:
        """Stop the inactivity monitor."""
        self._monitor.cancel()
