"""Pytest configuration and shared fixtures."""
import asyncio

import pytest

from chatwidget.api import ChatBackend
from chatwidget.config import BotConfig
from chatwidget.storage import InMemoryKeyValueStore, TranscriptStore


class ScriptedBackend(ChatBackend):
    """In-process backend with scripted replies and failures.

    Set `gate` to an asyncio.Event to hold sends in flight until it is set.
    """

    def __init__(self) -> None:
        self.thread_id = "t1"
        self.replies: list[str] = []
        self.init_error: Exception | None = None
        self.send_error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.init_calls = 0
        self.sent: list[tuple[str, str | None]] = []
        self.closed = False

    async def init_thread(self) -> str:
        self.init_calls += 1
        if self.init_error is not None:
            raise self.init_error
        return self.thread_id

    async def send_message(self, message: str, thread_id: str | None) -> str:
        self.sent.append((message, thread_id))
        if self.gate is not None:
            await self.gate.wait()
        if self.send_error is not None:
            raise self.send_error
        return self.replies.pop(0) if self.replies else "ok"

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def bot_config():
    """Return a widget config with recognizable strings."""
    return BotConfig(
        welcome_message="Welcome!",
        error_message="Something went wrong.",
        rating_url="https://www.coolmod.com/tarjetas-graficas/",
        rating_prompt="Rate us: ",
        rating_link_text="here",
    )


@pytest.fixture
def backend():
    """Return a scripted backend."""
    return ScriptedBackend()


@pytest.fixture
def kv_store():
    """Return an empty in-memory key/value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def transcript_store(kv_store):
    """Return a transcript store over the in-memory key/value store."""
    return TranscriptStore(kv_store)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo logging configuration done by CLI commands."""
    import logging

    package_logger = logging.getLogger("chatwidget")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)


@pytest.fixture
def backend_factory():
    """Return the scripted backend class, for tests that need fresh instances."""
    return ScriptedBackend
