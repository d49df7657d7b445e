"""Unit and property-based tests for the conversation session."""
import asyncio

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from chatwidget.api import BackendUnavailableError, MalformedResponseError
from chatwidget.models import Message, Role
from chatwidget.session import ConversationSession


def make_session(backend, config, store=None, timeout=120.0) -> ConversationSession:
    return ConversationSession(
        backend=backend,
        config=config,
        store=store,
        inactivity_timeout=timeout,
    )


class TestInitialize:
    """Tests for thread initialization."""

    @pytest.mark.asyncio
    async def test_empty_storage_gets_welcome(self, backend, bot_config, transcript_store):
        """Scenario: empty storage, init resolves -> exactly the welcome message."""
        session = make_session(backend, bot_config, transcript_store)

        session.restore()
        await session.initialize()

        assert session.thread_id == "t1"
        assert session.messages == (Message.assistant("Welcome!"),)
        session.close()

    @pytest.mark.asyncio
    async def test_restored_history_suppresses_welcome(
        self, backend, bot_config, transcript_store
    ):
        """Test that rehydrated history is not followed by a welcome."""
        history = [Message.user("hola"), Message.assistant("¡Hola!")]
        transcript_store.save(history)
        session = make_session(backend, bot_config, transcript_store)

        assert session.restore() == 2
        await session.initialize()

        assert list(session.messages) == history
        assert session.thread_id == "t1"
        session.close()

    @pytest.mark.asyncio
    async def test_late_init_after_user_started_chatting(self, backend, bot_config):
        """Test that a late init reply adds no welcome to an active chat."""
        session = make_session(backend, bot_config)

        await session.send_message("hola")
        await session.initialize()

        assert [m.content for m in session.messages] == ["hola", "ok"]
        assert session.thread_id == "t1"
        session.close()

    @pytest.mark.asyncio
    async def test_init_failure_appends_error(self, backend, bot_config):
        """Test that init failure leaves thread id null and reports it."""
        backend.init_error = BackendUnavailableError("down")
        session = make_session(backend, bot_config)

        await session.initialize()

        assert session.thread_id is None
        assert session.messages == (Message.assistant("Something went wrong."),)
        session.close()

    @pytest.mark.asyncio
    async def test_unexpected_init_error_is_not_fatal(self, backend, bot_config):
        """Test that any exception from the backend is reported, not raised."""
        backend.init_error = RuntimeError("bug")
        session = make_session(backend, bot_config)

        await session.initialize()

        assert session.messages == (Message.assistant("Something went wrong."),)
        session.close()

    @pytest.mark.asyncio
    async def test_sends_proceed_with_null_thread(self, backend, bot_config):
        """Test that a failed init does not block sending."""
        backend.init_error = BackendUnavailableError("down")
        session = make_session(backend, bot_config)

        await session.initialize()
        await session.send_message("x")

        assert backend.sent == [("x", None)]
        session.close()


class TestRestore:
    """Tests for transcript rehydration."""

    @pytest.mark.asyncio
    async def test_restore_only_once(self, backend, bot_config, transcript_store):
        """Test that restore is a one-time operation."""
        transcript_store.save([Message.user("a")])
        session = make_session(backend, bot_config, transcript_store)

        assert session.restore() == 1
        assert session.restore() == 0
        assert len(session.messages) == 1
        session.close()

    @pytest.mark.asyncio
    async def test_restore_places_history_first(self, backend, bot_config, transcript_store):
        """Test rehydration completing after an early append."""
        transcript_store.save([Message.user("old")])
        session = make_session(backend, bot_config, transcript_store)

        await session.send_message("new")
        session.restore()

        assert [m.content for m in session.messages] == ["old", "new", "ok"]
        assert transcript_store.load() == list(session.messages)
        session.close()

    @pytest.mark.asyncio
    async def test_init_before_restore_keeps_history(
        self, backend, bot_config, transcript_store
    ):
        """Test that init completing first neither greets nor overwrites history."""
        history = [Message.user("old"), Message.assistant("reply")]
        transcript_store.save(history)
        session = make_session(backend, bot_config, transcript_store)
        changes = []
        session.add_listener(lambda s: changes.append(len(s.messages)))

        await session.initialize()
        assert session.restore() == 0

        assert list(session.messages) == history
        assert transcript_store.load() == history
        assert changes == [2]
        session.close()

    @pytest.mark.asyncio
    async def test_failed_init_before_restore_keeps_history(
        self, backend, bot_config, transcript_store
    ):
        """Test that an early error message lands after the stored history."""
        transcript_store.save([Message.user("old")])
        backend.init_error = BackendUnavailableError("down")
        session = make_session(backend, bot_config, transcript_store)

        await session.initialize()
        session.restore()

        expected = [Message.user("old"), Message.assistant("Something went wrong.")]
        assert list(session.messages) == expected
        assert transcript_store.load() == expected
        session.close()

    @pytest.mark.asyncio
    async def test_restore_without_store(self, backend, bot_config):
        """Test that a session without storage restores nothing."""
        session = make_session(backend, bot_config)

        assert session.restore() == 0
        assert session.messages == ()

    @pytest.mark.asyncio
    async def test_restore_corrupt_history(self, backend, bot_config, kv_store, transcript_store):
        """Test that corrupt history degrades to an empty transcript and a welcome."""
        kv_store.set_item("chat_history", "{broken")
        session = make_session(backend, bot_config, transcript_store)

        assert session.restore() == 0
        await session.initialize()

        assert session.messages == (Message.assistant("Welcome!"),)
        session.close()


class TestSendMessage:
    """Tests for sending user messages."""

    @pytest.mark.asyncio
    async def test_successful_send(self, backend, bot_config):
        """Scenario: "hola" -> reply "¡Hola!"."""
        backend.replies = ["¡Hola!"]
        session = make_session(backend, bot_config)
        await session.initialize()

        assert await session.send_message("hola") is True

        assert session.messages[-2:] == (
            Message.user("hola"),
            Message.assistant("¡Hola!"),
        )
        assert backend.sent == [("hola", "t1")]
        assert session.is_loading is False
        session.close()

    @pytest.mark.asyncio
    async def test_network_failure(self, backend, bot_config):
        """Scenario: "x" -> network failure -> error message, loading cleared."""
        backend.send_error = BackendUnavailableError("connection refused")
        session = make_session(backend, bot_config)
        await session.initialize()

        await session.send_message("x")

        assert session.messages[-2:] == (
            Message.user("x"),
            Message.assistant("Something went wrong."),
        )
        assert session.is_loading is False
        session.close()

    @pytest.mark.asyncio
    async def test_missing_reply_appends_error(self, backend, bot_config):
        """Test that a malformed reply is reported as an error."""
        backend.send_error = MalformedResponseError("no reply")
        session = make_session(backend, bot_config)

        await session.send_message("x")

        assert session.messages[-1] == Message.assistant("Something went wrong.")
        session.close()

    @pytest.mark.asyncio
    async def test_empty_reply_appends_error(self, backend, bot_config):
        """Test that an empty reply from a backend is reported as an error."""
        backend.replies = [""]
        session = make_session(backend, bot_config)

        await session.send_message("x")

        assert session.messages[-1] == Message.assistant("Something went wrong.")
        session.close()

    @pytest.mark.asyncio
    async def test_message_sent_verbatim(self, backend, bot_config):
        """Test that input is sent and shown as typed."""
        session = make_session(backend, bot_config)

        await session.send_message("  hola  ")

        assert backend.sent == [("  hola  ", None)]
        assert session.messages[0] == Message.user("  hola  ")
        session.close()

    @pytest.mark.asyncio
    async def test_user_message_appended_before_reply(self, backend, bot_config):
        """Test the optimistic append while the send is in flight."""
        backend.gate = asyncio.Event()
        session = make_session(backend, bot_config)

        task = asyncio.create_task(session.send_message("hola"))
        await asyncio.sleep(0)

        assert session.messages == (Message.user("hola"),)
        assert session.is_loading is True

        backend.gate.set()
        await task
        assert session.is_loading is False
        session.close()

    @pytest.mark.asyncio
    async def test_second_send_while_loading_is_dropped(self, backend, bot_config):
        """Test that a submission during an in-flight send is a no-op."""
        backend.gate = asyncio.Event()
        session = make_session(backend, bot_config)

        first = asyncio.create_task(session.send_message("one"))
        await asyncio.sleep(0)
        before = session.messages

        assert await session.send_message("two") is False
        assert session.messages == before
        assert len(backend.sent) == 1

        backend.gate.set()
        await first
        assert [m.content for m in session.messages] == ["one", "ok"]
        session.close()

    @pytest.mark.asyncio
    @settings(max_examples=25, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(st.text(alphabet=" \t\n\r\x0b\x0c", max_size=10))
    async def test_blank_input_is_ignored(self, backend_factory, bot_config, text):
        """Property test: blank input never appends and never calls the backend."""
        backend = backend_factory()
        session = make_session(backend, bot_config)

        assert await session.send_message(text) is False
        assert session.messages == ()
        assert backend.sent == []

    @pytest.mark.asyncio
    @settings(max_examples=25, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(st.lists(st.tuples(st.text(min_size=1).filter(str.strip), st.booleans()), max_size=8))
    async def test_failures_never_lose_messages(self, backend_factory, bot_config, sends):
        """Property test: every earlier message survives any failure."""
        backend = backend_factory()
        session = make_session(backend, bot_config)

        for text, fail in sends:
            before = session.messages
            backend.send_error = BackendUnavailableError("down") if fail else None
            await session.send_message(text)
            assert session.messages[:len(before)] == before
            assert len(session.messages) == len(before) + 2

        assert [m.role for m in session.messages] == [Role.USER, Role.ASSISTANT] * len(sends)
        session.close()


class TestPersistenceHook:
    """Tests for persistence on every mutation."""

    @pytest.mark.asyncio
    async def test_every_mutation_is_saved(self, backend, bot_config, transcript_store):
        """Test that storage always mirrors the transcript."""
        session = make_session(backend, bot_config, transcript_store)
        snapshots = []
        session.add_listener(lambda s: snapshots.append(transcript_store.load() == list(s.messages)))

        await session.initialize()
        await session.send_message("hola")

        assert snapshots and all(snapshots)
        assert transcript_store.load() == list(session.messages)
        session.close()

    @pytest.mark.asyncio
    async def test_listener_sees_loading_changes(self, backend, bot_config):
        """Test that listeners are told about loading-state changes."""
        session = make_session(backend, bot_config)
        loading_states = []
        session.add_listener(lambda s: loading_states.append(s.is_loading))

        await session.send_message("hola")

        assert loading_states == [False, True, True, False]
        session.close()

    @pytest.mark.asyncio
    async def test_remove_listener(self, backend, bot_config):
        """Test that removed listeners are no longer called."""
        session = make_session(backend, bot_config)
        calls = []

        def listener(s):
            calls.append(s)

        session.add_listener(listener)
        session.remove_listener(listener)
        session.remove_listener(listener)
        await session.initialize()

        assert calls == []
        session.close()
