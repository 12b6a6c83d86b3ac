"""Unit tests for the Chat Session."""

import asyncio

import pytest

from src.ai.chat_session import ChatSession
from src.kernel.errors import RemoteCallError
from src.kernel.operation_log import OperationLog
from src.kernel.types import ChatRole


def _transcript(session: ChatSession):
    return [(m.role.value, m.content) for m in session.messages]


class TestAsk:
    """Tests for ChatSession.ask()."""

    @pytest.mark.asyncio
    async def test_turns_alternate(self, fake_remote):
        fake_remote.chat_answers = ["r1", "r2"]
        session = ChatSession(fake_remote)

        await session.ask("a")
        await session.ask("b")

        assert _transcript(session) == [
            ("user", "a"),
            ("assistant", "r1"),
            ("user", "b"),
            ("assistant", "r2"),
        ]
        assert session.thinking is False

    @pytest.mark.parametrize("question", ["", "   ", "\n\t"])
    @pytest.mark.asyncio
    async def test_blank_question_is_ignored(self, fake_remote, question):
        session = ChatSession(fake_remote)
        assert await session.ask(question) is None
        assert session.messages == []
        assert fake_remote.calls == []

    @pytest.mark.asyncio
    async def test_user_turn_visible_while_thinking(self, fake_remote):
        gate = fake_remote.gate("chat")
        session = ChatSession(fake_remote)

        task = asyncio.create_task(session.ask("What is a resource?"))
        await asyncio.sleep(0)

        assert session.thinking is True
        assert _transcript(session) == [("user", "What is a resource?")]

        gate.set()
        reply = await task
        assert reply.role == ChatRole.ASSISTANT
        assert session.thinking is False

    @pytest.mark.asyncio
    async def test_second_question_rejected_while_thinking(self, fake_remote):
        gate = fake_remote.gate("chat")
        session = ChatSession(fake_remote)

        task = asyncio.create_task(session.ask("first"))
        await asyncio.sleep(0)

        assert session.can_ask("second") is False
        assert await session.ask("second") is None

        gate.set()
        await task
        assert [m.content for m in session.messages if m.role == ChatRole.USER] == ["first"]
        assert len(fake_remote.calls_to("chat")) == 1


class TestFailures:
    """Backend failures are logged, not raised."""

    @pytest.mark.asyncio
    async def test_failure_logged_and_thinking_cleared(self, fake_remote):
        fake_remote.errors["chat"] = RemoteCallError("API Error: 502", status_code=502)
        log = OperationLog()
        session = ChatSession(fake_remote, log=log)

        assert await session.ask("hello") is None

        assert session.thinking is False
        assert _transcript(session) == [("user", "hello")]
        assert log.last.message == "Chat failed: API Error: 502"
        assert log.last.source == "chat"
        assert log.last.failed is True

    @pytest.mark.asyncio
    async def test_can_ask_again_after_failure(self, fake_remote):
        fake_remote.errors["chat"] = RuntimeError("down")
        session = ChatSession(fake_remote)
        await session.ask("one")

        del fake_remote.errors["chat"]
        reply = await session.ask("two")
        assert reply is not None
        assert _transcript(session)[-1][0] == "assistant"
