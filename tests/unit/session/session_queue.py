"""Unit tests for per-session outbound queues and writer tasks."""

from __future__ import annotations

import asyncio

import pytest

from groupchat.config.relay import OVERFLOW_DISCONNECT, OVERFLOW_DROP_OLDEST
from groupchat.handlers.session import Session
from groupchat.state import ChatMessage
from tests.helpers.chat import FakeConnection, wait_until


def _msg(text: str) -> ChatMessage:
    return ChatMessage(username="alice", message=text, color="#ffffff")


def test_drop_oldest_keeps_newest_frames() -> None:
    session = Session(FakeConnection(), "bob", "#ffffff", queue_size=2, overflow_policy=OVERFLOW_DROP_OLDEST)

    assert session.deliver(_msg("a"))
    assert session.deliver(_msg("b"))
    assert session.deliver(_msg("c"))

    assert session.pending() == 2
    assert session.dropped == 1


def test_disconnect_policy_reports_overflow() -> None:
    session = Session(FakeConnection(), "bob", "#ffffff", queue_size=1, overflow_policy=OVERFLOW_DISCONNECT)

    assert session.deliver(_msg("a"))
    assert not session.deliver(_msg("b"))
    assert session.pending() == 1


def test_unknown_overflow_policy_is_rejected() -> None:
    with pytest.raises(ValueError):
        Session(FakeConnection(), "bob", "#ffffff", overflow_policy="block")


def test_writer_sends_in_order_and_close_flushes() -> None:
    async def _run() -> None:
        connection = FakeConnection(send_delay=0.001)
        session = Session(connection, "bob", "#ffffff")
        session.start_writer()
        for text in ("a", "b", "c"):
            session.deliver(_msg(text))

        await session.close()

        assert connection.texts() == ["a", "b", "c"]
        assert connection.closed
        assert session.closed

    asyncio.run(_run())


def test_close_is_idempotent_and_terminal() -> None:
    async def _run() -> None:
        connection = FakeConnection()
        session = Session(connection, "bob", "#ffffff")
        session.start_writer()

        await session.close()
        await session.close()

        assert connection.close_calls == 1
        assert session.deliver(_msg("late"))
        assert session.pending() == 0

    asyncio.run(_run())


def test_write_failure_invokes_callback_once() -> None:
    async def _run() -> None:
        failures: list[Session] = []
        connection = FakeConnection(fail_writes=True)
        session = Session(connection, "bob", "#ffffff")
        session.start_writer(on_write_failure=failures.append)

        session.deliver(_msg("a"))
        session.deliver(_msg("b"))
        await wait_until(lambda: failures)
        await asyncio.sleep(0.01)

        assert failures == [session]
        assert session.pending() == 0
        await session.close()

    asyncio.run(_run())
