"""Unit tests for the fan-out worker."""

from __future__ import annotations

import asyncio

from groupchat.config.relay import OVERFLOW_DISCONNECT
from groupchat.handlers.registry import SessionRegistry
from groupchat.handlers.relay import MessageRelay
from groupchat.handlers.session import Session
from groupchat.state import ChatMessage
from tests.helpers.chat import FakeConnection, wait_until


def _msg(text: str, username: str = "alice") -> ChatMessage:
    return ChatMessage(username=username, message=text, color="#ffffff")


def _register(registry: SessionRegistry, username: str, **kwargs) -> tuple[Session, FakeConnection]:
    connection = FakeConnection()
    session = Session(connection, username, "#ffffff", **kwargs)
    registry.register(session)
    session.start_writer()
    return session, connection


def test_publish_order_is_preserved_for_every_recipient() -> None:
    async def _run() -> None:
        registry = SessionRegistry()
        relay = MessageRelay(registry)
        relay.start()
        _, alice_conn = _register(registry, "alice")
        _, bob_conn = _register(registry, "bob")

        for i in range(20):
            relay.publish(_msg(f"m{i}"))
        await wait_until(lambda: len(alice_conn.sent) == 20 and len(bob_conn.sent) == 20)

        expected = [f"m{i}" for i in range(20)]
        assert alice_conn.texts() == expected
        assert bob_conn.texts() == expected
        assert relay.published == 20
        await relay.stop()

    asyncio.run(_run())


def test_recipients_are_captured_at_publish_time() -> None:
    async def _run() -> None:
        registry = SessionRegistry()
        relay = MessageRelay(registry)
        _, alice_conn = _register(registry, "alice")

        relay.publish(_msg("before"))
        _, bob_conn = _register(registry, "bob")
        relay.start()
        relay.publish(_msg("after"))
        await relay.join()
        await wait_until(lambda: len(alice_conn.sent) == 2 and len(bob_conn.sent) == 1)

        assert bob_conn.texts() == ["after"]
        await relay.stop()

    asyncio.run(_run())


def test_unregistered_recipient_is_skipped() -> None:
    async def _run() -> None:
        registry = SessionRegistry()
        relay = MessageRelay(registry)
        _, alice_conn = _register(registry, "alice")
        bob, bob_conn = _register(registry, "bob")

        relay.publish(_msg("hello"))
        registry.unregister(bob)
        relay.start()
        await relay.join()
        await wait_until(lambda: alice_conn.sent)

        assert bob_conn.sent == []
        await relay.stop()

    asyncio.run(_run())


def test_overflow_under_disconnect_policy_reports_session() -> None:
    async def _run() -> None:
        registry = SessionRegistry()
        evicted: list[Session] = []
        relay = MessageRelay(registry, on_overflow=evicted.append)
        slow_conn = FakeConnection()
        slow = Session(slow_conn, "slow", "#ffffff", queue_size=2, overflow_policy=OVERFLOW_DISCONNECT)
        registry.register(slow)  # no writer: the queue never drains
        _, fast_conn = _register(registry, "fast")
        relay.start()

        for i in range(3):
            relay.publish(_msg(f"m{i}"))
        await relay.join()
        await wait_until(lambda: len(fast_conn.sent) == 3)

        assert evicted == [slow]
        assert fast_conn.texts() == ["m0", "m1", "m2"]
        await relay.stop()

    asyncio.run(_run())


def test_stop_is_idempotent() -> None:
    async def _run() -> None:
        relay = MessageRelay(SessionRegistry())
        relay.start()
        assert relay.running
        await relay.stop()
        await relay.stop()
        assert not relay.running

    asyncio.run(_run())


def test_point_to_point_notice_follows_earlier_broadcasts() -> None:
    async def _run() -> None:
        registry = SessionRegistry()
        relay = MessageRelay(registry)
        alice, alice_conn = _register(registry, "alice")
        _, bob_conn = _register(registry, "bob")

        relay.publish(_msg("one"))
        relay.publish(_msg("two"))
        relay.send_to(alice, _msg("slow down", username="System"))
        assert relay.published == 2
        assert relay.pending() == 3

        relay.start()
        await relay.join()
        await wait_until(lambda: len(alice_conn.sent) == 3 and len(bob_conn.sent) == 2)

        assert alice_conn.texts() == ["one", "two", "slow down"]
        assert bob_conn.texts() == ["one", "two"]
        await relay.stop()

    asyncio.run(_run())
