"""Unit tests for contextual logging fields."""

from __future__ import annotations

import asyncio
import logging

import pytest

from groupchat.logging import install_log_context, log_context


def _capture(caplog: pytest.LogCaptureFixture) -> list[tuple[str, str]]:
    return [(record.username, record.connection_id) for record in caplog.records]


def test_log_context_injects_and_restores_fields(caplog: pytest.LogCaptureFixture) -> None:
    install_log_context()
    logger = logging.getLogger("groupchat.tests")

    with caplog.at_level(logging.INFO, logger="groupchat.tests"):
        logger.info("outside")
        with log_context(connection_id="conn-1"):
            with log_context(username="alice"):
                logger.info("inside")
            logger.info("after user")

    assert _capture(caplog) == [("-", "-"), ("alice", "conn-1"), ("-", "conn-1")]


def test_log_context_is_isolated_between_tasks(caplog: pytest.LogCaptureFixture) -> None:
    install_log_context()
    logger = logging.getLogger("groupchat.tests")

    async def _session(name: str) -> None:
        with log_context(username=name, connection_id=f"c-{name}"):
            await asyncio.sleep(0.001)
            logger.info("tick")

    async def _run() -> None:
        await asyncio.gather(_session("alice"), _session("bob"))

    with caplog.at_level(logging.INFO, logger="groupchat.tests"):
        asyncio.run(_run())

    assert sorted(_capture(caplog)) == [("alice", "c-alice"), ("bob", "c-bob")]
