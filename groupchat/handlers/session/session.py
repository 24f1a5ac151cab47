"""Active chat participant with its own outbound queue and writer task.

The relay never writes to a connection directly. It calls deliver(),
which only enqueues; a dedicated writer task per session drains the queue
and performs the network I/O. One slow reader therefore only backs up its
own queue.

Queue saturation follows the configured overflow policy:

    drop_oldest: discard the oldest pending frame, keep the session
    disconnect:  deliver() returns False and the caller evicts the session
"""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections.abc import Callable

from ...config.relay import (
    OVERFLOW_DISCONNECT,
    OVERFLOW_DROP_OLDEST,
    CHAT_OUTBOUND_QUEUE_SIZE,
    CHAT_OUTBOUND_OVERFLOW,
    CHAT_WRITER_DRAIN_TIMEOUT_S,
)
from ...errors import PeerWriteError
from ...logging import log_context
from ...state import ChatMessage
from .connection import ChatConnection

logger = logging.getLogger(__name__)

WriteFailureFn = Callable[["Session"], None]


class Session:
    """One registered participant bound to one connection.

    Attributes:
        username: Display name, unique among active sessions.
        color: Display color.
        connection: The owning transport adapter.
        connection_id: Registry key (taken from the connection).
    """

    def __init__(
        self,
        connection: ChatConnection,
        username: str,
        color: str,
        *,
        queue_size: int = CHAT_OUTBOUND_QUEUE_SIZE,
        overflow_policy: str = CHAT_OUTBOUND_OVERFLOW,
        drain_timeout_s: float = CHAT_WRITER_DRAIN_TIMEOUT_S,
    ) -> None:
        if overflow_policy not in (OVERFLOW_DROP_OLDEST, OVERFLOW_DISCONNECT):
            raise ValueError(f"unknown overflow policy '{overflow_policy}'")
        self.connection = connection
        self.connection_id = connection.connection_id
        self.username = username
        self.color = color
        self._overflow_policy = overflow_policy
        self._drain_timeout_s = max(0.0, float(drain_timeout_s))
        self._outbound: asyncio.Queue[ChatMessage] = asyncio.Queue(maxsize=max(1, queue_size))
        self._writer: asyncio.Task | None = None
        self._on_write_failure: WriteFailureFn | None = None
        self._closed = False
        self.dropped = 0  # frames discarded by drop_oldest

    @property
    def closed(self) -> bool:
        return self._closed

    def pending(self) -> int:
        return self._outbound.qsize()

    def start_writer(self, on_write_failure: WriteFailureFn | None = None) -> asyncio.Task:
        """Start the writer task (idempotent)."""
        self._on_write_failure = on_write_failure
        if self._writer is None:
            self._writer = asyncio.create_task(
                self._writer_loop(),
                name=f"chat-writer-{self.connection_id}",
            )
        return self._writer

    def deliver(self, message: ChatMessage) -> bool:
        """Enqueue a message without blocking.

        Returns:
            False only when the queue is full under the disconnect policy.
            Messages for closed sessions are dropped silently (True).
        """
        if self._closed:
            return True
        try:
            self._outbound.put_nowait(message)
            return True
        except asyncio.QueueFull:
            if self._overflow_policy == OVERFLOW_DISCONNECT:
                logger.warning(
                    "outbound queue full for %s (%s pending); disconnecting",
                    self.username,
                    self._outbound.qsize(),
                )
                return False
        # drop_oldest
        with contextlib.suppress(asyncio.QueueEmpty):
            self._outbound.get_nowait()
            self._outbound.task_done()
        self._outbound.put_nowait(message)
        self.dropped += 1
        logger.debug("outbound queue full for %s; dropped oldest frame", self.username)
        return True

    async def close(self) -> None:
        """Flush pending frames briefly, stop the writer and close the connection.

        Closed is terminal; repeated calls are no-ops.
        """
        if self._closed:
            return
        self._closed = True
        task = self._writer
        if task is not None and task is not asyncio.current_task():
            if not task.done() and self._drain_timeout_s > 0:
                with contextlib.suppress(asyncio.TimeoutError):
                    await asyncio.wait_for(self._outbound.join(), timeout=self._drain_timeout_s)
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await task
        with contextlib.suppress(Exception):
            await self.connection.close()

    async def _writer_loop(self) -> None:
        with log_context(username=self.username, connection_id=self.connection_id):
            while True:
                message = await self._outbound.get()
                try:
                    await self.connection.send_one(message)
                except PeerWriteError as exc:
                    logger.info("write to %s failed: %s", self.username, exc)
                    self._drain_after_failure()
                    if self._on_write_failure is not None:
                        self._on_write_failure(self)
                    return
                finally:
                    self._outbound.task_done()

    def _drain_after_failure(self) -> None:
        while True:
            try:
                self._outbound.get_nowait()
            except asyncio.QueueEmpty:
                return
            self._outbound.task_done()

    def __repr__(self) -> str:
        return f"Session(username={self.username!r}, connection_id={self.connection_id!r})"


__all__ = ["Session"]
