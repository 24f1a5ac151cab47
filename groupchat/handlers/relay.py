"""Single fan-out path for chat messages.

publish() captures the recipient list at call time and puts it on a work
queue; it never blocks and never performs I/O. One dedicated worker task
drains the queue in FIFO order and hands each message to every recipient's
outbound queue, so all recipients observe publish order.

Point-to-point notices (send_to) ride the same queue with a single
recipient.

Recipients whose outbound queue saturates under the disconnect policy are
reported to ``on_overflow`` (the room evicts them); delivery to the rest
continues.

Usage:
    relay = MessageRelay(registry, on_overflow=room.evict)
    relay.start()
    relay.publish(message)
    ...
    await relay.stop()
"""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections.abc import Callable

from ..state import ChatMessage
from .registry import SessionRegistry
from .session.session import Session

logger = logging.getLogger(__name__)

OverflowFn = Callable[[Session], None]


class MessageRelay:
    """Delivers each published message to every registered session."""

    def __init__(
        self,
        registry: SessionRegistry,
        *,
        on_overflow: OverflowFn | None = None,
    ) -> None:
        self._registry = registry
        self._on_overflow = on_overflow
        self._queue: asyncio.Queue[tuple[ChatMessage, list[Session]]] = asyncio.Queue()
        self._task: asyncio.Task | None = None
        self.published = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Start the fan-out worker (idempotent)."""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._worker_loop(), name="chat-relay")
        return self._task

    async def stop(self) -> None:
        """Cancel the worker and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await task

    def publish(self, message: ChatMessage) -> None:
        """Queue ``message`` for every session registered right now."""
        self._queue.put_nowait((message, self._registry.snapshot()))
        self.published += 1

    def send_to(self, session: Session, message: ChatMessage) -> None:
        """Queue ``message`` for ``session`` alone.

        Shares the fan-out queue, so the recipient sees it after everything
        published before this call.
        """
        self._queue.put_nowait((message, [session]))

    async def join(self) -> None:
        """Wait until every queued message has been fanned out."""
        await self._queue.join()

    def pending(self) -> int:
        return self._queue.qsize()

    async def _worker_loop(self) -> None:
        while True:
            message, recipients = await self._queue.get()
            try:
                self._fan_out(message, recipients)
            except Exception:  # noqa: BLE001
                logger.exception("relay: fan-out failed for message from %s", message.username)
            finally:
                self._queue.task_done()

    def _fan_out(self, message: ChatMessage, recipients: list[Session]) -> None:
        for session in recipients:
            # Evicted between publish and fan-out
            if session.closed or session not in self._registry:
                continue
            if not session.deliver(message):
                self._report_overflow(session)

    def _report_overflow(self, session: Session) -> None:
        if self._on_overflow is not None:
            self._on_overflow(session)


__all__ = ["MessageRelay"]
