"""Per-connection idle enforcement.

Each connection gets an IdleWatchdog that:

1. Tracks last activity timestamp (updated via touch())
2. Runs a background task that checks for idleness
3. Invokes the transport's close coroutine when the idle timeout is reached

Closing the transport makes the pending read fail, which the session
handler treats as an ordinary disconnect.

Usage:
    watchdog = IdleWatchdog(connection.close_idle)
    watchdog.start()

    # In read loop:
    watchdog.touch()

    # On cleanup:
    await watchdog.stop()
"""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib
from collections.abc import Callable, Awaitable

from ..config import CHAT_IDLE_TIMEOUT_S, CHAT_WATCHDOG_TICK_S

logger = logging.getLogger(__name__)

CloseFn = Callable[[], Awaitable[None]]


class IdleWatchdog:
    """Tracks activity timestamps and enforces idle timeouts.

    A non-positive idle timeout disables the watchdog; start() then does
    nothing.
    """

    def __init__(
        self,
        close_fn: CloseFn,
        idle_timeout_s: float | None = None,
        watchdog_tick_s: float | None = None,
    ):
        """Initialize the watchdog.

        Args:
            close_fn: Coroutine function that closes the transport.
            idle_timeout_s: Override for idle timeout (defaults to config).
            watchdog_tick_s: Override for check interval (defaults to config).
        """
        self._close_fn = close_fn
        self._idle_timeout_s = float(CHAT_IDLE_TIMEOUT_S if idle_timeout_s is None else idle_timeout_s)
        self._watchdog_tick_s = float(watchdog_tick_s or CHAT_WATCHDOG_TICK_S)
        self._last_activity = time.monotonic()
        self._stop_event = asyncio.Event()
        self._idle_timed_out = False
        self._task: asyncio.Task | None = None

    @property
    def enabled(self) -> bool:
        return self._idle_timeout_s > 0

    def touch(self) -> None:
        """Record recent activity (resets idle countdown)."""

        self._last_activity = time.monotonic()

    def idle_timed_out(self) -> bool:
        """True once the watchdog closed the connection for inactivity."""

        return self._idle_timed_out

    def start(self) -> asyncio.Task | None:
        """Start the watchdog task (idempotent)."""

        if not self.enabled:
            return None
        if self._task is None:
            self._task = asyncio.create_task(self._watchdog_loop())
        return self._task

    async def stop(self) -> None:
        """Stop the watchdog task and wait for it to finish."""

        self._stop_event.set()
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await self._task
        self._task = None

    async def _watchdog_loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                await asyncio.sleep(self._watchdog_tick_s)
                if self._stop_event.is_set():
                    break
                if (time.monotonic() - self._last_activity) >= self._idle_timeout_s:
                    logger.info("idle timeout reached after %.0fs; closing connection", self._idle_timeout_s)
                    self._idle_timed_out = True
                    self._stop_event.set()
                    with contextlib.suppress(Exception):
                        await self._close_fn()
                    break
        except asyncio.CancelledError:
            pass  # Normal shutdown path


__all__ = ["IdleWatchdog"]
