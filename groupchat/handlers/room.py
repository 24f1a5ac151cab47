"""Shared chat-room state and the operations sessions perform on it.

ChatRoom owns the session registry, the recent-history buffer, the rate
guard and the message relay. Transport adapters never touch those
directly; the session handler calls:

- join():   register, start the writer, replay history, announce
- submit(): validate, sanitize, rate-check, archive, publish
- notify(): point-to-point system notice for the sender
- leave():  unregister, drop rate state, announce, close

evict() is the synchronous variant of leave() used by the relay and by
writer tasks when a recipient can no longer be written to.

All state mutation happens in synchronous methods on the event loop
thread, so no lock is held across an await and no I/O happens while
state is being changed.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from ..config import (
    CHAT_ANNOUNCE_PRESENCE,
    CHAT_MESSAGE_MAX_CHARS,
    CHAT_RATE_STATE_SURVIVES_LEAVE,
)
from ..errors import ChatError
from ..messages import (
    error_notice,
    join_notice,
    leave_notice,
    sanitize_message,
    validate_message_length,
)
from ..state import ChatMessage
from .history import RecentHistory
from .rate_guard import RateGuard
from .registry import SessionRegistry
from .relay import MessageRelay
from .session.session import Session

logger = logging.getLogger(__name__)


class ChatRoom:
    """The single chat room served by this process."""

    def __init__(
        self,
        *,
        history: RecentHistory | None = None,
        rate_guard: RateGuard | None = None,
        announce_presence: bool = CHAT_ANNOUNCE_PRESENCE,
        rate_state_survives_leave: bool = CHAT_RATE_STATE_SURVIVES_LEAVE,
        max_message_chars: int = CHAT_MESSAGE_MAX_CHARS,
    ) -> None:
        self.history = history if history is not None else RecentHistory()
        self.rate_guard = rate_guard if rate_guard is not None else RateGuard()
        self.registry = SessionRegistry(on_empty=self._on_room_empty)
        self.relay = MessageRelay(self.registry, on_overflow=self.evict)
        self.announce_presence = announce_presence
        self.rate_state_survives_leave = rate_state_survives_leave
        self.max_message_chars = max_message_chars
        self._closing: set[asyncio.Task] = set()

    # ============================================================================
    # Lifecycle
    # ============================================================================
    def start(self) -> None:
        self.relay.start()

    async def close(self) -> None:
        """Disconnect every session and stop the relay."""
        for session in self.registry.snapshot():
            await self.leave(session)
        await self.relay.stop()
        if self._closing:
            await asyncio.gather(*self._closing, return_exceptions=True)

    # ============================================================================
    # Session operations
    # ============================================================================
    def join(self, session: Session) -> None:
        """Activate ``session``: register it, replay history, announce it.

        Raises:
            DuplicateUsernameError: Username already active; nothing changed.
        """
        self.registry.register(session)
        session.start_writer(on_write_failure=self.evict)
        for message in self.history.replay():
            self.relay.send_to(session, message)
        if self.announce_presence:
            self.relay.publish(join_notice(session.username))

    def submit(self, session: Session, text: str) -> ChatMessage:
        """Accept one message from ``session`` and fan it out.

        Raises:
            MessageTooLongError: Text exceeds the character limit.
            RateLimitError: The sender is throttled.
        """
        validate_message_length(text, max_chars=self.max_message_chars)
        sanitized = sanitize_message(text)
        self.rate_guard.check(session.username)
        message = ChatMessage(
            username=session.username,
            message=sanitized,
            color=session.color,
        )
        self.history.append(message)
        self.relay.publish(message)
        return message

    def notify(self, session: Session, err: ChatError) -> None:
        """Send a rejection or warning to ``session`` only."""
        self.relay.send_to(session, error_notice(err))

    async def leave(self, session: Session) -> None:
        """Deactivate ``session`` and close its connection (idempotent)."""
        self._detach(session)
        await session.close()

    def evict(self, session: Session) -> None:
        """Drop an unwritable session without awaiting its teardown."""
        if self._detach(session):
            logger.info("evicted %s", session.username)
        if session.closed:
            return
        task = asyncio.create_task(session.close())
        self._closing.add(task)
        task.add_done_callback(self._closing.discard)

    def is_active(self, session: Session) -> bool:
        return session in self.registry and not session.closed

    def stats(self) -> dict[str, Any]:
        return {
            "sessions": len(self.registry),
            "history": len(self.history),
            "relay_pending": self.relay.pending(),
        }

    # ============================================================================
    # Internals
    # ============================================================================
    def _detach(self, session: Session) -> bool:
        removed = self.registry.unregister(session)
        if not removed:
            return False
        if not self.rate_state_survives_leave:
            self.rate_guard.forget(session.username)
        if self.announce_presence and not self.registry.is_empty():
            self.relay.publish(leave_notice(session.username))
        return True

    def _on_room_empty(self) -> None:
        if len(self.history):
            logger.info("room is empty; clearing %s archived messages", len(self.history))
        self.history.clear()


__all__ = ["ChatRoom"]
