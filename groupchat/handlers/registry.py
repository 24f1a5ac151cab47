"""Authoritative set of active sessions.

The registry keeps two indices, by connection id and by username, and
updates both inside one synchronous method so they never diverge. Methods
never await; on a single event loop each call is atomic with respect to
every other session task.

The transition from non-empty to empty invokes ``on_empty``; the chat room
uses it to reset the recent-history buffer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..config import SYSTEM_USERNAME
from ..errors import DuplicateUsernameError
from .session.session import Session

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Tracks live sessions and enforces username uniqueness.

    Attributes:
        reserved_usernames: Names no client may claim (the system author).
    """

    def __init__(
        self,
        on_empty: Callable[[], None] | None = None,
        reserved_usernames: frozenset[str] = frozenset({SYSTEM_USERNAME}),
    ) -> None:
        self._by_connection: dict[str, Session] = {}
        self._by_username: dict[str, Session] = {}
        self._on_empty = on_empty
        self.reserved_usernames = reserved_usernames

    def register(self, session: Session) -> None:
        """Insert ``session`` into both indices.

        Raises:
            DuplicateUsernameError: The username is active or reserved. The
                registry is left untouched.
        """
        username = session.username
        if username in self._by_username or username in self.reserved_usernames:
            raise DuplicateUsernameError(username)
        if session.connection_id in self._by_connection:
            raise ValueError(f"connection {session.connection_id} is already registered")
        self._by_connection[session.connection_id] = session
        self._by_username[username] = session
        logger.info("registered %s (%s active)", username, len(self._by_connection))

    def unregister(self, session: Session) -> bool:
        """Remove ``session`` from both indices; idempotent.

        Returns:
            True if the session was registered.
        """
        current = self._by_connection.get(session.connection_id)
        if current is not session:
            return False
        del self._by_connection[session.connection_id]
        if self._by_username.get(session.username) is session:
            del self._by_username[session.username]
        remaining = len(self._by_connection)
        logger.info("unregistered %s (%s active)", session.username, remaining)
        if remaining == 0 and self._on_empty is not None:
            self._on_empty()
        return True

    def snapshot(self) -> list[Session]:
        """Point-in-time copy of the live sessions, in registration order."""
        return list(self._by_connection.values())

    def get(self, username: str) -> Session | None:
        return self._by_username.get(username)

    def usernames(self) -> list[str]:
        return list(self._by_username)

    def is_empty(self) -> bool:
        return not self._by_connection

    def __contains__(self, session: object) -> bool:
        if not isinstance(session, Session):
            return False
        return self._by_connection.get(session.connection_id) is session

    def __len__(self) -> int:
        return len(self._by_connection)


__all__ = ["SessionRegistry"]
