"""Chat message dataclass shared by every transport."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """One chat message, user-authored or produced by the server.

    Messages are immutable and transient: they live long enough to be
    archived in the recent history and handed to the relay.

    Attributes:
        username: Author display name (the system name for server notices).
        message: Sanitized message text.
        color: Author display color.
        is_system: True for server-authored notices.
    """

    username: str
    message: str
    color: str
    is_system: bool = False

    def to_record(self) -> dict[str, Any]:
        """Structured-protocol representation."""
        return {
            "username": self.username,
            "message": self.message,
            "color": self.color,
            "isSystem": self.is_system,
        }


__all__ = ["ChatMessage"]
