"""Inbound message validation failures.

These never end a session; the sender gets a system notice and the
session keeps reading.
"""

from .base import ChatError


class MessageTooLongError(ChatError):
    """Message text exceeds the configured character limit."""

    error_code = "message_too_long"

    def __init__(self, length: int, limit: int, *, unit: str = "characters") -> None:
        super().__init__(f"Message too long ({length} {unit}); the limit is {limit}.")
        self.length = length
        self.limit = limit
        self.unit = unit


class InvalidFrameError(ChatError):
    """A structured-protocol frame could not be decoded into a message."""

    error_code = "invalid_frame"


__all__ = ["MessageTooLongError", "InvalidFrameError"]
