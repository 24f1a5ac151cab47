"""Handshake failures raised before a session becomes active."""

from .base import ChatError


class MalformedHandshakeError(ChatError):
    """The first unit on a connection did not carry a username and color.

    The connection is closed without registering and without a reply.
    """

    error_code = "malformed_handshake"


class DuplicateUsernameError(ChatError):
    """The claimed username belongs to an active session.

    The client receives one rejection notice and the connection is closed.
    """

    error_code = "duplicate_username"

    def __init__(self, username: str) -> None:
        super().__init__(f"Username '{username}' is already taken.")
        self.username = username


__all__ = ["MalformedHandshakeError", "DuplicateUsernameError"]
