"""Shared validation helpers for inbound chat traffic."""

from __future__ import annotations

from ..config import CHAT_MESSAGE_MAX_CHARS, DEFAULT_USER_COLOR
from ..errors import MalformedHandshakeError, MessageTooLongError
from ..state import Handshake

# Characters that would split or re-field a line-protocol frame
_USERNAME_FORBIDDEN = frozenset("\r\n:")
_COLOR_FORBIDDEN = frozenset("\r\n")


def validate_message_length(text: str, *, max_chars: int = CHAT_MESSAGE_MAX_CHARS) -> str:
    if len(text) > max_chars:
        raise MessageTooLongError(len(text), max_chars)
    return text


def build_handshake(raw_username: object, raw_color: object) -> Handshake:
    """Normalize a claimed identity, rejecting anything without a username.

    An absent or blank color falls back to the default display color.
    Usernames may not contain line breaks or ``:``; colors may not contain
    line breaks.
    """
    if not isinstance(raw_username, str) or not raw_username.strip():
        raise MalformedHandshakeError("handshake is missing a username")
    if raw_color is not None and not isinstance(raw_color, str):
        raise MalformedHandshakeError("handshake color must be a string")
    username = raw_username.strip()
    color = (raw_color or "").strip() or DEFAULT_USER_COLOR
    if _USERNAME_FORBIDDEN.intersection(username):
        raise MalformedHandshakeError("username may not contain line breaks or ':'")
    if _COLOR_FORBIDDEN.intersection(color):
        raise MalformedHandshakeError("color may not contain line breaks")
    return Handshake(username=username, color=color)


__all__ = ["validate_message_length", "build_handshake"]
