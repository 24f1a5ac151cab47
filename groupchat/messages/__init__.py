"""Message sanitization, validation and system notices."""

from .sanitize import sanitize_message, strip_echo_prefix
from .validators import build_handshake, validate_message_length
from .system import (
    error_notice,
    join_notice,
    leave_notice,
    system_message,
    rate_limit_notice,
)

__all__ = [
    "sanitize_message",
    "strip_echo_prefix",
    "build_handshake",
    "validate_message_length",
    "system_message",
    "join_notice",
    "leave_notice",
    "rate_limit_notice",
    "error_notice",
]
