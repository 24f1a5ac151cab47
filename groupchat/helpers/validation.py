"""Environment validation helpers."""

from __future__ import annotations

from ..config.chat import CHAT_HISTORY_SIZE, CHAT_SPAM_THRESHOLD, CHAT_SPAM_COOLDOWN_S, CHAT_MESSAGE_MAX_CHARS
from ..config.limits import MAX_CONCURRENT_CONNECTIONS, CONNECTION_ACQUIRE_TIMEOUT_S
from ..config.relay import CHAT_OUTBOUND_QUEUE_SIZE
from ..config.socket import CHAT_SOCKET_PATH, CHAT_SOCKET_PORT, CHAT_LINE_MAX_BYTES, CHAT_SOCKET_ENABLED


def validate_env() -> None:
    """Validate required configuration once during startup."""
    errors: list[str] = []

    if CHAT_HISTORY_SIZE <= 0:
        errors.append(f"CHAT_HISTORY_SIZE must be positive, got: {CHAT_HISTORY_SIZE}")
    if CHAT_MESSAGE_MAX_CHARS <= 0:
        errors.append(f"CHAT_MESSAGE_MAX_CHARS must be positive, got: {CHAT_MESSAGE_MAX_CHARS}")
    if CHAT_SPAM_THRESHOLD < 0:
        errors.append(f"CHAT_SPAM_THRESHOLD must be >= 0, got: {CHAT_SPAM_THRESHOLD}")
    if CHAT_SPAM_COOLDOWN_S < 0:
        errors.append(f"CHAT_SPAM_COOLDOWN_S must be >= 0, got: {CHAT_SPAM_COOLDOWN_S}")

    if MAX_CONCURRENT_CONNECTIONS <= 0:
        errors.append(f"MAX_CONCURRENT_CONNECTIONS must be positive, got: {MAX_CONCURRENT_CONNECTIONS}")
    if CONNECTION_ACQUIRE_TIMEOUT_S < 0:
        errors.append(f"CONNECTION_ACQUIRE_TIMEOUT_S must be >= 0, got: {CONNECTION_ACQUIRE_TIMEOUT_S}")
    if CHAT_OUTBOUND_QUEUE_SIZE <= 0:
        errors.append(f"CHAT_OUTBOUND_QUEUE_SIZE must be positive, got: {CHAT_OUTBOUND_QUEUE_SIZE}")

    if CHAT_SOCKET_ENABLED:
        if CHAT_SOCKET_PORT is None and not CHAT_SOCKET_PATH:
            errors.append("CHAT_SOCKET_PATH or CHAT_SOCKET_PORT is required when CHAT_SOCKET_ENABLED=1")
        if CHAT_SOCKET_PORT is not None and not 0 <= CHAT_SOCKET_PORT <= 65535:
            errors.append(f"CHAT_SOCKET_PORT must be a valid TCP port, got: {CHAT_SOCKET_PORT}")
        # The longest accepted message plus its newline must fit in one line
        if CHAT_LINE_MAX_BYTES <= CHAT_MESSAGE_MAX_CHARS:
            errors.append(
                f"CHAT_LINE_MAX_BYTES ({CHAT_LINE_MAX_BYTES}) must exceed "
                f"CHAT_MESSAGE_MAX_CHARS ({CHAT_MESSAGE_MAX_CHARS})"
            )

    if errors:
        raise ValueError("; ".join(errors))


__all__ = ["validate_env"]
