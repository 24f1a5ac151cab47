"""Aggregator of configuration modules.

This module re-exports the config API from smaller modules:
- chat: history, validation and anti-spam rules
- limits: admission and idle limits
- relay: per-session outbound buffering
- socket: line-protocol listener
- websocket: close codes and endpoint path
"""

from .chat import (
    CHAT_HISTORY_SIZE,
    CHAT_MESSAGE_MAX_CHARS,
    CHAT_SPAM_THRESHOLD,
    CHAT_SPAM_COOLDOWN_S,
    CHAT_RATE_STATE_SURVIVES_LEAVE,
    CHAT_ANNOUNCE_PRESENCE,
    SYSTEM_USERNAME,
    SYSTEM_COLOR,
    DEFAULT_USER_COLOR,
)
from .limits import (
    MAX_CONCURRENT_CONNECTIONS,
    CONNECTION_ACQUIRE_TIMEOUT_S,
    CHAT_IDLE_TIMEOUT_S,
    CHAT_WATCHDOG_TICK_S,
)
from .relay import (
    CHAT_OUTBOUND_QUEUE_SIZE,
    CHAT_OUTBOUND_OVERFLOW,
    CHAT_WRITER_DRAIN_TIMEOUT_S,
)
from .socket import (
    CHAT_SOCKET_ENABLED,
    CHAT_SOCKET_PATH,
    CHAT_SOCKET_HOST,
    CHAT_SOCKET_PORT,
    CHAT_LINE_MAX_BYTES,
)
from .websocket import (
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_POLICY_CODE,
    WS_CLOSE_BUSY_CODE,
    WS_CLOSE_IDLE_CODE,
    WS_CLOSE_IDLE_REASON,
    WS_PATH,
)

__all__ = [
    "CHAT_HISTORY_SIZE",
    "CHAT_MESSAGE_MAX_CHARS",
    "CHAT_SPAM_THRESHOLD",
    "CHAT_SPAM_COOLDOWN_S",
    "CHAT_RATE_STATE_SURVIVES_LEAVE",
    "CHAT_ANNOUNCE_PRESENCE",
    "SYSTEM_USERNAME",
    "SYSTEM_COLOR",
    "DEFAULT_USER_COLOR",
    "MAX_CONCURRENT_CONNECTIONS",
    "CONNECTION_ACQUIRE_TIMEOUT_S",
    "CHAT_IDLE_TIMEOUT_S",
    "CHAT_WATCHDOG_TICK_S",
    "CHAT_OUTBOUND_QUEUE_SIZE",
    "CHAT_OUTBOUND_OVERFLOW",
    "CHAT_WRITER_DRAIN_TIMEOUT_S",
    "CHAT_SOCKET_ENABLED",
    "CHAT_SOCKET_PATH",
    "CHAT_SOCKET_HOST",
    "CHAT_SOCKET_PORT",
    "CHAT_LINE_MAX_BYTES",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_POLICY_CODE",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_IDLE_CODE",
    "WS_CLOSE_IDLE_REASON",
    "WS_PATH",
]
