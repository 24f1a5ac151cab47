"""Connection admission limits."""

import os


# Maximum concurrent connections across the WebSocket and line transports
MAX_CONCURRENT_CONNECTIONS = int(os.getenv("MAX_CONCURRENT_CONNECTIONS", "256"))

# Max seconds a new connection waits for a free slot before being refused
CONNECTION_ACQUIRE_TIMEOUT_S = float(os.getenv("CONNECTION_ACQUIRE_TIMEOUT_S", "0.5"))

# Seconds without inbound traffic before a connection is closed (0 disables)
CHAT_IDLE_TIMEOUT_S = float(os.getenv("CHAT_IDLE_TIMEOUT_S", "300"))
CHAT_WATCHDOG_TICK_S = float(os.getenv("CHAT_WATCHDOG_TICK_S", "5"))

__all__ = [
    "MAX_CONCURRENT_CONNECTIONS",
    "CONNECTION_ACQUIRE_TIMEOUT_S",
    "CHAT_IDLE_TIMEOUT_S",
    "CHAT_WATCHDOG_TICK_S",
]
