"""Fan-out and per-session outbound buffering configuration.

CHAT_OUTBOUND_QUEUE_SIZE bounds each session's pending deliveries. When a
slow reader fills its queue, CHAT_OUTBOUND_OVERFLOW decides what happens:

    drop_oldest: discard the oldest pending frame and keep the session
    disconnect:  evict the session and close its connection
"""

from __future__ import annotations

import os

OVERFLOW_DROP_OLDEST = "drop_oldest"
OVERFLOW_DISCONNECT = "disconnect"
OVERFLOW_POLICIES = (OVERFLOW_DROP_OLDEST, OVERFLOW_DISCONNECT)

CHAT_OUTBOUND_QUEUE_SIZE = int(os.getenv("CHAT_OUTBOUND_QUEUE_SIZE", "64"))
CHAT_OUTBOUND_OVERFLOW = (
    os.getenv("CHAT_OUTBOUND_OVERFLOW", OVERFLOW_DROP_OLDEST) or OVERFLOW_DROP_OLDEST
).strip().lower()

if CHAT_OUTBOUND_OVERFLOW not in OVERFLOW_POLICIES:
    raise ValueError(
        f"CHAT_OUTBOUND_OVERFLOW must be one of {OVERFLOW_POLICIES}, got '{CHAT_OUTBOUND_OVERFLOW}'."
    )

# Seconds a closing session waits for its writer to flush pending frames
CHAT_WRITER_DRAIN_TIMEOUT_S = float(os.getenv("CHAT_WRITER_DRAIN_TIMEOUT_S", "1.0"))

__all__ = [
    "OVERFLOW_DROP_OLDEST",
    "OVERFLOW_DISCONNECT",
    "OVERFLOW_POLICIES",
    "CHAT_OUTBOUND_QUEUE_SIZE",
    "CHAT_OUTBOUND_OVERFLOW",
    "CHAT_WRITER_DRAIN_TIMEOUT_S",
]
