"""WebSocket-specific runtime configuration values.

Close Codes (RFC 6455):
    1000: Normal closure
    1008: Policy violation (duplicate username, malformed handshake)
    1013: Try again later (server at capacity)
    4000+: Application-defined (idle timeout)
"""

from __future__ import annotations

import os

# ============================================================================
# WebSocket Close Codes
# ============================================================================

WS_CLOSE_NORMAL_CODE = int(os.getenv("WS_CLOSE_NORMAL_CODE", "1000"))
WS_CLOSE_POLICY_CODE = int(os.getenv("WS_CLOSE_POLICY_CODE", "1008"))
WS_CLOSE_BUSY_CODE = int(os.getenv("WS_CLOSE_BUSY_CODE", "1013"))
WS_CLOSE_IDLE_CODE = int(os.getenv("WS_CLOSE_IDLE_CODE", "4000"))
WS_CLOSE_IDLE_REASON = os.getenv("WS_CLOSE_IDLE_REASON", "idle_timeout")

WS_PATH = os.getenv("WS_PATH", "/ws")

__all__ = [
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_POLICY_CODE",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_IDLE_CODE",
    "WS_CLOSE_IDLE_REASON",
    "WS_PATH",
]
