"""Line-protocol socket server configuration.

The line server listens on a Unix domain socket by default. Setting
CHAT_SOCKET_PORT switches it to TCP on CHAT_SOCKET_HOST instead.
"""

from __future__ import annotations

import os

CHAT_SOCKET_ENABLED = os.getenv("CHAT_SOCKET_ENABLED", "1") == "1"
CHAT_SOCKET_PATH = os.getenv("CHAT_SOCKET_PATH", "/tmp/groupchat.sock")
CHAT_SOCKET_HOST = os.getenv("CHAT_SOCKET_HOST", "127.0.0.1")
_port_raw = os.getenv("CHAT_SOCKET_PORT")
CHAT_SOCKET_PORT = int(_port_raw) if _port_raw else None

# Longest accepted inbound line in bytes (asyncio stream limit)
CHAT_LINE_MAX_BYTES = int(os.getenv("CHAT_LINE_MAX_BYTES", "8192"))
CHAT_LINE_ENCODING = os.getenv("CHAT_LINE_ENCODING", "utf-8")

__all__ = [
    "CHAT_SOCKET_ENABLED",
    "CHAT_SOCKET_PATH",
    "CHAT_SOCKET_HOST",
    "CHAT_SOCKET_PORT",
    "CHAT_LINE_MAX_BYTES",
    "CHAT_LINE_ENCODING",
]
