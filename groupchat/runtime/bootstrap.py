"""Runtime dependency bootstrap.

This module eagerly builds all configured runtime services at startup.
Request handlers consume these dependencies directly instead of triggering
lazy singleton initialization at request time.
"""

from __future__ import annotations

from groupchat.config import (
    CHAT_HISTORY_SIZE,
    CHAT_SPAM_THRESHOLD,
    CHAT_SPAM_COOLDOWN_S,
    CHAT_SOCKET_ENABLED,
)
from groupchat.handlers.room import ChatRoom
from groupchat.handlers.history import RecentHistory
from groupchat.handlers.rate_guard import RateGuard
from groupchat.handlers.connections import ConnectionHandler
from groupchat.handlers.socket.server import LineSocketServer

from .dependencies import RuntimeDeps


def build_runtime_deps(*, socket_enabled: bool = CHAT_SOCKET_ENABLED) -> RuntimeDeps:
    """Build runtime dependencies for the configured transports.

    Nothing is started here; call RuntimeDeps.start() from a running loop.
    """
    connections = ConnectionHandler()
    room = ChatRoom(
        history=RecentHistory(CHAT_HISTORY_SIZE),
        rate_guard=RateGuard(
            threshold=CHAT_SPAM_THRESHOLD,
            cooldown_seconds=CHAT_SPAM_COOLDOWN_S,
        ),
    )
    line_server = LineSocketServer(room, connections) if socket_enabled else None
    return RuntimeDeps(
        connections=connections,
        room=room,
        line_server=line_server,
    )


__all__ = ["build_runtime_deps"]
