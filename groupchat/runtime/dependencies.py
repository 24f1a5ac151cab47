"""Runtime dependency container.

All long-lived runtime services are assembled at startup and passed explicitly
through request handlers. This avoids lazy singleton initialization during
request processing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from groupchat.handlers.room import ChatRoom
    from groupchat.handlers.connections import ConnectionHandler
    from groupchat.handlers.socket.server import LineSocketServer


@dataclass(slots=True)
class RuntimeDeps:
    """Process-wide runtime services initialized during startup."""

    connections: ConnectionHandler
    room: ChatRoom
    line_server: LineSocketServer | None = None

    async def start(self) -> None:
        """Start the relay worker, then bind the line listener if configured.

        Raises:
            OSError: The line socket could not be bound.
        """
        self.room.start()
        if self.line_server is not None:
            await self.line_server.start()

    async def shutdown(self) -> None:
        if self.line_server is not None:
            await self.line_server.stop()
        await self.room.close()

    def health(self) -> dict[str, Any]:
        return {
            "status": "ok",
            **self.room.stats(),
            "connections": self.connections.get_capacity_info(),
        }
