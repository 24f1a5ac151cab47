"""Line-protocol listener built on asyncio streams.

Listens on a Unix domain socket (default) or on TCP when a port is given.
Every accepted connection goes through admission control, then runs the
shared session handler with an idle watchdog.
"""

from __future__ import annotations

import os
import asyncio
import logging
import contextlib

from ...config.socket import (
    CHAT_SOCKET_HOST,
    CHAT_SOCKET_PATH,
    CHAT_SOCKET_PORT,
    CHAT_LINE_MAX_BYTES,
)
from ...messages import system_message
from ..connections import ConnectionHandler
from ..lifecycle import IdleWatchdog
from ..room import ChatRoom
from ..session_handler import run_chat_session
from .connection import LineConnection

logger = logging.getLogger(__name__)


class LineSocketServer:
    """Serves the line protocol for one chat room.

    Attributes:
        path: Unix socket path (ignored when ``port`` is set).
        host: TCP bind host.
        port: TCP port, or None for a Unix socket.
    """

    def __init__(
        self,
        room: ChatRoom,
        connections: ConnectionHandler,
        *,
        path: str = CHAT_SOCKET_PATH,
        host: str = CHAT_SOCKET_HOST,
        port: int | None = CHAT_SOCKET_PORT,
        line_limit: int = CHAT_LINE_MAX_BYTES,
        idle_timeout_s: float | None = None,
    ) -> None:
        self._room = room
        self._connections = connections
        self.path = path
        self.host = host
        self.port = port
        self._line_limit = line_limit
        self._idle_timeout_s = idle_timeout_s
        self._server: asyncio.AbstractServer | None = None
        self._clients: set[asyncio.Task] = set()

    @property
    def address(self) -> str:
        if self.port is not None:
            return f"{self.host}:{self.port}"
        return self.path

    @property
    def serving(self) -> bool:
        return self._server is not None and self._server.is_serving()

    async def start(self) -> None:
        """Bind the listener.

        Raises:
            OSError: The socket could not be bound (process-fatal at startup).
        """
        if self._server is not None:
            return
        if self.port is not None:
            self._server = await asyncio.start_server(
                self._handle_client,
                self.host,
                self.port,
                limit=self._line_limit,
            )
            if self.port == 0:
                sock = self._server.sockets[0]
                self.port = sock.getsockname()[1]
        else:
            # Clean up a socket file left by a previous run
            if os.path.exists(self.path):
                os.unlink(self.path)
            self._server = await asyncio.start_unix_server(
                self._handle_client,
                path=self.path,
                limit=self._line_limit,
            )
        logger.info("line server listening on %s", self.address)

    async def stop(self) -> None:
        """Stop accepting, drop live clients and remove the socket file."""
        server, self._server = self._server, None
        if server is None:
            return
        server.close()
        for task in list(self._clients):
            task.cancel()
        if self._clients:
            await asyncio.gather(*self._clients, return_exceptions=True)
        with contextlib.suppress(Exception):
            await server.wait_closed()
        if self.port is None:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(self.path)
        logger.info("line server stopped")

    async def _handle_client(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ) -> None:
        task = asyncio.current_task()
        if task is not None:
            self._clients.add(task)
        connection = LineConnection(reader, writer, line_limit=self._line_limit)
        logger.info("line connection from %s", connection.peer or self.path)
        try:
            if not await self._connections.connect(connection.connection_id, connection.transport):
                await connection.reject(system_message("Server is at capacity. Please try again later."))
                return
            try:
                watchdog = IdleWatchdog(connection.close, idle_timeout_s=self._idle_timeout_s)
                await run_chat_session(connection, self._room, watchdog=watchdog)
            finally:
                await self._connections.disconnect(connection.connection_id)
        finally:
            with contextlib.suppress(Exception):
                await connection.close()
            if task is not None:
                self._clients.discard(task)


__all__ = ["LineSocketServer"]
