"""Primary WebSocket connection handler orchestration.

1. Admission: take a slot from the shared ConnectionHandler, or reject
   with a system notice and close code 1013.
2. Accept and start an idle watchdog (close code 4000 on timeout).
3. Hand the connection to the transport-agnostic session handler.
4. Release the slot on exit.
"""

from __future__ import annotations

import logging

from fastapi import WebSocket

from ...config.websocket import WS_CLOSE_BUSY_CODE
from ...runtime.dependencies import RuntimeDeps
from ..lifecycle import IdleWatchdog
from ..session_handler import run_chat_session
from .connection import WebSocketConnection
from .errors import reject_connection

logger = logging.getLogger(__name__)


async def _prepare_connection(ws: WebSocket, connection: WebSocketConnection, runtime_deps: RuntimeDeps) -> bool:
    """Admit and accept the WebSocket, or reject it when at capacity."""
    connections = runtime_deps.connections
    if not await connections.connect(connection.connection_id, connection.transport):
        capacity_info = connections.get_capacity_info()
        await reject_connection(
            ws,
            message=(
                "Server is at capacity. "
                f"Active connections: {capacity_info['active']}/{capacity_info['max']}. "
                "Please try again later."
            ),
            close_code=WS_CLOSE_BUSY_CODE,
        )
        return False

    await ws.accept()
    return True


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    """Serve one structured-protocol participant until disconnect."""
    connection = WebSocketConnection(ws)
    if not await _prepare_connection(ws, connection, runtime_deps):
        return

    watchdog = IdleWatchdog(connection.close_idle)
    try:
        await run_chat_session(connection, runtime_deps.room, watchdog=watchdog)
        if watchdog.idle_timed_out():
            logger.info("websocket %s closed for inactivity", connection.connection_id)
    finally:
        await connection.close()
        await runtime_deps.connections.disconnect(connection.connection_id)


__all__ = ["handle_websocket_connection"]
