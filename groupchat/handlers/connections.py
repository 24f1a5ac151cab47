"""Admission control shared by the WebSocket and line-protocol listeners.

Both transports draw from one pool of ``max_connections`` slots. A peer
waits up to ``acquire_timeout`` seconds for a slot before it is refused
with a capacity notice. Each admitted connection is recorded with its
transport so health reports can break the pool down.

Example:
    pool = ConnectionHandler(max_connections=100)

    if not await pool.connect(connection.connection_id, connection.transport):
        await connection.reject(capacity_notice)
        return
    try:
        await run_chat_session(connection, room)
    finally:
        await pool.disconnect(connection.connection_id)
"""

import asyncio
import logging
from collections import Counter

from ..config import CONNECTION_ACQUIRE_TIMEOUT_S, MAX_CONCURRENT_CONNECTIONS

logger = logging.getLogger(__name__)


class ConnectionHandler:
    """Slot pool for chat peers across transports.

    Attributes:
        max_connections: Slots in the pool.
        acquire_timeout: Seconds a new peer may wait for a free slot.
        active_connections: Admitted connection ids mapped to their transport.
    """

    def __init__(
        self,
        max_connections: int = MAX_CONCURRENT_CONNECTIONS,
        acquire_timeout: float = CONNECTION_ACQUIRE_TIMEOUT_S,
    ):
        if max_connections <= 0:
            raise ValueError(f"max_connections must be positive, got {max_connections}")
        self.max_connections = max_connections
        self.acquire_timeout = acquire_timeout
        self.active_connections: dict[str, str] = {}
        self._lock = asyncio.Lock()
        self._slots = asyncio.Semaphore(max_connections)

    async def connect(self, connection_id: str, transport: str = "unknown") -> bool:
        """Reserve a slot for ``connection_id``.

        Returns:
            True once admitted (immediately if already admitted), False when
            no slot freed up within ``acquire_timeout``.
        """
        if self.is_admitted(connection_id):
            return True
        try:
            await asyncio.wait_for(self._slots.acquire(), timeout=self.acquire_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "refused %s peer %s: room full (%s/%s)",
                transport,
                connection_id,
                len(self.active_connections),
                self.max_connections,
            )
            return False
        try:
            await self._admit(connection_id, transport)
        except BaseException:
            self._slots.release()
            raise
        return True

    async def disconnect(self, connection_id: str) -> None:
        """Return the slot held by ``connection_id`` (idempotent)."""
        async with self._lock:
            transport = self.active_connections.pop(connection_id, None)
        if transport is None:
            return
        self._slots.release()
        logger.info(
            "released %s slot for %s (%s/%s)",
            transport,
            connection_id,
            len(self.active_connections),
            self.max_connections,
        )

    def is_admitted(self, connection_id: str) -> bool:
        return connection_id in self.active_connections

    def get_connection_count(self) -> int:
        return len(self.active_connections)

    def get_capacity_info(self) -> dict:
        """Pool usage for the health endpoint and capacity logs."""
        active = len(self.active_connections)
        return {
            "active": active,
            "max": self.max_connections,
            "available": self.max_connections - active,
            "at_capacity": active >= self.max_connections,
            "by_transport": dict(Counter(self.active_connections.values())),
        }

    async def _admit(self, connection_id: str, transport: str) -> None:
        async with self._lock:
            self.active_connections[connection_id] = transport
        logger.info(
            "admitted %s peer %s (%s/%s)",
            transport,
            connection_id,
            len(self.active_connections),
            self.max_connections,
        )


__all__ = ["ConnectionHandler"]
