"""Transport-agnostic connection contract used by the session handler.

Every wire shape (line protocol, structured WebSocket protocol) is wrapped
in an adapter exposing the same coroutines, so the handshake, read
loop and teardown logic exist exactly once.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ...state import ChatMessage, Handshake


@runtime_checkable
class ChatConnection(Protocol):
    """Duplex channel carrying one participant's traffic.

    Attributes:
        connection_id: Stable identifier used for registry keys and logs.
        transport: Short transport label for logs ("line", "websocket").
    """

    connection_id: str
    transport: str

    async def receive_handshake(self) -> Handshake:
        """Read the first unit and return the claimed identity.

        Raises:
            MalformedHandshakeError: The unit lacked a username or color.
            PeerReadError: The peer went away before sending one.
        """
        ...

    async def receive_one(self) -> str:
        """Read one inbound message and return its raw text.

        Raises:
            InvalidFrameError: The unit could not be decoded (session stays up).
            MessageTooLongError: The unit overran the transport read limit and
                was discarded (session stays up).
            PeerReadError: The peer went away.
        """
        ...

    async def send_one(self, message: ChatMessage) -> None:
        """Write one outbound message.

        Raises:
            PeerWriteError: The write failed.
        """
        ...

    async def reject(self, notice: ChatMessage | None) -> None:
        """Refuse the peer during the handshake: send ``notice`` if given, then close.

        Write failures are ignored; the connection is closed either way.
        """
        ...

    async def close(self) -> None:
        """Close the underlying transport (idempotent)."""
        ...


__all__ = ["ChatConnection"]
