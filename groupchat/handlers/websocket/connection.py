"""ChatConnection adapter over a FastAPI WebSocket (structured protocol)."""

from __future__ import annotations

import json
import uuid
import logging
import contextlib

from fastapi import WebSocket

from ...config.websocket import (
    WS_CLOSE_IDLE_CODE,
    WS_CLOSE_IDLE_REASON,
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_POLICY_CODE,
)
from ...errors import (
    PeerReadError,
    PeerWriteError,
    InvalidFrameError,
    MalformedHandshakeError,
)
from ...messages import build_handshake
from ...state import ChatMessage, Handshake
from .disconnects import is_expected_disconnect
from .parser import message_text, parse_client_record

logger = logging.getLogger(__name__)


class WebSocketConnection:
    """JSON-record connection bound to one accepted WebSocket.

    Attributes:
        connection_id: Unique id for registry keys and logs.
        transport: Always "websocket".
    """

    transport = "websocket"

    def __init__(self, ws: WebSocket, *, connection_id: str | None = None) -> None:
        self.ws = ws
        self.connection_id = connection_id or f"ws-{uuid.uuid4().hex[:12]}"
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def receive_handshake(self) -> Handshake:
        try:
            record = await self._receive_record()
        except InvalidFrameError as exc:
            raise MalformedHandshakeError(exc.message) from exc
        return build_handshake(record.get("username"), record.get("color"))

    async def receive_one(self) -> str:
        return message_text(await self._receive_record())

    async def send_one(self, message: ChatMessage) -> None:
        if self._closed:
            raise PeerWriteError("websocket is closed")
        try:
            await self.ws.send_text(json.dumps(message.to_record()))
        except Exception as exc:  # noqa: BLE001
            raise PeerWriteError(str(exc) or exc.__class__.__name__) from exc

    async def reject(self, notice: ChatMessage | None) -> None:
        if notice is not None:
            with contextlib.suppress(PeerWriteError):
                await self.send_one(notice)
        await self.close(code=WS_CLOSE_POLICY_CODE)

    async def close(self, code: int = WS_CLOSE_NORMAL_CODE, reason: str = "") -> None:
        if self._closed:
            return
        self._closed = True
        with contextlib.suppress(Exception):
            await self.ws.close(code=code, reason=reason)

    async def close_idle(self) -> None:
        await self.close(code=WS_CLOSE_IDLE_CODE, reason=WS_CLOSE_IDLE_REASON)

    async def _receive_record(self) -> dict:
        if self._closed:
            raise PeerReadError("websocket is closed")
        try:
            raw = await self.ws.receive_text()
        except Exception as exc:  # noqa: BLE001
            if is_expected_disconnect(exc):
                raise PeerReadError(str(exc) or exc.__class__.__name__) from exc
            raise
        return parse_client_record(raw)


__all__ = ["WebSocketConnection"]
