"""ChatConnection adapter over asyncio streams (line protocol)."""

from __future__ import annotations

import uuid
import asyncio
import logging
import contextlib

from ...config.socket import CHAT_LINE_ENCODING, CHAT_LINE_MAX_BYTES
from ...errors import MalformedHandshakeError, MessageTooLongError, PeerReadError, PeerWriteError
from ...state import ChatMessage, Handshake
from .codec import encode_frame, parse_handshake_line

logger = logging.getLogger(__name__)


class LineConnection:
    """Newline-delimited text connection.

    Attributes:
        connection_id: Unique id for registry keys and logs.
        transport: Always "line".
    """

    transport = "line"

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        *,
        connection_id: str | None = None,
        encoding: str = CHAT_LINE_ENCODING,
        line_limit: int = CHAT_LINE_MAX_BYTES,
    ) -> None:
        self._reader = reader
        self._line_limit = line_limit
        self._writer = writer
        self._encoding = encoding
        self.connection_id = connection_id or f"line-{uuid.uuid4().hex[:12]}"

    @property
    def peer(self) -> object:
        return self._writer.get_extra_info("peername")

    async def receive_handshake(self) -> Handshake:
        try:
            line = await self._read_line()
        except MessageTooLongError as exc:
            raise MalformedHandshakeError("handshake line exceeds the maximum length") from exc
        return parse_handshake_line(line)

    async def receive_one(self) -> str:
        return await self._read_line()

    async def send_one(self, message: ChatMessage) -> None:
        if self._writer.is_closing():
            raise PeerWriteError("connection is closing")
        try:
            self._writer.write(encode_frame(message).encode(self._encoding))
            await self._writer.drain()
        except (ConnectionError, OSError, RuntimeError) as exc:
            raise PeerWriteError(str(exc) or exc.__class__.__name__) from exc

    async def reject(self, notice: ChatMessage | None) -> None:
        if notice is not None:
            with contextlib.suppress(PeerWriteError):
                await self.send_one(notice)
        await self.close()

    async def close(self) -> None:
        if not self._writer.is_closing():
            self._writer.close()
        with contextlib.suppress(Exception):
            await self._writer.wait_closed()

    async def _read_line(self) -> str:
        """Read one line without its terminator.

        Raises:
            MessageTooLongError: The line overran the stream limit. The rest
                of it has been discarded and the next read starts clean.
            PeerReadError: End of stream or a transport failure.
        """
        try:
            raw = await self._reader.readuntil(b"\n")
        except asyncio.IncompleteReadError as exc:
            # EOF, possibly after a partial line
            raise PeerReadError("end of stream") from exc
        except asyncio.LimitOverrunError as exc:
            dropped = await self._discard_line(exc.consumed)
            raise MessageTooLongError(dropped, self._line_limit, unit="bytes") from exc
        except (ConnectionError, OSError) as exc:
            raise PeerReadError(str(exc) or exc.__class__.__name__) from exc
        return raw.decode(self._encoding, errors="replace").rstrip("\r\n")

    async def _discard_line(self, consumed: int) -> int:
        """Drop input through the next newline and return the line length."""
        dropped = 0
        while True:
            try:
                await self._reader.readexactly(consumed)
                dropped += consumed
                tail = await self._reader.readuntil(b"\n")
            except asyncio.LimitOverrunError as exc:
                # still no newline within the limit; keep draining
                consumed = exc.consumed
                continue
            except asyncio.IncompleteReadError as exc:
                raise PeerReadError("end of stream") from exc
            except (ConnectionError, OSError) as exc:
                raise PeerReadError(str(exc) or exc.__class__.__name__) from exc
            dropped += len(tail.rstrip(b"\r\n"))
            logger.debug("discarded overlong line from %s (%d bytes)", self.connection_id, dropped)
            return dropped


__all__ = ["LineConnection"]
