"""Per-connection protocol driver: Handshaking -> Active -> Closed.

run_chat_session() is transport-agnostic. It reads the handshake, activates
the session in the room, then loops reading one inbound unit at a time.
Every per-session failure is handled here and never reaches the relay or
other sessions:

    MalformedHandshakeError  close without registering, no reply
    DuplicateUsernameError   one rejection notice, then close
    InvalidFrameError        rejection notice, stay active
    MessageTooLongError      rejection notice, stay active
    RateLimitError           warning, stay active
    PeerReadError            ordinary disconnect
"""

from __future__ import annotations

import logging
import contextlib

from ..errors import (
    PeerReadError,
    RateLimitError,
    InvalidFrameError,
    MessageTooLongError,
    DuplicateUsernameError,
    MalformedHandshakeError,
)
from ..logging import log_context
from ..messages import error_notice, strip_echo_prefix
from ..state import ChatMessage
from .lifecycle import IdleWatchdog
from .room import ChatRoom
from .session.connection import ChatConnection
from .session.session import Session

logger = logging.getLogger(__name__)


async def _close_connection(connection: ChatConnection) -> None:
    with contextlib.suppress(Exception):
        await connection.close()


async def _reject_connection(connection: ChatConnection, notice: ChatMessage | None) -> None:
    with contextlib.suppress(Exception):
        await connection.reject(notice)


async def _handshake(connection: ChatConnection, room: ChatRoom) -> Session | None:
    """Read the identity and activate a session, or close the connection."""
    try:
        handshake = await connection.receive_handshake()
    except MalformedHandshakeError as exc:
        logger.warning("malformed handshake on %s connection: %s", connection.transport, exc)
        await _reject_connection(connection, None)
        return None
    except PeerReadError:
        logger.info("peer left before completing the handshake")
        await _close_connection(connection)
        return None

    session = Session(connection, handshake.username, handshake.color)
    try:
        room.join(session)
    except DuplicateUsernameError as exc:
        logger.info("rejecting duplicate username %s", exc.username)
        await _reject_connection(connection, error_notice(exc))
        return None
    return session


async def _read_loop(session: Session, room: ChatRoom, watchdog: IdleWatchdog | None) -> None:
    connection = session.connection
    while room.is_active(session):
        try:
            raw = await connection.receive_one()
        except (InvalidFrameError, MessageTooLongError) as exc:
            logger.info("rejected inbound unit: %s", exc.error_code)
            room.notify(session, exc)
            continue
        if watchdog is not None:
            watchdog.touch()

        text = strip_echo_prefix(raw.strip(), session.username)
        if not text:
            continue
        try:
            room.submit(session, text)
        except MessageTooLongError as exc:
            logger.info("rejected %s-character message", exc.length)
            room.notify(session, exc)
            continue
        except RateLimitError as exc:
            room.notify(session, exc)
            continue
        logger.info("accepted message (%s chars)", len(text))


async def run_chat_session(
    connection: ChatConnection,
    room: ChatRoom,
    *,
    watchdog: IdleWatchdog | None = None,
) -> None:
    """Drive one connection from handshake to teardown.

    Args:
        connection: Transport adapter for the peer.
        room: Shared chat room.
        watchdog: Optional idle watchdog; started here and stopped on exit.
    """
    with log_context(connection_id=connection.connection_id):
        if watchdog is not None:
            watchdog.start()
        try:
            session = await _handshake(connection, room)
            if session is None:
                return
            with log_context(username=session.username):
                logger.info("%s joined via %s", session.username, connection.transport)
                try:
                    await _read_loop(session, room, watchdog)
                except PeerReadError as exc:
                    logger.info("connection closed by %s: %s", session.username, exc)
                except Exception:  # noqa: BLE001
                    logger.exception("unexpected error in session for %s", session.username)
                finally:
                    await room.leave(session)
                    logger.info("%s left the chat", session.username)
        finally:
            if watchdog is not None:
                await watchdog.stop()


__all__ = ["run_chat_session"]
