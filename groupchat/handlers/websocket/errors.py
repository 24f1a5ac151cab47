"""Shared response helpers for WebSocket error handling.

Errors travel to structured clients as ordinary system records, the same
shape every other frame uses:

    {"username": "System", "message": "...", "color": "#00FF00", "isSystem": true}
"""

from __future__ import annotations

import json
import contextlib

from fastapi import WebSocket

from ...messages import system_message
from .disconnects import is_expected_disconnect


async def send_system_notice(ws: WebSocket, text: str) -> None:
    """Send a single system record to the client."""
    await ws.send_text(json.dumps(system_message(text).to_record()))


async def reject_connection(
    ws: WebSocket,
    *,
    message: str,
    close_code: int,
) -> None:
    """Accept connection briefly to send a notice, then close immediately.

    The client receives a readable reason rather than just a close code.

    Args:
        ws: The WebSocket connection to reject.
        message: Human-readable rejection reason.
        close_code: WebSocket close code (e.g. 1013 busy).
    """
    await ws.accept()
    try:
        await send_system_notice(ws, message)
    except Exception as exc:  # noqa: BLE001
        if not is_expected_disconnect(exc):
            raise
    with contextlib.suppress(Exception):
        await ws.close(code=close_code)


__all__ = ["send_system_notice", "reject_connection"]
