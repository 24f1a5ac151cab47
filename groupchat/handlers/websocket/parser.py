"""Client payload parsing for the structured WebSocket protocol.

Every client frame is one JSON object. The first frame is the handshake
(``username`` required, ``color`` optional); every later frame carries
``message``.
"""

from __future__ import annotations

import json
from typing import Any

from ...errors import InvalidFrameError


def parse_client_record(raw: str) -> dict[str, Any]:
    """Decode one client frame into a dict.

    Raises:
        InvalidFrameError: Empty frame, invalid JSON or not an object.
    """

    text = (raw or "").strip()
    if not text:
        raise InvalidFrameError("Empty message.")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidFrameError("Message must be valid JSON.") from exc

    if not isinstance(data, dict):
        raise InvalidFrameError("Message must be a JSON object.")
    return data


def message_text(record: dict[str, Any]) -> str:
    """Return the ``message`` field of a post-handshake frame.

    Raises:
        InvalidFrameError: The field is missing or not a string.
    """

    message = record.get("message")
    if not isinstance(message, str):
        raise InvalidFrameError("Missing 'message' in frame.")
    return message


__all__ = ["parse_client_record", "message_text"]
