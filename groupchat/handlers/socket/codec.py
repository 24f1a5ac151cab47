"""Line protocol framing.

Inbound:
    handshake   ``username:color\\n``
    message     one raw text line

Outbound:
    user        ``username:message:color\\n``
    system      ``System: <text>\\n``
"""

from __future__ import annotations

from ...errors import MalformedHandshakeError
from ...messages import build_handshake
from ...state import ChatMessage, Handshake

_LINE_BREAKS = str.maketrans({"\r": " ", "\n": " "})


def parse_handshake_line(line: str) -> Handshake:
    """Parse ``username:color`` into a handshake.

    Raises:
        MalformedHandshakeError: No ``:`` separator or an empty username.
    """
    parts = line.strip().split(":")
    if len(parts) < 2:
        raise MalformedHandshakeError(f"expected 'username:color', got {line.strip()!r}")
    return build_handshake(parts[0], parts[1])


def encode_frame(message: ChatMessage) -> str:
    """Render one outbound frame, newline-terminated.

    Embedded line breaks in any field are flattened so one message always
    occupies one line.
    """
    username = message.username.translate(_LINE_BREAKS)
    text = message.message.translate(_LINE_BREAKS)
    if message.is_system:
        return f"{username}: {text}\n"
    color = message.color.translate(_LINE_BREAKS)
    return f"{username}:{text}:{color}\n"


__all__ = ["parse_handshake_line", "encode_frame"]
