"""Unit tests for structured-protocol frame parsing."""

from __future__ import annotations

import pytest

from groupchat.errors import InvalidFrameError
from groupchat.handlers.websocket.parser import message_text, parse_client_record


def test_parse_client_record_returns_object() -> None:
    record = parse_client_record(' {"username": "alice", "color": "#ff0000"} ')

    assert record == {"username": "alice", "color": "#ff0000"}


@pytest.mark.parametrize(
    ("raw", "reason"),
    [
        ("", "Empty message."),
        ("   ", "Empty message."),
        ("hello", "Message must be valid JSON."),
        ("[1, 2]", "Message must be a JSON object."),
        ('"text"', "Message must be a JSON object."),
    ],
)
def test_parse_client_record_rejects_bad_frames(raw: str, reason: str) -> None:
    with pytest.raises(InvalidFrameError) as exc_info:
        parse_client_record(raw)
    assert exc_info.value.message == reason
    assert exc_info.value.error_code == "invalid_frame"


def test_message_text_requires_string_message() -> None:
    assert message_text({"username": "alice", "message": "hi", "color": "#fff", "isSystem": False}) == "hi"

    with pytest.raises(InvalidFrameError):
        message_text({"username": "alice"})
    with pytest.raises(InvalidFrameError):
        message_text({"message": 5})
