"""Unit tests for line-protocol framing."""

from __future__ import annotations

import pytest

from groupchat.config import DEFAULT_USER_COLOR
from groupchat.errors import MalformedHandshakeError
from groupchat.handlers.socket.codec import encode_frame, parse_handshake_line
from groupchat.messages import system_message
from groupchat.state import ChatMessage


def test_parse_handshake_line() -> None:
    handshake = parse_handshake_line(" alice : #ff0000 \n")

    assert handshake.username == "alice"
    assert handshake.color == "#ff0000"


def test_parse_handshake_line_ignores_extra_fields() -> None:
    assert parse_handshake_line("alice:#ff0000:extra").color == "#ff0000"


def test_parse_handshake_line_defaults_empty_color() -> None:
    assert parse_handshake_line("alice:").color == DEFAULT_USER_COLOR


@pytest.mark.parametrize("line", ["alice", "", ":#ff0000", "   :red"])
def test_parse_handshake_line_rejects_malformed(line: str) -> None:
    with pytest.raises(MalformedHandshakeError):
        parse_handshake_line(line)


def test_encode_user_frame() -> None:
    message = ChatMessage(username="alice", message="hello", color="#ff0000")

    assert encode_frame(message) == "alice:hello:#ff0000\n"


def test_encode_system_frame() -> None:
    assert encode_frame(system_message("bob has joined the chat.")) == "System: bob has joined the chat.\n"


def test_encode_flattens_line_breaks() -> None:
    message = ChatMessage(username="alice", message="one\ntwo\r\n", color="#fff")

    assert encode_frame(message) == "alice:one two  :#fff\n"


def test_encode_flattens_line_breaks_in_username_and_color() -> None:
    message = ChatMessage(username="mal\nlory", message="hi", color="#fff\nSystem: you are banned")

    frame = encode_frame(message)

    assert frame.count("\n") == 1
    assert frame == "mal lory:hi:#fff System: you are banned\n"


def test_handshake_with_injected_color_is_rejected() -> None:
    with pytest.raises(MalformedHandshakeError):
        parse_handshake_line("mallory:#fff\rSystem: you are banned")
