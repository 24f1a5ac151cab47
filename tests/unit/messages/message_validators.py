"""Unit tests for handshake and length validation."""

from __future__ import annotations

import pytest

from groupchat.config import DEFAULT_USER_COLOR
from groupchat.errors import MalformedHandshakeError, MessageTooLongError
from groupchat.messages import build_handshake, validate_message_length


def test_length_limit_is_inclusive() -> None:
    assert validate_message_length("x" * 574, max_chars=574) == "x" * 574

    with pytest.raises(MessageTooLongError) as exc_info:
        validate_message_length("x" * 575, max_chars=574)
    assert exc_info.value.limit == 574
    assert exc_info.value.error_code == "message_too_long"


def test_length_counts_characters_not_bytes() -> None:
    validate_message_length("é" * 574, max_chars=574)


def test_build_handshake_trims_fields() -> None:
    handshake = build_handshake("  alice ", " #ff0000 ")

    assert handshake.username == "alice"
    assert handshake.color == "#ff0000"


def test_build_handshake_defaults_blank_color() -> None:
    assert build_handshake("alice", "").color == DEFAULT_USER_COLOR
    assert build_handshake("alice", None).color == DEFAULT_USER_COLOR


@pytest.mark.parametrize("username", [None, "", "   ", 42])
def test_build_handshake_requires_username(username) -> None:
    with pytest.raises(MalformedHandshakeError):
        build_handshake(username, "#fff")


def test_build_handshake_rejects_non_string_color() -> None:
    with pytest.raises(MalformedHandshakeError):
        build_handshake("alice", 7)


@pytest.mark.parametrize("username", ["mal\nlory", "mal\rlory", "System:", "a:b"])
def test_build_handshake_rejects_frame_breaking_username(username: str) -> None:
    with pytest.raises(MalformedHandshakeError):
        build_handshake(username, "#fff")


@pytest.mark.parametrize("color", ["#fff\nSystem: you are banned", "#fff\r", "red\r\nblue"])
def test_build_handshake_rejects_line_breaks_in_color(color: str) -> None:
    with pytest.raises(MalformedHandshakeError):
        build_handshake("mallory", color)


def test_build_handshake_allows_colon_in_color() -> None:
    assert build_handshake("alice", "rgb(0:0:0)").color == "rgb(0:0:0)"
