"""Unit tests for startup configuration validation."""

from __future__ import annotations

import pytest

from groupchat.helpers import validation


def test_default_configuration_is_valid() -> None:
    validation.validate_env()


def test_invalid_values_are_reported_together(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(validation, "CHAT_HISTORY_SIZE", 0)
    monkeypatch.setattr(validation, "MAX_CONCURRENT_CONNECTIONS", -1)

    with pytest.raises(ValueError) as exc_info:
        validation.validate_env()

    message = str(exc_info.value)
    assert "CHAT_HISTORY_SIZE" in message
    assert "MAX_CONCURRENT_CONNECTIONS" in message


def test_line_limit_must_fit_longest_message(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(validation, "CHAT_SOCKET_ENABLED", True)
    monkeypatch.setattr(validation, "CHAT_LINE_MAX_BYTES", 100)

    with pytest.raises(ValueError, match="CHAT_LINE_MAX_BYTES"):
        validation.validate_env()
