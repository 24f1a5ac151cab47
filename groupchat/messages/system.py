"""Builders for server-authored notices."""

from __future__ import annotations

import math

from ..config import SYSTEM_COLOR, SYSTEM_USERNAME
from ..errors import ChatError, RateLimitError
from ..state import ChatMessage


def system_message(text: str) -> ChatMessage:
    return ChatMessage(
        username=SYSTEM_USERNAME,
        message=text,
        color=SYSTEM_COLOR,
        is_system=True,
    )


def join_notice(username: str) -> ChatMessage:
    return system_message(f"{username} has joined the chat.")


def leave_notice(username: str) -> ChatMessage:
    return system_message(f"{username} has left the chat.")


def rate_limit_notice(err: RateLimitError) -> ChatMessage:
    """Warning for a throttled sender.

    The transition itself gets the timeout announcement; messages sent
    while still suspended get the remaining time.
    """
    if err.just_throttled:
        seconds = int(math.ceil(err.cooldown_seconds))
        return system_message(f"You are being timed out for {seconds} seconds due to spamming.")
    retry_in = max(1, int(math.ceil(err.retry_in)))
    return system_message(f"You are timed out for spamming; retry in {retry_in} seconds.")


def error_notice(err: ChatError) -> ChatMessage:
    if isinstance(err, RateLimitError):
        return rate_limit_notice(err)
    return system_message(err.message)


__all__ = [
    "system_message",
    "join_notice",
    "leave_notice",
    "rate_limit_notice",
    "error_notice",
]
