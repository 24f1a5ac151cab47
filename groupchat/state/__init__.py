"""Centralized state dataclasses for the chat relay."""

from .rate import RateState
from .handshake import Handshake
from .message import ChatMessage

__all__ = [
    "ChatMessage",
    "Handshake",
    "RateState",
]
