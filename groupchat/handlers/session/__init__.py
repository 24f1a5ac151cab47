"""Session state and the transport contract it is bound to."""

from .session import Session
from .connection import ChatConnection

__all__ = ["Session", "ChatConnection"]
