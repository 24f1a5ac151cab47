"""Centralized exception classes for the chat relay.

Organization:
    - base.py: ChatError with error_code metadata
    - handshake.py: malformed handshake, duplicate username
    - validation.py: message too long, undecodable frames
    - limits.py: rate guard rejections with retry info
    - peer.py: connection read/write failures
"""

from .base import ChatError
from .limits import RateLimitError
from .peer import PeerReadError, PeerWriteError
from .validation import InvalidFrameError, MessageTooLongError
from .handshake import DuplicateUsernameError, MalformedHandshakeError

__all__ = [
    "ChatError",
    # Handshake
    "MalformedHandshakeError",
    "DuplicateUsernameError",
    # Validation
    "MessageTooLongError",
    "InvalidFrameError",
    # Rate limiting
    "RateLimitError",
    # Transport
    "PeerReadError",
    "PeerWriteError",
]
