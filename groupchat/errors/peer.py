"""Transport failures on a single connection.

Both are treated as an ordinary disconnect for the owning session and are
never propagated to other sessions.
"""

from .base import ChatError


class PeerReadError(ChatError):
    """Reading from the peer failed or hit end of stream."""

    error_code = "peer_read_failure"


class PeerWriteError(ChatError):
    """Writing to the peer failed."""

    error_code = "peer_write_failure"


__all__ = ["PeerReadError", "PeerWriteError"]
