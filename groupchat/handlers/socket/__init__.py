"""Line protocol transport."""

from .codec import encode_frame, parse_handshake_line
from .connection import LineConnection
from .server import LineSocketServer

__all__ = [
    "encode_frame",
    "parse_handshake_line",
    "LineConnection",
    "LineSocketServer",
]
