"""Structured JSON protocol over FastAPI WebSockets."""

from .manager import handle_websocket_connection
from .connection import WebSocketConnection

__all__ = ["handle_websocket_connection", "WebSocketConnection"]
