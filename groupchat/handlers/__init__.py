"""Chat room, session and transport handlers.

This package provides the core of the relay and its transport front-ends:

history.py / rate_guard.py / registry.py / relay.py:
    The shared chat-room components: bounded recent history, per-user
    spam cooldown, the session registry and the fan-out worker.

room.py:
    ChatRoom ties the components together and exposes join/submit/leave.

session/:
    Session (outbound queue + writer task) and the ChatConnection contract.

session_handler.py:
    Transport-agnostic handshake, read loop and teardown.

connections.py / lifecycle.py:
    Admission control and idle enforcement shared by every transport.

socket/:
    Line protocol over a Unix domain or TCP socket.

websocket/:
    Structured JSON protocol over a FastAPI WebSocket.
"""
