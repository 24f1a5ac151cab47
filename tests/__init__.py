"""Test suite for the group chat relay.

Unit tests live under unit/, organized by feature area (history, limits,
room, relay, session, socket, websocket). Shared fakes are in helpers/.
"""
