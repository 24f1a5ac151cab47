"""Group chat relay: one shared room served over a line protocol and WebSockets."""
