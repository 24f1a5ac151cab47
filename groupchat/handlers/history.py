"""Bounded recent-message buffer replayed to newcomers.

The buffer keeps the last ``capacity`` user messages in arrival order.
Appending past capacity evicts from the front. It is cleared only when the
last session leaves: the room keeps no history beyond its live population.
"""

from __future__ import annotations

import collections

from ..config import CHAT_HISTORY_SIZE
from ..state import ChatMessage


class RecentHistory:
    """FIFO of the most recent chat messages.

    All access happens on the event loop thread and none of the methods
    await, so each call is atomic with respect to other sessions.
    """

    def __init__(self, capacity: int = CHAT_HISTORY_SIZE) -> None:
        if capacity <= 0:
            raise ValueError(f"history capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._messages: collections.deque[ChatMessage] = collections.deque(maxlen=capacity)

    def append(self, message: ChatMessage) -> None:
        self._messages.append(message)

    def replay(self) -> list[ChatMessage]:
        """Return a copy of the buffer, oldest first."""
        return list(self._messages)

    def clear(self) -> None:
        self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)


__all__ = ["RecentHistory"]
