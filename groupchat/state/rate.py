"""Per-username anti-spam state."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RateState:
    """Rate guard bookkeeping for one username.

    Attributes:
        last_message_at: Clock reading that opened the current cooldown window.
        consecutive_count: Messages seen inside the current window.
        suspended_until: Clock reading when throttling lifts, or None when Normal.
    """

    last_message_at: float
    consecutive_count: int = 1
    suspended_until: float | None = None

    @property
    def throttled(self) -> bool:
        return self.suspended_until is not None


__all__ = ["RateState"]
