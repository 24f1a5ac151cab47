"""Per-username spam cooldown state machine.

Each username is either Normal or Throttled. When a message arrives at
time T for a user whose state is (last, count):

1. Throttled and T is before ``suspended_until``: reject.
2. Throttled and the suspension elapsed: count resets to 0, back to Normal.
3. No state, or ``T - last >= cooldown``: count = 1, last = T, accept.
4. Otherwise count += 1. When ``count >= threshold`` the user becomes
   Throttled for ``cooldown`` seconds and the current message is rejected.

Throttling never blocks the caller: rejected messages raise
RateLimitError and the session handler turns that into a warning.

Example:
    guard = RateGuard(threshold=3, cooldown_seconds=5)

    try:
        guard.check("alice")
    except RateLimitError as e:
        print(f"throttled, retry in {e.retry_in:.1f}s")
"""

from __future__ import annotations

import time
import logging
from collections.abc import Callable

from ..config import CHAT_SPAM_COOLDOWN_S, CHAT_SPAM_THRESHOLD
from ..errors import RateLimitError
from ..state import RateState

logger = logging.getLogger(__name__)

# Type alias for injectable time functions (used in testing)
TimeFn = Callable[[], float]


class RateGuard:
    """Track per-username message bursts and throttle spammers.

    The guard can be disabled by setting threshold=0 or cooldown_seconds=0,
    in which case check() always succeeds.

    Attributes:
        threshold: Consecutive in-window messages that trigger throttling.
        cooldown_seconds: Window length and suspension length.
    """

    def __init__(
        self,
        *,
        threshold: int = CHAT_SPAM_THRESHOLD,
        cooldown_seconds: float = CHAT_SPAM_COOLDOWN_S,
        now_fn: TimeFn | None = None,
    ) -> None:
        """Initialize the rate guard.

        Args:
            threshold: Messages per window before throttling. Set to 0 to disable.
            cooldown_seconds: Window duration in seconds. Set to 0 to disable.
            now_fn: Optional time function for testing. Defaults to time.monotonic.
        """
        self.threshold = max(0, int(threshold))
        self.cooldown_seconds = max(0.0, float(cooldown_seconds))
        self._now = now_fn or time.monotonic
        self._states: dict[str, RateState] = {}
        self._enabled = self.threshold > 0 and self.cooldown_seconds > 0

    def check(self, username: str) -> None:
        """Record a message from ``username`` or raise RateLimitError.

        Raises:
            RateLimitError: The user is (or just became) throttled.
        """
        if not self._enabled:
            return

        now = self._now()
        state = self._states.get(username)

        if state is not None and state.throttled:
            if now < state.suspended_until:
                raise self._error(state.suspended_until - now, just_throttled=False)
            # Suspension served
            state.suspended_until = None
            state.consecutive_count = 0

        if state is None or (now - state.last_message_at) >= self.cooldown_seconds:
            self._states[username] = RateState(last_message_at=now, consecutive_count=1)
            return

        state.consecutive_count += 1
        if state.consecutive_count >= self.threshold:
            state.suspended_until = now + self.cooldown_seconds
            logger.info(
                "rate guard: throttling %s for %.1fs after %s messages",
                username,
                self.cooldown_seconds,
                state.consecutive_count,
            )
            raise self._error(self.cooldown_seconds, just_throttled=True)

    def forget(self, username: str) -> None:
        """Drop all state for ``username`` (idempotent)."""
        self._states.pop(username, None)

    def is_throttled(self, username: str) -> bool:
        state = self._states.get(username)
        if state is None or not state.throttled:
            return False
        return self._now() < state.suspended_until

    def state_for(self, username: str) -> RateState | None:
        return self._states.get(username)

    def _error(self, retry_in: float, *, just_throttled: bool) -> RateLimitError:
        return RateLimitError(
            retry_in=retry_in,
            threshold=self.threshold,
            cooldown_seconds=self.cooldown_seconds,
            just_throttled=just_throttled,
        )


__all__ = ["RateGuard", "RateLimitError"]
