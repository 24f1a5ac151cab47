"""Rate limiting exception with retry metadata.

This module provides the RateLimitError exception that carries information
about when a throttled user can send again.
"""

from .base import ChatError


class RateLimitError(ChatError):
    """Raised when the rate guard rejects a message.

    Attributes:
        retry_in: Seconds until the suspension lifts.
        threshold: Consecutive messages that trigger throttling.
        cooldown_seconds: Cooldown window (and suspension length).
        just_throttled: True only for the message that caused the transition.
    """

    error_code = "rate_limited"

    def __init__(
        self,
        *,
        retry_in: float,
        threshold: int,
        cooldown_seconds: float,
        just_throttled: bool = False,
        message: str | None = None,
    ) -> None:
        super().__init__(message or "rate limit exceeded")
        self.retry_in = max(0.0, float(retry_in))
        self.threshold = max(0, int(threshold))
        self.cooldown_seconds = max(0.0, float(cooldown_seconds))
        self.just_throttled = just_throttled


__all__ = ["RateLimitError"]
