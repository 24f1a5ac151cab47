"""Chat room behavior configuration.

Controls the user-visible rules of the room:

History:
    CHAT_HISTORY_SIZE: How many recent user messages are replayed to newcomers.

Validation:
    CHAT_MESSAGE_MAX_CHARS: Longest accepted message text (pre-sanitization).

Anti-spam:
    CHAT_SPAM_THRESHOLD: Consecutive messages inside the cooldown that throttle a user.
    CHAT_SPAM_COOLDOWN_S: Cooldown window and suspension length in seconds.
    CHAT_RATE_STATE_SURVIVES_LEAVE: Keep spam counters across reconnects.

Presence:
    CHAT_ANNOUNCE_PRESENCE: Fan out join/leave notices to the room.
"""

from __future__ import annotations

import os

# ============================================================================
# History / validation
# ============================================================================

CHAT_HISTORY_SIZE = int(os.getenv("CHAT_HISTORY_SIZE", "5"))
CHAT_MESSAGE_MAX_CHARS = int(os.getenv("CHAT_MESSAGE_MAX_CHARS", "574"))

# ============================================================================
# Anti-spam
# ============================================================================

CHAT_SPAM_THRESHOLD = int(os.getenv("CHAT_SPAM_THRESHOLD", "3"))
CHAT_SPAM_COOLDOWN_S = float(os.getenv("CHAT_SPAM_COOLDOWN_S", "5"))
CHAT_RATE_STATE_SURVIVES_LEAVE = os.getenv("CHAT_RATE_STATE_SURVIVES_LEAVE", "0") == "1"

# ============================================================================
# Presence and identity
# ============================================================================

CHAT_ANNOUNCE_PRESENCE = os.getenv("CHAT_ANNOUNCE_PRESENCE", "1") == "1"
SYSTEM_USERNAME = os.getenv("CHAT_SYSTEM_USERNAME", "System")
SYSTEM_COLOR = os.getenv("CHAT_SYSTEM_COLOR", "#00FF00")
DEFAULT_USER_COLOR = os.getenv("CHAT_DEFAULT_USER_COLOR", "#ffffff")

__all__ = [
    "CHAT_HISTORY_SIZE",
    "CHAT_MESSAGE_MAX_CHARS",
    "CHAT_SPAM_THRESHOLD",
    "CHAT_SPAM_COOLDOWN_S",
    "CHAT_RATE_STATE_SURVIVES_LEAVE",
    "CHAT_ANNOUNCE_PRESENCE",
    "SYSTEM_USERNAME",
    "SYSTEM_COLOR",
    "DEFAULT_USER_COLOR",
]
