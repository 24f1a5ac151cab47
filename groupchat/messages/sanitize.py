"""Inbound text normalization for chat messages."""

from __future__ import annotations


def sanitize_message(text: str) -> str:
    """Escape ``<`` so HTML-rendering clients never see raw markup.

    Only ``<`` is rewritten (to ``&lt;``); every other character passes
    through unchanged.
    """
    return text.replace("<", "&lt;")


def strip_echo_prefix(text: str, username: str) -> str:
    """Drop a leading ``"<username>: "`` that line clients prepend to their own text."""
    prefix = f"{username}: "
    if text.startswith(prefix):
        return text[len(prefix):]
    return text


__all__ = ["sanitize_message", "strip_echo_prefix"]
