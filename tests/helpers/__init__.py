"""Shared fakes and async helpers for the unit tests."""

__all__ = [
    "chat",
]
