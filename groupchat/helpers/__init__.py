"""Startup helpers."""

from .validation import validate_env

__all__ = ["validate_env"]
