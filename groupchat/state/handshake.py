"""Handshake result dataclass."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Handshake:
    """Identity claimed by a client in its first protocol unit."""

    username: str
    color: str


__all__ = ["Handshake"]
