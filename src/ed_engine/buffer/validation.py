"""Validation helpers shared by the command handlers."""

from __future__ import annotations

from ed_engine.errors import ExpectedSingleLine, InvalidAddress

from .buffer import Buffer


def ensure_line(buffer: Buffer, index: int) -> int:
    """Return ``index`` if it names an existing line."""

    if index < 0 or index >= len(buffer):
        raise InvalidAddress()
    return index


def ensure_single_line(start: int, end: int) -> int:
    if start != end:
        raise ExpectedSingleLine()
    return end


__all__ = ["ensure_line", "ensure_single_line"]
