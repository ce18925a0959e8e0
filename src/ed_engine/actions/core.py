"""Helpers shared by the command handlers and insert mode."""

from __future__ import annotations

from ed_engine.buffer import Buffer, ensure_line
from ed_engine.grammar import PrintMode
from ed_engine.modes.base_mode import ModeContext, ModeResult, PendingInsert


def format_line(index: int, text: str, mode: PrintMode) -> str:
    if mode is PrintMode.NUMBERED:
        return f"{index + 1}\t{text}"
    return text


def print_lines(context: ModeContext, start: int, end: int, mode: PrintMode) -> None:
    """Echo lines ``start..end``; lines past the end of the buffer are skipped."""

    if mode is PrintMode.NONE:
        return
    for offset, text in enumerate(context.buffer.lines(start, end)):
        context.output(format_line(start + offset, text, mode))


def ensure_target_line(buffer: Buffer, index: int) -> int:
    """An existing line, or line 0 of an empty buffer (the only place text can go)."""

    if index == 0 and not len(buffer):
        return index
    return ensure_line(buffer, index)


def append_point(buffer: Buffer, index: int) -> int:
    """Insertion point for text added after ``index``."""

    return index + 1 if index + 1 <= len(buffer) else index


def enter_insert_mode(context: ModeContext, pending: PendingInsert) -> ModeResult:
    context.extras["pending_insert"] = pending
    return ModeResult(switch_to="insert", status="enter_insert", message=pending.label)


__all__ = [
    "append_point",
    "ensure_target_line",
    "enter_insert_mode",
    "format_line",
    "print_lines",
]
