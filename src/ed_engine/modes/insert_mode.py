"""Insert mode: collect lines until a lone ``.`` and splice them in."""

from __future__ import annotations

from typing import List, Optional

from ed_engine.actions.core import print_lines
from ed_engine.grammar import is_terminator

from .base_mode import Mode, ModeContext, ModeResult, PendingInsert


class InsertMode(Mode):
    name = "insert"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._pending: Optional[PendingInsert] = None
        self._block: List[str] = []

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        pending = self.context.extras.pop("pending_insert", None)
        if not isinstance(pending, PendingInsert):
            raise RuntimeError("Insert mode entered without a pending insert")
        self._pending = pending
        self._block = []

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode
        self._pending = None
        self._block = []

    def handle_line(self, line: str) -> ModeResult:
        if is_terminator(line):
            return self._commit()
        self._block.append(line[:-1] if line.endswith("\n") else line)
        return ModeResult(status="collecting")

    def _commit(self) -> ModeResult:
        pending = self._pending
        if pending is None:
            raise RuntimeError("Insert mode has no pending insert")
        buffer = self.context.buffer
        block = list(self._block)
        buffer.replace(pending.start, pending.stop, block)

        if block:
            buffer.current = pending.start + len(block) - 1
            print_lines(
                self.context, pending.start, buffer.current, pending.print_mode
            )
        elif len(buffer):
            buffer.current = min(pending.start, len(buffer) - 1)
        else:
            buffer.current = 0

        self.context.bus.emit(
            "insert.commit",
            {"label": pending.label, "start": pending.start, "lines": len(block)},
        )
        return ModeResult(switch_to="command", status="insert_commit", message=pending.label)
