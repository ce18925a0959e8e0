"""Command mode: parse, resolve and execute one command line."""

from __future__ import annotations

from ed_engine.actions.commands import execute
from ed_engine.addressing import resolve_range
from ed_engine.grammar import parse_command

from .base_mode import Mode, ModeResult


class CommandMode(Mode):
    name = "command"

    def handle_line(self, line: str) -> ModeResult:
        parsed = parse_command(line)
        state = self.context.state
        resolved = resolve_range(parsed.spec, state.buffer, state.search)
        return execute(self.context, parsed, resolved)
