"""Editor facade: feeds input lines through the modes and applies the error policy."""

from __future__ import annotations

from typing import Iterable, List, Optional

from ed_engine.buffer import Buffer
from ed_engine.errors import EdError
from ed_engine.modes import (
    CommandMode,
    EditorState,
    InsertMode,
    ModeBus,
    ModeContext,
    ModeManager,
    ModeResult,
)
from ed_engine.runtime import load_lines, telemetry

PROMPT = "* "


class Editor:
    """One editing session.

    ``feed`` takes a raw, newline-terminated input line and returns the lines
    the session wants printed. Any ``EdError`` aborts that line only and is
    reported as ``?``, followed by the error text while verbose mode is on.
    """

    def __init__(
        self,
        *,
        state: Optional[EditorState] = None,
        bus: Optional[ModeBus] = None,
    ) -> None:
        self.state = state or EditorState()
        self._output: List[str] = []
        self.context = ModeContext(
            state=self.state,
            bus=bus or ModeBus(),
            output=self._output.append,
        )
        self.manager = ModeManager(self.context)
        self.manager.register_mode(CommandMode)
        self.manager.register_mode(InsertMode)
        self.quit_requested = False
        self.context.bus.subscribe("command.quit", self._on_quit)

    @property
    def buffer(self) -> Buffer:
        return self.state.buffer

    @property
    def mode(self) -> str:
        active = self.manager.active_mode
        return active.name if active else "?"

    @property
    def prompt(self) -> str:
        """Text to show before reading the next line ("" when none is due)."""

        if self.state.prompt and self.mode == CommandMode.name:
            return PROMPT
        return ""

    def open(self, path: str) -> List[str]:
        """Load ``path`` as the initial buffer, as if started with it."""

        try:
            lines, size = load_lines(path)
        except EdError as exc:
            self._report(exc)
            return self._drain()
        self.state.buffer = Buffer.from_lines(lines, name=path)
        self.state.filename = path
        self._output.append(str(size))
        return self._drain()

    def feed(self, line: str) -> List[str]:
        try:
            result = self.manager.handle_line(line)
        except EdError as exc:
            self._report(exc)
        else:
            self._log_result(result)
        return self._drain()

    def run(self, lines: Iterable[str]) -> List[str]:
        """Feed each of ``lines`` (terminators added) until input ends or ``q`` succeeds."""

        output: List[str] = []
        for line in lines:
            output.extend(self.feed(line if line.endswith("\n") else f"{line}\n"))
            if self.quit_requested:
                break
        return output

    def _on_quit(self, payload: object | None) -> None:
        del payload
        self.quit_requested = True

    def _report(self, error: EdError) -> None:
        telemetry.record_event(
            "command.error",
            level="warning",
            data={"error": type(error).__name__, "message": str(error)},
        )
        self._output.append("?")
        if self.state.verbose:
            self._output.append(str(error))

    def _log_result(self, result: ModeResult) -> None:
        telemetry.record_event(
            "command.result",
            level="debug",
            data={"status": result.status, "mode": self.mode},
        )

    def _drain(self) -> List[str]:
        lines = list(self._output)
        self._output.clear()
        return lines


__all__ = ["Editor", "PROMPT"]
