"""Base classes and shared state for the command and insert modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from ed_engine.addressing import SearchState
from ed_engine.buffer import Buffer
from ed_engine.grammar import PrintMode


@dataclass(slots=True)
class EditorState:
    """Everything a command can read or replace; ``e`` swaps the buffer wholesale."""

    buffer: Buffer = field(default_factory=Buffer)
    filename: str = ""
    search: SearchState = field(default_factory=SearchState)
    prompt: bool = False
    verbose: bool = False


@dataclass(slots=True)
class PendingInsert:
    """Where a collected text block lands once insert mode sees the terminator.

    The block replaces the half-open ``[start, stop)``; ``stop == start`` for
    ``a`` and ``i``.
    """

    start: int
    stop: int
    print_mode: PrintMode = PrintMode.NONE
    label: str = "append"


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_line``."""

    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


class ModeBus:
    """Minimal event bus letting modes and hosts exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access."""

    state: EditorState
    bus: ModeBus
    output: Callable[[str], None]
    extras: Dict[str, object] = field(default_factory=dict)

    @property
    def buffer(self) -> Buffer:
        return self.state.buffer


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(
        self, previous: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_line(
        self, line: str
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError
