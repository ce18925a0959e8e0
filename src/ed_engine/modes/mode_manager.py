"""Dispatches input lines to whichever of the registered modes is active."""

from __future__ import annotations

from typing import Dict, Optional, Type

from ed_engine.runtime import telemetry

from .base_mode import Mode, ModeContext, ModeResult


class ModeManager:
    """Registry of modes keyed by name plus the line dispatcher.

    The first mode registered starts out active. A mode asks for a transition
    by returning ``ModeResult(switch_to=...)``; the manager applies it after the
    line has been handled.
    """

    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self._registry: Dict[str, Mode] = {}
        self._current: Optional[str] = None
        self.lines_handled = 0

    @property
    def active_mode(self) -> Optional[Mode]:
        return self._registry.get(self._current) if self._current else None

    def register_mode(self, mode_cls: Type[Mode], /, **mode_kwargs: object) -> Mode:
        mode = mode_cls(self.context, **mode_kwargs)
        if mode.name in self._registry:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._registry[mode.name] = mode
        if self._current is None:
            self._current = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        target = self._registry.get(name)
        if target is None:
            raise KeyError(f"Unknown mode '{name}'")
        leaving = self._current
        if leaving == name:
            return
        if leaving is not None:
            self._registry[leaving].on_exit(name)
        self._current = name
        target.on_enter(leaving)
        telemetry.record_event(
            "mode.switch", data={"mode": name, "from": leaving or ""}
        )

    def handle_line(self, line: str) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        self.lines_handled += 1
        with telemetry.span(
            f"mode::{mode.name}",
            component="modes",
            metadata={"mode": mode.name, "line": self.lines_handled},
        ):
            result = mode.handle_line(line)
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result
