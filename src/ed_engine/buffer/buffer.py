"""Line buffer with marks, a current line and a changed flag."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence

from ed_engine.runtime import telemetry

from .marks import MarkTable


class Buffer:
    """Ordered, mutable sequence of lines.

    ``replace`` is the only mutating primitive for line content; it keeps the
    mark table consistent and sets ``changed``. ``current`` is the 0-based
    current line and is moved by the command engine, never by ``replace``.
    """

    def __init__(self, lines: Iterable[str] = (), *, name: str = "") -> None:
        self.name = name
        self._lines: List[str] = list(lines)
        self.marks = MarkTable()
        self.changed = False
        self.current = 0

    @classmethod
    def from_lines(cls, lines: Iterable[str], *, name: str = "") -> "Buffer":
        return cls(lines, name=name)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __getitem__(self, index: int) -> str:
        return self._lines[index]

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def lines(self, start: int, end: int) -> Sequence[str]:
        """Lines ``start..end`` inclusive; indices past the end are skipped."""

        return tuple(self._lines[start : end + 1])

    def replace(self, start: int, stop: int, new_lines: Iterable[str]) -> None:
        """Replace the half-open ``[start, stop)`` with ``new_lines``."""

        block = list(new_lines)
        with telemetry.span(
            "buffer::replace",
            logger_name="ed_engine.buffer",
            metadata={"buffer": self.name, "start": start, "stop": stop},
        ) as handle:
            self._lines[start:stop] = block
            self.marks.splice(start, stop, len(block))
            self.changed = True
            handle.add_metadata("inserted", len(block))

    def to_text(self) -> str:
        return "".join(f"{line}\n" for line in self._lines)


__all__ = ["Buffer"]
