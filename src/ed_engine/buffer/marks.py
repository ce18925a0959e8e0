"""Fixed 26-slot mark table, one slot per lowercase letter."""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

MARK_LETTERS = "abcdefghijklmnopqrstuvwxyz"


def is_mark_letter(letter: str) -> bool:
    return len(letter) == 1 and letter in MARK_LETTERS


def _slot(letter: str) -> int:
    if not is_mark_letter(letter):
        raise ValueError(f"Invalid mark letter {letter!r}")
    return ord(letter) - ord("a")


class MarkTable:
    """Line indices bookmarked under ``a``..``z``; unset slots hold ``None``."""

    def __init__(self) -> None:
        self._slots: List[Optional[int]] = [None] * len(MARK_LETTERS)

    def get(self, letter: str) -> Optional[int]:
        return self._slots[_slot(letter)]

    def set(self, letter: str, index: int) -> None:
        self._slots[_slot(letter)] = index

    def clear(self, letter: str) -> None:
        self._slots[_slot(letter)] = None

    def items(self) -> Iterator[Tuple[str, int]]:
        """Yield ``(letter, index)`` for every set mark."""

        for letter, index in zip(MARK_LETTERS, self._slots):
            if index is not None:
                yield letter, index

    def splice(self, start: int, stop: int, inserted: int) -> None:
        """Adjust marks for ``[start, stop)`` being replaced by ``inserted`` lines.

        Marks inside the interval are cleared, marks at or after ``stop`` move
        by the net length change and marks before ``start`` stay put.
        """

        delta = inserted - (stop - start)
        for slot, index in enumerate(self._slots):
            if index is None or index < start:
                continue
            if index < stop:
                self._slots[slot] = None
            else:
                self._slots[slot] = index + delta


__all__ = ["MARK_LETTERS", "MarkTable", "is_mark_letter"]
