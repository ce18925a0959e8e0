"""Search state shared by ``/re/`` and ``?re?`` addresses."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Pattern, Sequence


@dataclass(slots=True)
class SearchState:
    """Last compiled pattern and the line it last matched (or started from)."""

    position: Optional[int] = None
    pattern: Optional[Pattern[str]] = None

    def reset(self) -> None:
        self.position = None
        self.pattern = None


def forward_order(start: int, length: int) -> Iterator[int]:
    """Indices after ``start`` to the end, then wrapping to ``start`` itself."""

    pivot = min(start + 1, length)
    yield from range(pivot, length)
    yield from range(0, pivot)


def backward_order(start: int, length: int) -> Iterator[int]:
    """Indices before ``start`` down to 0, then wrapping from the end to ``start``."""

    pivot = min(start, length)
    yield from range(pivot - 1, -1, -1)
    yield from range(length - 1, pivot - 1, -1)


def first_match(
    pattern: Pattern[str], lines: Sequence[str], order: Iterator[int]
) -> Optional[int]:
    for index in order:
        if pattern.search(lines[index]):
            return index
    return None


def compile_pattern(source: str) -> Pattern[str]:
    return re.compile(source)


__all__ = [
    "SearchState",
    "backward_order",
    "compile_pattern",
    "first_match",
    "forward_order",
]
