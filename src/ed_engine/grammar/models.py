"""Dataclasses describing a parsed command line before address resolution."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Union

from ed_engine.buffer.marks import is_mark_letter


@dataclass(frozen=True, slots=True)
class Absolute:
    """0-based line index; negative values count back from the end (-1 is last)."""

    index: int


@dataclass(frozen=True, slots=True)
class Relative:
    """Offset from the current line."""

    delta: int


@dataclass(frozen=True, slots=True)
class Mark:
    letter: str

    def __post_init__(self) -> None:
        if not is_mark_letter(self.letter):
            raise ValueError(f"Invalid mark letter {self.letter!r}")


Address = Union[Absolute, Relative, Mark]

CURRENT_LINE = Relative(0)
LAST_LINE = Absolute(-1)


@dataclass(frozen=True, slots=True)
class AddressRange:
    start: Address
    end: Address

    @classmethod
    def single(cls, address: Address) -> "AddressRange":
        return cls(address, address)


@dataclass(frozen=True, slots=True)
class SearchForward:
    """``/pattern/``; ``pattern is None`` reuses the previous search."""

    pattern: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SearchBackward:
    """``?pattern?``; ``pattern is None`` reuses the previous search."""

    pattern: Optional[str] = None


AddressSpec = Union[AddressRange, SearchForward, SearchBackward]


@dataclass(frozen=True, slots=True)
class Append:
    pass


@dataclass(frozen=True, slots=True)
class Insert:
    pass


@dataclass(frozen=True, slots=True)
class Change:
    pass


@dataclass(frozen=True, slots=True)
class Delete:
    pass


@dataclass(frozen=True, slots=True)
class CurrentLine:
    pass


@dataclass(frozen=True, slots=True)
class Edit:
    path: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Exec:
    command: str


@dataclass(frozen=True, slots=True)
class File:
    path: str


@dataclass(frozen=True, slots=True)
class Help:
    pass


@dataclass(frozen=True, slots=True)
class SetMark:
    letter: str

    def __post_init__(self) -> None:
        if not is_mark_letter(self.letter):
            raise ValueError(f"Invalid mark letter {self.letter!r}")


@dataclass(frozen=True, slots=True)
class Prompt:
    pass


@dataclass(frozen=True, slots=True)
class Read:
    path: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Write:
    path: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Quit:
    pass


Command = Union[
    Append,
    Insert,
    Change,
    Delete,
    CurrentLine,
    Edit,
    Exec,
    File,
    Help,
    SetMark,
    Prompt,
    Read,
    Write,
    Quit,
]

TEXT_COMMANDS = (Append, Insert, Change)


class PrintMode(IntEnum):
    """Trailing print flags; combining flags keeps the highest value."""

    NONE = 0
    PLAIN = 1
    NUMBERED = 2


@dataclass(frozen=True, slots=True)
class ParsedCommand:
    spec: Optional[AddressSpec] = None
    command: Optional[Command] = None
    print_mode: PrintMode = PrintMode.NONE


__all__ = [
    "Absolute",
    "Relative",
    "Mark",
    "Address",
    "CURRENT_LINE",
    "LAST_LINE",
    "AddressRange",
    "SearchForward",
    "SearchBackward",
    "AddressSpec",
    "Append",
    "Insert",
    "Change",
    "Delete",
    "CurrentLine",
    "Edit",
    "Exec",
    "File",
    "Help",
    "SetMark",
    "Prompt",
    "Read",
    "Write",
    "Quit",
    "Command",
    "TEXT_COMMANDS",
    "PrintMode",
    "ParsedCommand",
]
