"""Combinator parser for ed command lines.

Every parser is a callable ``text -> (value, rest)`` that raises ``_NoMatch``
when it does not apply. ``alt`` tries its alternatives left to right and the
first one that matches wins, so the order of alternatives below is part of the
grammar.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple, TypeVar

from ed_engine.buffer.marks import MARK_LETTERS
from ed_engine.errors import CommandSyntaxError

from .models import (
    CURRENT_LINE,
    LAST_LINE,
    Absolute,
    Address,
    AddressRange,
    AddressSpec,
    Append,
    Change,
    Command,
    CurrentLine,
    Delete,
    Edit,
    Exec,
    File,
    Help,
    Insert,
    Mark,
    ParsedCommand,
    PrintMode,
    Prompt,
    Quit,
    Read,
    Relative,
    SearchBackward,
    SearchForward,
    SetMark,
    Write,
)

T = TypeVar("T")
U = TypeVar("U")

Parser = Callable[[str], Tuple[T, str]]

NEWLINE = "\n"
TERMINATOR = "." + NEWLINE


class _NoMatch(Exception):
    pass


# Combinators


def char(expected: str) -> Parser[str]:
    def parse(text: str) -> Tuple[str, str]:
        if text[:1] != expected:
            raise _NoMatch(expected)
        return expected, text[1:]

    return parse


def one_of(chars: str) -> Parser[str]:
    def parse(text: str) -> Tuple[str, str]:
        if not text or text[0] not in chars:
            raise _NoMatch(chars)
        return text[0], text[1:]

    return parse


def take_while(predicate: Callable[[str], bool], *, min_count: int = 0) -> Parser[str]:
    def parse(text: str) -> Tuple[str, str]:
        end = 0
        while end < len(text) and predicate(text[end]):
            end += 1
        if end < min_count:
            raise _NoMatch("take_while")
        return text[:end], text[end:]

    return parse


def mapped(parser: Parser[T], func: Callable[[T], U]) -> Parser[U]:
    def parse(text: str) -> Tuple[U, str]:
        value, rest = parser(text)
        return func(value), rest

    return parse


def alt(*parsers: Parser[T]) -> Parser[T]:
    def parse(text: str) -> Tuple[T, str]:
        for parser in parsers:
            try:
                return parser(text)
            except _NoMatch:
                continue
        raise _NoMatch("alt")

    return parse


def opt(parser: Parser[T]) -> Parser[Optional[T]]:
    def parse(text: str) -> Tuple[Optional[T], str]:
        try:
            return parser(text)
        except _NoMatch:
            return None, text

    return parse


def many0(parser: Parser[T]) -> Parser[List[T]]:
    def parse(text: str) -> Tuple[List[T], str]:
        values: List[T] = []
        while True:
            try:
                value, rest = parser(text)
            except _NoMatch:
                return values, text
            if rest == text:
                return values, text
            values.append(value)
            text = rest

    return parse


def preceded(prefix: Parser[object], parser: Parser[T]) -> Parser[T]:
    def parse(text: str) -> Tuple[T, str]:
        _, rest = prefix(text)
        return parser(rest)

    return parse


rest_of_line = take_while(lambda c: c != NEWLINE, min_count=1)
digits = take_while(lambda c: c in "0123456789", min_count=1)


# Addresses


def _signed_number(text: str) -> Tuple[Address, str]:
    sign, rest = one_of("+-")(text)
    value, rest = digits(rest)
    return Relative(int(sign + value)), rest


def _unsigned_number(text: str) -> Tuple[Address, str]:
    value, rest = digits(text)
    number = int(value)
    if number < 1:
        raise _NoMatch("line numbers start at 1")
    return Absolute(number - 1), rest


_SPECIAL_ADDRESSES = {
    ".": CURRENT_LINE,
    "$": LAST_LINE,
    "+": Relative(1),
    "-": Relative(-1),
    "^": Relative(-1),
}

address: Parser[Address] = alt(
    _signed_number,
    _unsigned_number,
    mapped(one_of("".join(_SPECIAL_ADDRESSES)), _SPECIAL_ADDRESSES.__getitem__),
    mapped(preceded(char("'"), one_of(MARK_LETTERS)), Mark),
)


# Address ranges


_SPECIAL_RANGES = {
    "%": AddressRange(Absolute(0), LAST_LINE),
    ",": AddressRange(Absolute(0), LAST_LINE),
    ";": AddressRange(CURRENT_LINE, LAST_LINE),
}


def _range_pair(text: str) -> Tuple[AddressSpec, str]:
    start, rest = address(text)
    _, rest = char(",")(rest)
    end, rest = address(rest)
    return AddressRange(start, end), rest


def _search(delimiter: str, factory: Callable[[Optional[str]], AddressSpec]) -> Parser[AddressSpec]:
    body = take_while(lambda c: c not in (delimiter, NEWLINE))

    def parse(text: str) -> Tuple[AddressSpec, str]:
        _, rest = char(delimiter)(text)
        pattern, rest = body(rest)
        _, rest = opt(char(delimiter))(rest)
        return factory(pattern or None), rest

    return parse


address_spec: Parser[AddressSpec] = alt(
    mapped(one_of("".join(_SPECIAL_RANGES)), _SPECIAL_RANGES.__getitem__),
    _range_pair,
    mapped(address, AddressRange.single),
    _search("/", SearchForward),
    _search("?", SearchBackward),
)


# Commands


_SIMPLE_COMMANDS = {
    "a": Append(),
    "c": Change(),
    "d": Delete(),
    "i": Insert(),
    "H": Help(),
    "P": Prompt(),
    "q": Quit(),
    "=": CurrentLine(),
}

_optional_path = opt(preceded(char(" "), rest_of_line))


def _path_command(verb: str, factory: Callable[[Optional[str]], Command]) -> Parser[Command]:
    def parse(text: str) -> Tuple[Command, str]:
        _, rest = char(verb)(text)
        path, rest = _optional_path(rest)
        return factory(path), rest

    return parse


def _file_command(text: str) -> Tuple[Command, str]:
    _, rest = char("f")(text)
    path, rest = _optional_path(rest)
    if path is None:
        raise _NoMatch("f requires a filename")
    return File(path), rest


command: Parser[Command] = alt(
    mapped(one_of("".join(_SIMPLE_COMMANDS)), _SIMPLE_COMMANDS.__getitem__),
    mapped(preceded(char("k"), one_of(MARK_LETTERS)), SetMark),
    _path_command("e", Edit),
    _file_command,
    _path_command("r", Read),
    _path_command("w", Write),
    mapped(preceded(char("!"), rest_of_line), Exec),
)


# Print flags


_FLAGS = {"p": PrintMode.PLAIN, "n": PrintMode.NUMBERED}

print_flag: Parser[PrintMode] = mapped(one_of("".join(_FLAGS)), _FLAGS.__getitem__)


def _command_line(text: str) -> Tuple[ParsedCommand, str]:
    spec, rest = opt(address_spec)(text)
    verb, rest = opt(command)(rest)
    flags, rest = many0(print_flag)(rest)
    _, rest = char(NEWLINE)(rest)
    print_mode = max(flags, default=PrintMode.NONE)
    return ParsedCommand(spec=spec, command=verb, print_mode=print_mode), rest


def parse_command(line: str) -> ParsedCommand:
    """Parse one newline-terminated command line.

    Raises ``CommandSyntaxError`` when the line does not match the grammar or
    anything follows the terminating newline.
    """

    try:
        parsed, rest = _command_line(line)
    except _NoMatch as exc:
        raise CommandSyntaxError() from exc
    if rest:
        raise CommandSyntaxError()
    return parsed


def is_terminator(line: str) -> bool:
    """True for the line that ends insert mode: a lone ``.``."""

    return line == TERMINATOR


__all__ = [
    "Parser",
    "char",
    "one_of",
    "take_while",
    "mapped",
    "alt",
    "opt",
    "many0",
    "preceded",
    "rest_of_line",
    "digits",
    "address",
    "address_spec",
    "command",
    "print_flag",
    "parse_command",
    "is_terminator",
]
