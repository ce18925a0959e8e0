"""Command-line grammar: parsed command models and the combinator parser."""

from .models import (
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
    TEXT_COMMANDS,
    Write,
)
from .parser import is_terminator, parse_command

__all__ = [
    "Absolute",
    "Address",
    "AddressRange",
    "AddressSpec",
    "Append",
    "Change",
    "Command",
    "CurrentLine",
    "Delete",
    "Edit",
    "Exec",
    "File",
    "Help",
    "Insert",
    "Mark",
    "ParsedCommand",
    "PrintMode",
    "Prompt",
    "Quit",
    "Read",
    "Relative",
    "SearchBackward",
    "SearchForward",
    "SetMark",
    "TEXT_COMMANDS",
    "Write",
    "is_terminator",
    "parse_command",
]
