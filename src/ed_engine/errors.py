"""Error taxonomy shared by the parser, resolver, buffer and command engine."""

from __future__ import annotations


class EdError(RuntimeError):
    """Base class for every error that aborts a single command line."""

    message = "error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class CommandSyntaxError(EdError):
    """The input line does not match the command grammar."""

    message = "invalid command"


class InvalidAddress(EdError):
    message = "invalid address"


class InvalidMark(EdError):
    message = "invalid mark"


class InvalidRegex(EdError):
    message = "invalid regex"


class NoPreviousSearch(EdError):
    message = "no previous search"


class NoMatch(EdError):
    message = "no match"


class ExpectedSingleLine(EdError):
    message = "expected single line"


class InvalidPath(EdError):
    message = "invalid path"


class CommandFailed(EdError):
    message = "command failed"


class ModifiedWarning(EdError):
    """Raised by ``e`` and ``q`` while the buffer has unsaved changes."""

    message = "warning: file modified"


__all__ = [
    "EdError",
    "CommandSyntaxError",
    "InvalidAddress",
    "InvalidMark",
    "InvalidRegex",
    "NoPreviousSearch",
    "NoMatch",
    "ExpectedSingleLine",
    "InvalidPath",
    "CommandFailed",
    "ModifiedWarning",
]
