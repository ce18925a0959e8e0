"""Handlers executing a parsed command against a resolved line range."""

from __future__ import annotations

from typing import Callable, Dict, Tuple, Type

from ed_engine.addressing import ResolvedRange
from ed_engine.buffer import Buffer, ensure_line, ensure_single_line
from ed_engine.errors import ModifiedWarning
from ed_engine.grammar import (
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
    ParsedCommand,
    PrintMode,
    Prompt,
    Quit,
    Read,
    SetMark,
    TEXT_COMMANDS,
    Write,
)
from ed_engine.modes.base_mode import ModeContext, ModeResult, PendingInsert
from ed_engine.runtime import load_lines, run_shell, save_lines, telemetry

from .core import append_point, ensure_target_line, enter_insert_mode, print_lines

CommandHandler = Callable[[ModeContext, Command, ResolvedRange, PrintMode], ModeResult]


def execute(
    context: ModeContext, parsed: ParsedCommand, resolved: ResolvedRange
) -> ModeResult:
    """Run ``parsed`` over ``resolved`` and echo the range if flags ask for it."""

    command = parsed.command
    if command is None:
        return _print_addressed(context, resolved, parsed.print_mode)

    handler = _COMMAND_HANDLERS[type(command)]
    name = type(command).__name__.lower()
    with telemetry.span(
        f"command::{name}",
        component="commands",
        metadata={"start": resolved.start, "end": resolved.end},
    ):
        result = handler(context, command, resolved, parsed.print_mode)

    if not isinstance(command, _NO_RANGE_ECHO):
        print_lines(context, resolved.start, resolved.end, parsed.print_mode)
    return result


def _print_addressed(
    context: ModeContext, resolved: ResolvedRange, mode: PrintMode
) -> ModeResult:
    buffer = context.buffer
    ensure_line(buffer, resolved.start)
    ensure_line(buffer, resolved.end)
    if mode is PrintMode.NONE:
        buffer.current = ensure_single_line(resolved.start, resolved.end)
        mode = PrintMode.PLAIN
    print_lines(context, resolved.start, resolved.end, mode)
    return ModeResult(status="print")


def _handle_append(
    context: ModeContext, command: Command, resolved: ResolvedRange, mode: PrintMode
) -> ModeResult:
    buffer = context.buffer
    line = ensure_target_line(buffer, ensure_single_line(resolved.start, resolved.end))
    point = append_point(buffer, line)
    return enter_insert_mode(context, PendingInsert(point, point, mode, "append"))


def _handle_insert(
    context: ModeContext, command: Command, resolved: ResolvedRange, mode: PrintMode
) -> ModeResult:
    buffer = context.buffer
    line = ensure_target_line(buffer, ensure_single_line(resolved.start, resolved.end))
    return enter_insert_mode(context, PendingInsert(line, line, mode, "insert"))


def _handle_change(
    context: ModeContext, command: Command, resolved: ResolvedRange, mode: PrintMode
) -> ModeResult:
    buffer = context.buffer
    ensure_line(buffer, resolved.start)
    ensure_line(buffer, resolved.end)
    pending = PendingInsert(resolved.start, resolved.end + 1, mode, "change")
    return enter_insert_mode(context, pending)


def _handle_delete(
    context: ModeContext, command: Command, resolved: ResolvedRange, mode: PrintMode
) -> ModeResult:
    buffer = context.buffer
    ensure_line(buffer, resolved.start)
    ensure_line(buffer, resolved.end)
    buffer.replace(resolved.start, resolved.end + 1, ())
    buffer.current = _first_line_at_or_after(buffer, resolved.start)
    return ModeResult(status="delete")


def _first_line_at_or_after(buffer: Buffer, index: int) -> int:
    if index < len(buffer):
        return index
    return max(len(buffer) - 1, 0)


def _handle_current_line(
    context: ModeContext, command: Command, resolved: ResolvedRange, mode: PrintMode
) -> ModeResult:
    context.output(str(context.buffer.current + 1))
    return ModeResult(status="current_line")


def _guard_modified(context: ModeContext) -> None:
    # The refusal itself clears the flag, so repeating the command goes through.
    buffer = context.buffer
    if buffer.changed:
        buffer.changed = False
        telemetry.record_event("buffer.modified_warning", level="warning")
        raise ModifiedWarning()


def _handle_edit(
    context: ModeContext, command: Edit, resolved: ResolvedRange, mode: PrintMode
) -> ModeResult:
    _guard_modified(context)
    state = context.state
    path = command.path or state.filename
    lines, size = load_lines(path)
    state.buffer = Buffer.from_lines(lines, name=path)
    state.search.reset()
    state.filename = path
    context.output(str(size))
    context.bus.emit("command.edit", {"path": path, "bytes": size})
    return ModeResult(status="edit", message=path)


def _handle_exec(
    context: ModeContext, command: Exec, resolved: ResolvedRange, mode: PrintMode
) -> ModeResult:
    returncode = run_shell(command.command)
    context.output("!")
    return ModeResult(status="exec", message=str(returncode))


def _handle_file(
    context: ModeContext, command: File, resolved: ResolvedRange, mode: PrintMode
) -> ModeResult:
    context.state.filename = command.path
    return ModeResult(status="file", message=command.path)


def _handle_help(
    context: ModeContext, command: Command, resolved: ResolvedRange, mode: PrintMode
) -> ModeResult:
    state = context.state
    state.verbose = not state.verbose
    return ModeResult(status="help", message="on" if state.verbose else "off")


def _handle_mark(
    context: ModeContext, command: SetMark, resolved: ResolvedRange, mode: PrintMode
) -> ModeResult:
    buffer = context.buffer
    ensure_line(buffer, resolved.start)
    ensure_line(buffer, resolved.end)
    buffer.marks.set(command.letter, ensure_single_line(resolved.start, resolved.end))
    return ModeResult(status="mark", message=command.letter)


def _handle_prompt(
    context: ModeContext, command: Command, resolved: ResolvedRange, mode: PrintMode
) -> ModeResult:
    state = context.state
    state.prompt = not state.prompt
    return ModeResult(status="prompt", message="on" if state.prompt else "off")


def _handle_read(
    context: ModeContext, command: Read, resolved: ResolvedRange, mode: PrintMode
) -> ModeResult:
    state = context.state
    buffer = state.buffer
    line = ensure_target_line(buffer, ensure_single_line(resolved.start, resolved.end))
    path = command.path or state.filename
    lines, size = load_lines(path)
    point = append_point(buffer, line)
    buffer.replace(point, point, lines)
    if lines:
        buffer.current = point + len(lines) - 1
    if not state.filename:
        state.filename = path
    context.output(str(size))
    return ModeResult(status="read", message=path)


def _handle_write(
    context: ModeContext, command: Write, resolved: ResolvedRange, mode: PrintMode
) -> ModeResult:
    state = context.state
    path = command.path or state.filename
    size = save_lines(path, state.buffer)
    state.buffer.changed = False
    if not state.filename:
        state.filename = path
    context.bus.emit("command.write", {"path": path, "bytes": size})
    return ModeResult(status="write", message=path)


def _handle_quit(
    context: ModeContext, command: Command, resolved: ResolvedRange, mode: PrintMode
) -> ModeResult:
    _guard_modified(context)
    context.bus.emit("command.quit", {"status": 0})
    return ModeResult(status="quit")


# Text commands print their block from insert mode; e replaces the buffer the
# range was resolved against.
_NO_RANGE_ECHO: Tuple[Type[Command], ...] = TEXT_COMMANDS + (Edit,)

_COMMAND_HANDLERS: Dict[Type[Command], CommandHandler] = {
    Append: _handle_append,
    Insert: _handle_insert,
    Change: _handle_change,
    Delete: _handle_delete,
    CurrentLine: _handle_current_line,
    Edit: _handle_edit,
    Exec: _handle_exec,
    File: _handle_file,
    Help: _handle_help,
    SetMark: _handle_mark,
    Prompt: _handle_prompt,
    Read: _handle_read,
    Write: _handle_write,
    Quit: _handle_quit,
}


__all__ = ["execute"]
