"""Command-line entry point: a line-at-a-time read-eval-print loop."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Optional, Sequence, TextIO

from ed_engine.editor import Editor
from ed_engine.runtime import telemetry


def _env_flag(key: str) -> bool:
    return os.environ.get(key, "").lower() in {"1", "true", "yes", "on"}


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ed-engine", description="Line-oriented text editor in the style of ed."
    )
    parser.add_argument("file", nargs="?", help="File to load into the buffer")
    parser.add_argument(
        "-p",
        "--prompt",
        action="store_true",
        default=_env_flag("ED_ENGINE_PROMPT"),
        help="Show the '* ' prompt from the start (toggle later with P)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=_env_flag("ED_ENGINE_VERBOSE"),
        help="Explain errors after '?' from the start (toggle later with H)",
    )
    return parser.parse_args(argv)


def _write(stream: TextIO, lines: Sequence[str]) -> None:
    for line in lines:
        stream.write(f"{line}\n")
    stream.flush()


def repl(editor: Editor, stdin: TextIO, stdout: TextIO) -> int:
    """Read lines until ``q`` succeeds or input ends; returns the exit status."""

    while not editor.quit_requested:
        prompt = editor.prompt
        if prompt:
            stdout.write(prompt)
            stdout.flush()
        line = stdin.readline()
        if not line:
            break
        _write(stdout, editor.feed(line if line.endswith("\n") else f"{line}\n"))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    editor = Editor()
    editor.state.prompt = args.prompt
    editor.state.verbose = args.verbose
    telemetry.record_event(
        "session.start", data={"file": args.file or "", "prompt": args.prompt}
    )
    if args.file:
        _write(sys.stdout, editor.open(args.file))
    status = repl(editor, sys.stdin, sys.stdout)
    telemetry.record_event("session.end", data={"status": status})
    return status


if __name__ == "__main__":  # pragma: no cover - manual entry point
    sys.exit(main())
