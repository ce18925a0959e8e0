"""Synchronous ``sh -c`` execution for the ``!`` command."""

from __future__ import annotations

import subprocess

from ed_engine.errors import CommandFailed

from . import telemetry


def run_shell(command: str) -> int:
    """Run ``command`` through ``sh -c`` and wait for it.

    Output is not captured. Only a failure to launch the shell is an error;
    the command's own exit status is returned for the caller to log.
    """

    with telemetry.span("shell::run", metadata={"command": command}) as handle:
        try:
            completed = subprocess.run(["sh", "-c", command], check=False)
        except OSError as exc:
            raise CommandFailed() from exc
        handle.add_metadata("returncode", completed.returncode)
    telemetry.record_event(
        "shell.exit", data={"command": command, "returncode": completed.returncode}
    )
    return completed.returncode


__all__ = ["run_shell"]
