"""Collaborators around the editing core: telemetry, files and the shell."""

from . import telemetry
from .files import byte_count, load_lines, save_lines
from .shell import run_shell

__all__ = ["telemetry", "byte_count", "load_lines", "save_lines", "run_shell"]
