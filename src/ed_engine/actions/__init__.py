"""Command handlers and the helpers they share with insert mode."""

from .core import (
    append_point,
    ensure_target_line,
    enter_insert_mode,
    format_line,
    print_lines,
)
from .commands import execute

__all__ = [
    "append_point",
    "ensure_target_line",
    "enter_insert_mode",
    "format_line",
    "print_lines",
    "execute",
]
