"""UI-agnostic ed line editor engine."""

from .editor import Editor

__all__ = [
    "Editor",
    "actions",
    "addressing",
    "buffer",
    "grammar",
    "modes",
    "runtime",
]

__version__ = "0.1.0"
