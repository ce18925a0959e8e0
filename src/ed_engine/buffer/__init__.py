"""Line buffer, mark table and validation helpers."""

from .buffer import Buffer
from .marks import MARK_LETTERS, MarkTable, is_mark_letter
from .validation import ensure_line, ensure_single_line

__all__ = [
    "Buffer",
    "MarkTable",
    "MARK_LETTERS",
    "is_mark_letter",
    "ensure_line",
    "ensure_single_line",
]
