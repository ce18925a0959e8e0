"""Command engine: editor state, modes and the manager switching between them."""

from .base_mode import (
    EditorState,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
    PendingInsert,
)
from .command_mode import CommandMode
from .insert_mode import InsertMode
from .mode_manager import ModeManager

__all__ = [
    "EditorState",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "PendingInsert",
    "CommandMode",
    "InsertMode",
    "ModeManager",
]
