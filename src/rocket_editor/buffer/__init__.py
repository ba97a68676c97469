"""Buffer model: lines, cursor, and file persistence."""

from .buffer import Buffer
from .errors import BufferIOError, BufferValidationError, NoPathError
from .state import BufferState, Cursor
from .text import grapheme_length, split_at
from .validation import ensure_cursor

__all__ = [
    "Buffer",
    "BufferState",
    "Cursor",
    "BufferIOError",
    "BufferValidationError",
    "NoPathError",
    "ensure_cursor",
    "grapheme_length",
    "split_at",
]
