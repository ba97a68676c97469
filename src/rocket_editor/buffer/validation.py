"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import Sequence

from .errors import BufferValidationError
from .state import Cursor
from .text import grapheme_length


def ensure_cursor(lines: Sequence[str], cursor: Cursor) -> Cursor:
    column, row = cursor
    if row < 0 or row >= len(lines):
        raise BufferValidationError("Row out of range", cursor=cursor)
    if column < 0 or column > grapheme_length(lines[row]):
        raise BufferValidationError("Column out of range", cursor=cursor)
    return Cursor(column, row)
