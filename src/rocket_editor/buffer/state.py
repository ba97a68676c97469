"""Cursor and bookkeeping state for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional


class Cursor(NamedTuple):
    """Cursor position; ``column`` counts graphemes."""

    column: int
    row: int


@dataclass(slots=True)
class BufferState:
    """Mutable cursor, scroll, and save bookkeeping for one buffer."""

    cursor: Cursor = Cursor(0, 0)
    scroll: int = 0
    dirty: bool = False
    last_saved: Optional[float] = None

    def set_cursor(self, column: int, row: int) -> None:
        self.cursor = Cursor(column, row)
