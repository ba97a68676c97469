"""Immutable snapshots handed to the host for painting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from rocket_editor.buffer import Cursor
from rocket_editor.styling import StyledLine


@dataclass(frozen=True, slots=True)
class EditorView:
    styled_lines: Tuple[StyledLine, ...]
    cursor: Cursor
    scroll: int
    display_names: Tuple[str, ...]
    active_index: int
    path: Optional[str]
    dirty: bool
    saved_recently: bool
