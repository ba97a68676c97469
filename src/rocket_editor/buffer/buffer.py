"""Editable text buffer: one file's lines plus cursor and save state."""

from __future__ import annotations

import os
import time
from contextlib import AbstractContextManager
from typing import ContextManager, List, Optional, Sequence

from rocket_editor.runtime import telemetry

from .errors import BufferIOError, NoPathError
from .state import BufferState, Cursor
from .text import drop_last, grapheme_length, split_at
from .validation import ensure_cursor


class Buffer:
    """Lines of text with a grapheme-addressed cursor.

    ``lines`` is never empty and never stores line terminators. The cursor
    column is kept within ``0..grapheme_length(current line)`` after every
    operation, so callers can always splice at it directly.
    """

    def __init__(
        self,
        *,
        path: Optional[str] = None,
        lines: Optional[Sequence[str]] = None,
        state: Optional[BufferState] = None,
    ) -> None:
        self.path = path
        self._lines: List[str] = list(lines) if lines else [""]
        self.state = state or BufferState()

    @classmethod
    def from_path(cls, path: str) -> "Buffer":
        return cls(path=path, lines=_read_lines(path))

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def dirty(self) -> bool:
        return self.state.dirty

    @property
    def last_saved(self) -> Optional[float]:
        return self.state.last_saved

    @property
    def name(self) -> str:
        return self.path or "<scratch>"

    @property
    def extension(self) -> str:
        if not self.path:
            return ""
        return os.path.splitext(self.path)[1].lstrip(".")

    def current_line(self) -> str:
        return self._lines[self.state.cursor.row]

    def set_cursor(self, column: int, row: int) -> None:
        """Place the cursor exactly, rejecting out-of-range positions."""

        self.state.cursor = ensure_cursor(self._lines, Cursor(column, row))

    # Cursor movement -------------------------------------------------

    def move_cursor(self, dx: int, dy: int) -> None:
        column, row = self.state.cursor
        column = _clamp(column + dx, 0, grapheme_length(self._lines[row]))
        row = _clamp(row + dy, 0, len(self._lines) - 1)
        column = min(column, grapheme_length(self._lines[row]))
        self.state.set_cursor(column, row)

    def screen_cursor(self) -> Cursor:
        """Cursor position relative to the scrolled viewport."""

        column, row = self.state.cursor
        return Cursor(column, row - self.state.scroll)

    def follow_cursor(self, height: int) -> None:
        """Adjust ``scroll`` so the cursor row lies inside ``height`` rows."""

        if height <= 0:
            return
        row = self.state.cursor.row
        if row < self.state.scroll:
            self.state.scroll = row
        elif row >= self.state.scroll + height:
            self.state.scroll = row - height + 1

    # Mutation --------------------------------------------------------

    def insert_character(self, char: str) -> None:
        with _Mutation(self, "insert_character"):
            column, row = self.state.cursor
            line = self._lines[row]
            if column >= grapheme_length(line):
                left, right = line + char, ""
            else:
                before, after = split_at(line, column)
                left, right = before + char, after
            self._lines[row] = left + right
            # A combining mark joins the previous grapheme instead of adding one.
            self.state.set_cursor(grapheme_length(left), row)

    def insert_text(self, text: str) -> None:
        for char in text:
            if char == "\n":
                self.insert_line_break()
            else:
                self.insert_character(char)

    def insert_line_break(self) -> None:
        with _Mutation(self, "insert_line_break"):
            column, row = self.state.cursor
            line = self._lines[row]
            if column >= grapheme_length(line):
                self._lines.insert(row + 1, "")
            else:
                left, right = split_at(line, column)
                self._lines[row] = left
                self._lines.insert(row + 1, right)
            self.state.set_cursor(0, row + 1)

    def delete_backward(self) -> None:
        column, row = self.state.cursor
        if column == 0 and row == 0:
            return
        with _Mutation(self, "delete_backward"):
            if column == 0:
                previous = self._lines[row - 1]
                join_column = grapheme_length(previous)
                merged = previous + self._lines.pop(row)
                self._lines[row - 1] = merged
                self.state.set_cursor(min(join_column, grapheme_length(merged)), row - 1)
                return
            before, after = split_at(self._lines[row], column)
            line = drop_last(before) + after
            self._lines[row] = line
            self.state.set_cursor(min(column - 1, grapheme_length(line)), row)

    def delete_forward(self) -> None:
        column, row = self.state.cursor
        if column < grapheme_length(self._lines[row]):
            self.move_cursor(1, 0)
            self.delete_backward()
        elif row < len(self._lines) - 1:
            self.state.set_cursor(0, row + 1)
            self.delete_backward()

    # Persistence -----------------------------------------------------

    def save(self) -> None:
        if not self.path:
            raise NoPathError()
        with telemetry.span(
            "buffer::save", component="buffer", metadata={"path": self.path}
        ):
            payload = "".join(f"{line}\n" for line in self._lines)
            try:
                with open(self.path, "w", encoding="utf-8", newline="\n") as handle:
                    handle.write(payload)
            except OSError as exc:
                raise BufferIOError(
                    f"{self.path}: {exc.strerror or exc}", path=self.path, kind="write"
                ) from exc
            self.state.dirty = False
            self.state.last_saved = time.monotonic()
        telemetry.record_event(
            "buffer.saved", data={"path": self.path, "lines": len(self._lines)}
        )

    def save_to(self, path: str) -> None:
        self.path = path
        self.save()

    def load_from(self, path: str) -> None:
        with telemetry.span(
            "buffer::load", component="buffer", metadata={"path": path}
        ):
            lines = _read_lines(path)
            self._lines = lines
            self.path = path
            self.state.set_cursor(0, 0)
            self.state.scroll = 0
            self.state.dirty = False
        telemetry.record_event("buffer.loaded", data={"path": path, "lines": len(lines)})

    def seconds_since_save(self) -> Optional[float]:
        if self.state.last_saved is None:
            return None
        return time.monotonic() - self.state.last_saved


class _Mutation(AbstractContextManager["_Mutation"]):
    """Spans a content change and marks the buffer dirty once it succeeds."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "_Mutation":
        self._span_cm = telemetry.span(
            f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.buffer.state.dirty = True
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def _read_lines(path: str) -> List[str]:
    try:
        with open(path, "r", encoding="utf-8", newline="") as handle:
            text = handle.read()
    except UnicodeDecodeError as exc:
        raise BufferIOError(
            f"{path}: not valid UTF-8 text", path=path, kind="decode"
        ) from exc
    except OSError as exc:
        raise BufferIOError(
            f"{path}: {exc.strerror or exc}", path=path, kind="read"
        ) from exc
    if not text:
        return [""]
    # Only "\n" terminates a line; form feeds and other separators stay in the text.
    pieces = text.split("\n")
    if text.endswith("\n"):
        pieces.pop()
    return [piece[:-1] if piece.endswith("\r") else piece for piece in pieces]
