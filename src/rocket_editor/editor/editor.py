"""Editor owning the open buffers and the active buffer's render cache."""

from __future__ import annotations

import os
from typing import Iterable, Iterator, List, Optional, Sequence

from rocket_editor.buffer import Buffer, Cursor
from rocket_editor.runtime import telemetry
from rocket_editor.runtime.config import EditorSettings
from rocket_editor.styling import StyledLine, style_lines

from . import keys
from .keys import KeyInput
from .view import EditorView


class DisplayNames:
    """Lazy view over per-buffer labels; every iteration starts afresh."""

    def __init__(self, editor: "Editor") -> None:
        self._editor = editor

    def __iter__(self) -> Iterator[str]:
        for buffer in self._editor.buffers:
            yield self._editor.display_name(buffer)

    def __len__(self) -> int:
        return len(self._editor.buffers)


class Editor:
    """Ordered, never-empty collection of buffers with one active buffer."""

    def __init__(
        self,
        buffers: Optional[Sequence[Buffer]] = None,
        *,
        settings: Optional[EditorSettings] = None,
    ) -> None:
        self.buffers: List[Buffer] = list(buffers) if buffers else [Buffer()]
        self.settings = settings or EditorSettings()
        self.active_index = 0
        self._render_cache: List[StyledLine] = []
        self.refresh()

    @classmethod
    def open(
        cls, paths: Iterable[str] = (), *, settings: Optional[EditorSettings] = None
    ) -> "Editor":
        """Load one buffer per path; any unreadable path aborts the open."""

        with telemetry.span("editor::open", component="editor") as handle:
            buffers = [Buffer.from_path(path) for path in paths]
            handle.add_metadata("buffers", len(buffers))
        return cls(buffers, settings=settings)

    @property
    def active(self) -> Buffer:
        return self.buffers[self.active_index]

    @property
    def styled_lines(self) -> tuple[StyledLine, ...]:
        return tuple(self._render_cache)

    def refresh(self) -> None:
        """Rebuild the styled representation of the active buffer."""

        buffer = self.active
        self._render_cache = style_lines(buffer.lines, buffer.extension)

    # Input -----------------------------------------------------------

    def dispatch_key(self, key: KeyInput) -> bool:
        """Apply ``key`` to the active buffer; returns whether it was used."""

        buffer = self.active
        if key.is_command:
            return False

        delta = keys.ARROWS.get(key.key)
        if delta is not None:
            buffer.move_cursor(*delta)
            return True

        if key.key == keys.ENTER:
            buffer.insert_line_break()
        elif key.key == keys.BACKSPACE:
            buffer.delete_backward()
        elif key.key == keys.DELETE:
            buffer.delete_forward()
        elif key.key == keys.TAB:
            buffer.insert_text(" " * self.settings.tab_width)
        elif key.typed_text is not None:
            buffer.insert_text(key.typed_text)
        else:
            return False

        self.refresh()
        return True

    # Buffer switching ------------------------------------------------

    def next_buffer(self) -> None:
        self._switch_to((self.active_index + 1) % len(self.buffers))

    def previous_buffer(self) -> None:
        self._switch_to((self.active_index - 1) % len(self.buffers))

    def _switch_to(self, index: int) -> None:
        self.active_index = index
        self.refresh()
        telemetry.record_event(
            "editor.switch",
            level="debug",
            data={"index": index, "buffer": self.active.name},
            logger_name="rocket_editor.editor",
        )

    # Persistence -----------------------------------------------------

    def save_active(self) -> None:
        self.active.save()

    def save_active_to(self, path: str) -> None:
        self.active.save_to(path)
        self.refresh()

    def load_active_from(self, path: str) -> None:
        self.active.load_from(path)
        self.refresh()

    # Queries ---------------------------------------------------------

    def display_name(self, buffer: Buffer) -> str:
        if buffer.path:
            label = os.path.basename(buffer.path) or buffer.path
        else:
            label = self.settings.scratch_label
        if buffer.dirty:
            return f"{self.settings.dirty_marker}{label}"
        return label

    def all_display_names(self) -> DisplayNames:
        return DisplayNames(self)

    def dirty_flags(self) -> tuple[bool, ...]:
        return tuple(buffer.dirty for buffer in self.buffers)

    def is_dirty(self) -> bool:
        return self.active.dirty

    def path(self) -> Optional[str]:
        return self.active.path

    def cursor(self) -> Cursor:
        return self.active.screen_cursor()

    def time_since_active_save(self) -> Optional[float]:
        """Seconds since the active buffer was saved, ``None`` if never."""

        return self.active.seconds_since_save()

    def saved_recently(self, window: Optional[float] = None) -> bool:
        limit = self.settings.saved_flash_seconds if window is None else window
        elapsed = self.time_since_active_save()
        return not self.is_dirty() and elapsed is not None and elapsed < limit

    def view(self) -> EditorView:
        buffer = self.active
        return EditorView(
            styled_lines=self.styled_lines,
            cursor=buffer.screen_cursor(),
            scroll=buffer.state.scroll,
            display_names=tuple(self.all_display_names()),
            active_index=self.active_index,
            path=buffer.path,
            dirty=buffer.dirty,
            saved_recently=self.saved_recently(),
        )


__all__ = ["Editor", "DisplayNames"]
