"""Single modal dialog with a button row and optional path prompt."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rocket_editor.buffer import BufferIOError
from rocket_editor.buffer.text import drop_last
from rocket_editor.editor import keys
from rocket_editor.editor.keys import KeyInput
from rocket_editor.runtime import telemetry

from .kinds import PopupButton, PopupKind, buttons_for, content_for, title_for

if TYPE_CHECKING:  # pragma: no cover - typing only
    from rocket_editor.editor import Editor


@dataclass(frozen=True, slots=True)
class PopupView:
    title: str
    content: str
    buttons: tuple[str, ...]
    selected_index: int


class Popup:
    """Modal dialog; ``handle_key`` returns ``True`` when it should close."""

    def __init__(self, kind: PopupKind, payload: str = "") -> None:
        self.kind = kind
        self.payload = payload
        self.buttons: tuple[PopupButton, ...] = buttons_for(kind)
        self.selected_index = 0

    @classmethod
    def help(cls, text: str = "") -> "Popup":
        return cls(PopupKind.HELP, text)

    @classmethod
    def dialogue(cls, message: str) -> "Popup":
        return cls(PopupKind.DIALOGUE, message)

    @classmethod
    def save_file(cls, path: str = "") -> "Popup":
        return cls(PopupKind.SAVE_FILE, path)

    @classmethod
    def load_file(cls, path: str = "") -> "Popup":
        return cls(PopupKind.LOAD_FILE, path)

    @classmethod
    def io_error(cls, message: str) -> "Popup":
        return cls(PopupKind.IO_ERROR, message)

    @property
    def title(self) -> str:
        return title_for(self.kind)

    @property
    def content(self) -> str:
        return content_for(self.kind, self.payload)

    @property
    def selected(self) -> PopupButton:
        return self.buttons[self.selected_index]

    def view(self) -> PopupView:
        return PopupView(
            title=self.title,
            content=self.content,
            buttons=tuple(button.label for button in self.buttons),
            selected_index=self.selected_index,
        )

    def handle_key(self, key: KeyInput, editor: "Editor") -> bool:
        if key.key == keys.LEFT:
            self.selected_index = (self.selected_index - 1) % len(self.buttons)
        elif key.key == keys.RIGHT:
            self.selected_index = (self.selected_index + 1) % len(self.buttons)
        elif key.key == keys.ENTER:
            return self._handle_enter(editor)
        elif key.key == keys.BACKSPACE:
            if self.kind.accepts_path:
                self.payload = drop_last(self.payload)
        elif key.typed_text is not None and self.kind.accepts_path:
            self.payload += key.typed_text
        return False

    def _handle_enter(self, editor: "Editor") -> bool:
        if not self.kind.accepts_path or self.selected is PopupButton.CANCEL:
            return True

        path = self.payload
        try:
            with telemetry.span(
                "popup::commit",
                component="popups",
                metadata={"kind": self.kind.value, "path": path},
            ):
                if self.kind is PopupKind.SAVE_FILE:
                    editor.save_active_to(path)
                else:
                    editor.load_active_from(path)
        except BufferIOError as exc:
            telemetry.record_event(
                "popup.failed",
                level="warning",
                data={"kind": self.kind.value, "path": path, "error": str(exc)},
            )
            self._become(PopupKind.IO_ERROR, str(exc))
            return False
        return True

    def _become(self, kind: PopupKind, payload: str) -> None:
        self.kind = kind
        self.payload = payload
        self.buttons = buttons_for(kind)
        self.selected_index = 0


__all__ = ["Popup", "PopupView"]
