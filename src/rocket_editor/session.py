"""Top-level editing session: editor, popup stack, and mode manager."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from rocket_editor.editor import Editor, EditorView, KeyInput
from rocket_editor.keymaps import Binding, KeymapRegistry, KeymapResolver, load_default_keymaps
from rocket_editor.modes import EditMode, ModeBus, ModeContext, ModeResult, PopupMode
from rocket_editor.modes.mode_manager import ModeManager
from rocket_editor.popups import PopupStack, PopupView
from rocket_editor.runtime import telemetry
from rocket_editor.runtime.config import EditorSettings


@dataclass(frozen=True, slots=True)
class SessionView:
    """Everything a host needs to paint one frame."""

    editor: EditorView
    popup: Optional[PopupView]
    popup_depth: int
    mode: str


class Session:
    """Owns the popup stack and routes each key through the mode manager."""

    def __init__(
        self,
        editor: Editor,
        *,
        extra_bindings: Iterable[Binding] | None = None,
    ) -> None:
        self.editor = editor
        self.popups = PopupStack()
        self.bus = ModeBus()
        registry = KeymapRegistry(logger_name="rocket_editor.keymaps")
        load_default_keymaps(registry, extra_bindings=extra_bindings)
        context = ModeContext(editor=editor, popups=self.popups, bus=self.bus)
        self.manager = ModeManager(
            context,
            keymap_registry=registry,
            keymap_resolver=KeymapResolver(registry, logger_name="rocket_editor.keymaps"),
            load_defaults=False,
        )
        self.manager.register_mode(EditMode)
        self.manager.register_mode(PopupMode)

    @classmethod
    def open(
        cls,
        paths: Iterable[str] = (),
        *,
        settings: Optional[EditorSettings] = None,
        extra_bindings: Iterable[Binding] | None = None,
    ) -> "Session":
        paths = list(paths)
        editor = Editor.open(paths, settings=settings or EditorSettings.from_env())
        telemetry.record_event("session.open", data={"paths": paths})
        return cls(editor, extra_bindings=extra_bindings)

    @property
    def context(self) -> ModeContext:
        return self.manager.context

    @property
    def quit_requested(self) -> bool:
        return self.manager.quit_requested

    def handle_key(self, key: KeyInput) -> ModeResult:
        return self.manager.handle_key(key)

    def follow_cursor(self, height: int) -> None:
        self.editor.active.follow_cursor(height)

    def view(self) -> SessionView:
        top = self.popups.top
        mode = self.manager.active_mode
        return SessionView(
            editor=self.editor.view(),
            popup=top.view() if top else None,
            popup_depth=len(self.popups),
            mode=mode.name if mode else "?",
        )


__all__ = ["Session", "SessionView"]
