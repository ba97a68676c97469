"""Default mode: command bindings first, then text editing."""

from __future__ import annotations

from .base_mode import KeyInput, Mode, ModeResult
from .keymap_helpers import run_binding


class EditMode(Mode):
    name = "edit"

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = run_binding(self.context, self.name, key)
        if result is not None:
            return result

        if self.context.editor.dispatch_key(key):
            return ModeResult(consumed=True, status="edit")
        return ModeResult(consumed=False, status="miss", message="unhandled")
