"""Modal mode active while the popup stack is non-empty."""

from __future__ import annotations

from rocket_editor.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeResult
from .keymap_helpers import run_binding, update_flag


class PopupMode(Mode):
    name = "popup"

    def on_enter(self, previous: str | None) -> None:
        del previous
        update_flag(self.context, "popup_open", True)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        update_flag(self.context, "popup_open", False)

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = run_binding(self.context, self.name, key)
        if result is not None:
            return result

        popups = self.context.popups
        top = popups.top
        if top is None:
            return ModeResult(consumed=False, switch_to="edit", status="miss")

        kind = top.kind
        closed = popups.handle_key(key, self.context.editor)
        if closed:
            self.context.bus.emit("popup.closed", kind.value)
            return ModeResult(consumed=True, status="popup_closed", message=kind.value)
        if top.kind is not kind:
            telemetry.record_event(
                "popup.replaced",
                data={"from": kind.value, "to": top.kind.value},
            )
            self.context.bus.emit("popup.opened", top.kind.value)
            return ModeResult(consumed=True, status="popup_error", message=top.content)
        return ModeResult(consumed=True, status="popup")
