"""Mode manager keeping the active mode in step with the popup stack."""

from __future__ import annotations

from typing import Dict, Optional, Type

from rocket_editor.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from rocket_editor.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult

EDIT_MODE = "edit"
POPUP_MODE = "popup"


class ModeManager:
    """Owns the active mode, dispatches key events, and handles transitions."""

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.quit_requested = False
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="rocket_editor.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="rocket_editor.keymaps"
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        self.context.extras.setdefault("keymap_flags", {})
        self.context.extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    def register_mode(self, mode_cls: Type[Mode], /, **mode_kwargs: object) -> Mode:
        mode = mode_cls(self.context, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous.name if previous else None)
        telemetry.record_event("mode.switch", data={"mode": name})

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            f"mode::{mode.name}",
            component=True,
            metadata={"key": key.key, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        return self._after_mode_result(result)

    def sync_with_popups(self) -> None:
        """Enter popup mode while popups are open, edit mode otherwise."""

        if POPUP_MODE not in self._modes:
            return
        target = POPUP_MODE if self.context.popups else EDIT_MODE
        if self._active != target and target in self._modes:
            self.switch_mode(target)

    def _after_mode_result(self, result: ModeResult) -> ModeResult:
        if result.status == "quit":
            self.quit_requested = True
            self.context.bus.emit("session.quit", None)
        if result.switch_to:
            self.switch_mode(result.switch_to)
        self.sync_with_popups()
        return result


__all__ = ["ModeManager", "EDIT_MODE", "POPUP_MODE"]
