"""Adapter wiring a Session to UI callbacks, independent of Textual itself."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from rocket_editor.editor import KeyInput
from rocket_editor.editor import keys
from rocket_editor.modes import ModeResult
from rocket_editor.session import Session, SessionView

_NAMED_KEYS: Dict[str, str] = {
    "left": keys.LEFT,
    "right": keys.RIGHT,
    "up": keys.UP,
    "down": keys.DOWN,
    "enter": keys.ENTER,
    "return": keys.ENTER,
    "backspace": keys.BACKSPACE,
    "delete": keys.DELETE,
    "tab": keys.TAB,
    "escape": keys.ESC,
    "esc": keys.ESC,
}

_EVENTS = (
    "buffer.saved",
    "buffer.switched",
    "popup.opened",
    "popup.closed",
    "session.quit",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def normalize_key(
    key: str, *, text: Optional[str] = None, modifiers: Iterable[str] = ()
) -> KeyInput:
    """Translate a host key name such as ``"ctrl+s"`` or ``"left"``."""

    mods = [str(mod).lower() for mod in modifiers]
    parts = key.split("+") if len(key) > 1 else [key]
    if len(parts) > 1 and parts[-1]:
        mods.extend(part.lower() for part in parts[:-1])
        key = parts[-1]
    named = _NAMED_KEYS.get(key.lower()) if len(key) > 1 else None
    if named is not None:
        return KeyInput(key=named, modifiers=tuple(mods))
    if len(key) == 1:
        return KeyInput(key=key, modifiers=tuple(mods), text=text or key)
    return KeyInput(key=key.upper(), modifiers=tuple(mods), text=text)


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update widgets."""

    update_view: Callable[[SessionView], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    request_exit: Callable[[], None] = _noop
    # Optional debug sink for one line per key and result
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges a Session and its bus events to a Textual-friendly surface."""

    def __init__(
        self, session: Session, hooks: TextualUIHooks, *, viewport_height: int = 0
    ) -> None:
        self.session = session
        self.hooks = hooks
        self.viewport_height = viewport_height
        self._subscribe_events()
        self.refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        key_input = normalize_key(key, text=text, modifiers=modifiers)
        self.hooks.log(
            f"key -> key={key_input.key!r} mods={key_input.modifiers!r} text={key_input.text!r}"
        )
        result = self.session.handle_key(key_input)
        self.hooks.log(
            f"result <- consumed={result.consumed!r} status={result.status!r} "
            f"message={result.message!r}"
        )
        status = result.message or result.status
        if status and result.consumed:
            self.hooks.update_status(status)
        self.refresh()
        if self.session.quit_requested:
            self.hooks.request_exit()
        return result

    def resize(self, viewport_height: int) -> None:
        self.viewport_height = viewport_height
        self.refresh()

    def refresh(self) -> None:
        if self.viewport_height > 0:
            self.session.follow_cursor(self.viewport_height)
        self.hooks.update_view(self.session.view())

    def _subscribe_events(self) -> None:
        for event in _EVENTS:
            self.session.bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self.hooks.log(f"event -> {name} {payload!r}")
        self.hooks.handle_event(name, payload)


__all__ = ["TextualEditorAdapter", "TextualUIHooks", "normalize_key"]
