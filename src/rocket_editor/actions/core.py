"""Action implementations invoked as ``handler(context, match)``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from rocket_editor.buffer import BufferIOError, NoPathError
from rocket_editor.modes.base_mode import ModeContext, ModeResult
from rocket_editor.popups import Popup
from rocket_editor.runtime import telemetry

if TYPE_CHECKING:  # pragma: no cover - typing only
    from rocket_editor.keymaps.models import Binding


def quit_editor(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, status="quit", message="quit")


def save_buffer(context: ModeContext, match) -> ModeResult:
    del match
    editor = context.editor
    try:
        editor.save_active()
    except NoPathError:
        # Scratch buffers are saved by asking for a path instead.
        return _push(context, Popup.save_file(), status="save_prompt")
    except BufferIOError as exc:
        telemetry.record_event(
            "buffer.save_failed",
            level="warning",
            data={"path": exc.path, "kind": exc.kind, "error": str(exc)},
        )
        return _push(context, Popup.io_error(str(exc)), status="save_failed")
    context.bus.emit("buffer.saved", editor.path())
    return ModeResult(consumed=True, status="saved", message=editor.path())


def open_save_as(context: ModeContext, match) -> ModeResult:
    del match
    return _push(context, Popup.save_file(context.editor.path() or ""))


def open_load_file(context: ModeContext, match) -> ModeResult:
    del match
    return _push(context, Popup.load_file())


def open_help(context: ModeContext, match) -> ModeResult:
    del match
    registry = context.extras.get("keymap_registry")
    bindings = registry.iter_bindings("edit") if registry is not None else ()
    return _push(context, Popup.help(describe_bindings(bindings)))


def dismiss_popup(context: ModeContext, match) -> ModeResult:
    del match
    popup = context.popups.pop()
    if popup is None:
        return ModeResult(consumed=False, status="noop")
    context.bus.emit("popup.closed", popup.kind.value)
    return ModeResult(consumed=True, status="popup_closed", message=popup.kind.value)


def next_buffer(context: ModeContext, match) -> ModeResult:
    del match
    context.editor.next_buffer()
    context.bus.emit("buffer.switched", context.editor.active_index)
    return ModeResult(consumed=True, status="switched")


def previous_buffer(context: ModeContext, match) -> ModeResult:
    del match
    context.editor.previous_buffer()
    context.bus.emit("buffer.switched", context.editor.active_index)
    return ModeResult(consumed=True, status="switched")


def describe_bindings(bindings: Iterable["Binding"]) -> str:
    rows = sorted(
        (binding.stroke.token, binding.description or binding.action_id)
        for binding in bindings
    )
    if not rows:
        return ""
    width = max(len(token) for token, _ in rows)
    return "\n".join(f"{token.ljust(width)}  {text}" for token, text in rows)


def _push(context: ModeContext, popup: Popup, *, status: str = "popup_opened") -> ModeResult:
    context.popups.push(popup)
    context.bus.emit("popup.opened", popup.kind.value)
    return ModeResult(consumed=True, status=status, message=popup.title)


__all__ = [
    "quit_editor",
    "save_buffer",
    "open_save_as",
    "open_load_file",
    "open_help",
    "dismiss_popup",
    "next_buffer",
    "previous_buffer",
    "describe_bindings",
]
