"""Built-in command table for the edit and popup modes."""

from __future__ import annotations

from typing import Iterable, Sequence

from .models import ActionRef, Binding, KeyStroke, WhenClause
from .registry import KeymapRegistry

MODES = ("edit", "popup")
_BOTH = MODES
_EDIT_ONLY = ("edit",)

# (binding suffix, stroke, action id, description, modes)
_COMMANDS: tuple[tuple[str, str, str, str, tuple[str, ...]], ...] = (
    ("quit", "ctrl+q", "session.quit", "Quit", _BOTH),
    ("save", "ctrl+s", "buffer.save", "Save the active buffer", _EDIT_ONLY),
    ("save_as", "ctrl+t", "popup.save_as", "Save as...", _EDIT_ONLY),
    ("load", "ctrl+o", "popup.load", "Load a file", _EDIT_ONLY),
    ("help", "ctrl+h", "popup.help", "Show key bindings", _BOTH),
    # Terminals send ctrl+h as backspace, so help also lives on F1.
    ("help_f1", "F1", "popup.help", "Show key bindings", _BOTH),
    ("next_buffer", "alt+i", "buffer.next", "Next buffer", _BOTH),
    ("previous_buffer", "alt+u", "buffer.previous", "Previous buffer", _BOTH),
)


def default_actions() -> tuple[ActionRef, ...]:
    # Imported here: actions depend on modes, and modes import this package.
    from rocket_editor.actions import core

    return (
        ActionRef(id="session.quit", handler=core.quit_editor, description="Quit"),
        ActionRef(id="buffer.save", handler=core.save_buffer, description="Save"),
        ActionRef(id="buffer.next", handler=core.next_buffer, description="Next buffer"),
        ActionRef(
            id="buffer.previous",
            handler=core.previous_buffer,
            description="Previous buffer",
        ),
        ActionRef(id="popup.save_as", handler=core.open_save_as, description="Save as"),
        ActionRef(id="popup.load", handler=core.open_load_file, description="Load file"),
        ActionRef(id="popup.help", handler=core.open_help, description="Help"),
        ActionRef(
            id="popup.dismiss", handler=core.dismiss_popup, description="Close popup"
        ),
    )


def default_bindings() -> tuple[Binding, ...]:
    bindings = [
        Binding(
            id=f"{mode}.{suffix}",
            mode=mode,
            stroke=KeyStroke.parse(stroke),
            action_id=action_id,
            description=description,
        )
        for suffix, stroke, action_id, description, modes in _COMMANDS
        for mode in modes
    ]
    bindings.append(
        Binding(
            id="popup.dismiss",
            mode="popup",
            stroke=KeyStroke("ESC"),
            action_id="popup.dismiss",
            description="Close the top popup",
            when=(WhenClause("popup_open"),),
        )
    )
    return tuple(bindings)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the built-in actions and bindings.

    ``extra_bindings`` are registered last and replace defaults that share
    their key in the same mode, which is how hosts remap commands.
    """

    excluded = set(exclude_bindings or ())
    for action in default_actions():
        registry.register_action(action, replace=replace)

    for binding in default_bindings():
        if binding.id in excluded:
            continue
        registry.register_binding(binding, replace=replace)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=True)


__all__ = ["load_default_keymaps", "default_actions", "default_bindings", "MODES"]
