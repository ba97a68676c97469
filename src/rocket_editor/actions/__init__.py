"""Command actions bound to keys by the default keymap."""

from .core import (
    dismiss_popup,
    next_buffer,
    open_help,
    open_load_file,
    open_save_as,
    previous_buffer,
    quit_editor,
    save_buffer,
)

__all__ = [
    "dismiss_popup",
    "next_buffer",
    "open_help",
    "open_load_file",
    "open_save_as",
    "previous_buffer",
    "quit_editor",
    "save_buffer",
]
