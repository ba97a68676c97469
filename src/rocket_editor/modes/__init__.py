"""Input modes and the keymap plumbing they share."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .edit_mode import EditMode
from .popup_mode import PopupMode

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "EditMode",
    "PopupMode",
]
