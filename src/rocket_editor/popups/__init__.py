"""Modal popup dialogs and the stack that owns them."""

from .kinds import (
    HELP_TEXT,
    PopupButton,
    PopupKind,
    buttons_for,
    content_for,
    title_for,
)
from .popup import Popup, PopupView
from .stack import PopupStack

__all__ = [
    "HELP_TEXT",
    "Popup",
    "PopupButton",
    "PopupKind",
    "PopupStack",
    "PopupView",
    "buttons_for",
    "content_for",
    "title_for",
]
