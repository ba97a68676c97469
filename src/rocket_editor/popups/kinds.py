"""Closed set of popup kinds and their fixed presentation."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class PopupButton(str, Enum):
    OK = "okay"
    CANCEL = "cancel"
    ACKNOWLEDGE = "got it"

    @property
    def label(self) -> str:
        return self.value


class PopupKind(str, Enum):
    HELP = "help"
    DIALOGUE = "dialogue"
    SAVE_FILE = "save file"
    LOAD_FILE = "load file"
    IO_ERROR = "io error"

    @property
    def accepts_path(self) -> bool:
        return self in (PopupKind.SAVE_FILE, PopupKind.LOAD_FILE)


_BUTTONS: Mapping[PopupKind, tuple[PopupButton, ...]] = MappingProxyType(
    {
        PopupKind.HELP: (PopupButton.ACKNOWLEDGE,),
        PopupKind.DIALOGUE: (PopupButton.OK,),
        PopupKind.SAVE_FILE: (PopupButton.CANCEL, PopupButton.OK),
        PopupKind.LOAD_FILE: (PopupButton.CANCEL, PopupButton.OK),
        PopupKind.IO_ERROR: (PopupButton.OK,),
    }
)

HELP_TEXT = "\n".join(
    (
        "ctrl+s  save",
        "ctrl+t  save as",
        "ctrl+o  open file into this buffer",
        "alt+i   next buffer",
        "alt+u   previous buffer",
        "ctrl+h  this help (also F1)",
        "ctrl+q  quit",
        "esc     close popup",
    )
)


def buttons_for(kind: PopupKind) -> tuple[PopupButton, ...]:
    return _BUTTONS[kind]


def title_for(kind: PopupKind) -> str:
    return kind.value


def content_for(kind: PopupKind, payload: str) -> str:
    if kind is PopupKind.HELP:
        return payload or HELP_TEXT
    return payload


__all__ = [
    "PopupButton",
    "PopupKind",
    "HELP_TEXT",
    "buttons_for",
    "title_for",
    "content_for",
]
