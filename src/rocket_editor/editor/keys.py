"""Logical key events delivered by the host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

LEFT = "LEFT"
RIGHT = "RIGHT"
UP = "UP"
DOWN = "DOWN"
ENTER = "ENTER"
BACKSPACE = "BACKSPACE"
DELETE = "DELETE"
TAB = "TAB"
ESC = "ESC"

ARROWS = {LEFT: (-1, 0), RIGHT: (1, 0), UP: (0, -1), DOWN: (0, 1)}

# Modifiers that turn a character into a command rather than text.
COMMAND_MODIFIERS = frozenset({"ctrl", "alt"})


@dataclass(slots=True)
class KeyInput:
    """Normalized key event: a key code, modifiers, and optional text."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @classmethod
    def char(cls, value: str, *modifiers: str) -> "KeyInput":
        return cls(key=value, modifiers=tuple(modifiers), text=value)

    @property
    def is_command(self) -> bool:
        return any(mod.lower() in COMMAND_MODIFIERS for mod in self.modifiers)

    @property
    def typed_text(self) -> Optional[str]:
        """Text this key inserts, or ``None`` for non-text keys."""

        if self.is_command or not self.text:
            return None
        if not self.text.isprintable():
            return None
        return self.text


__all__ = [
    "KeyInput",
    "LEFT",
    "RIGHT",
    "UP",
    "DOWN",
    "ENTER",
    "BACKSPACE",
    "DELETE",
    "TAB",
    "ESC",
    "ARROWS",
]
