"""Stack of popups; only the top one receives input."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, List, Optional

from rocket_editor.editor.keys import KeyInput
from rocket_editor.runtime import telemetry

from .popup import Popup

if TYPE_CHECKING:  # pragma: no cover - typing only
    from rocket_editor.editor import Editor


class PopupStack:
    def __init__(self) -> None:
        self._popups: List[Popup] = []

    def __len__(self) -> int:
        return len(self._popups)

    def __bool__(self) -> bool:
        return bool(self._popups)

    def __iter__(self) -> Iterator[Popup]:
        return iter(self._popups)

    @property
    def top(self) -> Optional[Popup]:
        return self._popups[-1] if self._popups else None

    def push(self, popup: Popup) -> Popup:
        self._popups.append(popup)
        telemetry.record_event(
            "popup.push", data={"kind": popup.kind.value, "depth": len(self)}
        )
        return popup

    def pop(self) -> Optional[Popup]:
        if not self._popups:
            return None
        popup = self._popups.pop()
        telemetry.record_event(
            "popup.pop", data={"kind": popup.kind.value, "depth": len(self)}
        )
        return popup

    def handle_key(self, key: KeyInput, editor: "Editor") -> bool:
        """Route ``key`` to the top popup; returns whether a popup closed."""

        popup = self.top
        if popup is None:
            return False
        if popup.handle_key(key, editor):
            self.pop()
            return True
        return False


__all__ = ["PopupStack"]
