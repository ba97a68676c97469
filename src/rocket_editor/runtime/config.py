"""Environment-driven editor settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

ENV_PREFIX = "ROCKET_"


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int) -> int:
    raw = env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    raw = env(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class EditorSettings:
    """User-facing knobs shared by the editor core and the host."""

    tab_width: int = 4
    saved_flash_seconds: float = 1.0
    scratch_label: str = "unsaved"
    dirty_marker: str = "*"

    def __post_init__(self) -> None:
        if self.tab_width < 1:
            raise ValueError("tab_width must be positive")

    @classmethod
    def from_env(cls) -> "EditorSettings":
        defaults = cls()
        tab_width = env_int("TAB_WIDTH", defaults.tab_width)
        return cls(
            tab_width=tab_width if tab_width > 0 else defaults.tab_width,
            saved_flash_seconds=env_float(
                "SAVED_FLASH_SECONDS", defaults.saved_flash_seconds
            ),
            scratch_label=env("SCRATCH_LABEL") or defaults.scratch_label,
            dirty_marker=env("DIRTY_MARKER") or defaults.dirty_marker,
        )

    def with_overrides(self, **changes: object) -> "EditorSettings":
        cleaned = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **cleaned)


__all__ = ["EditorSettings", "ENV_PREFIX", "env", "env_flag", "env_int", "env_float"]
