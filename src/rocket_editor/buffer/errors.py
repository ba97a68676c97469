"""Exceptions raised by buffer operations."""

from __future__ import annotations

from typing import Literal, Optional

from .state import Cursor

IOErrorKind = Literal["read", "write", "decode", "no_path"]


class BufferIOError(RuntimeError):
    """Raised when a buffer cannot be read from or written to disk."""

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        kind: IOErrorKind = "read",
    ) -> None:
        super().__init__(message)
        self.path = path
        self.kind = kind


class NoPathError(BufferIOError):
    """Raised when saving a buffer that has never been given a path."""

    def __init__(self, message: str = "buffer has no path") -> None:
        super().__init__(message, path=None, kind="no_path")


class BufferValidationError(RuntimeError):
    """Raised when a cursor falls outside the buffer's content."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


__all__ = ["BufferIOError", "NoPathError", "BufferValidationError", "IOErrorKind"]
