"""Multi-buffer editor: active-buffer dispatch and render cache."""

from .editor import Editor
from .keys import KeyInput
from .view import EditorView

__all__ = ["Editor", "EditorView", "KeyInput"]
