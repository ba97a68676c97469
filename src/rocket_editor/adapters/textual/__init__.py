"""Textual host adapter; the app itself lives in ``.app``."""

from .controller import TextualEditorAdapter, TextualUIHooks, normalize_key

__all__ = ["TextualEditorAdapter", "TextualUIHooks", "normalize_key"]
