"""Grapheme-aware string helpers.

Columns everywhere in the editor are grapheme counts, so a combining accent
or a multi-codepoint emoji occupies a single column.
"""

from __future__ import annotations

from typing import Tuple

import grapheme


def grapheme_length(text: str) -> int:
    return grapheme.length(text)


def split_at(text: str, column: int) -> Tuple[str, str]:
    """Split ``text`` into the graphemes before and after ``column``."""

    if column <= 0:
        return "", text
    left = grapheme.slice(text, 0, column)
    return left, text[len(left) :]


def drop_last(text: str) -> str:
    """Return ``text`` without its final grapheme."""

    if not text:
        return text
    return grapheme.slice(text, 0, grapheme.length(text) - 1)


__all__ = ["grapheme_length", "split_at", "drop_last"]
