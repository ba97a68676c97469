"""Split lines on spaces and tag each word with a style."""

from __future__ import annotations

from typing import Iterable, List, NamedTuple, Optional, Tuple

from .profiles import StyleTag, profile_for


class StyledToken(NamedTuple):
    text: str
    tag: StyleTag


StyledLine = Tuple[StyledToken, ...]

_SPACE = StyledToken(" ", StyleTag.PLAIN)


def style_line(text: str, extension: Optional[str] = None) -> StyledLine:
    """Tokenize ``text`` for rendering.

    Words are the pieces between single spaces; every separating space is
    emitted as its own plain token, so joining the token texts reproduces
    ``text`` exactly. Tabs and other whitespace stay inside their word.
    """

    profile = profile_for(extension)
    tokens: List[StyledToken] = []
    for index, word in enumerate(text.split(" ")):
        if index:
            tokens.append(_SPACE)
        if word:
            tokens.append(StyledToken(word, profile.classify(word)))
    return tuple(tokens)


def style_lines(lines: Iterable[str], extension: Optional[str] = None) -> List[StyledLine]:
    return [style_line(line, extension) for line in lines]


__all__ = ["StyledToken", "StyledLine", "style_line", "style_lines"]
