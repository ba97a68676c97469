"""Token classification profiles keyed by file extension."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional


class StyleTag(str, Enum):
    PLAIN = "plain"
    KEYWORD = "keyword"
    OPERATOR = "operator"
    BRACKET = "bracket"


@dataclass(frozen=True, slots=True)
class StyleProfile:
    """Exact-match token classes for one language."""

    name: str
    keywords: FrozenSet[str] = frozenset()
    operators: FrozenSet[str] = frozenset()
    brackets: FrozenSet[str] = frozenset()

    def classify(self, token: str) -> StyleTag:
        if token in self.keywords:
            return StyleTag.KEYWORD
        if token in self.operators:
            return StyleTag.OPERATOR
        if token in self.brackets:
            return StyleTag.BRACKET
        return StyleTag.PLAIN


NO_STYLE = StyleProfile(name="plain")

_BRACKETS = frozenset({"{", "}", "(", ")", "[", "]"})

RUST = StyleProfile(
    name="rust",
    keywords=frozenset({"fn", "let", "mut", "pub", "impl", "struct", "enum", "match"}),
    operators=frozenset({"&", "->", "=>"}),
    brackets=_BRACKETS,
)

PYTHON = StyleProfile(
    name="python",
    keywords=frozenset({"def", "class", "return", "import", "from", "if", "else"}),
    operators=frozenset({"=", "->", "=="}),
    brackets=_BRACKETS,
)

PROFILES: Mapping[str, StyleProfile] = MappingProxyType({"rs": RUST, "py": PYTHON})


def profile_for(extension: Optional[str]) -> StyleProfile:
    if not extension:
        return NO_STYLE
    key = extension.strip().lstrip(".").lower()
    return PROFILES.get(key, NO_STYLE)


__all__ = ["StyleTag", "StyleProfile", "NO_STYLE", "PROFILES", "profile_for"]
