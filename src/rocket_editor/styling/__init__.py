"""Per-extension line tokenizer producing styled tokens for rendering."""

from .profiles import PROFILES, NO_STYLE, StyleProfile, StyleTag, profile_for
from .tokenizer import StyledLine, StyledToken, style_line, style_lines

__all__ = [
    "PROFILES",
    "NO_STYLE",
    "StyleProfile",
    "StyleTag",
    "StyledLine",
    "StyledToken",
    "profile_for",
    "style_line",
    "style_lines",
]
