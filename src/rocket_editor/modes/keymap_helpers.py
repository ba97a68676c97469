"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from typing import Mapping, MutableMapping, Optional, cast

from rocket_editor.keymaps import KeymapResolver
from rocket_editor.keymaps.models import KeyStroke
from rocket_editor.runtime import telemetry

from .base_mode import KeyInput, ModeContext, ModeResult


def key_to_token(key: KeyInput) -> str:
    return KeyStroke(key.key, key.modifiers).token


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def keymap_flag_context(context: ModeContext) -> Mapping[str, bool]:
    flags = context.extras.setdefault("keymap_flags", {})
    return cast(Mapping[str, bool], flags)


def update_flag(context: ModeContext, key: str, value: bool) -> None:
    flags = cast(
        MutableMapping[str, bool], context.extras.setdefault("keymap_flags", {})
    )
    flags[key] = value


def run_binding(
    context: ModeContext, mode_name: str, key: KeyInput
) -> Optional[ModeResult]:
    """Execute the binding for ``key`` in ``mode_name``, if one matches."""

    resolver = require_keymap_resolver(context)
    result = resolver.resolve(
        mode_name, key_to_token(key), context=keymap_flag_context(context)
    )
    if result.status != "match" or result.match is None:
        return None

    match = result.match
    with telemetry.span(
        "keymaps::execute",
        component="keymaps",
        metadata={"binding_id": match.binding.id, "action": match.action.id},
    ):
        outcome = match.action(context, match)

    if isinstance(outcome, ModeResult):
        return outcome
    return ModeResult(consumed=True, message=match.action.id)


__all__ = [
    "key_to_token",
    "require_keymap_resolver",
    "keymap_flag_context",
    "update_flag",
    "run_binding",
]
