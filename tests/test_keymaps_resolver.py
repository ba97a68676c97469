from __future__ import annotations

from rocket_editor.keymaps import (
    ActionRef,
    Binding,
    KeymapRegistry,
    KeymapResolver,
    WhenClause,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    mode: str = "edit",
    stroke: str = "ctrl+g",
    action_id: str = "core.test",
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        stroke=stroke,
        action_id=action_id,
        when=when,
        priority=priority,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    action_ids = {binding.action_id for binding in bindings}
    for action_id in action_ids:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_token() -> None:
    binding = make_binding("edit.g")
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve("edit", "ctrl+g")

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id
    assert result.match.action.id == "core.test"


def test_resolver_misses_other_modes_and_tokens() -> None:
    resolver = KeymapResolver(build_registry([make_binding("edit.g")]))

    assert resolver.resolve("popup", "ctrl+g").status == "miss"
    assert resolver.resolve("edit", "g").status == "miss"


def test_resolver_honors_when_clauses() -> None:
    gating = make_binding(
        "popup.g",
        when=(WhenClause("popup_open"),),
        action_id="core.popup",
    )
    resolver = KeymapResolver(build_registry([gating]))

    miss = resolver.resolve("edit", "ctrl+g", context={})
    assert miss.status == "miss"

    hit = resolver.resolve("edit", "ctrl+g", context={"popup_open": True})
    assert hit.status == "match"
    assert hit.match is not None
    assert hit.match.binding.id == gating.id


def test_resolver_prefers_more_specific_binding() -> None:
    general = make_binding("general")
    specific = make_binding(
        "specific", when=(WhenClause("popup_open"),), action_id="core.specific"
    )
    resolver = KeymapResolver(build_registry([general, specific]))

    assert resolver.resolve("edit", "ctrl+g").match.binding.id == "general"
    result = resolver.resolve("edit", "ctrl+g", context={"popup_open": True})
    assert result.match.binding.id == "specific"


def test_resolver_breaks_ties_by_priority() -> None:
    low = make_binding("low", when=(WhenClause("a"),))
    high = make_binding(
        "high", when=(WhenClause("b"),), action_id="core.high", priority=5
    )
    resolver = KeymapResolver(build_registry([low, high]))

    result = resolver.resolve("edit", "ctrl+g", context={"a": True, "b": True})

    assert result.match.binding.id == "high"


def test_resolver_cache_refreshes_on_revision() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)

    assert resolver.resolve("edit", "ctrl+x").status == "miss"

    registry.register_action(make_action("core.x"))
    registry.register_binding(make_binding("edit.x", stroke="ctrl+x", action_id="core.x"))

    match = resolver.resolve("edit", "ctrl+x")
    assert match.status == "match"
    assert match.match is not None
    assert match.match.binding.id == "edit.x"
