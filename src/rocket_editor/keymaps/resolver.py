"""Resolve key tokens to bindings for the active mode."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Mapping, Optional

from rocket_editor.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "miss"]
    match: Optional[ResolutionMatch] = None


class KeymapResolver:
    """Looks up key tokens in per-mode tables rebuilt on registry changes."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cache: Dict[str, tuple[int, Dict[str, list[Binding]]]] = {}

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    def resolve(
        self,
        mode: str,
        token: str,
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        ctx = context or {}
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            metadata={"mode": mode, "token": token},
        ) as handle:
            candidates = [
                binding
                for binding in self._table(mode).get(token, [])
                if binding.allows(ctx)
            ]
            if not candidates:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss")

            # Most specific first, then explicit priority, then id for stability.
            candidates.sort(key=lambda b: (-len(b.when), -b.priority, b.id))
            binding = candidates[0]
            handle.add_metadata("status", "match")
            handle.add_metadata("binding_id", binding.id)
            action = self._registry.get_action(binding.action_id)
            return ResolutionResult(
                status="match", match=ResolutionMatch(binding=binding, action=action)
            )

    def _table(self, mode: str) -> Dict[str, list[Binding]]:
        revision = self._registry.revision()
        cached = self._cache.get(mode)
        if cached and cached[0] == revision:
            return cached[1]

        table: Dict[str, list[Binding]] = {}
        for binding in self._registry.iter_bindings(mode):
            table.setdefault(binding.key_signature, []).append(binding)
        self._cache[mode] = (revision, table)
        return table


__all__ = ["KeymapResolver", "ResolutionResult", "ResolutionMatch"]
