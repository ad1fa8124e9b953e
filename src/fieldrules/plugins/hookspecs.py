"""Pluggy hook specifications for fieldrules.

Both hooks run once at load time and extend the rule catalog used by
``fieldrules.toml`` and ``fieldrules check``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from fieldrules.domain.rules import Rule, RuleFactory

hookspec = pluggy.HookspecMarker("fieldrules")
hookimpl = pluggy.HookimplMarker("fieldrules")


class FieldRulesHookSpec:
    """Hook specifications for the fieldrules plugin system."""

    @hookspec
    def register_rules(self) -> dict[str, Rule] | None:
        """Return name -> rule mappings to add to the catalog."""

    @hookspec
    def register_rule_factories(self) -> dict[str, RuleFactory] | None:
        """Return name -> factory mappings for parameterised rules."""
