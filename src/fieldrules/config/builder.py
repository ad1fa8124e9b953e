"""Build a frozen :class:`Rules` registry from ``[fields.*]`` declarations."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from fieldrules.config.discovery import load_config
from fieldrules.config.models import FieldConfig
from fieldrules.domain.catalog import RuleConfigError, resolve_rule
from fieldrules.domain.registry import Rules
from fieldrules.domain.rules import not_empty

logger = logging.getLogger(__name__)


def build_rules(fields: Mapping[str, FieldConfig]) -> Rules:
    """Register every declared field, then freeze the registry.

    ``required = true`` prepends a single ``not_empty`` constraint before
    the field's listed rules, the same composition as
    :meth:`Rules.add_required`.

    Raises:
        RuleConfigError: a field references an unknown rule or passes
            parameters the rule does not accept.
    """
    rules = Rules()
    for name, field_config in fields.items():
        if not name.strip():
            msg = "Field names in [fields] must not be empty"
            raise RuleConfigError(msg)
        if field_config.required:
            rules.add(name, not_empty)
        for entry in field_config.rules:
            try:
                rule = resolve_rule(entry.rule, **entry.params())
            except RuleConfigError as exc:
                msg = f"Field {name!r}: {exc}"
                raise RuleConfigError(msg) from exc
            rules.add(name, rule, entry.message)
        logger.debug("Registered %d constraints for %s", len(rules.constraints(name)), name)
    return rules.freeze()


def load_rules(path: Path | None = None, cwd: Path | None = None) -> Rules:
    """Load ``fieldrules.toml`` (explicit *path* or walk-up from *cwd*).

    Returns an empty frozen registry when no file is found.
    """
    config = load_config(path, cwd)
    return build_rules(config.fields)
