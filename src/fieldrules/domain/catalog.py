"""Named rule catalog.

Maps the names used in ``fieldrules.toml`` (and by plugins) to rule
callables. Plain rules are used as-is; factories build a rule from
keyword parameters (``values``, ``format``, ``pattern``).

Built-in names are reserved and cannot be overridden by plugins.
"""

from __future__ import annotations

import logging
from typing import Any

from fieldrules.domain.rules import (
    Rule,
    RuleFactory,
    alpha,
    date,
    email,
    equals_any,
    matches,
    not_empty,
    numeric,
    object_id,
    sha1,
    url,
    zip_code,
)

logger = logging.getLogger(__name__)


class RuleConfigError(ValueError):
    """A rule name or its parameters could not be resolved."""


BUILTIN_RULES: dict[str, Rule] = {
    "not_empty": not_empty,
    "url": url,
    "object_id": object_id,
    "alpha": alpha,
    "email": email,
    "numeric": numeric,
    "zip_code": zip_code,
    "sha1": sha1,
}

BUILTIN_FACTORIES: dict[str, RuleFactory] = {
    "equals_any": lambda *, values: equals_any(values),
    "date": lambda *, format: date(format),  # noqa: A002
    "matches": lambda *, pattern: matches(pattern),
}

_custom_rules: dict[str, Rule] = {}
_custom_factories: dict[str, RuleFactory] = {}


def _check_registration(name: str, target: object, kind: str) -> str:
    normalized = name.strip()
    if not normalized:
        msg = f"{kind} name must not be empty"
        raise ValueError(msg)
    if not callable(target):
        msg = f"{kind} {normalized!r} must be callable"
        raise TypeError(msg)
    if normalized in BUILTIN_RULES or normalized in BUILTIN_FACTORIES:
        msg = f"{kind} {normalized!r} conflicts with a built-in rule"
        raise ValueError(msg)
    return normalized


def register_rule(name: str, rule: Rule) -> None:
    """Register a custom plain rule under *name*."""
    normalized = _check_registration(name, rule, "Rule")
    _custom_rules[normalized] = rule
    logger.debug("Registered rule: %s", normalized)


def register_rule_factory(name: str, factory: RuleFactory) -> None:
    """Register a custom rule factory under *name*."""
    normalized = _check_registration(name, factory, "Rule factory")
    _custom_factories[normalized] = factory
    logger.debug("Registered rule factory: %s", normalized)


def clear_custom_rules() -> None:
    """Drop every plugin-registered rule and factory."""
    _custom_rules.clear()
    _custom_factories.clear()


def resolve_rule(name: str, **params: Any) -> Rule:
    """Return the rule registered as *name*, built with *params* if needed.

    Raises:
        RuleConfigError: unknown name, parameters passed to a plain rule,
            or parameters a factory does not accept.
    """
    rules = {**BUILTIN_RULES, **_custom_rules}
    factories = {**BUILTIN_FACTORIES, **_custom_factories}

    if name in rules:
        if params:
            msg = f"Rule {name!r} takes no parameters, got {sorted(params)}"
            raise RuleConfigError(msg)
        return rules[name]

    if name in factories:
        try:
            return factories[name](**params)
        except TypeError as exc:
            msg = f"Invalid parameters for rule {name!r}: {exc}"
            raise RuleConfigError(msg) from exc
        except Exception as exc:
            msg = f"Could not build rule {name!r}: {exc}"
            raise RuleConfigError(msg) from exc

    msg = f"Unknown rule {name!r}. Available: {', '.join(catalog_names())}"
    raise RuleConfigError(msg)


def catalog_names() -> list[str]:
    """Sorted names of every rule and factory in the catalog."""
    return sorted({*BUILTIN_RULES, *_custom_rules, *BUILTIN_FACTORIES, *_custom_factories})


def factory_names() -> list[str]:
    """Sorted names of the parameterised entries in the catalog."""
    return sorted({*BUILTIN_FACTORIES, *_custom_factories})
