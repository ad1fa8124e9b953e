"""ValidationService — CLI-facing operations over a rule registry.

Every method returns a :class:`ServiceResult`. Validation failures are
``ok=False`` results, never exceptions.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from fieldrules.domain.catalog import RuleConfigError, catalog_names, factory_names, resolve_rule
from fieldrules.domain.registry import Rules
from fieldrules.domain.rules import describe_rule
from fieldrules.services.result import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)


class ValidationService:
    """Validate input and describe rules for one registry."""

    def __init__(self, rules: Rules) -> None:
        self._rules = rules

    def validate(self, params: Mapping[str, str]) -> ServiceResult:
        """Validate a flat key/value map.

        Keys with no registered rules pass and are reported as warnings.
        A rule that raises is reported as ``INVALID_RULE``.
        """
        warnings = [
            f"No rules registered for {key!r}; value not checked"
            for key in params
            if key not in self._rules
        ]
        try:
            valid, failures = self._rules.validate(params)
        except Exception as exc:
            logger.warning("Rule raised during validation: %r", exc)
            return ServiceResult.failure(
                "validate",
                ErrorCode.INVALID_RULE,
                f"A rule raised {type(exc).__name__}: {exc}",
                warnings=warnings,
            )

        data = {"valid": valid, "checked": len(params), "failures": failures}
        if valid:
            return ServiceResult.success("validate", data, warnings=warnings)

        logger.debug("Validation failed for fields: %s", ", ".join(failures))
        count = len(failures)
        noun = "field" if count == 1 else "fields"
        return ServiceResult.failure(
            "validate",
            ErrorCode.VALIDATION_FAILED,
            f"{count} {noun} failed validation",
            data=data,
            warnings=warnings,
            failures=failures,
        )

    def describe_rules(self) -> ServiceResult:
        """List every registered constraint, grouped by field."""
        items = [
            {
                "field": name,
                "constraints": [
                    {"rule": describe_rule(c.rule), "message": c.message or ""}
                    for c in self._rules.constraints(name)
                ],
            }
            for name in self._rules.fields()
        ]
        return ServiceResult.success("list_rules", {"count": len(items), "items": items})

    @staticmethod
    def catalog() -> ServiceResult:
        """List the rule names available to ``fieldrules.toml`` and ``check``."""
        factories = set(factory_names())
        items = [{"name": n, "parameterised": n in factories} for n in catalog_names()]
        return ServiceResult.success("list_catalog", {"count": len(items), "items": items})

    @staticmethod
    def check_rule(name: str, value: str, **params: Any) -> ServiceResult:
        """Evaluate a single catalog rule against *value*."""
        try:
            rule = resolve_rule(name, **params)
        except RuleConfigError as exc:
            return ServiceResult.failure("check_rule", ErrorCode.INVALID_RULE, str(exc), rule=name)

        try:
            reason = rule(value)
        except Exception as exc:
            logger.warning("Rule %s raised on %r: %r", name, value, exc)
            msg = f"Rule {name!r} raised {type(exc).__name__}: {exc}"
            return ServiceResult.failure("check_rule", ErrorCode.INVALID_RULE, msg, rule=name)

        data = {"rule": describe_rule(rule), "value": value, "valid": reason is None}
        if reason is None:
            return ServiceResult.success("check_rule", data)
        return ServiceResult.failure(
            "check_rule", ErrorCode.RULE_FAILED, reason, data=data, rule=data["rule"]
        )
