"""Rule registry and the flat and structural validators.

A :class:`Rules` registry maps field names to an ordered list of
:class:`Constraint` objects. Validators run every constraint for a field
in registration order and report every failure, never just the first.

INVARIANT: A field with no registered constraints is always valid.
INVARIANT: Validation failures are returned as data. Only API misuse
(registering on a frozen registry, handing a non-record to
``validate_struct``) raises.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from fieldrules.domain.records import FieldShape, RecordTypeError, classify, iter_fields
from fieldrules.domain.rules import Rule, not_empty

logger = logging.getLogger(__name__)


class FrozenRulesError(RuntimeError):
    """A constraint was added to a registry after :meth:`Rules.freeze`."""


@dataclass(frozen=True)
class Constraint:
    """A rule bound to an optional override message."""

    rule: Rule
    message: str | None = None

    def check(self, value: str) -> str | None:
        """Return the failure message for *value*, or ``None`` if it passes.

        The override message, when set, replaces the rule's own reason.
        """
        reason = self.rule(value)
        if reason is None:
            return None
        return self.message if self.message is not None else reason


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a map or a record.

    Unpacks as ``valid, failures = rules.validate(...)``.
    """

    valid: bool
    failures: dict[str, list[str]] = field(default_factory=dict)

    def __iter__(self) -> Iterator[object]:
        yield self.valid
        yield self.failures


class Rules:
    """Ordered mapping from field name to constraints.

    Build the registry once, call :meth:`freeze`, then share it freely
    between validations. There is no internal locking; mutating a registry
    while another thread validates against it is unsupported.

    Usage::

        rules = Rules()
        rules.add_required("Email", email, "Please enter a valid e-mail")
        rules.add("Address.ZipCode", zip_code)
        valid, failures = rules.validate_struct(signup)
    """

    def __init__(self) -> None:
        self._map: dict[str, list[Constraint]] = {}
        self._frozen = False

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add(self, name: str, rule: Rule, message: str = "") -> None:
        """Append *rule* to the constraints of *name*.

        An empty *message* keeps the rule's own failure reason. Adding the
        same rule twice yields two independent constraints.
        """
        if self._frozen:
            msg = f"Cannot add a rule for {name!r}: the registry is frozen"
            raise FrozenRulesError(msg)
        constraint = Constraint(rule=rule, message=message or None)
        self._map.setdefault(name, []).append(constraint)

    def add_required(self, name: str, rule: Rule, message: str = "") -> None:
        """Append a :func:`not_empty` constraint, then *rule*.

        The emptiness check always runs first, so its message precedes
        the rule's on empty input.
        """
        self.add(name, not_empty)
        self.add(name, rule, message)

    def freeze(self) -> Rules:
        """Reject further registration. Returns ``self`` for chaining."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        """Whether :meth:`freeze` has been called."""
        return self._frozen

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def constraints(self, name: str) -> tuple[Constraint, ...]:
        """Constraints registered for *name* in registration order."""
        return tuple(self._map.get(name, ()))

    def fields(self) -> list[str]:
        """Registered field names in first-registration order."""
        return list(self._map)

    def __contains__(self, name: object) -> bool:
        return name in self._map

    def __len__(self) -> int:
        return len(self._map)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_key_value(self, name: str, value: str) -> tuple[bool, list[str]]:
        """Check *value* against every constraint registered for *name*."""
        messages: list[str] = []
        for constraint in self._map.get(name, ()):
            failure = constraint.check(value)
            if failure is not None:
                messages.append(failure)
        return not messages, messages

    def validate(self, params: Mapping[str, str]) -> ValidationResult:
        """Validate every key present in *params*.

        Registered fields missing from *params* are not checked; only the
        values given are validated.
        """
        failures: dict[str, list[str]] = {}
        for key, value in params.items():
            passed, messages = self.validate_key_value(key, value)
            if not passed:
                failures[key] = messages
        logger.debug("Validated %d fields, %d failed", len(params), len(failures))
        return ValidationResult(valid=not failures, failures=failures)

    def validate_struct(self, record: object) -> ValidationResult:
        """Validate the string fields of *record*, descending into sub-records.

        Top-level keys are the declared field names; nested keys are dotted
        paths such as ``Address.ZipCode``.

        Raises:
            RecordTypeError: *record* is ``None`` or not a record.
        """
        failures = self._validate_with_prefix("", record, ())
        logger.debug("Validated %s, %d fields failed", type(record).__name__, len(failures))
        return ValidationResult(valid=not failures, failures=failures)

    def _validate_with_prefix(
        self,
        prefix: str,
        record: object,
        ancestors: tuple[int, ...],
    ) -> dict[str, list[str]]:
        if id(record) in ancestors:
            msg = f"Record cycle at {prefix.rstrip('.')!r}; records must form a tree"
            raise RecordTypeError(msg)
        path = (*ancestors, id(record))

        failures: dict[str, list[str]] = {}
        for name, value in iter_fields(record):
            key = prefix + name
            shape = classify(value)
            if shape is FieldShape.SCALAR_STRING:
                passed, messages = self.validate_key_value(key, value)  # type: ignore[arg-type]
                if not passed:
                    failures[key] = messages
            elif shape is FieldShape.NESTED_RECORD:
                failures.update(self._validate_with_prefix(key + ".", value, path))
        return failures


def new() -> Rules:
    """Return an empty rule registry."""
    return Rules()
