"""Record field walking for structural validation.

A record is anything with declared, named fields:

- dataclass instances
- pydantic ``BaseModel`` instances
- ``NamedTuple`` instances
- any object implementing :class:`SupportsValidationFields`

Each field value falls into one of three shapes. Only string leaves are
validated and only nested records are descended into. Everything else is
skipped and can never be marked invalid.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator
from enum import StrEnum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel


class RecordTypeError(TypeError):
    """Structural validation was handed something that is not a record."""


class FieldShape(StrEnum):
    """How the structural validator treats a field value."""

    SCALAR_STRING = "scalar_string"
    NESTED_RECORD = "nested_record"
    OTHER = "other"


@runtime_checkable
class SupportsValidationFields(Protocol):
    """Explicit record interface for types that are not dataclasses or models."""

    def validation_fields(self) -> Iterable[tuple[str, object]]:
        """Return ``(declared_name, value)`` pairs in declaration order."""
        ...


def is_record(value: object) -> bool:
    """Whether *value* is a record instance the walker can descend into."""
    if isinstance(value, type):
        return False
    if dataclasses.is_dataclass(value) or isinstance(value, BaseModel):
        return True
    if isinstance(value, tuple) and hasattr(value, "_fields"):
        return True
    return isinstance(value, SupportsValidationFields)


def classify(value: object) -> FieldShape:
    """Return the :class:`FieldShape` of a field value."""
    if isinstance(value, str):
        return FieldShape.SCALAR_STRING
    if is_record(value):
        return FieldShape.NESTED_RECORD
    return FieldShape.OTHER


def iter_fields(record: object) -> Iterator[tuple[str, object]]:
    """Yield ``(declared_name, value)`` for each field of *record* in order.

    Raises:
        RecordTypeError: *record* is ``None`` or not a record.
    """
    if record is None:
        msg = "Cannot validate fields of None; expected a record instance"
        raise RecordTypeError(msg)
    if not is_record(record):
        msg = f"Cannot validate fields of {type(record).__name__}; expected a record instance"
        raise RecordTypeError(msg)

    if isinstance(record, SupportsValidationFields):
        yield from record.validation_fields()
    elif isinstance(record, BaseModel):
        for name in type(record).model_fields:
            yield name, getattr(record, name)
    elif dataclasses.is_dataclass(record):
        for field in dataclasses.fields(record):
            yield field.name, getattr(record, field.name)
    else:
        yield from zip(record._fields, record, strict=True)  # type: ignore[attr-defined]
