"""Rule type and the built-in rule library.

A rule is a plain callable over a single string value. It returns ``None``
when the value is valid and the failure reason otherwise.

INVARIANT: Format rules accept the empty string. Only :func:`not_empty`
rejects absence; format checks never do. ``sha1``, ``equals_any`` and
``date`` are the exceptions and check the value as given.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from datetime import datetime

Rule = Callable[[str], str | None]
RuleFactory = Callable[..., Rule]

# Patterns are matched against the whole value. The optional group lets
# the empty string through.
_URL = re.compile(r"(?:[a-z]+://[a-z0-9][a-z0-9\-.]*.+)?", re.IGNORECASE)
_OBJECT_ID = re.compile(r"(?:[a-f0-9]{24})?")
_ALPHA = re.compile(r"(?:[a-z0-9]+)?", re.IGNORECASE)
_EMAIL = re.compile(r"(?:[a-z0-9][a-z0-9.\-+_]*@[a-z0-9\-.]+.[a-z]+)?", re.IGNORECASE)
_NUMERIC = re.compile(r"(?:[0-9]+)?")
_ZIP_CODE = re.compile(r"(?:[0-9]{5})?")
_SHA1 = re.compile(r"[a-f0-9]{40}")


def not_empty(value: str) -> str | None:
    """Reject the empty string."""
    if value == "":
        return "This value is required"
    return None


def url(value: str) -> str | None:
    """Require a ``scheme://host[...]`` shaped value."""
    if _URL.fullmatch(value):
        return None
    return "Value must be an URL."


def object_id(value: str) -> str | None:
    """Require a BSON ObjectId (24 lowercase hex characters)."""
    if _OBJECT_ID.fullmatch(value):
        return None
    return "Expecting an ObjectId."


def alpha(value: str) -> str | None:
    """Require ASCII letters and digits only."""
    if _ALPHA.fullmatch(value):
        return None
    return "Value must be a number or a letter from A to Z (case does not matter)."


def email(value: str) -> str | None:
    """Require a ``local@domain.tld`` shaped value."""
    if _EMAIL.fullmatch(value):
        return None
    return "Value must be an e-mail address."


def numeric(value: str) -> str | None:
    """Require ASCII digits only."""
    if _NUMERIC.fullmatch(value):
        return None
    return "Value must be a number."


def zip_code(value: str) -> str | None:
    """Require a five digit zip code."""
    if _ZIP_CODE.fullmatch(value):
        return None
    return "Value must be a zipcode (XXXXX)."


def sha1(value: str) -> str | None:
    """Require a SHA1 hex digest. The empty string is rejected."""
    if _SHA1.fullmatch(value):
        return None
    return "Value must be a SHA1 hash."


def equals_any(values: Iterable[str]) -> Rule:
    """Build a rule accepting only exact members of *values*.

    Examples:
        >>> rule = equals_any(["male", "female"])
        >>> rule("female") is None
        True
        >>> rule("unknown")
        'Did not match the following: male, female'
    """
    allowed = tuple(values)

    def check(value: str) -> str | None:
        if value in allowed:
            return None
        return f"Did not match the following: {', '.join(allowed)}"

    check.__name__ = f"equals_any({', '.join(allowed)})"
    return check


def _check_date_format(fmt: str) -> None:
    # strptime compiles the format before matching, so directive errors
    # surface even against an empty value.
    try:
        datetime.strptime("", fmt)
    except ValueError as exc:
        reason = str(exc)
        if "directive" in reason or "stray %" in reason:
            msg = f"Invalid date format {fmt!r}: {reason}"
            raise ValueError(msg) from exc


def date(fmt: str) -> Rule:
    """Build a rule requiring *value* to parse with :func:`datetime.strptime`.

    The failure reason is the parser's own error text.

    Raises:
        ValueError: *fmt* contains an unknown or dangling ``%`` directive.
    """
    _check_date_format(fmt)

    def check(value: str) -> str | None:
        try:
            datetime.strptime(value, fmt)
        except ValueError as exc:
            return str(exc)
        return None

    check.__name__ = f"date({fmt})"
    return check


def matches(pattern: str) -> Rule:
    """Build a rule requiring *pattern* to match somewhere in the value.

    Search semantics: anchor the pattern with ``^``/``$`` to match the
    whole value.
    """
    compiled = re.compile(pattern)

    def check(value: str) -> str | None:
        if compiled.search(value):
            return None
        return f"Value does not match pattern {pattern}."

    check.__name__ = f"matches({pattern})"
    return check


def describe_rule(rule: Rule) -> str:
    """Return a display name for *rule*."""
    return getattr(rule, "__name__", None) or rule.__class__.__name__
