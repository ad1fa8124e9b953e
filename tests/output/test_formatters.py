"""Tests for the format_result dispatcher and OutputSettings."""

import json

from fieldrules.output.formatters import OutputSettings, format_result
from fieldrules.services.result import ServiceError, ServiceResult


def _ok(op: str = "test", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _failed_validation() -> ServiceResult:
    failures = {"Email": ["This value is required", "Bad e-mail"], "Age": ["Value must be a number."]}
    return ServiceResult(
        ok=False,
        op="validate",
        data={"valid": False, "checked": 2, "failures": failures},
        error=ServiceError(
            code="VALIDATION_FAILED",
            message="2 fields failed validation",
            detail={"failures": failures},
        ),
    )


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestJson:
    def test_ok(self) -> None:
        data = json.loads(format_result(_ok("validate", valid=True), settings=OutputSettings(json_output=True)))
        assert data["ok"] is True
        assert data["op"] == "validate"
        assert data["data"]["valid"] is True

    def test_error(self) -> None:
        output = format_result(_failed_validation(), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is False
        assert data["error"]["code"] == "VALIDATION_FAILED"
        assert data["error"]["detail"]["failures"]["Age"] == ["Value must be a number."]

    def test_json_beats_quiet(self) -> None:
        output = format_result(_ok(), settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["ok"] is True


class TestQuiet:
    def test_ok(self) -> None:
        assert format_result(_ok("validate"), settings=OutputSettings(quiet=True)) == "OK: validate"

    def test_failures_one_per_line(self) -> None:
        output = format_result(_failed_validation(), settings=OutputSettings(quiet=True))
        assert output.splitlines() == [
            "Email: This value is required",
            "Email: Bad e-mail",
            "Age: Value must be a number.",
        ]

    def test_plain_error(self) -> None:
        result = ServiceResult(
            ok=False, op="check_rule", error=ServiceError(code="INVALID_RULE", message="Unknown rule")
        )
        assert format_result(result, settings=OutputSettings(quiet=True)) == (
            "ERROR: check_rule — Unknown rule"
        )


class TestHuman:
    def test_default_is_rich(self) -> None:
        output = format_result(_ok("validate", checked=3))
        assert "OK" in output
        assert "validate" in output
        assert "checked: 3" in output
