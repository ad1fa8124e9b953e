"""Tests for Rich renderers."""

from fieldrules.output.renderers import render_result
from fieldrules.services.result import ServiceError, ServiceResult


class TestErrorRendering:
    def test_failure_table(self) -> None:
        failures = {"Address.City": ["Value must be a number or a letter from A to Z (case does not matter)."]}
        result = ServiceResult(
            ok=False,
            op="validate",
            error=ServiceError(code="VALIDATION_FAILED", message="1 field failed validation", detail={"failures": failures}),
        )
        output = render_result(result)
        assert "ERROR" in output
        assert "1 field failed validation" in output
        assert "Address.City" in output
        assert "Field" in output

    def test_detail_only_when_verbose(self) -> None:
        result = ServiceResult(
            ok=False,
            op="check_rule",
            error=ServiceError(code="INVALID_RULE", message="Unknown rule 'x'", detail={"rule": "x"}),
        )
        assert "detail" not in render_result(result)
        assert "rule: x" in render_result(result, verbose=True)


class TestOpRenderers:
    def test_rules_table(self) -> None:
        result = ServiceResult(
            ok=True,
            op="list_rules",
            data={
                "count": 1,
                "items": [{"field": "Email", "constraints": [{"rule": "email", "message": "Bad e-mail"}]}],
            },
        )
        output = render_result(result)
        assert "Email" in output
        assert "Bad e-mail" in output

    def test_rules_empty(self) -> None:
        result = ServiceResult(ok=True, op="list_rules", data={"count": 0, "items": []})
        assert "No rules registered." in render_result(result)

    def test_catalog(self) -> None:
        result = ServiceResult(
            ok=True,
            op="list_catalog",
            data={"count": 2, "items": [{"name": "date", "parameterised": True}, {"name": "email", "parameterised": False}]},
        )
        output = render_result(result)
        assert "date (parameterised)" in output
        assert "email" in output

    def test_check(self) -> None:
        result = ServiceResult(
            ok=True, op="check_rule", data={"rule": "zip_code", "value": "33145", "valid": True}
        )
        output = render_result(result)
        assert "rule: zip_code" in output
        assert "value: '33145'" in output

    def test_generic_fallback(self) -> None:
        result = ServiceResult(ok=True, op="other", data={"items": [1, 2]})
        assert "items: [1,2]" in render_result(result)
