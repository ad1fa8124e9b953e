"""Tests for ValidationService."""

import pytest

from fieldrules.domain.catalog import register_rule
from fieldrules.domain.registry import Rules
from fieldrules.domain.rules import email, equals_any, numeric
from fieldrules.services.validation import ValidationService


@pytest.fixture
def service() -> ValidationService:
    rules = Rules()
    rules.add_required("Email", email, "Please enter a valid e-mail")
    rules.add("Age", numeric)
    rules.add("Gender", equals_any(["male", "female"]))
    return ValidationService(rules.freeze())


class TestValidate:
    def test_valid_input(self, service: ValidationService) -> None:
        result = service.validate({"Email": "a@b.com", "Age": "30"})
        assert result.ok
        assert result.op == "validate"
        assert result.data == {"valid": True, "checked": 2, "failures": {}}
        assert result.error is None

    def test_invalid_input(self, service: ValidationService) -> None:
        result = service.validate({"Email": "", "Age": "x", "Gender": "female"})
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "VALIDATION_FAILED"
        assert result.error.message == "2 fields failed validation"
        assert result.error.detail["failures"] == {
            "Email": ["This value is required"],
            "Age": ["Value must be a number."],
        }

    def test_singular_message(self, service: ValidationService) -> None:
        result = service.validate({"Age": "x"})
        assert result.error is not None
        assert result.error.message == "1 field failed validation"

    def test_unregistered_keys_warn(self, service: ValidationService) -> None:
        result = service.validate({"Age": "30", "Nickname": "zed"})
        assert result.ok
        assert result.warnings == ["No rules registered for 'Nickname'; value not checked"]

    def test_registered_keys_do_not_warn(self, service: ValidationService) -> None:
        assert service.validate({"Age": "x"}).warnings == []

    def test_raising_rule_is_reported(self) -> None:
        def explode(value: str) -> str | None:
            raise RuntimeError("rule bug")

        rules = Rules()
        rules.add("Code", explode)
        result = ValidationService(rules).validate({"Code": "x"})
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_RULE"
        assert "RuntimeError: rule bug" in result.error.message


class TestDescribeRules:
    def test_lists_constraints_in_order(self, service: ValidationService) -> None:
        result = service.describe_rules()
        assert result.ok
        assert result.op == "list_rules"
        assert result.data["count"] == 3
        first = result.data["items"][0]
        assert first == {
            "field": "Email",
            "constraints": [
                {"rule": "not_empty", "message": ""},
                {"rule": "email", "message": "Please enter a valid e-mail"},
            ],
        }
        assert result.data["items"][2]["constraints"][0]["rule"] == "equals_any(male, female)"

    def test_empty_registry(self) -> None:
        result = ValidationService(Rules()).describe_rules()
        assert result.data == {"count": 0, "items": []}


class TestCatalog:
    def test_lists_builtins(self) -> None:
        result = ValidationService.catalog()
        names = {item["name"]: item["parameterised"] for item in result.data["items"]}
        assert names["email"] is False
        assert names["equals_any"] is True
        assert result.data["count"] == len(names)

    def test_includes_custom_rules(self) -> None:
        register_rule("always_ok", lambda v: None)
        names = [item["name"] for item in ValidationService.catalog().data["items"]]
        assert "always_ok" in names


class TestCheckRule:
    def test_passing_value(self) -> None:
        result = ValidationService.check_rule("zip_code", "33145")
        assert result.ok
        assert result.data == {"rule": "zip_code", "value": "33145", "valid": True}

    def test_failing_value(self) -> None:
        result = ValidationService.check_rule("zip_code", "331456")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "RULE_FAILED"
        assert result.error.message == "Value must be a zipcode (XXXXX)."

    def test_factory_params(self) -> None:
        result = ValidationService.check_rule("equals_any", "male", values=["male", "female"])
        assert result.ok

    def test_unknown_rule(self) -> None:
        result = ValidationService.check_rule("bogus", "x")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_RULE"
        assert result.error.detail == {"rule": "bogus"}

    def test_raising_plugin_rule(self) -> None:
        def boom(value: str) -> str | None:
            raise RuntimeError("plugin bug")

        register_rule("boom", boom)
        result = ValidationService.check_rule("boom", "x")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_RULE"
        assert result.error.message == "Rule 'boom' raised RuntimeError: plugin bug"
        assert result.error.detail == {"rule": "boom"}
