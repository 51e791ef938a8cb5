"""Tests for the caseforge error hierarchy."""

from __future__ import annotations

from caseforge.errors import (
    CaseForgeError,
    ConfigLoadError,
    ConfigurationError,
    ErrorCode,
    ErrorContext,
    StructuralError,
)


class TestErrorCode:
    def test_categories(self):
        assert ErrorCode.INVALID_RANGE.category == "configuration"
        assert ErrorCode.CONFIG_LOAD_FAILED.category == "configuration"
        assert ErrorCode.STRUCTURAL.category == "internal"
        assert ErrorCode.UNKNOWN.category == "internal"


class TestErrorContext:
    def test_format_location(self):
        ctx = ErrorContext(parameter_name="size", parameter_position=2, descriptor="range")
        assert ctx.format_location() == "parameter=size > position=2 > descriptor=range"

    def test_position_zero_is_reported(self):
        assert ErrorContext(parameter_position=0).format_location() == "position=0"

    def test_empty_location(self):
        assert ErrorContext().format_location() == "unknown location"

    def test_to_dict_drops_missing_fields(self):
        ctx = ErrorContext(parameter_name="size")
        assert ctx.to_dict() == {"parameter_name": "size"}


class TestCaseForgeError:
    def test_default_message(self):
        err = CaseForgeError()
        assert err.message == "An unexpected error occurred"
        assert str(err) == "[E999] An unexpected error occurred"

    def test_extra_context(self):
        err = CaseForgeError("boom", request_id="r1")
        assert err.context.extra == {"request_id": "r1"}

    def test_custom_suggestions(self):
        err = CaseForgeError("boom", suggestions=["try again"])
        assert err.suggestions == ["try again"]

    def test_to_dict(self):
        err = CaseForgeError("boom", cause=ValueError("inner"))
        data = err.to_dict()
        assert data["error_type"] == "CaseForgeError"
        assert data["cause"] == "inner"
        assert data["error_code"] == "E999"


class TestConfigurationError:
    def make(self) -> ConfigurationError:
        return ConfigurationError(
            "Range step must not be zero",
            constraint="step != 0",
            value=0,
            error_code=ErrorCode.INVALID_RANGE,
            context=ErrorContext(parameter_name="batch", parameter_position=1),
        )

    def test_str_names_parameter_and_constraint(self):
        assert str(self.make()) == (
            "[E202] Range step must not be zero | at parameter=batch > position=1"
            " (constraint: step != 0)"
        )

    def test_not_recoverable(self):
        assert self.make().recoverable is False

    def test_default_suggestions(self):
        assert self.make().suggestions == ConfigurationError.default_suggestions
        assert self.make().suggestions is not ConfigurationError.default_suggestions

    def test_format_verbose(self):
        text = self.make().format_verbose()
        assert text.startswith("Error [E202]: Range step must not be zero")
        assert "Location: parameter=batch > position=1" in text
        assert "Suggestions:" in text

    def test_to_dict(self):
        data = self.make().to_dict()
        assert data["constraint"] == "step != 0"
        assert data["value"] == "0"
        assert data["context"] == {"parameter_name": "batch", "parameter_position": 1}

    def test_is_caseforge_error(self):
        assert isinstance(self.make(), CaseForgeError)


class TestOtherErrors:
    def test_structural_error(self):
        err = StructuralError("bad positions")
        assert err.error_code is ErrorCode.STRUCTURAL
        assert err.recoverable is False

    def test_config_load_error_path(self):
        err = ConfigLoadError("Case file not found", path="cases.yaml")
        assert str(err) == "[E210] Case file not found (path: cases.yaml)"

    def test_format_verbose_includes_cause(self):
        err = ConfigLoadError("bad yaml", cause=ValueError("line 3"))
        assert "Caused by: ValueError: line 3" in err.format_verbose()
