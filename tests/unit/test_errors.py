"""Tests for error_handler and custom exceptions."""

from __future__ import annotations

import pytest

from openclaw_installer.client.errors import (
    ConfigurationError,
    DeployAPIError,
    DeployConnectionError,
    DeploymentCancelled,
    DeploymentFailedError,
    InstallerError,
    ValidationError,
    error_handler,
    format_body,
)


class TestExceptionHierarchy:
    @pytest.mark.parametrize("exc_type", [
        ConfigurationError,
        ValidationError,
        DeployConnectionError,
        DeploymentCancelled,
    ])
    def test_all_exit_one(self, exc_type):
        exc = exc_type("x")
        assert isinstance(exc, InstallerError)
        assert exc.exit_code == 1

    def test_validation_error_empty(self):
        assert "Validation error" in str(ValidationError())

    def test_api_error_json_body(self):
        exc = DeployAPIError(500, '{"error":"quota exceeded"}')
        assert exc.status_code == 500
        assert exc.exit_code == 1
        assert '"error": "quota exceeded"' in str(exc)

    def test_api_error_raw_body(self):
        exc = DeployAPIError(502, "<html>bad gateway</html>")
        assert "<html>bad gateway</html>" in str(exc)

    def test_deployment_failed(self):
        exc = DeploymentFailedError("no capacity")
        assert exc.detail == "no capacity"
        assert "Deployment error from Targon: no capacity" in str(exc)

    def test_cancelled_default_message(self):
        assert "cancelled" in str(DeploymentCancelled())


class TestFormatBody:
    def test_pretty_prints_json(self):
        assert format_body('{"a":1}') == '{\n  "a": 1\n}'

    def test_raw_text(self):
        assert format_body("plain") == "plain"

    def test_empty(self):
        assert format_body("") == ""


class TestErrorHandler:
    def test_catches_installer_error(self, capsys):
        @error_handler
        def raises():
            raise DeploymentFailedError("[bracketed] detail")

        with pytest.raises(SystemExit) as exc_info:
            raises()
        assert exc_info.value.code == 1
        assert "[bracketed] detail" in capsys.readouterr().err

    def test_catches_value_error(self):
        @error_handler
        def raises():
            raise ValueError("bad")

        with pytest.raises(SystemExit) as exc_info:
            raises()
        assert exc_info.value.code == 1

    def test_passes_through_normal_return(self):
        @error_handler
        def returns_value():
            return 42

        assert returns_value() == 42

    def test_does_not_catch_other_exceptions(self):
        @error_handler
        def raises_type_error():
            raise TypeError("bad type")

        with pytest.raises(TypeError):
            raises_type_error()
