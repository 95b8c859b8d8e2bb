"""Tests for code-executor error types."""

import pytest

from code_executor.primitives.errors import (
    ConfigurationError,
    ExecutionError,
    NotFoundError,
    ToolExecutionError,
    ValidationError,
)


class TestToolExecutionError:
    """ToolExecutionError base exception."""

    def test_create_tool_execution_error(self):
        err = ToolExecutionError("command failed")
        assert "command failed" in str(err)
        assert err.message == "command failed"

    def test_catchable_as_exception(self):
        with pytest.raises(Exception, match="write failed"):
            raise ToolExecutionError("write failed")


class TestSubclasses:
    """Every specific error is a ToolExecutionError."""

    @pytest.mark.parametrize(
        "err",
        [
            ValidationError("Code is required", field="code"),
            ConfigurationError("venv_path is required", field="venv_path"),
            NotFoundError("File not found: /tmp/x.py", path="/tmp/x.py"),
            ExecutionError("boom", stderr="Traceback", return_code=1),
        ],
    )
    def test_is_tool_execution_error(self, err):
        assert isinstance(err, ToolExecutionError)

    def test_validation_error_fields(self):
        err = ValidationError("Valid packages array is required", field="packages", value="numpy")
        assert err.field == "packages"
        assert err.value == "numpy"
        assert str(err) == "Valid packages array is required"

    def test_not_found_error_path(self):
        err = NotFoundError("File not found: /tmp/missing.py", path="/tmp/missing.py")
        assert err.path == "/tmp/missing.py"

    def test_execution_error_details(self):
        err = ExecutionError("package check failed", stderr="SyntaxError", return_code=1)
        assert err.stderr == "SyntaxError"
        assert err.return_code == 1
