"""Error types for code-executor.

Tool handlers return result envelopes with a status field instead of raising
for expected failures. These errors are raised below the handler boundary:
- Gateway: required-argument checks (propagate to the MCP SDK)
- Runtime: configuration preconditions (no conda name, no venv path)
- Primitives/executor: missing files, failed child processes
"""

from typing import Any, Optional


class ToolExecutionError(Exception):
    """Base exception for code-executor failures.

    Attributes:
        message: Error description.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ToolExecutionError):
    """Missing or invalid input.

    Attributes:
        message: Description of the error.
        field: Optional argument name that failed validation.
        value: Optional value that failed validation.
    """

    def __init__(
        self, message: str, field: Optional[str] = None, value: Any = None
    ):
        super().__init__(message)
        self.field = field
        self.value = value


class ConfigurationError(ToolExecutionError):
    """Configuration error (environment kind/location mismatch, bad settings).

    Attributes:
        message: Description of the error.
        field: Optional field that caused the error.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(ToolExecutionError):
    """A referenced script file does not exist."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ExecutionError(ToolExecutionError):
    """A spawned process failed or produced unusable output.

    Attributes:
        message: Description of the error.
        stderr: Diagnostic output captured from the process, if any.
        return_code: Exit code, if the process ran.
    """

    def __init__(
        self,
        message: str,
        stderr: Optional[str] = None,
        return_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.stderr = stderr
        self.return_code = return_code
