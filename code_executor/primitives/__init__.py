"""Primitives: errors, process execution, script storage."""

from code_executor.primitives.errors import (
    ConfigurationError,
    ExecutionError,
    NotFoundError,
    ToolExecutionError,
    ValidationError,
)
from code_executor.primitives.file_store import FileStore
from code_executor.primitives.subprocess import SubprocessPrimitive, SubprocessResult

__all__ = [
    "ConfigurationError",
    "ExecutionError",
    "NotFoundError",
    "ToolExecutionError",
    "ValidationError",
    "FileStore",
    "SubprocessPrimitive",
    "SubprocessResult",
]
