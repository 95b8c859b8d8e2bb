"""Executor: script runs and dependency management."""

from code_executor.executor.dependencies import (
    DependencyManager,
    InstallResult,
    PackageCheckResult,
)
from code_executor.executor.runner import ExecutionResult, ExecutionRunner

__all__ = [
    "DependencyManager",
    "InstallResult",
    "PackageCheckResult",
    "ExecutionResult",
    "ExecutionRunner",
]
