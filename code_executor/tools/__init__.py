"""Tool handlers. Each exposes ``async handle(**arguments) -> dict``."""

from code_executor.tools.code_file import (
    AppendToCodeFileTool,
    InitializeCodeFileTool,
    ReadCodeFileTool,
)
from code_executor.tools.dependencies import (
    CheckInstalledPackagesTool,
    InstallDependenciesTool,
)
from code_executor.tools.environment import (
    ConfigureEnvironmentTool,
    GetEnvironmentConfigTool,
)
from code_executor.tools.execute import ExecuteCodeFileTool, ExecuteCodeTool

__all__ = [
    "AppendToCodeFileTool",
    "InitializeCodeFileTool",
    "ReadCodeFileTool",
    "CheckInstalledPackagesTool",
    "InstallDependenciesTool",
    "ConfigureEnvironmentTool",
    "GetEnvironmentConfigTool",
    "ExecuteCodeFileTool",
    "ExecuteCodeTool",
]
