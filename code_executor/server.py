"""MCP server for Python code execution.

Exposes 9 tools:
- execute_code, execute_code_file
- initialize_code_file, append_to_code_file, read_code_file
- install_dependencies, check_installed_packages
- configure_environment, get_environment_config
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.lowlevel import NotificationOptions
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool

from code_executor import __version__
from code_executor import tool_descriptions as desc
from code_executor.config import ServerSettings, load_settings
from code_executor.constants import SERVER_NAME, EnvType, Status, ToolName
from code_executor.executor import DependencyManager, ExecutionRunner
from code_executor.primitives import (
    ConfigurationError,
    FileStore,
    SubprocessPrimitive,
    ValidationError,
)
from code_executor.runtime import EnvConfigStore, EnvResolver
from code_executor.tools import (
    AppendToCodeFileTool,
    CheckInstalledPackagesTool,
    ConfigureEnvironmentTool,
    ExecuteCodeFileTool,
    ExecuteCodeTool,
    GetEnvironmentConfigTool,
    InitializeCodeFileTool,
    InstallDependenciesTool,
    ReadCodeFileTool,
)
from code_executor.utils.logger import setup_logging

logger = logging.getLogger(__name__)

# Required string arguments per tool, with the error raised when absent
REQUIRED_ARGUMENTS = {
    ToolName.EXECUTE_CODE: [("code", "Code is required")],
    ToolName.INITIALIZE_CODE_FILE: [("content", "Content is required")],
    ToolName.APPEND_TO_CODE_FILE: [
        ("file_path", "File path is required"),
        ("content", "Content is required"),
    ],
    ToolName.EXECUTE_CODE_FILE: [("file_path", "File path is required")],
    ToolName.READ_CODE_FILE: [("file_path", "File path is required")],
}

PACKAGE_TOOLS = (ToolName.INSTALL_DEPENDENCIES, ToolName.CHECK_INSTALLED_PACKAGES)


def validate_arguments(name: str, arguments: Dict[str, Any]) -> None:
    """Check required arguments before anything is delegated.

    Raises:
        ValidationError: A required argument is missing or has the wrong type.
    """
    for field_name, message in REQUIRED_ARGUMENTS.get(name, []):
        value = arguments.get(field_name)
        if not value or not isinstance(value, str):
            raise ValidationError(message, field=field_name, value=value)

    if name in PACKAGE_TOOLS:
        packages = arguments.get("packages")
        if not isinstance(packages, list) or not all(isinstance(p, str) for p in packages):
            raise ValidationError(
                "Valid packages array is required", field="packages", value=packages
            )


def _packages_schema(description: str) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "packages": {
                "type": "array",
                "items": {"type": "string"},
                "description": description,
            },
        },
        "required": ["packages"],
    }


class CodeExecutorServer:
    """MCP Server for code execution and dependency management."""

    def __init__(self, settings: ServerSettings):
        """Initialize server from validated settings."""
        self.settings = settings
        self.storage_dir = str(settings.storage_dir)
        self.debug = settings.code_executor_debug
        self.config_store = EnvConfigStore(settings.environment_config())
        self.server = Server(SERVER_NAME)
        self._setup_handlers()

    def _setup_handlers(self):
        """Build tool handlers and register MCP handlers."""
        file_store = FileStore(self.storage_dir)
        resolver = EnvResolver()
        subprocess = SubprocessPrimitive()
        runner = ExecutionRunner(file_store, resolver, subprocess)
        dependencies = DependencyManager(file_store, resolver, subprocess)

        self.file_store = file_store
        self.tools = {
            ToolName.EXECUTE_CODE: ExecuteCodeTool(runner, self.config_store),
            ToolName.INITIALIZE_CODE_FILE: InitializeCodeFileTool(file_store),
            ToolName.APPEND_TO_CODE_FILE: AppendToCodeFileTool(file_store),
            ToolName.EXECUTE_CODE_FILE: ExecuteCodeFileTool(runner, self.config_store),
            ToolName.READ_CODE_FILE: ReadCodeFileTool(file_store),
            ToolName.INSTALL_DEPENDENCIES: InstallDependenciesTool(
                dependencies, self.config_store
            ),
            ToolName.CHECK_INSTALLED_PACKAGES: CheckInstalledPackagesTool(
                dependencies, self.config_store
            ),
            ToolName.CONFIGURE_ENVIRONMENT: ConfigureEnvironmentTool(self.config_store),
            ToolName.GET_ENVIRONMENT_CONFIG: GetEnvironmentConfigTool(self.config_store),
        }

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """Return 9 MCP tools."""
            return self.list_tool_definitions()

        # Arguments are checked by validate_arguments so failures keep the
        # JSON envelope shape instead of the SDK's schema error text.
        @self.server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: dict) -> CallToolResult:
            """Dispatch to appropriate tool."""
            return await self.dispatch(name, arguments)

    def list_tool_definitions(self) -> List[Tool]:
        env_type = self.config_store.get().type
        return [
            Tool(
                name=ToolName.EXECUTE_CODE,
                description=desc.EXECUTE_CODE_DESC.format(env_type=env_type),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "code": {"type": "string", "description": desc.EXECUTE_CODE_CODE_DESC},
                        "filename": {
                            "type": "string",
                            "description": desc.EXECUTE_CODE_FILENAME_DESC,
                        },
                    },
                    "required": ["code"],
                },
            ),
            Tool(
                name=ToolName.INITIALIZE_CODE_FILE,
                description=desc.INITIALIZE_CODE_FILE_DESC,
                inputSchema={
                    "type": "object",
                    "properties": {
                        "content": {
                            "type": "string",
                            "description": desc.INITIALIZE_CONTENT_DESC,
                        },
                        "filename": {"type": "string", "description": desc.FILENAME_DESC},
                    },
                    "required": ["content"],
                },
            ),
            Tool(
                name=ToolName.APPEND_TO_CODE_FILE,
                description=desc.APPEND_TO_CODE_FILE_DESC,
                inputSchema={
                    "type": "object",
                    "properties": {
                        "file_path": {"type": "string", "description": desc.FILE_PATH_DESC},
                        "content": {"type": "string", "description": desc.APPEND_CONTENT_DESC},
                    },
                    "required": ["file_path", "content"],
                },
            ),
            Tool(
                name=ToolName.EXECUTE_CODE_FILE,
                description=desc.EXECUTE_CODE_FILE_DESC,
                inputSchema={
                    "type": "object",
                    "properties": {
                        "file_path": {
                            "type": "string",
                            "description": desc.EXECUTE_CODE_FILE_PATH_DESC,
                        },
                    },
                    "required": ["file_path"],
                },
            ),
            Tool(
                name=ToolName.READ_CODE_FILE,
                description=desc.READ_CODE_FILE_DESC,
                inputSchema={
                    "type": "object",
                    "properties": {
                        "file_path": {"type": "string", "description": desc.READ_FILE_PATH_DESC},
                    },
                    "required": ["file_path"],
                },
            ),
            Tool(
                name=ToolName.INSTALL_DEPENDENCIES,
                description=desc.INSTALL_DEPENDENCIES_DESC.format(env_type=env_type),
                inputSchema=_packages_schema(desc.INSTALL_PACKAGES_DESC),
            ),
            Tool(
                name=ToolName.CHECK_INSTALLED_PACKAGES,
                description=desc.CHECK_INSTALLED_PACKAGES_DESC.format(env_type=env_type),
                inputSchema=_packages_schema(desc.CHECK_PACKAGES_DESC),
            ),
            Tool(
                name=ToolName.CONFIGURE_ENVIRONMENT,
                description=desc.CONFIGURE_ENVIRONMENT_DESC,
                inputSchema={
                    "type": "object",
                    "properties": {
                        "type": {
                            "type": "string",
                            "enum": EnvType.ALL,
                            "description": desc.ENV_TYPE_DESC,
                        },
                        "conda_name": {"type": "string", "description": desc.CONDA_NAME_DESC},
                        "venv_path": {"type": "string", "description": desc.VENV_PATH_DESC},
                        "uv_venv_path": {
                            "type": "string",
                            "description": desc.UV_VENV_PATH_DESC,
                        },
                    },
                    "required": ["type"],
                },
            ),
            Tool(
                name=ToolName.GET_ENVIRONMENT_CONFIG,
                description=desc.GET_ENVIRONMENT_CONFIG_DESC,
                inputSchema={"type": "object", "properties": {}},
            ),
        ]

    async def dispatch(
        self, name: str, arguments: Optional[Dict[str, Any]]
    ) -> CallToolResult:
        """Validate arguments, run the tool, and wrap its JSON envelope.

        Raises:
            ValidationError: Unknown tool name or missing required argument.
        """
        tool = self.tools.get(name)
        if tool is None:
            raise ValidationError(f"Unknown tool: {name}", field="name", value=name)

        arguments = arguments or {}
        validate_arguments(name, arguments)

        try:
            result = await tool.handle(**arguments)
        except Exception as e:
            logger.exception(f"Tool {name} failed")
            result = {"status": Status.ERROR, "error": str(e)}

        return CallToolResult(
            content=[TextContent(type="text", text=json.dumps(result, default=str))],
            isError=result.get("status") == Status.ERROR,
        )

    async def start(self):
        """Start the MCP server."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=SERVER_NAME,
                    server_version=__version__,
                    capabilities=self.server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={},
                    ),
                ),
            )


async def run_stdio(settings: ServerSettings):
    """Run in stdio mode."""
    server = CodeExecutorServer(settings)
    await server.start()


def log_startup(settings: ServerSettings):
    """Report the environment type and storage directory on stderr.

    Logged at INFO, or at the configured level when that is higher, so the
    lines pass the console filter.
    """
    level = max(logging.INFO, settings.logging_level)
    logger.log(level, f"Starting MCP Server with {settings.env_type} environment")
    logger.log(level, f"Code storage directory: {settings.storage_dir}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="code-executor",
        description="MCP server executing Python code in conda, venv, or uv environments",
    )
    parser.add_argument(
        "--storage-dir",
        help="Directory for generated code files (default: $CODE_STORAGE_DIR)",
    )
    parser.add_argument(
        "--env-type",
        choices=EnvType.ALL,
        help="Python environment type (default: $ENV_TYPE or conda)",
    )
    parser.add_argument("--conda-env", help="Conda environment name (default: $CONDA_ENV_NAME)")
    parser.add_argument("--venv-path", help="Virtualenv path (default: $VENV_PATH)")
    parser.add_argument("--uv-venv-path", help="uv virtualenv path (default: $UV_VENV_PATH)")
    parser.add_argument("--log-dir", help="Directory for rotating log files (default: $LOG_DIR)")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Optional[List[str]] = None):
    """Entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(
            code_storage_dir=args.storage_dir,
            env_type=args.env_type,
            conda_env_name=args.conda_env,
            venv_path=args.venv_path,
            uv_venv_path=args.uv_venv_path,
            log_dir=args.log_dir,
            code_executor_debug=True if args.debug else None,
        )
    except ConfigurationError as e:
        setup_logging()
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    setup_logging(settings.logging_level, settings.log_dir)
    log_startup(settings)

    asyncio.run(run_stdio(settings))


if __name__ == "__main__":
    main()
