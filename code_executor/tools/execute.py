"""Execute tools - run inline code or an existing script file."""

import logging
from typing import Any, Dict

from code_executor.executor.runner import ExecutionRunner
from code_executor.runtime.env_config import EnvConfigStore

logger = logging.getLogger(__name__)


class ExecuteCodeTool:
    """Save a code snippet to a fresh file and run it."""

    def __init__(self, runner: ExecutionRunner, config_store: EnvConfigStore):
        self.runner = runner
        self.config_store = config_store

    async def handle(self, **kwargs) -> Dict[str, Any]:
        code: str = kwargs["code"]
        filename = kwargs.get("filename")

        logger.debug(f"execute_code: filename={filename}, {len(code)} chars")
        result = await self.runner.execute_inline(code, self.config_store.get(), filename)
        return result.to_dict()


class ExecuteCodeFileTool:
    """Run a script previously built with initialize/append."""

    def __init__(self, runner: ExecutionRunner, config_store: EnvConfigStore):
        self.runner = runner
        self.config_store = config_store

    async def handle(self, **kwargs) -> Dict[str, Any]:
        file_path: str = kwargs["file_path"]

        logger.debug(f"execute_code_file: {file_path}")
        result = await self.runner.execute_file(file_path, self.config_store.get())
        return result.to_dict()
