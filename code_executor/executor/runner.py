"""Execution runner - run script files inside the configured environment.

Result policy: a run is an error if it wrote anything to stderr, exited
non-zero, or could not be started. Non-empty stderr counts as failure even
when the exit code is 0; in that case ``output`` carries the stderr text.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from code_executor.constants import Status
from code_executor.primitives.file_store import FileStore, PathLike
from code_executor.primitives.subprocess import SubprocessPrimitive, SubprocessResult
from code_executor.runtime.env_config import EnvironmentConfig
from code_executor.runtime.env_resolver import EnvResolver

logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """Normalized outcome of one script run."""

    status: str
    file_path: str
    output: Optional[str] = None
    error: Optional[str] = None
    generated_filename: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"status": self.status}
        if self.output is not None:
            data["output"] = self.output
        if self.error is not None:
            data["error"] = self.error
        data["file_path"] = self.file_path
        if self.generated_filename is not None:
            data["generated_filename"] = self.generated_filename
        return data


def classify(result: SubprocessResult, file_path: str) -> ExecutionResult:
    """Map a finished process onto the execution result policy."""
    if result.error is not None:
        return ExecutionResult(status=Status.ERROR, error=result.error, file_path=file_path)
    if result.stderr:
        return ExecutionResult(status=Status.ERROR, output=result.stderr, file_path=file_path)
    if result.return_code != 0:
        return ExecutionResult(
            status=Status.ERROR,
            error=f"Command failed with exit code {result.return_code}",
            file_path=file_path,
        )
    return ExecutionResult(status=Status.SUCCESS, output=result.stdout, file_path=file_path)


class ExecutionRunner:
    """Write or locate a script, run it, and normalize the result."""

    def __init__(
        self,
        file_store: FileStore,
        resolver: EnvResolver,
        subprocess: Optional[SubprocessPrimitive] = None,
    ):
        self.file_store = file_store
        self.resolver = resolver
        self.subprocess = subprocess or SubprocessPrimitive()

    async def run_script(self, script_path: Path, config: EnvironmentConfig) -> SubprocessResult:
        """Run ``script_path`` with unbuffered Python in the storage root.

        Raises:
            ConfigurationError: The environment in ``config`` is unusable.
        """
        shell_command = self.resolver.resolve(
            self.resolver.python_command(script_path), config
        )
        result = await self.subprocess.run(
            shell_command.command,
            shell_command.shell,
            cwd=str(self.file_store.storage_dir),
            env=self.resolver.process_env(),
        )
        logger.debug(
            f"{script_path.name} exited {result.return_code} in {result.duration_ms:.0f}ms"
        )
        return result

    async def execute_inline(
        self,
        code: str,
        config: EnvironmentConfig,
        filename: Optional[str] = None,
    ) -> ExecutionResult:
        """Save ``code`` under a fresh name and run it."""
        generated = self.file_store.generate_filename(filename)
        file_path = self.file_store.path_for(generated)

        try:
            self.file_store.write(file_path, code)
            result = classify(await self.run_script(file_path, config), str(file_path))
        except Exception as e:
            logger.error(f"Execution of {file_path} failed: {e}")
            result = ExecutionResult(status=Status.ERROR, error=str(e), file_path=str(file_path))

        result.generated_filename = generated
        logger.info(f"Executed {generated}: {result.status}")
        return result

    async def execute_file(self, file_path: PathLike, config: EnvironmentConfig) -> ExecutionResult:
        """Run an existing script without modifying it."""
        try:
            path = self.file_store.require(file_path)
            result = classify(await self.run_script(path, config), str(file_path))
        except Exception as e:
            logger.error(f"Execution of {file_path} failed: {e}")
            return ExecutionResult(status=Status.ERROR, error=str(e), file_path=str(file_path))

        logger.info(f"Executed {file_path}: {result.status}")
        return result
