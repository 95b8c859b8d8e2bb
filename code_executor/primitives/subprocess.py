"""Subprocess execution primitive.

Runs a shell command line through a named shell and captures both output
streams once the process has terminated. No timeout and no streaming.
"""

import asyncio
import logging
import os
import shutil
import time
from dataclasses import dataclass
from typing import Dict, Optional

logger = logging.getLogger(__name__)


def shell_executable(shell: str) -> Optional[str]:
    """Full path of ``shell`` for use as the process executable.

    Bare names are looked up on PATH; Windows does not search PATH for an
    explicit executable. None selects the platform default shell
    (``%ComSpec%`` on Windows, ``/bin/sh`` elsewhere).
    """
    if os.path.dirname(shell):
        return shell
    return shutil.which(shell)


@dataclass
class SubprocessResult:
    """Result of subprocess execution.

    Attributes:
        success: True if the process ran and its return code is 0.
        stdout: Standard output from process.
        stderr: Standard error from process.
        return_code: Exit code from process, -1 if it never started.
        duration_ms: Time taken for execution in milliseconds.
        error: Launch failure message, or None if the process ran.
    """

    success: bool
    stdout: str
    stderr: str
    return_code: int
    duration_ms: float
    error: Optional[str] = None


class SubprocessPrimitive:
    """Shell command execution via asyncio subprocesses."""

    async def run(
        self,
        command: str,
        shell: str,
        cwd: Optional[str] = None,
        env: Optional[Dict[str, str]] = None,
    ) -> SubprocessResult:
        """Execute a shell command line and wait for it to finish.

        Args:
            command: Full command line, interpreted by ``shell``.
            shell: Shell executable (``/bin/bash`` or ``cmd.exe``).
            cwd: Working directory for the child process.
            env: Complete environment for the child process.

        Returns:
            SubprocessResult with captured output. Launch failures are
            reported through ``error`` rather than raised.
        """
        start_time = time.time()
        logger.debug(f"Running via {shell}: {command}")

        try:
            proc = await asyncio.create_subprocess_shell(
                command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
                env=env,
                executable=shell_executable(shell),
            )
            stdout_bytes, stderr_bytes = await proc.communicate()
        except OSError as e:
            logger.error(f"Failed to launch {shell}: {e}")
            return SubprocessResult(
                success=False,
                stdout="",
                stderr="",
                return_code=-1,
                duration_ms=(time.time() - start_time) * 1000,
                error=str(e),
            )

        return_code = proc.returncode if proc.returncode is not None else -1
        return SubprocessResult(
            success=return_code == 0,
            stdout=stdout_bytes.decode("utf-8", errors="replace") if stdout_bytes else "",
            stderr=stderr_bytes.decode("utf-8", errors="replace") if stderr_bytes else "",
            return_code=return_code,
            duration_ms=(time.time() - start_time) * 1000,
        )
