"""Environment resolver.

Turns a Python (or package manager) command into a shell command line that
first activates the configured environment.

    conda    POSIX:   source $(conda info --base)/etc/profile.d/conda.sh
                      && conda activate <name> && <cmd>
             Windows: conda run -n <name> <cmd>
    venv,    POSIX:   source <path>/bin/activate && <cmd>
    venv-uv  Windows: <path>\\Scripts\\activate && <cmd>

Names and paths are interpolated as-is, without quoting.
"""

import ntpath
import os
import posixpath
import sys
from dataclasses import dataclass
from typing import Dict, Optional

from code_executor.constants import EnvType
from code_executor.primitives.errors import ConfigurationError
from code_executor.runtime.env_config import EnvironmentConfig

POSIX_SHELL = "/bin/bash"
WINDOWS_SHELL = "cmd.exe"
CONDA_INIT = "source $(conda info --base)/etc/profile.d/conda.sh"


@dataclass(frozen=True)
class ShellCommand:
    """A command line and the shell that should interpret it."""

    command: str
    shell: str


class EnvResolver:
    """Pure resolver - builds command lines, runs nothing."""

    def __init__(self, platform_name: Optional[str] = None):
        """Initialize resolver.

        Args:
            platform_name: ``sys.platform``-style name. Defaults to the
                running platform.
        """
        self.platform_name = platform_name or sys.platform

    @property
    def is_windows(self) -> bool:
        return self.platform_name == "win32"

    def python_command(self, script_path) -> str:
        """Unbuffered interpreter invocation for ``script_path``."""
        interpreter = "python" if self.is_windows else "python3"
        return f'{interpreter} -u "{script_path}"'

    def process_env(self) -> Dict[str, str]:
        """Inherited environment with unbuffered Python output forced on."""
        env = os.environ.copy()
        env["PYTHONUNBUFFERED"] = "1"
        return env

    def resolve(self, command: str, config: EnvironmentConfig) -> ShellCommand:
        """Wrap ``command`` so it runs inside the environment in ``config``.

        Raises:
            ConfigurationError: Unknown environment type, or the location
                field for the type is not set.
        """
        if config.type not in EnvType.ALL:
            raise ConfigurationError(
                f"Unsupported environment type: {config.type}", field="type"
            )

        location = config.location
        if not location:
            field_name = EnvType.LOCATION_FIELDS[config.type]
            raise ConfigurationError(
                f"{field_name} is required for {EnvType.DISPLAY_NAMES[config.type]}",
                field=field_name,
            )

        if config.type == EnvType.CONDA:
            if self.is_windows:
                return ShellCommand(f"conda run -n {location} {command}", WINDOWS_SHELL)
            return ShellCommand(
                f"{CONDA_INIT} && conda activate {location} && {command}",
                POSIX_SHELL,
            )

        # venv and venv-uv share activation-script semantics
        if self.is_windows:
            activate = ntpath.join(location, "Scripts", "activate")
            return ShellCommand(f"{activate} && {command}", WINDOWS_SHELL)
        activate = posixpath.join(location, "bin", "activate")
        return ShellCommand(f"source {activate} && {command}", POSIX_SHELL)
