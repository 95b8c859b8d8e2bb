"""Dependency manager - install and check packages in the active environment."""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from code_executor.constants import CHECK_SCRIPT_BASE, EnvType, SCRIPT_SUFFIX
from code_executor.primitives.errors import ConfigurationError, ExecutionError, ValidationError
from code_executor.primitives.file_store import FileStore, random_suffix
from code_executor.primitives.subprocess import SubprocessPrimitive
from code_executor.runtime.env_config import EnvironmentConfig
from code_executor.runtime.env_resolver import EnvResolver

logger = logging.getLogger(__name__)

# Check script run inside the target environment. Prints exactly one JSON line.
CHECK_SCRIPT_TEMPLATE = '''
import importlib
import importlib.util
import json

results = {{}}

for package in {packages}:
    try:
        spec = importlib.util.find_spec(package)
        if spec is None:
            results[package] = {{
                "installed": False,
                "error": "Package not found"
            }}
            continue

        module = importlib.import_module(package)

        version = getattr(module, "__version__", None)
        if version is None:
            version = getattr(module, "version", None)

        results[package] = {{
            "installed": True,
            "version": None if version is None else str(version),
            "location": getattr(module, "__file__", None)
        }}
    except ImportError as e:
        results[package] = {{
            "installed": False,
            "error": str(e)
        }}
    except Exception as e:
        results[package] = {{
            "installed": False,
            "error": f"Unexpected error: {{str(e)}}"
        }}

print(json.dumps(results))
'''


@dataclass
class InstallResult:
    packages: List[str]
    env_type: str
    output: str
    warnings: Optional[str] = None


@dataclass
class PackageCheckResult:
    """Per-package check results plus summary fields."""

    env_type: str
    package_details: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @property
    def all_installed(self) -> bool:
        return all(info.get("installed") for info in self.package_details.values())

    @property
    def not_installed(self) -> List[str]:
        return [
            name
            for name, info in self.package_details.items()
            if not info.get("installed")
        ]


def _require_packages(packages: List[str]) -> None:
    if not packages:
        raise ValidationError("No packages specified", field="packages", value=packages)


def parse_check_output(stdout: str) -> Dict[str, Dict[str, Any]]:
    """Parse the check script's JSON line (the last non-empty line of stdout).

    Raises:
        ExecutionError: Output is missing or not a JSON object.
    """
    lines = [line for line in stdout.strip().splitlines() if line.strip()]
    if not lines:
        raise ExecutionError("Package check produced no output")
    try:
        data = json.loads(lines[-1])
    except json.JSONDecodeError as e:
        raise ExecutionError(f"Malformed package check output: {e}") from e
    if not isinstance(data, dict):
        raise ExecutionError("Malformed package check output: expected a JSON object")
    return data


class DependencyManager:
    """Build install/check commands and run them through the resolver."""

    def __init__(
        self,
        file_store: FileStore,
        resolver: EnvResolver,
        subprocess: Optional[SubprocessPrimitive] = None,
    ):
        self.file_store = file_store
        self.resolver = resolver
        self.subprocess = subprocess or SubprocessPrimitive()

    def install_command(self, packages: List[str], config: EnvironmentConfig) -> str:
        package_list = " ".join(packages)
        if config.type == EnvType.CONDA:
            if not config.conda_name:
                raise ConfigurationError(
                    "conda_name is required for conda environment", field="conda_name"
                )
            return f"conda install -y -n {config.conda_name} {package_list}"
        if config.type == EnvType.VENV:
            return f"pip install {package_list}"
        if config.type == EnvType.UV_VENV:
            return f"uv pip install {package_list}"
        raise ConfigurationError(f"Unsupported environment type: {config.type}", field="type")

    async def _run(self, command: str, config: EnvironmentConfig):
        shell_command = self.resolver.resolve(command, config)
        return await self.subprocess.run(
            shell_command.command,
            shell_command.shell,
            cwd=str(self.file_store.storage_dir),
            env=self.resolver.process_env(),
        )

    async def install(self, packages: List[str], config: EnvironmentConfig) -> InstallResult:
        """Install ``packages`` with the package manager for ``config.type``.

        Stderr from a successful install is returned as warnings.

        Raises:
            ValidationError: Empty package list.
            ConfigurationError: Unusable environment configuration.
            ExecutionError: The installer could not start or exited non-zero.
        """
        _require_packages(packages)
        command = self.install_command(packages, config)
        logger.info(f"Installing {packages} into {config.type} environment")

        result = await self._run(command, config)
        if result.error is not None:
            raise ExecutionError(result.error)
        if not result.success:
            raise ExecutionError(
                result.stderr.strip()
                or f"Command failed with exit code {result.return_code}: {command}",
                stderr=result.stderr,
                return_code=result.return_code,
            )

        return InstallResult(
            packages=list(packages),
            env_type=config.type,
            output=result.stdout,
            warnings=result.stderr or None,
        )

    async def check(self, packages: List[str], config: EnvironmentConfig) -> PackageCheckResult:
        """Check whether each package can be found and imported.

        Raises:
            ValidationError: Empty package list.
            ConfigurationError: Unusable environment configuration.
            ExecutionError: The check script wrote to stderr, failed to start, or
                printed malformed JSON.
        """
        _require_packages(packages)
        script = CHECK_SCRIPT_TEMPLATE.format(packages=json.dumps(list(packages)))
        script_path = self.file_store.path_for(
            f"{CHECK_SCRIPT_BASE}_{random_suffix()}{SCRIPT_SUFFIX}"
        )
        self.file_store.write(script_path, script)

        try:
            result = await self._run(self.resolver.python_command(script_path), config)
        finally:
            script_path.unlink(missing_ok=True)

        if result.error is not None:
            raise ExecutionError(result.error)
        if result.stderr:
            raise ExecutionError(result.stderr, stderr=result.stderr, return_code=result.return_code)

        return PackageCheckResult(
            env_type=config.type,
            package_details=parse_check_output(result.stdout),
        )
