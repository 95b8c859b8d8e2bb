"""Tests for the dependency manager."""

import json
from unittest.mock import AsyncMock

import pytest

from code_executor.executor.dependencies import (
    CHECK_SCRIPT_TEMPLATE,
    DependencyManager,
    PackageCheckResult,
    parse_check_output,
)
from code_executor.primitives.errors import ConfigurationError, ExecutionError, ValidationError
from code_executor.primitives.file_store import FileStore
from code_executor.runtime.env_config import EnvironmentConfig
from code_executor.runtime.env_resolver import EnvResolver
from conftest import make_result, requires_shell


def _manager(storage_dir, result=None):
    subprocess = AsyncMock()
    subprocess.run.return_value = result or make_result()
    manager = DependencyManager(
        FileStore(storage_dir), EnvResolver(platform_name="linux"), subprocess
    )
    return manager, subprocess


class TestInstallCommand:
    """Package manager command per environment type."""

    @pytest.mark.parametrize(
        "config, expected",
        [
            (EnvironmentConfig("conda", conda_name="ds"), "conda install -y -n ds numpy pandas"),
            (EnvironmentConfig("venv", venv_path="/v"), "pip install numpy pandas"),
            (EnvironmentConfig("venv-uv", uv_venv_path="/uv"), "uv pip install numpy pandas"),
        ],
    )
    def test_commands(self, storage_dir, config, expected):
        manager, _ = _manager(storage_dir)
        assert manager.install_command(["numpy", "pandas"], config) == expected

    def test_conda_without_name(self, storage_dir):
        manager, _ = _manager(storage_dir)
        with pytest.raises(ConfigurationError, match="conda_name"):
            manager.install_command(["numpy"], EnvironmentConfig("conda"))

    def test_unknown_type(self, storage_dir):
        manager, _ = _manager(storage_dir)
        with pytest.raises(ConfigurationError, match="Unsupported"):
            manager.install_command(["numpy"], EnvironmentConfig("pyenv"))


@pytest.mark.asyncio
class TestInstall:
    async def test_empty_package_list(self, storage_dir, venv_config):
        manager, subprocess = _manager(storage_dir)
        with pytest.raises(ValidationError, match="No packages specified"):
            await manager.install([], venv_config)
        subprocess.run.assert_not_called()

    async def test_success_through_activation(self, storage_dir, venv_config):
        manager, subprocess = _manager(storage_dir, make_result(stdout="Successfully installed\n"))
        result = await manager.install(["requests"], venv_config)

        assert result.packages == ["requests"]
        assert result.env_type == "venv"
        assert result.output == "Successfully installed\n"
        assert result.warnings is None
        command, shell = subprocess.run.call_args.args
        assert command == f"source {venv_config.venv_path}/bin/activate && pip install requests"
        assert shell == "/bin/bash"

    async def test_stderr_is_a_warning_not_a_failure(self, storage_dir, venv_config):
        manager, _ = _manager(
            storage_dir, make_result(stdout="done\n", stderr="WARNING: pip is old\n")
        )
        result = await manager.install(["requests"], venv_config)
        assert result.warnings == "WARNING: pip is old\n"

    async def test_nonzero_exit_fails(self, storage_dir, venv_config):
        manager, _ = _manager(
            storage_dir, make_result(stderr="ERROR: No matching distribution\n", return_code=1)
        )
        with pytest.raises(ExecutionError, match="No matching distribution") as exc_info:
            await manager.install(["nopkg"], venv_config)
        assert exc_info.value.return_code == 1

    async def test_launch_failure(self, storage_dir, venv_config):
        manager, _ = _manager(storage_dir, make_result(return_code=-1, error="no shell"))
        with pytest.raises(ExecutionError, match="no shell"):
            await manager.install(["requests"], venv_config)


class TestParseCheckOutput:
    def test_single_line(self):
        assert parse_check_output('{"json": {"installed": true}}\n') == {
            "json": {"installed": True}
        }

    def test_uses_last_line(self):
        """Packages that print on import do not break parsing."""
        stdout = 'hello from a package\n{"a": {"installed": true}}\n'
        assert parse_check_output(stdout) == {"a": {"installed": True}}

    @pytest.mark.parametrize("stdout", ["", "not json\n", "[1, 2]\n"])
    def test_malformed(self, stdout):
        with pytest.raises(ExecutionError):
            parse_check_output(stdout)


class TestPackageCheckResult:
    def test_summary_fields(self):
        result = PackageCheckResult(
            env_type="venv",
            package_details={
                "a": {"installed": True},
                "b": {"installed": False, "error": "Package not found"},
                "c": {"installed": False, "error": "boom"},
            },
        )
        assert result.all_installed is False
        assert result.not_installed == ["b", "c"]

    def test_all_installed(self):
        result = PackageCheckResult(env_type="venv", package_details={"a": {"installed": True}})
        assert result.all_installed is True
        assert result.not_installed == []


@pytest.mark.asyncio
class TestCheckWithMockedProcess:
    async def test_empty_package_list(self, storage_dir, venv_config):
        manager, _ = _manager(storage_dir)
        with pytest.raises(ValidationError):
            await manager.check([], venv_config)

    async def test_check_script_removed_after_run(self, storage_dir, venv_config):
        details = {"numpy": {"installed": True, "version": "2.0.0", "location": "/x"}}
        manager, subprocess = _manager(storage_dir, make_result(stdout=json.dumps(details)))
        result = await manager.check(["numpy"], venv_config)

        assert result.package_details == details
        assert result.env_type == "venv"
        command, _ = subprocess.run.call_args.args
        assert "check_packages_" in command
        assert list(storage_dir.iterdir()) == []

    async def test_check_script_stderr_fails(self, storage_dir, venv_config):
        manager, _ = _manager(storage_dir, make_result(stdout="{}", stderr="Traceback\n"))
        with pytest.raises(ExecutionError, match="Traceback"):
            await manager.check(["numpy"], venv_config)

    async def test_check_script_malformed_output_fails(self, storage_dir, venv_config):
        manager, _ = _manager(storage_dir, make_result(stdout="garbage"))
        with pytest.raises(ExecutionError, match="Malformed"):
            await manager.check(["numpy"], venv_config)

    async def test_check_script_embeds_package_names(self):
        script = CHECK_SCRIPT_TEMPLATE.format(packages=json.dumps(["numpy", "a-b"]))
        assert 'for package in ["numpy", "a-b"]:' in script
        compile(script, "<check_packages>", "exec")


@requires_shell
@pytest.mark.asyncio
class TestCheckEndToEnd:
    async def test_missing_and_stdlib_packages(self, storage_dir, venv_config):
        manager = DependencyManager(FileStore(storage_dir), EnvResolver())
        result = await manager.check(["json", "definitely_not_a_real_pkg_xyz"], venv_config)

        assert result.all_installed is False
        assert result.not_installed == ["definitely_not_a_real_pkg_xyz"]
        assert result.package_details["json"]["installed"] is True
        assert result.package_details["json"]["location"].endswith("__init__.py")
        missing = result.package_details["definitely_not_a_real_pkg_xyz"]
        assert missing == {"installed": False, "error": "Package not found"}
