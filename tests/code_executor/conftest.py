"""Shared fixtures for code-executor tests."""

import shutil
from pathlib import Path

import pytest

from code_executor.primitives.subprocess import SubprocessResult
from code_executor.runtime.env_config import EnvironmentConfig

# End-to-end runs go through /bin/bash and a python3 on PATH
requires_shell = pytest.mark.skipif(
    not Path("/bin/bash").exists() or shutil.which("python3") is None,
    reason="/bin/bash and python3 are required for end-to-end execution",
)


@pytest.fixture
def storage_dir(tmp_path):
    path = tmp_path / "storage"
    path.mkdir()
    return path


@pytest.fixture
def fake_venv(tmp_path):
    """A directory shaped like a virtualenv whose activate script does nothing."""
    venv = tmp_path / "venv"
    (venv / "bin").mkdir(parents=True)
    (venv / "bin" / "activate").write_text("# test virtualenv\n", encoding="utf-8")
    return venv


@pytest.fixture
def venv_config(fake_venv):
    return EnvironmentConfig(type="venv", venv_path=str(fake_venv))


@pytest.fixture
def env_vars(monkeypatch, storage_dir, fake_venv):
    """Startup environment for a venv-backed server."""
    for var in ("ENV_TYPE", "CONDA_ENV_NAME", "VENV_PATH", "UV_VENV_PATH", "LOG_DIR"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("CODE_STORAGE_DIR", str(storage_dir))
    monkeypatch.setenv("ENV_TYPE", "venv")
    monkeypatch.setenv("VENV_PATH", str(fake_venv))
    return storage_dir


def make_result(stdout="", stderr="", return_code=0, error=None) -> SubprocessResult:
    return SubprocessResult(
        success=return_code == 0 and error is None,
        stdout=stdout,
        stderr=stderr,
        return_code=return_code,
        duration_ms=1.0,
        error=error,
    )
