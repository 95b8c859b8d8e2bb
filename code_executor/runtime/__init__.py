"""Runtime services: environment selection and command resolution."""

from code_executor.runtime.env_config import EnvConfigStore, EnvironmentConfig
from code_executor.runtime.env_resolver import EnvResolver, ShellCommand

__all__ = [
    "EnvConfigStore",
    "EnvironmentConfig",
    "EnvResolver",
    "ShellCommand",
]
