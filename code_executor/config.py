"""Configuration settings for code-executor."""

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from code_executor.constants import EnvType
from code_executor.primitives.errors import ConfigurationError
from code_executor.runtime.env_config import EnvironmentConfig
from code_executor.utils.path_utils import ensure_directory


class ServerSettings(BaseSettings):
    """Server settings loaded from environment variables (and ``.env``).

    Environment keys:
    - CODE_STORAGE_DIR: Directory where generated scripts are stored (required)
    - ENV_TYPE: conda, venv, or venv-uv (default: conda)
    - CONDA_ENV_NAME / VENV_PATH / UV_VENV_PATH: location for ENV_TYPE
    - LOG_LEVEL, LOG_DIR, CODE_EXECUTOR_DEBUG: logging
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    code_storage_dir: str

    # Environment
    env_type: str = EnvType.CONDA
    conda_env_name: Optional[str] = None
    venv_path: Optional[str] = None
    uv_venv_path: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_dir: Optional[Path] = None
    code_executor_debug: bool = False

    @property
    def storage_dir(self) -> Path:
        return Path(self.code_storage_dir).expanduser().resolve()

    @property
    def logging_level(self) -> int:
        if self.code_executor_debug:
            return logging.DEBUG
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO

    def environment_config(self) -> EnvironmentConfig:
        """Build and validate the startup EnvironmentConfig.

        Raises:
            ConfigurationError: Unknown ENV_TYPE or its location variable unset.
        """
        if self.env_type not in EnvType.ALL:
            raise ConfigurationError(
                f"Unsupported environment type: {self.env_type} "
                f"(ENV_TYPE must be one of {', '.join(EnvType.ALL)})",
                field="ENV_TYPE",
            )

        config = EnvironmentConfig(
            type=self.env_type,
            conda_name=self.conda_env_name or None,
            venv_path=self.venv_path or None,
            uv_venv_path=self.uv_venv_path or None,
        )
        if not config.location:
            var = EnvType.LOCATION_ENV_VARS[self.env_type]
            raise ConfigurationError(
                f"Missing required environment variable: {var} "
                f"(required for {EnvType.DISPLAY_NAMES[self.env_type]})",
                field=var,
            )
        return config


def load_settings(**overrides) -> ServerSettings:
    """Load settings, create the storage directory, validate the environment.

    Args:
        **overrides: Field values taking precedence over the environment
            (None values are ignored).

    Raises:
        ConfigurationError: Missing or invalid settings.
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        settings = ServerSettings(**values)
    except PydanticValidationError as e:
        missing = [
            str(err["loc"][0]).upper() for err in e.errors() if err.get("type") == "missing"
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variable: {', '.join(missing)}",
                field=missing[0],
            ) from e
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    if not settings.code_storage_dir.strip():
        raise ConfigurationError(
            "Missing required environment variable: CODE_STORAGE_DIR",
            field="CODE_STORAGE_DIR",
        )

    settings.environment_config()
    ensure_directory(settings.storage_dir)
    return settings

