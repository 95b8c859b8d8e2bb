"""Environment tools - inspect and replace the active environment selection."""

import logging
from typing import Any, Dict

from code_executor.constants import EnvType, Status
from code_executor.runtime.env_config import EnvConfigStore, EnvironmentConfig

logger = logging.getLogger(__name__)


class ConfigureEnvironmentTool:
    """Validate and swap in a new environment configuration.

    Location fields not supplied are carried over from the previous
    configuration. Nothing changes when validation fails.
    """

    def __init__(self, config_store: EnvConfigStore):
        self.config_store = config_store

    async def handle(self, **kwargs) -> Dict[str, Any]:
        env_type = kwargs.get("type")
        if env_type not in EnvType.ALL:
            return {
                "status": Status.ERROR,
                "error": "Invalid arguments: 'type' is required and must be one of "
                "'conda', 'venv', or 'venv-uv'",
            }

        location_args = {
            field_name: str(kwargs[field_name])
            for field_name in EnvType.LOCATION_FIELDS.values()
            if kwargs.get(field_name) is not None
        }
        error = EnvironmentConfig(type=env_type, **location_args).validation_error()
        if error:
            return {"status": Status.ERROR, "error": error}

        previous, current = self.config_store.update(
            lambda config: config.merged(type=env_type, **location_args)
        )
        logger.info(f"Environment reconfigured: {previous.type} -> {current.type}")

        return {
            "status": Status.SUCCESS,
            "message": "Environment configuration updated",
            "previous": previous.to_dict(),
            "current": current.to_dict(),
        }


class GetEnvironmentConfigTool:
    def __init__(self, config_store: EnvConfigStore):
        self.config_store = config_store

    async def handle(self, **kwargs) -> Dict[str, Any]:
        return {"status": Status.SUCCESS, "config": self.config_store.get().to_dict()}
