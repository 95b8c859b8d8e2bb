"""Dependency tools - install packages and check what is importable."""

import logging
from typing import Any, Dict, List

from code_executor.constants import Status
from code_executor.executor.dependencies import DependencyManager
from code_executor.runtime.env_config import EnvConfigStore

logger = logging.getLogger(__name__)


class InstallDependenciesTool:
    """Install packages with conda, pip, or uv depending on the environment."""

    def __init__(self, manager: DependencyManager, config_store: EnvConfigStore):
        self.manager = manager
        self.config_store = config_store

    async def handle(self, **kwargs) -> Dict[str, Any]:
        packages: List[str] = kwargs["packages"]
        config = self.config_store.get()

        try:
            result = await self.manager.install(packages, config)
        except Exception as e:
            logger.error(f"Install error: {e}")
            return {"status": Status.ERROR, "env_type": config.type, "error": str(e)}

        response = {
            "status": Status.SUCCESS,
            "env_type": result.env_type,
            "installed_packages": result.packages,
            "output": result.output,
        }
        if result.warnings:
            response["warnings"] = result.warnings
        return response


class CheckInstalledPackagesTool:
    """Report whether packages import in the active environment."""

    def __init__(self, manager: DependencyManager, config_store: EnvConfigStore):
        self.manager = manager
        self.config_store = config_store

    async def handle(self, **kwargs) -> Dict[str, Any]:
        packages: List[str] = kwargs["packages"]
        config = self.config_store.get()

        try:
            result = await self.manager.check(packages, config)
        except Exception as e:
            logger.error(f"Package check error: {e}")
            return {"status": Status.ERROR, "env_type": config.type, "error": str(e)}

        return {
            "status": Status.SUCCESS,
            "env_type": result.env_type,
            "all_installed": result.all_installed,
            "not_installed": result.not_installed,
            "package_details": result.package_details,
        }
