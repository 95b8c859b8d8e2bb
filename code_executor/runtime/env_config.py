"""Active Python environment configuration.

EnvironmentConfig is immutable; the process-wide selection lives in an
EnvConfigStore cell that is swapped wholesale under a lock. Callers take one
snapshot per tool call and pass it down explicitly.
"""

import threading
from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, Dict, Optional, Tuple

from code_executor.constants import EnvType


@dataclass(frozen=True)
class EnvironmentConfig:
    """Environment kind plus the location fields for each kind.

    Attributes:
        type: One of EnvType.ALL.
        conda_name: Conda environment name (required for conda).
        venv_path: Virtualenv directory (required for venv).
        uv_venv_path: uv virtualenv directory (required for venv-uv).
    """

    type: str = EnvType.CONDA
    conda_name: Optional[str] = None
    venv_path: Optional[str] = None
    uv_venv_path: Optional[str] = None

    @property
    def location(self) -> Optional[str]:
        """Value of the location field selected by ``type``."""
        field_name = EnvType.LOCATION_FIELDS.get(self.type)
        return getattr(self, field_name) if field_name else None

    def validation_error(self) -> Optional[str]:
        """Return a message describing what is wrong, or None if valid."""
        if self.type not in EnvType.ALL:
            return f"Unsupported environment type: {self.type}"
        if not self.location:
            field_name = EnvType.LOCATION_FIELDS[self.type]
            return f"{field_name} is required when type is '{self.type}'"
        return None

    def merged(self, **changes: Any) -> "EnvironmentConfig":
        """Copy with ``changes`` applied; empty location values are ignored."""
        updates = {key: value for key, value in changes.items() if value or key == "type"}
        return replace(self, **updates)

    def to_dict(self) -> Dict[str, str]:
        return {key: value for key, value in asdict(self).items() if value is not None}


class EnvConfigStore:
    """Process-wide guarded cell holding the active EnvironmentConfig."""

    def __init__(self, config: EnvironmentConfig):
        self._lock = threading.Lock()
        self._config = config

    def get(self) -> EnvironmentConfig:
        with self._lock:
            return self._config

    def update(
        self, change: Callable[[EnvironmentConfig], EnvironmentConfig]
    ) -> Tuple[EnvironmentConfig, EnvironmentConfig]:
        """Apply ``change`` to the current config under the lock.

        Returns:
            ``(previous, current)``
        """
        with self._lock:
            previous = self._config
            self._config = change(previous)
            return previous, self._config
