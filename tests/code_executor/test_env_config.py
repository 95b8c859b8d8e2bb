"""Tests for EnvironmentConfig and the guarded config cell."""

import threading

from code_executor.runtime.env_config import EnvConfigStore, EnvironmentConfig


class TestEnvironmentConfig:
    """EnvironmentConfig location selection and validation."""

    def test_location_follows_type(self):
        config = EnvironmentConfig(
            type="venv-uv", conda_name="base", venv_path="/v", uv_venv_path="/uv"
        )
        assert config.location == "/uv"
        assert EnvironmentConfig(type="conda", conda_name="base").location == "base"
        assert EnvironmentConfig(type="venv", venv_path="/v").location == "/v"

    def test_valid_config_has_no_error(self):
        assert EnvironmentConfig(type="conda", conda_name="ds").validation_error() is None

    def test_missing_location_reported(self):
        error = EnvironmentConfig(type="venv").validation_error()
        assert error == "venv_path is required when type is 'venv'"

    def test_other_kinds_location_does_not_count(self):
        """A conda name does not satisfy a venv-uv config."""
        error = EnvironmentConfig(type="venv-uv", conda_name="ds").validation_error()
        assert "uv_venv_path" in error

    def test_unknown_type_reported(self):
        config = EnvironmentConfig(type="pyenv", conda_name="x")
        assert config.location is None
        assert "Unsupported environment type" in config.validation_error()

    def test_to_dict_omits_unset_fields(self):
        config = EnvironmentConfig(type="conda", conda_name="ds")
        assert config.to_dict() == {"type": "conda", "conda_name": "ds"}

    def test_merged_keeps_previous_locations(self):
        config = EnvironmentConfig(type="conda", conda_name="ds")
        merged = config.merged(type="venv", venv_path="/envs/v")
        assert merged.type == "venv"
        assert merged.venv_path == "/envs/v"
        assert merged.conda_name == "ds"

    def test_merged_ignores_empty_values(self):
        config = EnvironmentConfig(type="venv", venv_path="/a")
        assert config.merged(type="venv", venv_path="").venv_path == "/a"

    def test_config_is_immutable(self):
        config = EnvironmentConfig(type="conda", conda_name="ds")
        merged = config.merged(conda_name="other")
        assert config.conda_name == "ds"
        assert merged.conda_name == "other"


class TestEnvConfigStore:
    """Process-wide config cell."""

    def test_get_returns_initial(self):
        config = EnvironmentConfig(type="conda", conda_name="ds")
        assert EnvConfigStore(config).get() is config

    def test_update_returns_previous_and_current(self):
        store = EnvConfigStore(EnvironmentConfig(type="conda", conda_name="ds"))
        previous, current = store.update(lambda c: c.merged(type="venv", venv_path="/v"))
        assert previous.type == "conda"
        assert current.type == "venv"
        assert store.get() is current

    def test_concurrent_updates_are_serialized(self):
        store = EnvConfigStore(EnvironmentConfig(type="conda", conda_name="0"))

        def bump():
            for _ in range(200):
                store.update(lambda c: c.merged(conda_name=str(int(c.conda_name) + 1)))

        threads = [threading.Thread(target=bump) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert store.get().conda_name == "800"
