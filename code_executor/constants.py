"""code-executor constants

Environment kinds, tool names, and file naming defaults.
"""

SERVER_NAME = "code-executor"


class EnvType:
    """Python environment kinds."""

    CONDA = "conda"
    VENV = "venv"
    UV_VENV = "venv-uv"

    ALL = [CONDA, VENV, UV_VENV]

    # Location field required by each kind
    LOCATION_FIELDS = {
        CONDA: "conda_name",
        VENV: "venv_path",
        UV_VENV: "uv_venv_path",
    }

    # Startup environment variable backing each location field
    LOCATION_ENV_VARS = {
        CONDA: "CONDA_ENV_NAME",
        VENV: "VENV_PATH",
        UV_VENV: "UV_VENV_PATH",
    }

    DISPLAY_NAMES = {
        CONDA: "conda environment",
        VENV: "virtualenv",
        UV_VENV: "uv virtualenv",
    }


class ToolName:
    """Tool name constants."""

    EXECUTE_CODE = "execute_code"
    INITIALIZE_CODE_FILE = "initialize_code_file"
    APPEND_TO_CODE_FILE = "append_to_code_file"
    EXECUTE_CODE_FILE = "execute_code_file"
    READ_CODE_FILE = "read_code_file"
    INSTALL_DEPENDENCIES = "install_dependencies"
    CHECK_INSTALLED_PACKAGES = "check_installed_packages"
    CONFIGURE_ENVIRONMENT = "configure_environment"
    GET_ENVIRONMENT_CONFIG = "get_environment_config"

    ALL = [
        EXECUTE_CODE,
        INITIALIZE_CODE_FILE,
        APPEND_TO_CODE_FILE,
        EXECUTE_CODE_FILE,
        READ_CODE_FILE,
        INSTALL_DEPENDENCIES,
        CHECK_INSTALLED_PACKAGES,
        CONFIGURE_ENVIRONMENT,
        GET_ENVIRONMENT_CONFIG,
    ]


class Status:
    SUCCESS = "success"
    ERROR = "error"


DEFAULT_FILENAME_BASE = "code"
CHECK_SCRIPT_BASE = "check_packages"
SCRIPT_SUFFIX = ".py"
