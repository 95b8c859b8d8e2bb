"""Tool descriptions - single source of truth for the MCP tool listing.

Descriptions containing ``{env_type}`` are formatted with the active
environment type each time tools are listed.
"""

# ---------------------------------------------------------------------------
# Shared field descriptions
# ---------------------------------------------------------------------------

FILENAME_DESC = "Optional: Name of the file (default: generated name with random suffix)"

FILE_PATH_DESC = "Full path to the file"

# ---------------------------------------------------------------------------
# execute_code / execute_code_file
# ---------------------------------------------------------------------------

EXECUTE_CODE_DESC = (
    "Execute Python code in the {env_type} environment. For short code snippets only. "
    "For longer code, use initialize_code_file and append_to_code_file instead."
)

EXECUTE_CODE_CODE_DESC = "Python code to execute"

EXECUTE_CODE_FILENAME_DESC = (
    "Optional: Name of the file to save the code (default: generated name with random suffix)"
)

EXECUTE_CODE_FILE_DESC = (
    "Execute an existing Python file. Use this as the final step after building up "
    "code with initialize_code_file and append_to_code_file."
)

EXECUTE_CODE_FILE_PATH_DESC = "Full path to the Python file to execute"

# ---------------------------------------------------------------------------
# initialize / append / read
# ---------------------------------------------------------------------------

INITIALIZE_CODE_FILE_DESC = (
    "Create a new Python file with initial content. Use this as the first step for "
    "longer code that may exceed token limits. Follow with append_to_code_file for "
    "additional code."
)

INITIALIZE_CONTENT_DESC = "Initial content to write to the file"

APPEND_TO_CODE_FILE_DESC = (
    "Append content to an existing Python code file. Use this to add more code to a "
    "file created with initialize_code_file, allowing you to build up larger code "
    "bases in parts."
)

APPEND_CONTENT_DESC = "Content to append to the file"

READ_CODE_FILE_DESC = (
    "Read the content of an existing Python code file. Use this to verify the current "
    "state of a file before appending more content or executing it."
)

READ_FILE_PATH_DESC = "Full path to the file to read"

# ---------------------------------------------------------------------------
# dependencies
# ---------------------------------------------------------------------------

INSTALL_DEPENDENCIES_DESC = "Install Python dependencies in the {env_type} environment"

INSTALL_PACKAGES_DESC = "List of packages to install"

CHECK_INSTALLED_PACKAGES_DESC = "Check if packages are installed in the {env_type} environment"

CHECK_PACKAGES_DESC = "List of packages to check"

# ---------------------------------------------------------------------------
# environment
# ---------------------------------------------------------------------------

CONFIGURE_ENVIRONMENT_DESC = "Change the environment configuration settings"

ENV_TYPE_DESC = "Type of Python environment"

CONDA_NAME_DESC = "Name of the conda environment (required if type is 'conda')"

VENV_PATH_DESC = "Path to the virtualenv (required if type is 'venv')"

UV_VENV_PATH_DESC = "Path to the UV virtualenv (required if type is 'venv-uv')"

GET_ENVIRONMENT_CONFIG_DESC = "Get the current environment configuration"
