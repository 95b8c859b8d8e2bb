"""code-executor utility modules."""

from code_executor.utils.logger import setup_logging
from code_executor.utils.path_utils import ensure_directory

__all__ = [
    "setup_logging",
    "ensure_directory",
]
