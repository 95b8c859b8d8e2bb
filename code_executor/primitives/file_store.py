"""Script file storage under a single storage root.

Files are created with collision-avoiding names, grown by appending, and
read back. Nothing here deletes user scripts.

Paths passed to append/read/require are used as given; they are not checked
against the storage root.
"""

import logging
import secrets
import threading
from pathlib import Path
from typing import Optional, Union

from code_executor.constants import DEFAULT_FILENAME_BASE, SCRIPT_SUFFIX
from code_executor.primitives.errors import NotFoundError
from code_executor.utils.path_utils import ensure_directory

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def random_suffix() -> str:
    """Return 8 random hex characters."""
    return secrets.token_hex(4)


class FileStore:
    """Create, append to, and read script files in a storage directory."""

    def __init__(self, storage_dir: PathLike):
        self.storage_dir = ensure_directory(Path(storage_dir)).resolve()
        self._append_lock = threading.Lock()

    def generate_filename(self, base_name: Optional[str] = None) -> str:
        """Build ``<base>_<8 hex>.py``.

        A trailing ``.py`` on ``base_name`` is stripped and any directory
        components are dropped, so the result always lives directly under
        the storage root.
        """
        base = DEFAULT_FILENAME_BASE
        if base_name and isinstance(base_name, str):
            name = Path(base_name).name
            if name.endswith(SCRIPT_SUFFIX):
                name = name[: -len(SCRIPT_SUFFIX)]
            if name:
                base = name
        return f"{base}_{random_suffix()}{SCRIPT_SUFFIX}"

    def path_for(self, filename: str) -> Path:
        return self.storage_dir / filename

    def write(self, file_path: PathLike, content: str) -> Path:
        """Write ``content`` as the full body of ``file_path``."""
        path = Path(file_path)
        path.write_text(content, encoding="utf-8")
        return path

    def initialize(self, content: str, base_name: Optional[str] = None) -> Path:
        """Create a fresh script file and return its absolute path."""
        path = self.path_for(self.generate_filename(base_name))
        self.write(path, content)
        logger.debug(f"Initialized {path} ({len(content)} chars)")
        return path

    def require(self, file_path: PathLike) -> Path:
        """Return ``file_path`` as a Path, raising NotFoundError if absent."""
        path = Path(file_path)
        if not path.is_file():
            raise NotFoundError(f"File not found: {file_path}", path=str(file_path))
        return path

    def append(self, file_path: PathLike, content: str) -> Path:
        """Append ``content`` verbatim to an existing file."""
        with self._append_lock:
            path = self.require(file_path)
            with open(path, "a", encoding="utf-8") as f:
                f.write(content)
        logger.debug(f"Appended {len(content)} chars to {path}")
        return path

    def read(self, file_path: PathLike) -> str:
        """Return the full text of an existing file."""
        return self.require(file_path).read_text(encoding="utf-8")
