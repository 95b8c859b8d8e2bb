"""Filesystem helpers shared by the file store, settings, and logging."""

from pathlib import Path


def ensure_directory(path: Path) -> Path:
    """Create ``path`` and any missing parents; return it as a Path.

    Raises:
        OSError: The directory cannot be created.
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path
