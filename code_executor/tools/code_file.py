"""Code file tools - build scripts in parts and read them back."""

import logging
from typing import Any, Dict

from code_executor.constants import Status
from code_executor.primitives.file_store import FileStore

logger = logging.getLogger(__name__)


class InitializeCodeFileTool:
    """Create a new script with initial content."""

    def __init__(self, file_store: FileStore):
        self.file_store = file_store

    async def handle(self, **kwargs) -> Dict[str, Any]:
        content: str = kwargs["content"]
        filename = kwargs.get("filename")

        try:
            path = self.file_store.initialize(content, filename)
        except Exception as e:
            logger.error(f"Initialize error: {e}")
            return {"status": Status.ERROR, "error": str(e)}

        return {
            "status": Status.SUCCESS,
            "message": "File initialized successfully",
            "file_path": str(path),
            "filename": path.name,
        }


class AppendToCodeFileTool:
    """Append content to an existing script. Never creates the file."""

    def __init__(self, file_store: FileStore):
        self.file_store = file_store

    async def handle(self, **kwargs) -> Dict[str, Any]:
        file_path: str = kwargs["file_path"]
        content: str = kwargs["content"]

        try:
            self.file_store.append(file_path, content)
        except Exception as e:
            logger.error(f"Append error: {e}")
            return {"status": Status.ERROR, "error": str(e), "file_path": file_path}

        return {
            "status": Status.SUCCESS,
            "message": "Content appended successfully",
            "file_path": file_path,
        }


class ReadCodeFileTool:
    def __init__(self, file_store: FileStore):
        self.file_store = file_store

    async def handle(self, **kwargs) -> Dict[str, Any]:
        file_path: str = kwargs["file_path"]

        try:
            content = self.file_store.read(file_path)
        except Exception as e:
            logger.error(f"Read error: {e}")
            return {"status": Status.ERROR, "error": str(e), "file_path": file_path}

        return {"status": Status.SUCCESS, "content": content, "file_path": file_path}
