"""
Local filesystem storage backend.
Reads resources from a directory on the local filesystem.
"""

from pathlib import Path
from typing import AsyncGenerator

import aiofiles

from media_export.config import get_settings
from media_export.core.exceptions import StorageException
from media_export.storage.base import CHUNK_SIZE, StorageBackend


class LocalStorageBackend(StorageBackend):
    """
    Local filesystem storage implementation.

    Files are stored under the configured LOCAL_STORAGE_PATH directory.
    """

    def __init__(self, base_path: str | None = None):
        """
        Initialize local storage backend.

        Args:
            base_path: Base directory for storage. Defaults to settings.LOCAL_STORAGE_PATH
        """
        self.base_path = Path(base_path or get_settings().LOCAL_STORAGE_PATH)

    def _get_full_path(self, path: str) -> Path:
        """Get full filesystem path for a storage path."""
        return self.base_path / path

    async def upload_bytes(self, data: bytes, path: str, content_type: str) -> str:
        """Upload raw bytes to storage."""
        full_path = self._get_full_path(path)

        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)

            async with aiofiles.open(full_path, "wb") as f:
                await f.write(data)

            return path

        except OSError as e:
            raise StorageException(
                message=f"Failed to upload bytes: {str(e)}",
                details={"path": path},
            )

    async def download(self, path: str) -> AsyncGenerator[bytes, None]:
        """Stream download a file in chunks."""
        full_path = self._get_full_path(path)

        if not full_path.exists():
            raise StorageException(
                message=f"File not found: {path}",
                details={"path": path},
            )

        try:
            async with aiofiles.open(full_path, "rb") as f:
                while chunk := await f.read(CHUNK_SIZE):
                    yield chunk

        except OSError as e:
            raise StorageException(
                message=f"Failed to download file: {str(e)}",
                details={"path": path},
            )
