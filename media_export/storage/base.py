"""
Abstract storage backend interface.
Defines the read contract the exporter relies on.
"""

from abc import ABC, abstractmethod
from typing import AsyncGenerator

# Chunk size used when streaming resource content
CHUNK_SIZE = 1024 * 1024  # 1MB


class StorageBackend(ABC):
    """
    Where asset resources live.

    The exporter only reads: it streams a resource with ``download`` and
    copies the chunks into the export directory. Every backend raises
    StorageException for a missing path or a failed transfer, so callers
    never see driver-specific errors.
    """

    @abstractmethod
    async def upload_bytes(self, data: bytes, path: str, content_type: str) -> str:
        """
        Store raw bytes at ``path``.

        Used to seed a repository's resources. Returns the stored path.
        """
        pass

    @abstractmethod
    def download(self, path: str) -> AsyncGenerator[bytes, None]:
        """
        Stream a resource in chunks of at most CHUNK_SIZE bytes.

        Raises:
            StorageException: If the resource is missing or a read fails,
                possibly after some chunks were already yielded
        """
        pass
