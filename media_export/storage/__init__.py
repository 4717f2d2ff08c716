"""
Storage abstraction layer for asset resources.
Supports multiple backends: Local filesystem, S3/MinIO, Azure Blob.
"""

from media_export.storage.base import CHUNK_SIZE, StorageBackend
from media_export.storage.local import LocalStorageBackend
from media_export.storage.factory import create_storage_backend

__all__ = [
    "CHUNK_SIZE",
    "StorageBackend",
    "LocalStorageBackend",
    "create_storage_backend",
]
