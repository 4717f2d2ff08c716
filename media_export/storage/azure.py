"""
Azure Blob Storage backend.
Reads asset resources from a blob container.
"""

from typing import AsyncGenerator

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContentSettings

from media_export.config import get_settings
from media_export.core.exceptions import StorageException
from media_export.storage.base import StorageBackend


class AzureStorageBackend(StorageBackend):
    """
    Azure Blob Storage implementation.

    Configured via AZURE_* environment variables.
    """

    def __init__(
        self,
        connection_string: str | None = None,
        container_name: str | None = None,
        service_client: BlobServiceClient | None = None,
    ):
        """
        Args:
            connection_string: Azure Storage connection string
            container_name: Blob container name
            service_client: Pre-built BlobServiceClient, mainly for tests
        """
        settings = get_settings()
        self.container_name = container_name or settings.AZURE_CONTAINER_NAME

        if service_client is None:
            connection_string = connection_string or settings.AZURE_STORAGE_CONNECTION_STRING
            if not connection_string:
                raise StorageException(
                    message="Azure connection string not configured",
                    details={"required": "AZURE_STORAGE_CONNECTION_STRING"},
                )
            service_client = BlobServiceClient.from_connection_string(connection_string)
        self.blob_service_client = service_client

    def _blob(self, path: str):
        return self.blob_service_client.get_blob_client(
            container=self.container_name,
            blob=path,
        )

    def _error(self, e: AzureError, path: str, action: str) -> StorageException:
        details = {"path": path, "container": self.container_name}
        if isinstance(e, ResourceNotFoundError):
            return StorageException(message=f"File not found: {path}", details=details)
        return StorageException(message=f"Failed to {action}: {str(e)}", details=details)

    async def upload_bytes(self, data: bytes, path: str, content_type: str) -> str:
        """Upload raw bytes to storage."""
        try:
            self._blob(path).upload_blob(
                data,
                overwrite=True,
                content_settings=ContentSettings(content_type=content_type),
            )
        except AzureError as e:
            raise self._error(e, path, "upload bytes to Azure")
        return path

    async def download(self, path: str) -> AsyncGenerator[bytes, None]:
        """Stream a blob chunk by chunk."""
        try:
            downloader = self._blob(path).download_blob()
            for chunk in downloader.chunks():
                yield chunk
        except AzureError as e:
            raise self._error(e, path, "download blob from Azure")
