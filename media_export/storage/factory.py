"""
Storage backend factory.
Provides configuration-driven backend selection.
"""

from media_export.config import Settings, get_settings
from media_export.storage.base import StorageBackend


def create_storage_backend(settings: Settings | None = None) -> StorageBackend:
    """
    Build the configured storage backend.

    Cloud SDKs are imported lazily so a local-only installation does not
    need to load them.

    Returns:
        Configured StorageBackend instance

    Raises:
        ValueError: If unknown storage backend is configured
    """
    settings = settings or get_settings()
    backend = settings.STORAGE_BACKEND.lower()

    if backend == "local":
        from media_export.storage.local import LocalStorageBackend
        return LocalStorageBackend(base_path=settings.LOCAL_STORAGE_PATH)
    elif backend == "s3":
        from media_export.storage.s3 import S3StorageBackend
        return S3StorageBackend(
            endpoint_url=settings.S3_ENDPOINT_URL,
            access_key=settings.S3_ACCESS_KEY,
            secret_key=settings.S3_SECRET_KEY,
            bucket_name=settings.S3_BUCKET_NAME,
            region=settings.S3_REGION,
        )
    elif backend == "azure":
        from media_export.storage.azure import AzureStorageBackend
        return AzureStorageBackend(
            connection_string=settings.AZURE_STORAGE_CONNECTION_STRING,
            container_name=settings.AZURE_CONTAINER_NAME,
        )
    else:
        raise ValueError(f"Unknown storage backend: {backend}")
