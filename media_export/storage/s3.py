"""
S3-compatible storage backend.
Supports AWS S3 and S3-compatible services like MinIO.
"""

from typing import AsyncGenerator

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from media_export.config import get_settings
from media_export.core.exceptions import StorageException
from media_export.storage.base import CHUNK_SIZE, StorageBackend


class S3StorageBackend(StorageBackend):
    """
    S3-compatible object storage implementation.

    Configured via S3_* environment variables.
    """

    def __init__(
        self,
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        bucket_name: str | None = None,
        region: str | None = None,
        client=None,
    ):
        """
        Initialize S3 storage backend.

        Args:
            endpoint_url: S3 endpoint URL (for MinIO, custom S3-compatible services)
            access_key: AWS access key ID
            secret_key: AWS secret access key
            bucket_name: S3 bucket name
            region: AWS region
            client: Pre-built boto3 S3 client, mainly for tests
        """
        settings = get_settings()
        self.endpoint_url = endpoint_url or settings.S3_ENDPOINT_URL
        self.bucket_name = bucket_name or settings.S3_BUCKET_NAME
        self.region = region or settings.S3_REGION

        if client is None:
            config = Config(
                signature_version="s3v4",
                retries={"max_attempts": 3, "mode": "standard"},
            )
            client = boto3.client(
                "s3",
                endpoint_url=self.endpoint_url,
                aws_access_key_id=access_key or settings.S3_ACCESS_KEY,
                aws_secret_access_key=secret_key or settings.S3_SECRET_KEY,
                region_name=self.region,
                config=config,
            )
        self.client = client

    def _not_found_or_failure(self, e: ClientError, path: str, action: str) -> StorageException:
        error_code = e.response.get("Error", {}).get("Code")
        if error_code in ("NoSuchKey", "404"):
            return StorageException(
                message=f"File not found: {path}",
                details={"path": path, "bucket": self.bucket_name},
            )
        return StorageException(
            message=f"Failed to {action}: {str(e)}",
            details={"path": path, "bucket": self.bucket_name},
        )

    async def upload_bytes(self, data: bytes, path: str, content_type: str) -> str:
        """Upload raw bytes to storage."""
        try:
            self.client.put_object(
                Bucket=self.bucket_name,
                Key=path,
                Body=data,
                ContentType=content_type,
            )

            return path

        except ClientError as e:
            raise StorageException(
                message=f"Failed to upload bytes to S3: {str(e)}",
                details={"path": path, "bucket": self.bucket_name},
            )

    async def download(self, path: str) -> AsyncGenerator[bytes, None]:
        """Stream download a file in chunks."""
        try:
            response = self.client.get_object(
                Bucket=self.bucket_name,
                Key=path,
            )
        except ClientError as e:
            raise self._not_found_or_failure(e, path, "download file from S3")

        body = response["Body"]
        try:
            while chunk := body.read(CHUNK_SIZE):
                yield chunk
        except (ClientError, BotoCoreError) as e:
            raise StorageException(
                message=f"Failed to download file from S3: {str(e)}",
                details={"path": path, "bucket": self.bucket_name},
            )
        finally:
            body.close()
