"""
Custom exceptions for the media export tool.

Per-asset failures (SourceReadError, WriteError) are logged and skipped by
the pipeline; DirectoryBootstrapError aborts the run.
"""

from typing import Any


class MediaExportException(Exception):
    """Base exception for all media export errors."""

    def __init__(
        self,
        error: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.error = error
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a log/report dictionary."""
        response = {
            "error": self.error,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


class StorageException(MediaExportException):
    """Storage backend error."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            error="storage_error",
            message=message,
            details=details,
        )


class SourceReadError(MediaExportException):
    """The content stream of an asset could not be fully read."""

    def __init__(self, asset_id: str, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            error="source_read_failed",
            message=f"Failed to read content of asset '{asset_id}': {message}",
            details={"asset_id": asset_id, **(details or {})},
        )


class WriteError(MediaExportException):
    """Content or sidecar file could not be written."""

    def __init__(self, asset_id: str, path: str, message: str):
        super().__init__(
            error="write_failed",
            message=f"Failed to write '{path}' for asset '{asset_id}': {message}",
            details={"asset_id": asset_id, "path": path},
        )


class DirectoryBootstrapError(MediaExportException):
    """The export directory could not be created."""

    def __init__(self, path: str, message: str):
        super().__init__(
            error="directory_bootstrap_failed",
            message=f"Cannot create export directory '{path}': {message}",
            details={"path": path},
        )


class PipelineStateError(MediaExportException):
    """An export pipeline was run more than once."""

    def __init__(self, state: str):
        super().__init__(
            error="invalid_pipeline_state",
            message=f"Export pipeline cannot start from state '{state}'",
            details={"state": state},
        )


class RepositoryNotFoundError(MediaExportException):
    """A file-based asset repository does not exist and may not be created."""

    def __init__(self, path: str):
        super().__init__(
            error="repository_not_found",
            message=f"Asset repository '{path}' does not exist (set AUTO_CREATE_TABLES to create it)",
            details={"path": path},
        )
