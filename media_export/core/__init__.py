"""Core utilities and exceptions for the media export tool."""

from media_export.core.exceptions import (
    MediaExportException,
    StorageException,
    SourceReadError,
    WriteError,
    DirectoryBootstrapError,
    PipelineStateError,
    RepositoryNotFoundError,
)
from media_export.core.sizes import bytes_to_size_string, padded_size_string

__all__ = [
    "MediaExportException",
    "StorageException",
    "SourceReadError",
    "WriteError",
    "DirectoryBootstrapError",
    "PipelineStateError",
    "RepositoryNotFoundError",
    "bytes_to_size_string",
    "padded_size_string",
]
